"""Build the processed player pool from a raw NBA player export.

Usage:
    python -m src.data_pipeline.run_update [season] [data_dir]

Examples:
    python -m src.data_pipeline.run_update 2025
    python -m src.data_pipeline.run_update 2025 /path/to/exports
"""

import json
import logging
import math
import sys
from datetime import datetime, timezone
from pathlib import Path

import pandas as pd

from src.data_pipeline.cleaning import PlayerPoolCleaner
from src.data_pipeline.config import PROCESSED_DATA_DIR, RAW_DATA_DIR, STAT_COLUMNS
from src.data_pipeline.ingestion import PlayerPoolIngester
from src.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _safe(val, default=None):
    """Return *default* when *val* is NaN/None/pd.NA, else the value."""
    if val is None or val is pd.NA:
        return default
    if isinstance(val, float) and math.isnan(val):
        return default
    return val


def _player_to_dict(row: pd.Series) -> dict:
    """Convert a single player row to the output JSON structure."""
    return {
        "player_id": row["player_id"],
        "name": row["name"],
        "position": row["position"],
        "salary": int(row["salary"]),
        "rank": int(_safe(row.get("rank"), 0)) or None,
        "stats": {col: round(float(_safe(row.get(col), 0)), 2) for col in STAT_COLUMNS},
    }


def run_pipeline(
    season: int = 2025,
    data_dir: Path | None = None,
    output_dir: Path | None = None,
) -> Path:
    """Run the player pool pipeline.

    Args:
        season: Season year.
        data_dir: Directory containing the raw export.
            Defaults to ``data/raw/``.
        output_dir: Directory for JSON output.
            Defaults to ``data/processed/``.

    Returns:
        Path to the generated JSON file.

    Raises:
        FileNotFoundError: If the data directory or export doesn't exist.
    """
    if data_dir is None:
        data_dir = RAW_DATA_DIR
    if output_dir is None:
        output_dir = PROCESSED_DATA_DIR

    if not data_dir.is_dir():
        raise FileNotFoundError(f"Data directory not found: {data_dir}")

    logger.info("Starting pipeline for %d season (data: %s)", season, data_dir)

    # 1. Ingest
    logger.info("Step 1/3: Ingesting player export...")
    raw = PlayerPoolIngester(data_dir, season).read()

    # 2. Clean
    logger.info("Step 2/3: Cleaning player pool...")
    cleaner = PlayerPoolCleaner()
    players_df = cleaner.generate_player_ids(cleaner.clean(raw))

    # Rank order when the export has one, otherwise highest salary first
    if "rank" in players_df.columns and players_df["rank"].notna().any():
        players_df = players_df.sort_values("rank", na_position="last")
    else:
        players_df = players_df.sort_values("salary", ascending=False)

    # 3. Output JSON
    logger.info("Step 3/3: Generating JSON output...")
    players_list = [_player_to_dict(row) for _, row in players_df.iterrows()]

    output_data = {
        "metadata": {
            "version": "1.0",
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "season": season,
            "total_players": len(players_list),
            "total_salary": sum(p["salary"] for p in players_list),
        },
        "players": players_list,
    }

    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / f"players_{season}.json"

    with open(output_file, "w") as f:
        json.dump(output_data, f, indent=2)

    # Update latest symlink
    latest_link = output_dir / "players_latest.json"
    if latest_link.exists() or latest_link.is_symlink():
        latest_link.unlink()
    latest_link.symlink_to(output_file.name)

    pos_counts: dict[str, int] = {}
    for p in players_list:
        pos_counts[p["position"]] = pos_counts.get(p["position"], 0) + 1

    logger.info("Pipeline complete! Output: %s", output_file)
    logger.info("  Total players: %d", len(players_list))
    logger.info(
        "  By position: %s",
        ", ".join(f"{k}={v}" for k, v in sorted(pos_counts.items())),
    )

    return output_file


if __name__ == "__main__":
    setup_logging()

    season = int(sys.argv[1]) if len(sys.argv) > 1 else 2025
    data_dir = Path(sys.argv[2]) if len(sys.argv) > 2 else None

    try:
        output = run_pipeline(season, data_dir)
        print(f"Pipeline complete: {output}")
    except Exception:
        logger.exception("Pipeline failed")
        sys.exit(1)
