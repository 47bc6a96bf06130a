"""Ingestion for raw NBA player exports.

Handles the two shapes the player pool arrives in:
- The stats export JSON (records keyed Rank, Player, Pos, PTS, RB, ...)
- The league database CSV dump (player, pos, rb, ast, ..., salary)
- Currency-formatted salaries (e.g., "$12,500,000")
- Comma-formatted numbers (e.g., "1,204.5")
"""

import logging
from pathlib import Path

import pandas as pd

from src.data_pipeline.config import (
    COLUMN_ALIASES,
    FILE_PATTERNS,
    REQUIRED_COLUMNS,
    STAT_COLUMNS,
)

logger = logging.getLogger(__name__)


class IngestionError(Exception):
    """Raised when a raw player file cannot be ingested."""


def _parse_numeric(value):
    """Parse a numeric string that may contain commas or a currency sign."""
    if pd.isna(value):
        return value
    if isinstance(value, (int, float)):
        return float(value)
    s = str(value).replace(",", "").replace("$", "").strip().strip('"')
    if s == "" or s.isspace():
        return float("nan")
    try:
        return float(s)
    except ValueError:
        return float("nan")


class PlayerPoolIngester:
    """Reads a season's raw player export into a DataFrame with canonical columns.

    Output columns: name, position, salary, plus any of player_id, rank and
    the per-game stat columns present in the source.
    """

    def __init__(self, data_dir: Path, season: int):
        self.data_dir = Path(data_dir)
        self.season = season

    def _resolve_path(self) -> Path:
        """Find the season's export, preferring JSON over CSV."""
        candidates = [p.format(season=self.season) for p in FILE_PATTERNS.values()]
        for filename in candidates:
            filepath = self.data_dir / filename
            if filepath.exists():
                return filepath
        raise FileNotFoundError(
            f"No player export for {self.season} in {self.data_dir} "
            f"(expected one of: {', '.join(candidates)})"
        )

    def read_json(self, filepath: Path) -> pd.DataFrame:
        """Read a JSON array of player records."""
        logger.info("Reading player JSON: %s", filepath.name)
        return pd.read_json(filepath, orient="records", dtype=False)

    def read_csv(self, filepath: Path) -> pd.DataFrame:
        """Read a CSV dump of the league players table."""
        logger.info("Reading player CSV: %s", filepath.name)
        df = pd.read_csv(filepath, quotechar='"', dtype=str)
        for col in df.columns:
            df[col] = df[col].str.strip('"').str.strip()
        return df

    @staticmethod
    def standardize_columns(df: pd.DataFrame) -> pd.DataFrame:
        """Rename known column spellings to canonical names and drop the rest."""
        lookup = {}
        for canonical, aliases in COLUMN_ALIASES.items():
            for alias in aliases:
                lookup[alias] = canonical

        renamed = {}
        for col in df.columns:
            canonical = lookup.get(str(col).strip().lower())
            if canonical and canonical not in renamed.values():
                renamed[col] = canonical

        out = df[list(renamed)].rename(columns=renamed)

        missing = REQUIRED_COLUMNS - set(out.columns)
        if missing:
            raise IngestionError(
                f"Player export missing required columns: {sorted(missing)}"
            )

        for col in ["salary", "rank", *STAT_COLUMNS]:
            if col in out.columns:
                out[col] = out[col].apply(_parse_numeric)

        return out.reset_index(drop=True)

    def read(self) -> pd.DataFrame:
        """Read and standardize the season's player export.

        Raises:
            IngestionError: if the file cannot be read or lacks required columns.
        """
        filepath = self._resolve_path()
        try:
            if filepath.suffix == ".json":
                df = self.read_json(filepath)
            else:
                df = self.read_csv(filepath)
            df = self.standardize_columns(df)
        except IngestionError:
            raise
        except Exception as e:
            raise IngestionError(f"Failed to read {filepath.name}: {e}") from e

        logger.info("Loaded %d raw player rows", len(df))
        return df
