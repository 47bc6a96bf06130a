"""Data cleaning for raw NBA player exports.

Handles standardization before the pool is written out:
- Extract a single base position from multi-position strings (PG-SG -> PG)
- Normalize player names
- Coerce salaries to whole dollars and fill missing stats
- Generate stable player IDs when the source has none
"""

import logging
import re
from typing import Optional

import pandas as pd

from src.data_pipeline.config import POSITIONS, STAT_COLUMNS

logger = logging.getLogger(__name__)

# Separators between listed positions ("PG-SG", "SF/PF", "G, F")
_POS_SPLIT = re.compile(r"[-/,\s]+")


class PlayerPoolCleaner:
    """Cleans and standardizes a player pool DataFrame from PlayerPoolIngester."""

    # ------------------------------------------------------------------
    # Field helpers
    # ------------------------------------------------------------------
    @staticmethod
    def extract_base_position(pos_str: str) -> Optional[str]:
        """Extract the primary position.

        Examples:
            "PG"    -> "PG"
            "sf-pf" -> "SF"
            "C/PF"  -> "C"
            "G"     -> None
        """
        if pd.isna(pos_str):
            return None

        tokens = [t for t in _POS_SPLIT.split(str(pos_str).strip().upper()) if t]
        if not tokens:
            return None
        return tokens[0] if tokens[0] in POSITIONS else None

    @staticmethod
    def normalize_player_name(name: str) -> Optional[str]:
        """Normalize a player name.

        - Strips quotes and extra whitespace
        - Standardizes apostrophes and hyphens
        """
        if pd.isna(name):
            return None

        name = str(name).strip().strip('"')
        if name == "":
            return None

        # Standardize apostrophe variants to ASCII straight quote
        name = name.replace("’", "'")
        name = name.replace("‘", "'")
        name = name.replace("ʼ", "'")

        # Standardize dash variants to ASCII hyphen-minus
        name = name.replace("–", "-")
        name = name.replace("—", "-")

        return " ".join(name.split())

    @staticmethod
    def parse_salary(value) -> Optional[int]:
        """Whole-dollar salary, or None when missing or negative."""
        if pd.isna(value):
            return None
        salary = int(round(float(value)))
        return salary if salary >= 0 else None

    # ------------------------------------------------------------------
    # DataFrame-level cleaning
    # ------------------------------------------------------------------
    def clean(self, df: pd.DataFrame) -> pd.DataFrame:
        """Clean a standardized player pool.

        Rows without a name, a recognized position or a salary are dropped
        (and logged). Missing stats become 0.
        """
        out = df.copy()
        out["name"] = out["name"].apply(self.normalize_player_name)
        out["position"] = out["position"].apply(self.extract_base_position)
        out["salary"] = out["salary"].apply(self.parse_salary)

        for col in STAT_COLUMNS:
            if col not in out.columns:
                out[col] = 0.0
            out[col] = pd.to_numeric(out[col], errors="coerce").fillna(0.0)

        for col, label in (
            ("name", "no name"),
            ("position", "no recognized position"),
            ("salary", "no salary"),
        ):
            bad = out[col].isna()
            if bad.any():
                logger.warning(
                    "Dropping %d players with %s: %s",
                    bad.sum(),
                    label,
                    out.loc[bad, "name"].tolist(),
                )
                out = out[~bad]

        out["salary"] = out["salary"].astype(int)
        logger.info("Cleaned player pool: %d rows", len(out))
        return out.reset_index(drop=True)

    @staticmethod
    def generate_player_ids(df: pd.DataFrame) -> pd.DataFrame:
        """Fill in player IDs where the source has none.

        Format: {name}_{position}
        Example: nikola_jokic_c
        """
        def _make_id(row):
            existing = row.get("player_id")
            if existing is not None and not pd.isna(existing) and str(existing).strip():
                return str(existing).strip()
            name = (
                str(row["name"]).lower()
                .replace("'", "")
                .replace(".", "")
                .replace("-", "_")
                .replace(" ", "_")
            )
            return f"{name}_{str(row['position']).lower()}"

        out = df.copy()
        out["player_id"] = out.apply(_make_id, axis=1) if len(out) else []

        # Disambiguate collisions by appending a numeric suffix
        dupes = out["player_id"].duplicated(keep=False)
        if dupes.any():
            dupe_ids = out.loc[dupes, "player_id"].unique().tolist()
            logger.warning("Duplicate player_ids detected: %s", dupe_ids)
            for pid in dupe_ids:
                mask = out["player_id"] == pid
                out.loc[mask, "player_id"] = [
                    f"{pid}_{i}" for i in range(1, mask.sum() + 1)
                ]

        logger.info("Generated %d player IDs", len(out))
        return out
