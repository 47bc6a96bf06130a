from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
RAW_DATA_DIR = DATA_DIR / "raw"
PROCESSED_DATA_DIR = DATA_DIR / "processed"

# Raw player exports, checked in this order (use .format(season=YYYY))
FILE_PATTERNS = {
    "json": "nba_players_{season}.json",
    "csv": "nba_players_{season}.csv",
}

# Valid base positions
POSITIONS = ("PG", "SG", "SF", "PF", "C")

# Per-game stat columns carried into the player pool
STAT_COLUMNS = ["pts", "reb", "ast", "stl", "blk", "tov", "pf"]

# Canonical column -> spellings seen in the stats export and the league database
COLUMN_ALIASES = {
    "player_id": ["player_id", "id"],
    "name": ["player", "name", "player name"],
    "position": ["pos", "position"],
    "rank": ["rank", "rk"],
    "salary": ["salary"],
    "pts": ["pts", "ppg"],
    "reb": ["rb", "reb", "trb", "rpg"],
    "ast": ["ast", "apg"],
    "stl": ["stl", "spg"],
    "blk": ["blk", "bpg"],
    "tov": ["tvs", "tov", "to"],
    "pf": ["pf"],
}

REQUIRED_COLUMNS = {"name", "position", "salary"}
