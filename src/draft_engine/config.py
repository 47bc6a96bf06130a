from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
PROCESSED_DATA_DIR = PROJECT_ROOT / "data" / "processed"
DRAFTS_DIR = PROJECT_ROOT / "data" / "drafts"

# Salary cap thresholds (dollars)
SALARY_FLOOR = 126_000_000
SOFT_CAP = 140_000_000
FIRST_APRON = 178_000_000
HARD_CAP = 189_000_000  # Second apron
TOTAL_BUDGET = 300_000_000

# Luxury tax: taxable band width per tier
TAX_TIER1_BAND = 31_000_000  # 1.5x
TAX_TIER2_BAND = 11_000_000  # 2x
TAX_TIER3_RATE = 3

# Teams past the second apron may only add minimum-style contracts
SECOND_APRON_MAX_SALARY = 5_000_000

# Draft structure
TOTAL_ROUNDS = 15
PRACTICE_PICK_TIME_LIMIT = 10  # seconds
LIVE_PICK_TIME_LIMIT = 30  # seconds

# Roster categories, filled in pick order
ROSTER_CATEGORY_LIMITS = {
    "starter": 5,
    "bench": 4,
    "reserve": 6,
}

# Practice drafts
PRACTICE_USER_COUNTS = (2, 4, 8, 10, 12)
DEFAULT_PRACTICE_USERS = 4

# Account placeholders that leak into the player table; never draftable
EXCLUDED_PLAYER_NAMES = ("Sarah", "You", "Michael", "Samantha")

# Live draft backend
DEFAULT_API_URL = "http://localhost:3001"
DEFAULT_LEAGUE_ID = "1"
REQUEST_TIMEOUT = 10  # seconds

# Board sort options -> (Player attribute or stat key, descending)
SORT_CRITERIA = {
    "position": ("position", False),
    "salary": ("salary", True),
    "ppg": ("pts", True),
    "apg": ("ast", True),
    "rbg": ("reb", True),
}
DEFAULT_SORT = "salary"
