"""Shared fixtures for the data-pipeline test suite."""

import json
import textwrap

import pytest

from src.data_pipeline.cleaning import PlayerPoolCleaner
from src.data_pipeline.ingestion import PlayerPoolIngester

SEASON = 2025

# Stats-export shape: capitalized headers, RB for rebounds, TVS for turnovers
EXPORT_RECORDS = [
    {"Rank": 2, "Player": "Nikola Jokić", "Pos": "C", "PTS": 26.4, "RB": 12.4,
     "AST": 9.0, "STL": 1.4, "BLK": 0.9, "TVS": 3.0, "PF": 2.5,
     "Salary": "$51,415,938"},
    {"Rank": 1, "Player": "Shai Gilgeous-Alexander", "Pos": "PG-SG", "PTS": 30.1,
     "RB": 5.5, "AST": 6.2, "STL": 2.0, "BLK": 0.9, "TVS": 2.5, "PF": 2.4,
     "Salary": "35,859,950"},
    {"Rank": 3, "Player": "De’Aaron Fox", "Pos": "PG", "PTS": 26.6, "RB": 4.6,
     "AST": 5.6, "STL": 2.0, "BLK": 0.4, "TVS": 2.6, "PF": 2.5,
     "Salary": 32600060},
    {"Rank": 4, "Player": "Mystery Guard", "Pos": "G", "PTS": 8.0, "RB": 2.0,
     "AST": 3.0, "STL": 0.5, "BLK": 0.1, "TVS": 1.0, "PF": 1.5,
     "Salary": 2000000},
]

# League-database shape: lowercase columns, numeric player_id, no rank
LEAGUE_CSV = textwrap.dedent("""\
    player_id,player,pos,rb,ast,stl,blk,tov,pf,pts,salary
    11,"Jayson Tatum",SF-PF,8.1,4.9,1.0,0.6,2.6,2.1,26.9,"34,848,340"
    12,"Jaylen Brown",SG,5.5,3.6,1.2,0.5,2.4,2.6,23.0,"31,830,357"
    13,"Sam Hauser",SF,3.5,1.0,0.5,0.3,0.4,1.3,9.0,
""")


def write_export_json(directory, records=None, season=SEASON):
    path = directory / f"nba_players_{season}.json"
    path.write_text(json.dumps(records if records is not None else EXPORT_RECORDS))
    return path


def write_league_csv(directory, text=LEAGUE_CSV, season=SEASON):
    path = directory / f"nba_players_{season}.csv"
    path.write_text(text)
    return path


# ------------------------------------------------------------------
# Lightweight factories – cheap to construct, no I/O
# ------------------------------------------------------------------

@pytest.fixture(scope="module")
def cleaner():
    return PlayerPoolCleaner()


# ------------------------------------------------------------------
# Data-reading fixtures
# ------------------------------------------------------------------

@pytest.fixture
def export_dir(tmp_path):
    """Raw directory holding the stats-export JSON."""
    write_export_json(tmp_path)
    return tmp_path


@pytest.fixture
def league_csv_dir(tmp_path):
    """Raw directory holding only the league-database CSV."""
    write_league_csv(tmp_path)
    return tmp_path


@pytest.fixture
def raw_export(export_dir):
    """Standardized (not yet cleaned) DataFrame from the JSON export."""
    return PlayerPoolIngester(export_dir, SEASON).read()


@pytest.fixture
def cleaned_pool(cleaner, raw_export):
    return cleaner.clean(raw_export)
