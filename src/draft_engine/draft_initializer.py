"""Draft initialization - builds practice and live draft sessions."""

import json
import logging
import random
from pathlib import Path
from typing import List, Optional

import requests

from src.draft_engine.config import (
    DEFAULT_API_URL,
    DEFAULT_LEAGUE_ID,
    PRACTICE_USER_COUNTS,
    PROCESSED_DATA_DIR,
)
from src.draft_engine.draft_orchestrator import DraftOrchestrator
from src.draft_engine.draft_state import DraftSettings, Player
from src.draft_engine.pick_store import HttpPickStore, InMemoryPickStore

logger = logging.getLogger(__name__)


class DraftInitializer:
    """Handles creation of new draft sessions."""

    def __init__(self, processed_data_dir: Optional[Path] = None):
        self.processed_data_dir = processed_data_dir or PROCESSED_DATA_DIR

    def create_practice_draft(
        self,
        user_count: int = 4,
        season: int = 2025,
        rng: Optional[random.Random] = None,
        **setting_overrides,
    ) -> DraftOrchestrator:
        """
        Create an in-memory practice draft.

        Args:
            user_count: Number of generated users (2, 4, 8, 10 or 12)
            season: Which season's processed player file to use
            rng: Random source for order shuffles (seed it for replays)
            **setting_overrides: DraftSettings fields to override

        Returns:
            DraftOrchestrator in the not-started state
        """
        if user_count not in PRACTICE_USER_COUNTS:
            raise ValueError(
                f"User count must be one of {PRACTICE_USER_COUNTS}, got {user_count}"
            )

        players = self._load_player_data(season)
        store = InMemoryPickStore(players, user_count=user_count)
        settings = DraftSettings.practice(**setting_overrides)
        orchestrator = DraftOrchestrator(settings, store, rng=rng)

        logger.info(
            "Created practice draft %s: %d users, %d players",
            orchestrator.draft_state.draft_id,
            user_count,
            len(players),
        )
        return orchestrator

    def create_live_draft(
        self,
        league_id: str = DEFAULT_LEAGUE_ID,
        base_url: str = DEFAULT_API_URL,
        session: Optional[requests.Session] = None,
        **setting_overrides,
    ) -> DraftOrchestrator:
        """
        Create a live draft against the league backend.

        Teams and the available player pool are fetched once here.

        Raises:
            NetworkError: If the backend cannot be reached.
            ValueError: If the league has no teams.
        """
        store = HttpPickStore(base_url=base_url, session=session)
        settings = DraftSettings.live(league_id, **setting_overrides)
        orchestrator = DraftOrchestrator(settings, store)

        logger.info(
            "Created live draft %s for league %s (%d teams)",
            orchestrator.draft_state.draft_id,
            league_id,
            len(orchestrator.draft_state.participants),
        )
        return orchestrator

    def _load_player_data(self, season: int) -> List[Player]:
        """Load the player pool from processed JSON."""
        season_file = self.processed_data_dir / f"players_{season}.json"

        if not season_file.exists():
            raise FileNotFoundError(
                f"No player data found for {season}. "
                "Run data pipeline first: "
                "python -m src.data_pipeline.run_update"
            )

        with open(season_file, "r", encoding="utf-8") as f:
            data = json.load(f)

        try:
            players = [Player.from_dict(p) for p in data["players"]]
        except KeyError as e:
            raise ValueError(
                f"Malformed player data file for {season}: missing key {e}. "
                "Re-run data pipeline to regenerate."
            ) from e

        logger.info("Loaded %d players for %d season", len(players), season)
        return players
