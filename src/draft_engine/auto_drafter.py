"""Computer drafter for unattended practice drafts."""

import logging
import random
from typing import Optional

from src.draft_engine.config import DEFAULT_SORT
from src.draft_engine.draft_orchestrator import DraftOrchestrator
from src.draft_engine.draft_state import PickRecord, Player

logger = logging.getLogger(__name__)


class AutoDrafter:
    """Picks the top affordable player on the board for whoever is on the clock.

    ``miss_rate`` is the chance of letting the clock run out instead, which
    exercises the missed-turn and final-pick paths.
    """

    def __init__(
        self,
        orchestrator: DraftOrchestrator,
        sort_by: str = DEFAULT_SORT,
        miss_rate: float = 0.0,
        rng: Optional[random.Random] = None,
    ):
        if not 0.0 <= miss_rate <= 1.0:
            raise ValueError(f"miss_rate must be between 0 and 1, got {miss_rate}")
        self.orchestrator = orchestrator
        self.sort_by = sort_by
        self.miss_rate = miss_rate
        self.rng = rng or random.Random()

    def choose(self) -> Optional[Player]:
        state = self.orchestrator.draft_state
        participant = state.acting_participant()
        if participant is None:
            return None

        cap = state.get_salary_cap(participant)
        for player in self.orchestrator.available_players(query="", sort_by=self.sort_by):
            if cap.can_afford(player.salary):
                return player
        return None

    def take_turn(self) -> Optional[PickRecord]:
        """Make a pick, or return None to let the turn lapse."""
        if self.miss_rate and self.rng.random() < self.miss_rate:
            return None

        player = self.choose()
        if player is None:
            logger.debug(
                "No affordable player for %s",
                self.orchestrator.draft_state.acting_participant(),
            )
            return None
        return self.orchestrator.make_pick(player.player_id)
