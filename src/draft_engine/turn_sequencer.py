"""Turn order: whose pick it is, round rollover, and draft completion."""

import logging
import random
from enum import Enum
from typing import Optional

from src.draft_engine.draft_state import DraftPhase, DraftState, InvariantViolation

logger = logging.getLogger(__name__)


class TurnAdvance(Enum):
    NEXT_PICKER = "next_picker"
    NEXT_ROUND = "next_round"
    DRAFT_COMPLETE = "draft_complete"


class TurnSequencer:
    """Moves the clock from one participant to the next.

    Rounds always run through the participant list front to back (no snake).
    When the settings ask for it the list is reshuffled at each new round.
    """

    def __init__(self, draft_state: DraftState, rng: Optional[random.Random] = None):
        self.draft_state = draft_state
        self.rng = rng or random.Random()

    def current_participant(self) -> str:
        return self.draft_state.participants[self.draft_state.picker_index]

    def reset_countdown(self):
        self.draft_state.time_left = self.draft_state.settings.pick_time_limit

    def advance(self) -> TurnAdvance:
        """
        Hand the pick to the next participant.

        Returns:
            NEXT_PICKER or NEXT_ROUND with the countdown reset, or
            DRAFT_COMPLETE once the last participant of the last round has
            acted. Completion moves the state out of ACTIVE, so it is
            reported exactly once.

        Raises:
            InvariantViolation: If the draft is not active.
        """
        state = self.draft_state
        if state.phase != DraftPhase.ACTIVE:
            raise InvariantViolation(
                f"Cannot advance turn while draft is {state.phase.value}"
            )

        if state.picker_index + 1 < len(state.participants):
            state.picker_index += 1
            self.reset_countdown()
            return TurnAdvance.NEXT_PICKER

        if state.round < state.settings.total_rounds:
            state.round += 1
            state.picker_index = 0
            if state.settings.reshuffle_each_round:
                self.rng.shuffle(state.participants)
            self.reset_countdown()
            logger.debug(
                "Round %d begins, order: %s", state.round, state.participants
            )
            return TurnAdvance.NEXT_ROUND

        state.phase = DraftPhase.COMPLETE
        state.time_left = 0
        logger.info("All %d rounds complete", state.settings.total_rounds)
        return TurnAdvance.DRAFT_COMPLETE
