"""Draft rule enforcement and pick validation."""

from typing import Optional, Tuple

from src.draft_engine.config import SECOND_APRON_MAX_SALARY
from src.draft_engine.draft_state import DraftPhase, DraftState
from src.draft_engine.roster_bucketer import RosterCategory, bucket
from src.draft_engine.salary_cap import CapStage


class ValidationError(Exception):
    """Raised when a pick violates draft rules."""

    pass


class DraftRules:
    """Enforces all draft rules and validation logic."""

    def __init__(self, draft_state: DraftState):
        self.draft_state = draft_state

    def validate_pick(
        self, participant: str, player_id: str
    ) -> Tuple[bool, Optional[str]]:
        """
        Validate if a pick is legal.

        Returns:
            (is_valid, error_message) - (True, None) if valid
        """
        state = self.draft_state

        # Check 1: Is a pick possible at all?
        if state.phase not in (DraftPhase.ACTIVE, DraftPhase.FINAL_PICK):
            return False, f"Draft is not active ({state.phase.value})"

        # Check 2: Is it this participant's turn?
        acting = state.acting_participant()
        if participant != acting:
            return (
                False,
                f"Not {state.display_names.get(participant, participant)}'s turn "
                f"(current: {state.display_names.get(acting, acting)})",
            )

        # Check 3: Is the player still on the board?
        player = state.get_player(player_id)
        if player is None:
            return False, f"Player {player_id} not found in player pool"
        if not state.is_player_available(player_id):
            return False, f"{player.name} has already been drafted"

        # Check 4: Roster room
        if bucket(state.roster_size(participant)) == RosterCategory.OVERFLOW:
            return False, (
                f"Roster is full ({state.roster_size(participant)} players)"
            )

        # Check 5: Second apron restricts signings to small contracts
        cap = state.get_salary_cap(participant)
        if cap.stage == CapStage.SECOND_APRON and player.salary > SECOND_APRON_MAX_SALARY:
            return False, (
                "In Second Apron, you can only pick players worth "
                f"${SECOND_APRON_MAX_SALARY // 1_000_000}M or less."
            )

        # Check 6: Overall budget
        if not cap.can_afford(player.salary):
            new_used = cap.used + player.salary
            return False, (
                f"Cannot pick {player.name}: That would bring payroll to "
                f"${new_used:,}, exceeding your budget of ${cap.total_budget:,}."
            )

        return True, None

    def is_eligible_under_apron(self, participant: str, salary: int) -> bool:
        """Whether the participant's cap stage allows a contract of this size."""
        cap = self.draft_state.get_salary_cap(participant)
        return cap.stage != CapStage.SECOND_APRON or salary <= SECOND_APRON_MAX_SALARY
