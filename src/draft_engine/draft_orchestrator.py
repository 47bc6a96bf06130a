"""Draft orchestrator - countdown, pick flow and final-pick recovery."""

import copy
import logging
import random
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional

from src.draft_engine.config import DEFAULT_SORT, SORT_CRITERIA
from src.draft_engine.draft_rules import DraftRules, ValidationError
from src.draft_engine.draft_state import (
    FINAL_ROUND,
    DraftPhase,
    DraftSettings,
    DraftState,
    PickRecord,
    Player,
)
from src.draft_engine.pick_store import NetworkError, PickStore
from src.draft_engine.roster_bucketer import RosterCategory, bucket, category_limits
from src.draft_engine.salary_cap import below_salary_floor, tax_breakdown
from src.draft_engine.turn_sequencer import TurnAdvance, TurnSequencer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DraftStatus:
    """What the UI needs to render the draft header."""

    phase: DraftPhase
    round: int
    picker: Optional[str]
    time_left: int
    queue_head: Optional[str]


def end_draft(state: DraftState):
    """Close the main rounds: queue up anyone who never got a player."""
    state.final_queue = state.empty_rosters()
    state.time_left = 0
    if state.final_queue:
        state.phase = DraftPhase.FINAL_PICK
        logger.info(
            "Final pick phase for %d participant(s): %s",
            len(state.final_queue),
            state.final_queue,
        )
    else:
        state.phase = DraftPhase.COMPLETE
        state.completed_at = datetime.now().isoformat()
        logger.info("Draft %s complete", state.draft_id)


def tick(state: DraftState, rng: Optional[random.Random] = None) -> DraftState:
    """One second of countdown as a transition on a copy of the state.

    When the countdown reaches zero the participant on the clock loses the
    turn: a missed-turn record is added and the turn moves on. Inactive
    drafts come back unchanged.
    """
    # The player catalogue never changes during a draft; share it between copies
    new_state = copy.deepcopy(state, memo={id(state.player_data): state.player_data})
    if new_state.phase != DraftPhase.ACTIVE:
        return new_state

    new_state.time_left -= 1
    if new_state.time_left > 0:
        return new_state

    sequencer = TurnSequencer(new_state, rng)
    participant = sequencer.current_participant()
    new_state.pick_history.append(PickRecord.missed(new_state.round, participant))
    logger.info("Round %d: %s missed their turn", new_state.round, participant)

    if sequencer.advance() == TurnAdvance.DRAFT_COMPLETE:
        end_draft(new_state)
    return new_state


class DraftOrchestrator:
    """Main controller for a draft session.

    Coordinates DraftRules (validation), TurnSequencer (turn order) and the
    PickStore (persistence) around a single DraftState. The same class runs
    practice drafts (in-memory store) and live drafts (backend store).
    """

    def __init__(
        self,
        settings: DraftSettings,
        store: PickStore,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings
        self.store = store
        self.rng = rng or random.Random()
        self._lock = threading.RLock()
        self._pick_pending = False

        teams = self.store.load_participants(settings.league_id)
        self._participants = [team_id for team_id, _ in teams]
        self._display_names = dict(teams)
        self._pool = self.store.load_player_pool(settings.league_id)
        self.draft_state = self._new_state(self._pool)

    def _new_state(self, players: List[Player]) -> DraftState:
        return DraftState.create_new(
            settings=self.settings,
            participants=self._participants,
            players=players,
            display_names=self._display_names,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> DraftState:
        """Clear any previous draft and put the first participant on the clock.

        Raises:
            ValidationError: If a draft is already running.
            NetworkError: If the store cannot be cleared (nothing changes) or
                the pool reload fails (the draft is left not started).
        """
        with self._lock:
            if self._pick_pending or self.draft_state.phase in (
                DraftPhase.ACTIVE,
                DraftPhase.FINAL_PICK,
            ):
                raise ValidationError("Draft is already in progress")

            state = self._clear_store()

            excluded = set(self.settings.excluded_player_names)
            state.available_players = [
                pid
                for pid in state.available_players
                if state.player_data[pid].name not in excluded
            ]
            if self.settings.reshuffle_each_round:
                self.rng.shuffle(state.participants)

            state.start_order = list(state.participants)
            state.round = 1
            state.picker_index = 0
            state.time_left = self.settings.pick_time_limit
            state.phase = DraftPhase.ACTIVE
            self.draft_state = state

            logger.info(
                "Started %s draft %s: %d participants, %d players, order %s",
                self.settings.mode,
                state.draft_id,
                len(state.participants),
                len(state.available_players),
                state.participants,
            )
            return state

    def tick(self) -> DraftState:
        """Advance the countdown by one second.

        The countdown holds while a pick submission is in flight, so a slow
        backend cannot turn a made pick into a missed turn.
        """
        with self._lock:
            if self._pick_pending:
                return self.draft_state
            self.draft_state = tick(self.draft_state, self.rng)
            return self.draft_state

    def reset(self) -> DraftState:
        """Throw the draft away and reload the full player pool.

        Raises:
            ValidationError: If a pick is being submitted.
            NetworkError: If the store reset fails (local state is kept) or
                the pool reload after it fails (local state is reset onto
                the last pool loaded).
        """
        with self._lock:
            if self._pick_pending:
                raise ValidationError("Cannot reset while a pick is being submitted")
            self.draft_state = self._clear_store()
            logger.info("Draft reset for league %s", self.settings.league_id)
            return self.draft_state

    def _clear_store(self) -> DraftState:
        """Clear the store's picks and build a not-started state on a fresh pool.

        Once the store is cleared the local draft is cleared too, even when
        the pool reload fails, so the two never disagree about picks.
        """
        league_id = self.settings.league_id
        self.store.reset_draft(league_id)
        try:
            self._pool = self.store.load_player_pool(league_id)
        except NetworkError as e:
            self.draft_state = self._new_state(self._pool)
            logger.error(
                "Picks cleared for league %s but the player pool reload failed: %s",
                league_id,
                e,
            )
            raise
        return self._new_state(self._pool)

    # ------------------------------------------------------------------
    # Picks
    # ------------------------------------------------------------------
    @property
    def pick_in_flight(self) -> bool:
        return self._pick_pending

    def make_pick(self, player_id: str, participant: Optional[str] = None) -> PickRecord:
        """Validate, persist and apply a pick for the participant on the clock.

        Args:
            player_id: ID of the player being drafted.
            participant: Who is picking; defaults to whoever is on the clock.

        Returns:
            The PickRecord added to the history.

        Raises:
            ValidationError: If the pick is illegal or another pick is in
                flight. State is untouched.
            NetworkError: If the store rejects or cannot receive the pick.
                State is untouched; there is no automatic retry.
        """
        with self._lock:
            if self._pick_pending:
                raise ValidationError("A pick is already being submitted")

            state = self.draft_state
            if participant is None:
                participant = state.acting_participant()

            is_valid, error_msg = DraftRules(state).validate_pick(participant, player_id)
            if not is_valid:
                logger.warning("Invalid pick attempted: %s", error_msg)
                raise ValidationError(error_msg)

            player = state.get_player(player_id)
            self._pick_pending = True

        submitted = False
        try:
            self.store.submit_pick(self.settings.league_id, participant, player)
            submitted = True
        except NetworkError as e:
            logger.error("Pick of %s by %s not saved: %s", player.name, participant, e)
            raise
        finally:
            if not submitted:
                with self._lock:
                    self._pick_pending = False

        with self._lock:
            try:
                return self._apply_pick(participant, player)
            finally:
                self._pick_pending = False

    def _apply_pick(self, participant: str, player: Player) -> PickRecord:
        state = self.draft_state
        category = bucket(state.roster_size(participant))
        round_label = state.round if state.phase == DraftPhase.ACTIVE else FINAL_ROUND

        state.assign_player(participant, player, category.value)
        record = PickRecord.create(round_label, participant, player, category.value)
        state.pick_history.append(record)
        state.search_query = ""

        logger.info(
            "Round %s: %s selects %s (%s, $%s) -> %s",
            round_label,
            state.display_names.get(participant, participant),
            player.name,
            player.position,
            f"{player.salary:,}",
            category.value,
        )

        if state.phase == DraftPhase.ACTIVE:
            if TurnSequencer(state, self.rng).advance() == TurnAdvance.DRAFT_COMPLETE:
                end_draft(state)
        else:
            state.final_queue.pop(0)
            if not state.final_queue:
                state.phase = DraftPhase.COMPLETE
                state.completed_at = datetime.now().isoformat()
                logger.info("Final pick phase over; draft %s complete", state.draft_id)

        return record

    def recategorize(self, participant: str, player_id: str, category: str):
        """Move a rostered player to another category (manual lineup change)."""
        storable = {c.value for c in RosterCategory.storable()}
        if category not in storable:
            raise ValidationError(
                f"Invalid category '{category}'. Must be one of: {sorted(storable)}"
            )
        with self._lock:
            if participant not in self.draft_state.rosters:
                raise ValidationError(f"Unknown participant {participant}")
            for entry in self.draft_state.get_roster(participant):
                if entry.player_id == player_id:
                    logger.info(
                        "%s moves %s from %s to %s",
                        participant, player_id, entry.category, category,
                    )
                    entry.category = category
                    return
        raise ValidationError(f"Player {player_id} is not on {participant}'s roster")

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------
    def set_search_query(self, query: str):
        with self._lock:
            self.draft_state.search_query = query

    def available_players(
        self, query: Optional[str] = None, sort_by: str = DEFAULT_SORT
    ) -> List[Player]:
        """Board for the participant on the clock.

        Args:
            query: Case-insensitive match on name or position. Defaults to
                the stored search query.
            sort_by: One of "position", "salary", "ppg", "apg", "rbg".

        Returns:
            Available players, sorted, and limited to contracts the acting
            participant may sign when past the second apron.
        """
        if sort_by not in SORT_CRITERIA:
            raise ValueError(
                f"Invalid sort '{sort_by}'. Must be one of: {sorted(SORT_CRITERIA)}"
            )

        with self._lock:
            state = self.draft_state
            text = (state.search_query if query is None else query).strip().lower()
            players = [state.player_data[pid] for pid in state.available_players]
            acting = state.acting_participant()
            rules = DraftRules(state)

            if text:
                players = [
                    p for p in players
                    if text in p.name.lower() or text in p.position.lower()
                ]
            if acting is not None:
                players = [
                    p for p in players
                    if rules.is_eligible_under_apron(acting, p.salary)
                ]

        attr, descending = SORT_CRITERIA[sort_by]
        if attr in ("position", "salary"):
            key = lambda p: getattr(p, attr)  # noqa: E731
        else:
            key = lambda p: p.stat(attr)  # noqa: E731
        return sorted(players, key=key, reverse=descending)

    def status(self) -> DraftStatus:
        with self._lock:
            state = self.draft_state
            picker = (
                state.participants[state.picker_index]
                if state.phase == DraftPhase.ACTIVE
                else None
            )
            queue_head = (
                state.final_queue[0]
                if state.phase == DraftPhase.FINAL_PICK and state.final_queue
                else None
            )
            return DraftStatus(
                phase=state.phase,
                round=state.round,
                picker=picker,
                time_left=state.time_left,
                queue_head=queue_head,
            )

    @property
    def is_complete(self) -> bool:
        with self._lock:
            return self.draft_state.phase == DraftPhase.COMPLETE

    def get_team_summary(self, participant: str) -> Dict:
        """Roster grouped by category, open slots, payroll and tax figures."""
        with self._lock:
            state = self.draft_state
            cap = state.get_salary_cap(participant)
            roster = {c.value: [] for c in RosterCategory.storable()}
            for entry in state.get_roster(participant):
                roster[entry.category].append(
                    state.get_player(entry.player_id).to_dict()
                )
            display_name = state.display_names.get(participant, participant)

        tax = tax_breakdown(cap.used)
        return {
            "participant": participant,
            "display_name": display_name,
            "roster": roster,
            "open_slots": {
                category.value: max(limit - len(roster[category.value]), 0)
                for category, limit in category_limits().items()
            },
            "payroll": cap.used,
            "total_budget": cap.total_budget,
            "remaining": cap.remaining,
            "cap_stage": cap.stage.value,
            "below_salary_floor": below_salary_floor(cap.used),
            "tax": {
                "tier1": tax.tier1,
                "tier2": tax.tier2,
                "tier3": tax.tier3,
                "total": tax.total,
            },
        }

    def get_draft_summary(self) -> Dict:
        """Generate summary of draft results.

        Returns dict with "error" key if draft is not yet complete.
        """
        with self._lock:
            state = self.draft_state
            if state.phase != DraftPhase.COMPLETE:
                return {"error": "Draft not complete"}

            picks = [r for r in state.pick_history if not r.is_missed]
            return {
                "draft_id": state.draft_id,
                "completed_at": state.completed_at,
                "total_picks": len(picks),
                "missed_turns": len(state.pick_history) - len(picks),
                "teams": [
                    self.get_team_summary(p)
                    for p in (state.start_order or state.participants)
                ],
            }
