"""Tests for draft rules and pick validation."""

from src.draft_engine.draft_rules import DraftRules
from src.draft_engine.draft_state import (
    DraftPhase,
    DraftSettings,
    DraftState,
    Player,
    RosterEntry,
)


# ── Helpers ──────────────────────────────────────────────────────────


def _make_player_data():
    """A small pool spanning the salary thresholds that matter."""
    specs = [
        ("max1", "C", 200_000_000),
        ("mid1", "SF", 40_000_000),
        ("min5", "PG", 5_000_000),
        ("min6", "SG", 6_000_000),
        ("min1", "PF", 1_000_000),
    ]
    return [
        Player(player_id=pid, name=f"Player {pid}", position=pos, salary=salary)
        for pid, pos, salary in specs
    ]


def _make_draft_state(phase=DraftPhase.ACTIVE, **setting_overrides):
    state = DraftState.create_new(
        settings=DraftSettings.live("1", **setting_overrides),
        participants=["A", "B"],
        players=_make_player_data(),
        display_names={"A": "Team A", "B": "Team B"},
    )
    state.phase = phase
    return state


# ── Valid Picks ──────────────────────────────────────────────────────


class TestValidPicks:
    def test_valid_first_pick(self):
        rules = DraftRules(_make_draft_state())
        valid, error = rules.validate_pick("A", "max1")
        assert valid is True
        assert error is None

    def test_final_phase_pick_by_queue_head(self):
        state = _make_draft_state(phase=DraftPhase.FINAL_PICK)
        state.final_queue = ["B"]
        valid, error = DraftRules(state).validate_pick("B", "mid1")
        assert valid is True, error


# ── Invalid Picks ────────────────────────────────────────────────────


class TestInvalidPicks:
    def test_not_started(self):
        state = _make_draft_state(phase=DraftPhase.NOT_STARTED)
        valid, error = DraftRules(state).validate_pick("A", "max1")
        assert valid is False
        assert "not active" in error

    def test_complete(self):
        state = _make_draft_state(phase=DraftPhase.COMPLETE)
        valid, error = DraftRules(state).validate_pick("A", "max1")
        assert valid is False
        assert "not active" in error

    def test_wrong_turn(self):
        valid, error = DraftRules(_make_draft_state()).validate_pick("B", "max1")
        assert valid is False
        assert "Not Team B's turn" in error
        assert "Team A" in error

    def test_final_phase_wrong_participant(self):
        state = _make_draft_state(phase=DraftPhase.FINAL_PICK)
        state.final_queue = ["B"]
        valid, error = DraftRules(state).validate_pick("A", "mid1")
        assert valid is False
        assert "turn" in error

    def test_unknown_player(self):
        valid, error = DraftRules(_make_draft_state()).validate_pick("A", "ghost")
        assert valid is False
        assert "not found" in error

    def test_player_already_drafted(self):
        state = _make_draft_state()
        state.available_players.remove("min1")
        valid, error = DraftRules(state).validate_pick("A", "min1")
        assert valid is False
        assert "already been drafted" in error

    def test_roster_full(self):
        state = _make_draft_state()
        state.rosters["A"] = [RosterEntry(f"x{i}", "reserve") for i in range(15)]
        valid, error = DraftRules(state).validate_pick("A", "min1")
        assert valid is False
        assert "Roster is full" in error


# ── Salary Cap ───────────────────────────────────────────────────────


class TestSecondApron:
    def test_small_contract_allowed_past_second_apron(self):
        state = _make_draft_state()
        state.salary_caps["A"].used = 200_000_000
        valid, error = DraftRules(state).validate_pick("A", "min5")
        assert valid is True, error

    def test_larger_contract_rejected_past_second_apron(self):
        state = _make_draft_state()
        state.salary_caps["A"].used = 200_000_000
        valid, error = DraftRules(state).validate_pick("A", "min6")
        assert valid is False
        assert error == "In Second Apron, you can only pick players worth $5M or less."

    def test_first_apron_has_no_contract_limit(self):
        state = _make_draft_state()
        state.salary_caps["A"].used = 185_000_000
        valid, _ = DraftRules(state).validate_pick("A", "mid1")
        assert valid is True

    def test_apron_eligibility_helper(self):
        state = _make_draft_state()
        rules = DraftRules(state)
        assert rules.is_eligible_under_apron("A", 50_000_000) is True
        state.salary_caps["A"].used = 189_000_001
        assert rules.is_eligible_under_apron("A", 5_000_000) is True
        assert rules.is_eligible_under_apron("A", 5_000_001) is False


class TestBudget:
    def test_pick_exceeding_budget_rejected(self):
        state = _make_draft_state(total_budget=100_000_000)
        valid, error = DraftRules(state).validate_pick("A", "max1")
        assert valid is False
        assert "Cannot pick Player max1" in error
        assert "$200,000,000" in error
        assert "$100,000,000" in error

    def test_pick_reaching_budget_exactly_allowed(self):
        state = _make_draft_state(total_budget=40_000_000)
        valid, _ = DraftRules(state).validate_pick("A", "mid1")
        assert valid is True

    def test_apron_checked_before_budget(self):
        state = _make_draft_state()
        state.salary_caps["A"].used = 299_000_000
        valid, error = DraftRules(state).validate_pick("A", "min6")
        assert valid is False
        assert "Second Apron" in error
