"""Tests for state persistence - save/load draft state to/from JSON."""

import json
import random

import pytest

from src.draft_engine.draft_orchestrator import DraftOrchestrator
from src.draft_engine.draft_state import DraftPhase, DraftSettings, DraftState, Player
from src.draft_engine.pick_store import InMemoryPickStore
from src.draft_engine.state_persistence import StatePersistence


# ── Helpers ──────────────────────────────────────────────────────────


def _make_player_data():
    """Create a small set of players for testing."""
    positions = ["PG", "SG", "SF", "PF", "C"]
    return [
        Player(
            player_id=f"p{i}",
            name=f"Player {i}",
            position=positions[i % 5],
            salary=(i + 1) * 2_000_000,
            stats={"pts": 20.0 - i, "reb": 5.0, "ast": 4.0},
        )
        for i in range(10)
    ]


def _make_orchestrator(**overrides):
    store = InMemoryPickStore(_make_player_data(), user_count=3)
    return DraftOrchestrator(
        DraftSettings.practice(**overrides), store, rng=random.Random(42)
    )


def _make_in_progress_draft():
    """Started draft with two picks and one missed turn."""
    orch = _make_orchestrator(pick_time_limit=1)
    orch.start()
    orch.make_pick("p0")
    orch.tick()
    orch.make_pick("p5")
    orch.recategorize(orch.draft_state.pick_history[0].participant, "p0", "bench")
    orch.set_search_query("player")
    return orch.draft_state


@pytest.fixture
def persistence(tmp_path):
    return StatePersistence(storage_dir=tmp_path / "drafts")


# ── Save / Load ──────────────────────────────────────────────────────


class TestSaveAndLoad:
    def test_creates_storage_dir(self, tmp_path):
        StatePersistence(storage_dir=tmp_path / "nested" / "drafts")
        assert (tmp_path / "nested" / "drafts").is_dir()

    def test_save_writes_json(self, persistence):
        state = _make_in_progress_draft()
        path = persistence.save_draft(state)
        assert path.name == f"draft_{state.draft_id}.json"
        data = json.loads(path.read_text())
        assert data["phase"] == "active"
        assert data["settings"]["mode"] == "practice"

    def test_round_trip_preserves_state(self, persistence):
        state = _make_in_progress_draft()
        persistence.save_draft(state)
        loaded = persistence.load_draft(state.draft_id)

        assert loaded == state

    def test_round_trip_details(self, persistence):
        state = _make_in_progress_draft()
        persistence.save_draft(state)
        loaded = persistence.load_draft(state.draft_id)

        assert loaded.phase == DraftPhase.ACTIVE
        assert loaded.settings.excluded_player_names == state.settings.excluded_player_names
        assert loaded.pick_history[1].is_missed
        assert loaded.get_player("p5").stats["pts"] == 15.0
        first = state.pick_history[0].participant
        assert loaded.get_roster(first)[0].category == "bench"
        assert loaded.get_salary_cap(first).used == 2_000_000
        assert loaded.search_query == "player"

    def test_load_missing_returns_none(self, persistence):
        assert persistence.load_draft("does-not-exist") is None

    def test_load_corrupt_returns_none(self, persistence):
        (persistence.storage_dir / "draft_bad.json").write_text("{oops")
        assert persistence.load_draft("bad") is None

    def test_final_pick_phase_round_trip(self, persistence):
        state = DraftState.create_new(
            DraftSettings.live("7"), ["1", "2"], _make_player_data()
        )
        state.phase = DraftPhase.FINAL_PICK
        state.round = 15
        state.start_order = ["1", "2"]
        state.final_queue = ["2"]
        persistence.save_draft(state)

        loaded = persistence.load_draft(state.draft_id)
        assert loaded.final_phase is True
        assert loaded.acting_participant() == "2"
        assert loaded.settings.is_live is True


# ── Active draft ─────────────────────────────────────────────────────


class TestActiveDraft:
    def test_no_active_draft(self, persistence):
        assert persistence.load_active_draft() is None

    def test_latest_save_is_active(self, persistence):
        first = _make_in_progress_draft()
        second = _make_in_progress_draft()
        persistence.save_draft(first)
        persistence.save_draft(second)

        link = persistence.storage_dir / StatePersistence.ACTIVE_LINK
        assert link.is_symlink()
        assert persistence.load_active_draft().draft_id == second.draft_id

    def test_dangling_link(self, persistence):
        state = _make_in_progress_draft()
        path = persistence.save_draft(state)
        path.unlink()
        assert persistence.load_active_draft() is None


# ── Listing / deleting ───────────────────────────────────────────────


class TestListAndDelete:
    def test_list_saved_drafts(self, persistence):
        state = _make_in_progress_draft()
        persistence.save_draft(state)
        drafts = persistence.list_saved_drafts()

        assert len(drafts) == 1
        entry = drafts[0]
        assert entry["draft_id"] == state.draft_id
        assert entry["mode"] == "practice"
        assert entry["phase"] == "active"
        assert entry["participants"] == 3

    def test_list_skips_corrupt_files(self, persistence):
        persistence.save_draft(_make_in_progress_draft())
        (persistence.storage_dir / "draft_bad.json").write_text("{oops")
        assert len(persistence.list_saved_drafts()) == 1

    def test_list_most_recent_first(self, persistence):
        older = _make_in_progress_draft()
        older.created_at = "2025-01-01T00:00:00"
        newer = _make_in_progress_draft()
        newer.created_at = "2025-06-01T00:00:00"
        persistence.save_draft(older)
        persistence.save_draft(newer)
        ids = [d["draft_id"] for d in persistence.list_saved_drafts()]
        assert ids == [newer.draft_id, older.draft_id]

    def test_delete_draft_removes_active_link(self, persistence):
        state = _make_in_progress_draft()
        persistence.save_draft(state)
        assert persistence.delete_draft(state.draft_id) is True
        assert persistence.load_draft(state.draft_id) is None
        assert not (persistence.storage_dir / StatePersistence.ACTIVE_LINK).is_symlink()

    def test_delete_missing(self, persistence):
        assert persistence.delete_draft("nope") is False
