"""Tests for the practice and live pick stores."""

from unittest.mock import MagicMock

import pytest
import requests

from src.draft_engine.draft_state import Player
from src.draft_engine.pick_store import (
    HttpPickStore,
    InMemoryPickStore,
    NetworkError,
    _player_from_row,
)


# ── Helpers ──────────────────────────────────────────────────────────


def _make_response(payload=None, status_code=200):
    response = MagicMock()
    response.ok = status_code < 400
    response.status_code = status_code
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


def _make_store(payload=None, status_code=200):
    session = MagicMock()
    session.headers = {}
    session.request.return_value = _make_response(payload, status_code)
    return HttpPickStore("http://backend:3001/", session=session, timeout=5), session


PLAYER_ROW = {
    "player_id": 42,
    "player": "Jalen Brunson",
    "pos": "pg",
    "rb": 3.3,
    "ast": 7.3,
    "stl": 0.9,
    "blk": 0.2,
    "tov": 2.5,
    "pf": 2.0,
    "pts": "26.0",
    "salary": 24_960_001,
}


# ── In-memory store ──────────────────────────────────────────────────


class TestInMemoryPickStore:
    def test_generated_users(self):
        store = InMemoryPickStore([], user_count=2)
        assert store.load_participants("practice") == [
            ("User 1", "User 1"),
            ("User 2", "User 2"),
        ]

    def test_explicit_participants(self):
        store = InMemoryPickStore([], participants=[("a", "Alpha")])
        assert store.load_participants("x") == [("a", "Alpha")]

    def test_pool_is_a_copy(self):
        players = [Player("p1", "One", "C", 1)]
        store = InMemoryPickStore(players)
        store.load_player_pool("x").clear()
        assert len(store.load_player_pool("x")) == 1

    def test_submit_and_reset(self):
        player = Player("p1", "One", "C", 1)
        store = InMemoryPickStore([player])
        store.submit_pick("x", "User 1", player)
        assert store.submitted == [("User 1", "p1")]
        store.reset_draft("x")
        assert store.submitted == []


# ── Row conversion ───────────────────────────────────────────────────


class TestPlayerFromRow:
    def test_fields(self):
        player = _player_from_row(PLAYER_ROW)
        assert player.player_id == "42"
        assert player.name == "Jalen Brunson"
        assert player.position == "PG"
        assert player.salary == 24_960_001

    def test_rebounds_mapped(self):
        player = _player_from_row(PLAYER_ROW)
        assert player.stat("reb") == 3.3
        assert player.stat("pts") == 26.0

    def test_missing_values_default_to_zero(self):
        player = _player_from_row({"player_id": 1, "player": "X", "pos": "C"})
        assert player.salary == 0
        assert player.stat("ast") == 0.0

    def test_unparseable_stat(self):
        row = dict(PLAYER_ROW, blk="n/a")
        assert _player_from_row(row).stat("blk") == 0.0


# ── HTTP store ───────────────────────────────────────────────────────


class TestHttpPickStore:
    def test_load_participants(self):
        store, session = _make_store(
            [{"team_id": 3, "team_name": "Knicks"}, {"team_id": 4, "team_name": None}]
        )
        assert store.load_participants("1") == [("3", "Knicks"), ("4", "4")]
        session.request.assert_called_once_with(
            "GET",
            "http://backend:3001/teams-for-league",
            timeout=5,
            params={"leagueId": "1"},
        )

    def test_load_player_pool(self):
        store, session = _make_store([PLAYER_ROW])
        players = store.load_player_pool("1")
        assert [p.player_id for p in players] == ["42"]
        assert session.request.call_args.args[1].endswith("/league-players")

    def test_empty_response(self):
        store, _ = _make_store(None)
        assert store.load_player_pool("1") == []

    def test_submit_pick_payload(self):
        store, session = _make_store({"message": "Pick made successfully"})
        store.submit_pick("1", "3", Player("42", "Jalen Brunson", "PG", 1))
        session.request.assert_called_once_with(
            "POST",
            "http://backend:3001/make-pick",
            timeout=5,
            json={"leagueId": 1, "teamId": 3, "playerId": 42},
        )

    def test_non_numeric_ids_sent_as_strings(self):
        store, session = _make_store({})
        store.submit_pick("practice", "User 1", Player("jokic_c", "Nikola Jokic", "C", 1))
        payload = session.request.call_args.kwargs["json"]
        assert payload == {"leagueId": "practice", "teamId": "User 1", "playerId": "jokic_c"}

    def test_reset_draft(self):
        store, session = _make_store({"message": "Draft reset successfully"})
        store.reset_draft("1")
        session.request.assert_called_once_with(
            "POST", "http://backend:3001/reset-draft", timeout=5, json={"leagueId": 1}
        )

    def test_backend_error_message(self):
        store, _ = _make_store({"error": "Player already drafted"}, status_code=400)
        with pytest.raises(NetworkError, match="Player already drafted"):
            store.submit_pick("1", "3", Player("42", "X", "PG", 1))

    def test_http_error_without_body(self):
        store, _ = _make_store(ValueError("no json"), status_code=500)
        with pytest.raises(NetworkError, match="POST /reset-draft failed with HTTP 500"):
            store.reset_draft("1")

    def test_timeout(self):
        store, session = _make_store()
        session.request.side_effect = requests.exceptions.Timeout()
        with pytest.raises(NetworkError, match="Timed out"):
            store.load_participants("1")

    def test_connection_error(self):
        store, session = _make_store()
        session.request.side_effect = requests.exceptions.ConnectionError("refused")
        with pytest.raises(NetworkError, match="Could not reach"):
            store.load_player_pool("1")

    def test_accept_header_set(self):
        _, session = _make_store()
        assert session.headers["Accept"] == "application/json"
