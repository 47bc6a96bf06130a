"""Persistence collaborators for draft sessions.

A practice draft keeps everything in memory; a live draft writes each pick
to the league backend before the local state changes.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple

import requests

from src.draft_engine.config import DEFAULT_API_URL, REQUEST_TIMEOUT
from src.draft_engine.draft_state import Player

logger = logging.getLogger(__name__)


class NetworkError(Exception):
    """Raised when a backend round-trip fails or the backend rejects it."""

    pass


class PickStore(ABC):
    """Contract between the orchestrator and wherever picks are kept."""

    @abstractmethod
    def load_participants(self, league_id: str) -> List[Tuple[str, str]]:
        """Ordered (participant_id, display_name) pairs."""

    @abstractmethod
    def load_player_pool(self, league_id: str) -> List[Player]:
        """Every draftable player not already picked."""

    @abstractmethod
    def submit_pick(self, league_id: str, participant: str, player: Player) -> None:
        """Persist one pick. Raises NetworkError on failure."""

    @abstractmethod
    def reset_draft(self, league_id: str) -> None:
        """Clear all persisted picks for the league. Raises NetworkError."""


class InMemoryPickStore(PickStore):
    """Practice store: a fixed player pool and generated users, nothing persisted."""

    def __init__(
        self,
        players: Sequence[Player],
        participants: Optional[Sequence[Tuple[str, str]]] = None,
        user_count: int = 4,
    ):
        self.players = list(players)
        if participants is None:
            participants = [
                (f"User {i}", f"User {i}") for i in range(1, user_count + 1)
            ]
        self.participants = list(participants)
        self.submitted: List[Tuple[str, str]] = []

    def load_participants(self, league_id: str) -> List[Tuple[str, str]]:
        return list(self.participants)

    def load_player_pool(self, league_id: str) -> List[Player]:
        return list(self.players)

    def submit_pick(self, league_id: str, participant: str, player: Player) -> None:
        self.submitted.append((participant, player.player_id))

    def reset_draft(self, league_id: str) -> None:
        self.submitted.clear()


def _player_from_row(row: Dict) -> Player:
    """Convert a backend players row to a Player."""

    def _num(key):
        value = row.get(key)
        try:
            return float(value) if value is not None else 0.0
        except (TypeError, ValueError):
            return 0.0

    return Player(
        player_id=str(row["player_id"]),
        name=row.get("player") or "",
        position=(row.get("pos") or "").upper(),
        salary=int(_num("salary")),
        stats={
            "pts": _num("pts"),
            "reb": _num("rb"),
            "ast": _num("ast"),
            "stl": _num("stl"),
            "blk": _num("blk"),
            "tov": _num("tov"),
            "pf": _num("pf"),
        },
    )


def _wire_id(value: str):
    """Backend ids are integers; send them as such when they look numeric."""
    return int(value) if str(value).isdigit() else value


class HttpPickStore(PickStore):
    """Live store backed by the league REST backend."""

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        session: Optional[requests.Session] = None,
        timeout: int = REQUEST_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def _request(self, method: str, path: str, **kwargs):
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method, url, timeout=self.timeout, **kwargs
            )
        except requests.exceptions.Timeout as e:
            raise NetworkError(f"Timed out calling {url}") from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Could not reach {url}: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not response.ok:
            message = None
            if isinstance(payload, dict):
                message = payload.get("error")
            raise NetworkError(
                message or f"{method} {path} failed with HTTP {response.status_code}"
            )
        return payload

    def load_participants(self, league_id: str) -> List[Tuple[str, str]]:
        rows = self._request(
            "GET", "/teams-for-league", params={"leagueId": league_id}
        )
        teams = [
            (str(row["team_id"]), row.get("team_name") or str(row["team_id"]))
            for row in rows or []
        ]
        logger.info("Loaded %d teams for league %s", len(teams), league_id)
        return teams

    def load_player_pool(self, league_id: str) -> List[Player]:
        rows = self._request("GET", "/league-players", params={"leagueId": league_id})
        players = [_player_from_row(row) for row in rows or []]
        logger.info("Loaded %d available players for league %s", len(players), league_id)
        return players

    def submit_pick(self, league_id: str, participant: str, player: Player) -> None:
        self._request(
            "POST",
            "/make-pick",
            json={
                "leagueId": _wire_id(league_id),
                "teamId": _wire_id(participant),
                "playerId": _wire_id(player.player_id),
            },
        )

    def reset_draft(self, league_id: str) -> None:
        self._request("POST", "/reset-draft", json={"leagueId": _wire_id(league_id)})
        logger.info("Backend draft reset for league %s", league_id)
