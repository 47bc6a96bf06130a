"""Draft state data models - single source of truth for a draft session."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple, Union
import uuid

from src.draft_engine.config import (
    EXCLUDED_PLAYER_NAMES,
    LIVE_PICK_TIME_LIMIT,
    PRACTICE_PICK_TIME_LIMIT,
    TOTAL_BUDGET,
    TOTAL_ROUNDS,
)
from src.draft_engine.salary_cap import SalaryCapState

MISSED_TURN = "Missed Turn"
FINAL_ROUND = "Final"


class InvariantViolation(Exception):
    """Raised when draft state would become inconsistent (a logic defect)."""

    pass


class DraftPhase(Enum):
    NOT_STARTED = "not_started"
    ACTIVE = "active"
    FINAL_PICK = "final_pick"
    COMPLETE = "complete"


@dataclass
class Player:
    """A draftable player."""

    player_id: str
    name: str
    position: str
    salary: int
    stats: Dict[str, float] = field(default_factory=dict)

    def stat(self, key: str) -> float:
        return self.stats.get(key, 0.0)

    def to_dict(self) -> Dict:
        return {
            "player_id": self.player_id,
            "name": self.name,
            "position": self.position,
            "salary": self.salary,
            "stats": dict(self.stats),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Player":
        return cls(
            player_id=str(data["player_id"]),
            name=data["name"],
            position=data["position"],
            salary=int(data.get("salary") or 0),
            stats={k: float(v) for k, v in data.get("stats", {}).items()},
        )


@dataclass
class RosterEntry:
    """A player on a roster with an explicit category (starter/bench/reserve)."""

    player_id: str
    category: str


@dataclass
class PickRecord:
    """One line of pick history: a pick or a missed turn."""

    round: Union[int, str]
    participant: str
    player_id: Optional[str]
    player_name: str
    timestamp: str
    category: Optional[str] = None

    @classmethod
    def create(
        cls,
        round: Union[int, str],
        participant: str,
        player: Player,
        category: str,
    ) -> "PickRecord":
        return cls(
            round=round,
            participant=participant,
            player_id=player.player_id,
            player_name=player.name,
            timestamp=datetime.now().isoformat(),
            category=category,
        )

    @classmethod
    def missed(cls, round: int, participant: str) -> "PickRecord":
        return cls(
            round=round,
            participant=participant,
            player_id=None,
            player_name=MISSED_TURN,
            timestamp=datetime.now().isoformat(),
        )

    @property
    def is_missed(self) -> bool:
        return self.player_id is None


@dataclass
class DraftSettings:
    """Per-session configuration."""

    league_id: str
    mode: str  # "practice" or "live"
    total_rounds: int = TOTAL_ROUNDS
    pick_time_limit: int = PRACTICE_PICK_TIME_LIMIT
    total_budget: int = TOTAL_BUDGET
    reshuffle_each_round: bool = True
    excluded_player_names: Tuple[str, ...] = EXCLUDED_PLAYER_NAMES

    @classmethod
    def practice(cls, league_id: str = "practice", **overrides) -> "DraftSettings":
        """Practice drafts reshuffle the order every round."""
        values = {
            "pick_time_limit": PRACTICE_PICK_TIME_LIMIT,
            "reshuffle_each_round": True,
        }
        values.update(overrides)
        return cls(league_id=league_id, mode="practice", **values)

    @classmethod
    def live(cls, league_id: str, **overrides) -> "DraftSettings":
        """Live drafts keep the backend's team order for every round."""
        values = {
            "pick_time_limit": LIVE_PICK_TIME_LIMIT,
            "reshuffle_each_round": False,
        }
        values.update(overrides)
        return cls(league_id=league_id, mode="live", **values)

    @property
    def is_live(self) -> bool:
        return self.mode == "live"


@dataclass
class DraftState:
    """Complete draft state - owned by exactly one orchestrator."""

    draft_id: str
    settings: DraftSettings
    participants: List[str]
    display_names: Dict[str, str]
    rosters: Dict[str, List[RosterEntry]]
    salary_caps: Dict[str, SalaryCapState]
    available_players: List[str]
    player_data: Dict[str, Player]
    round: int = 1
    picker_index: int = 0
    time_left: int = 0
    phase: DraftPhase = DraftPhase.NOT_STARTED
    start_order: List[str] = field(default_factory=list)
    final_queue: List[str] = field(default_factory=list)
    pick_history: List[PickRecord] = field(default_factory=list)
    search_query: str = ""
    created_at: str = field(default_factory=lambda: datetime.now().isoformat())
    completed_at: Optional[str] = None

    @classmethod
    def create_new(
        cls,
        settings: DraftSettings,
        participants: Sequence[str],
        players: Sequence[Player],
        display_names: Optional[Dict[str, str]] = None,
    ) -> "DraftState":
        """Factory method for a draft that has not started yet."""
        if len(participants) < 1:
            raise ValueError("A draft needs at least one participant")
        if len(set(participants)) != len(participants):
            raise ValueError(f"Duplicate participants: {list(participants)}")

        player_data = {}
        for player in players:
            if player.player_id in player_data:
                raise ValueError(f"Duplicate player_id: {player.player_id}")
            player_data[player.player_id] = player

        names = {p: p for p in participants}
        names.update(display_names or {})

        return cls(
            draft_id=str(uuid.uuid4()),
            settings=settings,
            participants=list(participants),
            display_names=names,
            rosters={p: [] for p in participants},
            salary_caps={
                p: SalaryCapState(total_budget=settings.total_budget)
                for p in participants
            },
            available_players=list(player_data.keys()),
            player_data=player_data,
        )

    @property
    def started(self) -> bool:
        return self.phase == DraftPhase.ACTIVE

    @property
    def final_phase(self) -> bool:
        return self.phase == DraftPhase.FINAL_PICK

    def acting_participant(self) -> Optional[str]:
        """Participant allowed to pick right now, if any."""
        if self.phase == DraftPhase.ACTIVE:
            return self.participants[self.picker_index]
        if self.phase == DraftPhase.FINAL_PICK and self.final_queue:
            return self.final_queue[0]
        return None

    def get_player(self, player_id: str) -> Optional[Player]:
        return self.player_data.get(player_id)

    def is_player_available(self, player_id: str) -> bool:
        return player_id in self.available_players

    def get_roster(self, participant: str) -> List[RosterEntry]:
        return self.rosters[participant]

    def roster_size(self, participant: str) -> int:
        return len(self.rosters[participant])

    def get_salary_cap(self, participant: str) -> SalaryCapState:
        return self.salary_caps[participant]

    def owner_of(self, player_id: str) -> Optional[str]:
        """Participant whose roster holds the player, if any."""
        for participant, roster in self.rosters.items():
            if any(entry.player_id == player_id for entry in roster):
                return participant
        return None

    def assign_player(self, participant: str, player: Player, category: str):
        """Move a player from the pool onto a roster and charge the salary."""
        try:
            self.available_players.remove(player.player_id)
        except ValueError:
            raise InvariantViolation(
                f"Player {player.player_id} is not in the available pool"
            )
        self.rosters[participant].append(RosterEntry(player.player_id, category))
        self.salary_caps[participant].add_salary(player.salary)

    def empty_rosters(self) -> List[str]:
        """Participants without a single player, in the order the draft began with."""
        order = self.start_order or self.participants
        return [p for p in order if not self.rosters[p]]
