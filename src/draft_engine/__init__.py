from src.draft_engine.auto_drafter import AutoDrafter
from src.draft_engine.draft_clock import DraftClock
from src.draft_engine.draft_initializer import DraftInitializer
from src.draft_engine.draft_orchestrator import DraftOrchestrator, DraftStatus, tick
from src.draft_engine.draft_rules import DraftRules, ValidationError
from src.draft_engine.draft_state import (
    DraftPhase,
    DraftSettings,
    DraftState,
    InvariantViolation,
    PickRecord,
    Player,
    RosterEntry,
)
from src.draft_engine.pick_store import (
    HttpPickStore,
    InMemoryPickStore,
    NetworkError,
    PickStore,
)
from src.draft_engine.roster_bucketer import RosterCategory, bucket
from src.draft_engine.salary_cap import CapStage, SalaryCapState, cap_stage, tax_owed
from src.draft_engine.state_persistence import StatePersistence
from src.draft_engine.turn_sequencer import TurnAdvance, TurnSequencer

__all__ = [
    "AutoDrafter",
    "CapStage",
    "DraftClock",
    "DraftInitializer",
    "DraftOrchestrator",
    "DraftPhase",
    "DraftRules",
    "DraftSettings",
    "DraftState",
    "DraftStatus",
    "HttpPickStore",
    "InMemoryPickStore",
    "InvariantViolation",
    "NetworkError",
    "PickRecord",
    "PickStore",
    "Player",
    "RosterCategory",
    "RosterEntry",
    "SalaryCapState",
    "StatePersistence",
    "TurnAdvance",
    "TurnSequencer",
    "ValidationError",
    "bucket",
    "cap_stage",
    "tax_owed",
    "tick",
]
