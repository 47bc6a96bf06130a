"""Run an unattended practice draft.

Usage:
    python -m src.run_draft [--users N] [--season YEAR] [--sort KEY]
                            [--miss-rate P] [--seed S] [--tick-interval SECONDS]

Examples:
    python -m src.run_draft --users 4
    python -m src.run_draft --users 2 --miss-rate 0.3 --seed 7
"""

import argparse
import logging
import random
import sys

from src.draft_engine.auto_drafter import AutoDrafter
from src.draft_engine.config import (
    DEFAULT_PRACTICE_USERS,
    DEFAULT_SORT,
    PRACTICE_USER_COUNTS,
    SORT_CRITERIA,
)
from src.draft_engine.draft_clock import DraftClock
from src.draft_engine.draft_initializer import DraftInitializer
from src.draft_engine.draft_orchestrator import DraftOrchestrator
from src.draft_engine.draft_state import DraftPhase
from src.draft_engine.state_persistence import StatePersistence
from src.logging_config import setup_logging

logger = logging.getLogger(__name__)


def run_practice_draft(
    orchestrator: DraftOrchestrator,
    drafter: AutoDrafter,
    clock: DraftClock,
) -> DraftPhase:
    """Drive a started draft until it completes or the final phase stalls.

    A turn the drafter passes on is burned down by the clock.

    Returns:
        The phase the draft ended in.
    """
    orchestrator.start()

    while orchestrator.draft_state.phase == DraftPhase.ACTIVE:
        if drafter.take_turn() is None:
            clock.run(max_ticks=orchestrator.draft_state.time_left)

    while orchestrator.draft_state.phase == DraftPhase.FINAL_PICK:
        if drafter.take_turn() is None:
            logger.warning(
                "%s cannot afford any remaining player; final pick phase stalled",
                orchestrator.draft_state.acting_participant(),
            )
            break

    return orchestrator.draft_state.phase


def _format_team(summary: dict) -> str:
    lines = [
        f"{summary['display_name']}: payroll ${summary['payroll']:,} "
        f"({summary['cap_stage']}), tax ${summary['tax']['total']:,}"
    ]
    for category, players in summary["roster"].items():
        names = ", ".join(p["name"] for p in players) or "-"
        lines.append(f"  {category:<8} {names}")
    return "\n".join(lines)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Run an auto-drafted practice draft")
    parser.add_argument(
        "--users", type=int, default=DEFAULT_PRACTICE_USERS, choices=PRACTICE_USER_COUNTS
    )
    parser.add_argument("--season", type=int, default=2025)
    parser.add_argument("--sort", default=DEFAULT_SORT, choices=sorted(SORT_CRITERIA))
    parser.add_argument("--miss-rate", type=float, default=0.0)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--tick-interval", type=float, default=0.0)
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    rng = random.Random(args.seed)
    orchestrator = DraftInitializer().create_practice_draft(
        user_count=args.users, season=args.season, rng=rng
    )
    drafter = AutoDrafter(orchestrator, sort_by=args.sort, miss_rate=args.miss_rate, rng=rng)
    clock = DraftClock(orchestrator, interval=args.tick_interval)

    phase = run_practice_draft(orchestrator, drafter, clock)
    path = StatePersistence().save_draft(orchestrator.draft_state)

    state = orchestrator.draft_state
    for participant in state.start_order:
        print(_format_team(orchestrator.get_team_summary(participant)))
    print(f"Draft {state.draft_id} ended {phase.value}; saved to {path}")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception:
        logger.exception("Practice draft failed")
        sys.exit(1)
