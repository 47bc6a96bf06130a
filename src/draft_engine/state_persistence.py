"""State persistence - save and load draft snapshots to/from JSON files."""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from src.draft_engine.config import DRAFTS_DIR
from src.draft_engine.draft_state import (
    DraftPhase,
    DraftSettings,
    DraftState,
    PickRecord,
    Player,
    RosterEntry,
)
from src.draft_engine.salary_cap import SalaryCapState

logger = logging.getLogger(__name__)


class StatePersistence:
    """Handles saving and loading draft snapshots as JSON files."""

    ACTIVE_LINK = "active_draft.json"

    def __init__(self, storage_dir: Optional[Path] = None):
        self.storage_dir = storage_dir or DRAFTS_DIR
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    def _path_for(self, draft_id: str) -> Path:
        return self.storage_dir / f"draft_{draft_id}.json"

    def save_draft(self, draft_state: DraftState) -> Path:
        """Save draft state to JSON file.

        Returns:
            Path to the saved file.
        """
        filepath = self._path_for(draft_state.draft_id)

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(self._draft_state_to_dict(draft_state), f, indent=2)

        self._update_active_link(filepath)

        logger.info(
            "Saved draft %s (%s, round %d) to %s",
            draft_state.draft_id,
            draft_state.phase.value,
            draft_state.round,
            filepath,
        )
        return filepath

    def load_draft(self, draft_id: str) -> Optional[DraftState]:
        """Load draft state from JSON file, or None if missing or corrupt."""
        filepath = self._path_for(draft_id)

        if not filepath.exists():
            logger.warning("Draft file not found: %s", filepath)
            return None

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                state_dict = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning("Corrupt draft file %s: %s", filepath, e)
            return None

        logger.info("Loaded draft %s from %s", draft_id, filepath)
        return self._dict_to_draft_state(state_dict)

    def load_active_draft(self) -> Optional[DraftState]:
        """Load the most recently saved draft, if any."""
        active_link = self.storage_dir / self.ACTIVE_LINK
        if not active_link.is_symlink():
            return None

        actual_file = active_link.resolve()
        if not actual_file.exists():
            logger.warning("Active draft symlink points to missing file: %s", actual_file)
            return None

        with open(actual_file, "r", encoding="utf-8") as f:
            state_dict = json.load(f)

        logger.info("Loaded active draft from %s", actual_file)
        return self._dict_to_draft_state(state_dict)

    def list_saved_drafts(self) -> List[Dict]:
        """List saved drafts, most recent first."""
        drafts = []

        for filepath in self.storage_dir.glob("draft_*.json"):
            try:
                with open(filepath, "r", encoding="utf-8") as f:
                    data = json.load(f)

                drafts.append(
                    {
                        "draft_id": data["draft_id"],
                        "created_at": data["created_at"],
                        "mode": data.get("settings", {}).get("mode", ""),
                        "league_id": data.get("settings", {}).get("league_id", ""),
                        "phase": data.get("phase", DraftPhase.NOT_STARTED.value),
                        "round": data.get("round", 1),
                        "participants": len(data.get("participants", [])),
                    }
                )
            except (json.JSONDecodeError, OSError, KeyError) as e:
                logger.warning("Skipping corrupt draft file %s: %s", filepath, e)
                continue

        return sorted(drafts, key=lambda x: x["created_at"], reverse=True)

    def delete_draft(self, draft_id: str) -> bool:
        """Delete a saved draft file. Returns False if not found."""
        filepath = self._path_for(draft_id)
        if not filepath.exists():
            return False

        active_link = self.storage_dir / self.ACTIVE_LINK
        if active_link.is_symlink() and active_link.resolve() == filepath.resolve():
            active_link.unlink()

        filepath.unlink()
        logger.info("Deleted draft %s", draft_id)
        return True

    def _draft_state_to_dict(self, state: DraftState) -> Dict:
        """Convert DraftState to JSON-serializable dict."""
        settings = state.settings
        return {
            "draft_id": state.draft_id,
            "settings": {
                "league_id": settings.league_id,
                "mode": settings.mode,
                "total_rounds": settings.total_rounds,
                "pick_time_limit": settings.pick_time_limit,
                "total_budget": settings.total_budget,
                "reshuffle_each_round": settings.reshuffle_each_round,
                "excluded_player_names": list(settings.excluded_player_names),
            },
            "participants": state.participants,
            "display_names": state.display_names,
            "rosters": {
                participant: [
                    {"player_id": e.player_id, "category": e.category}
                    for e in roster
                ]
                for participant, roster in state.rosters.items()
            },
            "salary_caps": {
                participant: {"used": cap.used, "total_budget": cap.total_budget}
                for participant, cap in state.salary_caps.items()
            },
            "available_players": state.available_players,
            "player_data": {
                pid: player.to_dict() for pid, player in state.player_data.items()
            },
            "round": state.round,
            "picker_index": state.picker_index,
            "time_left": state.time_left,
            "phase": state.phase.value,
            "start_order": state.start_order,
            "final_queue": state.final_queue,
            "pick_history": [
                {
                    "round": r.round,
                    "participant": r.participant,
                    "player_id": r.player_id,
                    "player_name": r.player_name,
                    "timestamp": r.timestamp,
                    "category": r.category,
                }
                for r in state.pick_history
            ],
            "search_query": state.search_query,
            "created_at": state.created_at,
            "completed_at": state.completed_at,
        }

    def _dict_to_draft_state(self, data: Dict) -> DraftState:
        """Reconstruct DraftState from dict."""
        s = data["settings"]
        settings = DraftSettings(
            league_id=s["league_id"],
            mode=s["mode"],
            total_rounds=s["total_rounds"],
            pick_time_limit=s["pick_time_limit"],
            total_budget=s["total_budget"],
            reshuffle_each_round=s["reshuffle_each_round"],
            excluded_player_names=tuple(s.get("excluded_player_names", ())),
        )

        return DraftState(
            draft_id=data["draft_id"],
            settings=settings,
            participants=data["participants"],
            display_names=data["display_names"],
            rosters={
                participant: [RosterEntry(**e) for e in roster]
                for participant, roster in data["rosters"].items()
            },
            salary_caps={
                participant: SalaryCapState(**cap)
                for participant, cap in data["salary_caps"].items()
            },
            available_players=data["available_players"],
            player_data={
                pid: Player.from_dict(p) for pid, p in data["player_data"].items()
            },
            round=data["round"],
            picker_index=data["picker_index"],
            time_left=data["time_left"],
            phase=DraftPhase(data["phase"]),
            start_order=data.get("start_order", []),
            final_queue=data.get("final_queue", []),
            pick_history=[PickRecord(**r) for r in data.get("pick_history", [])],
            search_query=data.get("search_query", ""),
            created_at=data["created_at"],
            completed_at=data.get("completed_at"),
        )

    def _update_active_link(self, filepath: Path):
        """Point active_draft.json at the latest save."""
        active_link = self.storage_dir / self.ACTIVE_LINK

        if active_link.exists() or active_link.is_symlink():
            active_link.unlink()

        active_link.symlink_to(filepath.name)
