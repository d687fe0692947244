"""Draft state management service."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ..config import RosterShape, assistant_config
from ..models.draft import DraftSnapshot, DraftState, Preferences
from ..models.player import Player, PlayerStatus
from .player_loader import load_sample_players

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Singleton DraftState
# ---------------------------------------------------------------------------
_draft_state = DraftState()

SAVE_DIR = Path(__file__).resolve().parent.parent.parent / "data" / "draft_state"
SAVE_FILE = "current.json"


def get_draft_state() -> DraftState:
    """Return the current draft state."""
    return _draft_state


def get_player(player_id: str) -> Optional[Player]:
    return _draft_state.get_player(player_id)


def _require_player(player_id: str) -> Player:
    player = get_player(player_id)
    if player is None:
        raise ValueError(f"Player '{player_id}' not found")
    return player


def reset_state() -> DraftState:
    """Drop everything back to an empty pool with default roster and preferences."""
    global _draft_state
    _draft_state = DraftState()
    return _draft_state


# ---------------------------------------------------------------------------
# Pool
# ---------------------------------------------------------------------------

def replace_pool(players: list[Player]) -> DraftState:
    """Swap in a freshly imported pool, keeping roster and preferences."""
    _draft_state.players = list(players)
    logger.info(f"Player pool replaced with {len(players)} players")
    _autosave()
    return _draft_state


def load_sample_pool() -> DraftState:
    return replace_pool(load_sample_players())


def add_player(player: Player) -> Player:
    """Add a custom player at the top of the pool."""
    if get_player(player.id) is not None:
        raise ValueError(f"Player '{player.id}' already exists")
    _draft_state.players.insert(0, player)
    _autosave()
    return player


def remove_drafted() -> int:
    """Drop players drafted by other teams from the pool. Returns how many."""
    before = len(_draft_state.players)
    _draft_state.players = [p for p in _draft_state.players if not p.is_drafted]
    removed = before - len(_draft_state.players)
    _autosave()
    return removed


# ---------------------------------------------------------------------------
# Status transitions (any status can move to any other)
# ---------------------------------------------------------------------------

def set_status(player_id: str, status: PlayerStatus) -> Player:
    player = _require_player(player_id)
    player.status = PlayerStatus(status)
    _autosave()
    return player


def claim_player(player_id: str) -> Player:
    return set_status(player_id, PlayerStatus.CLAIMED_BY_USER)


def unclaim_player(player_id: str) -> Player:
    return set_status(player_id, PlayerStatus.AVAILABLE)


def toggle_drafted(player_id: str) -> Player:
    """Board checkbox: available -> drafted, drafted or claimed -> available."""
    player = _require_player(player_id)
    if player.is_available:
        new_status = PlayerStatus.DRAFTED_BY_OTHER
    else:
        new_status = PlayerStatus.AVAILABLE
    return set_status(player_id, new_status)


def clear_all_statuses() -> int:
    """Mark every player available again. Returns how many changed."""
    changed = 0
    for player in _draft_state.players:
        if not player.is_available:
            player.status = PlayerStatus.AVAILABLE
            changed += 1
    _autosave()
    return changed


# ---------------------------------------------------------------------------
# Roster shape and preferences
# ---------------------------------------------------------------------------

_ROSTER_KEY_ALIASES = {
    "flexSlots": "flex_slots",
    "FLEX": "flex_slots",
    "benchSlots": "bench_slots",
    "BENCH": "bench_slots",
}


def update_roster(changes: dict) -> RosterShape:
    """Merge recognized roster keys into the current shape; others are ignored."""
    normalized = {_ROSTER_KEY_ALIASES.get(k, k): v for k, v in changes.items()}
    merged = {**_draft_state.roster.model_dump(), **normalized}
    _draft_state.roster = RosterShape.model_validate(merged)
    _autosave()
    return _draft_state.roster


def update_preferences(changes: dict) -> Preferences:
    merged = {**_draft_state.preferences.model_dump(), **{k: v for k, v in changes.items() if v is not None}}
    _draft_state.preferences = Preferences.model_validate(merged)
    _autosave()
    return _draft_state.preferences


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------

def export_snapshot() -> DraftSnapshot:
    prefs = _draft_state.preferences
    return DraftSnapshot(
        players=[p.model_copy() for p in _draft_state.players],
        roster_shape=_draft_state.roster.model_copy(),
        sort_key=prefs.sort_key,
        sort_direction=prefs.sort_direction,
        hide_drafted=prefs.hide_drafted,
        show_bye=prefs.show_bye,
        scarcity_weight=prefs.scarcity_weight,
        version=assistant_config.snapshot_version,
    )


def import_snapshot(data: dict) -> DraftState:
    """Restore a snapshot. Optional fields missing from it keep current values.

    Raises ValueError when ``players`` is missing or the snapshot is malformed.
    """
    global _draft_state

    if not isinstance(data, dict) or "players" not in data:
        raise ValueError("Invalid snapshot: missing 'players'")
    try:
        snapshot = DraftSnapshot.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid snapshot: {e.error_count()} invalid field(s)") from e

    ids = [p.id for p in snapshot.players]
    if len(ids) != len(set(ids)):
        raise ValueError("Invalid snapshot: duplicate player ids")

    prefs = _draft_state.preferences.model_copy()
    if snapshot.sort_key is not None:
        prefs.sort_key = snapshot.sort_key
    if snapshot.sort_direction is not None:
        prefs.sort_direction = snapshot.sort_direction
    if snapshot.hide_drafted is not None:
        prefs.hide_drafted = snapshot.hide_drafted
    if snapshot.show_bye is not None:
        prefs.show_bye = snapshot.show_bye
    if snapshot.scarcity_weight is not None:
        prefs.scarcity_weight = min(
            max(snapshot.scarcity_weight, assistant_config.min_scarcity_weight),
            assistant_config.max_scarcity_weight,
        )

    _draft_state = DraftState(
        players=snapshot.players,
        roster=snapshot.roster_shape or _draft_state.roster,
        preferences=prefs,
    )
    logger.info(f"Restored snapshot v{snapshot.version} with {len(snapshot.players)} players")
    _autosave()
    return _draft_state


def save_draft_state() -> str:
    """Save the snapshot to JSON at backend/data/draft_state/current.json."""
    SAVE_DIR.mkdir(parents=True, exist_ok=True)
    filepath = SAVE_DIR / SAVE_FILE

    state_data = export_snapshot().model_dump(mode="json", by_alias=True)
    with open(filepath, "w") as f:
        json.dump(state_data, f, indent=2)

    return str(filepath)


def load_draft_state() -> DraftState:
    """Load the snapshot saved by save_draft_state."""
    filepath = SAVE_DIR / SAVE_FILE
    if not filepath.exists():
        raise FileNotFoundError(f"No saved draft state found at {filepath}")

    with open(filepath, "r") as f:
        try:
            state_data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Saved draft state is not valid JSON: {e}") from e

    return import_snapshot(state_data)


def _autosave() -> None:
    """Best-effort local cache of the current state after every mutation."""
    if not assistant_config.autosave:
        return
    try:
        save_draft_state()
    except OSError as e:
        logger.warning(f"Could not save draft state: {e}")


def initialize_state() -> DraftState:
    """Restore the cached session if there is one, otherwise load the sample pool."""
    try:
        state = load_draft_state()
        logger.info(f"Restored {len(state.players)} players from saved session")
        return state
    except FileNotFoundError:
        pass
    except ValueError as e:
        logger.warning(f"Ignoring unreadable saved session: {e}")
    return load_sample_pool()
