"""Player pool, board, and status endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, File, HTTPException, Query, UploadFile
from pydantic import BaseModel

from ..config import assistant_config
from ..models.player import Player, PlayerStatus
from ..services.draft_tracker import (
    add_player as _add_player,
    claim_player as _claim_player,
    clear_all_statuses as _clear_all_statuses,
    get_draft_state,
    load_sample_pool as _load_sample_pool,
    remove_drafted as _remove_drafted,
    replace_pool as _replace_pool,
    set_status as _set_status,
    toggle_drafted as _toggle_drafted,
    unclaim_player as _unclaim_player,
)
from ..services.player_loader import build_custom_player, load_players_csv
from ..services.player_search import build_board
from ..services.scarcity_scorer import score_pool

router = APIRouter()


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class PlayerIn(BaseModel):
    name: str
    position: str = "WR"
    team: Optional[str] = None
    bye_week: Optional[int] = None
    value: Optional[float] = None
    adp: Optional[float] = None
    injury_note: Optional[str] = None


class StatusUpdate(BaseModel):
    status: PlayerStatus


def _player_json(player: Player) -> dict:
    return player.model_dump(mode="json", by_alias=True)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("")
async def get_board(
    query: Optional[str] = Query(None, description="Fuzzy search on name, team, position (min 2 chars)"),
    sort_key: Optional[str] = None,
    sort_direction: Optional[str] = Query(None, pattern="^(asc|desc)$"),
    hide_drafted: Optional[bool] = None,
    position: Optional[str] = None,
):
    """Draft board: search -> hide drafted -> sort. Defaults come from preferences."""
    state = get_draft_state()
    prefs = state.preferences
    try:
        board = build_board(
            state.players,
            query=query,
            sort_key=sort_key or prefs.sort_key,
            direction=sort_direction or prefs.sort_direction,
            hide_drafted=prefs.hide_drafted if hide_drafted is None else hide_drafted,
            position=position,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    scores = score_pool(
        state.players,
        state.roster,
        prefs.scarcity_weight,
        assistant_config.flex_eligible,
    )
    rows = []
    for p in board:
        row = _player_json(p)
        score = scores.get(p.id)
        row["score"] = round(score, 2) if score is not None else None
        rows.append(row)

    return {
        "players": rows,
        "count": len(rows),
        "total_in_pool": len(state.players),
    }


@router.get("/mine")
async def get_my_players():
    """Players claimed by the user, in pool order."""
    claimed = get_draft_state().claimed
    return {
        "players": [_player_json(p) for p in claimed],
        "count": len(claimed),
    }


@router.post("")
async def add_custom_player(body: PlayerIn):
    """Add a player that is missing from the imported pool."""
    try:
        player = build_custom_player(**body.model_dump())
        _add_player(player)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _player_json(player)


@router.post("/upload")
async def upload_players(file: UploadFile = File(...)):
    """Replace the pool with an uploaded CSV (name,position,team,byeWeek,value,adp,injuryNote)."""
    content = await file.read()
    try:
        players = load_players_csv(content)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    _replace_pool(players)
    return {
        "message": f"Loaded {len(players)} players from {file.filename}",
        "player_count": len(players),
    }


@router.post("/sample")
async def load_sample():
    """Replace the pool with the bundled sample list."""
    state = _load_sample_pool()
    return {"player_count": len(state.players)}


@router.put("/{player_id}/status")
async def update_status(player_id: str, body: StatusUpdate):
    try:
        player = _set_status(player_id, body.status)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _player_json(player)


@router.post("/{player_id}/claim")
async def claim(player_id: str):
    """Mark a player as the user's pick."""
    try:
        player = _claim_player(player_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _player_json(player)


@router.post("/{player_id}/unclaim")
async def unclaim(player_id: str):
    try:
        player = _unclaim_player(player_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _player_json(player)


@router.post("/{player_id}/toggle-drafted")
async def toggle_drafted(player_id: str):
    """Board checkbox for a pick made by any team."""
    try:
        player = _toggle_drafted(player_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _player_json(player)


@router.post("/reset-statuses")
async def reset_statuses():
    """Clear all claimed/drafted marks."""
    changed = _clear_all_statuses()
    return {"status": "reset", "changed": changed}


@router.post("/remove-drafted")
async def remove_drafted():
    removed = _remove_drafted()
    return {"removed": removed, "total_in_pool": len(get_draft_state().players)}
