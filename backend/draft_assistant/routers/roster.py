"""Roster shape endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Body, HTTPException

from ..config import assistant_config
from ..services.draft_tracker import get_draft_state, update_roster as _update_roster
from ..services.needs_calculator import compute_roster_needs

router = APIRouter()


@router.get("")
async def get_roster():
    return get_draft_state().roster.model_dump(by_alias=True)


@router.put("")
async def update_roster(changes: dict = Body(...)):
    """Update any of QB, RB, WR, TE, DST, K, flexSlots, benchSlots. Other keys are ignored."""
    try:
        roster = _update_roster(changes)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return roster.model_dump(by_alias=True)


@router.get("/needs")
async def get_needs():
    """Starter slots filled by claimed players and slots still needed."""
    state = get_draft_state()
    filled, needs = compute_roster_needs(state.players, state.roster, assistant_config.flex_eligible)
    return {
        "filled": {**filled.positions, "flex": filled.flex},
        "needs": needs.as_dict(),
        "total_needed": needs.total,
        "bench_slots": state.roster.bench_slots,
    }
