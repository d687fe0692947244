"""Recommendation, bye-week alert, and preference endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from ..config import assistant_config
from ..models.draft import SortDirection, SortKey
from ..services.alert_engine import get_bye_alerts
from ..services.draft_tracker import (
    get_draft_state,
    update_preferences as _update_preferences,
)
from ..services.needs_calculator import compute_roster_needs
from ..services.recommendation_engine import get_recommendations as _get_recommendations
from ..services.scarcity_scorer import pool_value_by_position

router = APIRouter()


class PreferencesUpdate(BaseModel):
    sort_key: Optional[SortKey] = None
    sort_direction: Optional[SortDirection] = None
    hide_drafted: Optional[bool] = None
    show_bye: Optional[bool] = None
    scarcity_weight: Optional[float] = None


def _recommendations_json(scarcity_weight: Optional[float] = None) -> dict:
    state = get_draft_state()
    weight = state.preferences.scarcity_weight if scarcity_weight is None else scarcity_weight
    recs = _get_recommendations(state.players, state.roster, weight, assistant_config.flex_eligible)
    data = recs.model_dump(mode="json", by_alias=True)
    data["scarcity_weight"] = weight
    return data


@router.get("/recommendations")
async def get_recommendations(
    scarcity_weight: Optional[float] = Query(
        None,
        ge=assistant_config.min_scarcity_weight,
        le=assistant_config.max_scarcity_weight,
        description="Override the saved scarcity weight for this request",
    ),
):
    """Greedy (highest value) and balanced (value + scarcity) picks."""
    return _recommendations_json(scarcity_weight)


@router.get("/conflicts")
async def get_conflicts():
    """Positions with two or more claimed players on the same bye week."""
    return get_bye_alerts(get_draft_state().players)


@router.get("/pool")
async def get_pool_value():
    """Remaining value and player count per position."""
    return [s.model_dump() for s in pool_value_by_position(get_draft_state().players)]


@router.get("/summary")
async def get_summary():
    """Everything the draft sidebar needs in one call."""
    state = get_draft_state()
    filled, needs = compute_roster_needs(state.players, state.roster, assistant_config.flex_eligible)
    return {
        "recommendations": _recommendations_json(),
        "needs": needs.as_dict(),
        "filled": {**filled.positions, "flex": filled.flex},
        "conflicts": get_bye_alerts(state.players),
        "pool": [s.model_dump() for s in pool_value_by_position(state.players)],
        "claimed_count": len(state.claimed),
    }


@router.get("/preferences")
async def get_preferences():
    return get_draft_state().preferences.model_dump()


@router.put("/preferences")
async def update_preferences(body: PreferencesUpdate):
    try:
        prefs = _update_preferences(body.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return prefs.model_dump()
