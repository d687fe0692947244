"""Remaining starter needs per position and for FLEX."""

from __future__ import annotations

from ..config import RosterShape
from ..models.draft import FilledSlots, NeedVector
from ..models.player import Player
from ..utils.positions import DEFAULT_FLEX_ELIGIBLE, FIXED_POSITIONS
from .status_partitioner import compute_filled_slots


def compute_needs(filled: FilledSlots, roster: RosterShape) -> NeedVector:
    """Turn filled slot counts into slots still needed. Never negative."""
    needs = {
        pos: max(0, roster.required(pos) - filled.get(pos))
        for pos in FIXED_POSITIONS
    }
    return NeedVector(positions=needs, flex=max(0, roster.flex_slots - filled.flex))


def compute_roster_needs(
    pool: list[Player],
    roster: RosterShape,
    flex_eligible=DEFAULT_FLEX_ELIGIBLE,
) -> tuple[FilledSlots, NeedVector]:
    filled = compute_filled_slots(pool, roster, flex_eligible)
    return filled, compute_needs(filled, roster)
