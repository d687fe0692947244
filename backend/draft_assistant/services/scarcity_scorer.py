"""Scarcity-adjusted desirability scores for available players."""

from __future__ import annotations

from typing import Optional

from ..config import RosterShape, assistant_config
from ..models.draft import NeedVector, PositionPoolStat
from ..models.player import Player
from ..utils.positions import DEFAULT_FLEX_ELIGIBLE, FIXED_POSITIONS
from .needs_calculator import compute_roster_needs

# Need weight when a starter slot is still open vs. already filled
NEED_WEIGHT_OPEN = 1.0
NEED_WEIGHT_FILLED = 0.4

FLEX_BOOST = 0.5
FLEX_BOOST_SCALE = 0.1


def available_count_by_position(pool: list[Player]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for player in pool:
        if player.is_available:
            counts[player.position] = counts.get(player.position, 0) + 1
    return counts


def score_available(
    player: Player,
    pool: list[Player],
    roster: RosterShape,
    needs: NeedVector,
    scarcity_weight: float = assistant_config.default_scarcity_weight,
    flex_eligible=DEFAULT_FLEX_ELIGIBLE,
    available_counts: Optional[dict[str, int]] = None,
) -> float:
    """Blend raw value with positional scarcity and remaining need.

    score = value + weight * need_weight * (scarcity + flex_boost * 0.1)

    where scarcity = 1 / (1 + available players at the position), need_weight
    is 1.0 while a starter slot at the position is open (0.4 otherwise), and
    flex_boost is 0.5 for flex-eligible positions while a FLEX slot is open.
    ``roster`` is accepted for symmetry with the other calculators; every
    roster-dependent term arrives through ``needs``.

    Pass ``available_counts`` when scoring a whole pool to avoid recounting.
    """
    if available_counts is None:
        available_counts = available_count_by_position(pool)
    available_at_pos = available_counts.get(player.position, 0)

    need = needs.get(player.position)
    need_weight = NEED_WEIGHT_OPEN if need is not None and need > 0 else NEED_WEIGHT_FILLED
    scarcity = 1 / (1 + available_at_pos)
    flex_boost = FLEX_BOOST if (player.position in flex_eligible and needs.flex > 0) else 0.0

    return player.value + scarcity_weight * need_weight * (scarcity + flex_boost * FLEX_BOOST_SCALE)


def score_pool(
    pool: list[Player],
    roster: RosterShape,
    scarcity_weight: float = assistant_config.default_scarcity_weight,
    flex_eligible=DEFAULT_FLEX_ELIGIBLE,
) -> dict[str, float]:
    """Score every available player against one need vector. Keyed by player id."""
    _, needs = compute_roster_needs(pool, roster, flex_eligible)
    counts = available_count_by_position(pool)
    return {
        p.id: score_available(p, pool, roster, needs, scarcity_weight, flex_eligible, counts)
        for p in pool
        if p.is_available
    }


def pool_value_by_position(pool: list[Player]) -> list[PositionPoolStat]:
    """Total value and count of available players per fixed position, in display order."""
    stats = {pos: PositionPoolStat(position=pos) for pos in FIXED_POSITIONS}
    for player in pool:
        stat = stats.get(player.position)
        if stat is None or not player.is_available:
            continue
        stat.available += 1
        stat.value += player.value
    return list(stats.values())
