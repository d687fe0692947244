"""Status partitioning and starter-slot fill counts."""

from __future__ import annotations

from collections.abc import Iterable

from ..config import RosterShape
from ..models.draft import FilledSlots
from ..models.player import Player, PlayerStatus
from ..utils.positions import DEFAULT_FLEX_ELIGIBLE, FIXED_POSITIONS


def partition_by_status(pool: Iterable[Player]) -> dict[PlayerStatus, list[Player]]:
    """Group players by status, keeping pool order within each group."""
    groups: dict[PlayerStatus, list[Player]] = {status: [] for status in PlayerStatus}
    for player in pool:
        groups[player.status].append(player)
    return groups


def available_players(pool: Iterable[Player]) -> list[Player]:
    return [p for p in pool if p.is_available]


def claimed_players(pool: Iterable[Player]) -> list[Player]:
    return [p for p in pool if p.is_claimed]


def compute_filled_slots(
    pool: Iterable[Player],
    roster: RosterShape,
    flex_eligible=DEFAULT_FLEX_ELIGIBLE,
) -> FilledSlots:
    """Count starter slots filled by the user's claimed players.

    Fixed slots are satisfied first, in pool order. A claimed player of a
    flex-eligible position draws from FLEX only once their position's fixed
    requirement is already met by players earlier in the pool. Positions
    outside the fixed set contribute nothing and never consume FLEX.
    """
    claimed = claimed_players(pool)
    fixed = {pos: 0 for pos in FIXED_POSITIONS}
    seen = {pos: 0 for pos in FIXED_POSITIONS}

    flex_filled = 0
    for player in claimed:
        pos = player.position
        if pos not in fixed:
            continue

        required = roster.required(pos)
        seen[pos] += 1
        if seen[pos] <= required:
            fixed[pos] += 1
        elif pos in flex_eligible and flex_filled < roster.flex_slots:
            flex_filled += 1

    return FilledSlots(positions=fixed, flex=flex_filled)
