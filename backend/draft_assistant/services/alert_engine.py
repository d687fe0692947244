"""Bye-week stacking alerts for the user's claimed players."""

from __future__ import annotations

from ..models.draft import ByeConflict
from ..models.player import Player


def find_bye_conflicts(pool: list[Player]) -> list[ByeConflict]:
    """Flag positions where two or more claimed players share a bye week.

    Counts every claimed player at the position, not just current starters,
    so alerts do not depend on the roster shape. Players without a bye week
    are skipped. Sorted by bye week, then position.
    """
    counts: dict[tuple[str, int], int] = {}
    for player in pool:
        if not player.is_claimed or player.bye_week is None:
            continue
        key = (player.position, player.bye_week)
        counts[key] = counts.get(key, 0) + 1

    conflicts = [
        ByeConflict(position=pos, bye_week=bye, count=count)
        for (pos, bye), count in counts.items()
        if count >= 2
    ]
    conflicts.sort(key=lambda c: (c.bye_week, c.position))
    return conflicts


def describe_conflict(conflict: ByeConflict) -> str:
    return f"{conflict.position} has {conflict.count} starters on bye in week {conflict.bye_week}"


def get_bye_alerts(pool: list[Player]) -> list[dict]:
    """Conflicts as {position, byeWeek, count, message} dicts for display."""
    return [
        {
            **c.model_dump(by_alias=True),
            "message": describe_conflict(c),
        }
        for c in find_bye_conflicts(pool)
    ]
