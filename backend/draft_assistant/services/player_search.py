"""Fuzzy player search and the sorted/filtered draft board view."""

from __future__ import annotations

from typing import Optional

from thefuzz import fuzz

from ..config import assistant_config
from ..models.player import Player

# Sort key -> Player attribute
SORT_FIELDS = {
    "value": "value",
    "adp": "adp",
    "name": "name",
    "position": "position",
    "team": "team",
    "byeWeek": "bye_week",
}


def _match_score(query: str, player: Player) -> int:
    """Score the query against a player.

    Names use WRatio so short queries cannot match long names by accident.
    Team codes must match exactly and positions by prefix ("wr", "ds").
    """
    if player.team and query.upper() == player.team:
        return 100
    if player.position and player.position.startswith(query.upper()):
        return 100
    if not player.name:
        return 0
    return fuzz.WRatio(query, player.name)


def search_players(
    pool: list[Player],
    query: Optional[str],
    threshold: int = assistant_config.search_threshold,
) -> list[Player]:
    """Players matching ``query``, best match first.

    Queries shorter than the minimum length return the pool unchanged.
    """
    q = (query or "").strip().lower()
    if len(q) < assistant_config.min_query_length:
        return list(pool)

    scored = [(_match_score(q, p), p) for p in pool]
    matches = [(score, p) for score, p in scored if score >= threshold]
    # sort() is stable, so equal scores keep pool order
    matches.sort(key=lambda x: x[0], reverse=True)
    return [p for _, p in matches]


def sort_players(players: list[Player], sort_key: str = "value", direction: str = "desc") -> list[Player]:
    """Sort by a board column. Missing values (no ADP, no bye) sort lowest."""
    attr = SORT_FIELDS.get(sort_key)
    if attr is None:
        raise ValueError(f"Unknown sort key '{sort_key}'")

    def key(p: Player):
        v = getattr(p, attr)
        if v is None:
            return (0, 0)
        if isinstance(v, str):
            return (1, v.lower())
        return (1, v)

    return sorted(players, key=key, reverse=(direction == "desc"))


def build_board(
    pool: list[Player],
    query: Optional[str] = None,
    sort_key: str = "value",
    direction: str = "desc",
    hide_drafted: bool = True,
    position: Optional[str] = None,
) -> list[Player]:
    """Search, then hide players drafted by others, then sort.

    The user's own claimed players stay visible when drafted players are hidden.
    """
    players = search_players(pool, query)
    if hide_drafted:
        players = [p for p in players if not p.is_drafted]
    if position:
        players = [p for p in players if p.position == position.upper()]
    return sort_players(players, sort_key, direction)
