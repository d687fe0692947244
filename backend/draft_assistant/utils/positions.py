"""Position constants and flex eligibility for roster slots."""

from __future__ import annotations

# Fixed starter positions, in display order
FIXED_POSITIONS: list[str] = ["QB", "RB", "WR", "TE", "DST", "K"]

# Positions that can fill a FLEX slot by default
DEFAULT_FLEX_ELIGIBLE: frozenset[str] = frozenset({"RB", "WR", "TE"})

# Marker for user-added players without a team
FREE_AGENT = "FA"

# Alternate spellings seen in uploaded files
POSITION_ALIASES: dict[str, str] = {
    "D/ST": "DST",
    "DEF": "DST",
    "PK": "K",
}


def normalize_position(pos_str: str) -> str:
    """Uppercase a position string and map common aliases ('Def' -> 'DST')."""
    if not pos_str:
        return ""
    pos = pos_str.strip().upper()
    return POSITION_ALIASES.get(pos, pos)

