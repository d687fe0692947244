"""Next-pick recommendation engine."""

from __future__ import annotations

from typing import Optional

from ..config import RosterShape, assistant_config
from ..models.draft import Recommendations
from ..models.player import Player
from ..utils.positions import DEFAULT_FLEX_ELIGIBLE
from .scarcity_scorer import score_pool


def greedy_pick(pool: list[Player]) -> Optional[Player]:
    """Highest-value available player; the earliest in pool order wins ties."""
    best: Optional[Player] = None
    for player in pool:
        if not player.is_available:
            continue
        if best is None or player.value > best.value:
            best = player
    return best


def _balanced_with_score(
    pool: list[Player],
    roster: RosterShape,
    scarcity_weight: float,
    flex_eligible,
) -> tuple[Optional[Player], Optional[float]]:
    scores = score_pool(pool, roster, scarcity_weight, flex_eligible)

    best: Optional[Player] = None
    best_score: Optional[float] = None
    for player in pool:
        score = scores.get(player.id)
        if score is None:
            continue
        if best_score is None or score > best_score:
            best, best_score = player, score
    return best, best_score


def balanced_pick(
    pool: list[Player],
    roster: RosterShape,
    scarcity_weight: float = assistant_config.default_scarcity_weight,
    flex_eligible=DEFAULT_FLEX_ELIGIBLE,
) -> Optional[Player]:
    """Available player with the highest scarcity-adjusted score, first wins ties."""
    best, _ = _balanced_with_score(pool, roster, scarcity_weight, flex_eligible)
    return best


def get_recommendations(
    pool: list[Player],
    roster: RosterShape,
    scarcity_weight: float = assistant_config.default_scarcity_weight,
    flex_eligible=DEFAULT_FLEX_ELIGIBLE,
) -> Recommendations:
    """Greedy and balanced picks over the full available pool.

    Search filters applied to the board never narrow these; an empty
    available pool yields a Recommendations with both picks unset.
    """
    balanced, score = _balanced_with_score(pool, roster, scarcity_weight, flex_eligible)
    return Recommendations(
        greedy=greedy_pick(pool),
        balanced=balanced,
        balanced_score=round(score, 4) if score is not None else None,
    )
