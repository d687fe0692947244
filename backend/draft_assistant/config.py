"""Roster and assistant configuration for the fantasy draft assistant."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, Field

from .utils.positions import DEFAULT_FLEX_ELIGIBLE, FIXED_POSITIONS


class RosterShape(BaseModel):
    """Starter counts per fixed position plus flex and bench slots.

    Bench is informational only and never enters a computation.
    """
    QB: int = Field(2, ge=0)
    RB: int = Field(2, ge=0)
    WR: int = Field(3, ge=0)
    TE: int = Field(1, ge=0)
    DST: int = Field(1, ge=0)
    K: int = Field(1, ge=0)
    flex_slots: int = Field(
        2, ge=0,
        validation_alias=AliasChoices("flexSlots", "flex_slots", "FLEX"),
        serialization_alias="flexSlots",
    )  # RB/WR/TE
    bench_slots: int = Field(
        6, ge=0,
        validation_alias=AliasChoices("benchSlots", "bench_slots", "BENCH"),
        serialization_alias="benchSlots",
    )

    model_config = {"populate_by_name": True, "extra": "ignore"}

    def required(self, position: str) -> int:
        """Starter count for a fixed position; 0 for anything unrecognized."""
        if position not in FIXED_POSITIONS:
            return 0
        return getattr(self, position)


class AssistantConfig(BaseModel):
    app_name: str = "Fantasy Draft Assistant"

    roster: RosterShape = RosterShape()
    flex_eligible: frozenset[str] = DEFAULT_FLEX_ELIGIBLE

    # Balanced-pick scarcity weight: default and slider range
    default_scarcity_weight: float = 30.0
    min_scarcity_weight: float = 0.0
    max_scarcity_weight: float = 60.0

    # Fuzzy search
    search_threshold: int = 70  # thefuzz partial_ratio, 0-100
    min_query_length: int = 2

    snapshot_version: int = 1
    autosave: bool = True


# Default assistant config singleton
assistant_config = AssistantConfig()
