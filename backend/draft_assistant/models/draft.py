"""Draft state, derived roster values, and snapshot models."""

from __future__ import annotations

from typing import Literal, Optional, get_args

from pydantic import AliasChoices, BaseModel, Field, field_validator

from ..config import RosterShape, assistant_config
from .player import Player

SortKey = Literal["value", "adp", "name", "position", "team", "byeWeek"]
SortDirection = Literal["asc", "desc"]

# Sort keys written by older saved sessions
_LEGACY_SORT_KEYS = {"pos": "position", "bye": "byeWeek"}


# ---------------------------------------------------------------------------
# Derived values (recomputed on every change, never persisted)
# ---------------------------------------------------------------------------

class FilledSlots(BaseModel):
    positions: dict[str, int] = {}
    flex: int = 0

    def get(self, position: str) -> int:
        return self.positions.get(position, 0)


class NeedVector(BaseModel):
    positions: dict[str, int] = {}
    flex: int = 0

    def get(self, position: str) -> Optional[int]:
        return self.positions.get(position)

    @property
    def total(self) -> int:
        return self.flex + sum(self.positions.values())

    def as_dict(self) -> dict[str, int]:
        return {**self.positions, "flex": self.flex}


class ByeConflict(BaseModel):
    position: str
    bye_week: int = Field(serialization_alias="byeWeek")
    count: int

    model_config = {"populate_by_name": True}


class Recommendations(BaseModel):
    greedy: Optional[Player] = None
    balanced: Optional[Player] = None
    balanced_score: Optional[float] = None


class PositionPoolStat(BaseModel):
    position: str
    available: int = 0
    value: float = 0.0


# ---------------------------------------------------------------------------
# Application state
# ---------------------------------------------------------------------------

class Preferences(BaseModel):
    sort_key: SortKey = "value"
    sort_direction: SortDirection = "desc"
    hide_drafted: bool = True
    show_bye: bool = True
    scarcity_weight: float = Field(
        assistant_config.default_scarcity_weight,
        ge=assistant_config.min_scarcity_weight,
        le=assistant_config.max_scarcity_weight,
    )


class DraftState(BaseModel):
    players: list[Player] = []
    roster: RosterShape = Field(default_factory=lambda: assistant_config.roster.model_copy())
    preferences: Preferences = Field(default_factory=Preferences)

    def get_player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    @property
    def claimed(self) -> list[Player]:
        return [p for p in self.players if p.is_claimed]


class DraftSnapshot(BaseModel):
    """Exported/imported session. Only ``players`` is required on import."""
    players: list[Player]
    roster_shape: Optional[RosterShape] = Field(
        None,
        validation_alias=AliasChoices("rosterShape", "roster_shape", "roster"),
        serialization_alias="rosterShape",
    )
    sort_key: Optional[SortKey] = Field(
        None,
        validation_alias=AliasChoices("sortKey", "sort_key"),
        serialization_alias="sortKey",
    )
    sort_direction: Optional[SortDirection] = Field(
        None,
        validation_alias=AliasChoices("sortDirection", "sort_direction", "sortDir"),
        serialization_alias="sortDirection",
    )
    hide_drafted: Optional[bool] = Field(
        None,
        validation_alias=AliasChoices("hideDrafted", "hide_drafted"),
        serialization_alias="hideDrafted",
    )
    show_bye: Optional[bool] = Field(
        None,
        validation_alias=AliasChoices("showBye", "show_bye"),
        serialization_alias="showBye",
    )
    scarcity_weight: Optional[float] = Field(
        None, ge=0,
        validation_alias=AliasChoices("scarcityWeight", "scarcity_weight", "scarcityAlpha"),
        serialization_alias="scarcityWeight",
    )
    version: int = assistant_config.snapshot_version

    model_config = {"populate_by_name": True}

    @field_validator("sort_key", mode="before")
    @classmethod
    def _normalize_sort_key(cls, v):
        v = _LEGACY_SORT_KEYS.get(v, v) if isinstance(v, str) else v
        # Unrecognized keys are dropped so the current preference is kept
        if v not in get_args(SortKey):
            return None
        return v
