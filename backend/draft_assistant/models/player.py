"""Player and PlayerStatus models."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator


class PlayerStatus(str, Enum):
    AVAILABLE = "available"
    DRAFTED_BY_OTHER = "draftedByOther"
    CLAIMED_BY_USER = "claimedByUser"


# Status strings written by older saved sessions
_LEGACY_STATUS = {
    "drafted": PlayerStatus.DRAFTED_BY_OTHER,
    "claimed": PlayerStatus.CLAIMED_BY_USER,
}


class Player(BaseModel):
    id: str
    name: str
    position: str = Field(validation_alias=AliasChoices("position", "pos"))
    team: str = ""
    bye_week: Optional[int] = Field(
        None, gt=0,
        validation_alias=AliasChoices("byeWeek", "bye_week", "bye"),
        serialization_alias="byeWeek",
    )
    value: float = Field(0.0, ge=0)
    adp: Optional[float] = None
    injury_note: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("injuryNote", "injury_note", "injury"),
        serialization_alias="injuryNote",
    )

    # Draft state
    status: PlayerStatus = PlayerStatus.AVAILABLE

    model_config = {"populate_by_name": True}

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, v):
        if isinstance(v, str) and v in _LEGACY_STATUS:
            return _LEGACY_STATUS[v]
        return v

    @field_validator("bye_week", mode="before")
    @classmethod
    def _blank_bye(cls, v):
        # 0 and "" both mean "no bye scheduled"
        if v in ("", 0, None):
            return None
        return v

    @property
    def is_available(self) -> bool:
        return self.status == PlayerStatus.AVAILABLE

    @property
    def is_claimed(self) -> bool:
        return self.status == PlayerStatus.CLAIMED_BY_USER

    @property
    def is_drafted(self) -> bool:
        return self.status == PlayerStatus.DRAFTED_BY_OTHER
