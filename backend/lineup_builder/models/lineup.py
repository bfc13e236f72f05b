"""Lineup, saved lineup, and payload models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config import builder_config


def empty_slots() -> list:
    return [None] * builder_config.slot_count


class Lineup(BaseModel):
    """The two parallel nine-slot structures for one session."""
    field: list = Field(default_factory=empty_slots)  # position id -> player
    batting: list = Field(default_factory=empty_slots)  # batting order -> player

    def copy_slots(self) -> tuple[list, list]:
        return list(self.field), list(self.batting)


class LineupPayload(BaseModel):
    """Export/import and saved-lineup wire format."""
    name: str = ""
    players: list
    batting_order: list = Field(default_factory=empty_slots, alias="battingOrder")
    chemistry: int = 0
    timestamp: int = 0  # epoch millis

    model_config = ConfigDict(populate_by_name=True)


class SavedLineup(LineupPayload):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class StatusMessage(BaseModel):
    type: str  # success / error
    message: str
    expires_at: float = 0.0


class PlaceRequest(BaseModel):
    player: str = Field(..., min_length=1)
    source_field_slot: Optional[int] = Field(None, ge=0, le=8)
    source_batting_slot: Optional[int] = Field(None, ge=0, le=8)
