"""DTOs for Rewards app."""
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from ninja import Field, Schema


@dataclass(frozen=True)
class RewardDTO:
    id: UUID
    title: str
    points: int


class RewardIn(Schema):
    title: str = Field(..., min_length=1, max_length=255)
    points: int = Field(0, ge=0)


class RewardUpdate(Schema):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    points: Optional[int] = Field(None, ge=0)
