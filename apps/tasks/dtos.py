"""DTOs for Tasks app."""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from ninja import Field, Schema

from .models import Importance


@dataclass(frozen=True)
class TaskDTO:
    id: UUID
    title: str
    points: int
    importance: str
    done: bool
    completed_at: Optional[datetime]


class TaskIn(Schema):
    title: str = Field(..., min_length=1, max_length=255)
    points: int = Field(0, ge=0)
    importance: Importance = Importance.NORMAL


class TaskUpdate(Schema):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    points: Optional[int] = Field(None, ge=0)
    importance: Optional[Importance] = None
