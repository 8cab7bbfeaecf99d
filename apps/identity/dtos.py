"""DTOs for Identity app."""
from dataclasses import dataclass, field
from typing import Any, Dict
from uuid import UUID


@dataclass(frozen=True)
class UserDTO:
    id: UUID
    email: str
    points: int


@dataclass(frozen=True)
class Principal:
    """
    The resolved caller for one request.

    Built the same way for verified credentials and for the development
    bypass, so handlers never inspect where it came from.
    """
    user_id: UUID
    email: str
    claims: Dict[str, Any] = field(default_factory=dict)
    is_bypass: bool = False
