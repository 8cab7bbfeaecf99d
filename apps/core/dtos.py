"""DTOs shared across apps."""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ActionResultDTO:
    """
    Outcome of a points-affecting action.

    A negative outcome (not found, insufficient balance, already completed)
    is success=False with a code; it is not an error.
    """
    success: bool
    message: str
    code: Optional[str] = None
    balance: Optional[int] = None
