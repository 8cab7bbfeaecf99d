"""DTOs for Ledger app - Data Transfer Objects for cross-app communication."""
from dataclasses import dataclass
from typing import Optional
from uuid import UUID
from datetime import datetime


@dataclass(frozen=True)
class PointsTransactionDTO:
    """Points ledger entry."""
    id: UUID
    transaction_type: str
    amount: int
    balance_after: int
    reference_id: Optional[UUID]
    description: str
    created_at: datetime
