"""
Core services for Ledger app.

The points balance lives on identity.User. Every change goes through
credit_points() / debit_points(), which apply a single conditional UPDATE
and record a PointsTransaction in the same database transaction. Callers
that combine a balance change with other writes wrap everything in their
own transaction.atomic() block; these functions then join it.
"""
from typing import List, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from apps.identity.models import User
from .models import PointsTransaction, PointsTransactionType
from .dtos import PointsTransactionDTO


# =============================================================================
# Balance Mutations
# =============================================================================

def credit_points(
    user_id: UUID,
    amount: int,
    reference_id: Optional[UUID] = None,
    description: str = "",
    transaction_type: str = PointsTransactionType.TASK_COMPLETION,
) -> Optional[PointsTransaction]:
    """
    Add points to a user's balance.

    Returns None if the user does not exist.
    """
    if amount < 0:
        raise ValueError("Credit amount must not be negative")

    with transaction.atomic():
        updated = User.objects.filter(id=user_id).update(
            points=F('points') + amount,
            updated_at=timezone.now(),
        )
        if not updated:
            return None

        return _record(user_id, transaction_type, amount, reference_id, description)


def debit_points(
    user_id: UUID,
    amount: int,
    reference_id: Optional[UUID] = None,
    description: str = "",
    transaction_type: str = PointsTransactionType.REWARD_PURCHASE,
) -> Optional[PointsTransaction]:
    """
    Deduct points from a user's balance.

    The balance check and the deduction are one statement, so two
    concurrent debits can never both pass the check against the same
    balance.

    Returns None if the user does not exist or the balance is insufficient.
    """
    if amount < 0:
        raise ValueError("Debit amount must not be negative")

    with transaction.atomic():
        updated = User.objects.filter(id=user_id, points__gte=amount).update(
            points=F('points') - amount,
            updated_at=timezone.now(),
        )
        if not updated:
            return None

        return _record(user_id, transaction_type, -amount, reference_id, description)


def _record(
    user_id: UUID,
    transaction_type: str,
    amount: int,
    reference_id: Optional[UUID],
    description: str,
) -> PointsTransaction:
    # The row is locked by the preceding UPDATE until commit
    balance = User.objects.values_list('points', flat=True).get(id=user_id)
    return PointsTransaction.objects.create(
        user_id=user_id,
        transaction_type=transaction_type,
        amount=amount,
        balance_after=balance,
        reference_id=reference_id,
        description=description,
    )


# =============================================================================
# Queries
# =============================================================================

def get_balance(user_id: UUID) -> Optional[int]:
    """Get the current points balance, or None for an unknown user."""
    return User.objects.filter(id=user_id).values_list('points', flat=True).first()


async def get_points_history(user_id: UUID, limit: int = 50) -> List[PointsTransactionDTO]:
    """Get points transaction history for a user, newest first."""
    entries = PointsTransaction.objects.filter(user_id=user_id).order_by('-created_at')[:limit]
    return [
        PointsTransactionDTO(
            id=entry.id,
            transaction_type=entry.transaction_type,
            amount=entry.amount,
            balance_after=entry.balance_after,
            reference_id=entry.reference_id,
            description=entry.description,
            created_at=entry.created_at,
        )
        async for entry in entries
    ]
