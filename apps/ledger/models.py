import uuid
from django.db import models


class PointsTransactionType(models.TextChoices):
    """Types of points balance changes."""
    TASK_COMPLETION = 'TASK_COMPLETION', 'Task Completion'
    REWARD_PURCHASE = 'REWARD_PURCHASE', 'Reward Purchase'


class PointsTransaction(models.Model):
    """
    Points ledger for audit trail.
    Records every change to a user's points balance, written in the same
    database transaction as the balance change itself.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.UUIDField(db_index=True)  # Identity User reference

    transaction_type = models.CharField(
        max_length=20,
        choices=PointsTransactionType.choices
    )
    amount = models.IntegerField(
        help_text="Positive for credits, negative for debits"
    )
    balance_after = models.PositiveIntegerField(
        help_text="Points balance after this transaction"
    )
    reference_id = models.UUIDField(
        null=True,
        blank=True,
        db_index=True,
        help_text="Task or reward that caused the change"
    )

    description = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Points Transaction"
        verbose_name_plural = "Points Transactions"

    def __str__(self):
        sign = "+" if self.amount > 0 else ""
        return f"{sign}{self.amount} ({self.transaction_type})"
