import uuid
from django.db import models


class User(models.Model):
    """
    A player of the tracker.

    Provisioned lazily on first successful authentication, keyed by the
    email claim of the credential. The points balance is only mutated
    through apps.ledger.services.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    points = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['email']

    def __str__(self):
        return f"{self.email} ({self.points} pts)"
