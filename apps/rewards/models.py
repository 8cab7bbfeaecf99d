import uuid
from django.db import models


class Reward(models.Model):
    """
    Something a user can buy with points.
    Buying does not change the reward; it only debits the buyer.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    points = models.PositiveIntegerField(default=0, help_text="Cost in points")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['points', 'title']

    def __str__(self):
        return f"{self.title} ({self.points} pts)"
