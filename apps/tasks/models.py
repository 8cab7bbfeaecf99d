import uuid
from django.db import models


class Importance(models.TextChoices):
    LOW = 'low', 'Low'
    NORMAL = 'normal', 'Normal'
    HIGH = 'high', 'High'
    UBER_HIGH = 'uber_high', 'Uber High'


class Task(models.Model):
    """
    A task worth a fixed number of points.

    The done flag only ever moves false -> true, through
    apps.tasks.services.complete_task.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    points = models.PositiveIntegerField(default=0)
    importance = models.CharField(
        max_length=20,
        choices=Importance.choices,
        default=Importance.NORMAL
    )
    done = models.BooleanField(default=False)

    # Set by the completing request
    completed_by_id = models.UUIDField(null=True, blank=True, db_index=True)  # Identity User reference
    completed_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['done', '-created_at']

    def __str__(self):
        return f"{self.title} ({self.points} pts)"
