"""
Services for Tasks app.

CRUD is a thin layer with no balance side effects. complete_task() is the
only path that flips a task to done, and it credits the points in the same
transaction.
"""
import logging
from typing import List, Optional
from uuid import UUID

from asgiref.sync import sync_to_async
from django.db import transaction
from django.utils import timezone

from apps.core.decorators import translate_store_errors
from apps.core.dtos import ActionResultDTO
from apps.core.exceptions import InvariantViolation, ResultCode
from apps.identity.dtos import Principal
from apps.ledger.models import PointsTransactionType
from apps.ledger.services import credit_points
from .models import Task
from .dtos import TaskDTO, TaskIn, TaskUpdate

logger = logging.getLogger(__name__)


def _to_dto(task: Task) -> TaskDTO:
    return TaskDTO(
        id=task.id,
        title=task.title,
        points=task.points,
        importance=str(task.importance),
        done=task.done,
        completed_at=task.completed_at,
    )


# =============================================================================
# CRUD
# =============================================================================

async def get_task_dto(task_id: UUID) -> Optional[TaskDTO]:
    task = await Task.objects.filter(id=task_id).afirst()
    return _to_dto(task) if task else None


async def list_tasks() -> List[TaskDTO]:
    return [_to_dto(task) async for task in Task.objects.all()]


async def create_task(payload: TaskIn) -> TaskDTO:
    task = await Task.objects.acreate(**payload.model_dump())
    return _to_dto(task)


async def update_task(task_id: UUID, payload: TaskUpdate) -> Optional[TaskDTO]:
    """
    Apply a partial edit. Fields left as None are untouched.

    Written as a column-restricted UPDATE so an edit racing a completion
    can never reset the done flag.
    """
    changes = {key: value for key, value in payload.model_dump().items() if value is not None}
    changes['updated_at'] = timezone.now()

    updated = await Task.objects.filter(id=task_id).aupdate(**changes)
    if not updated:
        return None
    return await get_task_dto(task_id)


async def delete_task(task_id: UUID) -> bool:
    deleted, _ = await Task.objects.filter(id=task_id).adelete()
    return deleted > 0


# =============================================================================
# Completion
# =============================================================================

@translate_store_errors
async def complete_task(task_id: UUID, principal: Principal) -> ActionResultDTO:
    """
    Mark a task done and credit its points to the caller, exactly once.

    Returns a negative result (not an error) when the task does not exist
    or is already done.

    Raises:
        InvariantViolation: the principal has no backing user record. The
            done transition is rolled back with it.
    """
    task = await Task.objects.filter(id=task_id).afirst()
    if task is None:
        return ActionResultDTO(success=False, message="Task not found", code=ResultCode.NOT_FOUND)

    return await sync_to_async(_complete_and_credit)(task.id, principal.user_id)


def _complete_and_credit(task_id: UUID, user_id: UUID) -> ActionResultDTO:
    with transaction.atomic():
        now = timezone.now()
        claimed = Task.objects.filter(id=task_id, done=False).update(
            done=True,
            completed_by_id=user_id,
            completed_at=now,
            updated_at=now,
        )
        if not claimed:
            if not Task.objects.filter(id=task_id).exists():
                return ActionResultDTO(success=False, message="Task not found", code=ResultCode.NOT_FOUND)
            return ActionResultDTO(
                success=False,
                message="Task already completed",
                code=ResultCode.ALREADY_COMPLETED,
            )

        # Row is locked by the claim until commit
        title, points = Task.objects.values_list('title', 'points').get(id=task_id)

        entry = credit_points(
            user_id,
            points,
            reference_id=task_id,
            description=f"Completed task: {title}"[:255],
            transaction_type=PointsTransactionType.TASK_COMPLETION,
        )
        if entry is None:
            raise InvariantViolation(f"Principal {user_id} has no user record")

    logger.info(f"User {user_id} completed task {task_id} (+{points}, balance {entry.balance_after})")
    return ActionResultDTO(
        success=True,
        message=f"Task completed, {points} points earned",
        balance=entry.balance_after,
    )
