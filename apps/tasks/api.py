"""
Tasks API endpoints.

CRUD for tasks plus the completion mutation that earns points.
"""
from typing import List
from uuid import UUID
from django.http import HttpRequest
from ninja import Router
from ninja.errors import HttpError

from apps.core.dtos import ActionResultDTO
from .dtos import TaskDTO, TaskIn, TaskUpdate
from .services import list_tasks, create_task, update_task, delete_task, complete_task

router = Router(tags=["Tasks"])


@router.get("", response=List[TaskDTO])
async def get_tasks(request: HttpRequest):
    """List all tasks, open ones first."""
    return await list_tasks()


@router.post("", response=TaskDTO)
async def add_task(request: HttpRequest, payload: TaskIn):
    return await create_task(payload)


@router.patch("/{task_id}", response=TaskDTO)
async def edit_task(request: HttpRequest, task_id: UUID, payload: TaskUpdate):
    """
    Edit title, points or importance. Omitted fields are left unchanged.
    """
    task = await update_task(task_id, payload)
    if task is None:
        raise HttpError(404, "Task not found")
    return task


@router.delete("/{task_id}")
async def remove_task(request: HttpRequest, task_id: UUID):
    if not await delete_task(task_id):
        raise HttpError(404, "Task not found")
    return {"deleted": True}


@router.post("/{task_id}/complete", response=ActionResultDTO)
async def complete_task_api(request: HttpRequest, task_id: UUID):
    """
    Mark a task done and credit its points to the caller.

    Completing an already-done task returns success=false and earns nothing.
    """
    return await complete_task(task_id, request.auth)
