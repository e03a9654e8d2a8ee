from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from ..repositories import Repository, get_repository
from ..schemas import ErrorOut, MessageOut, TaskCreate, TaskOut, TaskUpdate

router = APIRouter(
    prefix="/api/tasks",
    tags=["tasks"],
)

TASK_NOT_FOUND = "Task not found"

_not_found = {404: {"model": ErrorOut, "description": "Task not found"}}
_server_error = {500: {"model": ErrorOut, "description": "Database error"}}


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TaskOut],
    summary="List Tasks",
    description="Return every task, newest first.",
    responses={**_server_error},
)
async def list_tasks(repo: Repository = Depends(get_repository)) -> List[TaskOut]:
    """
    List all tasks ordered by creation time, most recent first.
    """
    items = await repo.list()
    return [TaskOut(**it) for it in items]


# PUBLIC_INTERFACE
@router.get(
    "/{task_id}",
    response_model=TaskOut,
    summary="Get Task",
    description="Get a single task by ID.",
    responses={**_not_found, **_server_error},
)
async def get_task(task_id: int, repo: Repository = Depends(get_repository)) -> TaskOut:
    item = await repo.get(task_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TASK_NOT_FOUND)
    return TaskOut(**item)


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TaskOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Task",
    description="Create a task from a title and optional description.",
    responses={
        400: {"model": ErrorOut, "description": "Title is required"},
        **_server_error,
    },
)
async def create_task(
    payload: Optional[TaskCreate] = None,
    repo: Repository = Depends(get_repository),
) -> TaskOut:
    """
    Create a new task. A missing or empty title is rejected before the
    database is touched.
    """
    payload = payload or TaskCreate()
    if not payload.title:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Title is required")
    created = await repo.create(payload.title, payload.description or None)
    return TaskOut(**created)


# PUBLIC_INTERFACE
@router.put(
    "/{task_id}",
    response_model=TaskOut,
    summary="Update Task",
    description=(
        "Partially update a task. Omitted fields keep their value; empty title or "
        "description values are ignored, while an explicit completed=false is applied. "
        "updated_at is always refreshed."
    ),
    responses={**_not_found, **_server_error},
)
async def update_task(
    task_id: int,
    payload: Optional[TaskUpdate] = None,
    repo: Repository = Depends(get_repository),
) -> TaskOut:
    changes = (payload or TaskUpdate()).to_changes()
    updated = await repo.update(task_id, changes)
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TASK_NOT_FOUND)
    return TaskOut(**updated)


# PUBLIC_INTERFACE
@router.delete(
    "/{task_id}",
    response_model=MessageOut,
    summary="Delete Task",
    description="Delete a task by ID.",
    responses={**_not_found, **_server_error},
)
async def delete_task(task_id: int, repo: Repository = Depends(get_repository)) -> MessageOut:
    """
    Delete a task. Returns a confirmation message, not the deleted row.
    """
    deleted = await repo.delete(task_id)
    if deleted is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TASK_NOT_FOUND)
    return MessageOut(message="Task deleted successfully")
