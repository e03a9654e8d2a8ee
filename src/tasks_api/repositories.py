from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from fastapi import Request

from .db import Database
from .models import TaskEntity

# Bounds of the PostgreSQL INTEGER type backing tasks.id
_ID_MIN = -(2**31)
_ID_MAX = 2**31 - 1


@dataclass(frozen=True)
class TaskChanges:
    """
    Values for a partial update. ``None`` keeps the stored value.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    completed: Optional[bool] = None


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for task storage."""

    @abstractmethod
    async def list(self) -> List[TaskEntity]:
        """Return every task, newest first."""

    @abstractmethod
    async def get(self, task_id: int) -> Optional[TaskEntity]:
        """Return a task by id, or None if not found."""

    @abstractmethod
    async def create(self, title: str, description: Optional[str]) -> TaskEntity:
        """Insert a task and return the stored row."""

    @abstractmethod
    async def update(self, task_id: int, changes: TaskChanges) -> Optional[TaskEntity]:
        """Apply changes and refresh updated_at. Return the updated row or None if not found."""

    @abstractmethod
    async def delete(self, task_id: int) -> Optional[TaskEntity]:
        """Delete a task. Return the deleted row or None if not found."""


def _valid_id(task_id: int) -> bool:
    return _ID_MIN <= task_id <= _ID_MAX


class TaskRepository(Repository):
    """
    PostgreSQL repository. Every method issues exactly one statement with
    bound parameters.
    """

    def __init__(self, database: Database) -> None:
        self._db = database

    async def list(self) -> List[TaskEntity]:
        rows = await self._db.fetch_all("SELECT * FROM tasks ORDER BY created_at DESC, id DESC")
        return rows  # type: ignore[return-value]

    async def get(self, task_id: int) -> Optional[TaskEntity]:
        if not _valid_id(task_id):
            return None
        return await self._db.fetch_one("SELECT * FROM tasks WHERE id = %s", (task_id,))  # type: ignore[return-value]

    async def create(self, title: str, description: Optional[str]) -> TaskEntity:
        row = await self._db.fetch_one(
            "INSERT INTO tasks (title, description) VALUES (%s, %s) RETURNING *",
            (title, description),
        )
        assert row is not None
        return row  # type: ignore[return-value]

    async def update(self, task_id: int, changes: TaskChanges) -> Optional[TaskEntity]:
        if not _valid_id(task_id):
            return None
        return await self._db.fetch_one(  # type: ignore[return-value]
            """
            UPDATE tasks
            SET title = COALESCE(%s, title),
                description = COALESCE(%s, description),
                completed = COALESCE(%s, completed),
                updated_at = CURRENT_TIMESTAMP
            WHERE id = %s
            RETURNING *
            """,
            (changes.title, changes.description, changes.completed, task_id),
        )

    async def delete(self, task_id: int) -> Optional[TaskEntity]:
        if not _valid_id(task_id):
            return None
        return await self._db.fetch_one("DELETE FROM tasks WHERE id = %s RETURNING *", (task_id,))  # type: ignore[return-value]


# PUBLIC_INTERFACE
def get_database(request: Request) -> Database:
    """Return the pool owned by the running application."""
    return request.app.state.database


# PUBLIC_INTERFACE
def get_repository(request: Request) -> Repository:
    """
    FastAPI dependency returning a repository bound to the application's pool.
    """
    return TaskRepository(get_database(request))
