from __future__ import annotations

from datetime import datetime
from typing import Optional, TypedDict


# PUBLIC_INTERFACE
class TaskEntity(TypedDict):
    """
    A row of the ``tasks`` table as returned by the store.

    Fields:
    - id: Unique integer identifier assigned by the database
    - title: Short title (never null)
    - description: Optional detailed description
    - completed: Boolean completion flag, false on insert
    - created_at: Insertion timestamp, never changes
    - updated_at: Last update timestamp, refreshed by every update
    """

    id: int
    title: str
    description: Optional[str]
    completed: bool
    created_at: datetime
    updated_at: datetime
