from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool

from .repositories import TaskChanges

# Matches VARCHAR(255) on the tasks.title column
TITLE_MAX_LENGTH = 255


# PUBLIC_INTERFACE
class TaskCreate(BaseModel):
    """
    Body of a create request.

    ``title`` is optional at the schema level so that a missing or empty title
    can be answered with the API's own 400 error rather than a 422.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Buy milk",
                "description": "Two liters, semi-skimmed",
            }
        }
    )

    title: Optional[str] = Field(
        default=None, description="Short title for the task", max_length=TITLE_MAX_LENGTH
    )
    description: Optional[str] = Field(default=None, description="Optional detailed description")


# PUBLIC_INTERFACE
class TaskUpdate(BaseModel):
    """
    Body of an update request. Every field is optional.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Buy oat milk",
                "completed": True,
            }
        }
    )

    title: Optional[str] = Field(
        default=None, description="New title; empty values keep the current title", max_length=TITLE_MAX_LENGTH
    )
    description: Optional[str] = Field(
        default=None, description="New description; empty values keep the current description"
    )
    completed: Optional[StrictBool] = Field(
        default=None, description="New completion flag; false is applied when given explicitly"
    )

    def to_changes(self) -> TaskChanges:
        """
        Normalize the body into the values bound to the UPDATE statement.

        ``title`` and ``description`` are replaced only when truthy, so an empty
        string keeps the stored value. ``completed`` is replaced whenever the key
        was sent, which lets clients reset it to false.
        """
        return TaskChanges(
            title=self.title or None,
            description=self.description or None,
            completed=self.completed if "completed" in self.model_fields_set else None,
        )


# PUBLIC_INTERFACE
class TaskOut(BaseModel):
    """
    Schema returned by the API for a task.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Buy milk",
                "description": None,
                "completed": False,
                "created_at": "2025-01-25T10:15:30.123456",
                "updated_at": "2025-01-25T10:15:30.123456",
            }
        }
    )

    id: int = Field(..., description="Unique identifier of the task")
    title: str = Field(..., description="Short title for the task")
    description: Optional[str] = Field(default=None, description="Optional detailed description")
    completed: bool = Field(..., description="Completion status flag")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")


class ErrorOut(BaseModel):
    """Error body shared by every non-2xx response."""

    error: str = Field(..., description="Human readable error message")


class MessageOut(BaseModel):
    """Confirmation body for operations that do not return a task."""

    message: str = Field(..., description="Human readable confirmation")
