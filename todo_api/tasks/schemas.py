"""
Todo API - Task Schemas

Pydantic models for task API requests and responses.
Fields travel as camelCase on the wire (dueDate, ownerId, createdAt...);
requests also accept the snake_case names.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from todo_api.tasks.models import Task


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskCreateRequest(CamelModel):
    """Request model for creating a task."""

    title: str = Field(description="Task title")
    description: Optional[str] = Field(default=None, description="Task description")
    due_date: Optional[date] = Field(default=None, description="Due date (YYYY-MM-DD)")


class TaskUpdateRequest(CamelModel):
    """
    Request model for updating a task.

    Only fields present in the body are applied. An explicit null clears
    description or dueDate.
    """

    title: Optional[str] = Field(default=None, description="Task title")
    description: Optional[str] = Field(default=None, description="Task description")
    due_date: Optional[date] = Field(default=None, description="Due date (YYYY-MM-DD)")
    completed: Optional[bool] = Field(default=None, description="Completion flag")


class TaskResponse(CamelModel):
    """Response model for a single task."""

    id: str = Field(description="Task ID")
    owner_id: str = Field(description="Owner user ID")
    title: str = Field(description="Task title")
    description: Optional[str] = Field(default=None, description="Task description")
    due_date: Optional[date] = Field(default=None, description="Due date")
    completed: bool = Field(description="Completion flag")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id,
            owner_id=task.owner_id,
            title=task.title,
            description=task.description,
            due_date=task.due_date,
            completed=task.completed,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )
