"""
Todo API - Task Service

Business logic for task operations. Every operation takes the owner id of
the authenticated caller; a task owned by someone else is reported exactly
like a task that does not exist.
"""

import logging
from typing import List

from todo_api.errors import NotFound
from todo_api.tasks.models import Task
from todo_api.tasks.repository import TaskRepositoryInterface
from todo_api.tasks.schemas import TaskCreateRequest, TaskUpdateRequest, TaskResponse
from todo_api.tasks.validation import validate_task_fields

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description", "due_date", "completed")


class TaskService:
    """Service layer for task business logic."""

    def __init__(self, repository: TaskRepositoryInterface):
        self.repository = repository

    async def _get_owned(self, task_id: str, owner_id: str) -> Task:
        task = await self.repository.get_by_id(task_id, owner_id)
        if task is None:
            raise NotFound("Task not found")
        return task

    async def create_task(
        self,
        owner_id: str,
        request: TaskCreateRequest,
    ) -> TaskResponse:
        """Create a new task for the owner."""
        validate_task_fields(request.title, request.description)

        task = Task.create(
            owner_id=owner_id,
            title=request.title,
            description=request.description,
            due_date=request.due_date,
        )
        await self.repository.create(task)
        logger.info("Created task %s for owner %s", task.id, owner_id)
        return TaskResponse.from_task(task)

    async def get_task(self, task_id: str, owner_id: str) -> TaskResponse:
        """Get a task by ID, scoped to owner."""
        return TaskResponse.from_task(await self._get_owned(task_id, owner_id))

    async def list_tasks(self, owner_id: str) -> List[TaskResponse]:
        """List the owner's tasks, soonest due date first and undated last."""
        tasks = await self.repository.list_by_owner(owner_id)
        return [TaskResponse.from_task(task) for task in tasks]

    async def update_task(
        self,
        task_id: str,
        owner_id: str,
        request: TaskUpdateRequest,
    ) -> TaskResponse:
        """
        Apply the fields present in the request, scoped to owner.

        The merged record is validated before writing. When nothing would
        change the stored task is returned untouched, so repeating an update
        yields the same record.
        """
        current = await self._get_owned(task_id, owner_id)

        requested = request.model_dump(exclude_unset=True)
        merged = {name: getattr(current, name) for name in UPDATABLE_FIELDS}
        merged.update(requested)
        validate_task_fields(merged["title"], merged["description"], merged["completed"])

        changes = {
            name: value
            for name, value in requested.items()
            if getattr(current, name) != value
        }
        if not changes:
            return TaskResponse.from_task(current)

        task = await self.repository.update(task_id, owner_id, changes)
        if task is None:
            # Deleted between the read and the write
            raise NotFound("Task not found")
        logger.info("Updated task %s fields %s", task_id, sorted(changes))
        return TaskResponse.from_task(task)

    async def delete_task(self, task_id: str, owner_id: str) -> None:
        """Delete a task, scoped to owner."""
        deleted = await self.repository.delete(task_id, owner_id)
        if not deleted:
            raise NotFound("Task not found")
        logger.info("Deleted task %s for owner %s", task_id, owner_id)
