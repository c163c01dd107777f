"""
Todo API - Task Router

CRUD endpoints for to-do items.
All endpoints require a bearer token and are scoped to its identity.
"""

from typing import Annotated, List

from fastapi import APIRouter, Depends, Response, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from todo_api.auth.dependencies import CurrentIdentity
from todo_api.database import get_database
from todo_api.tasks.repository import TaskRepository, TaskRepositoryInterface
from todo_api.tasks.schemas import TaskCreateRequest, TaskResponse, TaskUpdateRequest
from todo_api.tasks.service import TaskService


router = APIRouter(prefix="/api/todos", tags=["Todos"])


async def get_task_repository(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)]
) -> TaskRepositoryInterface:
    """Dependency to get task repository instance."""
    return TaskRepository(db)


async def get_task_service(
    repository: Annotated[TaskRepositoryInterface, Depends(get_task_repository)]
) -> TaskService:
    """Dependency to get task service instance."""
    return TaskService(repository)


@router.get(
    "",
    response_model=List[TaskResponse],
    summary="List todos",
)
async def list_todos(
    current_user: CurrentIdentity,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> List[TaskResponse]:
    """List the caller's todos ordered by due date, undated ones last."""
    return await service.list_tasks(current_user.id)


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a todo",
)
async def create_todo(
    request: TaskCreateRequest,
    current_user: CurrentIdentity,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """
    Create a new todo for the authenticated user.

    The todo is owned by the caller and starts out not completed.
    """
    return await service.create_task(owner_id=current_user.id, request=request)


@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Get a todo by ID",
)
async def get_todo(
    task_id: str,
    current_user: CurrentIdentity,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """
    Get a specific todo by ID.

    Returns 404 if the todo doesn't exist or belongs to another user.
    """
    return await service.get_task(task_id, current_user.id)


@router.put(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Update a todo",
)
async def update_todo(
    task_id: str,
    request: TaskUpdateRequest,
    current_user: CurrentIdentity,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """
    Update a todo by ID.

    Only provided fields will be updated.
    Returns 404 if the todo doesn't exist or belongs to another user.
    """
    return await service.update_task(task_id, current_user.id, request)


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a todo",
)
async def delete_todo(
    task_id: str,
    current_user: CurrentIdentity,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> Response:
    """
    Delete a todo by ID.

    Returns 404 if the todo doesn't exist or belongs to another user.
    """
    await service.delete_task(task_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
