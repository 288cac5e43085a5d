"""Todo API routes.

All endpoints require a bearer token and operate only on the caller's own
todos; someone else's todo is reported as not found.
"""

from fastapi import APIRouter, status

from taskbase.domain.entities import Todo
from taskbase.infrastructure.api.dependencies import TodoServiceDep
from taskbase.infrastructure.api.schemas import (
    CreateTodoRequest,
    ErrorResponse,
    TodoListResponse,
    TodoResponse,
    UpdateTodoRequest,
)

router = APIRouter()

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Todo not found"}}


def to_response(todo: Todo) -> TodoResponse:
    return TodoResponse.model_validate(todo)


@router.get("", response_model=TodoListResponse)
async def list_todos(todo_service: TodoServiceDep) -> TodoListResponse:
    """List the caller's todos."""
    todos = await todo_service.list_todos()
    return TodoListResponse(todos=[to_response(t) for t in todos], total=len(todos))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=TodoResponse,
    responses={404: {"model": ErrorResponse, "description": "User no longer exists"}},
)
async def create_todo(request: CreateTodoRequest, todo_service: TodoServiceDep) -> TodoResponse:
    """Create a todo."""
    todo = await todo_service.create(request.title, request.description)
    return to_response(todo)


@router.get("/{todo_id}", response_model=TodoResponse, responses=NOT_FOUND)
async def get_todo(todo_id: int, todo_service: TodoServiceDep) -> TodoResponse:
    """Get a single todo."""
    return to_response(await todo_service.get(todo_id))


@router.patch("/{todo_id}", response_model=TodoResponse, responses=NOT_FOUND)
async def update_todo(
    todo_id: int, request: UpdateTodoRequest, todo_service: TodoServiceDep
) -> TodoResponse:
    """Update a todo's title, description or completion state."""
    todo = await todo_service.update(
        todo_id,
        title=request.title,
        description=request.description,
        is_completed=request.is_completed,
    )
    return to_response(todo)


@router.post("/{todo_id}/complete", response_model=TodoResponse, responses=NOT_FOUND)
async def complete_todo(todo_id: int, todo_service: TodoServiceDep) -> TodoResponse:
    """Mark a todo as completed."""
    return to_response(await todo_service.complete(todo_id))


@router.delete("/{todo_id}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND)
async def delete_todo(todo_id: int, todo_service: TodoServiceDep) -> None:
    """Delete a todo."""
    await todo_service.delete(todo_id)
