"""Pydantic schemas for todo endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field


class CreateTodoRequest(BaseModel):
    """Request body for creating a todo."""

    title: str = Field(..., min_length=1, max_length=255, description="Todo title")
    description: str = Field(default="", description="Todo description")


class UpdateTodoRequest(BaseModel):
    """Request body for updating a todo. Omitted fields are unchanged."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    is_completed: bool | None = None


class TodoResponse(BaseModel):
    """A single todo."""

    id: int
    title: str
    description: str
    is_completed: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TodoListResponse(BaseModel):
    """List of the caller's todos."""

    todos: list[TodoResponse]
    total: int
