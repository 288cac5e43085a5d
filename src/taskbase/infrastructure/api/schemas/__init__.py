"""API Schemas for request/response validation."""

from taskbase.infrastructure.api.schemas.auth_schemas import (
    AuthResponse,
    ErrorResponse,
    LoginRequest,
    LogoutResponse,
    RegisterRequest,
    UserResponse,
    ValidationErrorDetail,
    ValidationErrorResponse,
)
from taskbase.infrastructure.api.schemas.todo_schemas import (
    CreateTodoRequest,
    TodoListResponse,
    TodoResponse,
    UpdateTodoRequest,
)

__all__ = [
    "AuthResponse",
    "CreateTodoRequest",
    "ErrorResponse",
    "LoginRequest",
    "LogoutResponse",
    "RegisterRequest",
    "TodoListResponse",
    "TodoResponse",
    "UpdateTodoRequest",
    "UserResponse",
    "ValidationErrorDetail",
    "ValidationErrorResponse",
]
