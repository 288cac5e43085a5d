"""API Routes for TaskBase."""

from taskbase.infrastructure.api.routes.auth_router import router as auth_router
from taskbase.infrastructure.api.routes.todos_router import router as todos_router

__all__ = ["auth_router", "todos_router"]
