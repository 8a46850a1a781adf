"""FastAPI boundary layer for the todo store."""

from todo_service.fastapi.app import create_app
from todo_service.fastapi.router import create_todo_router

__all__ = ["create_app", "create_todo_router"]
