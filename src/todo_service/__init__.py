"""In-memory todo list service built on FastAPI."""

# Primary API: the main entry points
# Core types: for embedding the store or type checking
from todo_service.core.models import Todo
from todo_service.core.schemas import CreateTodo, UpdateTodo, validate_body
from todo_service.core.store import TodoStore

# Exceptions: for error handling
from todo_service.exceptions import (
    EmptyPatchError,
    ErrorKind,
    InvalidIdentifierError,
    TodoNotFoundError,
    TodoServiceError,
    ValidationFailureError,
)
from todo_service.fastapi.app import create_app
from todo_service.fastapi.router import create_todo_router
from todo_service.reporting import ErrorReporter, LoggingErrorReporter

__all__ = [
    # Primary API
    "create_app",
    "create_todo_router",
    "TodoStore",
    # Core types
    "CreateTodo",
    "Todo",
    "UpdateTodo",
    "validate_body",
    # Error reporting
    "ErrorReporter",
    "LoggingErrorReporter",
    # Exceptions
    "EmptyPatchError",
    "ErrorKind",
    "InvalidIdentifierError",
    "TodoNotFoundError",
    "TodoServiceError",
    "ValidationFailureError",
]

__version__ = "1.0.0"
