"""In-memory todo store.

Owns the ordered collection of records and the identifier counter. The
store is constructed explicitly and handed to the router factory; it keeps
no module-level state, so every test can build a fresh instance.
"""

import logging
import threading
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from todo_service.core.models import Todo
from todo_service.exceptions import (
    EmptyPatchError,
    InvalidIdentifierError,
    TodoNotFoundError,
)

logger = logging.getLogger(__name__)

# Fields an update patch may touch
PATCHABLE_FIELDS: tuple[str, ...] = ("title", "description", "completed")

DELETED_MESSAGE = "Todo item deleted successfully"


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TodoStore:
    """Process-wide collection of todo records.

    Every public method runs under a single re-entrant lock, so identifier
    assignment and read consistency hold when FastAPI runs sync handlers in
    its thread pool.

    Records handed out by :meth:`list`, :meth:`get`, :meth:`update` and
    :meth:`archive` are copies. Mutating them never changes the stored
    record or bypasses the ``updated_at`` bookkeeping.

    Args:
        clock: Callable returning the current time. Defaults to UTC now.

    Example:
        store = TodoStore()
        todo = store.create("Buy milk")
        store.update(todo.id, {"completed": True})
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._lock = threading.RLock()
        self._todos: list[Todo] = []
        self._next_id = 1

    def create(self, title: str, description: str | None = None) -> Todo:
        """Create a record with a fresh identifier and return a copy of it."""
        with self._lock:
            now = self._clock()
            todo = Todo(
                id=self._next_id,
                title=title,
                description=description,
                completed=False,
                archived=False,
                created_at=now,
                updated_at=now,
            )
            self._next_id += 1
            self._todos.append(todo)

        logger.debug("Created todo", extra={"todo_id": todo.id})
        return todo.copy()

    def list(self) -> list[Todo]:
        """Return copies of all records in insertion order."""
        with self._lock:
            return [todo.copy() for todo in self._todos]

    def get(self, todo_id: int) -> Todo:
        """Return a copy of the record with the given identifier.

        Raises:
            InvalidIdentifierError: If todo_id is not a positive integer.
            TodoNotFoundError: If no record has that identifier.
        """
        with self._lock:
            return self._find(todo_id).copy()

    def update(self, todo_id: int, patch: Mapping[str, Any]) -> Todo:
        """Apply the fields present in patch and return the updated record.

        Only ``title``, ``description`` and ``completed`` are recognized.
        Presence of the key decides whether a field is applied, so
        ``{"completed": False}`` and ``{"description": ""}`` are real updates.

        Raises:
            InvalidIdentifierError: If todo_id is not a positive integer.
            TodoNotFoundError: If no record has that identifier.
            EmptyPatchError: If patch contains none of the recognized fields.
        """
        with self._lock:
            todo = self._find(todo_id)

            changes = {name: patch[name] for name in PATCHABLE_FIELDS if name in patch}
            if not changes:
                raise EmptyPatchError("At least one field must be provided for update")

            for name, value in changes.items():
                setattr(todo, name, value)
            todo.updated_at = self._clock()

            logger.debug(
                "Updated todo",
                extra={"todo_id": todo_id, "fields": sorted(changes)},
            )
            return todo.copy()

    def delete(self, todo_id: int) -> dict[str, str]:
        """Remove the record with the given identifier.

        Returns:
            Confirmation payload ``{"message": "Todo item deleted successfully"}``.

        Raises:
            InvalidIdentifierError: If todo_id is not a positive integer.
            TodoNotFoundError: If no record has that identifier.
        """
        with self._lock:
            _check_identifier(todo_id)
            for index, todo in enumerate(self._todos):
                if todo.id == todo_id:
                    del self._todos[index]
                    break
            else:
                raise TodoNotFoundError(f"Todo with ID {todo_id} not found")

        logger.debug("Deleted todo", extra={"todo_id": todo_id})
        return {"message": DELETED_MESSAGE}

    def archive(self, todo_id: int) -> Todo:
        """Mark the record as archived and return a copy of it.

        Raises:
            InvalidIdentifierError: If todo_id is not a positive integer.
            TodoNotFoundError: If no record has that identifier.
        """
        with self._lock:
            todo = self._find(todo_id)
            todo.archived = True
            todo.updated_at = self._clock()

            logger.debug("Archived todo", extra={"todo_id": todo_id})
            return todo.copy()

    def __len__(self) -> int:
        with self._lock:
            return len(self._todos)

    def _find(self, todo_id: int) -> Todo:
        """Return the live record for todo_id. Caller must hold the lock."""
        _check_identifier(todo_id)
        for todo in self._todos:
            if todo.id == todo_id:
                return todo
        raise TodoNotFoundError(f"Todo with ID {todo_id} not found")


def _check_identifier(todo_id: Any) -> None:
    """Reject anything that is not a positive int (bool included)."""
    if isinstance(todo_id, bool) or not isinstance(todo_id, int) or todo_id <= 0:
        raise InvalidIdentifierError(f"Invalid todo ID: {todo_id!r}")
