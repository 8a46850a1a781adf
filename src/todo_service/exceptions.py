"""Exception hierarchy for todo service errors."""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Discriminated error kinds raised by the store and boundary layer.

    Each kind maps to exactly one HTTP status code, so callers branch on
    the kind rather than on exception messages.
    """

    INVALID_IDENTIFIER = "invalid_identifier"
    NOT_FOUND = "not_found"
    EMPTY_PATCH = "empty_patch"
    VALIDATION_FAILURE = "validation_failure"
    UNHANDLED = "unhandled"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.INVALID_IDENTIFIER: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.EMPTY_PATCH: 400,
    ErrorKind.VALIDATION_FAILURE: 400,
    ErrorKind.UNHANDLED: 500,
}


class TodoServiceError(Exception):
    """Base exception for all expected todo service errors.

    Catching this exception will catch every error the store or the
    request validation step raises on purpose. Anything else reaching the
    boundary layer is treated as an unhandled failure.

    Example:
        try:
            store.get(todo_id)
        except TodoServiceError as e:
            logger.info(f"Rejected request: {e.kind.value}")
    """

    kind: ErrorKind = ErrorKind.UNHANDLED

    @property
    def status_code(self) -> int:
        return self.kind.status_code


class InvalidIdentifierError(TodoServiceError):
    """Raised when a todo identifier is malformed or not positive.

    Both the path parameter parser and the store raise this error, so
    "abc", "0" and "-1" are all rejected with the same kind.

    Example:
        InvalidIdentifierError("Invalid todo ID: 'abc'")
    """

    kind = ErrorKind.INVALID_IDENTIFIER


class TodoNotFoundError(TodoServiceError):
    """Raised when a well-formed identifier matches no record.

    Example:
        TodoNotFoundError("Todo with ID 999 not found")
    """

    kind = ErrorKind.NOT_FOUND


class EmptyPatchError(TodoServiceError):
    """Raised when an update carries none of the mutable fields.

    Example:
        EmptyPatchError("At least one field must be provided for update")
    """

    kind = ErrorKind.EMPTY_PATCH


class ValidationFailureError(TodoServiceError):
    """Raised when a request body fails type, length or required checks.

    Attributes:
        violations: Structured list of violations, one dict per failed
            constraint with ``loc``, ``msg`` and ``type`` keys.

    Example:
        ValidationFailureError(
            "Request body failed validation",
            violations=[{"loc": ["title"], "msg": "Field required", "type": "missing"}],
        )
    """

    kind = ErrorKind.VALIDATION_FAILURE

    def __init__(self, message: str, *, violations: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.violations = violations or []
