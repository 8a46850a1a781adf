"""Error-mapping middlewares for todo routes.

Two middlewares sit at the top of every todo route's chain:

- report_unhandled(reporter, environment): outermost. Catches anything
  the inner chain did not turn into a response, forwards it to the error
  reporter with request context, and returns a generic 500.
- map_service_errors: converts TodoServiceError and FastAPI's own request
  validation errors into client-error JSON responses keyed by ErrorKind.
"""

import json
import logging
from collections.abc import Callable
from http import HTTPStatus
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException
from starlette.responses import JSONResponse, Response

from todo_service.exceptions import (
    ErrorKind,
    TodoServiceError,
    ValidationFailureError,
)
from todo_service.reporting import ErrorReporter

logger = logging.getLogger(__name__)

INTERNAL_ERROR_BODY: dict[str, Any] = {
    "statusCode": 500,
    "message": "Internal server error",
    "error": "Internal Server Error",
}


def error_body(exc: TodoServiceError) -> dict[str, Any]:
    """Build the JSON body for an expected service error."""
    status = exc.status_code
    body: dict[str, Any] = {
        "statusCode": status,
        "error": HTTPStatus(status).phrase,
        "kind": exc.kind.value,
        "message": str(exc),
    }
    if isinstance(exc, ValidationFailureError):
        body["violations"] = exc.violations
    return body


async def map_service_errors(
    request: Request,
    call_next: Callable[..., Any],
) -> Response:
    """Translate expected errors into 400/404 responses."""
    try:
        return await call_next(request)
    except RequestValidationError as exc:
        # Raised by FastAPI itself, e.g. for a body that is not valid JSON
        error: TodoServiceError = ValidationFailureError(
            "Malformed request",
            violations=[
                {"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")}
                for e in exc.errors()
            ],
        )
    except TodoServiceError as exc:
        error = exc

    logger.info(
        "Rejected request",
        extra={
            "method": request.method,
            "path": request.url.path,
            "kind": error.kind.value,
            "status_code": error.status_code,
        },
    )
    return JSONResponse(error_body(error), status_code=error.status_code)


def report_unhandled(
    reporter: ErrorReporter,
    *,
    environment: str,
) -> Callable[..., Any]:
    """Create the catch-all middleware bound to a reporter.

    Args:
        reporter: Sink receiving the exception and its request context.
        environment: Deployment label added to the report tags.

    Returns:
        An async middleware returning a generic 500 for unhandled errors.
        HTTPException passes through untouched.
    """

    async def middleware(request: Request, call_next: Callable[..., Any]) -> Response:
        try:
            return await call_next(request)
        except HTTPException:
            raise
        except Exception as exc:
            tags = {
                "path": request.url.path,
                "method": request.method,
                "environment": environment,
                "error_kind": ErrorKind.UNHANDLED.value,
            }
            extra = {
                "body": await _read_body(request),
                "query": dict(request.query_params),
                "params": dict(request.path_params),
            }
            try:
                reporter.capture_exception(exc, tags=tags, extra=extra)
            except Exception:
                logger.exception(
                    "Error reporter failed",
                    extra={"reporter": type(reporter).__name__},
                )
            return JSONResponse(INTERNAL_ERROR_BODY, status_code=500)

    middleware.__name__ = "report_unhandled"
    return middleware


async def _read_body(request: Request) -> Any:
    """Return the request body as JSON if possible, else as text."""
    try:
        raw = await request.body()
    except RuntimeError:
        # Stream already consumed without being cached
        return None
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return raw.decode("utf-8", errors="replace")
