"""Error reporting collaborator for unhandled failures.

The boundary layer hands every unhandled exception to an ``ErrorReporter``
together with request context. The default reporter writes the event to the
log; any telemetry client exposing ``capture_exception`` can be injected
instead.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ErrorEvent:
    """A structured error event.

    Attributes:
        exception: The unhandled exception.
        tags: Low-cardinality labels (path, method, environment).
        extra: Diagnostic payload (body, query, path params).
    """

    exception: BaseException
    tags: dict[str, str] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)


class ErrorReporter(Protocol):
    """Sink accepting unhandled exceptions with request context."""

    def capture_exception(
        self,
        exception: BaseException,
        *,
        tags: dict[str, str],
        extra: dict[str, Any],
    ) -> None: ...


class LoggingErrorReporter:
    """Report errors by logging them at ERROR level with the traceback.

    Args:
        log: Logger to write to. Defaults to this module's logger.
    """

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def capture_exception(
        self,
        exception: BaseException,
        *,
        tags: dict[str, str],
        extra: dict[str, Any],
    ) -> None:
        event = ErrorEvent(exception=exception, tags=dict(tags), extra=dict(extra))
        self._log.error(
            "Unhandled error on %s %s",
            event.tags.get("method", "?"),
            event.tags.get("path", "?"),
            exc_info=(type(exception), exception, exception.__traceback__),
            extra={"tags": event.tags, "context": event.extra},
        )
