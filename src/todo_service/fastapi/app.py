"""Application factory.

Can be run standalone for manual testing:
    uvicorn todo_service.fastapi.app:create_app --factory --reload
"""

import logging

from fastapi import FastAPI

from todo_service.config import Settings, load_settings
from todo_service.core.store import TodoStore
from todo_service.fastapi.router import create_todo_router, error_handling_route
from todo_service.reporting import ErrorReporter, LoggingErrorReporter

logger = logging.getLogger(__name__)

SERVICE_NAME = "todo-service"


def create_app(
    store: TodoStore | None = None,
    *,
    settings: Settings | None = None,
    reporter: ErrorReporter | None = None,
) -> FastAPI:
    """Build a FastAPI instance wired to a todo store.

    Every route, including ``/health`` and routes added later with
    ``app.get(...)`` and friends, runs through the same error handling
    chain, so any unhandled failure reaches the reporter.

    Args:
        store: Store backing the todo routes. A fresh empty store is created
            when omitted; it lives as long as the returned app.
        settings: Service settings. Loaded from the environment when omitted.
        reporter: Sink for unhandled errors. Defaults to LoggingErrorReporter.
            Anything with ``capture_exception(exc, *, tags, extra)`` fits,
            including the ``sentry_sdk`` module itself once the deployment
            has called ``sentry_sdk.init(dsn=..., environment=settings.environment)``.

    Returns:
        The configured FastAPI application. The store is also exposed as
        ``app.state.store``.
    """
    settings = settings or load_settings()
    store = store if store is not None else TodoStore()
    reporter = reporter or LoggingErrorReporter()

    application = FastAPI(title="Todo Service")
    application.state.store = store
    application.state.settings = settings
    application.router.route_class = error_handling_route(
        reporter, environment=settings.environment
    )

    application.include_router(
        create_todo_router(
            store,
            reporter=reporter,
            environment=settings.environment,
        )
    )
    application.add_api_route("/health", health, methods=["GET"], tags=["health"])

    logger.info(
        "Application created",
        extra={"environment": settings.environment, "service": SERVICE_NAME},
    )
    return application


def health() -> dict:
    """Check service health."""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
    }
