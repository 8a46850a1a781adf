"""Router factory for the todo endpoints.

Binds an explicitly constructed TodoStore to a FastAPI APIRouter. Each
route runs through the same middleware chain: error reporting, service
error mapping, then any caller-supplied middleware.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any

from fastapi import APIRouter, Body
from fastapi.routing import APIRoute

from todo_service.core.middleware import build_middleware_chain, normalize_middleware
from todo_service.core.parser import parse_identifier
from todo_service.core.schemas import CreateTodo, UpdateTodo, validate_body
from todo_service.core.store import TodoStore
from todo_service.fastapi.errors import map_service_errors, report_unhandled
from todo_service.reporting import ErrorReporter, LoggingErrorReporter

logger = logging.getLogger(__name__)

# Convention-based default status codes by HTTP method
DEFAULT_STATUS_CODES: dict[str, int] = {
    "post": 201,  # Created
}

TAGS = ["todos"]


def create_todo_router(
    store: TodoStore,
    *,
    reporter: ErrorReporter | None = None,
    environment: str = "development",
    prefix: str = "/todos",
    middleware: Any = None,
) -> APIRouter:
    """Create an APIRouter exposing CRUD and archive operations on a store.

    Args:
        store: The store every handler reads and mutates.
        reporter: Sink for unhandled errors. Defaults to LoggingErrorReporter.
        environment: Deployment label attached to error reports.
        prefix: URL prefix for the collection.
        middleware: Optional extra middleware (callable or list), run inside
            the error handling middlewares.

    Returns:
        A FastAPI APIRouter with all todo routes registered.

    Raises:
        TypeError: If middleware is not a callable or a list of callables.

    Example:
        from fastapi import FastAPI

        app = FastAPI()
        app.include_router(create_todo_router(TodoStore()))
    """
    extra_middleware = normalize_middleware(middleware, source="create_todo_router")
    route_class = error_handling_route(
        reporter or LoggingErrorReporter(),
        environment=environment,
        middleware=extra_middleware,
    )

    router = APIRouter(prefix=prefix)
    handlers = _make_handlers(store)

    routes: list[tuple[str, str, Callable[..., Any]]] = [
        ("", "post", handlers["create"]),
        ("", "get", handlers["list"]),
        ("/{todo_id}", "get", handlers["get"]),
        ("/{todo_id}", "patch", handlers["update"]),
        ("/{todo_id}", "delete", handlers["delete"]),
        ("/{todo_id}/archive", "patch", handlers["archive"]),
    ]
    for path, method, handler in routes:
        _add_route(
            router=router,
            path=path,
            method=method,
            handler=handler,
            tags=TAGS,
            status_code=DEFAULT_STATUS_CODES.get(method),
            route_class=route_class,
        )

    logger.info(
        "Route registration complete",
        extra={
            "route_count": len(routes),
            "prefix": prefix or "(none)",
            "extra_middleware_count": len(extra_middleware),
        },
    )

    return router


def error_handling_route(
    reporter: ErrorReporter,
    *,
    environment: str,
    middleware: Sequence[Callable[..., Any]] = (),
) -> type[APIRoute]:
    """Create the APIRoute subclass used by every route of the service.

    The chain is report_unhandled (outermost), map_service_errors, then the
    given middleware. Setting it as ``app.router.route_class`` makes routes
    registered directly on the app report their failures too.

    Args:
        reporter: Sink for unhandled errors.
        environment: Deployment label attached to error reports.
        middleware: Extra middleware run inside the error handling pair.

    Returns:
        A subclass of APIRoute with the middleware chain applied.
    """
    return _make_middleware_route(
        (
            report_unhandled(reporter, environment=environment),
            map_service_errors,
            *middleware,
        )
    )


def _make_handlers(store: TodoStore) -> dict[str, Callable[..., Any]]:
    """Build endpoint functions closed over the store.

    Handlers are plain ``def`` functions; FastAPI runs them in its thread
    pool, which is why the store serializes access with a lock.
    """

    def create_todo(payload: Any = Body(None)) -> dict[str, Any]:
        """Create a todo item."""
        body = validate_body(CreateTodo, payload)
        return store.create(body.title, body.description).to_dict()

    def list_todos() -> list[dict[str, Any]]:
        """List all todo items in creation order."""
        return [todo.to_dict() for todo in store.list()]

    def get_todo(todo_id: str) -> dict[str, Any]:
        """Get a todo item by ID."""
        return store.get(parse_identifier(todo_id)).to_dict()

    def update_todo(todo_id: str, payload: Any = Body(None)) -> dict[str, Any]:
        """Update the title, description or completed flag of a todo item."""
        identifier = parse_identifier(todo_id)
        body = validate_body(UpdateTodo, payload)
        return store.update(identifier, body.to_patch()).to_dict()

    def delete_todo(todo_id: str) -> dict[str, str]:
        """Delete a todo item."""
        return store.delete(parse_identifier(todo_id))

    def archive_todo(todo_id: str) -> dict[str, Any]:
        """Archive a todo item."""
        return store.archive(parse_identifier(todo_id)).to_dict()

    return {
        "create": create_todo,
        "list": list_todos,
        "get": get_todo,
        "update": update_todo,
        "delete": delete_todo,
        "archive": archive_todo,
    }


def _add_route(
    router: APIRouter,
    path: str,
    method: str,
    handler: Callable[..., Any],
    tags: list[str],
    status_code: int | None = None,
    route_class: type[APIRoute] | None = None,
) -> None:
    """Add an HTTP route to the router with metadata.

    Args:
        router: The APIRouter to add the route to.
        path: The URL path for the route, relative to the router prefix.
        method: The HTTP method (lowercase).
        handler: The handler function.
        tags: List of OpenAPI tags.
        status_code: Optional HTTP status code override.
        route_class: Optional custom APIRoute subclass for middleware wrapping.
    """
    kwargs: dict[str, Any] = {
        "tags": tags,
        "description": handler.__doc__,
    }

    if status_code is not None:
        kwargs["status_code"] = status_code

    if route_class is not None:
        kwargs["route_class_override"] = route_class

    router.add_api_route(
        path=path,
        endpoint=handler,
        methods=[method.upper()],
        **kwargs,
    )

    logger.debug(
        "Registered route",
        extra={"method": method.upper(), "path": f"{router.prefix}{path}"},
    )


def _make_middleware_route(
    middleware_stack: Sequence[Callable[..., Any]],
) -> type[APIRoute]:
    """Create a custom APIRoute subclass that wraps handlers with middleware.

    The wrapping happens in get_route_handler(), around the request handler
    FastAPI builds for the endpoint. Errors raised while FastAPI decodes the
    body or resolves parameters therefore pass through the middleware too.

    Args:
        middleware_stack: Ordered sequence of middleware (outermost first).

    Returns:
        A subclass of APIRoute with middleware wrapping.
    """

    class MiddlewareRoute(APIRoute):
        def get_route_handler(self) -> Callable[..., Any]:
            original_handler = super().get_route_handler()
            return build_middleware_chain(original_handler, middleware_stack)

    return MiddlewareRoute
