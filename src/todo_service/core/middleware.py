"""Middleware chain primitives for todo routes.

A middleware is an async callable ``(request, call_next) -> response``.
Zero framework dependencies, works with any request/response objects.
"""

from collections.abc import Callable, Sequence
from typing import Any

Middleware = Callable[..., Any]


def normalize_middleware(
    middleware_attr: Any,
    *,
    source: str = "",
) -> tuple[Middleware, ...]:
    """Normalize a middleware argument to a tuple of callables.

    Accepts: None, single callable, list, or tuple.
    Returns: tuple of callables (empty if None).

    Args:
        middleware_attr: The middleware value to normalize.
        source: Context for error messages (e.g., "create_todo_router").

    Raises:
        TypeError: If middleware_attr is not a valid type or contains a
            non-callable entry.
    """
    prefix = f"{source}: " if source else ""

    if middleware_attr is None:
        return ()
    if callable(middleware_attr) and not isinstance(middleware_attr, (list, tuple)):
        return (middleware_attr,)
    if not isinstance(middleware_attr, (list, tuple)):
        raise TypeError(
            f"{prefix}middleware must be a list or callable, "
            f"got {type(middleware_attr).__name__}"
        )

    for i, mw in enumerate(middleware_attr):
        if not callable(mw):
            raise TypeError(f"{prefix}non-callable middleware at index {i}")
    return tuple(middleware_attr)


def build_middleware_chain(
    handler: Callable[..., Any],
    middleware_stack: Sequence[Middleware],
) -> Callable[..., Any]:
    """Wrap a handler function with a middleware chain.

    Composes middleware in order so that the first middleware in the list
    is the outermost (executes first). Each middleware receives (request, call_next)
    where call_next invokes the next middleware or handler.

    Args:
        handler: The route handler function.
        middleware_stack: Ordered sequence of middleware (outermost first).

    Returns:
        A wrapped handler function that executes the middleware chain.
        If middleware_stack is empty, returns the handler unchanged.
    """
    if not middleware_stack:
        return handler

    chain = handler
    for mw in reversed(middleware_stack):
        chain = _wrap_with_middleware(chain, mw)
    return chain


def _wrap_with_middleware(
    next_handler: Callable[..., Any],
    middleware: Middleware,
) -> Callable[..., Any]:
    """Wrap a handler with a single middleware function."""

    async def wrapped(request: Any) -> Any:
        async def call_next(req: Any) -> Any:
            return await next_handler(req)

        return await middleware(request, call_next)

    wrapped.__name__ = (
        f"{getattr(middleware, '__name__', 'middleware')}"
        f"_wrapping_{getattr(next_handler, '__name__', 'handler')}"
    )
    wrapped.__qualname__ = wrapped.__name__

    return wrapped
