"""Path parameter parser for todo identifiers.

Converts the raw string captured from ``/todos/{todo_id}`` into an int:
- "42" -> 42
- "-1" -> -1 (range is checked by the store)
- "abc", "1.5", "", " 7", "1\\n" -> InvalidIdentifierError
"""

import re

from todo_service.exceptions import InvalidIdentifierError

_IDENTIFIER_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_identifier(raw: str) -> int:
    """Parse a path parameter string into an integer identifier.

    Only the shape is checked here. Non-positive values parse successfully
    and are rejected by the store with the same error kind, so every
    malformed or out-of-range identifier surfaces as INVALID_IDENTIFIER.

    Args:
        raw: The path parameter exactly as received.

    Returns:
        The parsed integer.

    Raises:
        InvalidIdentifierError: If raw is not an optionally signed run of
            ASCII digits.
    """
    if not _IDENTIFIER_PATTERN.fullmatch(raw):
        raise InvalidIdentifierError(f"Invalid todo ID: {raw!r}")
    return int(raw)
