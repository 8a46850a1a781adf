"""Todo record type and its JSON wire representation."""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000


@dataclass
class Todo:
    """A single task record owned by a TodoStore.

    Attributes:
        id: Store-assigned positive identifier, never reused.
        title: Non-empty title, at most TITLE_MAX_LENGTH characters.
        description: Optional free text, at most DESCRIPTION_MAX_LENGTH characters.
        completed: Whether the task is done.
        archived: Whether the task has been archived.
        created_at: Creation time, never changed afterwards.
        updated_at: Time of the last successful mutation.
    """

    id: int
    title: str
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    completed: bool = False
    archived: bool = False

    def copy(self) -> "Todo":
        """Return a detached copy so callers cannot mutate store state."""
        return replace(self)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase JSON shape returned by the API.

        ``description`` is omitted when it was never set.
        """
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
        }
        if self.description is not None:
            data["description"] = self.description
        data.update(
            {
                "completed": self.completed,
                "isArchived": self.archived,
                "createdAt": format_timestamp(self.created_at),
                "updatedAt": format_timestamp(self.updated_at),
            }
        )
        return data


def format_timestamp(value: datetime) -> str:
    """Format a UTC datetime as ISO-8601 with milliseconds and a Z suffix.

    Examples:
        2024-05-01 12:00:00.123456+00:00 -> "2024-05-01T12:00:00.123Z"
    """
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")
