"""Request body schemas and the explicit validation step.

Bodies are validated once at the boundary, before the store is called.
Unknown fields are rejected and types are checked strictly, so a numeric
title or a "true" string for ``completed`` never reaches the store.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from todo_service.core.models import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH
from todo_service.exceptions import ValidationFailureError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class CreateTodo(BaseModel):
    """Body of ``POST /todos``."""

    model_config = ConfigDict(extra="forbid", strict=True)

    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)


class UpdateTodo(BaseModel):
    """Body of ``PATCH /todos/{todo_id}``.

    Every field is optional. Which fields were actually sent is read from
    ``model_fields_set`` via :meth:`to_patch`, so an explicit ``false`` or
    empty description still counts as present.
    """

    model_config = ConfigDict(extra="forbid", strict=True)

    title: str | None = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    completed: bool | None = None

    @field_validator("title", "completed")
    @classmethod
    def _reject_explicit_null(cls, value: Any) -> Any:
        # Runs only for fields present in the body; absent fields keep the default
        if value is None:
            raise ValueError("Field may be omitted but not null")
        return value

    def to_patch(self) -> dict[str, Any]:
        """Return only the fields present in the request body."""
        return self.model_dump(include=self.model_fields_set)


def validate_body(schema: type[SchemaT], payload: Any) -> SchemaT:
    """Validate a decoded JSON payload against a body schema.

    Args:
        schema: The pydantic model describing the body.
        payload: The decoded JSON value (normally a dict).

    Returns:
        The validated model instance.

    Raises:
        ValidationFailureError: If the payload is not an object or breaks
            any field constraint. ``violations`` lists every failure.
    """
    if not isinstance(payload, dict):
        raise ValidationFailureError(
            "Request body must be a JSON object",
            violations=[
                {
                    "loc": [],
                    "msg": "Input should be a valid object",
                    "type": "model_type",
                }
            ],
        )

    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        violations = [
            {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
            for error in exc.errors()
        ]
        raise ValidationFailureError(
            f"Request body failed validation ({len(violations)} violation(s))",
            violations=violations,
        ) from None
