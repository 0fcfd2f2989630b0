"""Pydantic schemas for projects and their schema definitions."""

import re
from datetime import datetime
from enum import StrEnum
from typing import Any
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError

from lightlog.core.constants import FIELD_NAME_PATTERN, MAX_NAME_LENGTH
from lightlog.core.errors import ValidationError


# ============================================================
# Schema Definition
# ============================================================


class FieldType(StrEnum):
    """Types a schema field may declare."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    DATETIME = "datetime"


class FieldDefinition(BaseModel):
    """One field of a project's ``data`` payload contract.

    ``validation`` holds optional type-dependent rules: ``min_length``,
    ``max_length``, ``pattern`` and ``enum`` for strings; ``min`` and
    ``max`` for numbers. Rules that don't apply to the type are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    name: StrictStr = Field(..., pattern=FIELD_NAME_PATTERN)
    type: FieldType
    required: StrictBool
    indexed: StrictBool
    validation: dict[str, Any] | None = None

    @field_validator("validation")
    @classmethod
    def pattern_must_compile(cls, v: dict[str, Any] | None) -> dict[str, Any] | None:
        """Reject regex rules that can't be compiled."""
        if v and isinstance(v.get("pattern"), str):
            try:
                re.compile(v["pattern"])
            except re.error as exc:
                raise ValueError(f"Invalid pattern: {exc}") from exc
        return v


class SchemaDefinition(BaseModel):
    """Ordered field list describing a project's ``data`` payload."""

    fields: list[FieldDefinition]

    @property
    def has_required_fields(self) -> bool:
        """Whether any field is marked required."""
        return any(f.required for f in self.fields)

    def to_storage(self) -> dict[str, Any]:
        """Serialize for the JSON column, preserving field order."""
        return self.model_dump(mode="json", exclude_unset=True)


def format_error_location(loc: tuple[int | str, ...]) -> str:
    """Render a pydantic error location as ``fields[0].name``."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "schema"


def parse_schema_definition(payload: Any) -> SchemaDefinition:
    """Validate the shape of a submitted schema.

    Checks every field definition and collects all problems, reporting
    each by field index, before anything is persisted. Duplicate field
    names are rejected as well.

    Args:
        payload: The decoded ``schema`` object from the request body

    Returns:
        The validated schema definition

    Raises:
        ValidationError: 400 with per-field errors if the shape is invalid
    """
    if payload is None:
        raise ValidationError("Schema is required", status_code=400)
    if not isinstance(payload, dict):
        raise ValidationError("Schema must be an object", status_code=400)
    if not isinstance(payload.get("fields"), list):
        raise ValidationError("Schema must contain a fields array", status_code=400)

    try:
        definition = SchemaDefinition.model_validate(payload)
    except PydanticValidationError as exc:
        errors = [
            {"field": format_error_location(err["loc"]), "error": err["msg"]}
            for err in exc.errors()
        ]
        raise ValidationError(
            "Invalid schema definition", errors=errors, status_code=400
        ) from exc

    seen: set[str] = set()
    duplicates = []
    for index, field in enumerate(definition.fields):
        if field.name in seen:
            duplicates.append(
                {
                    "field": f"fields[{index}].name",
                    "error": f"Duplicate field name '{field.name}'",
                }
            )
        seen.add(field.name)
    if duplicates:
        raise ValidationError(
            "Invalid schema definition", errors=duplicates, status_code=400
        )

    return definition


# ============================================================
# Project Schemas
# ============================================================


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)


class ProjectResponse(BaseModel):
    """Schema for project response data."""

    id: UUID
    name: str
    token: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
