"""Event validation against the core fields and a project's schema.

Every event must carry ``timestamp``, ``level`` and ``title``. When the
project has a schema with at least one field, the event's ``data`` map is
checked against it field by field. All problems are collected; nothing
short-circuits except a ``data`` value that isn't a map.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from lightlog.core.constants import LOG_LEVELS
from lightlog.modules.projects.schemas import (
    FieldDefinition,
    FieldType,
    SchemaDefinition,
)


TIMESTAMP_PATTERN = re.compile(
    r"^(?P<datetime>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(\.\d+)?"
    r"(?:Z|[+-](?P<offset_hours>\d{2}):(?P<offset_minutes>\d{2}))$"
)

FieldError = dict[str, str]


def is_valid_timestamp(value: Any) -> bool:
    """Check for an RFC 3339 timestamp such as ``2024-01-15T10:30:00Z``.

    An explicit UTC designator or offset is required, and the date and time
    must be real (``2024-02-30`` is rejected).
    """
    if not isinstance(value, str):
        return False
    found = TIMESTAMP_PATTERN.match(value)
    if found is None:
        return False
    try:
        datetime.strptime(found["datetime"], "%Y-%m-%dT%H:%M:%S")
    except ValueError:
        return False
    if found["offset_hours"] is not None:
        return int(found["offset_hours"]) < 24 and int(found["offset_minutes"]) < 60
    return True


def json_type_name(value: Any) -> str:
    """Name a decoded JSON value's type the way error messages report it."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _format_bound(value: int | float) -> str:
    # 5.0 reads as 5 in messages
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _format_enum_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass
class ValidationResult:
    """Outcome of validating one event."""

    errors: list[FieldError] = field(default_factory=list)

    @property
    def accepted(self) -> bool:
        return not self.errors

    def add(self, field_name: str, message: str) -> None:
        self.errors.append({"field": field_name, "error": message})


class EventValidator:
    """Validate log events.

    Stateless; a single instance can be shared across requests.
    """

    def validate(
        self,
        event: dict[str, Any],
        schema: SchemaDefinition | None,
    ) -> ValidationResult:
        """Validate one event.

        Args:
            event: The decoded event object
            schema: The project's schema, or None if it has none

        Returns:
            The result, with errors in check order
        """
        result = ValidationResult()
        self._check_core_fields(event, result)

        if schema is not None and schema.fields:
            self._check_data(event, schema, result)

        return result

    # ============================================================
    # Core fields
    # ============================================================

    def _check_core_fields(self, event: dict[str, Any], result: ValidationResult) -> None:
        timestamp = event.get("timestamp")
        if timestamp is None:
            result.add("timestamp", "Timestamp is required")
        elif not is_valid_timestamp(timestamp):
            result.add("timestamp", "Invalid timestamp format. Use ISO 8601 format")

        level = event.get("level")
        if level is None:
            result.add("level", "Level is required")
        elif level not in LOG_LEVELS:
            result.add(
                "level",
                f"Invalid level. Allowed values: {', '.join(LOG_LEVELS)}",
            )

        title = event.get("title")
        if title is None:
            result.add("title", "Title is required")
        elif not isinstance(title, str) or not title.strip():
            result.add("title", "Title must be a non-empty string")

    # ============================================================
    # Schema-driven data checks
    # ============================================================

    def _check_data(
        self,
        event: dict[str, Any],
        schema: SchemaDefinition,
        result: ValidationResult,
    ) -> None:
        data = event.get("data")
        if data is None:
            if schema.has_required_fields:
                result.add(
                    "data", "Data field is required when schema has required fields"
                )
            return

        if not isinstance(data, dict):
            result.add("data", "Data must be an object")
            return

        for definition in schema.fields:
            name = definition.name
            if name not in data:
                if definition.required:
                    result.add(f"data.{name}", f"Field '{name}' is required")
                continue

            value = data[name]
            if not self._matches_type(value, definition.type):
                result.add(
                    f"data.{name}",
                    f"Expected type '{definition.type}', got '{json_type_name(value)}'",
                )

            if definition.validation:
                self._check_rules(definition, value, result)

    @staticmethod
    def _matches_type(value: Any, expected: FieldType) -> bool:
        match expected:
            case FieldType.STRING:
                return isinstance(value, str)
            case FieldType.NUMBER:
                return _is_number(value)
            case FieldType.BOOLEAN:
                return isinstance(value, bool)
            case FieldType.ARRAY:
                return isinstance(value, list)
            case FieldType.OBJECT:
                return isinstance(value, dict)
            case FieldType.DATETIME:
                return is_valid_timestamp(value)
        return False

    @staticmethod
    def _check_rules(
        definition: FieldDefinition,
        value: Any,
        result: ValidationResult,
    ) -> None:
        rules = definition.validation or {}
        location = f"data.{definition.name}"

        if definition.type == FieldType.STRING and isinstance(value, str):
            min_length = rules.get("min_length")
            if _is_number(min_length) and len(value) < min_length:
                result.add(
                    location, f"Minimum length is {_format_bound(min_length)} characters"
                )

            max_length = rules.get("max_length")
            if _is_number(max_length) and len(value) > max_length:
                result.add(
                    location, f"Maximum length is {_format_bound(max_length)} characters"
                )

            pattern = rules.get("pattern")
            if isinstance(pattern, str) and not re.search(pattern, value):
                result.add(location, "Value does not match required pattern")

            allowed = rules.get("enum")
            if isinstance(allowed, list) and value not in allowed:
                result.add(
                    location,
                    "Value must be one of: "
                    + ", ".join(_format_enum_value(v) for v in allowed),
                )

        elif definition.type == FieldType.NUMBER and _is_number(value):
            minimum = rules.get("min")
            if _is_number(minimum) and value < minimum:
                result.add(location, f"Minimum value is {_format_bound(minimum)}")

            maximum = rules.get("max")
            if _is_number(maximum) and value > maximum:
                result.add(location, f"Maximum value is {_format_bound(maximum)}")
