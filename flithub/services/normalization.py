"""
Field parsing and normalization helpers for bulk imports.

Two enum policies:
- strict_enum: unknown values are validation errors (resource fields)
- mapped_enum_with_fallback: unknown values map to a default (provider type)
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from enum import StrEnum
from typing import Any, TypeVar

from pydantic import ValidationError as PydanticValidationError

E = TypeVar("E", bound=StrEnum)

__all__ = [
    "TRUTHY_TOKENS",
    "MAX_DURATION_MINUTES",
    "InvalidEnumValueError",
    "normalize_key",
    "normalize_enum_value",
    "parse_array_field",
    "parse_pipe_array",
    "strict_enum",
    "mapped_enum_with_fallback",
    "parse_featured_flag",
    "coerce_duration",
    "is_blank",
    "format_validation_errors",
]

_WHITESPACE_RUN = re.compile(r"\s+")

# Largest value a PostgreSQL integer column holds
MAX_DURATION_MINUTES = 2**31 - 1

# Literal allow-list; "YES", "1" and 1 are not truthy
TRUTHY_TOKENS: tuple[str, ...] = ("true", "Yes")


class InvalidEnumValueError(ValueError):
    """Value does not normalize onto any member of the enum."""

    def __init__(self, field: str, value: str, enum_class: type[StrEnum]):
        self.field = field
        self.value = value
        valid = ", ".join(member.value for member in enum_class)
        super().__init__(f"Invalid {field}: '{value}'. Valid values: {valid}")


def is_blank(value: Any) -> bool:
    """True for None and whitespace-only strings."""
    return value is None or (isinstance(value, str) and not value.strip())


def normalize_key(value: str) -> str:
    """Lookup key for names and titles: trimmed and lower-cased."""
    return value.strip().lower()


def normalize_enum_value(value: str) -> str:
    """Lower-case and collapse whitespace runs to a single underscore."""
    return _WHITESPACE_RUN.sub("_", value.strip().lower())


def parse_array_field(value: str | list[str] | None, delimiter: str = ",") -> list[str]:
    """
    Parse a list or delimited string into a list of trimmed strings.

    Empty elements are dropped; duplicates are kept.
    """
    if not value:
        return []
    items = value if isinstance(value, list) else value.split(delimiter)
    return [item.strip() for item in items if item and item.strip()]


def parse_pipe_array(value: str | list[str] | None) -> list[str]:
    """Parse pipe-delimited text (learning outcomes may contain commas)."""
    return parse_array_field(value, delimiter="|")


def strict_enum(value: str, enum_class: type[E], field: str) -> E:
    """
    Normalize value onto enum_class.

    Raises:
        InvalidEnumValueError: if the normalized value is not a member
    """
    try:
        return enum_class(normalize_enum_value(value))
    except ValueError:
        raise InvalidEnumValueError(field, value, enum_class) from None


def mapped_enum_with_fallback(
    value: str | None,
    mapping: Mapping[str, E],
    default: E,
) -> E:
    """Look value up (case-insensitive) in mapping, falling back to default."""
    if not value:
        return default
    return mapping.get(value.strip().lower(), default)


def parse_featured_flag(value: Any) -> bool:
    """True only for boolean True or one of TRUTHY_TOKENS (case-sensitive)."""
    if value is True:
        return True
    return isinstance(value, str) and value in TRUTHY_TOKENS


def coerce_duration(value: Any) -> float | None:
    """
    Coerce a duration in minutes to a non-negative number.

    Returns None for absent or blank values.

    Raises:
        ValueError: for non-numeric, non-finite, negative or oversized values
    """
    if is_blank(value):
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"not a number: {value!r}")

    duration = float(value.strip()) if isinstance(value, str) else float(value)
    if not math.isfinite(duration) or not 0 <= duration <= MAX_DURATION_MINUTES:
        raise ValueError(f"out of range: {value!r}")
    return duration


def format_validation_errors(error: PydanticValidationError) -> list[str]:
    """One readable message per field that failed row-shape validation."""
    messages = []
    for detail in error.errors():
        loc = ".".join(str(part) for part in detail["loc"]) or "row"
        messages.append(f"Invalid {loc}: {detail['msg']}")
    return messages
