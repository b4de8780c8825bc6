"""Validators shared by the JSON loaders.

Each validator returns ``(status, value)``: status 0 with the normalized
value (or None when the field is absent), status 1 after printing an error.
"""

from typing import Any, Mapping, Optional, TypeAlias, TypeVar

from .console import error


T = TypeVar("T")

StringValidationResult: TypeAlias = tuple[int, Optional[str]]
ListValidationResult: TypeAlias = tuple[int, Optional[list[str]]]


def validate_non_empty_string(value: Any, field_name: str) -> StringValidationResult:
    """Validate value is a non-empty string, stripping surrounding whitespace."""
    if value is None:
        return (0, None)
    if isinstance(value, str) and value.strip():
        return (0, value.strip())
    error(f"{field_name} must be a non-empty string")
    return (1, None)


def validate_optional_string(value: Any, field_name: str) -> StringValidationResult:
    """Validate value is a string (may be empty). Does NOT strip."""
    if value is None:
        return (0, None)
    if isinstance(value, str):
        return (0, value)
    error(f"{field_name} must be a string")
    return (1, None)


def validate_string_list(value: Any, field_name: str) -> ListValidationResult:
    """Validate value is a list of non-empty strings. Does NOT strip."""
    if value is None:
        return (0, None)
    if not isinstance(value, list):
        error(f"{field_name} must be a list of strings")
        return (1, None)
    normalized = []
    for entry in value:
        if not isinstance(entry, str) or not entry.strip():
            error(f"{field_name} must be a list of non-empty strings")
            return (1, None)
        normalized.append(entry)
    return (0, normalized)


def validate_choice(
    value: Any, field_name: str, choices: Mapping[str, T]
) -> tuple[int, Optional[T]]:
    """Map a string onto one of ``choices`` (case-insensitive keys)."""
    if value is None:
        return (0, None)
    if isinstance(value, str) and value.strip().lower() in choices:
        return (0, choices[value.strip().lower()])
    allowed = ", ".join(sorted(choices))
    error(f"{field_name} must be one of: {allowed}")
    return (1, None)


def validate_object(value: Any, field_name: str) -> tuple[int, Optional[dict]]:
    if value is None:
        return (0, None)
    if isinstance(value, dict):
        return (0, value)
    error(f"{field_name} must be a JSON object")
    return (1, None)
