"""Validation errors and the point of interest domain rules."""

from collections.abc import Iterable, Sequence
from typing import Any

NAME_EQUALS_DESCRIPTION_MESSAGE = "The provided description should be different from the name."


class ValidationFailedError(Exception):
    """Structural or domain validation failed.

    ``errors`` maps a field name (or ``operations[<index>]`` for patch
    operations) to the messages collected for it.
    """

    def __init__(self, errors: dict[str, list[str]]):
        self.errors = errors
        super().__init__(f"Validation failed: {errors}")


def add_error(errors: dict[str, list[str]], key: str, message: str) -> None:
    """Append a message under ``key``."""
    errors.setdefault(key, []).append(message)


def error_key(loc: Sequence[Any]) -> str:
    """Build an error key from a pydantic error location.

    The leading ``body`` segment FastAPI adds to request errors is dropped.
    """
    parts = [str(part) for part in loc]
    if len(parts) > 1 and parts[0] == "body":
        parts = parts[1:]
    return ".".join(parts) or "body"


def errors_from_pydantic(raw_errors: Iterable[dict[str, Any]]) -> dict[str, list[str]]:
    """Group pydantic error dicts by field."""
    errors: dict[str, list[str]] = {}
    for error in raw_errors:
        add_error(errors, error_key(error.get("loc", ())), error.get("msg", "Invalid value"))
    return errors


def check_name_differs_from_description(
    name: str | None, description: str | None, errors: dict[str, list[str]]
) -> None:
    """Record an error on ``description`` when it repeats the name."""
    if name is not None and name == description:
        add_error(errors, "description", NAME_EQUALS_DESCRIPTION_MESSAGE)


def ensure_name_differs_from_description(name: str | None, description: str | None) -> None:
    """Raise ValidationFailedError when the name and description are equal."""
    errors: dict[str, list[str]] = {}
    check_name_differs_from_description(name, description, errors)
    if errors:
        raise ValidationFailedError(errors)
