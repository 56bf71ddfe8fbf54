"""Validation result — immutable container for validated values or errors."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

# Validator — returns error messages, or None when the value is valid
type Validator = Callable[[Any], list[str] | None]


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of validating values against a set of rules.

    ``is_valid`` is True when there are no errors.
    The result is falsy when invalid, so you can write::

        result = validate(values, rules)
        if not result:
            ...

    ``values`` holds every field whose rules passed.

    ``errors`` maps field names to lists of error messages::

        {"Name": ["Required."],
         "Email": ["Must be a valid email address"]}
    """

    values: dict[str, Any]
    errors: dict[str, list[str]]

    @property
    def is_valid(self) -> bool:
        """True if validation passed with no errors."""
        return not self.errors

    def __bool__(self) -> bool:
        """Falsy when invalid — enables ``if not result:`` pattern."""
        return self.is_valid
