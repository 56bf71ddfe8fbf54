"""Form validation — composable rules, clean results.

Usage::

    from plume.validation import all_of, regex, required, validate

    result = validate(
        {"Name": "", "Login": "ada"},
        {
            "Name": required("Required."),
            "Login": all_of(required("Required."), regex(r"^[a-z]+$", "Lowercase only.")),
        },
    )
    if not result:
        result.errors  # {"Name": ["Required."]}

Forms run this for you on every ``Form.fill()``.
"""

from collections.abc import Mapping
from typing import Any

from plume.validation.result import ValidationResult, Validator
from plume.validation.rules import all_of, regex, required

__all__ = [
    "ValidationResult",
    "Validator",
    "all_of",
    "regex",
    "required",
    "validate",
]


def validate(
    values: Mapping[str, Any],
    rules: Mapping[str, Validator | None],
) -> ValidationResult:
    """Validate values against a set of rules.

    Args:
        values: Field names mapped to the values to check. Every field
            named in *rules* must be present.
        rules: Field names mapped to a validator, or None for fields
            without one (always valid).

    Returns:
        A ``ValidationResult`` with ``.values`` (fields that passed) and
        ``.errors`` (field → list of error messages).

    Raises:
        KeyError: If a rule names a field missing from *values*.
    """
    errors: dict[str, list[str]] = {}
    passed: dict[str, Any] = {}

    for field_name, validator in rules.items():
        value = values[field_name]
        messages = validator(value) if validator is not None else None
        if messages:
            errors[field_name] = list(messages)
        else:
            passed[field_name] = value

    return ValidationResult(values=passed, errors=errors)
