"""Built-in validation rules for plume forms.

Each validator is a callable with the signature::

    def rule(value: Any) -> list[str] | None:
        '''Return error messages, or None if valid.'''

Validators receive the field's *bound* value — after coercion — so an
integer field's validator sees an ``int``. Rules are factories taking the
message to report. A custom rule for an ``int`` field::

    def at_least(n: int, message: str) -> Validator:
        def check(value: int) -> list[str] | None:
            if value < n:
                return [message]
            return None
        return check

``all_of()`` combines rules.
"""

import re
from collections.abc import Sized
from typing import Any

from plume.validation.result import Validator

# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def _is_zero(value: Any) -> bool:
    """True if *value* is the zero value of its own type."""
    if value is None:
        return True
    if isinstance(value, (str, bytes, int, float, complex, Sized)):
        return not value
    try:
        return bool(value == type(value)())
    except TypeError:
        # No argument-less constructor, so no zero value to compare with
        return False


def required(message: str) -> Validator:
    """Value must not be the zero value of its type ("", 0, False, None, [])."""

    def check(value: Any) -> list[str] | None:
        if _is_zero(value):
            return [message]
        return None

    return check


# ---------------------------------------------------------------------------
# Combinators
# ---------------------------------------------------------------------------


def all_of(*validators: Validator) -> Validator:
    """Run every validator and collect all of their messages.

    Does not stop at the first failure. Returns None when no validator
    reported anything.
    """

    def check(value: Any) -> list[str] | None:
        errors: list[str] = []
        for validator in validators:
            errors.extend(validator(value) or ())
        return errors or None

    return check


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------


def regex(pattern: str, message: str) -> Validator:
    """String must contain a match for *pattern*.

    The search is unanchored; use ``^``/``$`` to match the whole value.
    An empty pattern matches everything. Non-string values are a caller
    error and raise ``TypeError``.
    """
    compiled = re.compile(pattern)

    def check(value: str) -> list[str] | None:
        if not isinstance(value, str):
            msg = f"regex() validates strings, got {type(value).__name__}"
            raise TypeError(msg)
        if compiled.search(value) is None:
            return [message]
        return None

    return check
