"""Plume exception hierarchy.

Shared across the accessor, coercion, and form engine so every module
raises and catches the same types.
"""

from typing import Any


class PlumeError(Exception):
    """Base for all plume-specific errors."""


class ConfigurationError(PlumeError):
    """Raised when a form is wired up incorrectly.

    Programmer errors: an unsupported data container, a field path that
    does not exist, a read-only slot. Never shown to the submitter.
    """


class ResolutionError(ConfigurationError):
    """A dotted field path does not resolve against the data container.

    Attributes:
        path: The full dotted path that was being resolved.
        segment: The segment at which resolution stopped.
    """

    def __init__(self, path: str, segment: str, reason: str = "field not found") -> None:
        self.path = path
        self.segment = segment
        super().__init__(f"Can't resolve {path!r} at {segment!r}: {reason}")


class CoercionError(PlumeError):
    """A submitted string cannot be converted to the destination type.

    Recoverable: the form engine records it as a field-level error.

    Attributes:
        value: The submitted source string.
        expected: The destination type (or a description of it).
    """

    def __init__(self, value: str, expected: Any, detail: str = "") -> None:
        self.value = value
        self.expected = expected
        name = getattr(expected, "__name__", None) or str(expected)
        msg = f"Can't convert {value!r} to {name}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)

    @property
    def expected_name(self) -> str:
        """Human readable name of the expected type."""
        return getattr(self.expected, "__name__", None) or str(self.expected)
