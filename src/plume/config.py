"""Form configuration.

FormConfig is a frozen dataclass — immutable after creation, one per form
(or shared between forms; it holds no mutable state).
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

# Converter signature: (source string, destination type) -> value
type Converter = Callable[[str, type], Any]


@dataclass(frozen=True, slots=True)
class FormConfig:
    """Form configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = FormConfig(strip_strings=True, date_formats=("%d.%m.%Y",))
    """

    # Rendering
    multipart_enctype: str = 'enctype="multipart/form-data"'

    # Coercion
    strip_strings: bool = False
    date_formats: tuple[str, ...] = ("%Y-%m-%d",)  # Fallbacks after ISO 8601
    time_formats: tuple[str, ...] = ("%H:%M:%S", "%H:%M")
    converters: Mapping[type, Converter] = field(
        default_factory=lambda: MappingProxyType({})
    )  # Extra per-form converters, checked before the built-in table

    # Messages — {name} is the field path, {label} its label, {expected} the type
    coercion_message: str = "Invalid value for {label}: expected {expected}."
