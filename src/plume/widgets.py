"""Widgets — render one form field as an HTML input fragment.

A widget is anything with an ``html(name, value)`` method returning
``Markup`` and a ``multipart`` flag. The flag marks widgets whose input
needs ``multipart/form-data`` encoding (file uploads); a form containing
one sets ``RenderData.enctype_attr``.

Element ids are the lowercased field name, so ``<label for=...>`` built by
the form matches.
"""

import html
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, ClassVar, Protocol, runtime_checkable

from kida.template import Markup


@runtime_checkable
class Widget(Protocol):
    """Render capability for a form field."""

    multipart: bool

    def html(self, name: str, value: Any) -> Markup: ...


def field_id(name: str) -> str:
    """Element id for the field *name*."""
    return name.lower()


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _input(kind: str, name: str, value: str | None) -> Markup:
    value_attr = "" if value is None else f' value="{html.escape(value)}"'
    return Markup(
        f'<input id="{html.escape(field_id(name))}" type="{kind}"'
        f' name="{html.escape(name)}"{value_attr}/>'
    )


@dataclass(frozen=True, slots=True)
class TextInput:
    """Single-line text input. The default widget."""

    multipart: ClassVar[bool] = False

    def html(self, name: str, value: Any) -> Markup:
        return _input("text", name, _text(value))


@dataclass(frozen=True, slots=True)
class TextArea:
    multipart: ClassVar[bool] = False

    css_class: str = ""

    def html(self, name: str, value: Any) -> Markup:
        class_attr = f' class="{html.escape(self.css_class)}"' if self.css_class else ""
        return Markup(
            f'<textarea{class_attr} id="{html.escape(field_id(name))}"'
            f' name="{html.escape(name)}">{html.escape(_text(value))}</textarea>'
        )


@dataclass(frozen=True)
class Editor(TextArea):
    """Textarea picked up by a client-side rich text editor."""

    css_class: str = "editor"


@dataclass(frozen=True, slots=True)
class HiddenInput:
    multipart: ClassVar[bool] = False

    def html(self, name: str, value: Any) -> Markup:
        return _input("hidden", name, _text(value))


@dataclass(frozen=True, slots=True)
class PasswordInput:
    """Password input. Never echoes the current value back to the page."""

    multipart: ClassVar[bool] = False

    def html(self, name: str, value: Any) -> Markup:
        return _input("password", name, None)


@dataclass(frozen=True, slots=True)
class FileInput:
    """File upload input. Switches the form to multipart encoding."""

    multipart: ClassVar[bool] = True

    def html(self, name: str, value: Any) -> Markup:
        return _input("file", name, None)


@dataclass(frozen=True, slots=True)
class CheckboxInput:
    """Checkbox. Checked when the current value is truthy.

    Pairs with ``bool`` fields: a checkbox is only submitted when checked,
    and any submitted value coerces to True.
    """

    multipart: ClassVar[bool] = False

    def html(self, name: str, value: Any) -> Markup:
        checked = " checked" if value else ""
        return Markup(
            f'<input id="{html.escape(field_id(name))}" type="checkbox"'
            f' name="{html.escape(name)}" value="1"{checked}/>'
        )


@dataclass(frozen=True, slots=True)
class DateTimeInput:
    multipart: ClassVar[bool] = False

    def html(self, name: str, value: Any) -> Markup:
        if isinstance(value, datetime):
            text = value.strftime("%Y-%m-%dT%H:%M:%S")
        else:
            text = _text(value)
        return _input("datetime-local", name, text)


@dataclass(frozen=True, slots=True)
class DateInput:
    multipart: ClassVar[bool] = False

    def html(self, name: str, value: Any) -> Markup:
        text = value.strftime("%Y-%m-%d") if isinstance(value, date) else _text(value)
        return _input("date", name, text)


@dataclass(frozen=True, slots=True)
class TimeInput:
    multipart: ClassVar[bool] = False

    def html(self, name: str, value: Any) -> Markup:
        if isinstance(value, (time, datetime)):
            text = value.strftime("%H:%M:%S")
        else:
            text = _text(value)
        return _input("time", name, text)


@dataclass(frozen=True, slots=True)
class Option:
    """One ``<option>`` of a ``Select``."""

    value: str
    text: str


@dataclass(frozen=True, slots=True)
class Select:
    """Selection list. The option whose value equals the field's value is selected."""

    multipart: ClassVar[bool] = False

    options: tuple[Option, ...] = ()

    def html(self, name: str, value: Any) -> Markup:
        current = _text(value)
        lines = []
        for option in self.options:
            selected = " selected" if option.value == current else ""
            lines.append(
                f'<option value="{html.escape(option.value)}"{selected}>'
                f"{html.escape(option.text)}</option>\n"
            )
        return Markup(
            f'<select id="{html.escape(field_id(name))}" name="{html.escape(name)}">\n'
            f"{''.join(lines)}</select>"
        )
