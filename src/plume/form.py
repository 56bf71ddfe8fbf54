"""Forms — bind submitted values to a data container, validate, render.

A ``Form`` pairs a data container (a record or a mutable mapping, nested
as deep as needed) with field descriptors keyed by dotted path::

    @dataclass
    class Signup:
        name: str = ""
        age: int = 0
        extra: dict[str, Any] = field(default_factory=lambda: {"Nickname": ""})

    signup = Signup()
    form = Form(signup, {
        "Name": Field("Your name", "Your full name", required("Required.")),
        "Age": Field("Your age", validator=required("Required.")),
        "Extra.Nickname": Field("Nickname"),
    })

    if form.fill(submitted):       # writes into ``signup`` and validates
        save(signup)
    else:
        render(form.render_data())  # errors included per field

The container is shared, never copied: ``fill()`` mutates it in place. A
form is not thread-safe; create one per request.
"""

import html
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from kida.template import Markup

from plume._internal.multimap import MultiValueMapping, value_list
from plume.binding.accessor import ContainerAdapter, adapter_for
from plume.binding.coercion import Coercer
from plume.config import FormConfig
from plume.errors import CoercionError, ResolutionError
from plume.validation import validate
from plume.validation.result import Validator
from plume.widgets import TextInput, Widget, field_id

logger = logging.getLogger("plume.form")

_DEFAULT_WIDGET = TextInput()


@dataclass(frozen=True, slots=True)
class Field:
    """Settings for one form field.

    The field's name is the dotted path it is registered under in the
    form's field mapping.
    """

    label: str = ""
    help: str = ""
    validator: Validator | None = None
    widget: Widget | None = None


@dataclass(frozen=True, slots=True)
class FieldRenderData:
    """Everything a template needs to render one field."""

    name: str
    label: str
    # ``<label for="the_id">The Label</label>``
    label_tag: Markup
    input: Markup
    help: str
    errors: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class RenderData:
    """Everything a template needs to render a form.

    ``enctype_attr`` is ``enctype="multipart/form-data"`` when any field
    uses a multipart widget (file upload), else empty. Emit it verbatim
    inside the ``<form>`` tag.
    """

    fields: tuple[FieldRenderData, ...]
    errors: tuple[str, ...]
    enctype_attr: Markup | str
    action: str


class Form:
    """An HTML form bound to a data container.

    Args:
        data: The container to fill — a mutable mapping or a mutable
            record instance (dataclass, plain object). Kept by reference.
        fields: Dotted field paths mapped to ``Field`` settings. Rendering
            follows this mapping's order.
        action: The form's ``action`` attribute, passed through to
            ``RenderData``.
        config: Coercion and rendering settings.

    Raises:
        ConfigurationError: If *data* is not a supported container.
    """

    __slots__ = ("_adapter", "_coercer", "_config", "_errors", "_fields", "action")

    def __init__(
        self,
        data: Any,
        fields: Mapping[str, Field],
        *,
        action: str = "",
        config: FormConfig | None = None,
    ) -> None:
        self._adapter: ContainerAdapter = adapter_for(data)
        self._fields: Mapping[str, Field] = MappingProxyType(dict(fields))
        self._config = config or FormConfig()
        self._coercer = Coercer(self._config)
        self._errors: dict[str, list[str]] = {}
        self.action = action

    @property
    def data(self) -> Any:
        """The bound container."""
        return self._adapter.root

    @property
    def fields(self) -> Mapping[str, Field]:
        """Read-only view of the field settings, in declaration order."""
        return self._fields

    @property
    def errors(self) -> dict[str, list[str]]:
        """Copy of the current errors. The ``""`` key holds whole-form errors."""
        return {name: list(messages) for name, messages in self._errors.items()}

    def fill(self, values: MultiValueMapping | Mapping[str, Any]) -> bool:
        """Write submitted values into the data container and validate.

        Errors from earlier calls, whole-form errors included, are
        discarded first. Submitted keys that don't name a field are
        ignored. A value that can't be converted to its field's type is
        reported as an error on that field and not written.

        Uploaded files on a ``FormData`` are bound to matching fields
        as-is.

        Args:
            values: Field names mapped to submitted strings — ``FormData``
                or a plain mapping of name to list of strings.

        Returns:
            True iff every field validates.

        Raises:
            ResolutionError: If a field's path does not exist in the
                container.
        """
        self._errors.clear()

        for name in values:
            field = self._fields.get(name)
            if field is None:
                logger.debug("Ignoring submitted key %r: no such field", name)
                continue
            sources = value_list(values, name)
            if not sources:
                continue
            slot = self._adapter.resolve(name)
            try:
                value = self._coercer.coerce_all(sources, slot.declared_type)
            except CoercionError as exc:
                logger.warning("Rejected value for field %r: %s", name, exc)
                self._add_coercion_error(name, field, exc)
                continue
            slot.set(value)

        files = getattr(values, "files", None) or {}
        for name, upload in files.items():
            if name in self._fields:
                self._adapter.write(name, upload)

        return self._validate()

    def add_error(self, field: str, message: str) -> None:
        """Add an error to a field's error list.

        Use an empty field name for whole-form errors, e.g. a failed
        uniqueness check no field validator can express.
        """
        self._errors.setdefault(field, []).append(message)

    def render_data(self) -> RenderData:
        """Build a snapshot of the form for a template.

        A field whose path does not resolve renders with an empty value
        rather than failing the whole form.
        """
        rendered: list[FieldRenderData] = []
        enctype_attr: Markup | str = ""

        for name, field in self._fields.items():
            widget = field.widget or _DEFAULT_WIDGET
            if widget.multipart:
                enctype_attr = Markup(self._config.multipart_enctype)
            try:
                value = self._adapter.read(name)
            except ResolutionError as exc:
                logger.debug("Rendering field %r empty: %s", name, exc)
                value = ""
            rendered.append(
                FieldRenderData(
                    name=name,
                    label=field.label,
                    label_tag=Markup(
                        f'<label for="{html.escape(field_id(name))}">'
                        f"{html.escape(field.label)}</label>"
                    ),
                    input=widget.html(name, value),
                    help=field.help,
                    errors=tuple(self._errors.get(name, ())),
                )
            )

        return RenderData(
            fields=tuple(rendered),
            errors=tuple(self._errors.get("", ())),
            enctype_attr=enctype_attr,
            action=self.action,
        )

    def _validate(self) -> bool:
        """Run every field's validator against the container's current values.

        Fields that already failed coercion in this fill are skipped; their
        stored value is stale. Returns True iff no errors are recorded.
        """
        pending = [name for name in self._fields if name not in self._errors]
        values = {name: self._adapter.read(name) for name in pending}
        rules = {name: self._fields[name].validator for name in pending}

        result = validate(values, rules)
        for name, messages in result.errors.items():
            self._errors.setdefault(name, []).extend(messages)
        return not self._errors

    def _add_coercion_error(self, name: str, field: Field, exc: CoercionError) -> None:
        message = self._config.coercion_message.format(
            name=name,
            label=field.label or name,
            expected=exc.expected_name,
        )
        self.add_error(name, message)

    def __repr__(self) -> str:
        return f"Form({self._adapter!r}, fields={list(self._fields)!r})"
