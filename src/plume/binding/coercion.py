"""Type coercion — turn submitted strings into the destination slot's type.

Form submissions arrive as strings; the destination's declared type is the
only schema available. ``Coercer`` dispatches on that type through a fixed
converter table:

=================  ==================================================
Type               Conversion
=================  ==================================================
``str``            passed through (optionally stripped)
``int``            ``int(text)`` — failure raises ``CoercionError``
``float``          ``float(text)``
``Decimal``        ``Decimal(text)``
``bool``           non-empty is True (checkbox semantics)
``datetime``       ISO 8601, then the configured date/time formats
``date``/``time``  ISO 8601, then the configured formats
=================  ==================================================

Empty text fails to parse like any other bad number; only optional slots
accept it, as None. Subclasses of a table type (``IntEnum``) use the base
converter and are built from the parsed value.

Types with a ``from_text(text)`` classmethod parse themselves. New types
are added per form through ``FormConfig.converters``, never globally.
"""

from collections.abc import Callable, Sequence
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any

from plume._internal.types import list_item_type, unwrap_optional
from plume.config import Converter, FormConfig
from plume.errors import CoercionError


def _number[N](parse: Callable[[str], N], source: str, target: type, detail: str) -> N:
    """Parse with the base type's parser, then build *target* from the number.

    Subclasses such as ``IntEnum`` are constructed from the parsed value,
    never from the raw text.
    """
    try:
        value = parse(source.strip())
        return value if type(value) is target else target(value)
    except (ValueError, TypeError, InvalidOperation):
        raise CoercionError(source, target, detail) from None


def _to_int(source: str, target: type) -> int:
    return _number(int, source, target, "not a whole number")


def _to_float(source: str, target: type) -> float:
    return _number(float, source, target, "not a number")


def _to_decimal(source: str, target: type) -> Decimal:
    return _number(Decimal, source, target, "not a number")


def _to_bool(source: str, target: type) -> bool:
    # A checkbox is only submitted when checked
    return source != ""


def _first_parse[T](text: str, parsers: Sequence[Callable[[str], T]]) -> T | None:
    for parse in parsers:
        try:
            return parse(text)
        except ValueError:
            continue
    return None


class Coercer:
    """Converter table bound to one ``FormConfig``.

    Instantiated per form so forms never share coercion state.
    """

    __slots__ = ("_config", "_table")

    def __init__(self, config: FormConfig | None = None) -> None:
        self._config = config or FormConfig()
        self._table: dict[type, Converter] = {
            str: self._to_str,
            bool: _to_bool,
            int: _to_int,
            float: _to_float,
            Decimal: _to_decimal,
            datetime: self._to_datetime,
            date: self._to_date,
            time: self._to_time,
        }
        self._table.update(self._config.converters)

    def register(self, target: type, converter: Converter) -> None:
        """Add or replace the converter for *target* on this coercer only."""
        self._table[target] = converter

    def coerce(self, source: str, target: Any) -> Any:
        """Convert *source* to *target*.

        Args:
            source: The submitted string.
            target: The declared type of the destination slot. Optional
                types are unwrapped one level; an empty *source* then
                yields None.

        Raises:
            CoercionError: If *source* does not parse, or *target* is not
                a supported type.
        """
        inner, optional = unwrap_optional(target)
        if optional and source == "":
            return None

        if isinstance(inner, type):
            from_text = getattr(inner, "from_text", None)
            if callable(from_text):
                return self._from_text(from_text, source, inner)

            converter = self._lookup(inner)
            if converter is not None:
                return converter(source, inner)

        raise CoercionError(source, target, "unsupported type")

    def coerce_all(self, sources: Sequence[str], target: Any) -> Any:
        """Convert every submitted value for one field.

        ``list[X]`` targets receive a list of every value coerced to ``X``.
        Scalar targets receive the last value; earlier values must still
        convert.
        """
        inner, _ = unwrap_optional(target)
        item_type = list_item_type(inner)
        if item_type is not None:
            return [self.coerce(s, item_type) for s in sources]
        value: Any = None
        for source in sources:
            value = self.coerce(source, target)
        return value

    def _lookup(self, target: type) -> Converter | None:
        for klass in target.__mro__:
            converter = self._table.get(klass)
            if converter is not None:
                return converter
        return None

    @staticmethod
    def _from_text(from_text: Callable[[str], Any], source: str, target: type) -> Any:
        try:
            return from_text(source)
        except (ValueError, TypeError) as exc:
            raise CoercionError(source, target, str(exc)) from exc

    def _to_str(self, source: str, target: type) -> str:
        return source.strip() if self._config.strip_strings else source

    def _to_datetime(self, source: str, target: type) -> datetime:
        text = source.strip()
        formats = self._config.date_formats + self._config.time_formats
        parsed = _first_parse(
            text,
            [datetime.fromisoformat, *(_strptime(fmt) for fmt in formats)],
        )
        if parsed is None:
            raise CoercionError(source, target, "not a date/time")
        return parsed

    def _to_date(self, source: str, target: type) -> date:
        text = source.strip()
        parsed = _first_parse(
            text,
            [date.fromisoformat, *(_strptime(fmt) for fmt in self._config.date_formats)],
        )
        if parsed is None:
            raise CoercionError(source, target, "not a date")
        return parsed.date() if isinstance(parsed, datetime) else parsed

    def _to_time(self, source: str, target: type) -> time:
        text = source.strip()
        parsed = _first_parse(
            text,
            [time.fromisoformat, *(_strptime(fmt) for fmt in self._config.time_formats)],
        )
        if parsed is None:
            raise CoercionError(source, target, "not a time")
        return parsed.time() if isinstance(parsed, datetime) else parsed


def _strptime(fmt: str) -> Callable[[str], datetime]:
    return lambda text: datetime.strptime(text, fmt)
