"""Value accessor — locate, read, and write dotted paths in a data container.

Two container shapes are supported and may be nested inside each other to
any depth:

- **Records**: dataclass instances or plain objects with attributes.
  Segments match attribute names case-insensitively, first match in
  declaration order wins. Type hints on the record's class declare the
  slot types used for coercion.
- **Mappings**: mutable mappings from string keys to values. Segments
  match keys exactly. Entries carry no declared type, so their current
  runtime type stands in for one.

The adapter variant is picked once, from the root container, by
``adapter_for()``::

    adapter = adapter_for(profile)
    adapter.write("Extra.Nickname", "ada")
    adapter.read("extra.nickname")  # "ada" — "extra" matched "Extra"
"""

import dataclasses
import functools
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any, ClassVar, get_type_hints

from plume._internal.types import is_dynamic, unwrap_optional
from plume.errors import ConfigurationError, ResolutionError

_SCALARS = (str, bytes, bytearray, int, float, complex, bool, list, tuple, set, frozenset)


@dataclass(frozen=True, slots=True)
class Slot:
    """A resolved location: one attribute of a record or one mapping entry.

    ``hint`` is the declared type hint, or None when the slot is dynamic
    (mapping entries, unannotated attributes).
    """

    container: Any
    key: str
    hint: Any = None
    attribute: bool = False
    path: str = ""

    def get(self) -> Any:
        if self.attribute:
            try:
                return getattr(self.container, self.key)
            except AttributeError:
                # Annotated on the class but never assigned
                path = self.path or self.key
                raise ResolutionError(path, self.key, "attribute not set") from None
        return self.container[self.key]

    def set(self, value: Any) -> None:
        if self.attribute:
            try:
                setattr(self.container, self.key, value)
            except AttributeError as exc:
                msg = f"Can't write {type(self.container).__name__}.{self.key}: {exc}"
                raise ConfigurationError(msg) from exc
            return
        if not isinstance(self.container, MutableMapping):
            msg = f"Can't write key {self.key!r}: {type(self.container).__name__} is read-only"
            raise ConfigurationError(msg)
        # Entries are replaced wholesale
        self.container[self.key] = value

    @property
    def declared_type(self) -> Any:
        """The type the slot expects, for coercion.

        Optional hints are returned as declared; the coercer unwraps them.
        Dynamic slots (``Any``, ``object``, unannotated, mapping entries)
        report the runtime type of their current value, or ``str`` when
        they hold None.
        """
        inner, optional = unwrap_optional(self.hint)
        if not is_dynamic(inner):
            return self.hint
        current = self.get()
        if current is None:
            return str | None if optional else str
        return type(current)


def is_record(node: Any) -> bool:
    """True for instances that expose named attributes (not classes, not scalars)."""
    if isinstance(node, type) or isinstance(node, _SCALARS) or isinstance(node, Mapping):
        return False
    return dataclasses.is_dataclass(node) or hasattr(node, "__dict__")


@functools.cache
def _record_hints(cls: type) -> dict[str, Any]:
    """Resolved type hints for *cls*; unresolvable hints count as dynamic."""
    try:
        return get_type_hints(cls)
    except (NameError, TypeError):
        raw: dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            raw.update(getattr(klass, "__annotations__", {}))
        return {k: (None if isinstance(v, str) else v) for k, v in raw.items()}


def _attribute_names(node: Any) -> list[str]:
    if dataclasses.is_dataclass(node):
        return [f.name for f in dataclasses.fields(node)]
    names = [n for n in _record_hints(type(node)) if not n.startswith("_")]
    names.extend(n for n in vars(node) if n not in names and not n.startswith("_"))
    return names


def _record_slot(node: Any, segment: str, path: str) -> Slot:
    wanted = segment.lower()
    for name in _attribute_names(node):
        if name.lower() == wanted:
            hint = _record_hints(type(node)).get(name)
            return Slot(node, name, hint, attribute=True, path=path)
    raise ResolutionError(path, segment)


def _item_slot(node: Mapping[str, Any], segment: str, path: str) -> Slot:
    if segment not in node:
        raise ResolutionError(path, segment, "key not found")
    return Slot(node, segment, path=path)


def _step(node: Any, segment: str, path: str) -> Slot:
    """Consume one path segment below *node*."""
    if isinstance(node, Mapping):
        return _item_slot(node, segment, path)
    if is_record(node):
        return _record_slot(node, segment, path)
    raise ResolutionError(path, segment, f"{type(node).__name__} has no fields")


class ContainerAdapter:
    """Resolves dotted paths against one root container.

    Subclasses only differ in how the first segment is looked up; below
    the root every node is dispatched on its own shape.
    """

    __slots__ = ("_root",)

    shape: ClassVar[str] = ""

    def __init__(self, root: Any) -> None:
        self._root = root

    @property
    def root(self) -> Any:
        """The container this adapter reads and writes (not a copy)."""
        return self._root

    def resolve(self, path: str) -> Slot:
        """Locate the slot addressed by *path*.

        Raises:
            ResolutionError: If any segment does not resolve.
        """
        first, *rest = path.split(".")
        slot = self._root_slot(first, path)
        for segment in rest:
            node = slot.get()
            if node is None:
                raise ResolutionError(path, segment, f"{slot.key!r} is None")
            slot = _step(node, segment, path)
        return slot

    def read(self, path: str) -> Any:
        """Return the value at *path*."""
        return self.resolve(path).get()

    def write(self, path: str, value: Any) -> None:
        """Store *value* (already coerced) at *path*."""
        self.resolve(path).set(value)

    def _root_slot(self, segment: str, path: str) -> Slot:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({type(self._root).__name__})"


class RecordAdapter(ContainerAdapter):
    """Adapter for a record root (dataclass instance or attribute object)."""

    __slots__ = ()

    shape = "record"

    def _root_slot(self, segment: str, path: str) -> Slot:
        return _record_slot(self._root, segment, path)


class MapAdapter(ContainerAdapter):
    """Adapter for a mutable mapping root."""

    __slots__ = ()

    shape = "mapping"

    def _root_slot(self, segment: str, path: str) -> Slot:
        return _item_slot(self._root, segment, path)


def adapter_for(container: Any) -> ContainerAdapter:
    """Pick the adapter for *container*'s shape.

    Raises:
        ConfigurationError: If *container* is neither a mutable mapping nor
            a mutable record instance.
    """
    if isinstance(container, MutableMapping):
        return MapAdapter(container)
    if isinstance(container, Mapping):
        msg = f"Form data must be mutable, got read-only {type(container).__name__}"
        raise ConfigurationError(msg)
    if isinstance(container, type):
        msg = f"Form data must be an instance, got the class {container.__name__}"
        raise ConfigurationError(msg)
    if dataclasses.is_dataclass(container) and container.__dataclass_params__.frozen:  # type: ignore[attr-defined]
        msg = f"Form data must be mutable, got frozen dataclass {type(container).__name__}"
        raise ConfigurationError(msg)
    if is_record(container):
        return RecordAdapter(container)
    msg = f"Form data must be a mapping or a record instance, got {type(container).__name__}"
    raise ConfigurationError(msg)
