"""MultiValueMapping protocol — shared interface for submitted form values.

A structural protocol so the form engine can accept ``FormData`` or any
other multi-valued mapping without coupling to the concrete type.
"""

from collections.abc import Iterator, Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class MultiValueMapping(Protocol):
    """A read-only string mapping where keys can have multiple values.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key.

    Structurally compatible with ``Mapping[str, str]`` plus ``get_list``.
    """

    def __getitem__(self, key: str) -> str: ...
    def __contains__(self, key: object) -> bool: ...
    def __iter__(self) -> Iterator[str]: ...
    def __len__(self) -> int: ...
    def get(self, key: str, default: str | None = None) -> str | None: ...
    def get_list(self, key: str) -> list[str]: ...


def value_list(values: MultiValueMapping | Mapping[str, Any], key: str) -> list[str]:
    """Return every submitted string for *key*.

    Plain mappings may hold a list of strings or a single string per key.
    """
    if isinstance(values, MultiValueMapping):
        return values.get_list(key)
    raw = values[key]
    if isinstance(raw, str):
        return [raw]
    return [str(v) for v in raw]
