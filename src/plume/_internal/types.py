"""Type-hint helpers shared by the accessor and coercion modules."""

import types
from typing import Any, Union, get_args, get_origin

NoneType = type(None)


def unwrap_optional(hint: Any) -> tuple[Any, bool]:
    """Strip one level of ``X | None`` / ``Optional[X]``.

    Returns ``(inner, was_optional)``. Unions of several non-None members
    are returned unchanged.
    """
    origin = get_origin(hint)
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(hint) if a is not NoneType]
        if len(args) == 1 and len(args) != len(get_args(hint)):
            return args[0], True
    return hint, False


def is_dynamic(hint: Any) -> bool:
    """True when a hint carries no usable type (unannotated, ``Any``, ``object``)."""
    return hint is None or hint is Any or hint is object


def list_item_type(hint: Any) -> Any | None:
    """Item type of ``list[X]``, or None if *hint* is not a list hint."""
    if hint is list:
        return str
    if get_origin(hint) is list:
        args = get_args(hint)
        return args[0] if args else str
    return None
