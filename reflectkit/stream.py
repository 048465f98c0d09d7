"""Render Python values as text by inspecting their structure.

Two renderings are offered. The simple one writes values the way a format
string would: strings bare, enums by member name, sequences as
``[ a, b ]``, mappings as ``{ key : value }`` and records (dataclasses and
named tuples) as ``{ field : value }``. The pretty one spreads containers
over indented lines and puts each value's type name in front of it.
Missing values (``None``) are written as ``null``. Sets and mappings are
written in sorted order where their keys can be sorted.
"""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Mapping, Set
from typing import Any, Iterable, Iterator, TypeVar

E = TypeVar("E", bound=enum.Enum)


def enum_to_name(value: Any) -> str | None:
    """Return the member name of an enum value, or None if it has none."""
    if isinstance(value, enum.Enum):
        return value.name
    return None


def name_to_enum(enum_type: type[E], name: str) -> E | None:
    """Return the member of *enum_type* called *name*, or None."""
    return enum_type.__members__.get(name)


def _scalar(obj: Any) -> str:
    if isinstance(obj, float):
        return format(obj, "g")
    return str(obj)


def _enum_text(obj: enum.Enum) -> str:
    name = enum_to_name(obj)
    return name if name is not None else _scalar(obj.value)


def _members(obj: Any) -> list[tuple[str, Any]] | None:
    """Return the named fields of a record, or None if *obj* is not one."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return [(f.name, getattr(obj, f.name)) for f in dataclasses.fields(obj)]
    if isinstance(obj, tuple) and hasattr(obj, "_fields"):
        return list(zip(obj._fields, obj))
    return None


def _ordered(items: Iterable[Any]) -> list[Any]:
    try:
        return sorted(items)
    except TypeError:
        return list(items)


def _map_items(obj: Mapping) -> list[tuple[Any, Any]]:
    return [(key, obj[key]) for key in _ordered(obj.keys())]


def _is_sequence(obj: Any) -> bool:
    return isinstance(obj, (list, tuple, Set, range))


def _sequence_items(obj: Any) -> list[Any]:
    return _ordered(obj) if isinstance(obj, Set) else list(obj)


def stream_simple(obj: Any) -> Iterator[str]:
    """Yield the pieces of the one-line rendering of *obj*."""
    if obj is None:
        yield "null"
        return
    if isinstance(obj, enum.Enum):
        yield _enum_text(obj)
        return
    if isinstance(obj, str):
        yield obj
        return

    members = _members(obj)
    if members is not None:
        yield "{"
        for index, (name, value) in enumerate(members):
            yield ", " if index else " "
            yield f"{name} : "
            yield from stream_simple(value)
        yield " }"
        return

    if isinstance(obj, Mapping):
        yield "{"
        for index, (key, value) in enumerate(_map_items(obj)):
            yield ", " if index else " "
            yield from stream_simple(key)
            yield " : "
            yield from stream_simple(value)
        yield " }"
        return

    if _is_sequence(obj):
        yield "["
        for index, item in enumerate(_sequence_items(obj)):
            yield ", " if index else " "
            yield from stream_simple(item)
        yield " ]"
        return

    yield _scalar(obj)


def to_display_string(obj: Any) -> str:
    """Return the one-line rendering of *obj*."""
    return "".join(stream_simple(obj))


def _block(open_: str, close: str, entries: list[str], indent: int) -> str:
    inner = "  " * (indent + 1)
    body = ",".join(f"\n{inner}{entry}" for entry in entries)
    return f"{open_}{body}\n{'  ' * indent}{close}"


def stream_pretty(obj: Any, indent: int = 0) -> str:
    """Return the indented rendering of *obj*, each value led by its type name.

    *indent* is the nesting depth of *obj*; each level indents two spaces.
    """
    if obj is None:
        return "null"

    type_name = type(obj).__qualname__
    if isinstance(obj, enum.Enum):
        return f'{type_name} "{_enum_text(obj)}"'
    if isinstance(obj, str):
        return f'{type_name} "{obj}"'

    members = _members(obj)
    if members is not None:
        entries = [
            f"{name} : {stream_pretty(value, indent + 1)}" for name, value in members
        ]
        return f"{type_name} " + _block("{", "}", entries, indent)

    if isinstance(obj, Mapping):
        entries = [
            f"{stream_pretty(key, indent + 1)} : {stream_pretty(value, indent + 1)}"
            for key, value in _map_items(obj)
        ]
        return f"{type_name} " + _block("{", "}", entries, indent)

    if _is_sequence(obj):
        entries = [stream_pretty(item, indent + 1) for item in _sequence_items(obj)]
        return f"{type_name} " + _block("[", "]", entries, indent)

    return f'{type_name} "{_scalar(obj)}"'