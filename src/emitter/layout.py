"""
Decide whether a composite literal fits on one line.

Small values of small types stay on one line; anything else is written one
entry per line. Pointers never count as small because primitive pointers are
emitted as inline function literals.
"""

from __future__ import annotations

from typing import Any

from gotypes import Kind, TypeDescriptor
from gotypes.values import elements, is_zero, map_items, unwrap

from .writer import EmitOptions


def one_line_type(type_: TypeDescriptor) -> bool:
    kind = type_.kind
    if kind in (Kind.STRING, Kind.POINTER):
        return False
    if kind == Kind.STRUCT:
        if len(type_.fields) > 2:
            return False
        return all(one_line_type(f.type) for f in type_.fields)
    return kind.is_primitive


def one_line_value(data: Any, type_: TypeDescriptor, options: EmitOptions) -> bool:
    if type_.kind != Kind.INTERFACE:
        data = unwrap(data)
    if one_line_type(type_):
        return True
    if is_zero(data, type_):
        return True
    kind = type_.kind
    if kind == Kind.STRING:
        return isinstance(data, str) and len(data) <= options.max_inline_string
    if kind in (Kind.SLICE, Kind.ARRAY):
        try:
            items = elements(data)
        except TypeError:
            # Bad data; the emitter reports it when it reaches the value.
            return False
        return (
            not items
            or (len(items) == 1 and one_line_value(items[0], type_.elem, options))
            or (len(items) <= options.max_inline_elements and one_line_type(type_.elem))
        )
    if kind == Kind.MAP:
        try:
            pairs = map_items(data)
        except (TypeError, ValueError):
            return False
        if not pairs:
            return True
        key, value = pairs[0]
        return (
            len(pairs) == 1
            and one_line_value(key, type_.key, options)
            and one_line_value(value, type_.elem, options)
        ) or (
            len(pairs) <= options.max_inline_pairs
            and one_line_type(type_.key)
            and one_line_type(type_.elem)
        )
    return False


__all__ = ["one_line_type", "one_line_value"]
