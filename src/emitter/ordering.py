"""
Deterministic ordering for map keys.

Go maps iterate in random order, so the emitter sorts keys whenever it knows
how: with a comparator registered for the exact key type, or with the natural
order of bool, integer, float and string kinds. Keys of any other type keep the
order the map data yields them in.
"""

from __future__ import annotations

import logging
from functools import cmp_to_key
from typing import Any, Callable, Dict, List, Optional, Tuple

from gotypes import Kind, TypeDescriptor

from .errors import InvalidValueError

logger = logging.getLogger(__name__)

LessFunc = Callable[[Any, Any], bool]


def _natural_less(a: Any, b: Any) -> bool:
    return a < b


def _bool_less(a: Any, b: Any) -> bool:
    return not a and bool(b)


def less_func(
    key_type: TypeDescriptor, registered: Dict[TypeDescriptor, LessFunc]
) -> Optional[LessFunc]:
    """Return a less-than function for `key_type`, or None when keys can't be sorted."""
    if key_type in registered:
        return registered[key_type]
    kind = key_type.kind
    if kind == Kind.BOOL:
        return _bool_less
    if kind == Kind.STRING or kind.is_integer or kind.is_float:
        return _natural_less
    return None


def order_items(
    items: List[Tuple[Any, Any]],
    key_type: TypeDescriptor,
    registered: Dict[TypeDescriptor, LessFunc],
) -> List[Tuple[Any, Any]]:
    """Sort (key, value) pairs by key when an ordering is known."""
    less = less_func(key_type, registered)
    if less is None:
        if len(items) > 1:
            logger.debug(
                "no ordering for map key type %s; keeping iteration order", key_type
            )
        return items

    def compare(left: Tuple[Any, Any], right: Tuple[Any, Any]) -> int:
        if less(left[0], right[0]):
            return -1
        if less(right[0], left[0]):
            return 1
        return 0

    try:
        return sorted(items, key=cmp_to_key(compare))
    except TypeError as exc:
        if key_type in registered:
            raise
        raise InvalidValueError(
            f"cannot order map keys of type {key_type}: {exc}", key_type
        ) from exc


__all__ = ["LessFunc", "less_func", "order_items"]
