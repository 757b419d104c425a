"""
Value handles and data accessors for the Go type model.

Python data carries no Go type of its own, so a `Value` pairs data with the
`TypeDescriptor` it should be read as. Nested data is read according to the
declared element/field types of its container; only interface positions need a
`Value` (or data whose type `infer_type` can work out).
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .descriptors import (
    BOOL,
    COMPLEX128,
    FLOAT64,
    INT,
    STRING,
    TIME,
    Field,
    Kind,
    TypeDescriptor,
)


@dataclass(frozen=True)
class Value:
    """Data paired with the Go type it represents."""

    type: TypeDescriptor
    data: Any = None


@dataclass(frozen=True)
class Ref:
    """
    Explicit pointer target.

    Pointer data is normally the referent itself, with `None` meaning a nil
    pointer. `Ref` is needed only when the referent is itself `None`, e.g. a
    non-nil `**int` pointing at a nil `*int`.
    """

    target: Any


def deref(data: Any) -> Any:
    """Return the referent of non-nil pointer data."""
    if isinstance(data, Ref):
        return data.target
    return data


def struct_field(data: Any, field: Field) -> Any:
    """Read a field from mapping or attribute-style struct data."""
    if data is None:
        return None
    if isinstance(data, Mapping):
        return data.get(field.name)
    return getattr(data, field.name, None)


_SCALARS_AND_SEQUENCES = (
    str, bytes, bool, int, float, complex, list, tuple, set, frozenset,
)


def struct_data_problem(data: Any, type_: TypeDescriptor) -> Optional[str]:
    """Say why `data` cannot be read as struct `type_`, or return None."""
    if data is None:
        return None
    if isinstance(data, Mapping):
        for key in data:
            if not any(f.name == key for f in type_.fields):
                return f"{type_} has no field {key!r}"
        return None
    if isinstance(data, _SCALARS_AND_SEQUENCES):
        return (
            f"expected a mapping or an object with attributes for {type_}, "
            f"got {type(data).__name__}"
        )
    return None


def map_items(data: Any) -> List[Tuple[Any, Any]]:
    if isinstance(data, Mapping):
        return list(data.items())
    return [(key, value) for key, value in data]


def elements(data: Any) -> List[Any]:
    if data is None:
        return []
    if isinstance(data, (str, bytes, Mapping)):
        raise TypeError(f"expected a sequence, got {type(data).__name__}")
    return list(data)


# ------------------------------------------------------------------ zero values


def _float_is_zero(value: float) -> bool:
    # Matches Go's bit-pattern test: -0.0 and NaN are non-zero.
    return value == 0.0 and math.copysign(1.0, value) > 0


def is_zero(data: Any, type_: TypeDescriptor) -> bool:
    """Report whether `data` holds the zero value of `type_`."""
    if isinstance(data, Value):
        # A Value in an interface position is a non-nil interface.
        return type_.kind != Kind.INTERFACE and is_zero(data.data, data.type)
    kind = type_.kind
    if kind == Kind.BOOL:
        return data is None or data is False
    if kind == Kind.STRING:
        return not data
    if kind.is_integer:
        return not data
    if kind.is_float or kind.is_complex:
        if data is None:
            return True
        try:
            number = complex(data)
        except (TypeError, ValueError):
            # Not a number; the emitter reports it when it gets there.
            return False
        return _float_is_zero(number.real) and _float_is_zero(number.imag)
    if kind == Kind.ARRAY:
        if data is None:
            return True
        try:
            items = elements(data)
        except TypeError:
            return False
        return all(is_zero(item, type_.elem) for item in items)
    if kind == Kind.STRUCT:
        if data is None:
            return True
        if type_ == TIME and isinstance(data, datetime):
            return False
        if struct_data_problem(data, type_):
            return False
        return all(is_zero(struct_field(data, f), f.type) for f in type_.fields)
    return data is None


# -------------------------------------------------------------------- inference


def infer_type(
    data: Any, classes: Optional[Dict[type, TypeDescriptor]] = None
) -> Optional[TypeDescriptor]:
    """
    Work out the Go type of plain data, or return None when it cannot be done.

    `Value` instances report their own type. Classes registered in `classes`
    (checked along the MRO) map to their descriptor. Otherwise Python scalars map
    to the default Go type of the matching untyped constant.
    """
    if isinstance(data, Value):
        return data.type
    if classes:
        for cls in type(data).__mro__:
            found = classes.get(cls)
            if found is not None:
                return found
    if isinstance(data, bool):
        return BOOL
    if isinstance(data, int):
        return INT
    if isinstance(data, float):
        return FLOAT64
    if isinstance(data, complex):
        return COMPLEX128
    if isinstance(data, str):
        return STRING
    if isinstance(data, datetime):
        return TIME
    return None


def unwrap(data: Any) -> Any:
    return data.data if isinstance(data, Value) else data


def iter_fields(data: Any, type_: TypeDescriptor) -> Iterator[Tuple[Field, Any]]:
    for field in type_.fields:
        yield field, struct_field(data, field)


__all__ = [
    "Ref",
    "Value",
    "deref",
    "elements",
    "infer_type",
    "is_zero",
    "iter_fields",
    "map_items",
    "struct_data_problem",
    "struct_field",
    "unwrap",
]
