"""Go constant literal text for strings, integers and floats."""

from __future__ import annotations

import math
import struct

from gotypes import Kind

_SIMPLE_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}

_INT_BITS = {
    Kind.INT: 64,
    Kind.INT8: 8,
    Kind.INT16: 16,
    Kind.INT32: 32,
    Kind.INT64: 64,
    Kind.UINT: 64,
    Kind.UINT8: 8,
    Kind.UINT16: 16,
    Kind.UINT32: 32,
    Kind.UINT64: 64,
    Kind.UINTPTR: 64,
}


def quote_string(value: str) -> str:
    """
    Quote `value` as an interpreted Go string literal.

    Raises ValueError for surrogate code points, which Go strings cannot hold.
    """
    out = ['"']
    for ch in value:
        escaped = _SIMPLE_ESCAPES.get(ch)
        if escaped is not None:
            out.append(escaped)
            continue
        code = ord(ch)
        if 0xD800 <= code <= 0xDFFF:
            raise ValueError(f"lone surrogate U+{code:04X} has no Go string form")
        if ch.isprintable():
            out.append(ch)
        elif code < 0x80:
            out.append(f"\\x{code:02x}")
        elif code < 0x10000:
            out.append(f"\\u{code:04x}")
        else:
            out.append(f"\\U{code:08x}")
    out.append('"')
    return "".join(out)


def int_in_range(value: int, kind: Kind) -> bool:
    bits = _INT_BITS[kind]
    if kind.is_unsigned:
        return 0 <= value < (1 << bits)
    return -(1 << (bits - 1)) <= value < (1 << (bits - 1))


def to_float32(value: float) -> float:
    """Round `value` to single precision; raises OverflowError when out of range."""
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _shortest_float32(value: float) -> str:
    rounded = to_float32(value)
    for precision in range(1, 10):
        text = f"{rounded:.{precision}g}"
        if to_float32(float(text)) == rounded:
            return text
    return repr(rounded)


def float_text(value: float, kind: Kind, force_fraction: bool = True) -> str:
    """
    Shortest Go literal that reads back as `value` at the width of `kind`.

    float64 literals carry a fractional part so they never look like integers;
    pass `force_fraction=False` for the components of complex literals.
    """
    if kind in (Kind.FLOAT32, Kind.COMPLEX64):
        return _shortest_float32(value)
    text = repr(float(value))
    if not force_fraction and text.endswith(".0"):
        text = text[:-2]
    return text


def complex_text(value: complex, kind: Kind) -> str:
    real = float_text(value.real, kind, force_fraction=False)
    imag = float_text(value.imag, kind, force_fraction=False)
    sign = "" if imag.startswith("-") else "+"
    return f"({real}{sign}{imag}i)"


def special_float(value: float, math_ident: str) -> str:
    """Call text for NaN, the infinities and negative zero, or "" for other values."""
    if math.isnan(value):
        return f"{math_ident}.NaN()"
    if math.isinf(value):
        return f"{math_ident}.Inf({1 if value > 0 else -1})"
    if value == 0 and math.copysign(1.0, value) < 0:
        # Go folds a -0 constant to +0.
        return f"{math_ident}.Copysign(0, -1)"
    return ""


__all__ = [
    "complex_text",
    "float_text",
    "int_in_range",
    "quote_string",
    "special_float",
    "to_float32",
]
