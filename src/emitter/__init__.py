"""Emit Go source literals for typed Python data."""

from .errors import (
    EmitError,
    InvalidValueError,
    NoEmittableFieldsError,
    RecursionDepthError,
    RegistrationError,
    UnknownPackageError,
    UnnamedTypeError,
    UnsupportedKindError,
    UnsupportedLocationError,
)
from .printer import Printer, emit_literal
from .writer import EmitOptions, EmitResult

__all__ = [
    "EmitError",
    "EmitOptions",
    "EmitResult",
    "InvalidValueError",
    "NoEmittableFieldsError",
    "Printer",
    "RecursionDepthError",
    "RegistrationError",
    "UnknownPackageError",
    "UnnamedTypeError",
    "UnsupportedKindError",
    "UnsupportedLocationError",
    "emit_literal",
]
