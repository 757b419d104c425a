"""Exceptions raised while emitting Go literals."""

from __future__ import annotations

from typing import Optional

from gotypes import TypeDescriptor


class EmitError(RuntimeError):
    """Raised when a value cannot be rendered as Go source."""

    def __init__(
        self,
        message: str,
        type_: Optional[TypeDescriptor] = None,
        package: Optional[str] = None,
    ):
        super().__init__(message)
        self.type = type_
        self.package = package


class UnsupportedKindError(EmitError):
    def __init__(self, type_: TypeDescriptor):
        super().__init__(
            f"cannot emit values of type {type_} ({type_.kind.value}) as source", type_
        )


class UnknownPackageError(EmitError):
    def __init__(self, package: str, type_: Optional[TypeDescriptor] = None):
        what = f" for type {type_}" if type_ is not None else ""
        super().__init__(
            f"unknown package {package!r}{what}; register it with Printer.register_import",
            type_,
            package,
        )


class UnnamedTypeError(EmitError):
    def __init__(self, type_: TypeDescriptor):
        super().__init__(f"can't handle unnamed type {type_}", type_)


class RecursionDepthError(EmitError):
    def __init__(self, limit: int, type_: Optional[TypeDescriptor] = None):
        super().__init__(
            f"max recursion depth exceeded (probable circularity) at depth {limit}"
            + (f" in {type_}" if type_ is not None else ""),
            type_,
        )
        self.limit = limit


class NoEmittableFieldsError(EmitError):
    def __init__(self, type_: TypeDescriptor):
        super().__init__(
            f"non-zero {type_} struct has no printable fields; "
            f"call Printer.register_encoder({type_}, ...)",
            type_,
            type_.package,
        )


class UnsupportedLocationError(EmitError):
    def __init__(self, location: str, type_: Optional[TypeDescriptor] = None):
        super().__init__(
            f"don't know how to represent location {location!r} in source", type_
        )
        self.location = location


class InvalidValueError(EmitError):
    """Data does not have the shape its type descriptor requires."""


class RegistrationError(EmitError, TypeError):
    """An encoder or comparator has the wrong signature."""


__all__ = [
    "EmitError",
    "InvalidValueError",
    "NoEmittableFieldsError",
    "RecursionDepthError",
    "RegistrationError",
    "UnknownPackageError",
    "UnnamedTypeError",
    "UnsupportedKindError",
    "UnsupportedLocationError",
]
