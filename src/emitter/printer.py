"""
The Printer: registries plus the public entry points for emitting Go literals.

A Printer is created for the Go package the generated code will live in. Before
use it is configured with import identifiers, custom encoders for types that
have no literal form, comparators for map keys, and Python classes that map to
Go types. After configuration it is only read, so one Printer can serve
independent callers.

    printer = Printer("example.com/geo")
    printer.register_import("example.com/units", "u")
    source = printer.sprint(Value(slice_of(POINT), points))
"""

from __future__ import annotations

import inspect
import io
import logging
import posixpath
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Optional, TextIO

from gotypes import TIME, TypeDescriptor, Value, infer_type

from .engine import EmissionState
from .errors import (
    InvalidValueError,
    RecursionDepthError,
    RegistrationError,
    UnknownPackageError,
    UnsupportedLocationError,
)
from .ordering import LessFunc
from .writer import EmitOptions, EmitResult, SourceWriter

logger = logging.getLogger(__name__)

Encoder = Callable[[Any], str]

_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def _positional_arity(func: Callable, what: str) -> int:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError) as exc:
        raise RegistrationError(f"cannot inspect {what} {func!r}: {exc}") from exc
    count = 0
    for parameter in signature.parameters.values():
        if parameter.kind == parameter.VAR_POSITIONAL:
            raise RegistrationError(f"{what} {func!r} must not be variadic")
        if parameter.kind in (parameter.POSITIONAL_ONLY, parameter.POSITIONAL_OR_KEYWORD):
            if parameter.default is parameter.empty:
                count += 1
        elif parameter.kind == parameter.KEYWORD_ONLY and parameter.default is parameter.empty:
            raise RegistrationError(
                f"{what} {func!r} has required keyword-only parameter {parameter.name!r}"
            )
    return count


def _check_same_argument_types(func: Callable, what: str) -> None:
    parameters = [
        p
        for p in inspect.signature(func).parameters.values()
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
    ][:2]
    annotations = [p.annotation for p in parameters]
    if len(annotations) < 2 or inspect.Parameter.empty in annotations:
        return
    if annotations[0] != annotations[1]:
        raise RegistrationError(
            f"{what} {func!r} must take two arguments of the same type, "
            f"annotated {annotations[0]!r} and {annotations[1]!r}"
        )


def _check_return(func: Callable, expected: type, what: str) -> None:
    annotation = inspect.signature(func).return_annotation
    if annotation is inspect.Signature.empty:
        return
    if annotation not in (expected, expected.__name__):
        raise RegistrationError(
            f"{what} {func!r} must return {expected.__name__}, annotated {annotation!r}"
        )


class Printer:
    """Emits Go source for typed Python data."""

    def __init__(self, package_path: str, options: Optional[EmitOptions] = None) -> None:
        self.package_path = package_path
        self.options = options or EmitOptions()
        self.imports: Dict[str, str] = {"math": "math", "time": "time"}
        self.encoders: Dict[TypeDescriptor, Encoder] = {}
        self.comparators: Dict[TypeDescriptor, LessFunc] = {}
        self.classes: Dict[type, TypeDescriptor] = {}
        self.register_encoder(TIME, self._encode_time)

    # --------------------------------------------------------------- imports

    def register_import(self, package_path: str, identifier: Optional[str] = None) -> None:
        """
        Use `identifier` when naming types from `package_path`.

        The identifier defaults to the last path component, which is the usual
        package name but not always the right one (paths ending in /v2, renamed
        imports).
        """
        ident = identifier or posixpath.basename(package_path.rstrip("/"))
        if not ident.isidentifier():
            raise ValueError(f"{ident!r} is not a valid Go identifier for {package_path!r}")
        self.imports[package_path] = ident
        logger.debug("registered import %s as %s", package_path, ident)

    def package_identifier(self, package_path: str) -> str:
        """Prefix for types from `package_path`; "" for the printer's own package."""
        if package_path == self.package_path:
            return ""
        try:
            return self.imports[package_path]
        except KeyError:
            raise UnknownPackageError(package_path) from None

    # ------------------------------------------------------------- encoders

    def register_encoder(self, type_: TypeDescriptor, encoder: Encoder) -> Encoder:
        """
        Render values of exactly `type_` with `encoder` instead of a literal.

        `encoder` takes the value's data and returns Go source text. Exceptions
        it raises reach the caller unchanged. An existing encoder for the type
        is replaced.

        Raises:
            RegistrationError: `encoder` is not a one-argument callable returning str.
        """
        if not callable(encoder):
            raise RegistrationError(f"encoder for {type_} is not callable: {encoder!r}", type_)
        arity = _positional_arity(encoder, "encoder")
        if arity != 1:
            raise RegistrationError(
                f"encoder for {type_} must take exactly one argument, takes {arity}", type_
            )
        _check_return(encoder, str, "encoder")
        self.encoders[type_] = encoder
        logger.debug("registered encoder for %s", type_)
        return encoder

    def encoder(self, type_: TypeDescriptor) -> Callable[[Encoder], Encoder]:
        """Decorator form of `register_encoder`."""
        return lambda func: self.register_encoder(type_, func)

    # ----------------------------------------------------------- comparators

    def register_comparator(self, type_: TypeDescriptor, less: LessFunc) -> LessFunc:
        """
        Sort map keys of exactly `type_` with `less(a, b) -> bool`.

        Overrides the built-in orderings for bool, numeric and string kinds.

        Raises:
            RegistrationError: `less` is not a two-argument callable returning bool,
                or its arguments are annotated with different types.
        """
        if not callable(less):
            raise RegistrationError(f"comparator for {type_} is not callable: {less!r}", type_)
        arity = _positional_arity(less, "comparator")
        if arity != 2:
            raise RegistrationError(
                f"comparator for {type_} must take exactly two arguments, takes {arity}", type_
            )
        _check_same_argument_types(less, "comparator")
        _check_return(less, bool, "comparator")
        self.comparators[type_] = less
        logger.debug("registered comparator for %s", type_)
        return less

    def comparator(self, type_: TypeDescriptor) -> Callable[[LessFunc], LessFunc]:
        """Decorator form of `register_comparator`."""
        return lambda func: self.register_comparator(type_, func)

    # ----------------------------------------------------------------- types

    def register_type(self, cls: type, type_: TypeDescriptor) -> None:
        """Treat instances of `cls` found in interface positions as `type_`."""
        self.classes[cls] = type_

    # ----------------------------------------------------------- entry points

    def _resolve(self, value: Any, type_: Optional[TypeDescriptor]):
        if type_ is not None:
            return value, type_
        if isinstance(value, Value):
            return value.data, value.type
        if value is None:
            return None, None
        inferred = infer_type(value, self.classes)
        if inferred is None:
            raise InvalidValueError(
                f"cannot infer the Go type of {type(value).__name__}; pass type= or a Value"
            )
        return value, inferred

    def fprint(self, sink: TextIO, value: Any, type: Optional[TypeDescriptor] = None) -> None:
        """
        Write a Go expression for `value` to `sink`.

        Text is written as it is produced, so `sink` may hold a partial
        expression when an error is raised.
        """
        data, type_ = self._resolve(value, type)
        writer = SourceWriter(sink, self.options.indent)
        state = EmissionState(self, writer)
        try:
            state.emit(data, type_, None, False)
        except RecursionError as exc:
            raise RecursionDepthError(self.options.max_depth, type_) from exc
        if self.options.trailing_newline:
            writer.write("\n")

    def sprint(self, value: Any, type: Optional[TypeDescriptor] = None) -> str:
        """Return a Go expression for `value`."""
        buffer = io.StringIO()
        self.fprint(buffer, value, type)
        return buffer.getvalue()

    # -------------------------------------------------------- built-in encoders

    def _encode_time(self, moment: datetime) -> str:
        if not isinstance(moment, datetime):
            raise InvalidValueError(
                f"expected datetime data for {TIME}, got {type(moment).__name__}", TIME
            )
        if moment.tzinfo is None:
            location = "Local"
        elif moment.utcoffset() == timedelta(0) and moment.tzname() in ("UTC", "UTC+00:00"):
            location = "UTC"
        else:
            raise UnsupportedLocationError(str(moment.tzname()), TIME)
        ident = self.package_identifier(TIME.package)
        month = _MONTHS[moment.month - 1]
        return (
            f"{ident}.Date({moment.year}, {ident}.{month}, {moment.day}, "
            f"{moment.hour}, {moment.minute}, {moment.second}, "
            f"{moment.microsecond * 1000}, {ident}.{location})"
        )


def emit_literal(
    value: Any,
    *,
    package_path: str,
    type: Optional[TypeDescriptor] = None,
    options: Optional[EmitOptions] = None,
) -> EmitResult:
    """One-shot helper: emit `value` with a default-configured Printer."""
    printer = Printer(package_path, options)
    data, type_ = printer._resolve(value, type)
    return EmitResult(source=printer.sprint(data, type_), type=type_)


__all__ = ["Encoder", "Printer", "emit_literal"]
