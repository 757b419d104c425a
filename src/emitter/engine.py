"""
Recursive core that writes a Go expression for typed Python data.

Every call carries an imputed type: the type the surrounding Go syntax already
fixes for the text being written (a container's declared element, key or value
type, or a struct field's declared type). Constants in such a position are
converted implicitly by the Go compiler, and composite literals there may drop
their type name when `elide` is set. At the top level there is no imputed type.

The first failure raises and unwinds the whole walk, so one call reports exactly
one error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, List, Optional

from gotypes import BOOL, COMPLEX128, FLOAT64, INT, STRING, Kind, TypeDescriptor, Value
from gotypes.values import (
    deref,
    elements,
    infer_type,
    is_zero,
    iter_fields,
    map_items,
    struct_data_problem,
)

from .errors import (
    EmitError,
    InvalidValueError,
    NoEmittableFieldsError,
    RecursionDepthError,
    UnsupportedKindError,
)
from .layout import one_line_type, one_line_value
from .literals import (
    complex_text,
    float_text,
    int_in_range,
    quote_string,
    special_float,
    to_float32,
)
from .naming import type_name
from .ordering import order_items
from .writer import SourceWriter

if TYPE_CHECKING:
    from .printer import Printer


_HANDLERS = {
    Kind.BOOL: "primitive",
    Kind.STRING: "primitive",
    Kind.FLOAT32: "float",
    Kind.FLOAT64: "float",
    Kind.COMPLEX64: "complex",
    Kind.COMPLEX128: "complex",
    Kind.POINTER: "pointer",
    Kind.INTERFACE: "interface",
    Kind.SLICE: "sequence",
    Kind.ARRAY: "sequence",
    Kind.MAP: "map",
    Kind.STRUCT: "struct",
    Kind.FUNC: "unsupported",
    Kind.CHAN: "unsupported",
    Kind.UNSAFE_POINTER: "unsupported",
}

# Composite kinds whose literals can take the & operator.
_ADDRESSABLE_LITERALS = (Kind.STRUCT, Kind.SLICE, Kind.ARRAY, Kind.MAP)


def default_type(kind: Kind) -> TypeDescriptor:
    """Type an untyped constant of this kind takes when nothing converts it."""
    if kind == Kind.BOOL:
        return BOOL
    if kind == Kind.STRING:
        return STRING
    if kind.is_integer:
        # An unsigned value printed as a literal acts like any other integer literal.
        return INT
    if kind.is_float:
        return FLOAT64
    if kind.is_complex:
        return COMPLEX128
    raise ValueError(f"{kind.value} values have no constant literal")


class EmissionState:
    """Per-call state: output writer and recursion depth."""

    def __init__(self, printer: "Printer", writer: SourceWriter) -> None:
        self._printer = printer
        self._options = printer.options
        self._out = writer
        self._depth = 0

    # ------------------------------------------------------------------ helpers

    def emit(
        self,
        data: Any,
        type_: Optional[TypeDescriptor],
        imputed: Optional[TypeDescriptor],
        elide: bool,
    ) -> None:
        if self._depth > self._options.max_depth:
            raise RecursionDepthError(self._options.max_depth, type_)
        self._depth += 1
        try:
            self._emit(data, type_, imputed, elide)
        finally:
            self._depth -= 1

    def _emit(
        self,
        data: Any,
        type_: Optional[TypeDescriptor],
        imputed: Optional[TypeDescriptor],
        elide: bool,
    ) -> None:
        if type_ is None:
            self._out.write("nil")
            return
        if isinstance(data, Value) and type_.kind != Kind.INTERFACE:
            if data.type != type_:
                raise InvalidValueError(
                    f"value of type {data.type} used where {type_} is declared", type_
                )
            data = data.data

        encoder = self._printer.encoders.get(type_)
        if encoder is not None:
            self._out.write(self._call_encoder(encoder, data, type_))
            return

        kind = type_.kind
        handler_name = "integer" if kind.is_integer else _HANDLERS[kind]
        handler = getattr(self, f"_emit_{handler_name}")
        handler(data, type_, imputed, elide)

    def _render(
        self,
        data: Any,
        type_: Optional[TypeDescriptor],
        imputed: Optional[TypeDescriptor],
        elide: bool,
    ) -> str:
        with self._out.capture() as buffer:
            self.emit(data, type_, imputed, elide)
        return buffer.getvalue()

    def _type_name(self, type_: TypeDescriptor) -> str:
        return type_name(type_, self._printer.package_identifier)

    def _call_encoder(
        self, encoder: Callable[[Any], str], data: Any, type_: TypeDescriptor
    ) -> str:
        text = encoder(data)
        if not isinstance(text, str):
            raise EmitError(
                f"encoder for {type_} returned {type(text).__name__}, expected str", type_
            )
        return text

    def _math_ident(self) -> str:
        return self._printer.package_identifier("math")

    def _emit_nil(self, type_: TypeDescriptor, imputed: Optional[TypeDescriptor]) -> None:
        if type_ == imputed:
            self._out.write("nil")
            return
        name = self._type_name(type_)
        if name.startswith("*"):
            self._out.write(f"({name})(nil)")
        else:
            self._out.write(f"{name}(nil)")

    def _emit_constant(
        self, text: str, type_: TypeDescriptor, imputed: Optional[TypeDescriptor]
    ) -> None:
        # Only an imputed non-interface type converts the constant for us.
        if type_ != default_type(type_.kind) and (
            imputed is None or imputed.kind == Kind.INTERFACE
        ):
            self._out.write(f"{self._type_name(type_)}({text})")
        else:
            self._out.write(text)

    def _emit_entries(self, multiline: bool, items: List[Any], emit_one) -> None:
        out = self._out
        out.write("{")
        if multiline:
            with out.indented():
                for item in items:
                    out.newline()
                    emit_one(item)
                    out.write(",")
            out.newline()
        else:
            for index, item in enumerate(items):
                if index:
                    out.write(", ")
                emit_one(item)
        out.write("}")

    def _should_name(
        self, type_: TypeDescriptor, imputed: Optional[TypeDescriptor], elide: bool
    ) -> bool:
        return not (elide and type_ == imputed)

    # ------------------------------------------------------------- primitives

    def _emit_primitive(self, data, type_, imputed, elide) -> None:
        if type_.kind == Kind.BOOL:
            if data is None:
                data = False
            if not isinstance(data, bool):
                raise InvalidValueError(
                    f"expected bool data for {type_}, got {type(data).__name__}", type_
                )
            text = "true" if data else "false"
        else:
            if data is None:
                data = ""
            if not isinstance(data, str):
                raise InvalidValueError(
                    f"expected str data for {type_}, got {type(data).__name__}", type_
                )
            try:
                text = quote_string(data)
            except ValueError as exc:
                raise InvalidValueError(f"{exc} in {type_} data", type_) from exc
        self._emit_constant(text, type_, imputed)

    def _emit_integer(self, data, type_, imputed, elide) -> None:
        if data is None:
            data = 0
        if isinstance(data, bool) or not isinstance(data, int):
            raise InvalidValueError(
                f"expected int data for {type_}, got {type(data).__name__}", type_
            )
        if not int_in_range(data, type_.kind):
            raise InvalidValueError(f"{data} overflows {type_}", type_)
        self._emit_constant(str(data), type_, imputed)

    def _as_float(self, data: Any, type_: TypeDescriptor) -> float:
        if data is None:
            return 0.0
        try:
            value = float(data)
            if type_.kind == Kind.FLOAT32:
                to_float32(value)
        except (TypeError, ValueError) as exc:
            raise InvalidValueError(
                f"expected float data for {type_}, got {type(data).__name__}", type_
            ) from exc
        except OverflowError as exc:
            raise InvalidValueError(f"{data!r} overflows {type_}", type_) from exc
        return value

    def _emit_float(self, data, type_, imputed, elide) -> None:
        value = self._as_float(data, type_)
        special = special_float(value, self._math_ident())
        if not special:
            self._emit_constant(float_text(value, type_.kind), type_, imputed)
        elif type_ == FLOAT64:
            self._out.write(special)
        else:
            # Not a constant, so no context converts it implicitly.
            self._out.write(f"{self._type_name(type_)}({special})")

    def _emit_complex(self, data, type_, imputed, elide) -> None:
        try:
            value = complex(data) if data is not None else 0j
        except (TypeError, ValueError) as exc:
            raise InvalidValueError(
                f"expected complex data for {type_}, got {type(data).__name__}", type_
            ) from exc
        math_ident = self._math_ident()
        real_special = special_float(value.real, math_ident)
        imag_special = special_float(value.imag, math_ident)
        if not real_special and not imag_special:
            self._emit_constant(complex_text(value, type_.kind), type_, imputed)
            return
        real = real_special or float_text(value.real, type_.kind, force_fraction=False)
        imag = imag_special or float_text(value.imag, type_.kind, force_fraction=False)
        text = f"complex({real}, {imag})"
        if type_ == COMPLEX128:
            self._out.write(text)
        else:
            self._out.write(f"{self._type_name(type_)}({text})")

    # ------------------------------------------------------------- references

    def _emit_pointer(self, data, type_, imputed, elide) -> None:
        if data is None:
            self._emit_nil(type_, imputed)
            return
        target = deref(data)
        elem = type_.elem
        if (
            elem.kind not in _ADDRESSABLE_LITERALS
            or elem in self._printer.encoders
            or (elem.kind.is_nillable and target is None)
        ):
            # Go has no literal for the address of a constant or a call.
            name = self._type_name(elem)
            inner = self._render(target, elem, elem, False)
            self._out.write(f"func() *{name} {{ var x {name} = {inner}; return &x }}()")
        elif elide and type_ == imputed:
            self.emit(target, elem, imputed.elem, elide)
        else:
            self._out.write("&")
            self.emit(target, elem, None, False)

    def _emit_interface(self, data, type_, imputed, elide) -> None:
        if data is None:
            self._emit_nil(type_, imputed)
            return
        if isinstance(data, Value):
            dynamic_type, dynamic = data.type, data.data
        else:
            dynamic_type, dynamic = infer_type(data, self._printer.classes), data
        if dynamic_type is None:
            raise InvalidValueError(
                f"cannot infer the Go type of {type(data).__name__} data stored in {type_}; "
                "wrap it in a Value or call Printer.register_type",
                type_,
            )
        self.emit(dynamic, dynamic_type, imputed, elide)

    def _emit_unsupported(self, data, type_, imputed, elide) -> None:
        raise UnsupportedKindError(type_)

    # ------------------------------------------------------------- composites

    def _emit_sequence(self, data, type_, imputed, elide) -> None:
        if type_.kind == Kind.SLICE and data is None:
            self._emit_nil(type_, imputed)
            return
        if type_.kind == Kind.ARRAY and data is None:
            items = [None] * type_.length
        else:
            try:
                items = elements(data)
            except TypeError as exc:
                raise InvalidValueError(f"{exc} for {type_}", type_) from exc
        if type_.kind == Kind.ARRAY and len(items) != type_.length:
            raise InvalidValueError(
                f"{type_} needs {type_.length} elements, got {len(items)}", type_
            )
        if self._should_name(type_, imputed, elide):
            self._out.write(self._type_name(type_))
        elem = type_.elem
        self._emit_entries(
            not one_line_value(items, type_, self._options),
            items,
            lambda item: self.emit(item, elem, elem, True),
        )

    def _emit_map(self, data, type_, imputed, elide) -> None:
        if data is None:
            self._emit_nil(type_, imputed)
            return
        try:
            items = map_items(data)
        except (TypeError, ValueError) as exc:
            raise InvalidValueError(
                f"expected a mapping or (key, value) pairs for {type_}", type_
            ) from exc
        items = order_items(items, type_.key, self._printer.comparators)
        if self._should_name(type_, imputed, elide):
            self._out.write(self._type_name(type_))
        key_type, value_type = type_.key, type_.elem

        def emit_pair(pair) -> None:
            self.emit(pair[0], key_type, key_type, True)
            self._out.write(": ")
            self.emit(pair[1], value_type, value_type, True)

        self._emit_entries(not one_line_value(items, type_, self._options), items, emit_pair)

    def _emit_struct(self, data, type_, imputed, elide) -> None:
        problem = struct_data_problem(data, type_)
        if problem:
            raise InvalidValueError(problem, type_)
        home = type_.package == self._printer.package_path
        chosen = [
            (field, value)
            for field, value in iter_fields(data, type_)
            if (home or field.exported) and not is_zero(value, field.type)
        ]
        if not chosen and not is_zero(data, type_):
            raise NoEmittableFieldsError(type_)
        multiline = len(chosen) > 1 and any(
            not one_line_type(field.type) for field, _ in chosen
        )
        if self._should_name(type_, imputed, elide):
            self._out.write(self._type_name(type_))

        def emit_field(entry) -> None:
            field, value = entry
            self._out.write(f"{field.name}: ")
            self.emit(value, field.type, field.type, False)

        self._emit_entries(multiline, chosen, emit_field)


__all__ = ["EmissionState", "default_type"]
