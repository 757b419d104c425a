"""
Go type descriptors used to drive literal emission.

A `TypeDescriptor` records what the emitter needs to know about a Go type: its
kind, where it is declared, its name, and the types it is composed of. The
predeclared types are module-level constants; composite types are built with
the `*_of` constructors and named types with `named`.

Named types can be declared before they are defined, which is how recursive
types are expressed:

    node = named("example.com/list", "node", Kind.STRUCT)
    node.define(struct_of(Field("v", INT), Field("next", pointer_to(node))))
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class Kind(str, Enum):
    BOOL = "bool"
    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    UINTPTR = "uintptr"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    COMPLEX64 = "complex64"
    COMPLEX128 = "complex128"
    STRING = "string"
    POINTER = "ptr"
    SLICE = "slice"
    ARRAY = "array"
    MAP = "map"
    STRUCT = "struct"
    INTERFACE = "interface"
    FUNC = "func"
    CHAN = "chan"
    UNSAFE_POINTER = "unsafe.Pointer"

    @property
    def is_unsigned(self) -> bool:
        return self in _UNSIGNED

    @property
    def is_integer(self) -> bool:
        return self in _SIGNED or self in _UNSIGNED

    @property
    def is_float(self) -> bool:
        return self in (Kind.FLOAT32, Kind.FLOAT64)

    @property
    def is_complex(self) -> bool:
        return self in (Kind.COMPLEX64, Kind.COMPLEX128)

    @property
    def is_primitive(self) -> bool:
        """Kinds whose values can be written as a single constant literal."""
        return (
            self in (Kind.BOOL, Kind.STRING)
            or self.is_integer
            or self.is_float
            or self.is_complex
        )

    @property
    def is_nillable(self) -> bool:
        return self in (Kind.POINTER, Kind.SLICE, Kind.MAP, Kind.INTERFACE)


_SIGNED = frozenset({Kind.INT, Kind.INT8, Kind.INT16, Kind.INT32, Kind.INT64})
_UNSIGNED = frozenset(
    {Kind.UINT, Kind.UINT8, Kind.UINT16, Kind.UINT32, Kind.UINT64, Kind.UINTPTR}
)


@dataclass(frozen=True)
class Field:
    """A struct field. Exported fields start with an upper-case letter."""

    name: str
    type: "TypeDescriptor"

    @property
    def exported(self) -> bool:
        return self.name[:1].isupper()


@dataclass(eq=False)
class TypeDescriptor:
    """Describes one Go type. Treat as immutable once defined."""

    kind: Kind
    name: str = ""
    package: str = ""
    elem: Optional["TypeDescriptor"] = None
    key: Optional["TypeDescriptor"] = None
    length: Optional[int] = None
    fields: Tuple[Field, ...] = ()
    methods: Tuple[str, ...] = ()
    _defined: bool = field(default=True, repr=False)

    # ------------------------------------------------------------- identity

    @property
    def is_named(self) -> bool:
        return bool(self.name)

    def _identity(self):
        if self.is_named:
            return ("named", self.package, self.name, self.kind)
        return (
            "unnamed",
            self.kind,
            self.elem,
            self.key,
            self.length,
            self.fields,
            self.methods,
        )

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, TypeDescriptor):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())

    # ----------------------------------------------------------- definition

    def define(self, underlying: "TypeDescriptor") -> "TypeDescriptor":
        """Give a declared named type its underlying structure."""
        if self._defined:
            raise ValueError(f"type {self} is already defined")
        if underlying.kind != self.kind:
            raise ValueError(
                f"cannot define {self} ({self.kind.value}) with a {underlying.kind.value} type"
            )
        self.elem = underlying.elem
        self.key = underlying.key
        self.length = underlying.length
        self.fields = underlying.fields
        self.methods = underlying.methods
        self._defined = True
        return self

    # -------------------------------------------------------------- display

    def __str__(self) -> str:
        if self.is_named:
            if not self.package:
                return self.name
            return f"{posixpath.basename(self.package)}.{self.name}"
        kind = self.kind
        if kind == Kind.POINTER:
            return f"*{self.elem}"
        if kind == Kind.SLICE:
            return f"[]{self.elem}"
        if kind == Kind.ARRAY:
            return f"[{self.length}]{self.elem}"
        if kind == Kind.MAP:
            return f"map[{self.key}]{self.elem}"
        if kind == Kind.CHAN:
            return f"chan {self.elem}"
        if kind == Kind.FUNC:
            return "func()"
        if kind == Kind.STRUCT:
            if not self.fields:
                return "struct {}"
            body = "; ".join(f"{f.name} {f.type}" for f in self.fields)
            return f"struct {{ {body} }}"
        if kind == Kind.INTERFACE:
            if not self.methods:
                return "interface {}"
            return "interface { " + "; ".join(f"{m}()" for m in self.methods) + " }"
        return kind.value


def _predeclared(kind: Kind, name: Optional[str] = None) -> TypeDescriptor:
    return TypeDescriptor(kind=kind, name=name or kind.value)


BOOL = _predeclared(Kind.BOOL)
INT = _predeclared(Kind.INT)
INT8 = _predeclared(Kind.INT8)
INT16 = _predeclared(Kind.INT16)
INT32 = _predeclared(Kind.INT32)
INT64 = _predeclared(Kind.INT64)
UINT = _predeclared(Kind.UINT)
UINT8 = _predeclared(Kind.UINT8)
UINT16 = _predeclared(Kind.UINT16)
UINT32 = _predeclared(Kind.UINT32)
UINT64 = _predeclared(Kind.UINT64)
UINTPTR = _predeclared(Kind.UINTPTR)
FLOAT32 = _predeclared(Kind.FLOAT32)
FLOAT64 = _predeclared(Kind.FLOAT64)
COMPLEX64 = _predeclared(Kind.COMPLEX64)
COMPLEX128 = _predeclared(Kind.COMPLEX128)
STRING = _predeclared(Kind.STRING)
UNSAFE_POINTER = TypeDescriptor(kind=Kind.UNSAFE_POINTER, name="Pointer", package="unsafe")

def pointer_to(elem: TypeDescriptor) -> TypeDescriptor:
    return TypeDescriptor(kind=Kind.POINTER, elem=elem)


def slice_of(elem: TypeDescriptor) -> TypeDescriptor:
    return TypeDescriptor(kind=Kind.SLICE, elem=elem)


def array_of(length: int, elem: TypeDescriptor) -> TypeDescriptor:
    if length < 0:
        raise ValueError(f"negative array length {length}")
    return TypeDescriptor(kind=Kind.ARRAY, elem=elem, length=length)


def map_of(key: TypeDescriptor, elem: TypeDescriptor) -> TypeDescriptor:
    return TypeDescriptor(kind=Kind.MAP, key=key, elem=elem)


def struct_of(*fields: Field) -> TypeDescriptor:
    names = [f.name for f in fields]
    if len(set(names)) != len(names):
        raise ValueError(f"duplicate field names in struct: {names}")
    return TypeDescriptor(kind=Kind.STRUCT, fields=tuple(fields))


def interface_of(*methods: str) -> TypeDescriptor:
    return TypeDescriptor(kind=Kind.INTERFACE, methods=tuple(sorted(methods)))


def func_of() -> TypeDescriptor:
    return TypeDescriptor(kind=Kind.FUNC)


def chan_of(elem: TypeDescriptor) -> TypeDescriptor:
    return TypeDescriptor(kind=Kind.CHAN, elem=elem)


def named(
    package: str,
    name: str,
    underlying,
) -> TypeDescriptor:
    """
    Declare a named type in `package`.

    Args:
        package: Import path of the declaring package.
        name: Type name as written in Go source.
        underlying: A TypeDescriptor to copy the structure from, or a Kind to
            declare the type now and `define` it later.
    """
    if not name:
        raise ValueError("named types need a name")
    if isinstance(underlying, Kind):
        return TypeDescriptor(kind=underlying, name=name, package=package, _defined=False)
    return TypeDescriptor(
        kind=underlying.kind,
        name=name,
        package=package,
        elem=underlying.elem,
        key=underlying.key,
        length=underlying.length,
        fields=underlying.fields,
        methods=underlying.methods,
    )


ANY = interface_of()

# time.Time keeps its state in unexported fields.
TIME = named(
    "time",
    "Time",
    struct_of(
        Field("wall", UINT64),
        Field("ext", INT64),
        Field("loc", pointer_to(named("time", "Location", Kind.STRUCT))),
    ),
)


__all__ = [
    "ANY",
    "BOOL",
    "COMPLEX128",
    "COMPLEX64",
    "FLOAT32",
    "FLOAT64",
    "Field",
    "INT",
    "INT16",
    "INT32",
    "INT64",
    "INT8",
    "Kind",
    "STRING",
    "TIME",
    "TypeDescriptor",
    "UINT",
    "UINT16",
    "UINT32",
    "UINT64",
    "UINT8",
    "UINTPTR",
    "UNSAFE_POINTER",
    "array_of",
    "chan_of",
    "func_of",
    "interface_of",
    "map_of",
    "named",
    "pointer_to",
    "slice_of",
    "struct_of",
]
