"""Go type descriptors and value handles consumed by the literal emitter."""

from .descriptors import (
    ANY,
    BOOL,
    COMPLEX64,
    COMPLEX128,
    FLOAT32,
    FLOAT64,
    INT,
    INT8,
    INT16,
    INT32,
    INT64,
    STRING,
    TIME,
    UINT,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    UINTPTR,
    UNSAFE_POINTER,
    Field,
    Kind,
    TypeDescriptor,
    array_of,
    chan_of,
    func_of,
    interface_of,
    map_of,
    named,
    pointer_to,
    slice_of,
    struct_of,
)
from .values import Ref, Value, infer_type, is_zero

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
    "Ref",
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
    "Value",
    "array_of",
    "chan_of",
    "func_of",
    "infer_type",
    "interface_of",
    "is_zero",
    "map_of",
    "named",
    "pointer_to",
    "slice_of",
    "struct_of",
]
