import math
from datetime import datetime

import pytest

from gotypes import (
    ANY,
    BOOL,
    COMPLEX128,
    FLOAT32,
    FLOAT64,
    INT,
    STRING,
    TIME,
    Field,
    Kind,
    Value,
    array_of,
    infer_type,
    interface_of,
    is_zero,
    map_of,
    named,
    pointer_to,
    slice_of,
    struct_of,
)

GEO = "example.com/geo"


def test_named_types_compare_by_package_and_name():
    assert named(GEO, "Meters", FLOAT64) == named(GEO, "Meters", FLOAT64)
    assert named(GEO, "Meters", FLOAT64) != named("example.com/other", "Meters", FLOAT64)
    assert named(GEO, "Meters", FLOAT64) != FLOAT64


def test_unnamed_types_compare_structurally():
    assert slice_of(INT) == slice_of(INT)
    assert map_of(STRING, slice_of(INT)) == map_of(STRING, slice_of(INT))
    assert array_of(2, INT) != array_of(3, INT)
    assert len({pointer_to(INT), pointer_to(INT), pointer_to(STRING)}) == 2


def test_type_strings():
    point = named(GEO, "Point", struct_of(Field("X", FLOAT64)))
    assert str(map_of(STRING, slice_of(pointer_to(point)))) == "map[string][]*geo.Point"
    assert str(array_of(3, INT)) == "[3]int"
    assert str(struct_of(Field("X", INT), Field("y", STRING))) == "struct { X int; y string }"
    assert str(ANY) == "interface {}"
    assert str(TIME) == "time.Time"


def test_recursive_types_are_declared_then_defined():
    node = named(GEO, "node", Kind.STRUCT)
    node.define(struct_of(Field("v", INT), Field("next", pointer_to(node))))
    assert node.fields[1].type.elem is node
    assert hash(node) == hash(named(GEO, "node", Kind.STRUCT))
    with pytest.raises(ValueError, match="already defined"):
        node.define(struct_of())


def test_define_requires_matching_kind():
    pending = named(GEO, "Pending", Kind.STRUCT)
    with pytest.raises(ValueError):
        pending.define(slice_of(INT))


def test_struct_rejects_duplicate_fields():
    with pytest.raises(ValueError):
        struct_of(Field("A", INT), Field("A", STRING))


def test_field_export_rule():
    assert Field("Name", STRING).exported
    assert not Field("name", STRING).exported
    assert not Field("_Name", STRING).exported


def test_kind_predicates():
    assert Kind.UINT8.is_unsigned and Kind.UINT8.is_integer
    assert Kind.COMPLEX64.is_primitive
    assert not Kind.STRUCT.is_primitive
    assert Kind.MAP.is_nillable and not Kind.ARRAY.is_nillable


@pytest.mark.parametrize(
    "data, type_, want",
    [
        (0, INT, True),
        (None, INT, True),
        (1, INT, False),
        (0.0, FLOAT64, True),
        (-0.0, FLOAT64, False),
        (math.nan, FLOAT32, False),
        (0j, COMPLEX128, True),
        ("", STRING, True),
        (False, BOOL, True),
        (0, BOOL, False),
        ([0, 0], array_of(2, INT), True),
        ([0, 1], array_of(2, INT), False),
        ({}, map_of(STRING, INT), False),
        (None, map_of(STRING, INT), True),
        ({"X": 0}, struct_of(Field("X", INT)), True),
        ({"X": 2}, struct_of(Field("X", INT)), False),
        ({"Z": 0}, struct_of(Field("X", INT)), False),
        (42, struct_of(Field("X", INT)), False),
        (datetime(1, 1, 1), TIME, False),
        (Value(INT, 0), ANY, False),
        (Value(INT, 0), INT, True),
    ],
)
def test_is_zero(data, type_, want):
    assert is_zero(data, type_) is want


def test_infer_type():
    assert infer_type(True) == BOOL
    assert infer_type(3) == INT
    assert infer_type(1.5) == FLOAT64
    assert infer_type(1j) == COMPLEX128
    assert infer_type("s") == STRING
    assert infer_type(datetime(2000, 1, 1)) == TIME
    assert infer_type(Value(FLOAT32, 1.0)) == FLOAT32
    assert infer_type([1]) is None


def test_infer_type_uses_class_table():
    class Meters(float):
        pass

    meters = named(GEO, "Meters", FLOAT64)
    assert infer_type(Meters(2.0), {Meters: meters}) == meters
    assert infer_type(2.0, {Meters: meters}) == FLOAT64


def test_interface_methods_are_order_independent():
    assert interface_of("B", "A") == interface_of("A", "B")
