import io
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import pytest

from emitter import (
    EmitError,
    EmitOptions,
    EmitResult,
    InvalidValueError,
    Printer,
    RegistrationError,
    UnknownPackageError,
    UnnamedTypeError,
    UnsupportedKindError,
    UnsupportedLocationError,
    emit_literal,
)
from gotypes import (
    ANY,
    BOOL,
    INT,
    STRING,
    TIME,
    UINT,
    UNSAFE_POINTER,
    Field,
    Value,
    chan_of,
    func_of,
    interface_of,
    map_of,
    named,
    slice_of,
    struct_of,
)

HOME = "example.com/printsrc"

NetFlags = named("net", "Flags", UINT)
Template = named("text/template", "Template", struct_of(Field("name", STRING)))
BigInt = named("math/big", "Int", struct_of(Field("neg", BOOL), Field("abs", slice_of(UINT))))
Key = named(HOME, "Key", struct_of(Field("N", INT)))


# ---------------------------------------------------------------- imports


def test_unregistered_package_fails_with_its_path():
    with pytest.raises(UnknownPackageError, match="unknown package 'net'") as excinfo:
        Printer(HOME).sprint(Value(NetFlags, 3))
    assert excinfo.value.package == "net"
    assert excinfo.value.type == NetFlags


def test_registered_import_defaults_to_last_path_component():
    printer = Printer(HOME)
    printer.register_import("net")
    assert printer.sprint(Value(NetFlags, 17)) == "net.Flags(17)"


def test_named_import():
    printer = Printer(HOME)
    printer.register_import("text/template", "ttemp")
    assert printer.sprint(Value(Template, {})) == "ttemp.Template{}"
    assert printer.package_identifier("text/template") == "ttemp"


def test_home_package_has_no_identifier():
    printer = Printer(HOME)
    printer.register_import(HOME, "self")
    assert printer.package_identifier(HOME) == ""
    assert printer.sprint(Value(Key, {"N": 1})) == "Key{N: 1}"


def test_invalid_import_identifier():
    with pytest.raises(ValueError):
        Printer(HOME).register_import("example.com/v2", "not-an-ident")


def test_unnamed_types_that_cannot_be_written():
    printer = Printer(HOME)
    with pytest.raises(UnnamedTypeError, match="unnamed type"):
        printer.sprint(Value(struct_of(Field("X", INT)), {"X": 3}))
    with pytest.raises(UnnamedTypeError):
        printer.sprint(Value(interface_of("String"), None))


def test_unrepresentable_kinds():
    printer = Printer(HOME)
    with pytest.raises(UnsupportedKindError, match="cannot emit"):
        printer.sprint(Value(func_of(), lambda: None))
    with pytest.raises(UnsupportedKindError, match="cannot emit"):
        printer.sprint(Value(chan_of(INT), object()))
    with pytest.raises(UnsupportedKindError):
        printer.sprint(Value(UNSAFE_POINTER, 0))


# --------------------------------------------------------------- encoders


def test_custom_encoder_replaces_literal():
    printer = Printer(HOME)
    printer.register_import("math/big")
    printer.register_encoder(BigInt, lambda data: f"big.NewInt({data})")
    assert printer.sprint(Value(BigInt, 42)) == "big.NewInt(42)"
    assert printer.sprint(Value(slice_of(BigInt), [1])) == "[]big.Int{\n\tbig.NewInt(1),\n}"


def test_encoder_decorator():
    printer = Printer(HOME)

    @printer.encoder(Key)
    def encode_key(data) -> str:
        return f"NewKey({data['N']})"

    assert printer.sprint(Value(Key, {"N": 7})) == "NewKey(7)"
    assert printer.encoders[Key] is encode_key


def test_encoder_exceptions_pass_through_unchanged():
    printer = Printer(HOME)
    failure = ValueError("boom")

    def explode(data):
        raise failure

    printer.register_encoder(Key, explode)
    with pytest.raises(ValueError) as excinfo:
        printer.sprint(Value(slice_of(Key), [{"N": 1}]))
    assert excinfo.value is failure


def test_encoder_must_return_text():
    printer = Printer(HOME)
    printer.register_encoder(Key, lambda data: 5)
    with pytest.raises(EmitError, match="expected str"):
        printer.sprint(Value(Key, {}))


@pytest.mark.parametrize(
    "func",
    [
        "not callable",
        lambda: "",
        lambda a, b: "",
        lambda *args: "",
    ],
)
def test_encoder_signature_is_checked_at_registration(func):
    with pytest.raises(RegistrationError):
        Printer(HOME).register_encoder(Key, func)


def test_encoder_return_annotation_is_checked():
    def returns_int(data) -> int:
        return 0

    with pytest.raises(TypeError):
        Printer(HOME).register_encoder(Key, returns_int)


def test_encoder_may_take_optional_extra_parameters():
    printer = Printer(HOME)
    printer.register_encoder(Key, lambda data, prefix="Make": f"{prefix}Key()")
    assert printer.sprint(Value(Key, {})) == "MakeKey()"


# ------------------------------------------------------------ comparators


def test_registered_comparator_sorts_keys():
    printer = Printer(HOME)
    printer.register_comparator(Key, lambda a, b: a["N"] < b["N"])
    value = Value(map_of(Key, INT), [({"N": 2}, 20), ({"N": 1}, 10)])
    assert printer.sprint(value) == "map[Key]int{{N: 1}: 10, {N: 2}: 20}"


def test_comparator_overrides_builtin_ordering():
    printer = Printer(HOME)

    @printer.comparator(STRING)
    def descending(a, b) -> bool:
        return a > b

    assert printer.sprint(Value(map_of(STRING, INT), {"a": 1, "b": 2})) == (
        'map[string]int{\n\t"b": 2,\n\t"a": 1,\n}'
    )


def test_unsortable_keys_keep_iteration_order():
    value = Value(map_of(Key, INT), [({"N": 2}, 20), ({"N": 1}, 10)])
    assert Printer(HOME).sprint(value) == "map[Key]int{{N: 2}: 20, {N: 1}: 10}"


@pytest.mark.parametrize("func", [lambda a: True, lambda a, b, c: True, 3])
def test_comparator_signature_is_checked(func):
    with pytest.raises(RegistrationError):
        Printer(HOME).register_comparator(Key, func)


def test_comparator_return_annotation_is_checked():
    def less(a, b) -> str:
        return ""

    with pytest.raises(RegistrationError, match="bool"):
        Printer(HOME).register_comparator(Key, less)


# ------------------------------------------------------------------- time


def test_time_in_local_and_utc():
    printer = Printer(HOME)
    local = datetime(2008, 4, 23, 9, 56, 23, 29)
    utc = datetime(2008, 4, 23, 9, 56, 23, tzinfo=timezone.utc)
    assert printer.sprint(local) == "time.Date(2008, time.April, 23, 9, 56, 23, 29000, time.Local)"
    assert printer.sprint(Value(TIME, utc)) == "time.Date(2008, time.April, 23, 9, 56, 23, 0, time.UTC)"


def test_time_in_other_location_fails():
    foo = timezone(timedelta(seconds=17), "foo")
    with pytest.raises(UnsupportedLocationError, match="location 'foo'"):
        Printer(HOME).sprint(datetime(2008, 4, 23, tzinfo=foo))


def test_time_encoder_can_be_overridden():
    printer = Printer(HOME)
    printer.register_encoder(TIME, lambda moment: "start")
    Event = named(HOME, "Event", struct_of(Field("At", TIME)))
    assert printer.sprint(Value(Event, {"At": datetime(2020, 1, 1)})) == "Event{At: start}"


def test_time_identifier_follows_import_table():
    printer = Printer(HOME)
    printer.register_import("time", "stdtime")
    assert printer.sprint(datetime(2021, 12, 31)) == (
        "stdtime.Date(2021, stdtime.December, 31, 0, 0, 0, 0, stdtime.Local)"
    )


# ------------------------------------------------------------ inference


@dataclass
class Pt:
    X: int
    Y: int


class SubPt(Pt):
    pass


def test_registered_classes_are_inferred_in_interface_positions():
    PtType = named(HOME, "Pt", struct_of(Field("X", INT), Field("Y", INT)))
    printer = Printer(HOME)
    printer.register_type(Pt, PtType)
    assert printer.sprint(Pt(1, 2)) == "Pt{X: 1, Y: 2}"
    assert printer.sprint(Value(slice_of(ANY), [SubPt(0, 3), "s"])) == (
        '[]interface{}{\n\tPt{Y: 3},\n\t"s",\n}'
    )


def test_uninferable_data_fails():
    printer = Printer(HOME)
    with pytest.raises(InvalidValueError, match="cannot infer"):
        printer.sprint(object())
    with pytest.raises(InvalidValueError, match="register_type"):
        printer.sprint(Value(slice_of(ANY), [object()]))


# ---------------------------------------------------------- entry points


def test_fprint_writes_to_sink():
    sink = io.StringIO()
    Printer(HOME).fprint(sink, Value(slice_of(INT), [1, 2]))
    assert sink.getvalue() == "[]int{1, 2}"


def test_explicit_type_argument():
    assert Printer(HOME).sprint([1, 2], slice_of(INT)) == "[]int{1, 2}"
    assert Printer(HOME).sprint(None, map_of(STRING, INT)) == "map[string]int(nil)"


def test_trailing_newline_option():
    printer = Printer(HOME, EmitOptions(trailing_newline=True))
    assert printer.sprint(1) == "1\n"


def test_emit_literal_helper():
    result = emit_literal([1], package_path=HOME, type=slice_of(INT))
    assert result == EmitResult(source="[]int{1}", type=slice_of(INT))
    assert emit_literal(None, package_path=HOME).source == "nil"


def test_one_error_per_call():
    printer = Printer(HOME)
    value = Value(slice_of(ANY), [Value(NetFlags, 1), Value(func_of(), None)])
    with pytest.raises(UnknownPackageError):
        printer.sprint(value)


def test_comparator_arguments_must_share_a_type():
    def less(a: int, b: str) -> bool:
        return False

    with pytest.raises(RegistrationError, match="same type"):
        Printer(HOME).register_comparator(Key, less)


def test_comparator_with_matching_annotations_is_accepted():
    def less(a: dict, b: dict) -> bool:
        return a["N"] < b["N"]

    printer = Printer(HOME)
    assert printer.register_comparator(Key, less) is less
