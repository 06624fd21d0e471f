import pytest
from collecting.collecting_printer import Printer
from collecting.collecting_containers import OrderedSet, FrozenOrderedSet, SEQUENCE, ORDERED_SET
from collecting.collecting_datatypes import (
    NoValue, Value, Bool, Slot, ABSENT, VALUE, BOOL, ANY
)
from collecting.collecting_strategies import Callback
from collecting.collecting_keypath import KeyPath
from collecting.collecting_invocation import Invocation
from collecting.collecting_trampoline import Trampoline, FILTER
from collecting.collecting_engine import Engine


@pytest.fixture
def printer():
    return Printer(indent_width=2)


def is_even(n):
    return n % 2 == 0


def _filled_slot():
    slot = Slot()
    slot.value = [2, 3]
    return slot


# Test cases: (id, object, expected_string)
FORMAT_TEST_CASES = [
    ("str", "hello", "'hello'"),
    ("int", 123, "123"),
    ("none", None, "None"),
    ("list", [1, "a"], "[1, 'a']"),
    ("empty_list", [], "[]"),
    ("tuple", (1, 2), "(1, 2)"),
    ("single_tuple", (1,), "(1,)"),
    ("set", {1}, "{1}"),
    ("empty_set", set(), "set()"),
    ("frozenset", frozenset([1]), "frozenset({1})"),
    ("empty_frozenset", frozenset(), "frozenset()"),
    ("ordered_set", OrderedSet(["x", "y"]), "OrderedSet{'x', 'y'}"),
    ("frozen_ordered_set", FrozenOrderedSet([1]), "FrozenOrderedSet{1}"),
    ("empty_ordered_set", OrderedSet(), "OrderedSet{}"),
    ("dict", {"a": [1]}, "{'a': [1]}"),
    ("no_value", NoValue, "NoValue<>"),
    ("value", Value([1]), "Value([1])"),
    ("bool", Bool(True), "Bool(True)"),
    ("absent", ABSENT, "Absent<>"),
    ("shape", BOOL, "Shape<bool>"),
    ("kind", ORDERED_SET, "Kind<ordered-set>"),
    ("empty_slot", Slot(), "slot <empty>"),
    ("slot", _filled_slot(), "slot [2, 3]"),
    ("callback", Callback(is_even, BOOL), "callback is_even -> bool"),
    ("key_path_match", KeyPath("address.city", "Gotham"), "key-path address.city = 'Gotham'"),
    ("key_path_pluck", KeyPath(["orders", 0]), "key-path orders.0"),
    ("invocation", Invocation("replace", "a", "b", count=1), "invocation replace('a', 'b', count=1) -> value"),
    ("invocation_any", Invocation("upper", shape=ANY), "invocation upper() -> any"),
]

@pytest.mark.parametrize(
    "test_id, obj, expected",
    FORMAT_TEST_CASES,
    ids=[t[0] for t in FORMAT_TEST_CASES]
)
def test_pformat(printer, test_id, obj, expected):
    assert printer.pformat(obj) == expected

def test_reprs_use_the_printer():
    assert repr(OrderedSet([1, 2])) == "OrderedSet{1, 2}"
    assert repr(Value(3)) == "Value(3)"
    assert repr(VALUE) == "Shape<value>"
    assert repr(SEQUENCE) == "Kind<sequence>"
    assert repr(Invocation("upper")) == "invocation upper() -> value"

def test_trampoline_repr_does_not_forward():
    t = Trampoline([1, 2], FILTER, Engine(debug=False))
    assert repr(t) == "<Trampoline filter armed on [1, 2]>"
    t > 1
    assert repr(t) == "<Trampoline filter spent on [1, 2]>"

def test_long_containers_break_into_lines():
    printer = Printer(indent_width=2, width=20)
    out = printer.pformat(["alpha", "bravo", "charlie"])
    assert out == "[\n  'alpha',\n  'bravo',\n  'charlie',\n]"

def test_nested_long_containers_indent_each_level():
    printer = Printer(indent_width=2, width=12)
    out = printer.pformat([["alpha", "bravo"]])
    assert out == "[\n  [\n    'alpha',\n    'bravo',\n  ],\n]"
