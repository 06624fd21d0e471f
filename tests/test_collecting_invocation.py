import pytest
from collecting.collecting_invocation import Invocation
from collecting.collecting_datatypes import (
    UnsupportedOperation, TypeMismatch, Value, Bool, NoValue, VALUE, BOOL, NONE, ANY
)


class Counter:
    def __init__(self):
        self.count = 0
        self.label = "counter"

    def bump(self, by=1):
        self.count += by

    def is_above(self, limit):
        return self.count > limit


def test_invocation_is_immutable_and_inspectable():
    inv = Invocation("replace", "a", "b", shape=VALUE, count=1)
    assert inv.name == "replace"
    assert inv.args == ("a", "b")
    assert inv.kwargs == {"count": 1}
    assert inv.shape is VALUE
    with pytest.raises(AttributeError):
        inv.name = "split"

def test_invocation_equality_and_hash():
    assert Invocation("upper") == Invocation("upper")
    assert Invocation("upper") != Invocation("upper", shape=ANY)
    assert hash(Invocation("pad", 2)) == hash(Invocation("pad", 2))

def test_invocation_requires_a_name():
    with pytest.raises(TypeError):
        Invocation("")

def test_invoke_value_result():
    assert Invocation("upper").invoke("x") == Value("X")
    assert Invocation("replace", "a", "o").call("banana") == "bonono"

def test_invoke_bool_result():
    inv = Invocation("startswith", "b", shape=BOOL)
    assert inv.invoke("banana") == Bool(True)
    assert inv.invoke("apple") == Bool(False)

def test_invoke_without_result():
    counter = Counter()
    assert Invocation("bump", 2, shape=NONE).invoke(counter) is NoValue
    assert counter.count == 2

def test_invoke_applies_keyword_arguments():
    counter = Counter()
    Invocation("bump", shape=NONE, by=5).invoke(counter)
    assert counter.count == 5

def test_declared_shape_is_enforced():
    with pytest.raises(TypeMismatch):
        Invocation("upper", shape=BOOL).invoke("x")
    with pytest.raises(TypeMismatch):
        Invocation("upper", shape=NONE).invoke("x")

def test_missing_operation_is_unsupported_at_invocation_time():
    inv = Invocation("quack")  # no receiver needed to build it
    with pytest.raises(UnsupportedOperation) as exc:
        inv.invoke(42)
    assert exc.value.name == "quack"
    assert exc.value.receiver == 42

def test_non_callable_attribute_is_unsupported():
    with pytest.raises(UnsupportedOperation):
        Invocation("label").invoke(Counter())

def test_incompatible_arity_is_unsupported():
    with pytest.raises(UnsupportedOperation):
        Invocation("is_above").invoke(Counter())
    with pytest.raises(UnsupportedOperation):
        Invocation("bump", 1, 2, 3).invoke(Counter())

def test_supports_checks_name_and_arity():
    counter = Counter()
    assert Invocation("is_above", 3).supports(counter)
    assert not Invocation("is_above").supports(counter)
    assert not Invocation("quack").supports(counter)
    assert not Invocation("label").supports(counter)
    assert Invocation("upper").supports("x")

def test_operator_invocations_use_reflected_operands():
    assert Invocation("__gt__", 1, shape=BOOL).invoke(2) == Bool(True)
    assert Invocation("__add__", 1.5).call(1) == 2.5
    assert Invocation("__getitem__", 0).call("abc") == "a"


class Meters:
    def __init__(self, n):
        self.n = n

    def __radd__(self, other):
        return Meters(other + self.n)


def test_operator_support_follows_the_operand_types():
    assert Invocation("__gt__", 1).supports(2)
    assert Invocation("__add__", 1.5).supports(1)
    assert Invocation("__getitem__", 0).supports([1])
    assert Invocation("__neg__").supports(3)
    assert Invocation("__add__", Meters(2)).supports(object())
    assert Invocation("__eq__", 1).supports(object())
    assert not Invocation("__gt__", 1).supports(object())
    assert not Invocation("__getitem__", 0).supports(object())
    assert not Invocation("__neg__").supports("x")
    assert not Invocation("__neg__", 1).supports(3)
    assert not Invocation("__gt__").supports(2)

def test_unsupported_operator_raises_unsupported_operation():
    with pytest.raises(UnsupportedOperation) as excinfo:
        Invocation("__gt__", 1, shape=BOOL).invoke(object())
    assert excinfo.value.name == "__gt__"
    with pytest.raises(UnsupportedOperation):
        Invocation("__neg__").call("x")
    with pytest.raises(UnsupportedOperation):
        Invocation("__add__", 1, start=0).call(1)
    assert Invocation("__add__", Meters(2)).call(3).n == 5

def test_with_shape_keeps_arguments():
    inv = Invocation("bump", 2).with_shape(NONE)
    assert inv.args == (2,)
    assert inv.shape is NONE

def test_from_call_accepts_any_keyword_names():
    inv = Invocation.from_call("resize", (1,), {"shape": "square"}, BOOL)
    assert inv.kwargs == {"shape": "square"}
    assert inv.shape is BOOL
