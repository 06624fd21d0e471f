"""
Reified method invocations: a method name, its bound arguments and its
declared result shape, captured now and applied later to any receiver.
"""
import inspect
import operator
from typing import Any, Dict, Tuple

from collecting.collecting_datatypes import (
    Strategy, Outcome, ResultShape, UnsupportedOperation, VALUE, make_outcome
)

# Dunder names applied through the operator module so reflected operands work.
OPERATORS = {
    "__lt__": operator.lt,
    "__le__": operator.le,
    "__eq__": operator.eq,
    "__ne__": operator.ne,
    "__gt__": operator.gt,
    "__ge__": operator.ge,
    "__add__": operator.add,
    "__sub__": operator.sub,
    "__mul__": operator.mul,
    "__truediv__": operator.truediv,
    "__floordiv__": operator.floordiv,
    "__mod__": operator.mod,
    "__pow__": operator.pow,
    "__and__": operator.and_,
    "__or__": operator.or_,
    "__xor__": operator.xor,
    "__neg__": operator.neg,
    "__pos__": operator.pos,
    "__abs__": operator.abs,
    "__invert__": operator.invert,
    "__getitem__": operator.getitem,
}

UNARY_OPERATORS = ("__neg__", "__pos__", "__abs__", "__invert__")

# Binary operators and the dunder the right-hand operand answers them with.
REFLECTED_OPERATORS = {
    "__lt__": "__gt__",
    "__le__": "__ge__",
    "__gt__": "__lt__",
    "__ge__": "__le__",
    "__add__": "__radd__",
    "__sub__": "__rsub__",
    "__mul__": "__rmul__",
    "__truediv__": "__rtruediv__",
    "__floordiv__": "__rfloordiv__",
    "__mod__": "__rmod__",
    "__pow__": "__rpow__",
    "__and__": "__rand__",
    "__or__": "__ror__",
    "__xor__": "__rxor__",
}


def _defines(cls, name) -> bool:
    """True if cls implements the dunder itself rather than inheriting object's default."""
    method = getattr(cls, name, None)
    return method is not None and method is not getattr(object, name, None)


class Invocation(Strategy):
    """
    An immutable description of `receiver.name(*args, **kwargs)`.

    Nothing is checked at construction; the receiver's capabilities are
    looked up each time the invocation is applied.
    """
    __slots__ = ("_name", "_args", "_kwargs", "_shape")

    def __init__(self, name: str, *args: Any, shape: ResultShape = VALUE, **kwargs: Any):
        if not isinstance(name, str) or not name:
            raise TypeError("Invocation name must be a non-empty str")
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_args", tuple(args))
        object.__setattr__(self, "_kwargs", dict(kwargs))
        object.__setattr__(self, "_shape", shape)

    @classmethod
    def from_call(cls, name: str, args: Tuple[Any, ...], kwargs: Dict[str, Any],
                  shape: ResultShape = VALUE) -> 'Invocation':
        """Builds an invocation from an intercepted call, whatever its keyword names."""
        inv = cls(name, shape=shape)
        object.__setattr__(inv, "_args", tuple(args))
        object.__setattr__(inv, "_kwargs", dict(kwargs))
        return inv

    def __setattr__(self, key, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def name(self) -> str:
        return self._name

    @property
    def args(self) -> Tuple[Any, ...]:
        return self._args

    @property
    def kwargs(self) -> Dict[str, Any]:
        return dict(self._kwargs)

    @property
    def shape(self) -> ResultShape:
        return self._shape

    def with_shape(self, shape: ResultShape) -> 'Invocation':
        return Invocation.from_call(self._name, self._args, self._kwargs, shape)

    def _method(self, receiver):
        try:
            method = getattr(receiver, self._name)
        except AttributeError:
            raise UnsupportedOperation(self._name, receiver) from None
        if not callable(method):
            raise UnsupportedOperation(self._name, receiver, "attribute is not callable")
        return method

    def _check_arity(self, method, receiver):
        try:
            sig = inspect.signature(method)
        except (TypeError, ValueError):
            # Builtins without an introspectable signature.
            return
        try:
            sig.bind(*self._args, **self._kwargs)
        except TypeError as e:
            raise UnsupportedOperation(self._name, receiver, str(e)) from None

    def _supports_operator(self, receiver) -> bool:
        name = self._name
        if self._kwargs:
            return False
        if name in UNARY_OPERATORS:
            return not self._args and _defines(type(receiver), name)
        if len(self._args) != 1:
            return False
        if name in ("__eq__", "__ne__"):
            return True
        if _defines(type(receiver), name):
            return True
        # Builtin operands only reflect for other builtins, which define the forward dunder.
        operand_type = type(self._args[0])
        if operand_type.__module__ == "builtins":
            return False
        reflected = REFLECTED_OPERATORS.get(name)
        return reflected is not None and _defines(operand_type, reflected)

    def supports(self, receiver: Any) -> bool:
        """True if the receiver exposes this operation with a compatible arity."""
        if self._name in OPERATORS:
            return self._supports_operator(receiver)
        try:
            self._check_arity(self._method(receiver), receiver)
        except UnsupportedOperation:
            return False
        return True

    def call(self, receiver: Any) -> Any:
        """Applies the invocation to the receiver and returns the raw result."""
        op = OPERATORS.get(self._name)
        if op is not None:
            if self._kwargs:
                raise UnsupportedOperation(self._name, receiver, "operators take no keyword arguments")
            try:
                return op(receiver, *self._args)
            except TypeError as e:
                raise UnsupportedOperation(self._name, receiver, str(e)) from None
        method = self._method(receiver)
        self._check_arity(method, receiver)
        return method(*self._args, **self._kwargs)

    def invoke(self, item: Any) -> Outcome:
        return make_outcome(self.call(item), self._shape)

    def __eq__(self, other):
        if not isinstance(other, Invocation):
            return NotImplemented
        return (
            self._name == other._name
            and self._args == other._args
            and self._kwargs == other._kwargs
            and self._shape is other._shape
        )

    def __hash__(self):
        return hash((self._name, self._args, tuple(sorted(self._kwargs.items())), self._shape.name))

    def __repr__(self) -> str:
        from collecting.collecting_printer import Printer
        return Printer().pformat(self)
