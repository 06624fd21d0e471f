"""
Defines the core data types shared by every part of the collecting engine.

This module provides the error taxonomy, the result-shape markers, the
Outcome tagged union returned by dispatch strategies, the output Slot used by
trampolines, and the Strategy base class.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


# =================================================================
# Errors
# =================================================================

class CollectingError(Exception):
    """Base class for all errors raised by the collecting engine."""
    pass


class UnsupportedOperation(CollectingError, AttributeError):
    """Raised when a receiver does not expose an invoked operation."""
    def __init__(self, name: str, receiver: Any, reason: Optional[str] = None):
        msg = f"{type(receiver).__name__!s} object does not support {name!r}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.name = name
        self.receiver = receiver


class TypeMismatch(CollectingError, TypeError):
    """Raised when a strategy yields a result that contradicts its declared shape."""
    def __init__(self, expected: 'ResultShape', result: Any):
        super().__init__(f"expected {expected.name} result, got {type(result).__name__}: {result!r}")
        self.expected = expected
        self.result = result


class TrampolineReuse(CollectingError):
    """Raised when a spent trampoline receives another call."""
    pass


# =================================================================
# Singletons
# =================================================================

class ResultShape:
    """Declared result shape of a dispatch strategy."""
    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        from collecting.collecting_printer import Printer
        return Printer().pformat(self)


NONE = ResultShape("none")
VALUE = ResultShape("value")
BOOL = ResultShape("bool")
# Decided per call: None -> no value, bool -> boolean, anything else -> value.
ANY = ResultShape("any")


class _Marker:
    """Internal helper class for creating stateless singleton markers."""
    def __init__(self, name):
        self._name = name

    def __repr__(self):
        return f"{self._name.capitalize()}<>"

    def __bool__(self):
        return False


# Returned by key-path resolution when a segment cannot be found.
ABSENT = _Marker("absent")


# =================================================================
# Outcomes
# =================================================================

class Outcome(ABC):
    """Result of invoking a dispatch strategy on one item."""

    @abstractmethod
    def boxed(self) -> Any:
        """Returns the outcome as a plain Python object."""

    def __repr__(self) -> str:
        from collecting.collecting_printer import Printer
        return Printer().pformat(self)


class _NoValue(Outcome):
    def boxed(self) -> Any:
        return None


NoValue = _NoValue()


class Value(Outcome):
    __slots__ = ("value",)

    def __init__(self, value: Any):
        self.value = value

    def boxed(self) -> Any:
        return self.value

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return self.value == other.value

    def __hash__(self):
        return hash(("value", self.value))


class Bool(Outcome):
    __slots__ = ("flag",)

    def __init__(self, flag: bool):
        self.flag = flag

    def boxed(self) -> bool:
        return self.flag

    def __eq__(self, other):
        if not isinstance(other, Bool):
            return NotImplemented
        return self.flag is other.flag

    def __hash__(self):
        return hash(("bool", self.flag))


def make_outcome(result: Any, shape: ResultShape) -> Outcome:
    """Wraps a raw call result according to the declared shape."""
    if shape is VALUE:
        return Value(result)
    if shape is BOOL:
        if isinstance(result, bool):
            return Bool(result)
        raise TypeMismatch(BOOL, result)
    if shape is NONE:
        if result is None:
            return NoValue
        raise TypeMismatch(NONE, result)
    if shape is ANY:
        if result is None:
            return NoValue
        if isinstance(result, bool):
            return Bool(result)
        return Value(result)
    raise ValueError(f"Unknown result shape: {shape!r}")


def outcome_truth(outcome: Outcome) -> bool:
    """Interprets an outcome as a truth test. Non-boolean outcomes are a TypeMismatch."""
    if isinstance(outcome, Bool):
        return outcome.flag
    if isinstance(outcome, Value) and isinstance(outcome.value, bool):
        return outcome.value
    raise TypeMismatch(BOOL, outcome.boxed())


# =================================================================
# Slots and strategies
# =================================================================

class Slot:
    """A caller-owned output cell that trampolines write their result into."""
    def __init__(self):
        self.value: Any = ABSENT

    @property
    def filled(self) -> bool:
        return self.value is not ABSENT

    def __repr__(self) -> str:
        from collecting.collecting_printer import Printer
        return Printer().pformat(self)


class Strategy(ABC):
    """Abstract base class for every per-item dispatch strategy."""

    shape: ResultShape = VALUE

    @abstractmethod
    def invoke(self, item: Any) -> Outcome:
        """Applies the strategy to a single item."""
