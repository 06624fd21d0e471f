"""
Forwarding trampolines.

A trampoline has no operations of its own. The first method call (or
operator) sent to it is captured as an Invocation and replayed against every
item of the source collection by the engine. A trampoline is single-use: it
is ARMED when built and SPENT once it has forwarded a call.
"""
from typing import Any, Optional

from collecting.collecting_datatypes import (
    Slot, ResultShape, TrampolineReuse, ABSENT, ANY, BOOL
)
from collecting.collecting_containers import kind_of, is_mutable
from collecting.collecting_invocation import Invocation


class _Tag:
    """Internal helper class for trampoline modes and states."""
    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return f"{self.name.capitalize()}<>"


MAP = _Tag("map")
FILTER = _Tag("filter")
ONE = _Tag("one")
RETAIN = _Tag("retain")

ARMED = _Tag("armed")
SPENT = _Tag("spent")

# Operators intercepted in addition to plain method calls.
FORWARDED_OPERATORS = (
    "__lt__", "__le__", "__eq__", "__ne__", "__gt__", "__ge__",
    "__add__", "__sub__", "__mul__", "__truediv__", "__floordiv__", "__mod__", "__pow__",
    "__and__", "__or__", "__xor__",
    "__neg__", "__pos__", "__abs__", "__invert__",
    "__getitem__", "__call__",
)


class Trampoline:
    """Forwards the first call it receives to every item of `source`."""

    def __init__(self, source, mode: _Tag, engine, slot: Optional[Slot] = None,
                 shape: Optional[ResultShape] = None):
        kind_of(source)
        if mode is RETAIN and not is_mutable(source):
            raise TypeError(f"{type(source).__name__} is immutable and cannot be filtered in place")
        if shape is None:
            shape = ANY if mode is MAP else BOOL
        self._source = source
        self._mode = mode
        self._engine = engine
        self._slot = slot
        self._shape = shape
        self._state = ARMED
        self._forwarded: Optional[Invocation] = None

    def __getattr__(self, name: str):
        # Private and dunder names are never forwarded.
        if name.startswith("_"):
            raise AttributeError(name)

        def forward(*args, **kwargs):
            return self._forward(name, args, kwargs)
        forward.__name__ = name
        return forward

    def _forward(self, name: str, args, kwargs) -> Any:
        if self._state is SPENT:
            raise TrampolineReuse(
                f"Trampoline already forwarded {self._forwarded!r}; build a new one per call"
            )
        self._state = SPENT
        invocation = Invocation.from_call(name, args, kwargs, self._shape)
        self._forwarded = invocation
        engine = self._engine
        engine._dbg("trampoline", self._mode.name, invocation)

        if self._mode is MAP:
            return engine.map(self._source, invocation)
        if self._mode is RETAIN:
            engine.filter_in_place(self._source, invocation)
            return None
        if self._mode is FILTER:
            result = engine.filter(self._source, invocation)
        else:
            result = engine.one(self._source, invocation)
        # A miss leaves the slot untouched.
        if self._slot is not None and result is not ABSENT:
            self._slot.value = result
        return result

    def __repr__(self) -> str:
        from collecting.collecting_printer import Printer
        return Printer().pformat(self)


def _forwarding_operator(name):
    def method(self, *args, **kwargs):
        return self._forward(name, args, kwargs)
    method.__name__ = name
    return method


for _name in FORWARDED_OPERATORS:
    setattr(Trampoline, _name, _forwarding_operator(_name))
# __eq__ is forwarded, so trampolines hash by identity.
Trampoline.__hash__ = object.__hash__


def is_spent(trampoline: Trampoline) -> bool:
    return trampoline._state is SPENT


def forwarded_invocation(trampoline: Trampoline) -> Optional[Invocation]:
    """The invocation a spent trampoline forwarded, or None while armed."""
    return trampoline._forwarded
