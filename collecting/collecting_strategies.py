"""
The callback dispatch strategy and coercion of plain callables into strategies.
"""

from typing import Any, Callable

from collecting.collecting_datatypes import (
    Strategy, Outcome, ResultShape, VALUE, make_outcome
)


class Callback(Strategy):
    """Wraps a single-argument function with a declared result shape.

    The shape must be declared because a returned None is otherwise
    indistinguishable from a function that returns nothing.
    """
    def __init__(self, fn: Callable[[Any], Any], shape: ResultShape = VALUE):
        if not callable(fn):
            raise TypeError(f"Callback requires a callable, not {type(fn).__name__}")
        self.fn = fn
        self.shape = shape

    def invoke(self, item: Any) -> Outcome:
        return make_outcome(self.fn(item), self.shape)

    def __repr__(self) -> str:
        from collecting.collecting_printer import Printer
        return Printer().pformat(self)


def as_strategy(obj: Any, shape: ResultShape = VALUE) -> Strategy:
    """Returns strategies unchanged and wraps any other callable in a Callback."""
    if isinstance(obj, Strategy):
        return obj
    if callable(obj):
        return Callback(obj, shape)
    raise TypeError(f"Expected a strategy or a callable, not {type(obj).__name__}")
