"""
The traversal engine: map, filter, one and in-place filter over every
supported container kind, driven by any dispatch strategy.
"""
import os
import sys
from typing import Any, Optional

from collecting.collecting_datatypes import (
    Strategy, NoValue, ABSENT, NONE, ANY, outcome_truth
)
from collecting.collecting_containers import (
    kind_of, is_mutable, make_empty, append, seal, remove_all, SEQUENCE
)


def _require_hashable(value, kind):
    try:
        hash(value)
    except TypeError:
        raise TypeError(
            f"map over a {kind.name} collects into a hashed container; "
            f"result {value!r} of type {type(value).__name__} is unhashable"
        ) from None


class Engine:
    """Runs the collection algorithms. Holds no container state between calls."""
    def __init__(self, debug: Optional[bool] = None):
        self._debug = debug

    @property
    def debug(self) -> bool:
        """An explicit setting wins; otherwise COLLECTING_DEBUG is read on every trace."""
        if self._debug is None:
            return bool(os.environ.get("COLLECTING_DEBUG"))
        return self._debug

    @debug.setter
    def debug(self, value: Optional[bool]):
        self._debug = value

    def _dbg(self, *parts):
        if self.debug:
            try:
                print("[DBG]", *parts, file=sys.stderr)
            except Exception:
                pass

    def map(self, container, strategy: Strategy):
        """
        Applies the strategy to every item and collects the results.

        Returns a container of the same kind and flavour as the source, or
        None when the traversal was a side-effect-only pass: the strategy is
        declared as returning nothing, or it is ANY-shaped and returned
        nothing for every item of a non-empty source.

        Set and ordered-set results hold each distinct value once, so equal
        results collapse and unhashable results raise TypeError.
        """
        kind = kind_of(container)
        out = make_empty(kind)
        seen = 0
        produced = 0
        for item in container:
            seen += 1
            outcome = strategy.invoke(item)
            if outcome is NoValue:
                continue
            produced += 1
            value = outcome.boxed()
            if kind is not SEQUENCE:
                _require_hashable(value, kind)
            append(out, value)
        self._dbg("map", kind.name, strategy, f"items={seen}", f"values={produced}")
        if strategy.shape is NONE:
            return None
        if strategy.shape is ANY and seen and not produced:
            return None
        return seal(out, container)

    def filter(self, container, strategy: Strategy):
        """Returns the items passing the strategy's test, in source order."""
        kind = kind_of(container)
        out = make_empty(kind)
        seen = 0
        for item in container:
            seen += 1
            if outcome_truth(strategy.invoke(item)):
                append(out, item)
        self._dbg("filter", kind.name, strategy, f"items={seen}", f"kept={len(out)}")
        return seal(out, container)

    def one(self, container, strategy: Strategy) -> Any:
        """Returns the first item passing the test, or ABSENT. Stops at the first match."""
        kind = kind_of(container)
        for position, item in enumerate(container):
            if outcome_truth(strategy.invoke(item)):
                self._dbg("one", kind.name, strategy, f"match at {position}")
                return item
        self._dbg("one", kind.name, strategy, "no match")
        return ABSENT

    def filter_in_place(self, container, strategy: Strategy) -> None:
        """Removes every item failing the test from a mutable container."""
        kind = kind_of(container)
        if not is_mutable(container):
            raise TypeError(f"{type(container).__name__} is immutable and cannot be filtered in place")
        # Snapshot the doomed items before mutating anything.
        doomed = [
            (position, item)
            for position, item in enumerate(list(container))
            if not outcome_truth(strategy.invoke(item))
        ]
        self._dbg("filter_in_place", kind.name, strategy, f"removing={len(doomed)}")
        remove_all(container, doomed)
