"""
Collection façades exposing every algorithm with every dispatch strategy,
for sequences, sets and ordered sets alike.

    heroes = collecting([batman, catwoman])
    heroes.map_with(lambda hero: hero.name.split()[0])
    heroes.filtered_with_value("Bruce", "first_name")
    heroes.map(Invocation("first_name"))
    heroes.each().first_name()

    slot = Slot()
    heroes.filtered_into(slot).is_named("Bruce")
    slot.value
"""
from typing import Any, Callable, Optional

from collecting.collecting_datatypes import Slot, ResultShape, VALUE, BOOL, ANY
from collecting.collecting_containers import kind_of, is_mutable
from collecting.collecting_engine import Engine
from collecting.collecting_strategies import Callback, as_strategy
from collecting.collecting_keypath import KeyPath, KeyPathLike
from collecting.collecting_trampoline import Trampoline, MAP, FILTER, ONE, RETAIN

_default_engine: Optional[Engine] = None


def default_engine() -> Engine:
    """Shared engine used when a façade is built without one."""
    global _default_engine
    if _default_engine is None:
        _default_engine = Engine()
    return _default_engine


class Collection:
    """Read-only algorithms over a sequence, set or ordered set."""
    def __init__(self, items, engine: Optional[Engine] = None):
        self.kind = kind_of(items)
        self.items = items
        self.engine = engine or default_engine()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.items!r})"

    # --- Any strategy ---

    def map(self, strategy):
        return self.engine.map(self.items, as_strategy(strategy, VALUE))

    def filter(self, strategy):
        return self.engine.filter(self.items, as_strategy(strategy, BOOL))

    def one(self, strategy) -> Any:
        return self.engine.one(self.items, as_strategy(strategy, BOOL))

    # --- Callbacks ---

    def map_with(self, fn: Callable[[Any], Any], shape: ResultShape = VALUE):
        return self.engine.map(self.items, Callback(fn, shape))

    def filtered_by(self, test: Callable[[Any], bool]):
        return self.engine.filter(self.items, Callback(test, BOOL))

    def one_passing(self, test: Callable[[Any], bool]) -> Any:
        return self.engine.one(self.items, Callback(test, BOOL))

    # --- Key paths ---

    def values_for_key_path(self, path: KeyPathLike):
        return self.engine.map(self.items, KeyPath(path))

    def filtered_with_value(self, value: Any, path: KeyPathLike):
        return self.engine.filter(self.items, KeyPath(path, value))

    def one_with_value(self, value: Any, path: KeyPathLike) -> Any:
        return self.engine.one(self.items, KeyPath(path, value))

    # --- Trampolines ---

    def each(self, shape: ResultShape = ANY) -> Trampoline:
        """Trampoline mapping the next call over every item."""
        return Trampoline(self.items, MAP, self.engine, shape=shape)

    def filtered_into(self, slot: Optional[Slot] = None) -> Trampoline:
        """Trampoline filtering by the next call; the result also lands in `slot`."""
        return Trampoline(self.items, FILTER, self.engine, slot=slot)

    def one_into(self, slot: Optional[Slot] = None) -> Trampoline:
        """Trampoline finding the first item passing the next call; a match also lands in `slot`."""
        return Trampoline(self.items, ONE, self.engine, slot=slot)


class MutableCollection(Collection):
    """Adds in-place filtering for lists, sets, ordered sets and other mutable containers."""
    def __init__(self, items, engine: Optional[Engine] = None):
        if not is_mutable(items):
            raise TypeError(f"{type(items).__name__} is immutable")
        super().__init__(items, engine)

    def filter_in_place(self, strategy) -> None:
        self.engine.filter_in_place(self.items, as_strategy(strategy, BOOL))

    def filter_with(self, test: Callable[[Any], bool]) -> None:
        self.engine.filter_in_place(self.items, Callback(test, BOOL))

    def filter_with_value(self, value: Any, path: KeyPathLike) -> None:
        self.engine.filter_in_place(self.items, KeyPath(path, value))

    def retain(self) -> Trampoline:
        """Trampoline removing, in place, every item failing the next call."""
        return Trampoline(self.items, RETAIN, self.engine)


def collecting(container, engine: Optional[Engine] = None) -> Collection:
    """Wraps a container in the façade matching its mutability."""
    if is_mutable(container):
        return MutableCollection(container, engine)
    return Collection(container, engine)
