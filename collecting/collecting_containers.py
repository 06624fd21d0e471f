"""
Container kinds supported by the engine, and the collaborator functions used
to read, build and mutate them.
"""

import collections.abc
from typing import Any, Iterable, List, Tuple


class FrozenOrderedSet(collections.abc.Set):
    """An immutable set that remembers insertion order."""
    def __init__(self, items: Iterable[Any] = ()):
        self._items = dict.fromkeys(items)

    def __contains__(self, item) -> bool:
        return item in self._items

    def __iter__(self):
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index):
        keys = list(self._items)
        if isinstance(index, slice):
            return type(self)(keys[index])
        return keys[index]

    def index(self, item) -> int:
        for i, existing in enumerate(self._items):
            if existing == item:
                return i
        raise ValueError(f"{item!r} is not in {type(self).__name__}")

    def __eq__(self, other):
        if isinstance(other, FrozenOrderedSet):
            return list(self._items) == list(other._items)
        if isinstance(other, collections.abc.Set):
            return super().__eq__(other)
        return NotImplemented

    def __hash__(self):
        return self._hash()

    @classmethod
    def _from_iterable(cls, it):
        return cls(it)

    def __repr__(self) -> str:
        from collecting.collecting_printer import Printer
        return Printer().pformat(self)


class OrderedSet(FrozenOrderedSet, collections.abc.MutableSet):
    """A mutable set that remembers insertion order."""

    # Mutable, so not hashable.
    __hash__ = None

    def add(self, item):
        self._items[item] = None

    def discard(self, item):
        self._items.pop(item, None)

    def __delitem__(self, index):
        keys = list(self._items)
        targets = keys[index] if isinstance(index, slice) else [keys[index]]
        for key in targets:
            del self._items[key]


# =================================================================
# Kinds
# =================================================================

class ContainerKind:
    """One of the three container kinds, with its mutable and frozen flavours."""
    def __init__(self, name: str, mutable: type, frozen: type):
        self.name = name
        self.mutable = mutable
        self.frozen = frozen

    def __repr__(self) -> str:
        from collecting.collecting_printer import Printer
        return Printer().pformat(self)


SEQUENCE = ContainerKind("sequence", list, tuple)
SET = ContainerKind("set", set, frozenset)
ORDERED_SET = ContainerKind("ordered-set", OrderedSet, FrozenOrderedSet)


def kind_of(container: Any) -> ContainerKind:
    """Classifies a container, raising TypeError for unsupported values."""
    if isinstance(container, FrozenOrderedSet):
        return ORDERED_SET
    if isinstance(container, collections.abc.Set):
        return SET
    if isinstance(container, (str, bytes, bytearray, memoryview)):
        raise TypeError(f"{type(container).__name__} is not a supported container")
    if isinstance(container, collections.abc.Sequence):
        return SEQUENCE
    raise TypeError(f"{type(container).__name__} is not a supported container")


def is_mutable(container: Any) -> bool:
    return isinstance(container, (collections.abc.MutableSequence, collections.abc.MutableSet))


def make_empty(kind: ContainerKind):
    """Returns a new, empty, mutable container of the given kind."""
    return kind.mutable()


def append(container, item) -> None:
    if isinstance(container, collections.abc.MutableSequence):
        container.append(item)
    elif isinstance(container, collections.abc.MutableSet):
        container.add(item)
    else:
        raise TypeError(f"Cannot append to {type(container).__name__}")


def seal(built, like):
    """Converts a freshly built container to the flavour (mutable/frozen) of `like`."""
    if is_mutable(like):
        return built
    kind = kind_of(like)
    return kind.frozen(built)


def remove_all(container, doomed: List[Tuple[int, Any]]) -> None:
    """
    Removes a snapshot of items from a mutable container.

    `doomed` holds (position, item) pairs in iteration order. Sequences delete
    by position, last first, so earlier positions stay valid; sets discard by
    equality.
    """
    if isinstance(container, collections.abc.MutableSequence):
        for position, _ in reversed(doomed):
            del container[position]
        return
    if isinstance(container, collections.abc.MutableSet):
        for _, item in doomed:
            container.discard(item)
        return
    raise TypeError(f"{type(container).__name__} cannot be filtered in place")
