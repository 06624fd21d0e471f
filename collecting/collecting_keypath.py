"""
Key-path resolution on arbitrary items, and the key-path dispatch strategy.
"""
import collections.abc
import inspect
from typing import Any, List, Sequence, Union

from collecting.collecting_datatypes import (
    Strategy, Outcome, Value, Bool, ABSENT, BOOL, VALUE
)
from collecting.collecting_containers import kind_of, FrozenOrderedSet

KeyPathLike = Union[str, Sequence[Union[str, int]]]


def _count(values):
    return len(values)


def _avg(values):
    return sum(values) / len(values) if values else None


def _distinct(values):
    out = []
    for v in values:
        if v not in out:
            out.append(v)
    return out


# Collection operators take the plucked values of the rest of the path.
COLLECTION_OPERATORS = {
    "@count": _count,
    "@sum": sum,
    "@min": lambda values: min(values) if values else None,
    "@max": lambda values: max(values) if values else None,
    "@avg": _avg,
    "@distinct": _distinct,
}


def split_key_path(path: KeyPathLike) -> List[Union[str, int]]:
    if isinstance(path, str):
        return path.split(".") if path else []
    return list(path)


def _is_index(segment) -> bool:
    if isinstance(segment, bool):
        return False
    if isinstance(segment, int):
        return True
    return isinstance(segment, str) and segment.lstrip("-").isdigit()


def _is_pluckable(value) -> bool:
    if isinstance(value, collections.abc.Mapping):
        return False
    # Named tuples and other tuple subclasses are records: names read their fields.
    if isinstance(value, tuple) and type(value) is not tuple:
        return False
    try:
        kind_of(value)
    except TypeError:
        return False
    return True


def _is_zero_arity(v) -> bool:
    """True if v is a routine that can be called without arguments."""
    if not inspect.isroutine(v):
        return False
    try:
        sig = inspect.signature(v)
    except (TypeError, ValueError):
        return False
    required = [
        p for p in sig.parameters.values()
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
        and p.default is inspect.Parameter.empty
    ]
    return len(required) == 0


def _read_segment(cur, segment):
    if _is_index(segment) and isinstance(cur, (collections.abc.Sequence, FrozenOrderedSet)):
        try:
            return cur[int(segment)]
        except IndexError:
            return ABSENT
    if isinstance(cur, collections.abc.Mapping):
        try:
            return cur[segment]
        except KeyError:
            return ABSENT
    if not isinstance(segment, str):
        return ABSENT
    value = getattr(cur, segment, ABSENT)
    if value is not ABSENT and _is_zero_arity(value):
        return value()
    return value


def _pluck(items, segments) -> list:
    plucked = []
    for item in items:
        value = _resolve(item, segments)
        plucked.append(None if value is ABSENT else value)
    return plucked


def _resolve(cur, segments):
    for i, segment in enumerate(segments):
        if cur is ABSENT:
            return ABSENT
        if isinstance(segment, str) and segment.startswith("@"):
            op = COLLECTION_OPERATORS.get(segment)
            if op is None:
                raise ValueError(f"Unknown collection operator: {segment!r}")
            rest = segments[i + 1:]
            if not isinstance(cur, collections.abc.Iterable):
                return ABSENT
            values = _pluck(cur, rest) if rest else list(cur)
            return op(values)
        if _is_pluckable(cur) and not _is_index(segment):
            return _pluck(cur, segments[i:])
        cur = _read_segment(cur, segment)
    return cur


def resolve(item: Any, path: KeyPathLike) -> Any:
    """
    Resolves a key path on an item, returning ABSENT when any segment is missing.

    Name segments read mapping keys or attributes (zero-arity methods are
    called), integer segments index sequences, a name applied to a container
    plucks the rest of the path from every item, and `@`-operators aggregate
    the values of the rest of the path (`orders.@sum.total`).
    """
    return _resolve(item, split_key_path(path))


class KeyPath(Strategy):
    """Matches items whose value at `path` equals `value`.

    Without a comparison value the strategy plucks the value at `path`
    instead, yielding None for items where the path is absent.
    """
    def __init__(self, path: KeyPathLike, value: Any = ABSENT):
        self.path = path
        self.value = value
        self.shape = VALUE if value is ABSENT else BOOL

    def invoke(self, item: Any) -> Outcome:
        resolved = resolve(item, self.path)
        if self.shape is VALUE:
            return Value(None if resolved is ABSENT else resolved)
        if resolved is ABSENT:
            return Bool(False)
        return Bool(bool(resolved == self.value))

    def __repr__(self) -> str:
        from collecting.collecting_printer import Printer
        return Printer().pformat(self)
