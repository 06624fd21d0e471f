"""
A pretty-printer for collecting data structures.
"""
import collections.abc

from collecting.collecting_datatypes import (
    Value, Bool, NoValue, _NoValue, ResultShape, Slot, ABSENT
)
from collecting.collecting_containers import FrozenOrderedSet, OrderedSet, ContainerKind
from collecting.collecting_strategies import Callback
from collecting.collecting_keypath import KeyPath
from collecting.collecting_invocation import Invocation
from collecting.collecting_trampoline import Trampoline


class Printer:
    """Formats containers, outcomes and strategies into readable strings."""

    def __init__(self, indent_width=2, width=80):
        self._indent_char = " " * indent_width
        self._width = width
        self._handlers = self._create_handlers()

    def pformat(self, obj, level=0):
        """Public entry point to format an object."""
        handler = self._get_handler(obj)
        return handler(obj, level)

    def _get_handler(self, obj):
        """Dispatcher to find the correct formatting method."""
        # Fast path for singletons
        if obj is NoValue: return self._pformat_no_value
        if obj is ABSENT: return lambda o, l: repr(o)

        obj_type = type(obj)
        if obj_type in self._handlers:
            return self._handlers[obj_type]
        # Fallback for subclasses of the supported containers
        if isinstance(obj, FrozenOrderedSet): return self._pformat_ordered_set
        if isinstance(obj, collections.abc.Mapping): return self._pformat_dict
        if isinstance(obj, list): return self._pformat_list
        if isinstance(obj, collections.abc.Set): return self._pformat_set
        # Default to Python's repr for unknown types
        return lambda o, l: repr(o)

    def _create_handlers(self):
        return {
            list: self._pformat_list,
            tuple: self._pformat_tuple,
            set: self._pformat_set,
            frozenset: self._pformat_frozenset,
            dict: self._pformat_dict,
            FrozenOrderedSet: self._pformat_ordered_set,
            OrderedSet: self._pformat_ordered_set,
            _NoValue: self._pformat_no_value,
            Value: self._pformat_value,
            Bool: self._pformat_bool_outcome,
            ResultShape: self._pformat_shape,
            ContainerKind: self._pformat_kind,
            Slot: self._pformat_slot,
            Callback: self._pformat_callback,
            KeyPath: self._pformat_key_path,
            Invocation: self._pformat_invocation,
            Trampoline: self._pformat_trampoline,
        }

    def _pformat_items(self, items, level, open_char, close_char):
        """Inline when it fits, one item per line otherwise."""
        parts = [self.pformat(item, level + 1) for item in items]
        inline = f"{open_char}{', '.join(parts)}{close_char}"
        if len(inline) + len(self._indent_char) * level <= self._width and '\n' not in inline:
            return inline
        return self._pformat_block(parts, level, open_char, close_char)

    def _pformat_block(self, parts, level, open_char, close_char):
        if not parts:
            return f"{open_char}{close_char}"

        outer_indent = self._indent_char * level
        inner_indent = self._indent_char * (level + 1)

        lines = []
        for part in parts:
            part_lines = part.splitlines()
            if not part_lines:
                continue
            # Nested parts already carry their own inner indentation.
            lines.append("\n".join([inner_indent + part_lines[0]] + part_lines[1:]) + ",")

        return f"{open_char}\n" + "\n".join(lines) + f"\n{outer_indent}{close_char}"

    def _pformat_list(self, obj, level):
        return self._pformat_items(obj, level, '[', ']')

    def _pformat_tuple(self, obj, level):
        if len(obj) == 1:
            return f"({self.pformat(obj[0], level + 1)},)"
        return self._pformat_items(obj, level, '(', ')')

    def _pformat_set(self, obj, level):
        if not obj:
            return "set()"
        return self._pformat_items(obj, level, '{', '}')

    def _pformat_frozenset(self, obj, level):
        if not obj:
            return "frozenset()"
        return f"frozenset({self._pformat_items(obj, level, '{', '}')})"

    def _pformat_ordered_set(self, obj, level):
        return f"{type(obj).__name__}{self._pformat_items(obj, level, '{', '}')}"

    def _pformat_dict(self, obj, level):
        parts = [f"{self.pformat(k, level + 1)}: {self.pformat(v, level + 1)}" for k, v in obj.items()]
        inline = "{" + ", ".join(parts) + "}"
        if len(inline) <= self._width and '\n' not in inline:
            return inline
        return self._pformat_block(parts, level, '{', '}')

    def _pformat_no_value(self, obj, level):
        return "NoValue<>"

    def _pformat_value(self, obj, level):
        return f"Value({self.pformat(obj.value, level)})"

    def _pformat_bool_outcome(self, obj, level):
        return f"Bool({obj.flag!r})"

    def _pformat_shape(self, obj, level):
        return f"Shape<{obj.name}>"

    def _pformat_kind(self, obj, level):
        return f"Kind<{obj.name}>"

    def _pformat_slot(self, obj, level):
        if not obj.filled:
            return "slot <empty>"
        return f"slot {self.pformat(obj.value, level)}"

    def _pformat_callback(self, obj, level):
        fn_name = getattr(obj.fn, "__qualname__", None) or repr(obj.fn)
        return f"callback {fn_name} -> {obj.shape.name}"

    def _pformat_key_path(self, obj, level):
        path = obj.path if isinstance(obj.path, str) else ".".join(str(s) for s in obj.path)
        if obj.value is ABSENT:
            return f"key-path {path}"
        return f"key-path {path} = {self.pformat(obj.value, level)}"

    def _pformat_invocation(self, obj, level):
        args = [self.pformat(a, level) for a in obj.args]
        args += [f"{k}={self.pformat(v, level)}" for k, v in obj.kwargs.items()]
        return f"invocation {obj.name}({', '.join(args)}) -> {obj.shape.name}"

    def _pformat_trampoline(self, obj, level):
        source = self.pformat(obj._source, level)
        return f"<Trampoline {obj._mode.name} {obj._state.name} on {source}>"
