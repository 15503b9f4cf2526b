"""
Table: a keyed collection with higher-order convenience methods.

A table maps keys to values. Its array part is the run of integer keys
1..N with no gap. ``i``-prefixed methods walk the array part in ascending
order; unprefixed methods walk every key in mapping order.

Absent and ``None`` are the same thing: assigning ``None`` removes a key,
and callbacks returning ``None`` produce no output entry.
"""

from __future__ import annotations
from collections.abc import Hashable, Iterable, Iterator, Mapping, MutableMapping
from numbers import Number
from typing import Any, Callable
import inspect
import logging

from .errors import MissingArgumentError, NonNumericValueError
from .printer import TablePrinter
from .sinks import BufferSink, DisplaySink, RichSink

logger = logging.getLogger(__name__)

Callback = Callable[..., Any]


def _bind(fn: Callback, arity: int, fallback: int = 1) -> Callback:
    """
    Trim ``fn`` to the leading positional arguments it declares.

    Callbacks are called with up to ``arity`` arguments; one declaring
    fewer only receives that many. Callables without an introspectable
    signature receive ``fallback`` arguments.
    """
    try:
        params = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        count = fallback
    else:
        count = 0
        for param in params:
            if param.kind is inspect.Parameter.VAR_POSITIONAL:
                count = arity
                break
            if param.kind in (
                inspect.Parameter.POSITIONAL_ONLY,
                inspect.Parameter.POSITIONAL_OR_KEYWORD,
            ):
                count += 1
        count = min(count, arity)

    if count == arity:
        return fn
    return lambda *args: fn(*args[:count])


class Table(MutableMapping[Hashable, Any]):
    """
    Wraps a mutable mapping by reference and adds collection methods.

    Results of transforming methods are new tables; the wrapped mapping is
    never copied or modified by them.

    Example:
        scores = T([3, 1, 4, 1, 5])
        scores.imap(lambda v: v * 10).to_list()    # [30, 10, 40, 10, 50]
        scores.ifilter(lambda v: v > 2).join("-")  # "3-4-5"
        scores.sum()                               # 14
    """

    __slots__ = ("_data",)

    def __init__(self, data: MutableMapping[Hashable, Any] | None = None):
        self._data = data if data is not None else {}

    @classmethod
    def from_values(cls, values: Iterable[Any]) -> Table:
        """Lay out ``values`` at keys 1, 2, ... skipping ``None`` entries."""
        return cls({i: v for i, v in enumerate(values, 1) if v is not None})

    @classmethod
    def _packed(cls, values: Iterable[Any]) -> Table:
        # Dense layout at 1, 2, ... with None entries dropped, in one pass.
        data = {}
        n = 1
        for value in values:
            if value is not None:
                data[n] = value
                n += 1
        return cls(data)

    @property
    def data(self) -> MutableMapping[Hashable, Any]:
        """The wrapped mapping."""
        return self._data

    # Mapping protocol

    def __getitem__(self, key: Hashable) -> Any:
        return self._data[key]

    def __setitem__(self, key: Hashable, value: Any) -> None:
        if value is None:
            self._data.pop(key, None)
        else:
            self._data[key] = value

    def __delitem__(self, key: Hashable) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"T({self._data!r})"

    # Array part

    def array_length(self) -> int:
        """Length of the array part."""
        n = 0
        while self._data.get(n + 1) is not None:
            n += 1
        return n

    def append(self, value: Any) -> None:
        """Append ``value`` to the end of the array part. ``None`` is ignored."""
        if value is not None:
            self._data[self.array_length() + 1] = value

    def to_list(self) -> list[Any]:
        """Return the array part as a list."""
        return [self._data[i] for i in range(1, self.array_length() + 1)]

    def _items(self) -> list[tuple[Hashable, Any]]:
        # Snapshot so callbacks may assign to the table while we walk it.
        return [(k, v) for k, v in self._data.items() if v is not None]

    # Transforms

    def imap(self, fn: Callback) -> Table:
        """Map the array part into a new array; ``None`` results are dropped."""
        call = _bind(fn, 3)
        return Table._packed(
            call(self._data.get(i), i, self) for i in range(1, self.array_length() + 1)
        )

    def map(self, fn: Callback) -> Table:
        """Map every value, keeping its key; ``None`` results omit the key."""
        call = _bind(fn, 3)
        result = Table()
        for key, value in self._items():
            result[key] = call(value, key, self)
        return result

    def iforeach(self, fn: Callback) -> None:
        call = _bind(fn, 3)
        for i in range(1, self.array_length() + 1):
            call(self._data.get(i), i, self)

    def foreach(self, fn: Callback) -> None:
        call = _bind(fn, 3)
        for key, value in self._items():
            call(value, key, self)

    # Reductions

    def ireduce(self, fn: Callback, initial: Any = None) -> Any:
        """Fold the array part in order: ``acc = fn(acc, value, index, table)``."""
        call = _bind(fn, 4, fallback=2)
        acc = initial
        for i in range(1, self.array_length() + 1):
            acc = call(acc, self._data.get(i), i, self)
        return acc

    def reduce(self, fn: Callback, initial: Any = None) -> Any:
        """
        Fold every entry: ``acc = fn(acc, value, key, table)``.

        Key order is the mapping's, so ``fn`` should not depend on it.
        """
        call = _bind(fn, 4, fallback=2)
        acc = initial
        for key, value in self._items():
            acc = call(acc, value, key, self)
        return acc

    def sum(self) -> Any:
        """Sum the array part. Raises NonNumericValueError on non-numbers."""
        total = 0
        for i in range(1, self.array_length() + 1):
            value = self._data[i]
            if isinstance(value, bool) or not isinstance(value, Number):
                raise NonNumericValueError(i, value)
            total = total + value
        return total

    # Predicates

    def ievery(self, fn: Callback) -> bool:
        call = _bind(fn, 3)
        for i in range(1, self.array_length() + 1):
            if not call(self._data.get(i), i, self):
                return False
        return True

    def every(self, fn: Callback) -> bool:
        call = _bind(fn, 3)
        for key, value in self._items():
            if not call(value, key, self):
                return False
        return True

    def iany(self, fn: Callback) -> bool:
        call = _bind(fn, 3)
        for i in range(1, self.array_length() + 1):
            if call(self._data.get(i), i, self):
                return True
        return False

    def any(self, fn: Callback) -> bool:
        call = _bind(fn, 3)
        for key, value in self._items():
            if call(value, key, self):
                return True
        return False

    # Filters

    def ifilter(self, fn: Callback) -> Table:
        """Keep matching array values, re-indexed densely from 1."""
        call = _bind(fn, 3)
        values = ((i, self._data.get(i)) for i in range(1, self.array_length() + 1))
        return Table._packed(value for i, value in values if call(value, i, self))

    def filter(self, fn: Callback) -> Table:
        """Keep matching entries under their original keys."""
        call = _bind(fn, 3)
        result = Table()
        for key, value in self._items():
            if call(value, key, self):
                result[key] = value
        return result

    # Search

    def index_of(self, item: Any) -> int | None:
        """Smallest array index holding ``item``, or None."""
        for i in range(1, self.array_length() + 1):
            if self._data[i] == item:
                return i
        return None

    def last_index_of(self, item: Any) -> int | None:
        """Largest array index holding ``item``, or None."""
        for i in range(self.array_length(), 0, -1):
            if self._data[i] == item:
                return i
        return None

    def find_first_key(self, item: Any) -> Hashable | None:
        """First key, in mapping order, whose value equals ``item``."""
        for key, value in self._items():
            if value == item:
                return key
        return None

    # Shaping

    @staticmethod
    def build(length: int, initializer: Any) -> Table:
        return build(length, initializer)

    def slice(self, start: int | None = None, end: int | None = None) -> Table:
        """
        Copy the array values from ``start`` to ``end`` inclusive.

        Indices are 1-based and positions outside the array part contribute
        nothing. Negative indices count from the end, with two quirks kept
        for compatibility with existing scripts:

        * ``slice(n)`` with ``n < 0`` takes the last ``-n`` values, but with
          ``n >= 0`` covers ``[0, n]``, i.e. the first ``n`` values.
        * With both arguments a negative index maps to ``len + index``, so
          ``-1`` is the second to last value, not the last.

        Example:
            t = T([1, 2, 3, 4, 5])
            t.slice(2, 4).to_list()    # [2, 3, 4]
            t.slice(-2).to_list()      # [4, 5]
            t.slice(3).to_list()       # [1, 2, 3]
            t.slice(-3, -1).to_list()  # [2, 3, 4]
        """
        if start is None:
            raise MissingArgumentError("start", "A starting index is required")

        length = self.array_length()
        if end is None:
            if start < 0:
                start, end = length + start + 1, length
            else:
                start, end = 0, start
        else:
            if start < 0:
                start = length + start
            if end < 0:
                end = length + end

        return Table._packed(self._data.get(i) for i in range(start, end + 1))

    def join(self, delim: str = ", ") -> str:
        """Join the string form of the array values with ``delim``."""
        return delim.join(str(value) for value in self.to_list())

    def reverse(self) -> Table:
        """Return the array part reversed as a new table."""
        return Table.from_values(reversed(self.to_list()))

    # Display

    def print(
        self,
        sink: DisplaySink | None = None,
        visited: set[int] | None = None,
        indent: str | None = None,
    ) -> None:
        """
        Recursively print the table to ``sink`` (a RichSink on stdout if omitted).

        Args:
            sink: Where text and colors go.
            visited: Identities of collections being printed further up;
                these are written as plain values instead of re-entered.
            indent: Current indentation of the entries.
        """
        TablePrinter(sink or RichSink()).print(self, visited, indent)

    def pformat(self, indent: str | None = None) -> str:
        """Return what ``print`` would write, without colors."""
        sink = BufferSink()
        TablePrinter(sink).print(self, None, indent)
        return sink.text


def build(length: int, initializer: Any) -> Table:
    """
    Build an array of ``length`` entries.

    Entry ``i`` (from 1) is ``initializer(i)`` when ``initializer`` is
    callable, else ``initializer`` itself. ``length <= 0`` gives an empty table.

    Example:
        build(3, lambda i: i * i).to_list()  # [1, 4, 9]
        build(2, "x").to_list()              # ["x", "x"]
    """
    if length <= 0:
        logger.debug("build called with length %d, returning empty table", length)
        return Table()

    if callable(initializer):
        return Table._packed(initializer(i) for i in range(1, length + 1))
    return Table._packed(initializer for _ in range(length))


def T(o: Mapping[Hashable, Any] | Iterable[Any] | None = None) -> Table:
    """
    Give a literal the table methods.

    Mutable mappings are wrapped by reference; tables are returned as-is.
    Sequences and other iterables are laid out at keys 1, 2, ... in a new
    mapping, as are read-only mappings.

    Example:
        config = {"fuel": 80}
        T(config)["fuel"] = 60   # config["fuel"] is now 60
        T([10, 20, 30]).index_of(20)  # 2
    """
    if o is None:
        return Table()
    if isinstance(o, Table):
        return o
    if isinstance(o, MutableMapping):
        return Table(o)
    if isinstance(o, Mapping):
        return Table(dict(o))
    if isinstance(o, (str, bytes)) or not isinstance(o, Iterable):
        raise TypeError(f"Cannot make a table from {type(o).__name__}")
    logger.debug("Laying out %s literal as a new table", type(o).__name__)
    return Table.from_values(o)
