"""ParameterSeries — an ordered, multi-valued list of name/value entries.

Behaves like an HTTP header list: names may repeat, insertion order is
preserved, and every lookup can match names case-sensitively or not.

The series composes a delegate ``MutableSequence`` instead of subclassing
``list``. Concrete series (``Form``, ``HeaderSeries``) plug in their own
entry and series types through two factories passed at construction::

    series = ParameterSeries(make_entry=MyParam, make_series=MySeries)

Missing names are never an error: lookups return ``None``, ``False``,
or an empty result.

Not thread-safe. A series has one owner; callers sharing one across
threads must lock around it themselves.
"""

from collections.abc import Callable, Iterable, Iterator, MutableMapping, MutableSequence
from operator import attrgetter
from typing import Any, Self, overload

from warble._internal.multimap import SeriesReader
from warble._internal.ranges import RangeView
from warble._internal.types import EntryFactory, NameSet, SeriesFactory
from warble.params.entry import Parameter
from warble.params.view import ImmutableSeriesView


class ParameterSeries[E: Parameter](MutableSequence[E]):
    """Modifiable, ordered series of parameters.

    ``series[i]`` returns an entry; ``series[i:j]`` returns a new series of
    the same kind. The full ``MutableSequence`` API (``append``, ``insert``,
    ``pop``, ``clear``, ...) works on entries; the name-based helpers below
    work on names.

    Args:
        delegate: Backing sequence. Wrapped as-is, never copied.
        make_entry: Builds an entry from ``(name, value)``.
        make_series: Builds a series of the same kind around a delegate
            (or a fresh one for ``None``).
    """

    __slots__ = ("_items", "_make_entry", "_make_series")

    def __init__(
        self,
        delegate: MutableSequence[E] | None = None,
        *,
        make_entry: EntryFactory = Parameter,
        make_series: SeriesFactory | None = None,
    ) -> None:
        self._items: MutableSequence[E] = delegate if delegate is not None else []
        self._make_entry = make_entry
        self._make_series = make_series or self._same_kind

    def _same_kind(self, delegate: MutableSequence[E] | None) -> "ParameterSeries[E]":
        return ParameterSeries(delegate, make_entry=self._make_entry)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str | None]], **factories: Any) -> Self:
        """Build a series from ``(name, value)`` pairs, in order.

        Keyword arguments go to the constructor, e.g. ``make_entry=``.
        """
        series = cls(**factories)
        for name, value in pairs:
            series.add(name, value)
        return series

    # -- Factories --

    def create_parameter(self, name: str, value: str | None = None) -> E:
        """Create (but do not add) an entry of this series' kind."""
        return self._make_entry(name, value)

    def create_series(self, delegate: MutableSequence[E] | None = None) -> "ParameterSeries[E]":
        """Create a series of this kind, wrapping *delegate* if given."""
        return self._make_series(delegate)

    # -- MutableSequence --

    @overload
    def __getitem__(self, index: int) -> E: ...
    @overload
    def __getitem__(self, index: slice) -> "ParameterSeries[E]": ...

    def __getitem__(self, index: int | slice) -> "E | ParameterSeries[E]":
        if isinstance(index, slice):
            return self._make_series(list(self._items[index]))
        return self._items[index]

    def __setitem__(self, index: int, value: E) -> None:  # type: ignore[override]
        self._items[index] = value

    def __delitem__(self, index: int | slice) -> None:
        del self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[E]:
        return iter(self._items)

    def insert(self, index: int, value: E) -> None:
        self._items.insert(index, value)

    def sort(self, *, key: Callable[[E], Any] | None = None, reverse: bool = False) -> None:
        """Sort entries in place, by name unless *key* is given."""
        ordered = sorted(self._items, key=key or attrgetter("name"), reverse=reverse)
        for i, param in enumerate(ordered):
            self._items[i] = param

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SeriesReader):
            return self.items() == other.items()
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.items()!r})"

    @property
    def is_read_only(self) -> bool:
        return False

    # -- Name-based access --

    def add(self, name: str, value: str | None = None) -> bool:
        """Create an entry and append it. Always returns ``True``."""
        self._items.append(self._make_entry(name, value))
        return True

    def get_first(self, name: str, ignore_case: bool = False) -> E | None:
        """Return the first entry named *name*, or ``None``."""
        for param in self._items:
            if param.matches(name, ignore_case):
                return param
        return None

    def get_first_value(
        self, name: str, ignore_case: bool = False, default: str | None = None
    ) -> str | None:
        """Return the first value for *name*.

        Falls back to *default* when no entry matches or the match has no value.
        """
        param = self.get_first(name, ignore_case)
        if param is None or param.value is None:
            return default
        return param.value

    def get_names(self) -> NameSet:
        """Return the distinct entry names (case-sensitive)."""
        return {param.name for param in self._items}

    def get_values(self, name: str, separator: str = ",", ignore_case: bool = True) -> str | None:
        """Join the values of every entry named *name* with *separator*.

        Folds repeated names the way HTTP headers are folded, so the default
        is case-insensitive. Returns ``None`` when nothing matches.

        Valueless entries ahead of the first real value are skipped; once
        joining has started, one joins as an empty string::

            [X=None, X="a"]  ->  "a"
            [X="a", X=None]  ->  "a,"
        """
        result: str | None = None
        parts: list[str] | None = None
        for param in self._items:
            if not param.matches(name, ignore_case):
                continue
            if parts is not None:
                parts.append(param.value or "")
            elif result is None:
                result = param.value
            else:
                parts = [result, param.value or ""]
        if parts is not None:
            return separator.join(parts)
        return result

    def get_values_array(self, name: str, ignore_case: bool = False) -> list[str | None]:
        """Return the values of every entry named *name*, in order."""
        return [param.value for param in self.sub_list_named(name, ignore_case)]

    def get_values_map(self) -> dict[str, str | None]:
        """Return ``{name: first value}`` in first-occurrence order."""
        result: dict[str, str | None] = {}
        for param in self._items:
            result.setdefault(param.name, param.value)
        return result

    def items(self) -> list[tuple[str, str | None]]:
        """Return all ``(name, value)`` pairs, duplicates included."""
        return [(param.name, param.value) for param in self._items]

    def _indexes(self, name: str, ignore_case: bool) -> list[int]:
        return [i for i, param in enumerate(self._items) if param.matches(name, ignore_case)]

    def remove_all(self, name: str, ignore_case: bool = False) -> bool:
        """Remove every entry named *name*. True if anything was removed."""
        indexes = self._indexes(name, ignore_case)
        for i in reversed(indexes):
            del self._items[i]
        return bool(indexes)

    def remove_first(self, name: str, ignore_case: bool = False) -> bool:
        """Remove the first entry named *name*. True if one was removed."""
        for i, param in enumerate(self._items):
            if param.matches(name, ignore_case):
                del self._items[i]
                return True
        return False

    def set(self, name: str, value: str | None, ignore_case: bool = False) -> E | None:
        """Replace the value of the first entry named *name*.

        Every other entry with that name is removed, so at most one remains.
        Returns the updated entry. When nothing matches, a new entry is
        appended and ``None`` is returned; use ``get_first`` to fetch it.
        """
        indexes = self._indexes(name, ignore_case)
        if not indexes:
            self.add(name, value)
            return None
        first = self._items[indexes[0]]
        first.value = value
        for i in reversed(indexes[1:]):
            del self._items[i]
        return first

    # -- Derived series --

    def sub_list(self, start: int, stop: int) -> "ParameterSeries[E]":
        """Return a live view of entries ``[start, stop)``.

        Changes through the view show up in this series and vice versa.
        Raises ``IndexError`` for bounds outside ``0 <= start <= stop <= len``.
        """
        return self._make_series(RangeView(self._items, start, stop))

    def sub_list_named(self, name: str, ignore_case: bool = False) -> "ParameterSeries[E]":
        """Return a new series holding the entries named *name*.

        A snapshot: the entries are shared, but removing from the result
        leaves this series untouched.
        """
        result = self._make_series(None)
        for param in self._items:
            if param.matches(name, ignore_case):
                result.append(param)
        return result

    def copy_to(self, target: MutableMapping[str, Any]) -> None:
        """Merge values into *target* for names that are already its keys.

        The first value replaces a ``None`` placeholder; a second one turns
        the slot into a list; later ones are appended. Entries without a
        value are written as ``EMPTY_VALUE``.
        """
        for param in self._items:
            if param.name not in target:
                continue
            value = param.merged_value()
            current = target[param.name]
            if current is None:
                target[param.name] = value
            elif isinstance(current, list):
                current.append(value)
            else:
                target[param.name] = [current, value]

    def unmodifiable_view(self) -> ImmutableSeriesView[E]:
        """Return a live, read-only view of this series."""
        return ImmutableSeriesView(self)
