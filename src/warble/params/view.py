"""ImmutableSeriesView — read-only decorator over a parameter series.

Holds no data of its own: every read goes straight to the wrapped series,
so changes the owner makes through another reference are visible here.
Copy before wrapping if that aliasing is unwanted::

    view = unmodifiable_view(series.sub_list_named("tag"))

Every mutator raises ``ImmutableCollectionError``.
"""

from collections.abc import Iterator, MutableMapping, Sequence
from typing import TYPE_CHECKING, Any, NoReturn

from warble._internal.types import NameSet
from warble.errors import ImmutableCollectionError
from warble.params.entry import Parameter

if TYPE_CHECKING:
    from warble.params.series import ParameterSeries


def _given(**options: Any) -> dict[str, Any]:
    return {key: value for key, value in options.items() if value is not None}


class ImmutableSeriesView[E: Parameter](Sequence[E]):
    """Read-only, live view of a ``ParameterSeries``.

    Derived series (``sub_list``, ``sub_list_named``, slicing) come back
    wrapped too, so no mutation path leaks out.
    """

    __slots__ = ("_series",)

    def __init__(self, series: "ParameterSeries[E]") -> None:
        object.__setattr__(self, "_series", series)

    def _reject(self, operation: str) -> NoReturn:
        raise ImmutableCollectionError(operation, type(self).__name__)

    # -- Sequence --

    def __getitem__(self, index: int | slice) -> Any:
        if isinstance(index, slice):
            return ImmutableSeriesView(self._series[index])
        return self._series[index]

    def __len__(self) -> int:
        return len(self._series)

    def __iter__(self) -> Iterator[E]:
        return iter(self._series)

    def __contains__(self, item: object) -> bool:
        return item in self._series

    def __eq__(self, other: object) -> bool:
        return self._series == other

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._series!r})"

    @property
    def is_read_only(self) -> bool:
        return True

    # -- Reads --
    # Options left as None are not forwarded, so the wrapped series applies
    # its own defaults (HeaderSeries ignores case and folds with its separator)

    def get_first(self, name: str, ignore_case: bool | None = None) -> E | None:
        return self._series.get_first(name, **_given(ignore_case=ignore_case))

    def get_first_value(
        self, name: str, ignore_case: bool | None = None, default: str | None = None
    ) -> str | None:
        return self._series.get_first_value(
            name, **_given(ignore_case=ignore_case, default=default)
        )

    def get_names(self) -> NameSet:
        return self._series.get_names()

    def get_values(
        self, name: str, separator: str | None = None, ignore_case: bool | None = None
    ) -> str | None:
        return self._series.get_values(
            name, **_given(separator=separator, ignore_case=ignore_case)
        )

    def get_values_array(self, name: str, ignore_case: bool | None = None) -> list[str | None]:
        return self._series.get_values_array(name, **_given(ignore_case=ignore_case))

    def get_values_map(self) -> dict[str, str | None]:
        return self._series.get_values_map()

    def items(self) -> list[tuple[str, str | None]]:
        return self._series.items()

    def sub_list(self, start: int, stop: int) -> "ImmutableSeriesView[E]":
        return ImmutableSeriesView(self._series.sub_list(start, stop))

    def sub_list_named(
        self, name: str, ignore_case: bool | None = None
    ) -> "ImmutableSeriesView[E]":
        return ImmutableSeriesView(
            self._series.sub_list_named(name, **_given(ignore_case=ignore_case))
        )

    def copy_to(self, target: MutableMapping[str, Any]) -> None:
        # Writes to the caller's mapping, not to the series
        self._series.copy_to(target)

    # -- Mutators (all rejected) --

    def add(self, name: str, value: str | None = None) -> NoReturn:
        self._reject("add")

    def remove_all(self, name: str, ignore_case: bool = False) -> NoReturn:
        self._reject("remove_all")

    def remove_first(self, name: str, ignore_case: bool = False) -> NoReturn:
        self._reject("remove_first")

    def set(self, name: str, value: str | None, ignore_case: bool = False) -> NoReturn:
        self._reject("set")

    def append(self, value: E) -> NoReturn:
        self._reject("append")

    def extend(self, values: object) -> NoReturn:
        self._reject("extend")

    def insert(self, index: int, value: E) -> NoReturn:
        self._reject("insert")

    def pop(self, index: int = -1) -> NoReturn:
        self._reject("pop")

    def remove(self, value: E) -> NoReturn:
        self._reject("remove")

    def clear(self) -> NoReturn:
        self._reject("clear")

    def reverse(self) -> NoReturn:
        self._reject("reverse")

    def sort(self, *, key: object = None, reverse: bool = False) -> NoReturn:
        self._reject("sort")

    def __setitem__(self, index: int, value: E) -> NoReturn:
        self._reject("__setitem__")

    def __delitem__(self, index: int | slice) -> NoReturn:
        self._reject("__delitem__")

    def __iadd__(self, values: object) -> NoReturn:
        self._reject("__iadd__")


def unmodifiable_view[E: Parameter](series: "ParameterSeries[E]") -> ImmutableSeriesView[E]:
    """Return a read-only, live view of *series*.

    Wrapping a view again returns it unchanged.
    """
    if isinstance(series, ImmutableSeriesView):
        return series
    return ImmutableSeriesView(series)
