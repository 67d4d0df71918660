"""SeriesReader protocol — shared read interface for series and their views.

A structural protocol so collaborators can accept a ``ParameterSeries``,
an ``ImmutableSeriesView``, or a concrete series (``Form``, ``HeaderSeries``)
without coupling to the concrete type.
"""

from collections.abc import Iterator, MutableMapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SeriesReader(Protocol):
    """Read-only capability set of an ordered name/value series.

    Lookups take an ``ignore_case`` flag. Missing names are returned as
    ``None``/empty results, never raised.

    Defined with explicit dunder methods because Python 3.14 Protocols
    cannot inherit from non-Protocol ABCs like ``Sequence``.
    """

    def __getitem__(self, index: Any) -> Any: ...
    def __len__(self) -> int: ...
    def __iter__(self) -> Iterator[Any]: ...
    def __contains__(self, item: object) -> bool: ...
    def get_first(self, name: str, ignore_case: bool = False) -> Any: ...
    def get_first_value(
        self, name: str, ignore_case: bool = False, default: str | None = None
    ) -> str | None: ...
    def get_names(self) -> set[str]: ...
    def get_values(self, name: str, separator: str = ",", ignore_case: bool = True) -> str | None: ...
    def get_values_array(self, name: str, ignore_case: bool = False) -> list[str | None]: ...
    def get_values_map(self) -> dict[str, str | None]: ...
    def sub_list(self, start: int, stop: int) -> Any: ...
    def sub_list_named(self, name: str, ignore_case: bool = False) -> Any: ...
    def copy_to(self, target: MutableMapping[str, Any]) -> None: ...
    def items(self) -> list[tuple[str, str | None]]: ...
