"""Paging request binding — read start/limit/sort/filter from a series.

Bridges a decoded parameter series (query string or form body) to a
``PaginatedWindow``::

    form = parse_query_string(b"start=20&limit=10&sort=name&dir=ASC")
    request = QueryRequest.from_series(form)
    page = request.window(rows, total_count=count)

Recognised names: ``query``, ``start``, ``limit``, ``sort``, ``dir``, and
``filter`` (a JSON array of ``{"property": ..., "value": ...}`` objects).
"""

import json
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Self

from warble._internal.multimap import SeriesReader
from warble.config import DEFAULT_CONFIG, SeriesConfig
from warble.pagination.window import PaginatedWindow


class SortDirection(StrEnum):
    ASCENDING = "ASC"
    DESCENDING = "DESC"

    @classmethod
    def parse(cls, text: str | None) -> "SortDirection | None":
        """``"ASC"`` is ascending; any other non-None text is descending."""
        if text is None:
            return None
        return cls.ASCENDING if text == cls.ASCENDING.value else cls.DESCENDING


@dataclass(frozen=True, slots=True)
class Filter:
    """A single property filter sent alongside a paging request."""

    property: str
    value: Any = None
    operator: str | None = None
    type: str | None = None


@dataclass(frozen=True, slots=True)
class QueryRequest:
    """Paging, sorting and filtering parameters for a list request.

    ``limit == 0`` on the first page means the whole result set.
    """

    start: int = 0
    limit: int = 0
    query: str | None = None
    sort_property: str | None = None
    sort_direction: SortDirection | None = None
    filters: tuple[Filter, ...] = ()

    @classmethod
    def from_series(cls, series: SeriesReader, config: SeriesConfig | None = None) -> Self:
        """Bind a request from the first values of a decoded series.

        Non-numeric ``start``/``limit`` fall back to the defaults;
        ``limit`` is clamped to ``config.max_page_size``.

        Raises:
            ValueError: If ``filter`` is present but is not valid JSON.
        """
        cfg = config or DEFAULT_CONFIG
        start = max(0, _int_or(series.get_first_value("start"), 0))
        limit = _int_or(series.get_first_value("limit"), cfg.default_page_size)
        return cls(
            start=start,
            limit=cfg.clamp_page_size(max(0, limit)),
            query=series.get_first_value("query"),
            sort_property=series.get_first_value("sort"),
            sort_direction=SortDirection.parse(series.get_first_value("dir")),
            filters=cls.filters_from_json(series.get_first_value("filter")),
        )

    @staticmethod
    def filters_from_json(text: str | None) -> tuple[Filter, ...]:
        """Decode a JSON array of filter objects. Empty text gives no filters.

        Raises:
            ValueError: If *text* is not a JSON array of objects with a
                ``property`` key.
        """
        if not text:
            return ()
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            msg = f"Invalid filter JSON: {e.msg}"
            raise ValueError(msg) from e
        if not isinstance(raw, list):
            msg = "Filter JSON must be an array"
            raise ValueError(msg)
        filters = []
        for item in raw:
            if not isinstance(item, dict) or "property" not in item:
                msg = f"Filter entry must be an object with a 'property' key: {item!r}"
                raise ValueError(msg)
            filters.append(
                Filter(
                    property=item["property"],
                    value=item.get("value"),
                    operator=item.get("operator"),
                    type=item.get("type"),
                )
            )
        return tuple(filters)

    def get_filter(self, property_name: str) -> Filter | None:
        """Return the first filter on *property_name*, or ``None``."""
        if not property_name:
            return None
        for f in self.filters:
            if f.property == property_name:
                return f
        return None

    def window[T](self, rows: Sequence[T], total_count: int | None = None) -> PaginatedWindow[T]:
        """Wrap *rows* in a ``PaginatedWindow`` for this request's page."""
        return PaginatedWindow(rows, page_size=self.limit, start=self.start, total_count=total_count)


def _int_or(value: str | None, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default
