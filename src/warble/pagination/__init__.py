"""Memoized pagination over an ordered sequence.

Usage::

    from warble.pagination import PaginatedWindow

    page = PaginatedWindow(rows, page_size=20, start=40, total_count=1_000)
    page.get_window()   # rows[40:60], computed once, thread-safe
"""

from warble.pagination.request import Filter, QueryRequest, SortDirection
from warble.pagination.window import PaginatedWindow

__all__ = [
    "Filter",
    "PaginatedWindow",
    "QueryRequest",
    "SortDirection",
]
