"""PaginatedWindow — one page of a backing sequence, computed once.

The first ``get_window()`` call copies ``backing[start:start + page_size]``
into a tuple and caches it; every later call returns that same tuple, even
if the backing sequence has changed since.

Free-threading safety:
    - One ``threading.Lock`` per instance guards the computation
    - Double-checked: cached reads skip the lock
    - At most one computation per instance, however many threads race
"""

import logging
import math
import threading
from collections.abc import Iterator, Sequence

logger = logging.getLogger("warble.pagination")


class PaginatedWindow[T]:
    """A memoized page over *backing*.

    Args:
        backing: The ordered rows to page through.
        page_size: Rows per page. Negative means "everything"; ``0`` with
            ``start == 0`` also means everything.
        start: Offset of the first row in the page.
        total_count: Size of the full collection, which may be larger than
            *backing* when only part of it has been fetched. Defaults to
            ``len(backing)``.
    """

    __slots__ = ("_backing", "_lock", "_page_size", "_start", "_total_count", "_window")

    def __init__(
        self,
        backing: Sequence[T],
        page_size: int,
        start: int = 0,
        total_count: int | None = None,
    ) -> None:
        if start < 0:
            msg = f"start must be >= 0, got {start}"
            raise ValueError(msg)
        self._backing = backing
        self._page_size = page_size
        self._start = start
        self._total_count = len(backing) if total_count is None else total_count
        self._window: tuple[T, ...] | None = None
        self._lock = threading.Lock()

    def get_window(self) -> Sequence[T]:
        """Return the page, computing it on first use.

        Returns *backing* itself (uncached) when ``page_size`` is negative or
        *backing* is empty.
        """
        window = self._window
        if window is not None:
            return window

        with self._lock:
            if self._window is not None:
                return self._window

            length = len(self._backing)
            if self._page_size < 0 or length == 0:
                return self._backing

            end = self._start + self._page_size
            if end > length or end == 0:
                end = length

            self._window = tuple(self._backing[i] for i in range(self._start, end))
            logger.debug(
                "window computed: start=%d end=%d length=%d", self._start, end, length
            )
            return self._window

    @property
    def data(self) -> Sequence[T]:
        """Alias for ``get_window()``."""
        return self.get_window()

    @property
    def backing(self) -> Sequence[T]:
        return self._backing

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def start(self) -> int:
        return self._start

    @property
    def total_count(self) -> int:
        return self._total_count

    @property
    def is_computed(self) -> bool:
        """True once the window has been cached."""
        return self._window is not None

    @property
    def page_number(self) -> int:
        """1-based page number (1 when unpaged)."""
        if self._page_size <= 0:
            return 1
        return self._start // self._page_size + 1

    @property
    def page_count(self) -> int:
        """Number of pages in the full collection (at least 1)."""
        if self._page_size <= 0:
            return 1
        return max(1, math.ceil(self._total_count / self._page_size))

    @property
    def has_next(self) -> bool:
        """True if rows remain after this page in the full collection."""
        if self._page_size <= 0:
            return False
        return self._start + self._page_size < self._total_count

    def __len__(self) -> int:
        return len(self.get_window())

    def __iter__(self) -> Iterator[T]:
        return iter(self.get_window())

    def __repr__(self) -> str:
        return (
            f"PaginatedWindow(start={self._start}, page_size={self._page_size}, "
            f"total_count={self._total_count})"
        )
