"""RangeView — a live, index-ranged window onto a mutable sequence.

Backs ``ParameterSeries.sub_list(start, stop)``. Reads and writes go straight
through to the parent at an offset, so changes made through the view show up
in the parent and vice versa. Inserts and deletes through the view shift the
view's own bounds; structural changes made directly on the parent ahead of
the view are not tracked.
"""

from collections.abc import Iterable, MutableSequence
from typing import overload


class RangeView[T](MutableSequence[T]):
    """Mutable view of ``parent[start:stop]`` that never copies."""

    __slots__ = ("_offset", "_parent", "_size")

    def __init__(self, parent: MutableSequence[T], start: int, stop: int) -> None:
        length = len(parent)
        if start < 0 or stop > length or start > stop:
            msg = f"range [{start}, {stop}) out of bounds for length {length}"
            raise IndexError(msg)
        self._parent = parent
        self._offset = start
        self._size = stop - start

    def _absolute(self, index: int) -> int:
        if index < 0:
            index += self._size
        if not 0 <= index < self._size:
            msg = "RangeView index out of range"
            raise IndexError(msg)
        return self._offset + index

    @overload
    def __getitem__(self, index: int) -> T: ...
    @overload
    def __getitem__(self, index: slice) -> list[T]: ...

    def __getitem__(self, index: int | slice) -> T | list[T]:
        if isinstance(index, slice):
            return [self._parent[self._offset + i] for i in range(*index.indices(self._size))]
        return self._parent[self._absolute(index)]

    def __setitem__(self, index: int | slice, value: T | Iterable[T]) -> None:  # type: ignore[override]
        if isinstance(index, slice):
            msg = "RangeView does not support slice assignment"
            raise TypeError(msg)
        self._parent[self._absolute(index)] = value  # type: ignore[assignment]

    def __delitem__(self, index: int | slice) -> None:
        if isinstance(index, slice):
            # Highest first so earlier positions stay valid
            for i in sorted(range(*index.indices(self._size)), reverse=True):
                del self._parent[self._offset + i]
                self._size -= 1
            return
        del self._parent[self._absolute(index)]
        self._size -= 1

    def __len__(self) -> int:
        return self._size

    def insert(self, index: int, value: T) -> None:
        if index < 0:
            index = max(0, index + self._size)
        index = min(index, self._size)
        self._parent.insert(self._offset + index, value)
        self._size += 1

    def __repr__(self) -> str:
        return f"RangeView({list(self)!r})"
