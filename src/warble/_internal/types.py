"""Shared type aliases used across warble modules."""

from collections.abc import Callable, MutableSequence
from typing import Any, TypeAlias

# Distinct entry names. Aliased because series and views define a ``set``
# method that shadows the builtin inside their class bodies.
NameSet: TypeAlias = set[str]

# Entry factory: builds a concrete entry from (name, value)
EntryFactory: TypeAlias = Callable[[str, str | None], Any]

# Series factory: builds a series of the same kind around a delegate (or None)
SeriesFactory: TypeAlias = Callable[[MutableSequence[Any] | None], Any]
