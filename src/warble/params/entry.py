"""Parameter entries and the empty-value marker.

A ``Parameter`` is a name with an optional value. ``None`` means "no value"
and is distinct from ``""``. When a series is merged into a plain mapping
(``ParameterSeries.copy_to``), a ``None`` value is written as ``EMPTY_VALUE``
so the mapping can tell "present with no value" apart from "absent".
"""

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class EmptyValue:
    """Marks a parameter that was present without a value.

    Compared by equality, not identity: every ``EmptyValue()`` is equal
    to every other. Falsy, like an empty string.
    """

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "EMPTY_VALUE"


EMPTY_VALUE = EmptyValue()

# What copy_to() writes into a target mapping for a single name
MergedValue: TypeAlias = str | EmptyValue | list[str | EmptyValue]


@dataclass(slots=True)
class Parameter:
    """A name/value pair inside a series.

    The name is fixed; the value may be replaced in place by
    ``ParameterSeries.set()``.
    """

    name: str
    value: str | None = None

    def matches(self, name: str, ignore_case: bool = False) -> bool:
        """True if this entry's name equals *name*.

        An exact match always counts. With *ignore_case*, a case-folded
        match counts too.
        """
        if self.name == name:
            return True
        return ignore_case and self.name.casefold() == name.casefold()

    def merged_value(self) -> str | EmptyValue:
        """The value as written by ``copy_to`` (``EMPTY_VALUE`` for ``None``)."""
        return EMPTY_VALUE if self.value is None else self.value

    def __iter__(self):
        # Unpacks like a pair: ``name, value = param``
        yield self.name
        yield self.value
