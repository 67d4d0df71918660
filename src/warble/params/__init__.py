"""Ordered, multi-valued name/value series.

Names may repeat, order is kept, and lookups can ignore case::

    from warble.params import ParameterSeries

    series = ParameterSeries.from_pairs([("Accept", "text/html"), ("accept", "*/*")])
    series.get_values("ACCEPT")          # "text/html,*/*"
    series.set("Accept", "application/json")
    view = series.unmodifiable_view()   # live, read-only
"""

from warble.params.entry import EMPTY_VALUE, EmptyValue, MergedValue, Parameter
from warble.params.series import ParameterSeries
from warble.params.view import ImmutableSeriesView, unmodifiable_view

__all__ = [
    "EMPTY_VALUE",
    "EmptyValue",
    "ImmutableSeriesView",
    "MergedValue",
    "Parameter",
    "ParameterSeries",
    "unmodifiable_view",
]
