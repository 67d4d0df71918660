"""Tests for warble.params.series — ordered, multi-valued ParameterSeries."""

from collections.abc import MutableSequence
from dataclasses import dataclass

import pytest

from warble._internal.multimap import SeriesReader
from warble.params.entry import EMPTY_VALUE, Parameter
from warble.params.series import ParameterSeries
from warble.params.view import ImmutableSeriesView


def _s(*pairs: tuple[str, str | None]) -> ParameterSeries[Parameter]:
    """Shorthand: build a series from string pairs."""
    return ParameterSeries.from_pairs(pairs)


# ---------------------------------------------------------------------------
# Ordering and the sequence protocol
# ---------------------------------------------------------------------------


class TestOrdering:
    def test_iteration_follows_add_order(self) -> None:
        s = ParameterSeries()
        for name in ("b", "a", "c", "a"):
            assert s.add(name, name.upper()) is True
        assert [p.name for p in s] == ["b", "a", "c", "a"]

    def test_duplicates_allowed(self) -> None:
        s = _s(("a", "1"), ("a", "2"))
        assert len(s) == 2

    def test_items(self) -> None:
        s = _s(("a", "1"), ("b", None))
        assert s.items() == [("a", "1"), ("b", None)]

    def test_is_mutable_sequence(self) -> None:
        assert isinstance(ParameterSeries(), MutableSequence)

    def test_satisfies_series_reader(self) -> None:
        assert isinstance(ParameterSeries(), SeriesReader)

    def test_index_access(self) -> None:
        s = _s(("a", "1"), ("b", "2"))
        assert s[0] == Parameter("a", "1")
        assert s[-1] == Parameter("b", "2")

    def test_slice_returns_snapshot_series(self) -> None:
        s = _s(("a", "1"), ("b", "2"), ("c", "3"))
        sliced = s[1:]
        assert isinstance(sliced, ParameterSeries)
        assert sliced.items() == [("b", "2"), ("c", "3")]
        sliced.clear()
        assert len(s) == 3

    def test_append_insert_pop(self) -> None:
        s = _s(("a", "1"))
        s.append(Parameter("c", "3"))
        s.insert(1, Parameter("b", "2"))
        assert [p.name for p in s] == ["a", "b", "c"]
        assert s.pop().name == "c"
        assert len(s) == 2

    def test_sort_by_name(self) -> None:
        s = _s(("c", "3"), ("a", "1"), ("b", "2"))
        s.sort()
        assert [p.name for p in s] == ["a", "b", "c"]

    def test_sort_with_key_and_reverse(self) -> None:
        s = _s(("a", "2"), ("b", "1"))
        s.sort(key=lambda p: p.value, reverse=True)
        assert [p.value for p in s] == ["2", "1"]

    def test_equality_by_pairs(self) -> None:
        assert _s(("a", "1")) == _s(("a", "1"))
        assert _s(("a", "1")) != _s(("a", "2"))
        assert _s(("a", "1")) != [("a", "1")]

    def test_unhashable(self) -> None:
        with pytest.raises(TypeError):
            hash(ParameterSeries())

    def test_repr(self) -> None:
        assert repr(_s(("a", "1"))) == "ParameterSeries([('a', '1')])"

    def test_wraps_delegate_without_copying(self) -> None:
        backing = [Parameter("a", "1")]
        s = ParameterSeries(backing)
        s.add("b", "2")
        assert len(backing) == 2


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


class TestLookups:
    def test_get_first(self) -> None:
        s = _s(("a", "1"), ("a", "2"))
        assert s.get_first("a") is s[0]

    def test_get_first_case_sensitive_by_default(self) -> None:
        s = _s(("Accept", "*/*"))
        assert s.get_first("accept") is None
        assert s.get_first("accept", ignore_case=True) is s[0]

    def test_get_first_missing(self) -> None:
        assert ParameterSeries().get_first("nope") is None

    def test_get_first_value(self) -> None:
        s = _s(("a", "1"), ("a", "2"))
        assert s.get_first_value("a") == "1"

    def test_get_first_value_default_when_missing(self) -> None:
        s = _s(("a", "1"))
        assert s.get_first_value("b") is None
        assert s.get_first_value("b", default="x") == "x"

    def test_get_first_value_default_when_value_is_none(self) -> None:
        s = _s(("flag", None))
        assert s.get_first_value("flag", default="on") == "on"

    def test_get_first_value_empty_string_is_a_value(self) -> None:
        s = _s(("flag", ""))
        assert s.get_first_value("flag", default="on") == ""

    def test_get_names(self) -> None:
        s = _s(("a", "1"), ("A", "2"), ("a", "3"))
        assert s.get_names() == {"a", "A"}

    def test_get_values_folds_ignoring_case(self) -> None:
        s = _s(("X", "a"), ("x", "b"), ("X", "c"))
        assert s.get_values("X", ",", True) == "a,b,c"

    def test_get_values_default_is_comma_and_ignore_case(self) -> None:
        s = _s(("X", "a"), ("x", "b"))
        assert s.get_values("x") == "a,b"

    def test_get_values_case_sensitive_still_matches_exact(self) -> None:
        s = _s(("X", "a"), ("x", "b"), ("X", "c"))
        assert s.get_values("X", ";", False) == "a;c"

    def test_get_values_missing(self) -> None:
        assert _s(("a", "1")).get_values("b") is None

    def test_get_values_single(self) -> None:
        assert _s(("a", "1")).get_values("a") == "1"

    def test_get_values_single_none(self) -> None:
        assert _s(("a", None)).get_values("a") is None

    def test_get_values_leading_none_is_replaced(self) -> None:
        assert _s(("X", None), ("X", "a")).get_values("X") == "a"
        assert _s(("X", None), ("x", None), ("X", "a"), ("X", "b")).get_values("X") == "a,b"

    def test_get_values_trailing_none_joins_empty(self) -> None:
        assert _s(("X", "a"), ("X", None)).get_values("X") == "a,"
        assert _s(("X", "a"), ("X", None), ("X", "b")).get_values("X", ";") == "a;;b"

    def test_get_values_all_none(self) -> None:
        assert _s(("X", None), ("X", None)).get_values("X") is None

    def test_get_values_array(self) -> None:
        s = _s(("t", "1"), ("T", "2"), ("t", None))
        assert s.get_values_array("t") == ["1", None]
        assert s.get_values_array("t", ignore_case=True) == ["1", "2", None]
        assert s.get_values_array("missing") == []

    def test_get_values_map_keeps_first(self) -> None:
        s = _s(("b", "1"), ("a", "2"), ("b", "3"))
        result = s.get_values_map()
        assert result == {"b": "1", "a": "2"}
        assert list(result) == ["b", "a"]

    def test_contains_entry(self) -> None:
        s = _s(("a", "1"))
        assert Parameter("a", "1") in s
        assert Parameter("a", "2") not in s


# ---------------------------------------------------------------------------
# Mutation by name
# ---------------------------------------------------------------------------


class TestRemove:
    def test_remove_all(self) -> None:
        s = _s(("a", "1"), ("b", "2"), ("a", "3"))
        assert s.remove_all("a") is True
        assert s.items() == [("b", "2")]

    def test_remove_all_ignore_case(self) -> None:
        s = _s(("a", "1"), ("A", "2"))
        assert s.remove_all("a") is True
        assert s.items() == [("A", "2")]
        assert s.remove_all("a", ignore_case=True) is True
        assert len(s) == 0

    def test_remove_all_missing(self) -> None:
        s = _s(("a", "1"))
        assert s.remove_all("b") is False
        assert len(s) == 1

    def test_remove_first(self) -> None:
        s = _s(("a", "1"), ("b", "2"), ("a", "3"))
        assert s.remove_first("a") is True
        assert s.items() == [("b", "2"), ("a", "3")]

    def test_remove_first_missing(self) -> None:
        assert _s(("a", "1")).remove_first("A") is False


class TestSet:
    def test_set_updates_first_and_drops_duplicates(self) -> None:
        s = _s(("X", "a"), ("Y", "b"), ("X", "c"))
        first = s[0]
        result = s.set("X", "z", False)
        assert result is first
        assert result.value == "z"
        assert s.items() == [("X", "z"), ("Y", "b")]

    def test_set_appends_when_missing_and_returns_none(self) -> None:
        s = _s(("X", "a"))
        assert s.set("Z", "w", False) is None
        assert s.items() == [("X", "a"), ("Z", "w")]
        assert s.get_first("Z") is not None

    def test_set_ignore_case(self) -> None:
        s = _s(("x", "a"), ("X", "b"))
        s.set("X", "z", ignore_case=True)
        assert s.items() == [("x", "z")]

    def test_set_case_sensitive_leaves_other_case(self) -> None:
        s = _s(("x", "a"), ("X", "b"))
        s.set("X", "z")
        assert s.items() == [("x", "a"), ("X", "z")]

    def test_set_none_value(self) -> None:
        s = _s(("a", "1"))
        s.set("a", None)
        assert s.items() == [("a", None)]


# ---------------------------------------------------------------------------
# Derived series
# ---------------------------------------------------------------------------


class TestSubList:
    def test_range_is_live_view_removal(self) -> None:
        s = _s(("a", "1"), ("b", "2"), ("c", "3"), ("d", "4"))
        view = s.sub_list(1, 3)
        assert view.items() == [("b", "2"), ("c", "3")]
        del view[0]
        assert s.items() == [("a", "1"), ("c", "3"), ("d", "4")]
        assert view.items() == [("c", "3")]

    def test_range_view_add_lands_inside_parent(self) -> None:
        s = _s(("a", "1"), ("b", "2"), ("c", "3"))
        view = s.sub_list(0, 2)
        view.add("x", "9")
        assert s.items() == [("a", "1"), ("b", "2"), ("x", "9"), ("c", "3")]

    def test_range_view_sees_parent_updates(self) -> None:
        s = _s(("a", "1"), ("b", "2"))
        view = s.sub_list(0, 2)
        s[1] = Parameter("z", "0")
        assert view[1].name == "z"

    def test_range_view_name_operations(self) -> None:
        s = _s(("a", "1"), ("b", "2"), ("b", "3"), ("b", "4"))
        view = s.sub_list(1, 3)
        view.set("b", "x")
        assert s.items() == [("a", "1"), ("b", "x"), ("b", "4")]

    def test_range_view_is_same_kind(self) -> None:
        s = _s(("a", "1"))
        assert type(s.sub_list(0, 1)) is ParameterSeries

    @pytest.mark.parametrize(("start", "stop"), [(-1, 1), (0, 5), (2, 1)])
    def test_range_out_of_bounds(self, start: int, stop: int) -> None:
        s = _s(("a", "1"), ("b", "2"))
        with pytest.raises(IndexError):
            s.sub_list(start, stop)

    def test_named_is_snapshot(self) -> None:
        s = _s(("X", "a"), ("Y", "b"), ("X", "c"))
        snap = s.sub_list_named("X", False)
        assert snap.items() == [("X", "a"), ("X", "c")]
        snap.remove_first("X")
        assert s.items() == [("X", "a"), ("Y", "b"), ("X", "c")]

    def test_named_shares_entries(self) -> None:
        s = _s(("X", "a"))
        snap = s.sub_list_named("X")
        assert snap[0] is s[0]

    def test_named_ignore_case(self) -> None:
        s = _s(("X", "a"), ("x", "b"))
        assert len(s.sub_list_named("x", ignore_case=True)) == 2


# ---------------------------------------------------------------------------
# copy_to
# ---------------------------------------------------------------------------


class TestCopyTo:
    def test_second_value_promotes_to_list(self) -> None:
        target: dict[str, object] = {"a": None}
        _s(("a", "1"), ("a", "2")).copy_to(target)
        assert target == {"a": ["1", "2"]}

    def test_third_value_appends(self) -> None:
        target: dict[str, object] = {"a": None}
        _s(("a", "1"), ("a", "2"), ("a", "3")).copy_to(target)
        assert target == {"a": ["1", "2", "3"]}

    def test_single_value(self) -> None:
        target: dict[str, object] = {"a": None}
        _s(("a", "1")).copy_to(target)
        assert target == {"a": "1"}

    def test_only_existing_keys_are_filled(self) -> None:
        target: dict[str, object] = {"a": None}
        _s(("a", "1"), ("b", "2")).copy_to(target)
        assert target == {"a": "1"}

    def test_unmatched_key_left_alone(self) -> None:
        target: dict[str, object] = {"a": None, "z": None}
        _s(("a", "1")).copy_to(target)
        assert target == {"a": "1", "z": None}

    def test_none_value_becomes_empty_marker(self) -> None:
        target: dict[str, object] = {"flag": None}
        _s(("flag", None)).copy_to(target)
        assert target["flag"] == EMPTY_VALUE

    def test_empty_marker_inside_list(self) -> None:
        target: dict[str, object] = {"a": None}
        _s(("a", "1"), ("a", None)).copy_to(target)
        assert target == {"a": ["1", EMPTY_VALUE]}

    def test_existing_scalar_is_kept(self) -> None:
        target: dict[str, object] = {"a": "0"}
        _s(("a", "1")).copy_to(target)
        assert target == {"a": ["0", "1"]}

    def test_existing_list_is_extended_in_place(self) -> None:
        existing = ["0"]
        target: dict[str, object] = {"a": existing}
        _s(("a", "1")).copy_to(target)
        assert existing == ["0", "1"]


# ---------------------------------------------------------------------------
# Factory injection
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class Tagged(Parameter):
    tag: str = "custom"


class TestFactories:
    def test_create_parameter_uses_entry_factory(self) -> None:
        s = ParameterSeries(make_entry=Tagged)
        assert isinstance(s.create_parameter("a", "1"), Tagged)

    def test_add_uses_entry_factory(self) -> None:
        s = ParameterSeries(make_entry=Tagged)
        s.add("a", "1")
        assert isinstance(s[0], Tagged)

    def test_from_pairs_forwards_factories(self) -> None:
        s = ParameterSeries.from_pairs([("a", "1"), ("b", None)], make_entry=Tagged)
        assert all(isinstance(p, Tagged) for p in s)
        assert s.items() == [("a", "1"), ("b", None)]

    def test_default_series_factory_keeps_entry_factory(self) -> None:
        s = ParameterSeries(make_entry=Tagged)
        derived = s.create_series()
        derived.add("a")
        assert isinstance(derived[0], Tagged)

    def test_series_factory_used_for_derived_series(self) -> None:
        made: list[object] = []

        def make_series(delegate):
            series = ParameterSeries(delegate)
            made.append(series)
            return series

        s = ParameterSeries(make_series=make_series)
        s.add("a", "1")
        s.sub_list(0, 1)
        s.sub_list_named("a")
        s[0:1]
        assert len(made) == 3


class TestUnmodifiable:
    def test_returns_view(self) -> None:
        s = _s(("a", "1"))
        view = s.unmodifiable_view()
        assert isinstance(view, ImmutableSeriesView)
        assert view.items() == s.items()

    def test_read_only_flags(self) -> None:
        s = ParameterSeries()
        assert s.is_read_only is False
        assert s.unmodifiable_view().is_read_only is True
