# tests/test_canonical_set.py
"""
Tests for ``CanonicalValueSet``: the worked scenarios, classification,
add / remove reconciliation across stores, membership and copying.
"""

import copy

import pytest

from mixedset import (
    M,
    CanonicalValueSet,
    ExclusiveIntegerRange,
    InfiniteSetError,
    IntegerRange,
    MixedSetError,
    RealInterval,
    UnsupportedValueKindError,
    ValueKind,
    classify_value,
    closed_range,
    left_open_range,
    open_range,
    right_open_range,
)
from mixedset.canonical_set import (
    _ADD_HANDLERS,
    _CONTAINS_HANDLERS,
    _REMOVE_HANDLERS,
)
from mixedset.intervals import ExclusiveInterval


class TestScenarios:
    """End-to-end behaviour on small mixed sets."""

    def test_mixed_ranges_size_and_rendering(self, mixed_ranges):
        assert mixed_ranges.size == 9
        assert str(mixed_ranges) == (
            "1, 2, 3, 4, 5, (5.5, 6.5), 7, 8, 9, 10, [11.0, 15.0)"
        )
        assert not mixed_ranges.contains(IntegerRange(1, 15))

    def test_adding_excluded_endpoint_closes_interval(self, mixed_ranges):
        mixed_ranges.add(15)
        assert mixed_ranges.size == 9
        assert str(mixed_ranges) == (
            "1, 2, 3, 4, 5, (5.5, 6.5), 7, 8, 9, 10, [11.0, 15.0]"
        )
        assert mixed_ranges.contains(IntegerRange(1, 15))

    def test_integer_difference(self):
        s = M(IntegerRange(1, 10)) - M(IntegerRange(3, 5))
        assert s.size == 7
        assert list(s) == [1, 2, 6, 7, 8, 9, 10]
        assert list(s._ints) == [IntegerRange(1, 2), IntegerRange(6, 10)]

    def test_open_interval_integer_bounds(self):
        r = open_range(2.0, 7.0)
        assert r.first_int() == 3
        assert r.last_int() == 6

    def test_real_interval_makes_set_infinite(self):
        s = M(1, closed_range(1.5, 2.5))
        assert s.infinite and not s.finite
        with pytest.raises(InfiniteSetError):
            s.iterate()
        items = list(s.finite_iterate())
        assert items[0] == 1
        assert isinstance(items[1], RealInterval)
        assert str(items[1]) == "[1.5, 2.5]"


class TestClassification:

    @pytest.mark.parametrize(
        "value, kind",
        [
            (True, ValueKind.BOOLEAN),
            (0, ValueKind.INTEGER),
            (2.5, ValueKind.REAL),
            ("x", ValueKind.STRING),
            (M(), ValueKind.NESTED_SET),
            (IntegerRange(1, 2), ValueKind.INTEGER_RANGE),
            (range(1, 3), ValueKind.INTEGER_RANGE),
            (ExclusiveIntegerRange(1, 3), ValueKind.EXCLUSIVE_INTEGER_RANGE),
            (RealInterval(1.0, 2.0), ValueKind.REAL_INTERVAL),
            (open_range(1.0, 2.0), ValueKind.EXCLUSIVE_REAL_INTERVAL),
        ],
    )
    def test_kinds(self, value, kind):
        assert classify_value(value) is kind

    @pytest.mark.parametrize("value", [object(), None, b"bytes", float("nan"), range(0, 6, 2)])
    def test_unsupported_values(self, value):
        with pytest.raises(UnsupportedValueKindError):
            M().add(value)

    def test_bare_exclusive_interval_rejected(self):
        with pytest.raises(UnsupportedValueKindError, match="RealInterval"):
            M().add(ExclusiveInterval(1, 5))

    def test_unsupported_is_type_error(self):
        with pytest.raises(TypeError):
            M().contains([1, 2])

    def test_unsupported_message_names_type(self):
        with pytest.raises(MixedSetError, match=r"\[object\]"):
            M(object())

    @pytest.mark.parametrize("table", [_ADD_HANDLERS, _REMOVE_HANDLERS, _CONTAINS_HANDLERS])
    def test_every_kind_has_a_handler(self, table):
        assert set(table) == set(ValueKind)


class TestAdd:

    def test_integer_inside_interval_unpunctures(self):
        s = M(open_range(2.0, 7.0))
        s.add(2)
        assert str(s) == "[2.0, 7.0)"
        assert s.size == 0
        assert 2 in s

    def test_real_inside_interval_unpunctures(self):
        s = M(closed_range(1.0, 3.0))
        s.remove(2.5)
        s.add(2.5)
        assert str(s) == "[1.0, 3.0]"

    def test_interval_absorbs_isolated_reals(self):
        s = M(2.5, 10.5)
        s.add(closed_range(2.0, 3.0))
        assert s.size == 1
        assert str(s) == "[2.0, 3.0], 10.5"

    def test_interval_absorbs_integers(self):
        s = M(IntegerRange(1, 10))
        s.add(closed_range(2.5, 4.5))
        assert s.size == 8
        assert list(s.ints()) == [1, 2, 5, 6, 7, 8, 9, 10]
        assert 3 in s and 4 in s
        assert str(s) == "1, 2, [2.5, 4.5], 5, 6, 7, 8, 9, 10"

    def test_interval_over_existing_integer_endpoint(self):
        s = M(3)
        s.add(open_range(3.0, 5.0))
        assert str(s) == "[3.0, 5.0)"
        assert s.size == 0
        assert 3 in s and 5 not in s

    def test_integer_range_spanning_interval(self):
        s = M(closed_range(2.5, 4.5))
        s.add(IntegerRange(1, 6))
        assert list(s.ints()) == [1, 2, 5, 6]
        assert s.contains(IntegerRange(1, 6))

    def test_degenerate_interval_becomes_point(self):
        s = M(closed_range(2.0, 2.0), closed_range(0.5, 0.5))
        assert s.finite
        assert list(s) == [0.5, 2]

    def test_empty_interval_ignored(self):
        s = M(open_range(1.0, 1.0))
        assert s.empty

    def test_exclusive_integer_range(self):
        s = M(ExclusiveIntegerRange(1, 5, {1, 3}))
        assert list(s) == [2, 4, 5]

    def test_python_range(self):
        assert list(M(range(1, 4))) == [1, 2, 3]

    def test_integral_float_stored_as_integer(self):
        s = M(3.0)
        assert list(s.ints()) == [3]
        assert 3 in s

    def test_open_intervals_touching(self):
        s = M(open_range(1.0, 2.0), open_range(2.0, 3.0))
        assert str(s) == "(1.0, 3.0)-{2.0}"
        assert 2 not in s
        s.add(2)
        assert str(s) == "(1.0, 3.0)"

    def test_scalars(self):
        s = M(True, "b", "a", 1)
        assert s.size == 4
        assert str(s) == "1, True, a, b"

    def test_booleans_are_not_integers(self):
        assert not M(1).contains(True)
        assert not M(True).contains(1)
        assert M(True, 1).size == 2


class TestRemove:

    def test_integer_punctures_interval(self):
        s = M(closed_range(1.0, 5.0))
        s.remove(3)
        assert str(s) == "[1.0, 5.0]-{3.0}"
        assert 3 not in s
        assert 3.5 in s

    def test_punch_splits_interval(self):
        s = M(closed_range(0.0, 10.0))
        s.remove(closed_range(2.0, 3.0))
        assert str(s) == "[0.0, 2.0), (3.0, 10.0]"

    def test_open_punch_keeps_endpoints(self):
        s = M(closed_range(0.0, 3.0))
        s.remove(open_range(1.0, 2.0))
        assert str(s) == "[0.0, 1.0], [2.0, 3.0]"
        assert 1 in s and 2 in s
        assert 1.5 not in s

    def test_punch_leaving_single_point(self):
        s = M(closed_range(0.0, 10.0))
        s.remove(left_open_range(0.0, 10.0))
        assert s.finite
        assert list(s) == [0]

    def test_punch_removes_integers_and_reals(self):
        s = M(IntegerRange(1, 10), 2.5, 7.5)
        s.remove(right_open_range(2.0, 8.0))
        assert list(s) == [1, 8, 9, 10]

    def test_punch_honours_its_exclusions(self):
        s = M(IntegerRange(1, 10))
        s.remove(RealInterval(1.0, 10.0, {5.0}))
        assert list(s) == [5]

    def test_exclusive_integer_range_keeps_its_holes(self):
        s = M(IntegerRange(1, 10))
        s.remove(ExclusiveIntegerRange(2, 8, {5}))
        assert list(s) == [1, 5, 9, 10]

    def test_exclusive_integer_range_punctures_interval(self):
        s = M(closed_range(0.5, 6.5))
        s.remove(ExclusiveIntegerRange(2, 4, {3}))
        assert str(s) == "[0.5, 6.5]-{2.0, 4.0}"
        assert 3 in s

    def test_split_keeps_point_the_punch_excludes(self):
        s = M(closed_range(0.0, 10.0))
        s.remove(RealInterval(2.0, 5.0, {3.5}))
        assert 3.5 in s
        assert 3.25 not in s
        assert 2.0 not in s and 5.0 not in s
        assert 1.75 in s and 5.25 in s

    def test_integer_range_punctures_interval(self):
        s = M(closed_range(0.5, 4.5))
        s.remove(IntegerRange(1, 3))
        assert str(s) == "[0.5, 4.5]-{1.0, 2.0, 3.0}"
        assert 4 in s
        assert 2 not in s

    def test_remove_scalars(self):
        s = M(True, "a", 2.5, M(1))
        s.remove(True, "a", 2.5, M(1))
        assert s.empty

    def test_remove_absent_is_noop(self):
        s = M(IntegerRange(1, 3))
        s.remove(7, "x", closed_range(20.0, 30.0))
        assert list(s) == [1, 2, 3]

    def test_clear(self, mixed_ranges):
        mixed_ranges.clear()
        assert mixed_ranges.empty
        assert str(mixed_ranges) == ""


class TestMembership:

    def test_real_interval_containment(self):
        s = M(closed_range(0.0, 10.0))
        assert s.contains(open_range(2.0, 3.0))
        s.remove(2.5)
        assert not s.contains(open_range(2.0, 3.0))
        assert s.contains(RealInterval(2.0, 3.0, {2.5}))
        assert s.contains(open_range(3.0, 4.0))
        assert not s.contains(closed_range(9.0, 11.0))

    def test_exclusive_integer_range_containment(self):
        s = M(IntegerRange(1, 3), IntegerRange(5, 6))
        assert s.contains(ExclusiveIntegerRange(1, 6, {4}))
        assert not s.contains(IntegerRange(1, 6))

    def test_integer_range_through_punctured_interval(self):
        s = M(closed_range(0.5, 10.5))
        s.remove(5)
        assert not s.contains(IntegerRange(1, 10))
        assert s.contains(IntegerRange(1, 4))

    def test_contains_all_and_in(self, mixed_ranges):
        assert mixed_ranges.contains_all([1, 6.0, 12.25])
        assert not mixed_ranges.contains_all([1, 15])
        assert 6 in mixed_ranges
        assert 5.5 not in mixed_ranges

    def test_empty_set(self):
        s = M()
        assert s.empty and not s
        assert s.finite
        assert s.size == 0

    def test_interval_only_set_not_empty(self):
        s = M(open_range(1.0, 2.0))
        assert s.size == 0
        assert not s.empty


class TestCopying:

    def test_copy_is_independent(self, mixed_ranges):
        clone = mixed_ranges.copy()
        clone.remove(3, 6.0)
        assert 3 in mixed_ranges
        assert 6.0 in mixed_ranges
        assert clone != mixed_ranges

    def test_copy_module(self, mixed_ranges):
        assert copy.copy(mixed_ranges) == mixed_ranges
        deep = copy.deepcopy(mixed_ranges)
        deep.remove(12.0)
        assert 12.0 in mixed_ranges

    def test_nested_sets_are_copied(self):
        inner = M(1, 2)
        outer = M(inner)
        inner.add(3)
        assert outer.contains(M(1, 2))
        assert not outer.contains(inner)
        assert str(outer) == "{1, 2}"

    def test_views_are_copies(self):
        s = M(closed_range(0.0, 1.0), M(1))
        s.real_intervals()[0].exclude(0.5)
        s.nested_sets()[0].add(2)
        assert 0.5 in s
        assert s.contains(M(1))

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(M())

    def test_not_equal_to_other_types(self):
        assert M() != set()
        assert M(1) != 1

    def test_constructor_type(self):
        assert M is CanonicalValueSet
