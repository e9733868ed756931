# tests/test_intervals.py
"""
Tests for the range and interval value types: plain integer ranges,
exclusive integer ranges, real intervals and the builders.
"""

import math

import pytest

from mixedset.errors import ExclusionOutOfRangeError
from mixedset.intervals import (
    ExclusiveIntegerRange,
    ExclusiveInterval,
    IntegerRange,
    RealInterval,
    closed_range,
    is_integral,
    left_open_range,
    open_range,
    right_open_range,
)


class TestIntegerRange:

    def test_size_and_emptiness(self):
        assert IntegerRange(1, 5).size() == 5
        assert IntegerRange(3, 3).size() == 1
        assert IntegerRange(5, 1).is_empty()
        assert IntegerRange(5, 1).size() == 0

    def test_overlapping_ranges_combine(self):
        assert IntegerRange(1, 5).combine(IntegerRange(4, 9)) == IntegerRange(1, 9)
        assert IntegerRange(4, 9).combine(IntegerRange(1, 5)) == IntegerRange(1, 9)
        assert IntegerRange(1, 9).combine(IntegerRange(3, 4)) == IntegerRange(1, 9)

    def test_touching_ranges_stay_apart(self):
        assert IntegerRange(1, 3).combine(IntegerRange(4, 6)) is None

    def test_split(self):
        assert IntegerRange(1, 5).split(2, 3) == (IntegerRange(1, 1), IntegerRange(4, 5))
        left, right = IntegerRange(1, 5).split(0, 1)
        assert left.is_empty()
        assert right == IntegerRange(2, 5)

    def test_from_python_range(self):
        assert IntegerRange.from_range(range(1, 4)) == IntegerRange(1, 3)
        with pytest.raises(ValueError):
            IntegerRange.from_range(range(0, 10, 2))

    def test_iteration_and_membership(self):
        assert list(IntegerRange(-2, 1)) == [-2, -1, 0, 1]
        assert 3 in IntegerRange(1, 5)
        assert 6 not in IntegerRange(1, 5)
        assert "3" not in IntegerRange(1, 5)

    def test_str(self):
        assert str(IntegerRange(1, 5)) == "1..5"


class TestExclusiveIntegerRange:

    def test_canonical_ranges(self):
        r = ExclusiveIntegerRange(1, 5, {1, 3})
        assert r.to_canonical_ranges() == [IntegerRange(2, 2), IntegerRange(4, 5)]

    def test_canonical_ranges_excluded_end(self):
        r = ExclusiveIntegerRange(1, 5).exclude(5)
        assert r.to_canonical_ranges() == [IntegerRange(1, 4)]

    def test_canonical_ranges_single_point(self):
        assert ExclusiveIntegerRange(4, 4).to_canonical_ranges() == [IntegerRange(4, 4)]

    def test_fully_excluded(self):
        r = ExclusiveIntegerRange(1, 3, {1, 2, 3})
        assert r.to_canonical_ranges() == []
        assert r.size() == 0

    def test_size(self):
        assert ExclusiveIntegerRange(1, 10, {2, 4}).size() == 8

    def test_str(self):
        assert str(ExclusiveIntegerRange(1, 10, {1, 4})) == "(1, 10]-{4}"


class TestExclusions:
    """Exclusions must lie inside the closed bounds."""

    def test_out_of_range_exclusion_rejected(self):
        with pytest.raises(ExclusionOutOfRangeError) as info:
            RealInterval(1.0, 2.0).exclude(3.0)
        assert isinstance(info.value, ValueError)
        assert info.value.value == 3.0

    def test_out_of_range_exclusion_in_constructor(self):
        with pytest.raises(ExclusionOutOfRangeError):
            ExclusiveIntegerRange(1, 5, {0})

    def test_exclude_is_chainable_and_idempotent(self):
        r = RealInterval(0.0, 4.0)
        assert r.exclude(1.0).exclude(1.0) is r
        assert r.exclusions == {1.0}

    def test_caller_set_not_aliased(self):
        points = {2.0}
        r = RealInterval(0.0, 4.0, points)
        points.add(3.0)
        assert r.exclusions == {2.0}

    def test_include_undoes_exclude(self):
        r = RealInterval(0.0, 4.0).exclude(2.0)
        r.include(2.0)
        assert r.contains(2.0)

    @pytest.mark.parametrize(
        "interval, name",
        [
            (RealInterval(1.0, 2.0), "RealInterval"),
            (ExclusiveIntegerRange(1, 2), "ExclusiveIntegerRange"),
            (ExclusiveInterval(1, 2), "ExclusiveInterval"),
        ],
    )
    def test_unhashable(self, interval, name):
        with pytest.raises(TypeError, match=f"unhashable type: '{name}'"):
            hash(interval)


class TestRealInterval:

    def test_bounds_are_floats(self):
        r = RealInterval(1, 5)
        assert isinstance(r.start, float) and isinstance(r.end, float)

    def test_non_finite_bounds_rejected(self):
        with pytest.raises(ValueError):
            RealInterval(0.0, math.inf)

    def test_str(self):
        assert str(RealInterval(2.0, 7.0).exclude(2.0, 7.0)) == "(2.0, 7.0)"
        assert str(RealInterval(1.0, 5.0).exclude(3.0)) == "[1.0, 5.0]-{3.0}"

    def test_emptiness(self):
        assert RealInterval(1.0, 1.0).exclude(1.0).is_empty()
        assert RealInterval(2.0, 1.0).is_empty()
        assert RealInterval(1.0, 1.0).is_degenerate()

    @pytest.mark.parametrize(
        "interval, first, last",
        [
            (RealInterval(2.3, 4.6), 3, 4),
            (RealInterval(2.0, 12.0), 2, 12),
            (RealInterval(2.0, 7.0, {2.0, 7.0}), 3, 6),
            (RealInterval(-2.5, -0.5), -2, -1),
            (RealInterval(-3.0, -1.0, {-3.0}), -2, -1),
        ],
    )
    def test_first_and_last_int(self, interval, first, last):
        assert interval.first_int() == first
        assert interval.last_int() == last

    def test_integer_ranges_honour_exclusions(self):
        r = RealInterval(2.0, 7.0, {2.0, 4.0, 7.0})
        assert r.int_bounds() == (2, 7)
        assert r.integer_ranges() == [IntegerRange(3, 3), IntegerRange(5, 6)]

    def test_integer_ranges_without_integers(self):
        assert RealInterval(0.25, 0.75).integer_ranges() == []

    def test_combine_touching_fills_gap(self):
        merged = RealInterval(1.0, 2.0, {2.0}).combine(RealInterval(2.0, 3.0))
        assert str(merged) == "[1.0, 3.0]"

    def test_combine_open_touching_keeps_hole(self):
        merged = open_range(1.0, 2.0).combine(open_range(2.0, 3.0))
        assert str(merged) == "(1.0, 3.0)-{2.0}"

    def test_combine_disjoint(self):
        assert RealInterval(1.0, 2.0).combine(RealInterval(2.5, 3.0)) is None

    def test_split_keeps_exclusions(self):
        left, right = RealInterval(0.0, 10.0, {1.0, 9.0}).split(RealInterval(4.0, 6.0))
        assert str(left) == "[0.0, 4.0]-{1.0}"
        assert str(right) == "[6.0, 10.0]-{9.0}"


class TestBuilders:

    def test_integer_flavour(self):
        assert isinstance(closed_range(1, 5), ExclusiveIntegerRange)
        assert open_range(1, 5).exclusions == {1, 5}

    def test_real_flavour(self):
        assert isinstance(closed_range(1, 5.0), RealInterval)
        assert isinstance(closed_range(True, 5), RealInterval)

    def test_half_open(self):
        assert str(left_open_range(1.0, 2.0)) == "(1.0, 2.0]"
        assert str(right_open_range(1.0, 2.0)) == "[1.0, 2.0)"

    def test_is_integral(self):
        assert is_integral(3.0)
        assert is_integral(-2)
        assert not is_integral(2.5)
        assert not is_integral(math.inf)
