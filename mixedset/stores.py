"""
mixedset/stores.py
══════════════════

The three backing stores of a canonical value set.

    ┌──────────────────────────────────────────────────────────────────┐
    │  IntegerRangeStore  — sorted, pairwise non-overlapping  a..b     │
    │  RealRangeStore     — sorted, non-overlapping, non-touching      │
    │                       [a, b] − E                                 │
    │  ScalarRegistry     — isolated reals, booleans, strings,         │
    │                       nested sets                                │
    └──────────────────────────────────────────────────────────────────┘

Each store keeps only its own canonical invariant.  Keeping integer
ranges and real intervals mutually exclusive is the job of
``CanonicalValueSet``, which sees all three.

Both range stores are kept sorted by lower bound so membership is a
``bisect`` followed by one bounds check.
"""

from __future__ import annotations

import bisect
import logging
from typing import (
    TYPE_CHECKING,
    Iterable,
    Iterator,
    List,
    Optional,
    Set,
)

from mixedset.intervals import IntegerRange, RealInterval

if TYPE_CHECKING:
    from mixedset.canonical_set import CanonicalValueSet

_log = logging.getLogger(__name__)


def _first(r: IntegerRange) -> int:
    return r.first


def _start(r: RealInterval) -> float:
    return r.start


# ═══════════════════════════════════════════════════════════════════════════
#  PART 1 — INTEGER RANGE STORE
# ═══════════════════════════════════════════════════════════════════════════

class IntegerRangeStore:
    """
    Ordered collection of disjoint closed integer ranges.

    Only ranges that share a point are merged; ``1..3`` and ``4..6`` may
    sit side by side.
    """

    __slots__ = ("_ranges",)

    def __init__(self, ranges: Iterable[IntegerRange] = ()) -> None:
        self._ranges: List[IntegerRange] = []
        for r in ranges:
            self.insert(r)

    def insert(self, new: IntegerRange) -> None:
        """Insert *new*, merging until no stored range overlaps it.

        The scan restarts after every merge since the grown range may
        now reach a range it previously missed.
        """
        if new.is_empty():
            return
        merged = True
        while merged:
            merged = False
            for i, existing in enumerate(self._ranges):
                combined = existing.combine(new)
                if combined is not None:
                    _log.debug("merged %s with %s into %s", existing, new, combined)
                    del self._ranges[i]
                    new = combined
                    merged = True
                    break
        bisect.insort(self._ranges, new, key=_first)

    def remove_interval(self, lo: int, hi: int) -> None:
        """Punch ``lo..hi`` out of every range it overlaps."""
        if lo > hi:
            return
        kept: List[IntegerRange] = []
        remainders: List[IntegerRange] = []
        for r in self._ranges:
            if r.intersects(lo, hi):
                left, right = r.split(lo, hi)
                remainders.extend(p for p in (left, right) if not p.is_empty())
                _log.debug("split %s by %d..%d", r, lo, hi)
            else:
                kept.append(r)
        self._ranges = kept
        for r in remainders:
            self.insert(r)

    def overlapping(self, lo: float, hi: float) -> List[IntegerRange]:
        """Stored ranges sharing a point with the closed span ``[lo, hi]``."""
        return [r for r in self._ranges if r.intersects(lo, hi)]

    def contains(self, n: int) -> bool:
        i = bisect.bisect_right(self._ranges, n, key=_first) - 1
        return i >= 0 and self._ranges[i].last >= n

    def size(self) -> int:
        """Total number of integers held."""
        return sum(r.size() for r in self._ranges)

    def points(self) -> Iterator[int]:
        """All integers, ascending."""
        for r in list(self._ranges):
            yield from r

    def copy(self) -> IntegerRangeStore:
        clone = IntegerRangeStore()
        clone._ranges = list(self._ranges)
        return clone

    def clear(self) -> None:
        self._ranges.clear()

    def __iter__(self) -> Iterator[IntegerRange]:
        return iter(list(self._ranges))

    def __len__(self) -> int:
        return len(self._ranges)

    def __bool__(self) -> bool:
        return bool(self._ranges)

    def __repr__(self) -> str:
        return f"IntegerRangeStore([{', '.join(str(r) for r in self._ranges)}])"


# ═══════════════════════════════════════════════════════════════════════════
#  PART 2 — REAL RANGE STORE
# ═══════════════════════════════════════════════════════════════════════════

class RealRangeStore:
    """
    Ordered collection of real intervals, each with its own exclusions.

    No two stored intervals overlap or touch: ``[1.0, 2.0)`` and
    ``[2.0, 3.0]`` are merged into ``[1.0, 3.0]``.
    """

    __slots__ = ("_intervals",)

    def __init__(self, intervals: Iterable[RealInterval] = ()) -> None:
        self._intervals: List[RealInterval] = []
        for interval in intervals:
            self.insert(interval)

    def insert(self, new: RealInterval) -> None:
        """Insert *new*, merging with every interval it overlaps or touches."""
        merged = True
        while merged:
            merged = False
            for i, existing in enumerate(self._intervals):
                combined = existing.combine(new)
                if combined is not None:
                    _log.debug("merged %s with %s into %s", existing, new, combined)
                    del self._intervals[i]
                    new = combined
                    merged = True
                    break
        bisect.insort(self._intervals, new, key=_start)

    def discard(self, interval: RealInterval) -> None:
        """Drop the stored interval object *interval* (identity match)."""
        self._intervals = [s for s in self._intervals if s is not interval]

    def covering(self, value: float) -> Optional[RealInterval]:
        """The interval whose bounds hold *value*, excluded or not."""
        i = bisect.bisect_right(self._intervals, value, key=_start) - 1
        if i >= 0 and self._intervals[i].would_contain(value):
            return self._intervals[i]
        return None

    def contains(self, value: float) -> bool:
        interval = self.covering(value)
        return interval is not None and value not in interval.exclusions

    def intersecting(self, lo: float, hi: float) -> List[RealInterval]:
        """Intervals whose bounds share a point with ``[lo, hi]``."""
        return [s for s in self._intervals if s.start <= hi and lo <= s.end]

    def copy(self) -> RealRangeStore:
        clone = RealRangeStore()
        clone._intervals = [s.copy() for s in self._intervals]  # type: ignore[misc]
        return clone

    def clear(self) -> None:
        self._intervals.clear()

    def __iter__(self) -> Iterator[RealInterval]:
        return iter(list(self._intervals))

    def __len__(self) -> int:
        return len(self._intervals)

    def __bool__(self) -> bool:
        return bool(self._intervals)

    def __repr__(self) -> str:
        return f"RealRangeStore([{', '.join(str(s) for s in self._intervals)}])"


# ═══════════════════════════════════════════════════════════════════════════
#  PART 3 — SCALAR REGISTRY
# ═══════════════════════════════════════════════════════════════════════════

class ScalarRegistry:
    """
    Discrete members that are not integer points.

    Nested sets are mutable and unhashable, so they live in a list and
    are matched by structural equality.  Every nested set is copied on
    the way in and on ``copy()``; no two registries share one.
    """

    __slots__ = ("isolated_reals", "booleans", "strings", "nested_sets")

    def __init__(self) -> None:
        self.isolated_reals: Set[float] = set()
        self.booleans: Set[bool] = set()
        self.strings: Set[str] = set()
        self.nested_sets: List[CanonicalValueSet] = []

    # ---- Isolated reals --------------------------------------------------

    def reals_within(self, interval: RealInterval) -> List[float]:
        """Isolated reals lying inside *interval*'s bounds."""
        return [x for x in self.isolated_reals if interval.would_contain(x)]

    def sorted_reals(self) -> List[float]:
        return sorted(self.isolated_reals)

    # ---- Nested sets -----------------------------------------------------

    def add_nested(self, nested: CanonicalValueSet) -> None:
        if not self.contains_nested(nested):
            self.nested_sets.append(nested.copy())

    def remove_nested(self, nested: CanonicalValueSet) -> None:
        for i, existing in enumerate(self.nested_sets):
            if existing == nested:
                del self.nested_sets[i]
                return

    def contains_nested(self, nested: CanonicalValueSet) -> bool:
        return any(existing == nested for existing in self.nested_sets)

    # ---- Whole registry --------------------------------------------------

    def size(self) -> int:
        return (
            len(self.isolated_reals)
            + len(self.booleans)
            + len(self.strings)
            + len(self.nested_sets)
        )

    def copy(self) -> ScalarRegistry:
        clone = ScalarRegistry()
        clone.isolated_reals = set(self.isolated_reals)
        clone.booleans = set(self.booleans)
        clone.strings = set(self.strings)
        clone.nested_sets = [s.copy() for s in self.nested_sets]
        return clone

    def clear(self) -> None:
        self.isolated_reals.clear()
        self.booleans.clear()
        self.strings.clear()
        self.nested_sets.clear()


__all__ = ["IntegerRangeStore", "RealRangeStore", "ScalarRegistry"]
