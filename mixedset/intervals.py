"""
mixedset/intervals.py
═════════════════════

Range and interval value types consumed by the canonical value set.

    ┌─────────────────────────────────────────────────────────────┐
    │  IntegerRange               — first..last  ⊆ ℤ  (plain)     │
    │  ExclusiveInterval[N]       — [start, end] minus points      │
    │    ├── ExclusiveIntegerRange — N = int                       │
    │    └── RealInterval          — N = float                     │
    └─────────────────────────────────────────────────────────────┘

An ``ExclusiveInterval`` is a closed interval whose bounds never change
after construction, plus a mutable set of *excluded* points.  Excluding
an endpoint gives the open / half-open appearance without touching the
bounds:

    γ([a, b] − E) = { v | a ≤ v ≤ b  ∧  v ∉ E }

so ``(2.0, 7.0)`` is stored as ``[2.0, 7.0] − {2.0, 7.0}``.

Integer exclusive ranges have no native home in the integer store; they
are expanded into plain disjoint ``IntegerRange`` pieces with
:meth:`ExclusiveIntegerRange.to_canonical_ranges`.

Builders
--------
    closed_range(a, b)       [a, b]
    open_range(a, b)         (a, b)
    left_open_range(a, b)    (a, b]
    right_open_range(a, b)   [a, b)

All four produce the integer flavour when both bounds are ``int`` and the
real flavour otherwise.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import (
    Generic,
    Iterator,
    List,
    Optional,
    Set,
    Tuple,
    TypeVar,
    Union,
)

from mixedset.errors import ExclusionOutOfRangeError


N = TypeVar("N", int, float)


def is_integral(value: float) -> bool:
    """True for finite reals with no fractional part (``3.0``, ``-2.0``)."""
    return math.isfinite(value) and float(value).is_integer()


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# ═══════════════════════════════════════════════════════════════════════════
#  PART 1 — PLAIN INTEGER RANGE
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class IntegerRange:
    """
    Closed integer range ``first..last`` (both inclusive).

    ``first > last`` is the empty range, as with Python's ``range``.

    Examples
    --------
    >>> IntegerRange(1, 5).combine(IntegerRange(4, 9))
    IntegerRange(first=1, last=9)
    >>> IntegerRange(1, 5).split(2, 3)
    (IntegerRange(first=1, last=1), IntegerRange(first=4, last=5))
    """
    first: int
    last: int

    @classmethod
    def single(cls, n: int) -> IntegerRange:
        return cls(n, n)

    @classmethod
    def from_range(cls, r: range) -> IntegerRange:
        """Convert a step-1 Python ``range`` (half-open) to a closed range."""
        if r.step != 1:
            raise ValueError(f"only step-1 ranges are supported, got step {r.step}")
        return cls(r.start, r.stop - 1)

    def is_empty(self) -> bool:
        return self.first > self.last

    def size(self) -> int:
        """Number of integers in the range."""
        return max(0, self.last - self.first + 1)

    def contains(self, n: int) -> bool:
        return self.first <= n <= self.last

    def __contains__(self, n: object) -> bool:
        return isinstance(n, (int, float)) and self.contains(n)  # type: ignore[arg-type]

    def intersects(self, lo: float, hi: float) -> bool:
        """Does ``first..last`` share a point with the closed span ``[lo, hi]``?"""
        return self.first <= hi and lo <= self.last

    def overlaps(self, other: IntegerRange) -> bool:
        return self.intersects(other.first, other.last)

    def combine(self, other: IntegerRange) -> Optional[IntegerRange]:
        """Merge two overlapping ranges; ``None`` if they do not overlap.

        Touching ranges such as ``1..3`` and ``4..6`` do not overlap and
        are left apart.
        """
        if not self.overlaps(other):
            return None
        return IntegerRange(min(self.first, other.first), max(self.last, other.last))

    def split(self, lo: int, hi: int) -> Tuple[IntegerRange, IntegerRange]:
        """Cut ``lo..hi`` (inclusive) out of this range.

        ``1..5`` split by ``2..3`` is ``(1..1, 4..5)``; ``1..5`` split by
        ``0..1`` is ``(<empty>, 2..5)``.
        """
        return IntegerRange(self.first, lo - 1), IntegerRange(hi + 1, self.last)

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.first, self.last + 1))

    def __str__(self) -> str:
        return f"{self.first}..{self.last}"


# ═══════════════════════════════════════════════════════════════════════════
#  PART 2 — EXCLUSIVE INTERVAL  (generic over int / float)
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ExclusiveInterval(Generic[N]):
    """
    Closed interval ``[start, end]`` with individually punctured points.

    The bounds are frozen; ``exclusions`` is a mutable set that only
    accepts points inside the bounds.  Not hashable, since the exclusions
    can change.

    Concrete intervals are ``ExclusiveIntegerRange`` and ``RealInterval``.
    """
    start: N
    end: N
    exclusions: Set[N] = field(default_factory=set)

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        # Never alias the caller's set.
        points = set(self.exclusions)
        object.__setattr__(self, "exclusions", set())
        self.exclude(*points)

    # ---- Predicates ------------------------------------------------------

    def would_contain(self, value: float) -> bool:
        """Membership in the bounds alone, ignoring exclusions."""
        return self.start <= value <= self.end

    def contains(self, value: float) -> bool:
        return self.would_contain(value) and value not in self.exclusions

    def __contains__(self, value: object) -> bool:
        return isinstance(value, (int, float)) and self.contains(value)  # type: ignore[arg-type]

    def is_empty(self) -> bool:
        return self.start > self.end or (
            self.start == self.end and self.start in self.exclusions
        )

    def is_degenerate(self) -> bool:
        """A single-point interval ``[x, x]``."""
        return self.start == self.end

    # ---- Mutation --------------------------------------------------------

    def exclude(self, *values: N) -> ExclusiveInterval[N]:
        """Puncture *values*; idempotent.  Returns ``self`` for chaining.

        Raises ``ExclusionOutOfRangeError`` for a point outside the bounds.
        """
        for value in values:
            if not self.would_contain(value):
                raise ExclusionOutOfRangeError(value, self.start, self.end)
            self.exclusions.add(self._coerce(value))
        return self

    def include(self, value: N) -> None:
        """Un-puncture *value* (no-op if it was not excluded)."""
        self.exclusions.discard(value)

    # ---- Helpers ---------------------------------------------------------

    def sorted_exclusions(self) -> List[N]:
        return sorted(self.exclusions)

    def copy(self) -> ExclusiveInterval[N]:
        return type(self)(self.start, self.end, set(self.exclusions))

    @staticmethod
    def _coerce(value: N) -> N:
        return value

    def _fmt(self, value: N) -> str:
        return str(value)

    def __str__(self) -> str:
        text = "(" if self.start in self.exclusions else "["
        text += f"{self._fmt(self.start)}, {self._fmt(self.end)}"
        text += ")" if self.end in self.exclusions else "]"
        interior = [x for x in self.sorted_exclusions() if x != self.start and x != self.end]
        if interior:
            text += "-{" + ", ".join(self._fmt(x) for x in interior) + "}"
        return text


# ═══════════════════════════════════════════════════════════════════════════
#  PART 3 — INTEGER EXCLUSIVE RANGE
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ExclusiveIntegerRange(ExclusiveInterval[int]):
    """Integer range with exclusions, e.g. ``1..5 − {1, 3}``."""

    __hash__ = None  # type: ignore[assignment]

    def to_canonical_ranges(self) -> List[IntegerRange]:
        """
        Expand into the minimal ascending list of plain disjoint ranges.

        ``1..5`` excluding ``1, 3`` becomes ``[2..2, 4..5]``.
        """
        ranges: List[IntegerRange] = []
        start = self.start
        for point in self.sorted_exclusions():
            if start <= point - 1:
                ranges.append(IntegerRange(start, point - 1))
            start = point + 1
        if start <= self.end:
            ranges.append(IntegerRange(start, self.end))
        return ranges

    def size(self) -> int:
        if self.start > self.end:
            return 0
        return self.end - self.start + 1 - len(self.exclusions)


# ═══════════════════════════════════════════════════════════════════════════
#  PART 4 — REAL INTERVAL
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RealInterval(ExclusiveInterval[float]):
    """
    Closed real interval with exclusions.

    Examples
    --------
    >>> r = RealInterval(2.0, 7.0).exclude(2.0, 7.0)
    >>> str(r)
    '(2.0, 7.0)'
    >>> r.first_int(), r.last_int()
    (3, 6)
    """

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", float(self.start))
        object.__setattr__(self, "end", float(self.end))
        if not (math.isfinite(self.start) and math.isfinite(self.end)):
            raise ValueError(
                f"real interval bounds must be finite, got {self.start!r}..{self.end!r}"
            )
        super().__post_init__()

    @staticmethod
    def _coerce(value: float) -> float:
        return float(value)

    def _fmt(self, value: float) -> str:
        return repr(float(value))

    # ---- Integer views ---------------------------------------------------

    def first_int(self) -> int:
        """Smallest integer contained, honouring an excluded start.

        ``[2.3, 4.6]`` → 3, ``[2.0, 12.0]`` → 2, ``(2.0, 7.0)`` → 3.
        """
        base = math.floor(self.start)
        if is_integral(self.start) and self.start not in self.exclusions:
            return base
        return base + 1

    def last_int(self) -> int:
        """Largest integer contained, honouring an excluded end.

        ``[2.3, 4.6]`` → 4, ``[2.0, 12.0]`` → 12, ``(2.0, 7.0)`` → 6.
        """
        base = math.floor(self.end)
        if is_integral(self.end) and self.end in self.exclusions:
            return base - 1
        return base

    def int_bounds(self) -> Tuple[int, int]:
        """Integers inside the bounds, ignoring exclusions: ``(⌈start⌉, ⌊end⌋)``."""
        return math.ceil(self.start), math.floor(self.end)

    def integer_ranges(self) -> List[IntegerRange]:
        """Plain ranges of the integers this interval actually contains."""
        lo, hi = self.int_bounds()
        if lo > hi:
            return []
        holes = {int(x) for x in self.exclusions if is_integral(x)}
        return ExclusiveIntegerRange(lo, hi, holes).to_canonical_ranges()

    # ---- Merge / split ---------------------------------------------------

    def overlaps_or_touches(self, other: RealInterval) -> bool:
        """Closed-interval intersection, a shared boundary point included."""
        return other.start <= self.end and self.start <= other.end

    def combine(self, other: RealInterval) -> Optional[RealInterval]:
        """
        Merge two overlapping or touching intervals; ``None`` otherwise.

        A point stays excluded only if neither operand contains it:
        ``[1.0, 2.0)`` ∪ ``[2.0, 3.0]`` = ``[1.0, 3.0]`` while
        ``(1.0, 2.0)`` ∪ ``(2.0, 3.0)`` = ``(1.0, 3.0)-{2.0}``.
        """
        if not self.overlaps_or_touches(other):
            return None
        merged = RealInterval(min(self.start, other.start), max(self.end, other.end))
        merged.exclusions.update(x for x in self.exclusions if not other.contains(x))
        merged.exclusions.update(x for x in other.exclusions if not self.contains(x))
        return merged

    def split(self, punch: RealInterval) -> Tuple[RealInterval, RealInterval]:
        """
        Remainders of ``self`` left of ``punch.start`` and right of
        ``punch.end``, each closed at the cut and keeping whichever of
        ``self``'s exclusions fall inside it.  Either side may be empty.
        """
        left = RealInterval(
            self.start, punch.start,
            {x for x in self.exclusions if self.start <= x <= punch.start},
        )
        right = RealInterval(
            punch.end, self.end,
            {x for x in self.exclusions if punch.end <= x <= self.end},
        )
        return left, right


# ═══════════════════════════════════════════════════════════════════════════
#  PART 5 — BUILDERS
# ═══════════════════════════════════════════════════════════════════════════

Interval = Union[ExclusiveIntegerRange, RealInterval]


def closed_range(start: float, end: float) -> Interval:
    """``[start, end]``; integer flavour when both bounds are ``int``."""
    if _is_int(start) and _is_int(end):
        return ExclusiveIntegerRange(int(start), int(end))
    return RealInterval(start, end)


def open_range(start: float, end: float) -> Interval:
    """``(start, end)``."""
    interval = closed_range(start, end)
    interval.exclude(start, end)
    return interval


def left_open_range(start: float, end: float) -> Interval:
    """``(start, end]``."""
    interval = closed_range(start, end)
    interval.exclude(start)
    return interval


def right_open_range(start: float, end: float) -> Interval:
    """``[start, end)``."""
    interval = closed_range(start, end)
    interval.exclude(end)
    return interval


__all__ = [
    "is_integral",
    "IntegerRange",
    "ExclusiveInterval",
    "ExclusiveIntegerRange",
    "RealInterval",
    "Interval",
    "closed_range",
    "open_range",
    "left_open_range",
    "right_open_range",
]
