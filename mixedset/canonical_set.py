"""
mixedset/canonical_set.py
═════════════════════════

``CanonicalValueSet`` — a set over integers, reals, booleans, strings and
nested sets whose algebra runs in time proportional to the number of
stored *ranges*, not the number of elements.

    ┌──────────────────────────────────────────────────────────────────┐
    │  CanonicalValueSet  ("M")                                        │
    │    ├── IntegerRangeStore   1..5, 7..10                           │
    │    ├── RealRangeStore      (5.5, 6.5), [11.0, 15.0)              │
    │    └── ScalarRegistry      2.5, True, "abc", {1, 2}              │
    └──────────────────────────────────────────────────────────────────┘

Cross-store invariants
----------------------
  1. No integer range intersects the bounds of a real interval.  An
     integer inside an interval's bounds belongs to that interval and is
     absent exactly when it is one of the interval's exclusions.
  2. No isolated real lies inside the bounds of a real interval.
  3. The real store holds no single-point interval; zero-width pieces
     left over by a removal are re-added as plain points.

Hence a set is infinite iff its real store is non-empty.

Every input value is classified into a closed ``ValueKind`` and routed
through one handler table per operation (add / remove / contains).  The
tables are checked against ``ValueKind`` at import time, so a new kind
without handlers fails loudly.

Examples
--------
>>> s = CanonicalValueSet(IntegerRange(1, 5), open_range(5.5, 6.5))
>>> s.add(IntegerRange(7, 10), right_open_range(11.0, 15.0))
>>> str(s)
'1, 2, 3, 4, 5, (5.5, 6.5), 7, 8, 9, 10, [11.0, 15.0)'
>>> s.size, s.contains(IntegerRange(1, 15))
(9, False)
>>> s.add(15)
>>> str(s), s.contains(IntegerRange(1, 15))
('1, 2, 3, 4, 5, (5.5, 6.5), 7, 8, 9, 10, [11.0, 15.0]', True)
"""

from __future__ import annotations

import heapq
import logging
import math
from enum import Enum, auto
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Union,
)

from mixedset.errors import InfiniteSetError, UnsupportedValueKindError
from mixedset.intervals import (
    ExclusiveIntegerRange,
    ExclusiveInterval,
    IntegerRange,
    RealInterval,
    is_integral,
)
from mixedset.stores import IntegerRangeStore, RealRangeStore, ScalarRegistry

_log = logging.getLogger(__name__)

Number = Union[int, float]


# ═══════════════════════════════════════════════════════════════════════════
#  PART 1 — VALUE CLASSIFICATION
# ═══════════════════════════════════════════════════════════════════════════

class ValueKind(Enum):
    """Every kind of value a set accepts."""
    INTEGER = auto()
    REAL = auto()
    BOOLEAN = auto()
    STRING = auto()
    NESTED_SET = auto()
    INTEGER_RANGE = auto()
    EXCLUSIVE_INTEGER_RANGE = auto()
    REAL_INTERVAL = auto()
    EXCLUSIVE_REAL_INTERVAL = auto()


def classify_value(value: Any) -> ValueKind:
    """
    Map *value* to its ``ValueKind``.

    ``bool`` is tested before ``int`` (it is an ``int`` subclass).  A
    step-1 Python ``range`` counts as an integer range.  ``NaN`` and
    anything else unrecognised raise ``UnsupportedValueKindError``.
    """
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        if math.isnan(value):
            raise UnsupportedValueKindError(value, "NaN has no place in the ordering")
        return ValueKind.REAL
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, CanonicalValueSet):
        return ValueKind.NESTED_SET
    if isinstance(value, IntegerRange):
        return ValueKind.INTEGER_RANGE
    if isinstance(value, range):
        if value.step != 1:
            raise UnsupportedValueKindError(value, "only step-1 ranges are supported")
        return ValueKind.INTEGER_RANGE
    if isinstance(value, ExclusiveIntegerRange):
        return ValueKind.EXCLUSIVE_INTEGER_RANGE
    if isinstance(value, RealInterval):
        if value.exclusions:
            return ValueKind.EXCLUSIVE_REAL_INTERVAL
        return ValueKind.REAL_INTERVAL
    if isinstance(value, ExclusiveInterval):
        raise UnsupportedValueKindError(value, "use ExclusiveIntegerRange or RealInterval")
    raise UnsupportedValueKindError(value)


def _as_integer_range(value: Union[IntegerRange, range]) -> IntegerRange:
    if isinstance(value, range):
        return IntegerRange.from_range(value)
    return value


def _subtract(pending: List[IntegerRange], lo: int, hi: int) -> List[IntegerRange]:
    """Remove ``lo..hi`` from every range in *pending*."""
    result: List[IntegerRange] = []
    for r in pending:
        if r.intersects(lo, hi):
            result.extend(p for p in r.split(lo, hi) if not p.is_empty())
        else:
            result.append(r)
    return result


def _numeric_key(item: Union[Number, RealInterval]) -> float:
    if isinstance(item, RealInterval):
        return item.start
    return item


def _render(item: Any) -> str:
    if isinstance(item, bool):
        return str(item)
    if isinstance(item, float):
        return repr(item)
    if isinstance(item, CanonicalValueSet):
        return "{" + str(item) + "}"
    return str(item)


# ═══════════════════════════════════════════════════════════════════════════
#  PART 2 — THE SET
# ═══════════════════════════════════════════════════════════════════════════

class CanonicalValueSet:
    """
    Mixed-domain value set kept in canonical (merged, disjoint) form.

    Construction folds :meth:`add` over the arguments.  The set is
    mutable, compared structurally, and therefore unhashable.  It is
    not safe to mutate one instance from several threads; give each
    thread its own :meth:`copy`.
    """

    __slots__ = ("_ints", "_reals", "_scalars")

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, *values: Any) -> None:
        self._ints = IntegerRangeStore()
        self._reals = RealRangeStore()
        self._scalars = ScalarRegistry()
        self.add(*values)

    # ---- Size and finiteness ---------------------------------------------

    @property
    def size(self) -> int:
        """Countable members: integers, isolated reals and the scalars.

        Real intervals contribute nothing; check :attr:`finite` first.
        """
        return self._ints.size() + self._scalars.size()

    @property
    def empty(self) -> bool:
        return self.size == 0 and not self._reals

    @property
    def finite(self) -> bool:
        return not self._reals

    @property
    def infinite(self) -> bool:
        return not self.finite

    def __bool__(self) -> bool:
        return not self.empty

    # ---- Add -------------------------------------------------------------

    def add(self, *values: Any) -> None:
        """Add each value; ranges and intervals are merged into place."""
        for value in values:
            _ADD_HANDLERS[classify_value(value)](self, value)

    def _add_number(self, value: Number) -> None:
        if is_integral(value):
            self._insert_integers(IntegerRange.single(int(value)))
            return
        interval = self._reals.covering(value)
        if interval is not None:
            interval.include(value)
        else:
            self._scalars.isolated_reals.add(float(value))

    def _add_integer_range(self, value: Union[IntegerRange, range]) -> None:
        self._insert_integers(_as_integer_range(value))

    def _add_exclusive_integer_range(self, value: ExclusiveIntegerRange) -> None:
        for piece in value.to_canonical_ranges():
            self._insert_integers(piece)

    def _add_real_interval(self, value: RealInterval) -> None:
        self._insert_interval(value.copy())  # type: ignore[arg-type]

    def _add_boolean(self, value: bool) -> None:
        self._scalars.booleans.add(value)

    def _add_string(self, value: str) -> None:
        self._scalars.strings.add(value)

    def _add_nested_set(self, value: CanonicalValueSet) -> None:
        self._scalars.add_nested(value)

    def _insert_integers(self, new: IntegerRange) -> None:
        """
        Insert integer points, deferring to any real interval whose bounds
        reach them: covered integers are un-punctured in the interval and
        only the parts outside its bounds go to the integer store.
        """
        if new.is_empty():
            return
        for interval in self._reals.intersecting(new.first, new.last):
            for point in [x for x in interval.exclusions if is_integral(x) and new.contains(int(x))]:
                interval.include(point)
            lo, hi = interval.int_bounds()
            left, right = new.split(lo, hi)
            self._insert_integers(left)
            self._insert_integers(right)
            return
        self._ints.insert(new)

    def _insert_interval(self, new: RealInterval) -> None:
        """
        Insert a real interval (already a private copy).

        Isolated reals and stored integers inside its bounds are members
        of the set, so they are absorbed: removed from their stores and
        un-punctured in *new*.  The interval is then merged with every
        stored interval it overlaps or touches.
        """
        if new.is_empty():
            return
        if new.is_degenerate():
            self._add_number(new.start)
            return
        for x in self._scalars.reals_within(new):
            self._scalars.isolated_reals.discard(x)
            new.include(x)
        lo, hi = new.int_bounds()
        for r in self._ints.overlapping(lo, hi):
            for point in [x for x in new.exclusions if is_integral(x) and r.contains(int(x))]:
                new.include(point)
        self._ints.remove_interval(lo, hi)
        self._reals.insert(new)

    # ---- Remove ----------------------------------------------------------

    def remove(self, *values: Any) -> None:
        """Remove each value; intervals punch holes, splitting as needed."""
        for value in values:
            _REMOVE_HANDLERS[classify_value(value)](self, value)

    def _remove_number(self, value: Number) -> None:
        if is_integral(value):
            n = int(value)
            self._ints.remove_interval(n, n)
        interval = self._reals.covering(value)
        if interval is not None:
            interval.exclude(value)
        self._scalars.isolated_reals.discard(value)

    def _remove_integer_range(self, value: Union[IntegerRange, range]) -> None:
        r = _as_integer_range(value)
        if r.is_empty():
            return
        self._ints.remove_interval(r.first, r.last)
        for interval in self._reals.intersecting(r.first, r.last):
            lo, hi = interval.int_bounds()
            interval.exclude(*range(max(lo, r.first), min(hi, r.last) + 1))

    def _remove_exclusive_integer_range(self, value: ExclusiveIntegerRange) -> None:
        for piece in value.to_canonical_ranges():
            self._remove_integer_range(piece)

    def _remove_real_interval(self, punch: RealInterval) -> None:
        """
        Punch *punch* out of the set.

        Stored intervals strictly overlapping it are split into left and
        right remainders.  A point the punch excludes but a split interval
        contained stays a member and is re-added once the split is done.
        """
        if punch.is_empty():
            return
        if punch.is_degenerate():
            self._remove_number(punch.start)
            return
        for x in [x for x in self._scalars.isolated_reals if punch.contains(x)]:
            self._scalars.isolated_reals.discard(x)
        for endpoint in (punch.start, punch.end):
            if endpoint not in punch.exclusions:
                self._remove_number(endpoint)

        survivors: List[float] = []
        remainders: List[RealInterval] = []
        for interval in self._reals.intersecting(punch.start, punch.end):
            if not (interval.start < punch.end and punch.start < interval.end):
                continue
            survivors.extend(x for x in punch.exclusions if interval.contains(x))
            remainders.extend(interval.split(punch))
            self._reals.discard(interval)
            _log.debug("punched %s out of %s", punch, interval)

        for piece in punch.integer_ranges():
            self._ints.remove_interval(piece.first, piece.last)
        for piece in remainders:
            if piece.is_empty():
                continue
            if piece.is_degenerate():
                self._add_number(piece.start)
            else:
                self._reals.insert(piece)
        for x in survivors:
            self._add_number(x)

    def _remove_boolean(self, value: bool) -> None:
        self._scalars.booleans.discard(value)

    def _remove_string(self, value: str) -> None:
        self._scalars.strings.discard(value)

    def _remove_nested_set(self, value: CanonicalValueSet) -> None:
        self._scalars.remove_nested(value)

    def clear(self) -> None:
        self._ints.clear()
        self._reals.clear()
        self._scalars.clear()

    # ---- Membership ------------------------------------------------------

    def contains(self, value: Any) -> bool:
        """Membership for scalars; ``range ⊆ set`` for ranges and intervals."""
        return _CONTAINS_HANDLERS[classify_value(value)](self, value)

    def __contains__(self, value: Any) -> bool:
        return self.contains(value)

    def contains_all(self, values: Iterable[Any]) -> bool:
        return all(self.contains(v) for v in values)

    def _contains_number(self, value: Number) -> bool:
        if is_integral(value) and self._ints.contains(int(value)):
            return True
        return self._reals.contains(value) or value in self._scalars.isolated_reals

    def _covers_integers(self, pending: List[IntegerRange]) -> bool:
        """Subtract integer coverage, then real coverage, from *pending*."""
        pending = [r for r in pending if not r.is_empty()]
        for stored in self._ints:
            if not pending:
                return True
            pending = _subtract(pending, stored.first, stored.last)
        for interval in self._reals:
            for piece in interval.integer_ranges():
                if not pending:
                    return True
                pending = _subtract(pending, piece.first, piece.last)
        return not pending

    def _contains_integer_range(self, value: Union[IntegerRange, range]) -> bool:
        return self._covers_integers([_as_integer_range(value)])

    def _contains_exclusive_integer_range(self, value: ExclusiveIntegerRange) -> bool:
        return self._covers_integers(value.to_canonical_ranges())

    def _contains_real_interval(self, value: RealInterval) -> bool:
        if value.is_empty():
            return True
        if value.is_degenerate():
            return self._contains_number(value.start)
        interval = self._reals.covering(value.start)
        if interval is None or interval.end < value.end:
            return False
        return not any(value.contains(x) for x in interval.exclusions)

    def _contains_boolean(self, value: bool) -> bool:
        return value in self._scalars.booleans

    def _contains_string(self, value: str) -> bool:
        return value in self._scalars.strings

    def _contains_nested_set(self, value: CanonicalValueSet) -> bool:
        return self._scalars.contains_nested(value)

    # ---- Set algebra -----------------------------------------------------

    def _parts(self) -> List[Any]:
        """Every stored building block, materialised so the set may change."""
        parts: List[Any] = list(self._ints)
        parts.extend(s.copy() for s in self._reals)
        parts.extend(self._scalars.sorted_reals())
        parts.extend(sorted(self._scalars.booleans))
        parts.extend(sorted(self._scalars.strings))
        parts.extend(self._scalars.nested_sets)
        return parts

    def update(self, other: CanonicalValueSet) -> None:
        """In-place union."""
        self.add(*other._parts())

    def difference_update(self, other: CanonicalValueSet) -> None:
        """In-place difference."""
        self.remove(*other._parts())

    def union(self, other: CanonicalValueSet) -> CanonicalValueSet:
        result = self.copy()
        result.update(other)
        return result

    def difference(self, other: CanonicalValueSet) -> CanonicalValueSet:
        result = self.copy()
        result.difference_update(other)
        return result

    def intersection(self, other: CanonicalValueSet) -> CanonicalValueSet:
        """``self ∩ other`` computed as ``self − (self − other)``."""
        outside = self.difference(other)
        return self.difference(outside)

    def includes(self, other: CanonicalValueSet) -> bool:
        """``other ⊆ self``."""
        return all(self.contains(part) for part in other._parts())

    def included_in(self, other: CanonicalValueSet) -> bool:
        """``self ⊆ other``."""
        return other.includes(self)

    def equals(self, other: CanonicalValueSet) -> bool:
        return self.includes(other) and other.includes(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CanonicalValueSet):
            return NotImplemented
        return self.equals(other)

    def __or__(self, other: CanonicalValueSet) -> CanonicalValueSet:
        return self.union(other)

    def __and__(self, other: CanonicalValueSet) -> CanonicalValueSet:
        return self.intersection(other)

    def __sub__(self, other: CanonicalValueSet) -> CanonicalValueSet:
        return self.difference(other)

    def __ior__(self, other: CanonicalValueSet) -> CanonicalValueSet:
        self.update(other)
        return self

    def __isub__(self, other: CanonicalValueSet) -> CanonicalValueSet:
        self.difference_update(other)
        return self

    def __le__(self, other: CanonicalValueSet) -> bool:
        return self.included_in(other)

    def __ge__(self, other: CanonicalValueSet) -> bool:
        return self.includes(other)

    # ---- Copying ---------------------------------------------------------

    def copy(self) -> CanonicalValueSet:
        """Structural deep copy; nested sets are copied recursively."""
        clone = CanonicalValueSet()
        clone._ints = self._ints.copy()
        clone._reals = self._reals.copy()
        clone._scalars = self._scalars.copy()
        return clone

    def __copy__(self) -> CanonicalValueSet:
        return self.copy()

    def __deepcopy__(self, memo: Dict[int, Any]) -> CanonicalValueSet:
        return self.copy()

    # ---- Iteration -------------------------------------------------------

    def ints(self) -> Iterator[int]:
        """Integer points of the integer store, ascending."""
        return self._ints.points()

    def real_intervals(self) -> List[RealInterval]:
        return [s.copy() for s in self._reals]  # type: ignore[misc]

    def booleans(self) -> List[bool]:
        return sorted(self._scalars.booleans)

    def strings(self) -> List[str]:
        return sorted(self._scalars.strings)

    def nested_sets(self) -> List[CanonicalValueSet]:
        return [s.copy() for s in self._scalars.nested_sets]

    def _numeric_stream(self) -> Iterator[Union[Number, RealInterval]]:
        # Ties go to the earlier stream: integers, isolated reals, intervals.
        return heapq.merge(
            self._ints.points(),
            iter(self._scalars.sorted_reals()),
            iter(self.real_intervals()),
            key=_numeric_key,
        )

    def _check_finite(self) -> None:
        if self.infinite:
            raise InfiniteSetError(
                f"unable to iterate over infinite set ({len(self._reals)} real interval(s))"
            )

    def numbers(self) -> Iterator[Number]:
        """Every number in ascending order.  Fails on infinite sets."""
        self._check_finite()
        return self._numeric_stream()  # type: ignore[return-value]

    def finite_iterate(self) -> Iterator[Any]:
        """
        Every member in canonical order, with each real interval yielded
        as a ``RealInterval`` object in place of its contents.  Never fails.
        """
        yield from self._numeric_stream()
        yield from self.booleans()
        yield from self.strings()
        yield from self.nested_sets()

    def iterate(self) -> Iterator[Any]:
        """Every member in canonical order.  Fails on infinite sets."""
        self._check_finite()
        return self.finite_iterate()

    def __iter__(self) -> Iterator[Any]:
        return self.iterate()

    # ---- Rendering -------------------------------------------------------

    def __str__(self) -> str:
        return ", ".join(_render(item) for item in self.finite_iterate())

    def __repr__(self) -> str:
        return f"{type(self).__name__}{{{self}}}"


M = CanonicalValueSet


# ═══════════════════════════════════════════════════════════════════════════
#  PART 3 — DISPATCH TABLES
# ═══════════════════════════════════════════════════════════════════════════

_ADD_HANDLERS: Dict[ValueKind, Callable[[CanonicalValueSet, Any], None]] = {
    ValueKind.INTEGER: CanonicalValueSet._add_number,
    ValueKind.REAL: CanonicalValueSet._add_number,
    ValueKind.BOOLEAN: CanonicalValueSet._add_boolean,
    ValueKind.STRING: CanonicalValueSet._add_string,
    ValueKind.NESTED_SET: CanonicalValueSet._add_nested_set,
    ValueKind.INTEGER_RANGE: CanonicalValueSet._add_integer_range,
    ValueKind.EXCLUSIVE_INTEGER_RANGE: CanonicalValueSet._add_exclusive_integer_range,
    ValueKind.REAL_INTERVAL: CanonicalValueSet._add_real_interval,
    ValueKind.EXCLUSIVE_REAL_INTERVAL: CanonicalValueSet._add_real_interval,
}

_REMOVE_HANDLERS: Dict[ValueKind, Callable[[CanonicalValueSet, Any], None]] = {
    ValueKind.INTEGER: CanonicalValueSet._remove_number,
    ValueKind.REAL: CanonicalValueSet._remove_number,
    ValueKind.BOOLEAN: CanonicalValueSet._remove_boolean,
    ValueKind.STRING: CanonicalValueSet._remove_string,
    ValueKind.NESTED_SET: CanonicalValueSet._remove_nested_set,
    ValueKind.INTEGER_RANGE: CanonicalValueSet._remove_integer_range,
    ValueKind.EXCLUSIVE_INTEGER_RANGE: CanonicalValueSet._remove_exclusive_integer_range,
    ValueKind.REAL_INTERVAL: CanonicalValueSet._remove_real_interval,
    ValueKind.EXCLUSIVE_REAL_INTERVAL: CanonicalValueSet._remove_real_interval,
}

_CONTAINS_HANDLERS: Dict[ValueKind, Callable[[CanonicalValueSet, Any], bool]] = {
    ValueKind.INTEGER: CanonicalValueSet._contains_number,
    ValueKind.REAL: CanonicalValueSet._contains_number,
    ValueKind.BOOLEAN: CanonicalValueSet._contains_boolean,
    ValueKind.STRING: CanonicalValueSet._contains_string,
    ValueKind.NESTED_SET: CanonicalValueSet._contains_nested_set,
    ValueKind.INTEGER_RANGE: CanonicalValueSet._contains_integer_range,
    ValueKind.EXCLUSIVE_INTEGER_RANGE: CanonicalValueSet._contains_exclusive_integer_range,
    ValueKind.REAL_INTERVAL: CanonicalValueSet._contains_real_interval,
    ValueKind.EXCLUSIVE_REAL_INTERVAL: CanonicalValueSet._contains_real_interval,
}


def _check_exhaustive(table: Mapping[ValueKind, Any], operation: str) -> None:
    missing = set(ValueKind) - set(table)
    if missing:
        names = ", ".join(sorted(k.name for k in missing))
        raise ImportError(f"no {operation} handler for value kind(s): {names}")


for _table, _operation in (
    (_ADD_HANDLERS, "add"),
    (_REMOVE_HANDLERS, "remove"),
    (_CONTAINS_HANDLERS, "contains"),
):
    _check_exhaustive(_table, _operation)


__all__ = [
    "ValueKind",
    "classify_value",
    "CanonicalValueSet",
    "M",
]
