"""
mixedset — Canonical Mixed-Domain Value Sets
============================================

Exact, compact sets over integers, reals (including punctured continuous
intervals), booleans, strings and nested sets, with full set algebra in
time proportional to the number of stored ranges.

Core modules
------------
intervals
    ``IntegerRange``, ``ExclusiveIntegerRange``, ``RealInterval`` and the
    open / half-open builders.
stores
    The integer range store, the real interval store and the scalar
    registry backing every set.
canonical_set
    ``CanonicalValueSet`` (alias ``M``): classification, cross-store
    reconciliation, algebra, iteration and rendering.
errors
    ``MixedSetError`` and its subclasses.

Quick start
-----------
>>> from mixedset import M, IntegerRange, open_range
>>> s = M(IntegerRange(1, 10)) - M(IntegerRange(3, 5))
>>> print(s.size, s)
7 1, 2, 6, 7, 8, 9, 10
>>> t = M(open_range(5.5, 6.5))
>>> t.infinite
True

Package layout
--------------
::

    mixedset/
    ├── __init__.py            ← this file
    ├── errors.py
    ├── intervals.py
    ├── stores.py
    └── canonical_set.py
"""

from __future__ import annotations

import logging
from typing import List

__version__ = "0.1.0"
__author__ = "mixedset contributors"
__license__ = "MIT"

_log = logging.getLogger(__name__)
_log.addHandler(logging.NullHandler())

from mixedset.errors import (  # noqa: E402
    ErrorCode,
    ExclusionOutOfRangeError,
    InfiniteSetError,
    LiteralSyntaxError,
    MixedSetError,
    UnsupportedValueKindError,
)
from mixedset.intervals import (  # noqa: E402
    ExclusiveIntegerRange,
    IntegerRange,
    RealInterval,
    closed_range,
    is_integral,
    left_open_range,
    open_range,
    right_open_range,
)
from mixedset.stores import (  # noqa: E402
    IntegerRangeStore,
    RealRangeStore,
    ScalarRegistry,
)
from mixedset.canonical_set import (  # noqa: E402
    CanonicalValueSet,
    M,
    ValueKind,
    classify_value,
)

__all__: List[str] = [
    # Errors
    "ErrorCode",
    "MixedSetError",
    "ExclusionOutOfRangeError",
    "InfiniteSetError",
    "UnsupportedValueKindError",
    "LiteralSyntaxError",
    # Intervals
    "IntegerRange",
    "ExclusiveIntegerRange",
    "RealInterval",
    "closed_range",
    "open_range",
    "left_open_range",
    "right_open_range",
    "is_integral",
    # Stores
    "IntegerRangeStore",
    "RealRangeStore",
    "ScalarRegistry",
    # Set
    "CanonicalValueSet",
    "M",
    "ValueKind",
    "classify_value",
]
