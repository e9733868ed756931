# mixedset/errors.py
"""
Error types raised by the canonical value set.

Error Hierarchy:
────────────────
┌─────────────────────────────────────────────────────────────────────────┐
│  MixedSetError (base)                                                   │
│  ├── ExclusionOutOfRangeError   - puncturing a point outside the bounds │
│  ├── InfiniteSetError           - enumerating a continuous interval     │
│  ├── UnsupportedValueKindError  - value of an unrecognised kind         │
│  └── LiteralSyntaxError         - malformed console input               │
└─────────────────────────────────────────────────────────────────────────┘

Error Codes:
────────────
Each error has a code of the form MSET-XXXX:
  - 0000:      generic error, no more specific kind
  - 0001-0999: contract violations raised by the set core
  - 1000-1999: console / literal syntax errors

All of these signal misuse by the caller.  The core never catches them;
the console front end reports them per input line and carries on.
"""

from __future__ import annotations

from enum import Enum, unique
from typing import Any, Optional


# ═══════════════════════════════════════════════════════════════════════════
#  ERROR CODES
# ═══════════════════════════════════════════════════════════════════════════

@unique
class ErrorCode(Enum):
    """Structured error codes, one per error kind."""

    GENERAL = "MSET-0000"
    OUT_OF_RANGE_EXCLUSION = "MSET-0001"
    INFINITE_SET_ITERATION = "MSET-0002"
    UNSUPPORTED_VALUE_KIND = "MSET-0003"
    LITERAL_SYNTAX = "MSET-1001"

    def __str__(self) -> str:
        return self.value


# ═══════════════════════════════════════════════════════════════════════════
#  EXCEPTIONS
# ═══════════════════════════════════════════════════════════════════════════

class MixedSetError(Exception):
    """
    Base exception for all mixedset errors.

    Carries a structured :class:`ErrorCode` and an optional hint that the
    console prints below the message.
    """

    default_code: ErrorCode = ErrorCode.GENERAL

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        hint: str = "",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.hint = hint

    def with_hint(self, hint: str) -> "MixedSetError":
        """Attach a hint to this error."""
        self.hint = hint
        return self

    def format(self) -> str:
        """Render as ``error[CODE]: message`` plus the hint, if any."""
        text = f"error[{self.code}]: {self.message}"
        if self.hint:
            text += f"\n  hint: {self.hint}"
        return text


class ExclusionOutOfRangeError(MixedSetError, ValueError):
    """A point was excluded from an interval whose bounds do not contain it."""

    default_code = ErrorCode.OUT_OF_RANGE_EXCLUSION

    def __init__(self, value: Any, start: Any, end: Any) -> None:
        super().__init__(
            f"cannot exclude {value!r}: not in range {start!r}..{end!r}",
            hint="exclusions must lie within the interval's closed bounds",
        )
        self.value = value
        self.start = start
        self.end = end


class InfiniteSetError(MixedSetError, RuntimeError):
    """Full enumeration was requested on a set holding a real interval."""

    default_code = ErrorCode.INFINITE_SET_ITERATION

    def __init__(self, message: str = "unable to iterate over infinite set") -> None:
        super().__init__(
            message,
            hint="use finite_iterate() to receive real intervals as objects",
        )


class UnsupportedValueKindError(MixedSetError, TypeError):
    """A value of a kind the set cannot store was added, removed or queried."""

    default_code = ErrorCode.UNSUPPORTED_VALUE_KIND

    def __init__(self, value: Any, reason: str = "") -> None:
        kind = type(value).__name__
        message = f"unsupported value kind: [{kind}]"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
        self.value = value
        self.kind = kind


class LiteralSyntaxError(MixedSetError, ValueError):
    """Console input that does not match the literal grammar."""

    default_code = ErrorCode.LITERAL_SYNTAX

    def __init__(self, text: str, column: int = 0) -> None:
        super().__init__(f'Cannot parse input: "{text}"')
        self.text = text
        self.column = column


__all__ = [
    "ErrorCode",
    "MixedSetError",
    "ExclusionOutOfRangeError",
    "InfiniteSetError",
    "UnsupportedValueKindError",
    "LiteralSyntaxError",
]
