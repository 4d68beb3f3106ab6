"""Number wrapper type.

``Num`` is a signed 32-bit integer, within the range [-2^31, 2^31 - 1],
with checked conversions to and from unsigned 32-bit integers and decimal
text.  The API is deliberately small: it exists to be tested, fuzzed and
mutated.

Decision branches are annotated with their branch-IDs (see
``contract.py`` BranchSpec) so white-box tests can trace coverage back to
the contract.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from bounds import INT32, UINT32

_DECIMAL = re.compile(r"-?[0-9]+")

# Longest digit run (ignoring leading zeros) that can still fit in INT32.
_MAX_DIGITS = len(str(INT32.hi))


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class NumError(Exception):
    """A ``Num`` related error."""


class NumOverflowError(NumError, OverflowError):
    """Unsigned integer overflows ``Num``."""

    def __init__(self, value: int):
        self.value = value
        super().__init__("unsigned integer overflows signed number")


class NegativeError(NumError, ValueError):
    """Unexpected negative value."""

    def __init__(self) -> None:
        super().__init__("unexpected negative value")


class ParseErrorKind(Enum):
    EMPTY = "cannot parse integer from empty string"
    INVALID_DIGIT = "invalid digit found in string"
    POS_OVERFLOW = "number too large to fit in target type"
    NEG_OVERFLOW = "number too small to fit in target type"


class NumParseError(ValueError):
    """Text is not a base-10 signed 32-bit integer literal."""

    def __init__(self, kind: ParseErrorKind, text: str):
        self.kind = kind
        self.text = text
        super().__init__(kind.value)


# ---------------------------------------------------------------------------
# Num
# ---------------------------------------------------------------------------

def _require_int(x: object) -> None:
    # bool is an int subclass but never a meaningful input here
    if isinstance(x, bool) or not isinstance(x, int):
        raise TypeError(f"expected int, got {type(x).__name__}")


@dataclass(frozen=True, order=True)
class Num:
    """A signed 32 bit integer.

    Construction from a Python ``int`` is the infallible signed
    conversion: ``Num(-10) == Num.from_signed(-10)``.  The stored value
    always lies in ``INT32``.
    """

    value: int

    def __post_init__(self) -> None:
        _require_int(self.value)
        INT32.check(self.value, "signed value")          # INPUT-INVALID-SIGNED

    # -- constructors -------------------------------------------------------

    @classmethod
    def from_signed(cls, x: int) -> Num:
        """Wrap a signed 32-bit integer.

        Round-trips with ``to_signed``::

            >>> Num.from_signed(-10).to_signed()
            -10
        """
        return cls(x)

    @classmethod
    def from_unsigned(cls, x: int) -> Num:
        """Construct from an unsigned 32-bit integer.

        An unsigned ``Num`` has a maximum value of 2^31 - 1; anything
        larger raises ``NumOverflowError`` carrying ``x``.

        Round-trips with ``to_unsigned``::

            >>> Num.from_unsigned(10).to_unsigned()
            10

        Branches: INPUT-INVALID-UNSIGNED, FROM-UNSIGNED-OK,
                  FROM-UNSIGNED-OVERFLOW
        """
        _require_int(x)
        UINT32.check(x, "unsigned value")                # INPUT-INVALID-UNSIGNED
        if x <= INT32.hi:                                # FROM-UNSIGNED-OK
            return cls(x)
        raise NumOverflowError(x)                        # FROM-UNSIGNED-OVERFLOW

    @classmethod
    def parse(cls, text: str) -> Num:
        """Parse a base-10 signed 32-bit integer literal.

        Accepts an optional leading ``-`` followed by one or more ASCII
        digits and nothing else.

        Branches: PARSE-EMPTY, PARSE-INVALID-DIGIT, PARSE-POS-OVERFLOW,
                  PARSE-NEG-OVERFLOW, PARSE-OK
        """
        if not isinstance(text, str):
            raise TypeError(f"expected str, got {type(text).__name__}")
        if not text:                                     # PARSE-EMPTY
            raise NumParseError(ParseErrorKind.EMPTY, text)
        if _DECIMAL.fullmatch(text) is None:             # PARSE-INVALID-DIGIT
            raise NumParseError(ParseErrorKind.INVALID_DIGIT, text)

        negative = text[0] == "-"
        significant = (text[1:] if negative else text).lstrip("0") or "0"

        # int() only ever sees at most _MAX_DIGITS characters.
        if len(significant) > _MAX_DIGITS:
            value = None
        else:
            value = -int(significant) if negative else int(significant)

        if value is None or not INT32.contains(value):
            if negative:                                 # PARSE-NEG-OVERFLOW
                raise NumParseError(ParseErrorKind.NEG_OVERFLOW, text)
            raise NumParseError(ParseErrorKind.POS_OVERFLOW, text)

        return cls.from_signed(value)                    # PARSE-OK

    # -- conversions --------------------------------------------------------

    def to_signed(self) -> int:
        """Returns the value of this number as a signed integer."""
        return self.value

    def to_unsigned(self) -> int:
        """Returns the value of this number as an unsigned integer.

        Raises ``NegativeError`` if this number is negative.

        Branches: TO-UNSIGNED-OK, TO-UNSIGNED-NEGATIVE
        """
        if self.value < 0:                               # TO-UNSIGNED-NEGATIVE
            raise NegativeError()
        return self.value                                # TO-UNSIGNED-OK

    def abs(self) -> int:
        """Returns the absolute value of this number, in [0, 2^31].

        Branches: ABS-NON-NEGATIVE, ABS-NEGATIVE, ABS-MIN
        """
        if self.value >= 0:                              # ABS-NON-NEGATIVE
            return self.value
        # Python ints do not overflow, so -INT32.lo == 2^31 is exact.
        return -self.value                               # ABS-NEGATIVE, ABS-MIN

    # -- dunder conversions -------------------------------------------------

    def __abs__(self) -> int:
        return self.abs()

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)
