"""
Exact mixed-number values for ratcalc.

A value is either an ``Integer`` or a ``Rational`` holding the mixed number
``quotient + remainder / divisor``. All arithmetic is exact; nothing passes
through floating point.

Normalized form:
- divisor > 0
- gcd(|remainder|, divisor) == 1
- 0 < |remainder| < divisor
- a zero remainder is always represented as ``Integer``

The fractional part carries the sign of the whole value: ``remainder`` has the
sign of the value and ``quotient`` is the value truncated toward zero. So
``-1/3`` is ``Rational(quotient=0, remainder=-1, divisor=3)`` and ``-4/3`` is
``Rational(quotient=-1, remainder=-1, divisor=3)``.

Every field of a normalized value must fit in a signed 64-bit integer;
results that do not raise ``ArithmeticOverflow``.

Usage:
    from ratcalc.core.ir.value import Integer, from_decimal

    third = Integer(value=1) / Integer(value=3)
    str(third)                      # "0 (1 / 3)"
    str(third + from_decimal("0.5"))  # "0 (5 / 6)"
"""

from __future__ import annotations

import math
import re
from fractions import Fraction
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ratcalc.core.errors import ArithmeticOverflow, DivisionByZero

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Decimal literal: digits with an optional fractional part ("5", "1.25", "5.", ".5")
_DECIMAL_RE = re.compile(r"(\d*)(?:\.(\d*))?")


def _check_range(number: int, field: str) -> int:
    """Reject numbers outside the signed 64-bit range."""
    if not INT64_MIN <= number <= INT64_MAX:
        raise ArithmeticOverflow(f"{field} {number} does not fit in a signed 64-bit integer")
    return number


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------


class _Arithmetic:
    """Python operator support shared by Integer and Rational."""

    def __add__(self, other: Any) -> Any:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return add(self, rhs)  # type: ignore[arg-type]

    def __radd__(self, other: Any) -> Any:
        lhs = _coerce(other)
        if lhs is None:
            return NotImplemented
        return add(lhs, self)  # type: ignore[arg-type]

    def __sub__(self, other: Any) -> Any:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return sub(self, rhs)  # type: ignore[arg-type]

    def __rsub__(self, other: Any) -> Any:
        lhs = _coerce(other)
        if lhs is None:
            return NotImplemented
        return sub(lhs, self)  # type: ignore[arg-type]

    def __mul__(self, other: Any) -> Any:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return mul(self, rhs)  # type: ignore[arg-type]

    def __rmul__(self, other: Any) -> Any:
        lhs = _coerce(other)
        if lhs is None:
            return NotImplemented
        return mul(lhs, self)  # type: ignore[arg-type]

    def __truediv__(self, other: Any) -> Any:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return div(self, rhs)  # type: ignore[arg-type]

    def __rtruediv__(self, other: Any) -> Any:
        lhs = _coerce(other)
        if lhs is None:
            return NotImplemented
        return div(lhs, self)  # type: ignore[arg-type]

    def __neg__(self) -> Any:
        return negate(self)  # type: ignore[arg-type]


class Integer(_Arithmetic, BaseModel):
    """A whole number."""

    value: int = Field(description="Signed 64-bit integer value")

    model_config = ConfigDict(frozen=True)

    @field_validator("value")
    @classmethod
    def validate_value(cls, value: int) -> int:
        if not INT64_MIN <= value <= INT64_MAX:
            raise ValueError(f"value {value} does not fit in a signed 64-bit integer")
        return value

    def __str__(self) -> str:
        return str(self.value)

    @property
    def numerator(self) -> int:
        return self.value

    @property
    def denominator(self) -> int:
        return 1

    @property
    def is_zero(self) -> bool:
        return self.value == 0

    def to_fraction(self) -> Fraction:
        """Convert to a standard-library Fraction."""
        return Fraction(self.value)


class Rational(_Arithmetic, BaseModel):
    """
    A mixed number: quotient + remainder / divisor.

    Examples:
        - Rational(quotient=0, remainder=1, divisor=3) → 1/3
        - Rational(quotient=2, remainder=1, divisor=4) → 9/4
        - Rational(quotient=0, remainder=-1, divisor=2) → -1/2
    """

    quotient: int = Field(default=0, description="Whole part, truncated toward zero")
    remainder: int = Field(description="Numerator of the fractional part")
    divisor: int = Field(description="Denominator of the fractional part")

    model_config = ConfigDict(frozen=True)

    @field_validator("divisor")
    @classmethod
    def validate_divisor(cls, divisor: int) -> int:
        if divisor == 0:
            raise ValueError("divisor must be non-zero")
        return divisor

    def __str__(self) -> str:
        return f"{self.quotient} ({self.remainder} / {self.divisor})"

    @property
    def numerator(self) -> int:
        """Numerator of the equivalent improper fraction over ``divisor``."""
        return self.quotient * self.divisor + self.remainder

    @property
    def denominator(self) -> int:
        return self.divisor

    @property
    def is_zero(self) -> bool:
        return self.numerator == 0

    def to_fraction(self) -> Fraction:
        """Convert to a standard-library Fraction."""
        return Fraction(self.numerator, self.divisor)


Value = Integer | Rational


def _coerce(other: Any) -> Value | None:
    """Accept values and plain ints as arithmetic operands."""
    if isinstance(other, (Integer, Rational)):
        return other
    if isinstance(other, int) and not isinstance(other, bool):
        return from_int(other)
    return None


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def from_int(number: int) -> Integer:
    """Build an Integer, checking the 64-bit range."""
    return Integer(value=_check_range(number, "integer"))


def from_decimal(literal: str, negative: bool = False) -> Value:
    """Convert a decimal literal to an exact value.

    The literal's digits are read directly, so "0.1" is exactly 1/10 with no
    floating-point rounding.

    Args:
        literal: Digits with an optional fractional part ("12", "1.25", "5.", ".5").
        negative: Read the literal as negated. Needed for values such as
            -9223372036854775808 whose magnitude only fits when negative.

    Returns:
        The normalized value.

    Raises:
        ValueError: If the literal is not a decimal number.
        ArithmeticOverflow: If the normalized value does not fit in 64 bits.
    """
    match = _DECIMAL_RE.fullmatch(literal)
    if match is None or not (match.group(1) or match.group(2)):
        raise ValueError(f"Invalid decimal literal: {literal!r}")

    sign = -1 if negative else 1
    whole, fraction = match.group(1), match.group(2)
    if fraction is None:
        return from_int(sign * int(whole))

    numerator = sign * int(whole + fraction)
    return simplify(Rational(quotient=0, remainder=numerator, divisor=10 ** len(fraction)))


def from_fraction(fraction: Fraction) -> Value:
    """Convert a standard-library Fraction to a normalized value."""
    return simplify(
        Rational(quotient=0, remainder=fraction.numerator, divisor=fraction.denominator)
    )


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


def simplify(value: Value) -> Value:
    """Normalize a value.

    Reduces the fraction by its greatest common divisor, absorbs the whole
    part of remainder / divisor into the quotient, makes the quotient and
    remainder agree in sign, and collapses a zero remainder to Integer.
    """
    if isinstance(value, Integer):
        return from_int(value.value)

    quotient, remainder, divisor = value.quotient, value.remainder, value.divisor
    if divisor < 0:
        remainder, divisor = -remainder, -divisor

    common = math.gcd(remainder, divisor)
    if common > 1:
        remainder //= common
        divisor //= common

    whole = abs(remainder) // divisor
    if remainder < 0:
        whole = -whole
    quotient += whole
    remainder -= whole * divisor

    # The fractional part takes the sign of the whole value
    if quotient > 0 and remainder < 0:
        quotient -= 1
        remainder += divisor
    elif quotient < 0 and remainder > 0:
        quotient += 1
        remainder -= divisor

    if remainder == 0:
        return Integer(value=_check_range(quotient, "quotient"))

    return Rational(
        quotient=_check_range(quotient, "quotient"),
        remainder=_check_range(remainder, "remainder"),
        divisor=_check_range(divisor, "divisor"),
    )


def _flatten(value: Value) -> tuple[int, int]:
    """Return (numerator, denominator) of the improper fraction."""
    if isinstance(value, Integer):
        return value.value, 1
    return value.quotient * value.divisor + value.remainder, value.divisor


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------


def add(left: Value, right: Value) -> Value:
    """Exact addition."""
    if isinstance(left, Integer) and isinstance(right, Integer):
        return from_int(left.value + right.value)

    if isinstance(left, Rational) and isinstance(right, Integer):
        return simplify(
            Rational(
                quotient=left.quotient + right.value,
                remainder=left.remainder,
                divisor=left.divisor,
            )
        )

    if isinstance(left, Integer) and isinstance(right, Rational):
        return simplify(
            Rational(
                quotient=left.value + right.quotient,
                remainder=right.remainder,
                divisor=right.divisor,
            )
        )

    assert isinstance(left, Rational) and isinstance(right, Rational)
    divisor = math.lcm(left.divisor, right.divisor)
    remainder = left.remainder * (divisor // left.divisor) + right.remainder * (
        divisor // right.divisor
    )
    return simplify(
        Rational(
            quotient=left.quotient + right.quotient,
            remainder=remainder,
            divisor=divisor,
        )
    )


def sub(left: Value, right: Value) -> Value:
    """Exact subtraction."""
    if isinstance(left, Integer) and isinstance(right, Integer):
        return from_int(left.value - right.value)

    if isinstance(left, Rational) and isinstance(right, Integer):
        return simplify(
            Rational(
                quotient=left.quotient - right.value,
                remainder=left.remainder,
                divisor=left.divisor,
            )
        )

    if isinstance(left, Integer) and isinstance(right, Rational):
        return simplify(
            Rational(
                quotient=left.value - right.quotient,
                remainder=-right.remainder,
                divisor=right.divisor,
            )
        )

    assert isinstance(left, Rational) and isinstance(right, Rational)
    divisor = math.lcm(left.divisor, right.divisor)
    remainder = left.remainder * (divisor // left.divisor) - right.remainder * (
        divisor // right.divisor
    )
    return simplify(
        Rational(
            quotient=left.quotient - right.quotient,
            remainder=remainder,
            divisor=divisor,
        )
    )


def mul(left: Value, right: Value) -> Value:
    """Exact multiplication."""
    if isinstance(left, Integer) and isinstance(right, Integer):
        return from_int(left.value * right.value)

    left_num, left_den = _flatten(left)
    right_num, right_den = _flatten(right)
    return simplify(
        Rational(quotient=0, remainder=left_num * right_num, divisor=left_den * right_den)
    )


def div(left: Value, right: Value) -> Value:
    """Exact division.

    Raises:
        DivisionByZero: If ``right`` is zero.
    """
    if right.is_zero:
        raise DivisionByZero(f"Division by zero: {left} / {right}")

    if isinstance(left, Integer) and isinstance(right, Integer):
        return simplify(Rational(quotient=0, remainder=left.value, divisor=right.value))

    left_num, left_den = _flatten(left)
    right_num, right_den = _flatten(right)
    return simplify(
        Rational(quotient=0, remainder=left_num * right_den, divisor=left_den * right_num)
    )


def negate(value: Value) -> Value:
    """Exact negation."""
    if isinstance(value, Integer):
        return from_int(-value.value)
    return simplify(
        Rational(quotient=-value.quotient, remainder=-value.remainder, divisor=value.divisor)
    )
