"""Tests for exact mixed-number values.

Covers:
- Normalization (gcd reduction, quotient absorption, sign handling)
- Construction from decimal literals
- Arithmetic between Integer and Rational operands
- Division by zero and 64-bit overflow
- Rendering
"""

from __future__ import annotations

from fractions import Fraction

import pytest
from pydantic import ValidationError

from ratcalc.core.errors import ArithmeticOverflow, DivisionByZero
from ratcalc.core.ir.value import (
    INT64_MAX,
    INT64_MIN,
    Integer,
    Rational,
    add,
    div,
    from_decimal,
    from_fraction,
    from_int,
    mul,
    negate,
    simplify,
    sub,
)


def rat(quotient: int, remainder: int, divisor: int) -> Rational:
    return Rational(quotient=quotient, remainder=remainder, divisor=divisor)


def i(value: int) -> Integer:
    return Integer(value=value)


# ============================================================================
# Normalization
# ============================================================================


class TestSimplify:
    """simplify() produces the normalized form."""

    def test_reduces_by_gcd(self) -> None:
        assert simplify(rat(0, 2, 4)) == rat(0, 1, 2)

    def test_absorbs_whole_part(self) -> None:
        assert simplify(rat(0, 5, 4)) == rat(1, 1, 4)

    def test_collapses_to_integer(self) -> None:
        assert simplify(rat(0, 6, 3)) == i(2)

    def test_zero_remainder_is_integer(self) -> None:
        assert simplify(rat(7, 0, 5)) == i(7)

    def test_negative_remainder(self) -> None:
        assert simplify(rat(0, -5, 4)) == rat(-1, -1, 4)

    def test_negative_divisor_moves_sign(self) -> None:
        assert simplify(rat(0, 1, -3)) == rat(0, -1, 3)

    def test_positive_quotient_negative_remainder(self) -> None:
        # 2 - 1/4 = 7/4
        assert simplify(rat(2, -1, 4)) == rat(1, 3, 4)

    def test_negative_quotient_positive_remainder(self) -> None:
        # -2 + 1/4 = -7/4
        assert simplify(rat(-2, 1, 4)) == rat(-1, -3, 4)

    def test_integer_unchanged(self) -> None:
        assert simplify(i(42)) == i(42)

    def test_idempotent(self) -> None:
        once = simplify(rat(3, 14, 6))
        assert simplify(once) == once
        assert once == rat(5, 1, 3)

    def test_quotient_out_of_range(self) -> None:
        with pytest.raises(ArithmeticOverflow):
            simplify(rat(INT64_MAX, 3, 2))


class TestConstruction:
    """Values built from ints, decimal literals, and fractions."""

    def test_from_int(self) -> None:
        assert from_int(5) == i(5)

    def test_from_int_out_of_range(self) -> None:
        with pytest.raises(ArithmeticOverflow, match="64-bit"):
            from_int(INT64_MIN - 1)

    def test_integer_literal(self) -> None:
        assert from_decimal("12") == i(12)

    def test_decimal_literal(self) -> None:
        assert from_decimal("1.25") == rat(1, 1, 4)

    def test_decimal_is_exact(self) -> None:
        assert from_decimal("0.1") == rat(0, 1, 10)

    def test_whole_decimal_is_integer(self) -> None:
        assert from_decimal("3.0") == i(3)

    def test_zero_decimal(self) -> None:
        assert from_decimal("0.0") == i(0)

    def test_trailing_point(self) -> None:
        assert from_decimal("5.") == i(5)

    def test_leading_point(self) -> None:
        assert from_decimal(".5") == rat(0, 1, 2)

    def test_long_fraction_reduces(self) -> None:
        assert from_decimal("0.30000000000000000000") == rat(0, 3, 10)

    def test_long_fraction_overflows(self) -> None:
        with pytest.raises(ArithmeticOverflow):
            from_decimal("0.1234567890123456789012")

    @pytest.mark.parametrize("literal", ["", ".", "1.2.3", "1..2", "1e5"])
    def test_invalid_literal(self, literal: str) -> None:
        with pytest.raises(ValueError, match="Invalid decimal literal"):
            from_decimal(literal)

    def test_from_fraction(self) -> None:
        assert from_fraction(Fraction(-7, 2)) == rat(-3, -1, 2)

    def test_zero_divisor_rejected(self) -> None:
        with pytest.raises(ValidationError):
            rat(0, 1, 0)

    @pytest.mark.parametrize("value", [INT64_MAX + 1, INT64_MIN - 1, 2**70])
    def test_integer_range_validated(self, value: int) -> None:
        with pytest.raises(ValidationError, match="signed 64-bit"):
            Integer(value=value)

    def test_integer_bounds_accepted(self) -> None:
        assert Integer(value=INT64_MIN).value == INT64_MIN
        assert Integer(value=INT64_MAX).value == INT64_MAX

    def test_negative_literal_reaches_minimum(self) -> None:
        assert from_decimal("9223372036854775808", negative=True) == i(INT64_MIN)

    def test_negative_decimal_literal(self) -> None:
        assert from_decimal("1.5", negative=True) == rat(-1, -1, 2)

    def test_negative_literal_below_minimum(self) -> None:
        with pytest.raises(ArithmeticOverflow):
            from_decimal("9223372036854775809", negative=True)


# ============================================================================
# Arithmetic
# ============================================================================


class TestAdd:
    def test_integers(self) -> None:
        assert add(i(2), i(3)) == i(5)

    def test_rationals_common_divisor(self) -> None:
        assert add(rat(0, 1, 3), rat(0, 1, 6)) == rat(0, 1, 2)

    def test_rationals_to_integer(self) -> None:
        assert add(rat(0, 1, 2), rat(0, 1, 2)) == i(1)

    def test_rational_plus_integer(self) -> None:
        assert add(rat(1, 1, 2), i(2)) == rat(3, 1, 2)

    def test_integer_plus_negative_rational(self) -> None:
        # 1 + -1/3 = 2/3
        assert add(i(1), rat(0, -1, 3)) == rat(0, 2, 3)

    def test_mixed_quotients(self) -> None:
        # 1 1/2 + 2 2/3 = 4 1/6
        assert add(rat(1, 1, 2), rat(2, 2, 3)) == rat(4, 1, 6)

    def test_overflow(self) -> None:
        with pytest.raises(ArithmeticOverflow):
            add(i(INT64_MAX), i(1))


class TestSub:
    def test_integers(self) -> None:
        assert sub(i(2), i(5)) == i(-3)

    def test_integer_minus_rational(self) -> None:
        # 1 - 1/3 = 2/3
        assert sub(i(1), rat(0, 1, 3)) == rat(0, 2, 3)

    def test_rational_minus_integer(self) -> None:
        # 1/3 - 1 = -2/3
        assert sub(rat(0, 1, 3), i(1)) == rat(0, -2, 3)

    def test_rationals(self) -> None:
        # 1/2 - 3/4 = -1/4
        assert sub(rat(0, 1, 2), rat(0, 3, 4)) == rat(0, -1, 4)

    def test_equal_rationals(self) -> None:
        assert sub(rat(2, 1, 7), rat(2, 1, 7)) == i(0)


class TestMul:
    def test_integers(self) -> None:
        assert mul(i(-4), i(6)) == i(-24)

    def test_rationals(self) -> None:
        # 3/2 * 2/3 = 1
        assert mul(rat(1, 1, 2), rat(0, 2, 3)) == i(1)

    def test_integer_times_rational(self) -> None:
        assert mul(i(3), rat(0, 1, 3)) == i(1)

    def test_negative_result(self) -> None:
        # 1/2 * -5/3 = -5/6
        assert mul(rat(0, 1, 2), rat(-1, -2, 3)) == rat(0, -5, 6)

    def test_overflow(self) -> None:
        with pytest.raises(ArithmeticOverflow):
            mul(i(2**40), i(2**40))


class TestDiv:
    def test_exact_division(self) -> None:
        assert div(i(3), i(3)) == i(1)

    def test_third(self) -> None:
        assert div(i(1), i(3)) == rat(0, 1, 3)

    def test_negative_dividend(self) -> None:
        assert div(i(-7), i(2)) == rat(-3, -1, 2)

    def test_negative_divisor(self) -> None:
        assert div(i(7), i(-2)) == rat(-3, -1, 2)

    def test_rationals(self) -> None:
        assert div(rat(0, 1, 2), rat(0, 1, 4)) == i(2)

    def test_rational_by_integer(self) -> None:
        assert div(rat(1, 1, 2), i(3)) == rat(0, 1, 2)

    def test_integer_by_zero(self) -> None:
        with pytest.raises(DivisionByZero):
            div(i(1), i(0))

    def test_rational_by_zero(self) -> None:
        with pytest.raises(DivisionByZero, match="Division by zero"):
            div(rat(0, 1, 3), i(0))

    def test_non_normalized_zero_divisor(self) -> None:
        with pytest.raises(ZeroDivisionError):
            div(i(1), rat(1, -3, 3))


class TestNegate:
    def test_integer(self) -> None:
        assert negate(i(5)) == i(-5)

    def test_zero_quotient_rational(self) -> None:
        assert negate(rat(0, 1, 3)) == rat(0, -1, 3)

    def test_mixed_rational(self) -> None:
        assert negate(rat(2, 1, 3)) == rat(-2, -1, 3)

    def test_double_negation(self) -> None:
        value = rat(0, 2, 5)
        assert negate(negate(value)) == value

    def test_int64_min_overflows(self) -> None:
        with pytest.raises(ArithmeticOverflow):
            negate(i(INT64_MIN))


class TestOperators:
    """Python operators delegate to the arithmetic functions."""

    def test_value_operators(self) -> None:
        third = i(1) / i(3)
        assert third == rat(0, 1, 3)
        assert third + third + third == i(1)
        assert third - i(1) == rat(0, -2, 3)
        assert third * i(6) == i(2)
        assert -third == rat(0, -1, 3)

    def test_int_operands(self) -> None:
        assert 2 * rat(0, 1, 4) == rat(0, 1, 2)
        assert 1 - rat(0, 1, 4) == rat(0, 3, 4)
        assert 1 / i(4) == rat(0, 1, 4)
        assert rat(0, 1, 2) + 1 == rat(1, 1, 2)

    def test_unsupported_operand(self) -> None:
        with pytest.raises(TypeError):
            i(1) + 1.5  # noqa: B018


# ============================================================================
# Rendering and conversion
# ============================================================================


class TestRendering:
    def test_integer(self) -> None:
        assert str(i(-15)) == "-15"

    def test_rational(self) -> None:
        assert str(rat(0, 1, 3)) == "0 (1 / 3)"

    def test_negative_rational(self) -> None:
        assert str(rat(-1, -1, 3)) == "-1 (-1 / 3)"

    def test_to_fraction(self) -> None:
        assert rat(-1, -1, 3).to_fraction() == Fraction(-4, 3)
        assert i(7).to_fraction() == Fraction(7)

    def test_numerator_denominator(self) -> None:
        value = rat(2, 1, 4)
        assert value.numerator == 9
        assert value.denominator == 4
        assert not value.is_zero
