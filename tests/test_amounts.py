"""
tests/test_amounts.py — Amount Normalization & Display Tests
=============================================================

Pure functions, no database.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from debtcollector.engine.amounts import (
    ZERO,
    format_for_display,
    normalize_amount,
    quantize_amount,
    to_decimal,
)
from debtcollector.engine.errors import (
    InvalidAmountError,
    LedgerError,
    LedgerValidationError,
)


# ===========================================================================
# to_decimal
# ===========================================================================
class TestToDecimal:
    def test_none_is_zero(self):
        assert to_decimal(None) == ZERO

    def test_float_goes_through_str(self):
        assert to_decimal(0.1) == Decimal("0.1")

    def test_int(self):
        assert to_decimal(42) == Decimal("42")

    def test_string_with_separators_and_whitespace(self):
        assert to_decimal(" 1,234.56 ") == Decimal("1234.56")

    def test_decimal_passes_through(self):
        value = Decimal("3.14159")
        assert to_decimal(value) is value

    @pytest.mark.parametrize("bad", ["abc", "", "12..5"])
    def test_unparsable_string_raises(self, bad):
        with pytest.raises(InvalidAmountError):
            to_decimal(bad)

    def test_bool_is_not_an_amount(self):
        with pytest.raises(InvalidAmountError):
            to_decimal(True)

    def test_non_numeric_type_raises(self):
        with pytest.raises(InvalidAmountError):
            to_decimal([1, 2])

    @pytest.mark.parametrize("nan", [float("nan"), "NaN", Decimal("NaN")])
    def test_nan_raises(self, nan):
        with pytest.raises(InvalidAmountError):
            to_decimal(nan)

    def test_infinity_passes_through(self):
        assert to_decimal(float("inf")).is_infinite()


# ===========================================================================
# normalize_amount
# ===========================================================================
class TestNormalizeAmount:
    def test_rounds_half_up_to_cents(self):
        assert normalize_amount(25.505) == Decimal("25.51")
        assert normalize_amount("10.004") == Decimal("10.00")

    def test_negative_rounds_away_from_zero(self):
        assert normalize_amount(-2.345) == Decimal("-2.35")

    def test_sign_is_preserved(self):
        assert normalize_amount(-40) == Decimal("-40.00")

    def test_clamps_to_upper_bound(self):
        assert normalize_amount(250000) == Decimal("100000.00")

    def test_clamps_to_lower_bound(self):
        assert normalize_amount(-250000) == Decimal("-100000.00")

    def test_bounds_are_inclusive(self):
        assert normalize_amount(100000) == Decimal("100000.00")
        assert normalize_amount(-100000) == Decimal("-100000.00")

    def test_infinities_clamp(self):
        assert normalize_amount(float("inf")) == Decimal("100000.00")
        assert normalize_amount(float("-inf")) == Decimal("-100000.00")

    def test_none_is_zero(self):
        assert normalize_amount(None) == ZERO

    def test_no_negative_zero(self):
        result = normalize_amount(-0.001)
        assert result == ZERO
        assert not result.is_signed()

    def test_always_two_places(self):
        assert str(normalize_amount(7)) == "7.00"

    def test_nan_fails(self):
        with pytest.raises(InvalidAmountError):
            normalize_amount(float("nan"))


# ===========================================================================
# quantize_amount
# ===========================================================================
class TestQuantizeAmount:
    def test_does_not_clamp(self):
        assert quantize_amount(250000.456) == Decimal("250000.46")

    def test_float_noise_is_rounded_away(self):
        assert quantize_amount(0.1 + 0.2) == Decimal("0.30")

    def test_infinity_raises(self):
        with pytest.raises(InvalidAmountError):
            quantize_amount(float("inf"))


# ===========================================================================
# format_for_display
# ===========================================================================
class TestFormatForDisplay:
    def test_two_decimals_with_separators(self):
        assert format_for_display(1234.5) == "1,234.50"

    def test_signed_by_default(self):
        assert format_for_display(-5) == "-5.00"

    def test_unsigned(self):
        assert format_for_display(-5, signed=False) == "5.00"

    def test_none(self):
        assert format_for_display(None) == "0.00"

    def test_large_aggregate_is_not_clamped(self):
        assert format_for_display(Decimal("1500000")) == "1,500,000.00"


# ===========================================================================
# Error hierarchy
# ===========================================================================
class TestErrorHierarchy:
    def test_invalid_amount_is_validation_error(self):
        err = InvalidAmountError("bad")
        assert isinstance(err, LedgerValidationError)
        assert isinstance(err, LedgerError)
        assert isinstance(err, ValueError)
