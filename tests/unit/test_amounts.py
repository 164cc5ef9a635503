"""Unit tests for amount parsing"""

import pytest
from decimal import Decimal
from bank_ledger.domain.amounts import MAX_BALANCE, check_balance_limit, parse_amount
from bank_ledger.domain.exceptions import InvalidAmountError, InvalidInputError


def test_parse_amount_normalizes_to_cents():
    """Whole and one-digit amounts gain two decimal places"""
    assert parse_amount("100") == Decimal("100.00")
    assert str(parse_amount("100")) == "100.00"
    assert str(parse_amount(Decimal("30.5"))) == "30.50"
    assert str(parse_amount(7)) == "7.00"


def test_parse_amount_accepts_trailing_zeros_beyond_cents():
    """1.500 is exactly representable in cents"""
    assert parse_amount("1.500") == Decimal("1.50")


@pytest.mark.parametrize("value", ["0", "0.00", "-5", "-0.01"])
def test_parse_amount_rejects_non_positive(value):
    """Zero and negative amounts are not allowed"""
    with pytest.raises(InvalidAmountError, match="greater than zero"):
        parse_amount(value)


def test_parse_amount_rejects_sub_cent_precision():
    """No silent rounding of fractional cents"""
    with pytest.raises(InvalidAmountError, match="2 decimal places"):
        parse_amount("0.005")


@pytest.mark.parametrize("value", ["abc", "", "NaN", "Infinity", "1e"])
def test_parse_amount_rejects_garbage(value):
    with pytest.raises(InvalidAmountError):
        parse_amount(value)


def test_parse_amount_rejects_float():
    """Binary floats must not reach the ledger"""
    with pytest.raises(InvalidAmountError, match="decimal string"):
        parse_amount(0.1)


def test_parse_amount_rejects_huge_values():
    with pytest.raises(InvalidAmountError, match="less than"):
        parse_amount("1e30")


def test_invalid_amount_is_invalid_input():
    """API maps both to the same status"""
    assert issubclass(InvalidAmountError, InvalidInputError)


def test_check_balance_limit():
    """The ceiling itself is allowed, one cent past it is not"""
    assert check_balance_limit(MAX_BALANCE) == MAX_BALANCE
    with pytest.raises(InvalidAmountError, match="exceed"):
        check_balance_limit(MAX_BALANCE + Decimal("0.01"))
