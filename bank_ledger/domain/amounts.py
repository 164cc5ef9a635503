"""Monetary amount parsing and validation"""

from decimal import Decimal, InvalidOperation
from typing import Union
from bank_ledger.domain.exceptions import InvalidAmountError

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
MAX_AMOUNT = Decimal("1000000000000000")
# Fits NUMERIC(19, 2) and, as integer cents, a signed 64-bit SQLite INTEGER
MAX_BALANCE = Decimal("9999999999999999.99")


def parse_amount(value: Union[str, int, Decimal]) -> Decimal:
    """
    Parse and validate a transfer/deposit/withdrawal amount.

    Rules:
    - Must be a finite number (floats are rejected, pass the decimal string)
    - Must be strictly positive
    - At most 2 decimal places, no silent rounding

    Args:
        value: Decimal, int or decimal string such as "100.50"

    Returns:
        Amount normalized to exactly two decimal places

    Example:
        "100" -> Decimal("100.00")
        "0.005" -> InvalidAmountError
    """
    if isinstance(value, (bool, float)):
        raise InvalidAmountError(f"Amount must be a decimal string, got {type(value).__name__}")

    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as e:
        raise InvalidAmountError(f"Invalid amount: {value!r}") from e

    if not amount.is_finite():
        raise InvalidAmountError(f"Invalid amount: {value!r}")

    if amount <= 0:
        raise InvalidAmountError("Amount must be greater than zero")

    if amount >= MAX_AMOUNT:
        raise InvalidAmountError(f"Amount must be less than {MAX_AMOUNT}")

    if amount.as_tuple().exponent < -2 and amount != amount.quantize(CENT):
        raise InvalidAmountError("Amount cannot have more than 2 decimal places")

    return amount.quantize(CENT)


def check_balance_limit(balance: Decimal) -> Decimal:
    """
    Refuse a credit that would push a balance past MAX_BALANCE.

    Raises:
        InvalidAmountError: Resulting balance is not storable
    """
    if balance > MAX_BALANCE:
        raise InvalidAmountError(f"Resulting balance would exceed {MAX_BALANCE}")
    return balance
