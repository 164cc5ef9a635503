"""Domain-specific exceptions"""

from decimal import Decimal


class LedgerError(Exception):
    """Base exception for ledger operations"""

    pass


class AccountAlreadyExistsError(LedgerError):
    """Username is already registered"""

    def __init__(self, username: str):
        super().__init__(f"Username already exists: {username}")
        self.username = username


class AccountNotFoundError(LedgerError):
    """No account for the given username.

    ``role`` tells which side of the operation was missing: ``account`` for
    single-account operations, ``source`` or ``target`` for transfers.
    """

    def __init__(self, username: str, role: str = "account"):
        label = {"source": "Source account", "target": "Target account"}.get(role, "Account")
        super().__init__(f"{label} not found: {username}")
        self.username = username
        self.role = role


class InsufficientFundsError(LedgerError):
    """Debit would take the balance below zero"""

    def __init__(self, username: str, balance: Decimal, amount: Decimal):
        super().__init__(f"Insufficient funds: balance {balance}, requested {amount}")
        self.username = username
        self.balance = balance
        self.amount = amount


class InvalidInputError(LedgerError):
    """Request is well-formed but not acceptable"""

    pass


class InvalidAmountError(InvalidInputError):
    """Amount is not a positive value with at most two decimal places"""

    pass


class InvalidCredentialsError(LedgerError):
    """Username/password pair does not match"""

    pass


class StorageError(LedgerError):
    """Database failed or timed out; the transaction was rolled back"""

    pass
