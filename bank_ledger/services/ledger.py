"""Ledger service - account registration and balance mutations

Every mutating operation runs inside one transaction_scope: the balance
updates and the log entries it writes commit together or not at all.
Accounts are row-locked before their balance is checked, so concurrent
debits against one account serialize in the database.
"""

import logging
from decimal import Decimal
from typing import List, Union
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bank_ledger.domain.amounts import ZERO, check_balance_limit, parse_amount
from bank_ledger.domain.exceptions import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    InsufficientFundsError,
    InvalidCredentialsError,
    InvalidInputError,
)
from bank_ledger.domain.models import AccountSummary, TransactionRecord, TransactionType
from bank_ledger.infrastructure.database.models import Account
from bank_ledger.infrastructure.database.repositories import AccountRepository, TransactionRepository
from bank_ledger.infrastructure.database.session import transaction_scope
from bank_ledger.infrastructure.security.passwords import PasswordHasher

logger = logging.getLogger(__name__)

AmountInput = Union[str, int, Decimal]


def _summary(account: Account) -> AccountSummary:
    return AccountSummary(
        id=account.id,
        username=account.username,
        email=account.email,
        balance=account.balance,
    )


class LedgerService:
    """Account operations over one database session"""

    def __init__(self, db: Session, hasher: PasswordHasher | None = None):
        self.db = db
        self.hasher = hasher or PasswordHasher()
        self.accounts = AccountRepository(db)
        self.transactions = TransactionRepository(db)

    def register(self, username: str, password: str, email: str) -> AccountSummary:
        """
        Create an account with a zero balance.

        Raises:
            AccountAlreadyExistsError: Username taken, including a concurrent
                registration caught by the unique constraint
            InvalidInputError: Blank username or password
        """
        if not username or not username.strip():
            raise InvalidInputError("Username is required")
        if not password:
            raise InvalidInputError("Password is required")

        # No transaction is open while hashing
        password_hash = self.hasher.hash(password)

        with transaction_scope(self.db):
            if self.accounts.find_by_username(username) is not None:
                raise AccountAlreadyExistsError(username)

            account = Account(
                username=username,
                password_hash=password_hash,
                email=email,
                balance=ZERO,
            )
            try:
                self.accounts.save(account)
            except IntegrityError as e:
                raise AccountAlreadyExistsError(username) from e
            summary = _summary(account)

        logger.info("Account registered", extra={"username": username})
        return summary

    def authenticate(self, username: str, password: str) -> AccountSummary:
        """Check credentials; the same error is raised for unknown user and bad password"""
        with transaction_scope(self.db):
            account = self.accounts.find_by_username(username)
            if account is None or not self.hasher.verify(password, account.password_hash):
                raise InvalidCredentialsError("Invalid username or password")
            return _summary(account)

    def get_balance(self, username: str) -> Decimal:
        with transaction_scope(self.db):
            account = self.accounts.find_by_username(username)
            if account is None:
                raise AccountNotFoundError(username)
            return account.balance

    def list_transactions(self, username: str, limit: int = 50) -> List[TransactionRecord]:
        """Most recent log entries for the account, newest first"""
        with transaction_scope(self.db):
            account = self.accounts.find_by_username(username)
            if account is None:
                raise AccountNotFoundError(username)
            return [
                TransactionRecord(
                    id=t.id,
                    amount=t.amount,
                    type=TransactionType(t.type),
                    timestamp=t.timestamp,
                )
                for t in self.transactions.list_for_account(account.id, limit=limit)
            ]

    def deposit(self, username: str, amount: AmountInput) -> Decimal:
        """Credit ``amount`` and return the new balance"""
        amount = parse_amount(amount)

        with transaction_scope(self.db):
            account = self.accounts.lock_by_username(username)
            if account is None:
                raise AccountNotFoundError(username)

            account.balance = check_balance_limit(account.balance + amount)
            self.accounts.save(account)
            self.transactions.save(account, amount, TransactionType.DEPOSIT)
            balance = account.balance

        return balance

    def withdraw(self, username: str, amount: AmountInput) -> Decimal:
        """
        Debit ``amount`` and return the new balance.

        Raises:
            AccountNotFoundError: No such account
            InsufficientFundsError: Balance lower than amount; nothing written
        """
        amount = parse_amount(amount)

        with transaction_scope(self.db):
            account = self.accounts.lock_by_username(username)
            if account is None:
                raise AccountNotFoundError(username)
            if account.balance < amount:
                raise InsufficientFundsError(username, account.balance, amount)

            account.balance = account.balance - amount
            self.accounts.save(account)
            self.transactions.save(account, -amount, TransactionType.WITHDRAWAL)
            balance = account.balance

        return balance

    def transfer(self, from_username: str, to_username: str, amount: AmountInput) -> Decimal:
        """
        Move ``amount`` between two accounts and return the source balance.

        Both rows are locked in id order before the funds check. Both legs
        and both log entries are written in the same transaction.

        Raises:
            AccountNotFoundError: role "source" or "target"
            InsufficientFundsError: Source balance lower than amount
            InvalidInputError: Source and target are the same account
        """
        amount = parse_amount(amount)
        if from_username == to_username:
            raise InvalidInputError("Cannot transfer to the same account")

        with transaction_scope(self.db):
            locked = self.accounts.lock_by_usernames([from_username, to_username])
            source = locked.get(from_username)
            target = locked.get(to_username)
            if source is None:
                raise AccountNotFoundError(from_username, role="source")
            if target is None:
                raise AccountNotFoundError(to_username, role="target")
            if source.balance < amount:
                raise InsufficientFundsError(from_username, source.balance, amount)

            source.balance = source.balance - amount
            target.balance = check_balance_limit(target.balance + amount)
            self.accounts.save(source)
            self.accounts.save(target)

            self.transactions.save(source, -amount, TransactionType.TRANSFER_OUT)
            self.transactions.save(target, amount, TransactionType.TRANSFER_IN)
            balance = source.balance

        return balance
