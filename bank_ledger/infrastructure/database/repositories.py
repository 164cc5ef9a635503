"""Data access layer for accounts and the transaction log"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, Iterable, List, Optional
from sqlalchemy import Select, select
from sqlalchemy.orm import Session
from bank_ledger.infrastructure.database.models import Account, Transaction
from bank_ledger.domain.models import TransactionType


def lock_accounts_statement(usernames: Iterable[str]) -> Select:
    """SELECT ... FOR UPDATE over the named accounts, rows taken in id order"""
    return (
        select(Account)
        .where(Account.username.in_(list(usernames)))
        .order_by(Account.id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )


class AccountRepository:
    """Repository for accounts"""

    def __init__(self, db: Session):
        self.db = db

    def find_by_username(self, username: str) -> Optional[Account]:
        """Fetch account without locking"""
        return self.db.execute(
            select(Account).where(Account.username == username)
        ).scalar_one_or_none()

    def lock_by_username(self, username: str) -> Optional[Account]:
        """Fetch account with a row lock held until the transaction ends"""
        return self.db.execute(
            select(Account)
            .where(Account.username == username)
            .with_for_update()
            .execution_options(populate_existing=True)  # Never trust a stale identity-map balance
        ).scalar_one_or_none()

    def lock_by_usernames(self, usernames: Iterable[str]) -> Dict[str, Account]:
        """
        Lock several accounts in one statement, ordered by id.

        A fixed lock order means two transfers in opposite directions wait on
        each other instead of deadlocking.
        """
        accounts = self.db.execute(lock_accounts_statement(usernames)).scalars().all()
        return {account.username: account for account in accounts}

    def save(self, account: Account) -> Account:
        """Insert or update account"""
        self.db.add(account)
        self.db.flush()  # Surface constraint violations inside the transaction
        return account


class TransactionRepository:
    """Repository for the append-only transaction log"""

    def __init__(self, db: Session):
        self.db = db

    def save(self, account: Account, amount: Decimal, type: TransactionType) -> Transaction:
        """Append a log entry for ``account``"""
        db_transaction = Transaction(
            account_id=account.id,
            amount=amount,
            type=type.value,
            timestamp=datetime.now(timezone.utc),
        )
        self.db.add(db_transaction)
        self.db.flush()
        return db_transaction

    def list_for_account(self, account_id: int, limit: int = 50) -> List[Transaction]:
        """Fetch recent entries for an account, newest first"""
        return (
            self.db.query(Transaction)
            .filter(Transaction.account_id == account_id)
            .order_by(Transaction.id.desc())
            .limit(limit)
            .all()
        )
