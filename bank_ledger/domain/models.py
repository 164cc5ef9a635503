"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class TransactionType(str, Enum):
    """Kind of balance-affecting event recorded in the log"""

    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"
    TRANSFER_OUT = "TRANSFER_OUT"
    TRANSFER_IN = "TRANSFER_IN"


@dataclass(frozen=True)
class AccountSummary:
    """Account as seen by callers (no credentials)"""

    id: int
    username: str
    email: str
    balance: Decimal


@dataclass(frozen=True)
class TransactionRecord:
    """Immutable log entry; debits carry a negative amount"""

    id: int
    amount: Decimal
    type: TransactionType
    timestamp: datetime
