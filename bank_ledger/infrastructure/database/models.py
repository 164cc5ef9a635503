"""SQLAlchemy ORM models for accounts and the transaction log"""

from decimal import Decimal
from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func
from sqlalchemy.types import TypeDecorator
from bank_ledger.domain.amounts import CENT

Base = declarative_base()

# SQLite only autoincrements INTEGER PRIMARY KEY
IdType = BigInteger().with_variant(Integer, "sqlite")


class Money(TypeDecorator):
    """
    Exact two-place decimal column.

    PostgreSQL stores NUMERIC(19, 2). SQLite would store NUMERIC as REAL, so
    there the value is kept as integer cents instead.
    """

    impl = Numeric(19, 2)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":
            return dialect.type_descriptor(BigInteger())
        return dialect.type_descriptor(Numeric(19, 2, asdecimal=True))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        value = Decimal(value).quantize(CENT)
        if dialect.name == "sqlite":
            return int(value.scaleb(2))
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if dialect.name == "sqlite":
            return Decimal(int(value)).scaleb(-2).quantize(CENT)
        return Decimal(value).quantize(CENT)


class Account(Base):
    """Customer account holding a single balance"""

    __tablename__ = "account"

    id = Column(IdType, primary_key=True, autoincrement=True)
    username = Column(String(100), nullable=False, unique=True, index=True)
    password_hash = Column(Text, nullable=False)
    email = Column(String(255), nullable=False)
    balance = Column(Money(), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    transactions = relationship("Transaction", back_populates="account")


class Transaction(Base):
    """Append-only ledger entry for one balance change"""

    __tablename__ = "ledger_transaction"

    id = Column(IdType, primary_key=True, autoincrement=True)
    account_id = Column(IdType, ForeignKey("account.id"), nullable=False, index=True)
    amount = Column(Money(), nullable=False)
    type = Column(String(20), nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False)

    account = relationship("Account", back_populates="transactions")
