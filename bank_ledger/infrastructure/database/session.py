"""Database session management with connection pooling and scoped transactions"""

import logging
from contextlib import contextmanager
from typing import Iterator
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from bank_ledger.config import settings
from bank_ledger.domain.exceptions import StorageError
from bank_ledger.infrastructure.database.models import Base

logger = logging.getLogger(__name__)


def create_db_engine(database_url: str, lock_timeout_seconds: float | None = None) -> Engine:
    """
    Build an engine whose transactions can serialize balance updates.

    PostgreSQL gets a per-connection lock_timeout so a blocked FOR UPDATE
    fails instead of waiting forever. SQLite has no row locks, so every
    transaction opens with BEGIN IMMEDIATE and writers queue on the database
    lock, bounded by the busy timeout.
    """
    timeout = lock_timeout_seconds if lock_timeout_seconds is not None else settings.db_lock_timeout_seconds

    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False, "timeout": timeout},
        )

        @event.listens_for(engine, "connect")
        def _disable_pysqlite_begin(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None

        @event.listens_for(engine, "begin")
        def _begin_immediate(conn):
            conn.exec_driver_sql("BEGIN IMMEDIATE")

        return engine

    # Connection pool: max 20 connections, recycle after 1 hour to avoid stale connections
    return create_engine(
        database_url,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_recycle=3600,
        connect_args={"options": f"-c lock_timeout={int(timeout * 1000)}"},
    )


engine = create_db_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind: Engine | None = None) -> None:
    """Create tables if they do not exist"""
    Base.metadata.create_all(bind=bind or engine)


def get_db() -> Iterator[Session]:
    """Dependency injection for database sessions"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction_scope(db: Session) -> Iterator[Session]:
    """
    Run a unit of work atomically on ``db``.

    Commits when the block exits normally. Any exception rolls back every
    write made in the block; database errors are re-raised as StorageError.
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error, transaction rolled back: {e}")
        raise StorageError("Storage temporarily unavailable") from e
    except BaseException:
        db.rollback()
        raise
