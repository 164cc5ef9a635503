"""Pytest fixtures for testing"""

import os

# Settings are read at import time; keep the module-level engine off PostgreSQL
os.environ.setdefault("DATABASE_URL", "sqlite:///./bank_ledger_test.db")

import pytest
from typing import Callable, Dict, Generator
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from bank_ledger.api.main import create_app
from bank_ledger.infrastructure.database.models import Base
from bank_ledger.infrastructure.database.session import create_db_engine, get_db
from bank_ledger.infrastructure.security.passwords import PasswordHasher
from bank_ledger.services.ledger import LedgerService


@pytest.fixture
def engine(tmp_path) -> Generator[Engine, None, None]:
    """File-backed SQLite database, fresh for every test"""
    engine = create_db_engine(f"sqlite:///{tmp_path / 'ledger.db'}", lock_timeout_seconds=30)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory: sessionmaker) -> Generator[Session, None, None]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session")
def hasher() -> PasswordHasher:
    return PasswordHasher()


@pytest.fixture
def service(db: Session, hasher: PasswordHasher) -> LedgerService:
    return LedgerService(db, hasher)


@pytest.fixture
def client(session_factory: sessionmaker) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def auth_headers(client: TestClient) -> Callable[..., Dict[str, str]]:
    """Register a user through the API and return bearer headers for it"""

    def _auth_headers(username: str, password: str = "secret-pw") -> Dict[str, str]:
        response = client.post(
            "/api/register",
            json={"username": username, "password": password, "email": f"{username}@example.com"},
        )
        assert response.status_code == 200, response.text
        token = client.post(
            "/api/login",
            json={"username": username, "password": password},
        ).json()["access_token"]
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
