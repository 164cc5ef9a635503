"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from bank_ledger.infrastructure.database.session import get_db
from bank_ledger.infrastructure.security.passwords import PasswordHasher
from bank_ledger.infrastructure.security.tokens import InvalidTokenError, decode_access_token
from bank_ledger.services.ledger import LedgerService

bearer_scheme = HTTPBearer(auto_error=False)

password_hasher = PasswordHasher()


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_password_hasher() -> PasswordHasher:
    return password_hasher


def get_ledger_service(
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> LedgerService:
    """Provide a ledger service bound to the request's session"""
    return LedgerService(db, hasher)


def get_current_username(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Verified caller identity from the bearer token"""
    if credentials is None:
        raise HTTPException(status_code=401, detail="Missing token", headers={"WWW-Authenticate": "Bearer"})
    try:
        return decode_access_token(credentials.credentials)
    except InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid token", headers={"WWW-Authenticate": "Bearer"})
