"""JWT access tokens carrying the authenticated username"""

from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt
from bank_ledger.config import settings


class InvalidTokenError(Exception):
    """Token is malformed, expired, or signed with another key"""

    pass


def create_access_token(username: str, expires_minutes: int | None = None) -> str:
    """Issue a signed token whose ``sub`` claim is the username"""
    minutes = expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    exp = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    return jwt.encode({"sub": username, "exp": exp}, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> str:
    """
    Verify signature and expiry and return the username.

    Raises:
        InvalidTokenError: On any verification failure or missing subject
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise InvalidTokenError(str(e)) from e

    username = payload.get("sub")
    if not username:
        raise InvalidTokenError("Token has no subject")
    return username
