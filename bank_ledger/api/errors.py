"""Translation of ledger exceptions into HTTP responses"""

import logging
from fastapi import HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from bank_ledger.domain.exceptions import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    InsufficientFundsError,
    InvalidCredentialsError,
    InvalidInputError,
    LedgerError,
    StorageError,
)
from bank_ledger.infrastructure.observability.metrics import record_operation

STATUS_CODES = [
    (AccountAlreadyExistsError, 409),
    (AccountNotFoundError, 404),
    (InsufficientFundsError, 422),
    (InvalidInputError, 400),
    (InvalidCredentialsError, 401),
    (StorageError, 503),
]


def status_for(error: LedgerError) -> int:
    for error_type, status_code in STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return 500


def to_http_exception(error: LedgerError, operation: str, request_id: str) -> HTTPException:
    """Record the failure and build the client-facing exception"""
    status_code = status_for(error)

    if isinstance(error, StorageError):
        record_operation(operation, "error")
        logging.error(f"{operation} failed: {error}", extra={"request_id": request_id})
        return HTTPException(status_code=status_code, detail="Storage temporarily unavailable, retry later")

    record_operation(operation, "rejected")
    logging.warning(f"{operation} rejected: {error}", extra={"request_id": request_id})

    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return HTTPException(status_code=status_code, detail=str(error), headers=headers)


def internal_error(error: Exception, operation: str, request_id: str) -> HTTPException:
    """Record an unexpected failure; details stay in the log"""
    record_operation(operation, "error")
    logging.error(f"Unexpected error in {operation}: {error}", extra={"request_id": request_id})
    return HTTPException(status_code=500, detail="Internal server error")


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and missing fields are invalid input: 400, same as bad amounts"""
    logging.warning(
        "Request validation failed",
        extra={"request_id": getattr(request.state, "request_id", "unknown"), "path": request.url.path},
    )
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})
