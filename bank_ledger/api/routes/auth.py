"""POST /api/register and POST /api/login"""

from fastapi import APIRouter, Depends, Request

from bank_ledger.api.dependencies import get_ledger_service, get_request_id
from bank_ledger.api.errors import internal_error, to_http_exception
from bank_ledger.api.routes.schemas import LoginRequest, RegisterRequest, RegisterResponse, TokenResponse
from bank_ledger.domain.exceptions import LedgerError
from bank_ledger.infrastructure.observability.metrics import record_operation
from bank_ledger.infrastructure.security.tokens import create_access_token
from bank_ledger.services.ledger import LedgerService

router = APIRouter()


@router.post("/register", response_model=RegisterResponse)
def register(
    request_body: RegisterRequest,
    request: Request,
    service: LedgerService = Depends(get_ledger_service),
):
    """Create an account with a zero balance. No authentication required."""
    try:
        account = service.register(request_body.username, request_body.password, request_body.email)
    except LedgerError as e:
        raise to_http_exception(e, "register", get_request_id(request)) from e
    except Exception as e:
        raise internal_error(e, "register", get_request_id(request)) from e

    record_operation("register", "success")
    return RegisterResponse(message="Account created successfully", username=account.username)


@router.post("/login", response_model=TokenResponse)
def login(
    request_body: LoginRequest,
    request: Request,
    service: LedgerService = Depends(get_ledger_service),
):
    """Exchange username/password for a bearer token"""
    try:
        account = service.authenticate(request_body.username, request_body.password)
    except LedgerError as e:
        raise to_http_exception(e, "login", get_request_id(request)) from e
    except Exception as e:
        raise internal_error(e, "login", get_request_id(request)) from e

    record_operation("login", "success")
    return TokenResponse(access_token=create_access_token(account.username))
