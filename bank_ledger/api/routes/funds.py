"""POST /api/deposit, /api/withdraw, /api/transfer - balance mutations"""

import time
from fastapi import APIRouter, Depends, Request

from bank_ledger.api.dependencies import get_current_username, get_ledger_service, get_request_id
from bank_ledger.api.errors import internal_error, to_http_exception
from bank_ledger.api.routes.schemas import AmountRequest, BalanceResponse, TransferRequest
from bank_ledger.domain.exceptions import LedgerError
from bank_ledger.infrastructure.observability.logging import log_operation
from bank_ledger.infrastructure.observability.metrics import record_operation
from bank_ledger.services.ledger import LedgerService

router = APIRouter()


@router.post("/deposit", response_model=BalanceResponse)
def deposit(
    request_body: AmountRequest,
    request: Request,
    username: str = Depends(get_current_username),
    service: LedgerService = Depends(get_ledger_service),
):
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        balance = service.deposit(username, request_body.amount)
    except LedgerError as e:
        raise to_http_exception(e, "deposit", request_id) from e
    except Exception as e:
        raise internal_error(e, "deposit", request_id) from e

    record_operation("deposit", "success", request_body.amount)
    log_operation(request_id, username, "deposit", request_body.amount, (time.time() - start_time) * 1000)
    return BalanceResponse(message="Deposit successful", balance=balance)


@router.post("/withdraw", response_model=BalanceResponse)
def withdraw(
    request_body: AmountRequest,
    request: Request,
    username: str = Depends(get_current_username),
    service: LedgerService = Depends(get_ledger_service),
):
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        balance = service.withdraw(username, request_body.amount)
    except LedgerError as e:
        raise to_http_exception(e, "withdraw", request_id) from e
    except Exception as e:
        raise internal_error(e, "withdraw", request_id) from e

    record_operation("withdraw", "success", request_body.amount)
    log_operation(request_id, username, "withdraw", request_body.amount, (time.time() - start_time) * 1000)
    return BalanceResponse(message="Withdrawal successful", balance=balance)


@router.post("/transfer", response_model=BalanceResponse)
def transfer(
    request_body: TransferRequest,
    request: Request,
    username: str = Depends(get_current_username),
    service: LedgerService = Depends(get_ledger_service),
):
    """
    Move funds from the caller to another account.

    The source is always the authenticated caller; the body only names the
    recipient. Returns the caller's balance after the transfer.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        balance = service.transfer(username, request_body.to_username, request_body.amount)
    except LedgerError as e:
        raise to_http_exception(e, "transfer", request_id) from e
    except Exception as e:
        raise internal_error(e, "transfer", request_id) from e

    record_operation("transfer", "success", request_body.amount)
    log_operation(
        request_id,
        username,
        "transfer",
        request_body.amount,
        (time.time() - start_time) * 1000,
        counterparty=request_body.to_username,
    )
    return BalanceResponse(message="Transfer successful", balance=balance)
