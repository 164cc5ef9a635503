"""GET /api/account and GET /api/transactions - read the caller's account"""

from fastapi import APIRouter, Depends, Query, Request

from bank_ledger.api.dependencies import get_current_username, get_ledger_service, get_request_id
from bank_ledger.api.errors import internal_error, to_http_exception
from bank_ledger.api.routes.schemas import AccountResponse, TransactionHistoryResponse, TransactionItem
from bank_ledger.domain.exceptions import LedgerError
from bank_ledger.services.ledger import LedgerService

router = APIRouter()


@router.get("/account", response_model=AccountResponse)
def get_account(
    request: Request,
    username: str = Depends(get_current_username),
    service: LedgerService = Depends(get_ledger_service),
):
    try:
        balance = service.get_balance(username)
    except LedgerError as e:
        raise to_http_exception(e, "balance", get_request_id(request)) from e
    except Exception as e:
        raise internal_error(e, "balance", get_request_id(request)) from e

    return AccountResponse(username=username, balance=balance)


@router.get("/transactions", response_model=TransactionHistoryResponse)
def get_transactions(
    request: Request,
    limit: int = Query(50, ge=1, le=500, description="Max entries to return"),
    username: str = Depends(get_current_username),
    service: LedgerService = Depends(get_ledger_service),
):
    """
    Retrieve the caller's transaction log, newest first.

    Debits (WITHDRAWAL, TRANSFER_OUT) carry negative amounts.
    """
    try:
        records = service.list_transactions(username, limit=limit)
    except LedgerError as e:
        raise to_http_exception(e, "history", get_request_id(request)) from e
    except Exception as e:
        raise internal_error(e, "history", get_request_id(request)) from e

    return TransactionHistoryResponse(
        username=username,
        transactions=[
            TransactionItem(id=r.id, amount=r.amount, type=r.type.value, timestamp=r.timestamp)
            for r in records
        ],
    )
