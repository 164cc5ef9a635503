"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from decimal import Decimal
from typing import List
from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Request body for POST /api/register"""

    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3, max_length=255)


class RegisterResponse(BaseModel):
    message: str
    username: str


class LoginRequest(BaseModel):
    """Request body for POST /api/login"""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class AmountRequest(BaseModel):
    """Request body for POST /api/deposit and /api/withdraw"""

    amount: Decimal = Field(..., description="Positive amount with at most 2 decimal places")


class TransferRequest(BaseModel):
    """Request body for POST /api/transfer"""

    model_config = ConfigDict(populate_by_name=True)

    to_username: str = Field(..., alias="toUsername", min_length=1)
    amount: Decimal = Field(..., description="Positive amount with at most 2 decimal places")


class BalanceResponse(BaseModel):
    """Result of a mutating operation: caller's balance afterwards"""

    message: str
    balance: Decimal


class AccountResponse(BaseModel):
    """Response for GET /api/account"""

    username: str
    balance: Decimal


class TransactionItem(BaseModel):
    """Single log entry"""

    id: int
    amount: Decimal
    type: str
    timestamp: datetime


class TransactionHistoryResponse(BaseModel):
    """Response for GET /api/transactions"""

    username: str
    transactions: List[TransactionItem]
