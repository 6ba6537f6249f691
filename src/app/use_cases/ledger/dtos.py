"""Data Transfer Objects for Ledger Use Cases"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field


class BalanceResponseDTO(BaseModel):
    """Current account balance"""

    account_id: str = Field(..., description="Account identifier")
    balance: Decimal = Field(..., description="Current balance")
    last_updated: datetime = Field(..., description="Last balance update")

    class Config:
        json_schema_extra = {
            "example": {
                "account_id": "3f1c0a52-8f5e-4f44-9b3e-6a3f4a9b1d20",
                "balance": "150.00",
                "last_updated": "2025-11-27T10:29:21Z"
            }
        }


class TransactionDTO(BaseModel):
    """Single ledger transaction in a listing"""

    id: str
    transaction_type: str
    amount: Decimal = Field(..., description="Signed amount (credits positive)")
    balance_before: Decimal
    balance_after: Decimal
    order_id: Optional[str] = None
    description: Optional[str] = None
    created_at: datetime


class ListTransactionsResponseDTO(BaseModel):
    transactions: List[TransactionDTO]
    total: int = Field(..., description="Total transactions for the account")
    limit: int
    offset: int


class LedgerDiscrepancyDTO(BaseModel):
    """Account whose balance does not match its transaction sum"""

    account_id: str
    account_balance: Decimal = Field(..., description="Balance stored on the account")
    calculated_balance: Decimal = Field(..., description="Sum of transaction amounts")
    discrepancy: Decimal = Field(..., description="account_balance - calculated_balance")


class ReconciliationResultDTO(BaseModel):
    total_accounts_checked: int
    discrepancies_found: int
    discrepancies: List[LedgerDiscrepancyDTO]
    reconciliation_time: datetime
    execution_time_ms: int
