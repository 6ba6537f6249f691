"""Ledger query and audit use cases"""
from .get_balance import GetBalance
from .list_transactions import ListTransactions
from .reconcile_ledger import ReconcileLedger
from .dtos import (
    BalanceResponseDTO,
    TransactionDTO,
    ListTransactionsResponseDTO,
    LedgerDiscrepancyDTO,
    ReconciliationResultDTO,
)

__all__ = [
    "GetBalance",
    "ListTransactions",
    "ReconcileLedger",
    "BalanceResponseDTO",
    "TransactionDTO",
    "ListTransactionsResponseDTO",
    "LedgerDiscrepancyDTO",
    "ReconciliationResultDTO",
]
