"""Background workers"""
from .ledger_reconciler import LedgerReconcilerWorker

__all__ = ["LedgerReconcilerWorker"]
