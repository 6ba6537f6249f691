"""ReconcileLedger Use Case

Audits that each stored account balance equals the signed sum of the
account's ledger transactions. Nothing is written.
"""

import logging
import time
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.account_repository import AccountRepository
from src.app.repositories.ledger_transaction_repository import LedgerTransactionRepository
from src.domain.account import Account
from src.domain.base import utcnow
from .dtos import LedgerDiscrepancyDTO, ReconciliationResultDTO

logger = logging.getLogger(__name__)


class ReconcileLedger:
    def __init__(
        self,
        account_repo: AccountRepository,
        transaction_repo: LedgerTransactionRepository,
    ):
        self.account_repo = account_repo
        self.transaction_repo = transaction_repo

    async def _check(self, account: Account) -> Optional[LedgerDiscrepancyDTO]:
        ledger_total = await self.transaction_repo.get_sum_by_account(account.id)
        if account.balance == ledger_total:
            return None

        drift = account.balance - ledger_total
        logger.error(
            f"Account {account.id} balance {account.balance} "
            f"does not match ledger total {ledger_total} (drift {drift})"
        )
        return LedgerDiscrepancyDTO(
            account_id=account.id,
            account_balance=account.balance,
            calculated_balance=ledger_total,
            discrepancy=drift,
        )

    async def execute(self) -> Result[ReconciliationResultDTO]:
        started = time.perf_counter()
        audited_at = utcnow()

        try:
            accounts = await self.account_repo.get_all()
            logger.info(f"Auditing {len(accounts)} account balances against the ledger")

            discrepancies = []
            for account in accounts:
                mismatch = await self._check(account)
                if mismatch is not None:
                    discrepancies.append(mismatch)

            elapsed_ms = int((time.perf_counter() - started) * 1000)
            level = logging.WARNING if discrepancies else logging.INFO
            logger.log(
                level,
                f"Ledger audit finished in {elapsed_ms}ms: "
                f"{len(discrepancies)} of {len(accounts)} accounts mismatched",
            )

            return Return.ok(
                ReconciliationResultDTO(
                    total_accounts_checked=len(accounts),
                    discrepancies_found=len(discrepancies),
                    discrepancies=discrepancies,
                    reconciliation_time=audited_at,
                    execution_time_ms=elapsed_ms,
                )
            )

        except Exception as e:
            logger.error(f"Ledger audit failed: {e}")
            return Return.err(
                Error(
                    code="RECONCILIATION_FAILED",
                    message="Failed to reconcile ledger",
                    reason=str(e),
                )
            )
