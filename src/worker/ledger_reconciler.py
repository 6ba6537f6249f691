"""Periodic audit of the settlement ledger.

For every account the worker compares the stored balance with the signed sum
of its ledger transactions and reports accounts where the two disagree. It
only reads; fixing a drifted balance is an operator decision.

Run it next to the API:

    python -m src.worker.ledger_reconciler --once
    python -m src.worker.ledger_reconciler --interval 3600
"""

import asyncio
import logging
from typing import List, Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories import (
    SqlAlchemyAccountRepository,
    SqlAlchemyLedgerTransactionRepository,
)
from src.app.use_cases.ledger import ReconcileLedger, ReconciliationResultDTO
from src.domain.base import utcnow

logger = logging.getLogger(__name__)


def format_report(report: ReconciliationResultDTO) -> List[str]:
    lines = [
        f"Accounts audited: {report.total_accounts_checked}",
        f"Mismatched balances: {report.discrepancies_found}",
        f"Took {report.execution_time_ms}ms",
    ]
    for item in report.discrepancies:
        lines.append(
            f"  {item.account_id}: stored {item.account_balance}, "
            f"ledger {item.calculated_balance} (off by {item.discrepancy})"
        )
    return lines


class LedgerReconcilerWorker:
    """Owns its own engine so it can run as a separate process from the API."""

    def __init__(self, db_uri: Optional[str] = None, enabled: Optional[bool] = None):
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        if enabled is None:
            enabled = ApplicationConfig.RECONCILIATION_ENABLED
        self.enabled = enabled

        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )
        logger.info(f"Ledger audit worker ready (enabled={self.enabled})")

    @staticmethod
    def _empty_report() -> ReconciliationResultDTO:
        return ReconciliationResultDTO(
            total_accounts_checked=0,
            discrepancies_found=0,
            discrepancies=[],
            reconciliation_time=utcnow(),
            execution_time_ms=0,
        )

    async def run_once(self) -> ReconciliationResultDTO:
        """Audit every account once.

        Raises RuntimeError when the audit itself could not complete, so a
        scheduler sees a failed run instead of a clean report.
        """
        if not self.enabled:
            logger.info("Ledger audit disabled by configuration")
            return self._empty_report()

        async with self.async_session_factory() as session:
            audit = ReconcileLedger(
                account_repo=SqlAlchemyAccountRepository(session),
                transaction_repo=SqlAlchemyLedgerTransactionRepository(session),
            )
            result = await audit.execute()

        if result.is_err():
            logger.error(f"Ledger audit aborted: {result.error.reason}")
            raise RuntimeError(f"Reconciliation failed: {result.error.message}")

        report = result.value
        for item in report.discrepancies:
            logger.error(
                f"Balance drift on account {item.account_id}: "
                f"stored={item.account_balance} ledger={item.calculated_balance}"
            )
        return report

    async def run_forever(self, interval_seconds: int):
        logger.info(f"Ledger audit loop started, every {interval_seconds}s")
        while True:
            try:
                report = await self.run_once()
            except Exception as e:
                logger.exception(f"Ledger audit cycle failed: {e}")
            else:
                logger.info(
                    f"Audited {report.total_accounts_checked} accounts, "
                    f"{report.discrepancies_found} mismatched"
                )
            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        await self.engine.dispose()
        logger.info("Ledger audit worker stopped")


async def main():
    import argparse

    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Audit account balances against the ledger")
    parser.add_argument("--once", action="store_true", help="audit a single time and exit")
    parser.add_argument(
        "--interval",
        type=int,
        default=ApplicationConfig.RECONCILIATION_INTERVAL_SECONDS,
        help="seconds between audits when looping",
    )
    args = parser.parse_args()

    worker = LedgerReconcilerWorker()
    try:
        if args.once:
            report = await worker.run_once()
            print("\n".join(format_report(report)))
        else:
            await worker.run_forever(args.interval)
    except KeyboardInterrupt:
        logger.info("Interrupted")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
