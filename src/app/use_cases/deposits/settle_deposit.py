"""Deposit settlement shared by the push (webhook) and pull (status check) paths"""

import logging
from decimal import Decimal
from libs.result import Result, Return, Error
from src.app import errors
from src.app.services.ledger import Ledger
from src.app.services.unit_of_work import UnitOfWork
from src.domain.ledger_transaction import TransactionType

logger = logging.getLogger(__name__)


def deposit_key(gateway_payment_id: str) -> str:
    return f"deposit:{gateway_payment_id}"


class SettleDeposit:
    """
    Credit a confirmed gateway payment exactly once

    The uniqueness of deposit:<paymentId> is checked by the store inside the
    same unit as the balance change. Whichever caller loses a push/pull race
    sees DUPLICATE_SETTLEMENT, rolls back and reports "already settled".
    """

    def __init__(self, uow: UnitOfWork, ledger: Ledger):
        self.uow = uow
        self.ledger = ledger

    async def execute(
        self,
        account_id: str,
        gateway_payment_id: str,
        value: Decimal,
        billing_type: str,
    ) -> Result[bool]:
        """
        Returns:
            Result[bool]: True when this call credited, False when the
            payment was already settled
        """
        try:
            result = await self.ledger.credit(
                account_id=account_id,
                amount=value,
                transaction_type=TransactionType.DEPOSIT,
                idempotency_key=deposit_key(gateway_payment_id),
                description=f"Deposit via {billing_type} - gateway #{gateway_payment_id}",
            )

            if result.is_err():
                await self.uow.rollback()
                if result.error.code == errors.DUPLICATE_SETTLEMENT:
                    logger.warning(f"Payment {gateway_payment_id} already settled, skipping")
                    return Return.ok(False)
                return result

            await self.uow.commit()
            logger.info(f"Deposit confirmed for account {account_id}: {value} (payment {gateway_payment_id})")
            return Return.ok(True)

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Deposit settlement failed for payment {gateway_payment_id}: {e}")
            return Return.err(
                Error(
                    code="SETTLE_DEPOSIT_FAILED",
                    message="Failed to settle deposit",
                    reason=str(e),
                )
            )
