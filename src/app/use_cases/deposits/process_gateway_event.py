"""ProcessGatewayEvent Use Case

Push path of settlement: deposits confirmed and transfers completed.
"""

import logging
from libs.result import Result, Return, Error
from src.app.repositories.withdrawal_repository import WithdrawalRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.payment_reference import PaymentReference
from src.domain.withdrawal import WithdrawalStatus, can_transition
from .dtos import GatewayEventDTO, GatewayEventResultDTO
from .settle_deposit import SettleDeposit

logger = logging.getLogger(__name__)

DEPOSIT_CONFIRMED_EVENTS = {"PAYMENT_CONFIRMED", "PAYMENT_RECEIVED"}
TRANSFER_COMPLETED_EVENTS = {"TRANSFER_CONFIRMED", "TRANSFER_DONE"}


class ProcessGatewayEvent:
    """
    Use Case: Apply an asynchronous gateway event

    Business Rules:
    1. Missing or malformed external references are a logged no-op
    2. Deposit events credit the referenced account once per payment id
    3. Transfer events complete the referenced withdrawal (idempotent)
    4. Business no-ops still succeed; only unexpected failures return an error
    """

    def __init__(
        self,
        uow: UnitOfWork,
        withdrawal_repo: WithdrawalRepository,
        settle_deposit: SettleDeposit,
    ):
        self.uow = uow
        self.withdrawal_repo = withdrawal_repo
        self.settle_deposit = settle_deposit

    async def execute(self, event: GatewayEventDTO) -> Result[GatewayEventResultDTO]:
        subject = event.subject

        if not subject or not subject.external_reference:
            logger.warning(f"Gateway event {event.event} has no external reference, skipping")
            return self._done(event, "ignored")

        reference = PaymentReference.parse(subject.external_reference)
        if not reference:
            logger.warning(
                f"Gateway event {event.event} has an invalid external reference: "
                f"{subject.external_reference!r}"
            )
            return self._done(event, "ignored")

        if event.event in DEPOSIT_CONFIRMED_EVENTS and reference.is_deposit:
            return await self._settle_deposit(event, reference)

        if event.event in TRANSFER_COMPLETED_EVENTS and reference.is_withdrawal:
            return await self._complete_withdrawal(event, reference)

        logger.info(f"Gateway event {event.event} ({reference.type.value}) needs no action")
        return self._done(event, "ignored")

    async def _settle_deposit(
        self, event: GatewayEventDTO, reference: PaymentReference
    ) -> Result[GatewayEventResultDTO]:
        payment = event.subject
        result = await self.settle_deposit.execute(
            account_id=reference.user_id,
            gateway_payment_id=payment.id,
            value=payment.value,
            billing_type=payment.billing_type or "UNKNOWN",
        )

        if result.is_err():
            if result.error.code.endswith("_FAILED"):
                return result
            # Business rejection (unknown account, non-positive value)
            logger.warning(
                f"Deposit event for payment {payment.id} not applied: "
                f"{result.error.code} {result.error.message}"
            )
            return self._done(event, "ignored")

        return self._done(event, "deposit_credited" if result.value else "already_settled")

    async def _complete_withdrawal(
        self, event: GatewayEventDTO, reference: PaymentReference
    ) -> Result[GatewayEventResultDTO]:
        try:
            withdrawal = await self.withdrawal_repo.get_by_id(
                reference.withdrawal_id, for_update=True
            )

            if not withdrawal:
                logger.warning(f"Transfer event for unknown withdrawal {reference.withdrawal_id}")
                return self._done(event, "ignored")

            if withdrawal.status == WithdrawalStatus.COMPLETED:
                return self._done(event, "already_completed")

            if not can_transition(withdrawal.status, WithdrawalStatus.COMPLETED):
                logger.warning(
                    f"Transfer event for withdrawal {withdrawal.id} in status "
                    f"{withdrawal.status.value}, skipping"
                )
                return self._done(event, "ignored")

            withdrawal.status = WithdrawalStatus.COMPLETED
            withdrawal.processed_at = utcnow()
            if not withdrawal.gateway_transfer_id and event.subject:
                withdrawal.gateway_transfer_id = event.subject.id
            await self.withdrawal_repo.update(withdrawal)
            await self.uow.commit()

            logger.info(f"Withdrawal {withdrawal.id} completed")
            return self._done(event, "withdrawal_completed")

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to complete withdrawal {reference.withdrawal_id}: {e}")
            return Return.err(
                Error(
                    code="PROCESS_GATEWAY_EVENT_FAILED",
                    message="Failed to process gateway event",
                    reason=str(e),
                )
            )

    @staticmethod
    def _done(event: GatewayEventDTO, action: str) -> Result[GatewayEventResultDTO]:
        return Return.ok(GatewayEventResultDTO(event=event.event, action=action))
