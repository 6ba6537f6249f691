"""CheckDepositStatus Use Case

Pull path of deposit settlement: fetch live status and credit if confirmed.
"""

import logging
from libs.result import Result, Return
from src.app.actor import ActorContext
from src.app.services.payment_gateway import PaymentGateway
from src.domain.payment_reference import PaymentReference
from .dtos import DepositStatusResponseDTO
from .settle_deposit import SettleDeposit

logger = logging.getLogger(__name__)


class CheckDepositStatus:
    """
    Use Case: Check a deposit and settle it when confirmed

    Business Rules:
    1. Only CONFIRMED / RECEIVED payments are credited
    2. Only deposit references owned by the actor are credited
    3. Safe to call repeatedly and concurrently with the webhook
    """

    def __init__(self, gateway: PaymentGateway, settle_deposit: SettleDeposit):
        self.gateway = gateway
        self.settle_deposit = settle_deposit

    async def execute(
        self, actor: ActorContext, gateway_payment_id: str
    ) -> Result[DepositStatusResponseDTO]:
        """
        Errors:
            PAYMENT_NOT_FOUND
            GATEWAY_UNAVAILABLE
        """
        status_result = await self.gateway.fetch_payment_status(gateway_payment_id)
        if status_result.is_err():
            return status_result
        payment = status_result.value

        credited = False
        if payment.is_confirmed:
            reference = PaymentReference.parse(payment.external_reference)

            if reference and reference.is_deposit and reference.user_id == actor.account_id:
                settle_result = await self.settle_deposit.execute(
                    account_id=actor.account_id,
                    gateway_payment_id=payment.gateway_payment_id,
                    value=payment.value,
                    billing_type=payment.billing_type,
                )
                if settle_result.is_err():
                    return settle_result
                credited = settle_result.value
            else:
                logger.warning(
                    f"Payment {gateway_payment_id} is not a deposit of account {actor.account_id}, "
                    f"not crediting"
                )

        return Return.ok(
            DepositStatusResponseDTO(
                payment_id=payment.gateway_payment_id,
                status=payment.status,
                value=payment.value,
                billing_type=payment.billing_type,
                confirmed_date=payment.confirmed_date,
                credited=credited,
            )
        )
