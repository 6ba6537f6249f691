"""CreateDeposit Use Case

Creates a gateway payment that, once paid, is credited to the actor's account.
"""

import logging
from libs.result import Result, Return, Error
from src.app import errors
from src.app.actor import ActorContext
from src.app.repositories.account_repository import AccountRepository
from src.app.services.payment_gateway import PaymentGateway
from .dtos import CreateDepositCommandDTO, DepositResponseDTO

logger = logging.getLogger(__name__)


class CreateDeposit:
    """
    Use Case: Create a deposit intent

    Nothing is written to the ledger here. The balance is credited later by
    the webhook or a status check once the gateway confirms the payment.
    Gateway failures fail the whole request.
    """

    def __init__(self, account_repo: AccountRepository, gateway: PaymentGateway):
        self.account_repo = account_repo
        self.gateway = gateway

    async def execute(
        self, actor: ActorContext, command: CreateDepositCommandDTO
    ) -> Result[DepositResponseDTO]:
        """
        Errors:
            ACCOUNT_NOT_FOUND
            INVALID_AMOUNT: below the gateway minimum
            GATEWAY_UNAVAILABLE / GATEWAY_REJECTED
        """
        account = await self.account_repo.get_by_id(actor.account_id)
        if not account:
            return Return.err(
                Error(
                    code=errors.ACCOUNT_NOT_FOUND,
                    message=f"Account {actor.account_id} not found",
                )
            )

        result = await self.gateway.create_deposit(
            account=account,
            amount=command.amount,
            billing_type=command.billing_type,
            tax_id=command.tax_id,
        )
        if result.is_err():
            logger.warning(
                f"Deposit creation failed for account {account.id}: {result.error.code}"
            )
            return result

        intent = result.value
        logger.info(
            f"Deposit {intent.gateway_payment_id} created for account {account.id}: "
            f"{intent.value} via {intent.billing_type}"
        )

        return Return.ok(
            DepositResponseDTO(
                payment_id=intent.gateway_payment_id,
                status=intent.status,
                billing_type=intent.billing_type,
                value=intent.value,
                due_date=intent.due_date,
                invoice_url=intent.invoice_url,
                bank_slip_url=intent.bank_slip_url,
                pix_qr_code=intent.pix_qr_code,
                pix_copy_paste=intent.pix_copy_paste,
            )
        )
