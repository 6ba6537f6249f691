"""RequestWithdrawal Use Case

Debits the seller, credits the platform fee, and asks the gateway to pay out.
"""

import logging
from decimal import Decimal
from libs.result import Result, Return, Error
from src.app import errors
from src.app.actor import ActorContext
from src.app.repositories.account_repository import AccountRepository
from src.app.repositories.seller_repository import SellerRepository
from src.app.repositories.withdrawal_repository import WithdrawalRepository
from src.app.services.ledger import Ledger, Posting
from src.app.services.payment_gateway import PaymentGateway
from src.app.services.unit_of_work import UnitOfWork
from src.domain.account import Account
from src.domain.ledger_transaction import TransactionType
from src.domain.money import to_money
from src.domain.payment_reference import PaymentReference
from src.domain.withdrawal import Withdrawal, WithdrawalStatus
from .dtos import RequestWithdrawalCommandDTO, WithdrawalResponseDTO

logger = logging.getLogger(__name__)


class RequestWithdrawal:
    """
    Use Case: Seller withdrawal with fee split

    Business Rules:
    1. gross >= minimum withdrawal amount
    2. Only sellers may withdraw
    3. Balance is checked against the gross amount
    4. net = gross * (1 - fee_rate) rounded to cents, fee = gross - net
    5. Seller debit, platform fee credit and the PENDING withdrawal commit together
    6. The gateway transfer is best effort: success moves the withdrawal to
       APPROVED, failure leaves it PENDING. The ledger debit is never undone.

    Flow:
    1. Validate amount, seller registration and balance
    2. Ensure the platform revenue account exists
    3. Create withdrawal, post both ledger legs, commit
    4. Request the transfer, record the outcome in a second commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        account_repo: AccountRepository,
        seller_repo: SellerRepository,
        withdrawal_repo: WithdrawalRepository,
        ledger: Ledger,
        gateway: PaymentGateway,
        platform_account_id: str,
        platform_account_email: str = "platform@localhost",
        min_amount: Decimal = Decimal("10.00"),
        fee_rate: Decimal = Decimal("0.05"),
    ):
        self.uow = uow
        self.account_repo = account_repo
        self.seller_repo = seller_repo
        self.withdrawal_repo = withdrawal_repo
        self.ledger = ledger
        self.gateway = gateway
        self.platform_account_id = platform_account_id
        self.platform_account_email = platform_account_email
        self.min_amount = to_money(min_amount)
        self.fee_rate = Decimal(str(fee_rate))

    async def execute(
        self, actor: ActorContext, command: RequestWithdrawalCommandDTO
    ) -> Result[WithdrawalResponseDTO]:
        """
        Errors:
            INVALID_AMOUNT: below the minimum withdrawal
            NOT_A_SELLER: the actor has no seller registration
            INSUFFICIENT_BALANCE: balance below the gross amount
        """
        gross = to_money(command.amount)

        if gross < self.min_amount:
            return Return.err(
                Error(
                    code=errors.INVALID_AMOUNT,
                    message=f"Minimum withdrawal is {self.min_amount}",
                    reason=f"amount={gross}",
                )
            )

        seller = await self.seller_repo.get_by_account_id(actor.account_id)
        if not seller:
            return Return.err(
                Error(
                    code=errors.NOT_A_SELLER,
                    message="Only sellers can request withdrawals",
                )
            )

        account = await self.account_repo.get_by_id(actor.account_id)
        if not account:
            return Return.err(
                Error(
                    code=errors.ACCOUNT_NOT_FOUND,
                    message=f"Account {actor.account_id} not found",
                )
            )

        if account.balance < gross:
            return Return.err(
                Error(
                    code=errors.INSUFFICIENT_BALANCE,
                    message=f"Insufficient balance. Required: {gross}, Available: {account.balance}",
                    reason=f"balance={account.balance}, required={gross}",
                )
            )

        net = to_money(gross * (1 - self.fee_rate))
        fee = gross - net

        try:
            await self._ensure_platform_account()

            withdrawal = await self.withdrawal_repo.create(
                Withdrawal(
                    seller_id=seller.id,
                    account_id=actor.account_id,
                    amount=net,
                    gross_amount=gross,
                    fee_amount=fee,
                    status=WithdrawalStatus.PENDING,
                    destination_key=command.destination_key,
                    destination_key_type=command.destination_key_type,
                )
            )

            postings = [
                Posting(
                    account_id=actor.account_id,
                    amount=-gross,
                    transaction_type=TransactionType.WITHDRAWAL,
                    idempotency_key=f"withdrawal:{withdrawal.id}",
                    description=f"Withdrawal {withdrawal.id} - net {net}, fee {fee}",
                ),
            ]
            if fee > 0:
                postings.append(
                    Posting(
                        account_id=self.platform_account_id,
                        amount=fee,
                        transaction_type=TransactionType.FEE,
                        idempotency_key=f"fee:{withdrawal.id}",
                        description=f"Withdrawal fee - withdrawal {withdrawal.id}",
                    )
                )

            post_result = await self.ledger.post(postings)
            if post_result.is_err():
                await self.uow.rollback()
                return post_result

            seller_debit = post_result.value[0]
            await self.uow.commit()

            logger.info(
                f"Withdrawal {withdrawal.id} requested by seller {seller.id}: "
                f"gross={gross}, fee={fee}, net={net}"
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="REQUEST_WITHDRAWAL_FAILED",
                    message="Failed to request withdrawal",
                    reason=str(e),
                )
            )

        withdrawal = await self._request_transfer(withdrawal, seller.id)

        return Return.ok(WithdrawalResponseDTO.from_entity(withdrawal, seller_debit.balance_after))

    async def _ensure_platform_account(self) -> Account:
        account = await self.account_repo.get_by_id(self.platform_account_id)
        if account:
            return account

        logger.info(f"Creating platform revenue account {self.platform_account_id}")
        return await self.account_repo.create(
            Account(
                id=self.platform_account_id,
                username="platform",
                email=self.platform_account_email,
                balance=Decimal("0.00"),
            )
        )

    async def _request_transfer(self, withdrawal: Withdrawal, seller_id: str) -> Withdrawal:
        """Best effort: any failure leaves the withdrawal PENDING for manual resolution"""
        transfer_result = await self.gateway.create_transfer(
            amount=withdrawal.amount,
            destination_key=withdrawal.destination_key,
            destination_key_type=withdrawal.destination_key_type,
            reference=PaymentReference.for_withdrawal(withdrawal.id, seller_id),
            description=f"Withdrawal {withdrawal.id}",
        )

        if transfer_result.is_err() or not transfer_result.value.accepted:
            reason = transfer_result.error.code if transfer_result.is_err() else "not accepted"
            logger.warning(
                f"Transfer for withdrawal {withdrawal.id} failed ({reason}), "
                f"left pending for manual approval"
            )
            return withdrawal

        receipt = transfer_result.value
        try:
            # A transfer webhook may already have completed it
            current = await self.withdrawal_repo.get_by_id(withdrawal.id, for_update=True)
            if current.status == WithdrawalStatus.PENDING:
                current.status = WithdrawalStatus.APPROVED
            current.gateway_transfer_id = current.gateway_transfer_id or receipt.gateway_transfer_id
            await self.withdrawal_repo.update(current)
            await self.uow.commit()

            logger.info(
                f"Withdrawal {withdrawal.id} {current.status.value}, "
                f"transfer {receipt.gateway_transfer_id}"
            )
            return current

        except Exception as e:
            await self.uow.rollback()
            logger.error(
                f"Transfer {receipt.gateway_transfer_id} accepted but withdrawal "
                f"{withdrawal.id} could not be updated: {e}"
            )
            return withdrawal
