"""CreateOrder Use Case

Debits the buyer and records the order in one atomic unit.
"""

import logging
from decimal import Decimal
from libs.result import Result, Return, Error
from src.app import errors
from src.app.actor import ActorContext
from src.app.repositories.account_repository import AccountRepository
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.seller_repository import SellerRepository
from src.app.services.ledger import Ledger
from src.app.services.unit_of_work import UnitOfWork
from src.domain.ledger_transaction import TransactionType
from src.domain.money import to_money
from src.domain.order import Order, OrderStatus
from .dtos import CreateOrderCommandDTO, OrderResponseDTO, PurchaseResponseDTO

logger = logging.getLogger(__name__)

UNITS_PER_PRICE = Decimal(1000)


class CreateOrder:
    """
    Use Case: Buy in-game currency from a seller

    Business Rules:
    1. quantity must be within [seller.min_amount, seller.max_amount]
    2. total = quantity / 1000 * seller.price_per_1k, rounded to cents
    3. Buyer balance must cover the total
    4. Order (PENDING) and buyer debit (kind=purchase) commit together
    5. The seller is not credited here; see UpdateOrderStatus
    """

    def __init__(
        self,
        uow: UnitOfWork,
        account_repo: AccountRepository,
        seller_repo: SellerRepository,
        order_repo: OrderRepository,
        ledger: Ledger,
    ):
        self.uow = uow
        self.account_repo = account_repo
        self.seller_repo = seller_repo
        self.order_repo = order_repo
        self.ledger = ledger

    async def execute(
        self, actor: ActorContext, command: CreateOrderCommandDTO
    ) -> Result[PurchaseResponseDTO]:
        """
        Errors:
            SELLER_NOT_FOUND
            INVALID_QUANTITY: outside the seller's limits, or a total that rounds to zero
            INSUFFICIENT_BALANCE
        """
        seller = await self.seller_repo.get_by_id(command.seller_id)
        if not seller:
            return Return.err(
                Error(
                    code=errors.SELLER_NOT_FOUND,
                    message=f"Seller {command.seller_id} not found",
                )
            )

        if not seller.accepts_quantity(command.quantity):
            return Return.err(
                Error(
                    code=errors.INVALID_QUANTITY,
                    message=f"Quantity must be between {seller.min_amount} and {seller.max_amount}",
                    reason=f"quantity={command.quantity}",
                )
            )

        total = to_money(Decimal(command.quantity) / UNITS_PER_PRICE * seller.price_per_1k)
        if total <= 0:
            return Return.err(
                Error(
                    code=errors.INVALID_QUANTITY,
                    message="Order total rounds to zero, request a larger quantity",
                    reason=f"quantity={command.quantity}, price_per_1k={seller.price_per_1k}",
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

        if account.balance < total:
            return Return.err(
                Error(
                    code=errors.INSUFFICIENT_BALANCE,
                    message=f"Insufficient balance. Required: {total}, Available: {account.balance}",
                    reason=f"balance={account.balance}, required={total}",
                )
            )

        try:
            order = await self.order_repo.create(
                Order(
                    buyer_id=actor.account_id,
                    seller_id=seller.id,
                    quantity=command.quantity,
                    total_price=total,
                    delivery_method=command.delivery_method,
                    status=OrderStatus.PENDING,
                )
            )

            # The ledger re-checks the balance atomically; the read above may be stale
            debit_result = await self.ledger.debit(
                account_id=actor.account_id,
                amount=total,
                transaction_type=TransactionType.PURCHASE,
                idempotency_key=f"purchase:{order.id}",
                description=f"Purchase of {command.quantity} units - order #{order.id}",
                order_id=order.id,
            )
            if debit_result.is_err():
                await self.uow.rollback()
                return debit_result

            await self.uow.commit()

            logger.info(
                f"Order {order.id} created: buyer={actor.account_id}, seller={seller.id}, "
                f"quantity={command.quantity}, total={total}"
            )

            return Return.ok(
                PurchaseResponseDTO(
                    order=OrderResponseDTO.from_entity(order),
                    balance_after=debit_result.value.balance_after,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_ORDER_FAILED",
                    message="Failed to create order",
                    reason=str(e),
                )
            )
