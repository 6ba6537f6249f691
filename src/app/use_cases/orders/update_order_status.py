"""UpdateOrderStatus Use Case

Moves an order through its status table. Completion settles the sale.
"""

import logging
from libs.result import Result, Return, Error
from src.app import errors
from src.app.actor import ActorContext
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.seller_repository import SellerRepository
from src.app.services.ledger import Ledger
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.ledger_transaction import TransactionType
from src.domain.order import ADMIN_ONLY_SOURCES, OrderStatus, can_transition
from .dtos import OrderResponseDTO, UpdateOrderStatusCommandDTO

logger = logging.getLogger(__name__)


class UpdateOrderStatus:
    """
    Use Case: Change order status

    Business Rules:
    1. Only the order's seller or an admin may change status
    2. Only transitions in ORDER_TRANSITIONS are allowed
    3. Leaving DISPUTED is admin-only
    4. Entering COMPLETED credits the seller's account total_price
       (kind=sale, once per order), increments total_sales and stamps
       completed_at, all in the same unit as the status change
    5. Cancelling does not refund the buyer
    """

    def __init__(
        self,
        uow: UnitOfWork,
        seller_repo: SellerRepository,
        order_repo: OrderRepository,
        ledger: Ledger,
    ):
        self.uow = uow
        self.seller_repo = seller_repo
        self.order_repo = order_repo
        self.ledger = ledger

    async def execute(
        self,
        actor: ActorContext,
        order_id: str,
        command: UpdateOrderStatusCommandDTO,
    ) -> Result[OrderResponseDTO]:
        """
        Errors:
            ORDER_NOT_FOUND
            UNAUTHORIZED: actor is neither the seller nor an admin
            INVALID_STATUS_TRANSITION
        """
        try:
            order = await self.order_repo.get_by_id(order_id, for_update=True)
            if not order:
                return Return.err(
                    Error(
                        code=errors.ORDER_NOT_FOUND,
                        message=f"Order {order_id} not found",
                    )
                )

            seller = await self.seller_repo.get_by_id(order.seller_id, for_update=True)
            is_seller = seller is not None and seller.account_id == actor.account_id

            if not (is_seller or actor.is_admin):
                return Return.err(
                    Error(
                        code=errors.UNAUTHORIZED,
                        message="Only the seller or an admin can change the order status",
                    )
                )

            new_status = command.status
            if not can_transition(order.status, new_status):
                return Return.err(
                    Error(
                        code=errors.INVALID_STATUS_TRANSITION,
                        message=f"Cannot change order from {order.status.value} to {new_status.value}",
                    )
                )

            if order.status in ADMIN_ONLY_SOURCES and not actor.is_admin:
                return Return.err(
                    Error(
                        code=errors.UNAUTHORIZED,
                        message=f"Only an admin can resolve a {order.status.value} order",
                    )
                )

            if new_status == OrderStatus.COMPLETED:
                credit_result = await self.ledger.credit(
                    account_id=seller.account_id,
                    amount=order.total_price,
                    transaction_type=TransactionType.SALE,
                    idempotency_key=f"sale:{order.id}",
                    description=f"Sale of {order.quantity} units - order #{order.id}",
                    order_id=order.id,
                )
                if credit_result.is_err():
                    await self.uow.rollback()
                    if credit_result.error.code == errors.DUPLICATE_SETTLEMENT:
                        return Return.err(
                            Error(
                                code=errors.INVALID_STATUS_TRANSITION,
                                message=f"Order {order.id} is already completed",
                            )
                        )
                    return credit_result

                seller.total_sales += 1
                await self.seller_repo.update(seller)
                order.completed_at = utcnow()

            previous = order.status
            order.status = new_status
            await self.order_repo.update(order)
            await self.uow.commit()

            logger.info(
                f"Order {order.id} moved {previous.value} -> {new_status.value} "
                f"by {actor.account_id}"
            )
            return Return.ok(OrderResponseDTO.from_entity(order))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_ORDER_STATUS_FAILED",
                    message="Failed to update order status",
                    reason=str(e),
                )
            )
