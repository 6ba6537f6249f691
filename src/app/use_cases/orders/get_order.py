"""Get Order Use Case"""

from libs.result import Result, Return, Error
from src.app import errors
from src.app.actor import ActorContext
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.seller_repository import SellerRepository
from .dtos import OrderResponseDTO


class GetOrder:
    """Read an order; visible to its buyer, its seller and admins"""

    def __init__(self, order_repo: OrderRepository, seller_repo: SellerRepository):
        self.order_repo = order_repo
        self.seller_repo = seller_repo

    async def execute(self, actor: ActorContext, order_id: str) -> Result[OrderResponseDTO]:
        order = await self.order_repo.get_by_id(order_id)
        if not order:
            return Return.err(
                Error(
                    code=errors.ORDER_NOT_FOUND,
                    message=f"Order {order_id} not found",
                )
            )

        if not actor.is_admin and order.buyer_id != actor.account_id:
            seller = await self.seller_repo.get_by_id(order.seller_id)
            if not seller or seller.account_id != actor.account_id:
                return Return.err(
                    Error(
                        code=errors.UNAUTHORIZED,
                        message="Not allowed to view this order",
                    )
                )

        return Return.ok(OrderResponseDTO.from_entity(order))
