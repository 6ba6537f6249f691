"""
List Orders Use Case

Order history for buyers, incoming orders for sellers, everything for admins.
"""
from typing import Optional
from libs.result import Result, Return, Error
from src.app import errors
from src.app.actor import ActorContext
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.seller_repository import SellerRepository
from src.domain.order import OrderStatus
from .dtos import ListOrdersResponseDTO, OrderResponseDTO, OrderScope


class ListOrders:
    """
    Use case: Page through orders visible to the actor, newest first

    The scope decides the filter; it is never taken from a client-supplied id.
    """

    def __init__(self, order_repo: OrderRepository, seller_repo: SellerRepository):
        self.order_repo = order_repo
        self.seller_repo = seller_repo

    async def execute(
        self,
        actor: ActorContext,
        scope: OrderScope = OrderScope.BUYER,
        status: Optional[OrderStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Result[ListOrdersResponseDTO]:
        """
        Errors:
            NOT_A_SELLER: seller scope without a seller registration
            UNAUTHORIZED: all scope requested by a non-admin
        """
        buyer_id = seller_id = None

        if scope == OrderScope.BUYER:
            buyer_id = actor.account_id
        elif scope == OrderScope.SELLER:
            seller = await self.seller_repo.get_by_account_id(actor.account_id)
            if not seller:
                return Return.err(
                    Error(
                        code=errors.NOT_A_SELLER,
                        message="Only sellers have incoming orders",
                    )
                )
            seller_id = seller.id
        elif not actor.is_admin:
            return Return.err(
                Error(
                    code=errors.UNAUTHORIZED,
                    message="Only admins can list every order",
                )
            )

        orders, total = await self.order_repo.list_orders(
            buyer_id=buyer_id,
            seller_id=seller_id,
            status=status,
            limit=limit,
            offset=offset,
        )

        return Return.ok(
            ListOrdersResponseDTO(
                orders=[OrderResponseDTO.from_entity(order) for order in orders],
                total=total,
                limit=limit,
                offset=offset,
            )
        )
