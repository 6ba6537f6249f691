"""Order Repository Interface"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from src.domain.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    async def get_by_id(self, order_id: str, for_update: bool = False) -> Optional[Order]:
        """
        Retrieve order by ID

        Args:
            order_id: Order identifier
            for_update: If True, lock the row so concurrent status changes serialize
        """
        pass

    @abstractmethod
    async def list_orders(
        self,
        buyer_id: Optional[str] = None,
        seller_id: Optional[str] = None,
        status: Optional[OrderStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[Order], int]:
        """
        Page of orders, newest first

        Filters left as None are not applied.

        Returns:
            (orders on this page, total matching orders)
        """
        pass

    @abstractmethod
    async def create(self, order: Order) -> Order:
        pass

    @abstractmethod
    async def update(self, order: Order) -> Order:
        pass
