"""SQLAlchemy implementation of OrderRepository"""

from typing import List, Optional, Tuple
from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.order_repository import OrderRepository
from src.domain.base import utcnow
from src.domain.order import Order, OrderStatus


class SqlAlchemyOrderRepository(OrderRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, order_id: str, for_update: bool = False) -> Optional[Order]:
        stmt = (
            select(Order)
            .where(Order.id == order_id)
            .execution_options(populate_existing=True)
        )

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_orders(
        self,
        buyer_id: Optional[str] = None,
        seller_id: Optional[str] = None,
        status: Optional[OrderStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[Order], int]:
        conditions = []
        if buyer_id is not None:
            conditions.append(Order.buyer_id == buyer_id)
        if seller_id is not None:
            conditions.append(Order.seller_id == seller_id)
        if status is not None:
            conditions.append(Order.status == status)

        count_stmt = select(func.count()).select_from(Order).where(*conditions)
        total = (await self.session.execute(count_stmt)).scalar_one()

        stmt = (
            select(Order)
            .where(*conditions)
            .order_by(Order.created_at.desc(), Order.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def create(self, order: Order) -> Order:
        self.session.add(order)
        await self.session.flush()
        await self.session.refresh(order)
        return order

    async def update(self, order: Order) -> Order:
        order.updated_at = utcnow()
        self.session.add(order)
        await self.session.flush()
        return order
