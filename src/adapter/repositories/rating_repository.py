"""SQLAlchemy implementation of RatingRepository"""

from decimal import Decimal
from typing import Optional, Tuple
from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.rating_repository import RatingRepository
from src.domain.money import to_money
from src.domain.rating import Rating


class SqlAlchemyRatingRepository(RatingRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_order_id(self, order_id: str) -> Optional[Rating]:
        stmt = select(Rating).where(Rating.order_id == order_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, rating: Rating) -> Rating:
        self.session.add(rating)
        await self.session.flush()
        await self.session.refresh(rating)
        return rating

    async def get_stats_by_seller(self, seller_id: str) -> Tuple[Decimal, int]:
        stmt = select(func.avg(Rating.rating), func.count(Rating.id)).where(
            Rating.seller_id == seller_id
        )
        average, count = (await self.session.execute(stmt)).one()
        if not count:
            return Decimal("0.00"), 0
        return to_money(average), count
