"""SQLAlchemy implementation of SellerRepository"""

from typing import List, Optional, Tuple
from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.seller_repository import SellerRepository
from src.domain.base import utcnow
from src.domain.seller import Seller


class SqlAlchemySellerRepository(SellerRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, seller_id: str, for_update: bool = False) -> Optional[Seller]:
        stmt = select(Seller).where(Seller.id == seller_id)

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_account_id(self, account_id: str) -> Optional[Seller]:
        stmt = select(Seller).where(Seller.account_id == account_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_sellers(
        self, online_only: bool = False, limit: int = 20, offset: int = 0
    ) -> Tuple[List[Seller], int]:
        conditions = [Seller.is_online.is_(True)] if online_only else []

        count_stmt = select(func.count()).select_from(Seller).where(*conditions)
        total = (await self.session.execute(count_stmt)).scalar_one()

        # Cheapest offer first; ties go to the better rated seller
        stmt = (
            select(Seller)
            .where(*conditions)
            .order_by(Seller.price_per_1k, Seller.average_rating.desc(), Seller.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def create(self, seller: Seller) -> Seller:
        self.session.add(seller)
        await self.session.flush()
        await self.session.refresh(seller)
        return seller

    async def update(self, seller: Seller) -> Seller:
        seller.updated_at = utcnow()
        self.session.add(seller)
        await self.session.flush()
        return seller
