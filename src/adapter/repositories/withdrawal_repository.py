"""SQLAlchemy implementation of WithdrawalRepository"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.withdrawal_repository import WithdrawalRepository
from src.domain.withdrawal import Withdrawal


class SqlAlchemyWithdrawalRepository(WithdrawalRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, withdrawal_id: str, for_update: bool = False) -> Optional[Withdrawal]:
        stmt = (
            select(Withdrawal)
            .where(Withdrawal.id == withdrawal_id)
            .execution_options(populate_existing=True)
        )

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, withdrawal: Withdrawal) -> Withdrawal:
        self.session.add(withdrawal)
        await self.session.flush()
        await self.session.refresh(withdrawal)
        return withdrawal

    async def update(self, withdrawal: Withdrawal) -> Withdrawal:
        self.session.add(withdrawal)
        await self.session.flush()
        return withdrawal
