"""SQLAlchemy implementation of LedgerTransactionRepository

Idempotency is enforced by the unique constraint on idempotency_key;
a duplicate insert surfaces as IntegrityError from flush.
"""

from decimal import Decimal
from typing import List, Optional, Tuple
from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.ledger_transaction_repository import LedgerTransactionRepository
from src.domain.ledger_transaction import LedgerTransaction
from src.domain.money import to_money


class SqlAlchemyLedgerTransactionRepository(LedgerTransactionRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, transaction: LedgerTransaction) -> LedgerTransaction:
        """
        Raises:
            IntegrityError: If idempotency_key already exists
        """
        self.session.add(transaction)
        await self.session.flush()
        await self.session.refresh(transaction)
        return transaction

    async def get_by_idempotency_key(self, idempotency_key: str) -> Optional[LedgerTransaction]:
        stmt = select(LedgerTransaction).where(
            LedgerTransaction.idempotency_key == idempotency_key
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_account_id(
        self, account_id: str, limit: int = 20, offset: int = 0
    ) -> Tuple[List[LedgerTransaction], int]:
        count_stmt = (
            select(func.count())
            .select_from(LedgerTransaction)
            .where(LedgerTransaction.account_id == account_id)
        )
        total = (await self.session.execute(count_stmt)).scalar_one()

        stmt = (
            select(LedgerTransaction)
            .where(LedgerTransaction.account_id == account_id)
            .order_by(LedgerTransaction.created_at.desc(), LedgerTransaction.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def get_sum_by_account(self, account_id: str) -> Decimal:
        stmt = select(func.coalesce(func.sum(LedgerTransaction.amount), 0)).where(
            LedgerTransaction.account_id == account_id
        )
        total = (await self.session.execute(stmt)).scalar_one()
        return to_money(total)
