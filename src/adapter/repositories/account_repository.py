"""SQLAlchemy implementation of AccountRepository

Balance changes use a single guarded UPDATE ... RETURNING, which acts as a
compare-and-swap on every backend. On PostgreSQL, lock_many additionally
takes row locks (SELECT FOR UPDATE) in ascending id order.
"""

from decimal import Decimal
from typing import List, Optional
from sqlalchemy import func, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.account_repository import AccountRepository
from src.domain.account import Account
from src.domain.base import utcnow
from src.domain.money import to_money


class SqlAlchemyAccountRepository(AccountRepository):
    """
    SQLAlchemy implementation of AccountRepository

    Features:
    - Atomic conditional balance update (never below zero)
    - Pessimistic locking via SELECT FOR UPDATE
    - Reads refresh already-loaded instances so balances are never stale
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, account_id: str, for_update: bool = False) -> Optional[Account]:
        stmt = (
            select(Account)
            .where(Account.id == account_id)
            .execution_options(populate_existing=True)
        )

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def lock_many(self, account_ids: List[str]) -> List[Account]:
        stmt = (
            select(Account)
            .where(Account.id.in_(account_ids))
            .order_by(Account.id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, account: Account) -> Account:
        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)
        return account

    async def set_admin(self, account_id: str, is_admin: bool) -> bool:
        stmt = (
            update(Account)
            .where(Account.id == account_id)
            .values(is_admin=is_admin)
            .returning(Account.id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def apply_delta(self, account_id: str, delta: Decimal) -> Optional[Decimal]:
        """
        Add delta to the balance in one statement

        The WHERE clause carries the non-negative check, so two concurrent
        debits can never both pass it on the same funds.
        """
        new_balance = func.round(Account.balance + delta, 2)
        stmt = (
            update(Account)
            .where(Account.id == account_id)
            .where(new_balance >= 0)
            .values(balance=new_balance, updated_at=utcnow())
            .returning(Account.balance)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        balance = result.scalar_one_or_none()
        if balance is None:
            return None
        return to_money(balance)

    async def get_all(self) -> List[Account]:
        result = await self.session.execute(select(Account).order_by(Account.id))
        return list(result.scalars().all())
