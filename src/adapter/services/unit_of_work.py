"""SQLAlchemy Unit of Work

Repositories flush into the request session; nothing they write is visible
to other connections until commit. Rollback also clears a session left
unusable by a failed flush (e.g. a duplicate idempotency key).
"""

import logging
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aexit__(self, exc_type, exc, tb):
        if exc_type is not None:
            logger.warning(f"Rolling back unit of work after {exc_type.__name__}: {exc}")
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        if self.session.in_transaction():
            await self.session.rollback()
