"""Actor context dependency

Authentication happens upstream. The trusted proxy forwards the
authenticated account id in X-Account-Id; the admin flag always comes
from the stored account.
"""

from typing import Optional
from fastapi import Depends, Header
from sqlmodel.ext.asyncio.session import AsyncSession
from libs.result import Error
from src.adapter.repositories.account_repository import SqlAlchemyAccountRepository
from src.api.error import ClientError
from src.app import errors
from src.app.actor import ActorContext
from src.depends import get_session


async def get_actor(
    x_account_id: Optional[str] = Header(default=None, alias="X-Account-Id"),
    session: AsyncSession = Depends(get_session),
) -> ActorContext:
    if not x_account_id:
        raise ClientError(Error(code=errors.UNAUTHORIZED, message="Missing X-Account-Id header"))

    account = await SqlAlchemyAccountRepository(session).get_by_id(x_account_id)
    if not account:
        raise ClientError(Error(code=errors.UNAUTHORIZED, message="Unknown account"))

    return ActorContext(account_id=account.id, is_admin=account.is_admin)
