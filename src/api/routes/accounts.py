"""Account API Routes

Balance and ledger history of the calling account, plus admin role changes.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories import (
    SqlAlchemyAccountRepository,
    SqlAlchemyLedgerTransactionRepository,
)
from src.adapter.services import SqlAlchemyUnitOfWork
from src.api.auth import get_actor
from src.api.error import ClientError
from src.api.schemas.account_request import SetAdminRoleRequestSchema
from src.app.actor import ActorContext
from src.app.use_cases.accounts import (
    AccountRoleResponseDTO,
    GrantAdmin,
    SetAdminRoleCommandDTO,
)
from src.app.use_cases.ledger import (
    BalanceResponseDTO,
    GetBalance,
    ListTransactions,
    ListTransactionsResponseDTO,
)
from src.depends import get_session

router = APIRouter(prefix="/accounts", tags=["Accounts"])


@router.get(
    "/me/balance",
    response_model=BalanceResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def get_balance(
    actor: ActorContext = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
):
    """
    Current balance of the calling account.

    **Returns:**
    - 200: Balance
    - 401: Missing or unknown X-Account-Id
    """
    use_case = GetBalance(SqlAlchemyAccountRepository(session))
    result = await use_case.execute(actor)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/me/transactions",
    response_model=ListTransactionsResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_transactions(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    actor: ActorContext = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
):
    """
    Ledger history of the calling account, newest first.

    **Query parameters:**
    - `limit`: page size (1-100, default 20)
    - `offset`: rows to skip (default 0)
    """
    use_case = ListTransactions(SqlAlchemyLedgerTransactionRepository(session))
    result = await use_case.execute(actor, limit=limit, offset=offset)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.patch(
    "/{account_id}/admin",
    response_model=AccountRoleResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def set_admin_role(
    account_id: str,
    request: SetAdminRoleRequestSchema,
    actor: ActorContext = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
):
    """
    Promote or demote an account (admin only).

    **Returns:**
    - 200: New role
    - 401: Caller is not an admin, or is demoting themselves
    - 404: Account not found
    """
    use_case = GrantAdmin(SqlAlchemyUnitOfWork(session), SqlAlchemyAccountRepository(session))
    result = await use_case.execute(actor, account_id, SetAdminRoleCommandDTO(is_admin=request.is_admin))

    if result.is_err():
        raise ClientError(result.error)

    return result.value
