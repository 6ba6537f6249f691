"""Withdrawal API Routes"""

from decimal import Decimal
from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories import (
    SqlAlchemyAccountRepository,
    SqlAlchemyLedgerTransactionRepository,
    SqlAlchemySellerRepository,
    SqlAlchemyWithdrawalRepository,
)
from src.adapter.services import SqlAlchemyUnitOfWork
from src.api.auth import get_actor
from src.api.error import ClientError
from src.api.schemas.withdrawal_request import (
    RequestWithdrawalRequestSchema,
    UpdateWithdrawalStatusRequestSchema,
)
from src.app.actor import ActorContext
from src.app.services.ledger import Ledger
from src.app.services.payment_gateway import PaymentGateway
from src.app.use_cases.withdrawals import (
    RequestWithdrawal,
    RequestWithdrawalCommandDTO,
    UpdateWithdrawalStatus,
    UpdateWithdrawalStatusCommandDTO,
    WithdrawalResponseDTO,
)
from src.depends import get_payment_gateway, get_session

router = APIRouter(prefix="/withdrawals", tags=["Withdrawals"])


@router.post(
    "",
    response_model=WithdrawalResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        402: {
            "description": "Insufficient balance",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INSUFFICIENT_BALANCE",
                            "message": "Insufficient balance. Required: 50.00, Available: 20.00"
                        }
                    }
                }
            }
        },
        403: {"description": "Caller is not a seller"},
    }
)
async def request_withdrawal(
    request: RequestWithdrawalRequestSchema,
    actor: ActorContext = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
    gateway: PaymentGateway = Depends(get_payment_gateway),
):
    """
    Withdraw seller earnings to an instant-transfer key.

    The gross amount is debited immediately; the platform fee (5%) is taken
    out of it. The response status is `approved` when the gateway accepted
    the transfer and `pending` when it must be resolved manually.

    **Returns:**
    - 201: Withdrawal recorded
    - 400: Amount below minimum (10.00)
    - 402: Insufficient balance
    - 403: Not a seller
    """
    account_repo = SqlAlchemyAccountRepository(session)
    ledger = Ledger(account_repo, SqlAlchemyLedgerTransactionRepository(session))

    command = RequestWithdrawalCommandDTO(
        amount=request.amount,
        destination_key=request.destination_key,
        destination_key_type=request.destination_key_type,
    )

    use_case = RequestWithdrawal(
        uow=SqlAlchemyUnitOfWork(session),
        account_repo=account_repo,
        seller_repo=SqlAlchemySellerRepository(session),
        withdrawal_repo=SqlAlchemyWithdrawalRepository(session),
        ledger=ledger,
        gateway=gateway,
        platform_account_id=ApplicationConfig.PLATFORM_ACCOUNT_ID,
        platform_account_email=ApplicationConfig.PLATFORM_ACCOUNT_EMAIL,
        min_amount=Decimal(str(ApplicationConfig.MIN_WITHDRAWAL_AMOUNT)),
        fee_rate=Decimal(str(ApplicationConfig.WITHDRAWAL_FEE_RATE)),
    )
    result = await use_case.execute(actor, command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.patch(
    "/{withdrawal_id}/status",
    response_model=WithdrawalResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def update_withdrawal_status(
    withdrawal_id: str,
    request: UpdateWithdrawalStatusRequestSchema,
    actor: ActorContext = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
):
    """
    Admin override of a withdrawal status. No balance changes.
    """
    use_case = UpdateWithdrawalStatus(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyWithdrawalRepository(session),
    )
    result = await use_case.execute(
        actor, withdrawal_id, UpdateWithdrawalStatusCommandDTO(status=request.status)
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value
