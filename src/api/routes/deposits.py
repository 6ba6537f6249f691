"""Deposit API Routes

Creating gateway payments and settling them on demand.
"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories import (
    SqlAlchemyAccountRepository,
    SqlAlchemyLedgerTransactionRepository,
)
from src.adapter.services import SqlAlchemyUnitOfWork
from src.api.auth import get_actor
from src.api.error import ClientError
from src.api.schemas.deposit_request import CreateDepositRequestSchema
from src.app.actor import ActorContext
from src.app.services.ledger import Ledger
from src.app.services.payment_gateway import PaymentGateway
from src.app.use_cases.deposits import (
    CheckDepositStatus,
    CreateDeposit,
    CreateDepositCommandDTO,
    DepositResponseDTO,
    DepositStatusResponseDTO,
    SettleDeposit,
)
from src.depends import get_payment_gateway, get_session

router = APIRouter(prefix="/deposits", tags=["Deposits"])


@router.post(
    "",
    response_model=DepositResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        502: {
            "description": "Payment gateway unavailable or refused the payment",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "GATEWAY_UNAVAILABLE",
                            "message": "Payment gateway timed out"
                        }
                    }
                }
            }
        }
    }
)
async def create_deposit(
    request: CreateDepositRequestSchema,
    actor: ActorContext = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
    gateway: PaymentGateway = Depends(get_payment_gateway),
):
    """
    Create a gateway payment for a balance deposit.

    The balance is credited once the gateway confirms the payment, either
    through the webhook or `POST /deposits/{payment_id}/check`.

    **Request body:**
    - `amount` (required): at least the configured minimum (5.00)
    - `billing_type` (optional): PIX (default), BOLETO or CREDIT_CARD
    - `tax_id` (optional): payer CPF

    **Returns:**
    - 201: Payment created (PIX responses include the QR code and payload)
    - 400: Amount below minimum
    - 502: Gateway failure
    """
    command = CreateDepositCommandDTO(
        amount=request.amount,
        billing_type=request.billing_type,
        tax_id=request.tax_id,
    )

    use_case = CreateDeposit(SqlAlchemyAccountRepository(session), gateway)
    result = await use_case.execute(actor, command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/{payment_id}/check",
    response_model=DepositStatusResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def check_deposit_status(
    payment_id: str,
    actor: ActorContext = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
    gateway: PaymentGateway = Depends(get_payment_gateway),
):
    """
    Fetch live payment status and credit the deposit if it is confirmed.

    Safe to call repeatedly; `credited` is true only for the call that
    applied the credit.
    """
    uow = SqlAlchemyUnitOfWork(session)
    ledger = Ledger(
        SqlAlchemyAccountRepository(session),
        SqlAlchemyLedgerTransactionRepository(session),
    )

    use_case = CheckDepositStatus(gateway, SettleDeposit(uow, ledger))
    result = await use_case.execute(actor, payment_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
