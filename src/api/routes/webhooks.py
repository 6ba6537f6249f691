"""Gateway Webhook Route

The gateway only understands "received" or "failed"; any non-2xx makes it
retry and eventually mark the endpoint unhealthy. Payloads that cannot be
acted on are acknowledged and logged.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Header, Request, status
from pydantic import ValidationError
from sqlmodel.ext.asyncio.session import AsyncSession

from libs.result import Error
from src.adapter.repositories import (
    SqlAlchemyAccountRepository,
    SqlAlchemyLedgerTransactionRepository,
    SqlAlchemyWithdrawalRepository,
)
from src.adapter.services import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app import errors
from src.app.services.ledger import Ledger
from src.app.use_cases.deposits import GatewayEventDTO, ProcessGatewayEvent, SettleDeposit
from src.depends import get_session, get_webhook_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhooks", tags=["Webhooks"])

RECEIVED = {"received": True}


@router.post("/payment-gateway", status_code=status.HTTP_200_OK)
async def payment_gateway_webhook(
    request: Request,
    access_token: Optional[str] = Header(default=None, alias="asaas-access-token"),
    expected_token: Optional[str] = Depends(get_webhook_token),
    session: AsyncSession = Depends(get_session),
):
    """
    Receive asynchronous gateway events.

    - `PAYMENT_CONFIRMED` / `PAYMENT_RECEIVED`: credit the deposit once
    - `TRANSFER_CONFIRMED` / `TRANSFER_DONE`: complete the withdrawal

    **Returns:**
    - 200 `{"received": true}` for every processed or ignored event
    - 401 when a webhook token is configured and does not match
    - 500 on unexpected internal failures only
    """
    if expected_token and access_token != expected_token:
        raise ClientError(Error(code=errors.UNAUTHORIZED, message="Invalid webhook token"))

    try:
        event = GatewayEventDTO.model_validate(await request.json())
    except (ValueError, ValidationError) as e:
        logger.warning(f"Unreadable gateway webhook payload: {e}")
        return RECEIVED

    logger.info(f"Gateway webhook received: {event.event}")

    uow = SqlAlchemyUnitOfWork(session)
    ledger = Ledger(
        SqlAlchemyAccountRepository(session),
        SqlAlchemyLedgerTransactionRepository(session),
    )
    use_case = ProcessGatewayEvent(
        uow,
        SqlAlchemyWithdrawalRepository(session),
        SettleDeposit(uow, ledger),
    )
    result = await use_case.execute(event)

    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return RECEIVED
