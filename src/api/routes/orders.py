"""Order API Routes"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories import (
    SqlAlchemyAccountRepository,
    SqlAlchemyLedgerTransactionRepository,
    SqlAlchemyOrderRepository,
    SqlAlchemyRatingRepository,
    SqlAlchemySellerRepository,
)
from src.adapter.services import SqlAlchemyUnitOfWork
from src.api.auth import get_actor
from src.api.error import ClientError
from src.api.schemas.order_request import (
    CreateOrderRequestSchema,
    SubmitRatingRequestSchema,
    UpdateOrderStatusRequestSchema,
)
from src.app.actor import ActorContext
from src.app.services.ledger import Ledger
from src.app.use_cases.orders import (
    CreateOrder,
    CreateOrderCommandDTO,
    GetOrder,
    ListOrders,
    ListOrdersResponseDTO,
    OrderResponseDTO,
    OrderScope,
    PurchaseResponseDTO,
    RatingResponseDTO,
    SubmitRating,
    SubmitRatingCommandDTO,
    UpdateOrderStatus,
    UpdateOrderStatusCommandDTO,
)
from src.depends import get_session
from src.domain.order import OrderStatus

router = APIRouter(prefix="/orders", tags=["Orders"])


def _ledger(session: AsyncSession) -> Ledger:
    return Ledger(
        SqlAlchemyAccountRepository(session),
        SqlAlchemyLedgerTransactionRepository(session),
    )


@router.post(
    "",
    response_model=PurchaseResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        402: {
            "description": "Insufficient balance",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INSUFFICIENT_BALANCE",
                            "message": "Insufficient balance. Required: 10.00, Available: 5.00"
                        }
                    }
                }
            }
        }
    }
)
async def create_order(
    request: CreateOrderRequestSchema,
    actor: ActorContext = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
):
    """
    Buy from a seller. The caller's balance is debited the order total.

    **Example request:**
    ```json
    {"seller_id": "9b2d4c1e-...", "quantity": 2000, "delivery_method": "gamepass"}
    ```

    **Returns:**
    - 201: Order created
    - 400: Quantity outside the seller's limits
    - 402: Insufficient balance
    - 404: Seller not found
    """
    command = CreateOrderCommandDTO(
        seller_id=request.seller_id,
        quantity=request.quantity,
        delivery_method=request.delivery_method,
    )

    use_case = CreateOrder(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyAccountRepository(session),
        SqlAlchemySellerRepository(session),
        SqlAlchemyOrderRepository(session),
        _ledger(session),
    )
    result = await use_case.execute(actor, command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "",
    response_model=ListOrdersResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_orders(
    scope: OrderScope = Query(OrderScope.BUYER),
    order_status: Optional[OrderStatus] = Query(None, alias="status"),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    actor: ActorContext = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
):
    """
    Orders visible to the caller, newest first.

    **Query parameters:**
    - `scope`: `buyer` (orders placed, default), `seller` (incoming orders)
      or `all` (admin only)
    - `status`: optional status filter
    - `limit`, `offset`: pagination (limit 1-100)
    """
    use_case = ListOrders(SqlAlchemyOrderRepository(session), SqlAlchemySellerRepository(session))
    result = await use_case.execute(
        actor, scope=scope, status=order_status, limit=limit, offset=offset
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/{order_id}",
    response_model=OrderResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def get_order(
    order_id: str,
    actor: ActorContext = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
):
    use_case = GetOrder(SqlAlchemyOrderRepository(session), SqlAlchemySellerRepository(session))
    result = await use_case.execute(actor, order_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.patch(
    "/{order_id}/status",
    response_model=OrderResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def update_order_status(
    order_id: str,
    request: UpdateOrderStatusRequestSchema,
    actor: ActorContext = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
):
    """
    Move an order through its lifecycle (seller or admin).

    Completing an order credits the seller's balance with the order total.
    """
    use_case = UpdateOrderStatus(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemySellerRepository(session),
        SqlAlchemyOrderRepository(session),
        _ledger(session),
    )
    result = await use_case.execute(
        actor, order_id, UpdateOrderStatusCommandDTO(status=request.status)
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/{order_id}/rating",
    response_model=RatingResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
async def submit_rating(
    order_id: str,
    request: SubmitRatingRequestSchema,
    actor: ActorContext = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
):
    """Rate the seller of a completed order (buyer only, once)."""
    use_case = SubmitRating(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyOrderRepository(session),
        SqlAlchemySellerRepository(session),
        SqlAlchemyRatingRepository(session),
    )
    result = await use_case.execute(
        actor,
        order_id,
        SubmitRatingCommandDTO(rating=request.rating, comment=request.comment),
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value
