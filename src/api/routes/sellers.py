"""Seller API Routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories import SqlAlchemyAccountRepository, SqlAlchemySellerRepository
from src.adapter.services import SqlAlchemyUnitOfWork
from src.api.auth import get_actor
from src.api.error import ClientError
from src.api.schemas.seller_request import (
    RegisterSellerRequestSchema,
    UpdateSellerOfferRequestSchema,
)
from src.app.actor import ActorContext
from src.app.use_cases.sellers import (
    ListSellers,
    ListSellersResponseDTO,
    RegisterSeller,
    RegisterSellerCommandDTO,
    SellerResponseDTO,
    UpdateSellerOffer,
    UpdateSellerOfferCommandDTO,
)
from src.depends import get_session

router = APIRouter(prefix="/sellers", tags=["Sellers"])


@router.post(
    "",
    response_model=SellerResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
async def register_seller(
    request: RegisterSellerRequestSchema,
    actor: ActorContext = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
):
    """Register an account as a seller (admin only)."""
    use_case = RegisterSeller(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyAccountRepository(session),
        SqlAlchemySellerRepository(session),
    )
    result = await use_case.execute(actor, RegisterSellerCommandDTO(**request.model_dump()))

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.patch(
    "/me",
    response_model=SellerResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def update_seller_offer(
    request: UpdateSellerOfferRequestSchema,
    actor: ActorContext = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
):
    """Update the caller's price, quantity limits and online flag."""
    use_case = UpdateSellerOffer(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemySellerRepository(session),
    )
    result = await use_case.execute(actor, UpdateSellerOfferCommandDTO(**request.model_dump()))

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "",
    response_model=ListSellersResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_sellers(
    online_only: bool = Query(False),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    actor: ActorContext = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
):
    """
    Marketplace listing, cheapest price per 1000 units first.

    **Query parameters:**
    - `online_only`: only sellers currently accepting orders
    - `limit`, `offset`: pagination (limit 1-100)
    """
    use_case = ListSellers(SqlAlchemySellerRepository(session))
    result = await use_case.execute(online_only=online_only, limit=limit, offset=offset)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
