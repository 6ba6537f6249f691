"""List Sellers Use Case"""

from libs.result import Result, Return
from src.app.repositories.seller_repository import SellerRepository
from .dtos import ListSellersResponseDTO, SellerResponseDTO


class ListSellers:
    """Marketplace listing: cheapest offers first, optionally online sellers only"""

    def __init__(self, seller_repo: SellerRepository):
        self.seller_repo = seller_repo

    async def execute(
        self, online_only: bool = False, limit: int = 20, offset: int = 0
    ) -> Result[ListSellersResponseDTO]:
        sellers, total = await self.seller_repo.list_sellers(
            online_only=online_only, limit=limit, offset=offset
        )
        return Return.ok(
            ListSellersResponseDTO(
                sellers=[SellerResponseDTO.from_entity(seller) for seller in sellers],
                total=total,
                limit=limit,
                offset=offset,
            )
        )
