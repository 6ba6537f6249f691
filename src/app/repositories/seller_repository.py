"""Seller Repository Interface"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from src.domain.seller import Seller


class SellerRepository(ABC):

    @abstractmethod
    async def get_by_id(self, seller_id: str, for_update: bool = False) -> Optional[Seller]:
        pass

    @abstractmethod
    async def get_by_account_id(self, account_id: str) -> Optional[Seller]:
        pass

    @abstractmethod
    async def list_sellers(
        self, online_only: bool = False, limit: int = 20, offset: int = 0
    ) -> Tuple[List[Seller], int]:
        """Page of sellers, cheapest price_per_1k first, with the total count"""
        pass

    @abstractmethod
    async def create(self, seller: Seller) -> Seller:
        pass

    @abstractmethod
    async def update(self, seller: Seller) -> Seller:
        pass
