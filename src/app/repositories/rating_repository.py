"""Rating Repository Interface"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional, Tuple
from src.domain.rating import Rating


class RatingRepository(ABC):

    @abstractmethod
    async def get_by_order_id(self, order_id: str) -> Optional[Rating]:
        pass

    @abstractmethod
    async def create(self, rating: Rating) -> Rating:
        """
        Raises:
            IntegrityError: If the order already has a rating
        """
        pass

    @abstractmethod
    async def get_stats_by_seller(self, seller_id: str) -> Tuple[Decimal, int]:
        """
        Returns:
            (average rating, number of ratings); (0, 0) when none
        """
        pass
