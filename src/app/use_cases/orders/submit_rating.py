"""SubmitRating Use Case

One rating per completed order, by its buyer.
"""

import logging
from sqlalchemy.exc import IntegrityError
from libs.result import Result, Return, Error
from src.app import errors
from src.app.actor import ActorContext
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.rating_repository import RatingRepository
from src.app.repositories.seller_repository import SellerRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.order import OrderStatus
from src.domain.rating import Rating
from .dtos import RatingResponseDTO, SubmitRatingCommandDTO

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


class SubmitRating:
    def __init__(
        self,
        uow: UnitOfWork,
        order_repo: OrderRepository,
        seller_repo: SellerRepository,
        rating_repo: RatingRepository,
    ):
        self.uow = uow
        self.order_repo = order_repo
        self.seller_repo = seller_repo
        self.rating_repo = rating_repo

    async def execute(
        self,
        actor: ActorContext,
        order_id: str,
        command: SubmitRatingCommandDTO,
    ) -> Result[RatingResponseDTO]:
        """
        Rate the seller of a completed order and refresh the seller's average

        Errors:
            INVALID_RATING: rating outside 1..5
            ORDER_NOT_FOUND
            UNAUTHORIZED: actor is not the buyer
            ORDER_NOT_COMPLETED
            ALREADY_RATED
        """
        if not MIN_RATING <= command.rating <= MAX_RATING:
            return Return.err(
                Error(
                    code=errors.INVALID_RATING,
                    message=f"Rating must be between {MIN_RATING} and {MAX_RATING}",
                )
            )

        order = await self.order_repo.get_by_id(order_id)
        if not order:
            return Return.err(
                Error(
                    code=errors.ORDER_NOT_FOUND,
                    message=f"Order {order_id} not found",
                )
            )

        if order.buyer_id != actor.account_id:
            return Return.err(
                Error(
                    code=errors.UNAUTHORIZED,
                    message="Only the buyer can rate this order",
                )
            )

        if order.status != OrderStatus.COMPLETED:
            return Return.err(
                Error(
                    code=errors.ORDER_NOT_COMPLETED,
                    message="Only completed orders can be rated",
                )
            )

        if await self.rating_repo.get_by_order_id(order.id):
            return self._already_rated(order.id)

        try:
            rating = await self.rating_repo.create(
                Rating(
                    order_id=order.id,
                    seller_id=order.seller_id,
                    buyer_id=actor.account_id,
                    rating=command.rating,
                    comment=command.comment,
                )
            )

            average, total = await self.rating_repo.get_stats_by_seller(order.seller_id)

            seller = await self.seller_repo.get_by_id(order.seller_id, for_update=True)
            seller.average_rating = average
            seller.total_ratings = total
            await self.seller_repo.update(seller)

            await self.uow.commit()

            logger.info(
                f"Order {order.id} rated {command.rating}; seller {seller.id} "
                f"average={average} over {total}"
            )
            return Return.ok(RatingResponseDTO.from_entity(rating, average, total))

        except IntegrityError:
            await self.uow.rollback()
            return self._already_rated(order.id)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="SUBMIT_RATING_FAILED",
                    message="Failed to submit rating",
                    reason=str(e),
                )
            )

    @staticmethod
    def _already_rated(order_id: str) -> Result:
        return Return.err(
            Error(
                code=errors.ALREADY_RATED,
                message=f"Order {order_id} has already been rated",
            )
        )
