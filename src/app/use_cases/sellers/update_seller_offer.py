"""UpdateSellerOffer Use Case

The seller edits their own price, limits and online flag.
"""

import logging
from libs.result import Result, Return, Error
from src.app import errors
from src.app.actor import ActorContext
from src.app.repositories.seller_repository import SellerRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.money import to_money
from .dtos import SellerResponseDTO, UpdateSellerOfferCommandDTO
from .offer import validate_offer

logger = logging.getLogger(__name__)


class UpdateSellerOffer:
    def __init__(self, uow: UnitOfWork, seller_repo: SellerRepository):
        self.uow = uow
        self.seller_repo = seller_repo

    async def execute(
        self, actor: ActorContext, command: UpdateSellerOfferCommandDTO
    ) -> Result[SellerResponseDTO]:
        """
        Errors:
            NOT_A_SELLER
            INVALID_OFFER
        """
        seller = await self.seller_repo.get_by_account_id(actor.account_id)
        if not seller:
            return Return.err(
                Error(
                    code=errors.NOT_A_SELLER,
                    message="Account has no seller registration",
                )
            )

        price = command.price_per_1k if command.price_per_1k is not None else seller.price_per_1k
        min_amount = command.min_amount if command.min_amount is not None else seller.min_amount
        max_amount = command.max_amount if command.max_amount is not None else seller.max_amount

        offer_error = validate_offer(price, min_amount, max_amount)
        if offer_error:
            return Return.err(offer_error)

        try:
            seller.price_per_1k = to_money(price)
            seller.min_amount = min_amount
            seller.max_amount = max_amount
            if command.is_online is not None:
                seller.is_online = command.is_online

            await self.seller_repo.update(seller)
            await self.uow.commit()

            logger.info(
                f"Seller {seller.id} offer updated: price_per_1k={seller.price_per_1k}, "
                f"range=[{seller.min_amount}, {seller.max_amount}], online={seller.is_online}"
            )
            return Return.ok(SellerResponseDTO.from_entity(seller))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_SELLER_OFFER_FAILED",
                    message="Failed to update seller offer",
                    reason=str(e),
                )
            )
