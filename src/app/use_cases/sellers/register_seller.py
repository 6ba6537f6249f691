"""RegisterSeller Use Case

Admin-only registration of an account as a seller.
"""

import logging
from sqlalchemy.exc import IntegrityError
from libs.result import Result, Return, Error
from src.app import errors
from src.app.actor import ActorContext
from src.app.repositories.account_repository import AccountRepository
from src.app.repositories.seller_repository import SellerRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.money import to_money
from src.domain.seller import Seller
from .dtos import RegisterSellerCommandDTO, SellerResponseDTO
from .offer import validate_offer

logger = logging.getLogger(__name__)


class RegisterSeller:
    """
    Use Case: Register a seller

    New sellers start offline with the default offer unless the command
    overrides it.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        account_repo: AccountRepository,
        seller_repo: SellerRepository,
    ):
        self.uow = uow
        self.account_repo = account_repo
        self.seller_repo = seller_repo

    async def execute(
        self, actor: ActorContext, command: RegisterSellerCommandDTO
    ) -> Result[SellerResponseDTO]:
        """
        Errors:
            UNAUTHORIZED: actor is not an admin
            ACCOUNT_NOT_FOUND
            SELLER_ALREADY_EXISTS
            INVALID_OFFER
        """
        if not actor.is_admin:
            return Return.err(
                Error(
                    code=errors.UNAUTHORIZED,
                    message="Only admins can register sellers",
                )
            )

        offer_error = validate_offer(command.price_per_1k, command.min_amount, command.max_amount)
        if offer_error:
            return Return.err(offer_error)

        account = await self.account_repo.get_by_id(command.account_id)
        if not account:
            return Return.err(
                Error(
                    code=errors.ACCOUNT_NOT_FOUND,
                    message=f"Account {command.account_id} not found",
                )
            )

        if await self.seller_repo.get_by_account_id(account.id):
            return self._already_exists(account.id)

        try:
            seller = await self.seller_repo.create(
                Seller(
                    account_id=account.id,
                    price_per_1k=to_money(command.price_per_1k),
                    min_amount=command.min_amount,
                    max_amount=command.max_amount,
                    is_online=False,
                )
            )
            await self.uow.commit()

            logger.info(f"Seller {seller.id} registered for account {account.id}")
            return Return.ok(SellerResponseDTO.from_entity(seller))

        except IntegrityError:
            await self.uow.rollback()
            return self._already_exists(account.id)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="REGISTER_SELLER_FAILED",
                    message="Failed to register seller",
                    reason=str(e),
                )
            )

    @staticmethod
    def _already_exists(account_id: str) -> Result:
        return Return.err(
            Error(
                code=errors.SELLER_ALREADY_EXISTS,
                message=f"Account {account_id} is already a seller",
            )
        )
