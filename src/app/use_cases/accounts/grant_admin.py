"""GrantAdmin Use Case

Admins promote (or demote) other accounts.
"""

import logging
from libs.result import Result, Return, Error
from src.app import errors
from src.app.actor import ActorContext
from src.app.repositories.account_repository import AccountRepository
from src.app.services.unit_of_work import UnitOfWork
from .dtos import AccountRoleResponseDTO, SetAdminRoleCommandDTO

logger = logging.getLogger(__name__)


class GrantAdmin:
    """
    Use Case: Change an account's admin flag

    Business Rules:
    1. Only admins may change roles
    2. Admins cannot demote themselves
    """

    def __init__(self, uow: UnitOfWork, account_repo: AccountRepository):
        self.uow = uow
        self.account_repo = account_repo

    async def execute(
        self, actor: ActorContext, account_id: str, command: SetAdminRoleCommandDTO
    ) -> Result[AccountRoleResponseDTO]:
        if not actor.is_admin:
            return Return.err(
                Error(
                    code=errors.UNAUTHORIZED,
                    message="Only admins can change account roles",
                )
            )

        if account_id == actor.account_id and not command.is_admin:
            return Return.err(
                Error(
                    code=errors.UNAUTHORIZED,
                    message="Admins cannot remove their own admin role",
                )
            )

        try:
            found = await self.account_repo.set_admin(account_id, command.is_admin)
            if not found:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code=errors.ACCOUNT_NOT_FOUND,
                        message=f"Account {account_id} not found",
                    )
                )
            await self.uow.commit()

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="GRANT_ADMIN_FAILED",
                    message="Failed to change account role",
                    reason=str(e),
                )
            )

        logger.info(f"Account {account_id} admin={command.is_admin} (by {actor.account_id})")
        return Return.ok(AccountRoleResponseDTO(account_id=account_id, is_admin=command.is_admin))
