"""Get Balance Use Case

Retrieves the acting account's current balance.
"""

from libs.result import Result, Return, Error
from src.app import errors
from src.app.actor import ActorContext
from src.app.repositories.account_repository import AccountRepository
from .dtos import BalanceResponseDTO


class GetBalance:
    """
    Get Balance Use Case

    Read-only. The account is always the actor's own account.
    """

    def __init__(self, account_repo: AccountRepository):
        self.account_repo = account_repo

    async def execute(self, actor: ActorContext) -> Result[BalanceResponseDTO]:
        """
        Errors:
            ACCOUNT_NOT_FOUND: The actor has no account row
        """
        account = await self.account_repo.get_by_id(actor.account_id)

        if not account:
            return Return.err(
                Error(
                    code=errors.ACCOUNT_NOT_FOUND,
                    message=f"Account {actor.account_id} not found",
                )
            )

        return Return.ok(
            BalanceResponseDTO(
                account_id=account.id,
                balance=account.balance,
                last_updated=account.updated_at,
            )
        )
