"""UpdateWithdrawalStatus Use Case

Admin override of a withdrawal's status. No ledger side effects.
"""

import logging
from libs.result import Result, Return, Error
from src.app import errors
from src.app.actor import ActorContext
from src.app.repositories.withdrawal_repository import WithdrawalRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.withdrawal import TERMINAL_STATUSES, can_transition
from .dtos import UpdateWithdrawalStatusCommandDTO, WithdrawalResponseDTO

logger = logging.getLogger(__name__)


class UpdateWithdrawalStatus:
    def __init__(self, uow: UnitOfWork, withdrawal_repo: WithdrawalRepository):
        self.uow = uow
        self.withdrawal_repo = withdrawal_repo

    async def execute(
        self,
        actor: ActorContext,
        withdrawal_id: str,
        command: UpdateWithdrawalStatusCommandDTO,
    ) -> Result[WithdrawalResponseDTO]:
        """
        Errors:
            UNAUTHORIZED: actor is not an admin
            WITHDRAWAL_NOT_FOUND
            INVALID_STATUS_TRANSITION
        """
        if not actor.is_admin:
            return Return.err(
                Error(
                    code=errors.UNAUTHORIZED,
                    message="Only admins can change withdrawal status",
                )
            )

        try:
            withdrawal = await self.withdrawal_repo.get_by_id(withdrawal_id, for_update=True)
            if not withdrawal:
                return Return.err(
                    Error(
                        code=errors.WITHDRAWAL_NOT_FOUND,
                        message=f"Withdrawal {withdrawal_id} not found",
                    )
                )

            if not can_transition(withdrawal.status, command.status):
                return Return.err(
                    Error(
                        code=errors.INVALID_STATUS_TRANSITION,
                        message=f"Cannot change withdrawal from {withdrawal.status.value} to {command.status.value}",
                    )
                )

            previous = withdrawal.status
            withdrawal.status = command.status
            if command.status in TERMINAL_STATUSES:
                withdrawal.processed_at = utcnow()

            await self.withdrawal_repo.update(withdrawal)
            await self.uow.commit()

            logger.info(
                f"Withdrawal {withdrawal.id} moved {previous.value} -> {command.status.value} "
                f"by admin {actor.account_id}"
            )
            return Return.ok(WithdrawalResponseDTO.from_entity(withdrawal))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_WITHDRAWAL_STATUS_FAILED",
                    message="Failed to update withdrawal status",
                    reason=str(e),
                )
            )
