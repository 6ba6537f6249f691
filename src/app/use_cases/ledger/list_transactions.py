"""
List Transactions Use Case

Retrieves the actor's ledger history with pagination.
"""
from libs.result import Result, Return
from src.app.actor import ActorContext
from src.app.repositories.ledger_transaction_repository import LedgerTransactionRepository
from .dtos import ListTransactionsResponseDTO, TransactionDTO


class ListTransactions:
    """
    Use case: View ledger transactions

    Transactions are ordered by created_at DESC (most recent first).
    """

    def __init__(self, transaction_repo: LedgerTransactionRepository):
        self.transaction_repo = transaction_repo

    async def execute(
        self, actor: ActorContext, limit: int = 20, offset: int = 0
    ) -> Result[ListTransactionsResponseDTO]:
        transactions, total = await self.transaction_repo.get_by_account_id(
            account_id=actor.account_id,
            limit=limit,
            offset=offset,
        )

        transaction_dtos = [
            TransactionDTO(
                id=txn.id,
                transaction_type=txn.transaction_type.value,
                amount=txn.amount,
                balance_before=txn.balance_before,
                balance_after=txn.balance_after,
                order_id=txn.order_id,
                description=txn.description,
                created_at=txn.created_at,
            )
            for txn in transactions
        ]

        return Return.ok(
            ListTransactionsResponseDTO(
                transactions=transaction_dtos,
                total=total,
                limit=limit,
                offset=offset,
            )
        )
