"""Ledger Store

Every balance mutation goes through this service. Each mutation writes
exactly one LedgerTransaction whose signed amount equals the balance delta,
so an account balance always equals the sum of its transactions.

The ledger never commits. Callers own the unit of work: commit on success,
rollback on any error (a failed posting may have flushed earlier legs).
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Tuple
from sqlalchemy.exc import IntegrityError
from libs.result import Result, Return, Error
from src.app import errors
from src.app.repositories.account_repository import AccountRepository
from src.app.repositories.ledger_transaction_repository import LedgerTransactionRepository
from src.domain.ledger_transaction import LedgerTransaction, TransactionType
from src.domain.money import to_money

logger = logging.getLogger(__name__)


@dataclass
class Posting:
    """One leg of a ledger operation"""
    account_id: str
    amount: Decimal  # signed: positive credits, negative debits
    transaction_type: TransactionType
    idempotency_key: str
    description: Optional[str] = None
    order_id: Optional[str] = None


class Ledger:
    """
    Ledger Store - credit, debit and all-or-nothing multi-leg postings

    Concurrency:
    - Balance check and write happen in one guarded UPDATE (no read-then-write)
    - Multi-account postings lock rows in ascending account id order first
    - The unique idempotency_key makes a repeated settlement fail inside the
      same atomic unit as the balance change (DUPLICATE_SETTLEMENT)
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        transaction_repo: LedgerTransactionRepository,
    ):
        self.account_repo = account_repo
        self.transaction_repo = transaction_repo

    async def credit(
        self,
        account_id: str,
        amount: Decimal,
        transaction_type: TransactionType,
        idempotency_key: str,
        description: Optional[str] = None,
        order_id: Optional[str] = None,
    ) -> Result[LedgerTransaction]:
        if amount <= 0:
            return self._invalid_amount(amount)
        result = await self.post([
            Posting(account_id, to_money(amount), transaction_type, idempotency_key, description, order_id)
        ])
        if result.is_err():
            return result
        return Return.ok(result.value[0])

    async def debit(
        self,
        account_id: str,
        amount: Decimal,
        transaction_type: TransactionType,
        idempotency_key: str,
        description: Optional[str] = None,
        order_id: Optional[str] = None,
    ) -> Result[LedgerTransaction]:
        if amount <= 0:
            return self._invalid_amount(amount)
        result = await self.post([
            Posting(account_id, -to_money(amount), transaction_type, idempotency_key, description, order_id)
        ])
        if result.is_err():
            return result
        return Return.ok(result.value[0])

    async def transfer_atomic(
        self,
        from_account_id: str,
        to_account_id: str,
        amount: Decimal,
        kinds: Tuple[TransactionType, TransactionType],
        idempotency_keys: Tuple[str, str],
        descriptions: Tuple[Optional[str], Optional[str]] = (None, None),
        order_id: Optional[str] = None,
    ) -> Result[Tuple[LedgerTransaction, LedgerTransaction]]:
        """Move amount between two accounts; both legs or neither"""
        if amount <= 0:
            return self._invalid_amount(amount)
        amount = to_money(amount)
        result = await self.post([
            Posting(from_account_id, -amount, kinds[0], idempotency_keys[0], descriptions[0], order_id),
            Posting(to_account_id, amount, kinds[1], idempotency_keys[1], descriptions[1], order_id),
        ])
        if result.is_err():
            return result
        debit_tx, credit_tx = result.value
        return Return.ok((debit_tx, credit_tx))

    async def post(self, postings: List[Posting]) -> Result[List[LedgerTransaction]]:
        """
        Apply several legs as one unit

        Debit legs are applied before credit legs so that an insufficient
        balance is detected before anything is written for the common
        single-debit case. Results are returned in the order given.
        """
        for posting in postings:
            existing = await self.transaction_repo.get_by_idempotency_key(posting.idempotency_key)
            if existing:
                return self._duplicate(posting.idempotency_key)

        account_ids = {p.account_id for p in postings}
        if len(account_ids) > 1:
            await self.account_repo.lock_many(sorted(account_ids))

        ordered = sorted(range(len(postings)), key=lambda i: postings[i].amount >= 0)
        created: dict[int, LedgerTransaction] = {}
        for index in ordered:
            result = await self._apply(postings[index])
            if result.is_err():
                return result
            created[index] = result.value

        return Return.ok([created[i] for i in range(len(postings))])

    async def _apply(self, posting: Posting) -> Result[LedgerTransaction]:
        balance_after = await self.account_repo.apply_delta(posting.account_id, posting.amount)

        if balance_after is None:
            account = await self.account_repo.get_by_id(posting.account_id)
            if not account:
                return Return.err(
                    Error(
                        code=errors.ACCOUNT_NOT_FOUND,
                        message=f"Account {posting.account_id} not found",
                    )
                )
            return Return.err(
                Error(
                    code=errors.INSUFFICIENT_BALANCE,
                    message=f"Insufficient balance. Required: {-posting.amount}, Available: {account.balance}",
                    reason=f"balance={account.balance}, required={-posting.amount}",
                )
            )

        transaction = LedgerTransaction(
            account_id=posting.account_id,
            order_id=posting.order_id,
            transaction_type=posting.transaction_type,
            amount=posting.amount,
            balance_before=balance_after - posting.amount,
            balance_after=balance_after,
            description=posting.description,
            idempotency_key=posting.idempotency_key,
        )
        try:
            created = await self.transaction_repo.create(transaction)
        except IntegrityError:
            return self._duplicate(posting.idempotency_key)

        logger.info(
            f"Ledger {posting.transaction_type.value} on account {posting.account_id}: "
            f"amount={posting.amount}, balance_after={balance_after}"
        )
        return Return.ok(created)

    @staticmethod
    def _duplicate(idempotency_key: str) -> Result:
        return Return.err(
            Error(
                code=errors.DUPLICATE_SETTLEMENT,
                message="Settlement already applied",
                reason=f"idempotency_key={idempotency_key}",
            )
        )

    @staticmethod
    def _invalid_amount(amount: Decimal) -> Result:
        return Return.err(
            Error(
                code=errors.INVALID_AMOUNT,
                message=f"Amount must be greater than 0, got {amount}",
            )
        )
