"""Unit tests for withdrawal use cases

Tests cover:
- Fee split (5% of gross goes to the platform account)
- Best-effort transfer: failure leaves the withdrawal pending, ledger untouched
- Validation order: minimum, seller registration, balance
- Admin-only status override
"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from libs.result import Return, Error
from src.app.actor import ActorContext
from src.app.services.ledger import Posting
from src.app.services.payment_gateway import TransferReceipt
from src.app.use_cases.withdrawals import (
    RequestWithdrawal,
    RequestWithdrawalCommandDTO,
    UpdateWithdrawalStatus,
    UpdateWithdrawalStatusCommandDTO,
)
from src.domain.account import Account
from src.domain.ledger_transaction import LedgerTransaction, TransactionType
from src.domain.seller import Seller
from src.domain.withdrawal import PixKeyType, Withdrawal, WithdrawalStatus

PLATFORM_ID = "00000000-0000-0000-0000-000000000001"


@pytest.fixture
def seller_actor():
    return ActorContext(account_id="acc-seller")


@pytest.fixture
def mock_account_repo():
    repo = MagicMock()
    accounts = {
        "acc-seller": Account(id="acc-seller", username="seller", email="s@example.com", balance=Decimal("100.00")),
        PLATFORM_ID: Account(id=PLATFORM_ID, username="platform", email="p@example.com"),
    }
    repo.get_by_id = AsyncMock(side_effect=lambda account_id, for_update=False: accounts.get(account_id))
    repo.create = AsyncMock(side_effect=lambda account: account)
    return repo


@pytest.fixture
def mock_seller_repo():
    repo = MagicMock()
    repo.get_by_account_id = AsyncMock(return_value=Seller(id="seller-1", account_id="acc-seller"))
    return repo


@pytest.fixture
def mock_withdrawal_repo():
    repo = MagicMock()
    stored = {}

    async def create(withdrawal):
        stored[withdrawal.id] = withdrawal
        return withdrawal

    repo.create = AsyncMock(side_effect=create)
    repo.get_by_id = AsyncMock(side_effect=lambda withdrawal_id, for_update=False: stored.get(withdrawal_id))
    repo.update = AsyncMock(side_effect=lambda withdrawal: withdrawal)
    return repo


@pytest.fixture
def mock_ledger():
    ledger = MagicMock()

    async def post(postings):
        return Return.ok([
            LedgerTransaction(
                account_id=p.account_id,
                transaction_type=p.transaction_type,
                amount=p.amount,
                balance_before=Decimal("100.00"),
                balance_after=Decimal("100.00") + p.amount,
                idempotency_key=p.idempotency_key,
            )
            for p in postings
        ])

    ledger.post = AsyncMock(side_effect=post)
    return ledger


@pytest.fixture
def mock_gateway():
    gateway = MagicMock()
    gateway.create_transfer = AsyncMock(
        return_value=Return.ok(TransferReceipt(gateway_transfer_id="tra_1", accepted=True))
    )
    return gateway


@pytest.fixture
def use_case(mock_uow, mock_account_repo, mock_seller_repo, mock_withdrawal_repo, mock_ledger, mock_gateway):
    return RequestWithdrawal(
        uow=mock_uow,
        account_repo=mock_account_repo,
        seller_repo=mock_seller_repo,
        withdrawal_repo=mock_withdrawal_repo,
        ledger=mock_ledger,
        gateway=mock_gateway,
        platform_account_id=PLATFORM_ID,
    )


def command(amount="50.00"):
    return RequestWithdrawalCommandDTO(
        amount=Decimal(amount),
        destination_key="seller@example.com",
        destination_key_type=PixKeyType.EMAIL,
    )


@pytest.mark.asyncio
class TestRequestWithdrawal:

    async def test_fee_split_and_approval(self, use_case, seller_actor, mock_ledger, mock_gateway, mock_uow):
        """
        Given: Seller with balance 100.00
        When: Withdrawing 50.00 at a 5% fee
        Then: Seller debited 50.00, platform credited 2.50, 47.50 sent, APPROVED
        """
        result = await use_case.execute(seller_actor, command("50.00"))

        assert result.is_ok()
        dto = result.value
        assert dto.gross_amount == Decimal("50.00")
        assert dto.fee_amount == Decimal("2.50")
        assert dto.net_amount == Decimal("47.50")
        assert dto.balance_after == Decimal("50.00")
        assert dto.status == WithdrawalStatus.APPROVED.value
        assert dto.gateway_transfer_id == "tra_1"

        postings = mock_ledger.post.call_args.args[0]
        assert postings == [
            Posting(
                account_id="acc-seller",
                amount=Decimal("-50.00"),
                transaction_type=TransactionType.WITHDRAWAL,
                idempotency_key=f"withdrawal:{dto.id}",
                description=f"Withdrawal {dto.id} - net 47.50, fee 2.50",
            ),
            Posting(
                account_id=PLATFORM_ID,
                amount=Decimal("2.50"),
                transaction_type=TransactionType.FEE,
                idempotency_key=f"fee:{dto.id}",
                description=f"Withdrawal fee - withdrawal {dto.id}",
            ),
        ]
        transfer_kwargs = mock_gateway.create_transfer.call_args.kwargs
        assert transfer_kwargs["amount"] == Decimal("47.50")
        assert transfer_kwargs["reference"].withdrawal_id == dto.id
        assert transfer_kwargs["reference"].seller_id == "seller-1"
        assert mock_uow.commit.call_count == 2

    @pytest.mark.parametrize(
        "gross,net,fee",
        [
            ("10.10", "9.60", "0.50"),
            ("10.30", "9.79", "0.51"),
            ("33.33", "31.66", "1.67"),
        ],
    )
    async def test_net_is_rounded_share_of_gross(
        self, use_case, seller_actor, mock_ledger, mock_gateway, gross, net, fee
    ):
        """
        Given: A gross amount whose 95% share ends in a half cent
        When: Seller withdraws
        Then: net = round(gross * 0.95, 2), the fee takes the remainder,
              and the seller is still debited exactly the gross amount
        """
        result = await use_case.execute(seller_actor, command(gross))

        assert result.is_ok()
        assert result.value.net_amount == Decimal(net)
        assert result.value.fee_amount == Decimal(fee)
        assert result.value.net_amount + result.value.fee_amount == Decimal(gross)

        seller_leg, fee_leg = mock_ledger.post.call_args.args[0]
        assert seller_leg.amount == -Decimal(gross)
        assert fee_leg.amount == Decimal(fee)
        assert mock_gateway.create_transfer.call_args.kwargs["amount"] == Decimal(net)

    async def test_transfer_failure_leaves_pending(self, use_case, seller_actor, mock_gateway, mock_uow):
        """
        Given: Gateway is unreachable
        When: Seller withdraws
        Then: Ledger debit is kept and the withdrawal stays PENDING
        """
        mock_gateway.create_transfer = AsyncMock(
            return_value=Return.err(Error(code="GATEWAY_UNAVAILABLE", message="timeout"))
        )

        result = await use_case.execute(seller_actor, command())

        assert result.is_ok()
        assert result.value.status == WithdrawalStatus.PENDING.value
        assert result.value.gateway_transfer_id is None
        mock_uow.commit.assert_called_once()
        mock_uow.rollback.assert_not_called()

    async def test_transfer_not_accepted_leaves_pending(self, use_case, seller_actor, mock_gateway):
        mock_gateway.create_transfer = AsyncMock(
            return_value=Return.ok(TransferReceipt(gateway_transfer_id=None, accepted=False))
        )

        result = await use_case.execute(seller_actor, command())

        assert result.value.status == WithdrawalStatus.PENDING.value

    async def test_webhook_completed_first_keeps_completed(
        self, use_case, seller_actor, mock_withdrawal_repo, mock_gateway
    ):
        """
        Given: The transfer webhook completes the withdrawal before the response is recorded
        When: The accepted receipt is applied
        Then: Status stays COMPLETED
        """
        async def complete_then_accept(**kwargs):
            stored = await mock_withdrawal_repo.get_by_id(kwargs["reference"].withdrawal_id)
            stored.status = WithdrawalStatus.COMPLETED
            return Return.ok(TransferReceipt(gateway_transfer_id="tra_1", accepted=True))

        mock_gateway.create_transfer = AsyncMock(side_effect=complete_then_accept)

        result = await use_case.execute(seller_actor, command())

        assert result.value.status == WithdrawalStatus.COMPLETED.value

    async def test_accepted_transfer_that_cannot_be_recorded_is_logged(
        self, use_case, seller_actor, mock_uow, caplog
    ):
        """
        Given: The gateway accepts the transfer but the second commit fails
        When: Seller withdraws
        Then: The request still succeeds and the transfer id is logged as an error
        """
        mock_uow.commit = AsyncMock(side_effect=[None, RuntimeError("connection lost")])

        with caplog.at_level("ERROR", logger="src.app.use_cases.withdrawals.request_withdrawal"):
            result = await use_case.execute(seller_actor, command())

        assert result.is_ok()
        mock_uow.rollback.assert_called_once()
        errors = [r for r in caplog.records if r.levelname == "ERROR"]
        assert len(errors) == 1
        assert "tra_1" in errors[0].getMessage()
        assert result.value.id in errors[0].getMessage()

    async def test_below_minimum(self, use_case, seller_actor, mock_ledger):
        result = await use_case.execute(seller_actor, command("9.99"))

        assert result.is_err()
        assert result.error.code == "INVALID_AMOUNT"
        mock_ledger.post.assert_not_called()

    async def test_exact_minimum_is_accepted(self, use_case, seller_actor):
        result = await use_case.execute(seller_actor, command("10.00"))

        assert result.is_ok()
        assert result.value.fee_amount == Decimal("0.50")
        assert result.value.net_amount == Decimal("9.50")

    async def test_not_a_seller(self, use_case, mock_seller_repo, mock_ledger):
        mock_seller_repo.get_by_account_id = AsyncMock(return_value=None)

        result = await use_case.execute(ActorContext(account_id="acc-buyer"), command())

        assert result.error.code == "NOT_A_SELLER"
        mock_ledger.post.assert_not_called()

    async def test_insufficient_balance_checks_gross(self, use_case, seller_actor, mock_ledger, mock_gateway):
        result = await use_case.execute(seller_actor, command("100.01"))

        assert result.error.code == "INSUFFICIENT_BALANCE"
        mock_ledger.post.assert_not_called()
        mock_gateway.create_transfer.assert_not_called()

    async def test_platform_account_created_on_first_use(self, use_case, seller_actor, mock_account_repo):
        mock_account_repo.get_by_id = AsyncMock(
            side_effect=lambda account_id, for_update=False: (
                Account(id="acc-seller", username="seller", email="s@example.com", balance=Decimal("100.00"))
                if account_id == "acc-seller" else None
            )
        )

        result = await use_case.execute(seller_actor, command())

        assert result.is_ok()
        created = mock_account_repo.create.call_args.args[0]
        assert created.id == PLATFORM_ID
        assert created.username == "platform"
        assert created.email == "platform@localhost"

    async def test_ledger_error_rolls_back_without_transfer(
        self, use_case, seller_actor, mock_ledger, mock_gateway, mock_uow
    ):
        mock_ledger.post = AsyncMock(
            return_value=Return.err(Error(code="INSUFFICIENT_BALANCE", message="raced"))
        )

        result = await use_case.execute(seller_actor, command())

        assert result.error.code == "INSUFFICIENT_BALANCE"
        mock_uow.rollback.assert_called_once()
        mock_gateway.create_transfer.assert_not_called()

    async def test_unexpected_exception(self, use_case, seller_actor, mock_withdrawal_repo, mock_uow):
        mock_withdrawal_repo.create = AsyncMock(side_effect=RuntimeError("db down"))

        result = await use_case.execute(seller_actor, command())

        assert result.error.code == "REQUEST_WITHDRAWAL_FAILED"
        mock_uow.rollback.assert_called_once()


@pytest.mark.asyncio
class TestUpdateWithdrawalStatus:

    @pytest.fixture
    def pending(self):
        return Withdrawal(
            id="wd-1",
            seller_id="seller-1",
            account_id="acc-seller",
            amount=Decimal("47.50"),
            gross_amount=Decimal("50.00"),
            fee_amount=Decimal("2.50"),
            destination_key="k",
            destination_key_type=PixKeyType.EVP,
        )

    @pytest.fixture
    def repo(self, pending):
        repo = MagicMock()
        repo.get_by_id = AsyncMock(return_value=pending)
        repo.update = AsyncMock(side_effect=lambda w: w)
        return repo

    async def test_admin_rejects(self, mock_uow, repo, pending):
        result = await UpdateWithdrawalStatus(mock_uow, repo).execute(
            ActorContext(account_id="admin", is_admin=True),
            "wd-1",
            UpdateWithdrawalStatusCommandDTO(status=WithdrawalStatus.REJECTED),
        )

        assert result.is_ok()
        assert result.value.status == "rejected"
        assert result.value.processed_at is not None
        mock_uow.commit.assert_called_once()

    async def test_admin_approves_without_processed_at(self, mock_uow, repo):
        result = await UpdateWithdrawalStatus(mock_uow, repo).execute(
            ActorContext(account_id="admin", is_admin=True),
            "wd-1",
            UpdateWithdrawalStatusCommandDTO(status=WithdrawalStatus.APPROVED),
        )

        assert result.value.status == "approved"
        assert result.value.processed_at is None

    async def test_non_admin_is_unauthorized(self, mock_uow, repo):
        result = await UpdateWithdrawalStatus(mock_uow, repo).execute(
            ActorContext(account_id="acc-seller"),
            "wd-1",
            UpdateWithdrawalStatusCommandDTO(status=WithdrawalStatus.COMPLETED),
        )

        assert result.error.code == "UNAUTHORIZED"
        repo.get_by_id.assert_not_called()

    async def test_terminal_status_cannot_change(self, mock_uow, repo, pending):
        pending.status = WithdrawalStatus.COMPLETED

        result = await UpdateWithdrawalStatus(mock_uow, repo).execute(
            ActorContext(account_id="admin", is_admin=True),
            "wd-1",
            UpdateWithdrawalStatusCommandDTO(status=WithdrawalStatus.REJECTED),
        )

        assert result.error.code == "INVALID_STATUS_TRANSITION"
        repo.update.assert_not_called()

    async def test_unknown_withdrawal(self, mock_uow, repo):
        repo.get_by_id = AsyncMock(return_value=None)

        result = await UpdateWithdrawalStatus(mock_uow, repo).execute(
            ActorContext(account_id="admin", is_admin=True),
            "wd-x",
            UpdateWithdrawalStatusCommandDTO(status=WithdrawalStatus.REJECTED),
        )

        assert result.error.code == "WITHDRAWAL_NOT_FOUND"
