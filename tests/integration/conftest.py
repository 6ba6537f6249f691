from datetime import date
from decimal import Decimal
from typing import Optional
import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401
from libs.result import Return, Error
from src.adapter.repositories import (
    SqlAlchemyAccountRepository,
    SqlAlchemyLedgerTransactionRepository,
    SqlAlchemySellerRepository,
)
from src.app import errors
from src.app.services.ledger import Ledger
from src.app.services.payment_gateway import (
    DepositIntent,
    PaymentGateway,
    PaymentStatus,
    TransferReceipt,
)
from src.depends import get_payment_gateway, get_session, get_webhook_token
from src.domain.account import Account
from src.domain.ledger_transaction import TransactionType
from src.domain.payment_reference import PaymentReference
from src.domain.seller import Seller

WEBHOOK_TOKEN = "whsec-test"


class FakePaymentGateway(PaymentGateway):
    """In-memory gateway: deposits are created PENDING and confirmed by the test"""

    def __init__(self):
        self.payments: dict[str, PaymentStatus] = {}
        self.transfers: list[dict] = []
        self.transfer_accepted = True
        self._counter = 0

    async def create_deposit(self, account, amount, billing_type, tax_id=None, description=None):
        if amount < Decimal("5.00"):
            return Return.err(Error(code=errors.INVALID_AMOUNT, message="Minimum deposit is 5.00"))

        self._counter += 1
        payment_id = f"pay_{self._counter:06d}"
        self.payments[payment_id] = PaymentStatus(
            gateway_payment_id=payment_id,
            status="PENDING",
            value=amount,
            billing_type=billing_type.value,
            external_reference=PaymentReference.for_deposit(account.id).dumps(),
        )
        return Return.ok(
            DepositIntent(
                gateway_payment_id=payment_id,
                status="PENDING",
                billing_type=billing_type.value,
                value=amount,
                due_date=date(2025, 11, 28),
                pix_qr_code="iVBORw0KGgo=",
                pix_copy_paste="00020126580014br.gov.bcb.pix",
            )
        )

    def confirm(self, payment_id: str, status: str = "CONFIRMED"):
        self.payments[payment_id].status = status
        self.payments[payment_id].confirmed_date = date(2025, 11, 27)

    async def create_transfer(self, amount, destination_key, destination_key_type, reference, description=None):
        self.transfers.append({"amount": amount, "reference": reference})
        if not self.transfer_accepted:
            return Return.err(Error(code=errors.GATEWAY_UNAVAILABLE, message="Payment gateway timed out"))
        return Return.ok(TransferReceipt(gateway_transfer_id=f"tra_{len(self.transfers):06d}", accepted=True))

    async def fetch_payment_status(self, gateway_payment_id):
        payment = self.payments.get(gateway_payment_id)
        if not payment:
            return Return.err(
                Error(code=errors.PAYMENT_NOT_FOUND, message=f"Payment {gateway_payment_id} not found")
            )
        return Return.ok(payment)


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """File-backed SQLite so concurrent sessions really use separate connections"""
    db_url = f"sqlite+aiosqlite:///{tmp_path / 'marketplace_test.db'}"

    engine = create_async_engine(db_url, echo=False, future=True, connect_args={"timeout": 30})

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a new database session for each test"""
    async with session_factory() as session:
        yield session


@pytest.fixture
def gateway():
    return FakePaymentGateway()


@pytest.fixture
def create_account(session_factory):
    """Insert an account, optionally funded through a seed deposit"""

    async def _create(
        username: Optional[str] = None,
        balance: Decimal = Decimal("0.00"),
        is_admin: bool = False,
    ) -> Account:
        username = username or f"user_{uuid.uuid4().hex[:8]}"
        async with session_factory() as session:
            account_repo = SqlAlchemyAccountRepository(session)
            account = await account_repo.create(
                Account(username=username, email=f"{username}@example.com", is_admin=is_admin)
            )
            if balance > 0:
                ledger = Ledger(account_repo, SqlAlchemyLedgerTransactionRepository(session))
                result = await ledger.credit(
                    account_id=account.id,
                    amount=balance,
                    transaction_type=TransactionType.DEPOSIT,
                    idempotency_key=f"deposit:seed-{uuid.uuid4().hex}",
                    description="Seed deposit",
                )
                assert result.is_ok()
            await session.commit()
            return await account_repo.get_by_id(account.id)

    return _create


@pytest.fixture
def create_seller(session_factory):
    async def _create(account: Account, **offer) -> Seller:
        async with session_factory() as session:
            seller = await SqlAlchemySellerRepository(session).create(
                Seller(account_id=account.id, is_online=True, **offer)
            )
            await session.commit()
            return seller

    return _create


@pytest.fixture
def get_account(session_factory):
    async def _get(account_id: str) -> Optional[Account]:
        async with session_factory() as session:
            return await SqlAlchemyAccountRepository(session).get_by_id(account_id)

    return _get


@pytest_asyncio.fixture
async def client(session_factory, gateway):
    """Create test client with database session and gateway overrides"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # One session per request, like production
    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    app.dependency_overrides[get_webhook_token] = lambda: WEBHOOK_TOKEN

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def webhook_headers():
    return {"asaas-access-token": WEBHOOK_TOKEN}
