from decimal import Decimal
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.payment_gateway import AsaasPaymentGateway
from src.app.services.payment_gateway import PaymentGateway

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def get_payment_gateway() -> PaymentGateway:
    return AsaasPaymentGateway(
        base_url=ApplicationConfig.GATEWAY_BASE_URL,
        api_key=ApplicationConfig.GATEWAY_API_KEY,
        timeout=ApplicationConfig.GATEWAY_TIMEOUT_SECONDS,
        min_deposit_amount=Decimal(str(ApplicationConfig.MIN_DEPOSIT_AMOUNT)),
    )


def get_webhook_token() -> Optional[str]:
    return ApplicationConfig.GATEWAY_WEBHOOK_TOKEN
