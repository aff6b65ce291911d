from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.paystack_client import PaystackClient
from src.adapter.services.notification_service import create_notification_service
from src.app.services.payment_provider import PaymentProvider
from src.app.services.notification_service import NotificationService

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def get_payment_provider() -> PaymentProvider:
    return PaystackClient(
        secret_key=ApplicationConfig.PAYSTACK_SECRET_KEY,
        base_url=ApplicationConfig.PAYSTACK_BASE_URL,
        timeout=ApplicationConfig.PAYSTACK_TIMEOUT_SECONDS,
        currency=ApplicationConfig.PAYSTACK_TRANSFER_CURRENCY,
        callback_url=ApplicationConfig.CLIENT_URL,
    )


def get_notification_service() -> NotificationService:
    return create_notification_service(
        webhook_url=ApplicationConfig.NOTIFICATION_WEBHOOK_URL,
        operator_webhook_url=ApplicationConfig.OPERATOR_ALERT_WEBHOOK_URL,
    )
