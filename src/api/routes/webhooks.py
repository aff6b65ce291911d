"""Webhook API Routes

Receives Paystack events. Always answers 200 so Paystack does not retry
events the service has already logged.
"""

import json
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Header, Request, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.webhooks.process_paystack_event import ProcessPaystackEvent
from src.app.services.ledger_store import LedgerStore
from src.app.services.payment_provider import PaymentProvider
from src.app.services.notification_service import NotificationService
from src.adapter.repositories.ledger_repository import SqlAlchemyLedgerRepository
from src.adapter.repositories.ledger_entry_repository import SqlAlchemyLedgerEntryRepository
from src.adapter.repositories.payout_repository import SqlAlchemyPayoutRepository
from src.adapter.repositories.subscription_repository import SqlAlchemySubscriptionRepository
from src.adapter.repositories.user_repository import SqlAlchemyUserRepository
from src.adapter.repositories.order_repository import (
    SqlAlchemyOrderRepository,
    SqlAlchemyCustomerRepository,
)
from src.adapter.repositories.revenue_repository import SqlAlchemyRevenueRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session, get_payment_provider, get_notification_service
from config import ApplicationConfig

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhooks", tags=["Webhooks"])


@router.post("/paystack", status_code=status.HTTP_200_OK)
async def paystack_webhook(
    request: Request,
    x_paystack_signature: Optional[str] = Header(None),
    session: AsyncSession = Depends(get_session),
    provider: PaymentProvider = Depends(get_payment_provider),
    notification_service: NotificationService = Depends(get_notification_service),
):
    """
    Paystack webhook receiver.

    The `x-paystack-signature` header must be the hex HMAC-SHA512 of the
    raw body keyed with the Paystack secret. Unsigned or mis-signed
    requests are logged and dropped.
    """
    body = await request.body()

    if not provider.verify_webhook_signature(body, x_paystack_signature):
        logger.critical(
            f"Rejected Paystack webhook with invalid signature from "
            f"{request.client.host if request.client else 'unknown'}"
        )
        return Response(status_code=status.HTTP_200_OK)

    try:
        payload = json.loads(body)
    except ValueError as e:
        logger.critical(f"Paystack webhook body is not valid JSON: {e}")
        return Response(status_code=status.HTTP_200_OK)

    if not isinstance(payload, dict):
        logger.critical(f"Paystack webhook body is not an object: {payload!r}")
        return Response(status_code=status.HTTP_200_OK)

    use_case = ProcessPaystackEvent(
        SqlAlchemyUnitOfWork(session),
        LedgerStore(
            SqlAlchemyLedgerRepository(session), SqlAlchemyLedgerEntryRepository(session)
        ),
        SqlAlchemyPayoutRepository(session),
        SqlAlchemySubscriptionRepository(session),
        SqlAlchemyUserRepository(session),
        SqlAlchemyOrderRepository(session),
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyRevenueRepository(session),
        notification_service,
        subscription_price=ApplicationConfig.SUBSCRIPTION_PRICE,
    )
    result = await use_case.execute(payload)

    return result.value
