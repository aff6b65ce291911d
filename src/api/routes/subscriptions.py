"""Subscription API Routes"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.schemas.payout_request import StartSubscriptionRequestSchema
from src.app.use_cases.subscriptions.dtos import (
    StartSubscriptionCommandDTO,
    StartSubscriptionResponseDTO,
)
from src.app.use_cases.subscriptions.start_subscription import StartSubscription
from src.app.services.payment_provider import PaymentProvider
from src.app.services.notification_service import NotificationService
from src.adapter.repositories.subscription_repository import SqlAlchemySubscriptionRepository
from src.adapter.repositories.user_repository import SqlAlchemyUserRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session, get_payment_provider, get_notification_service
from src.api.error import ClientError

router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])


@router.post(
    "",
    response_model=StartSubscriptionResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {
            "description": "User already has a subscription",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "SUBSCRIPTION_CONFLICT",
                            "message": "You already have a subscription"
                        }
                    }
                }
            }
        },
        502: {"description": "Payment provider could not start the subscription"},
    }
)
async def start_subscription(
    request: StartSubscriptionRequestSchema,
    session: AsyncSession = Depends(get_session),
    provider: PaymentProvider = Depends(get_payment_provider),
    notification_service: NotificationService = Depends(get_notification_service),
):
    """
    Start a premium subscription.

    Returns the Paystack checkout URL. The subscription stays `pending`
    until Paystack sends `subscription.create`.
    """
    use_case = StartSubscription(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemySubscriptionRepository(session),
        SqlAlchemyUserRepository(session),
        provider,
        notification_service,
        price=ApplicationConfig.SUBSCRIPTION_PRICE,
        plan_code=ApplicationConfig.PAYSTACK_PLAN_CODE,
    )
    result = await use_case.execute(StartSubscriptionCommandDTO(user_id=request.user_id))

    if result.is_err():
        raise ClientError(result.error)

    return result.value
