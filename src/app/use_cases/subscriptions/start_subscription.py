"""StartSubscription Use Case

Opens a premium subscription checkout for a user with the payment provider.
"""

import logging
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.errors import ErrorCode, ModelMismatch, ProviderError
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.payment_provider import PaymentProvider
from src.app.services.notification_service import NotificationService
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.app.repositories.user_repository import UserRepository
from src.domain.subscription import Subscription, SubscriptionStatus, UnknownSubscriptionStatus
from src.domain.user import AccountType
from .dtos import StartSubscriptionCommandDTO, StartSubscriptionResponseDTO

logger = logging.getLogger(__name__)


class StartSubscription:
    """
    Use Case: Start a subscription

    Business Rules:
    1. A user holds at most one non-cancelled subscription
    2. If the provider already has an active-phase subscription the
       service does not know about (e.g. after a data wipe), the provider
       state is written locally, the user is upgraded, operators are
       alerted and the request is rejected with SUBSCRIPTION_CONFLICT
    3. Otherwise a pending subscription is stored and the provider
       checkout is initialized; subscription.create activates it later

    Flow:
    1. Load user
    2. Reject if a local subscription is live
    3. Fetch provider customer and reconcile any live provider subscription
    4. Create provider customer if missing
    5. Persist pending subscription
    6. Initialize checkout transaction, commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        subscription_repo: SubscriptionRepository,
        user_repo: UserRepository,
        provider: PaymentProvider,
        notification_service: NotificationService,
        price: int,
        plan_code: str,
    ):
        self.uow = uow
        self.subscription_repo = subscription_repo
        self.user_repo = user_repo
        self.provider = provider
        self.notification_service = notification_service
        self.price = price
        self.plan_code = plan_code

    async def execute(
        self, command: StartSubscriptionCommandDTO
    ) -> Result[StartSubscriptionResponseDTO]:
        try:
            # Step 1: Load user
            user = await self.user_repo.get_by_id(command.user_id)
            if not user:
                return Return.err(
                    Error(
                        code=ErrorCode.USER_NOT_FOUND,
                        message=f"User {command.user_id} not found",
                    )
                )

            # Step 2: Local record wins
            current = await self.subscription_repo.get_current_by_user_id(user.id)
            if current:
                return Return.err(
                    Error(
                        code=ErrorCode.SUBSCRIPTION_CONFLICT,
                        message="You already have a subscription",
                        reason=f"subscription_id={current.id}, status={current.status.value}",
                    )
                )

            # Step 3: Provider may know a subscription we lost
            customer = await self.provider.fetch_customer(user.email)
            remote = customer.current_subscription() if customer else None

            if remote and SubscriptionStatus.from_provider(remote.status).is_active_phase:
                return await self._reconcile(user, customer.customer_code, remote)

            # Step 4: Provider customer
            if not customer:
                customer = await self.provider.create_customer(
                    user.email, user.full_name, user.phone_number
                )

            # Step 5: Pending subscription
            subscription = await self.subscription_repo.create(
                Subscription(
                    user_id=user.id,
                    customer_code=customer.customer_code,
                    status=SubscriptionStatus.PENDING,
                )
            )

            # Step 6: Checkout
            checkout = await self.provider.initialize_transaction(
                user.email, self.price, self.plan_code or None
            )

            await self.uow.commit()

            logger.info(
                f"Subscription {subscription.id} started for user {user.id} "
                f"(customer={customer.customer_code})"
            )

            return Return.ok(
                StartSubscriptionResponseDTO(
                    subscription_id=subscription.id,
                    status=subscription.status.value,
                    customer_code=customer.customer_code,
                    authorization_url=checkout.authorization_url,
                    access_code=checkout.access_code,
                    reference=checkout.reference,
                )
            )

        except ModelMismatch:
            raise
        except ProviderError as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code=ErrorCode.PROVIDER_ERROR,
                    message="Payment provider could not start the subscription",
                    reason=e.message,
                )
            )
        except UnknownSubscriptionStatus as e:
            await self.uow.rollback()
            logger.error(
                f"Provider returned unrecognised subscription status {e.status!r} "
                f"for user {command.user_id}"
            )
            return Return.err(
                Error(
                    code=ErrorCode.PROVIDER_ERROR,
                    message="Payment provider reported an unrecognised subscription status",
                    reason=f"status={e.status}",
                )
            )
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="START_SUBSCRIPTION_FAILED",
                    message="Failed to start subscription",
                    reason=str(e),
                )
            )

    async def _reconcile(self, user, customer_code, remote) -> Result[StartSubscriptionResponseDTO]:
        status = SubscriptionStatus.from_provider(remote.status)

        subscription = await self.subscription_repo.create(
            Subscription(
                user_id=user.id,
                customer_code=customer_code,
                subscription_code=remote.subscription_code,
                status=status,
            )
        )

        user.account_type = AccountType.PREMIUM
        user.updated_at = datetime.utcnow()
        await self.user_repo.update(user)

        await self.uow.commit()

        message = (
            f"Provider reports {status.value} subscription {remote.subscription_code} "
            f"for user {user.id} with no local record; provider state restored"
        )
        logger.warning(message)
        await self.notification_service.alert_operators(
            message,
            {
                "user_id": user.id,
                "subscription_id": subscription.id,
                "customer_code": customer_code,
                "subscription_code": remote.subscription_code,
            },
        )

        return Return.err(
            Error(
                code=ErrorCode.SUBSCRIPTION_CONFLICT,
                message="You already have an active subscription",
                reason=f"subscription_code={remote.subscription_code}",
            )
        )
