"""ProcessPaystackEvent Use Case

Routes a verified Paystack webhook event to its handler and applies the
effect on payouts, ledgers, orders and subscriptions.
"""

import logging
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple
from libs.result import Result, Return
from src.app.errors import ModelMismatch
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.ledger_store import LedgerStore
from src.app.services.notification_service import NotificationService, UserNotification
from src.app.repositories.payout_repository import PayoutRepository
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.app.repositories.user_repository import UserRepository
from src.app.repositories.order_repository import OrderRepository, CustomerRepository
from src.app.repositories.revenue_repository import RevenueRepository
from src.domain.order import Order, Customer
from src.domain.payout import PayoutStatus
from src.domain.revenue import Revenue, RevenueActivity, SALE_COMMISSION
from src.domain.subscription import Subscription, SubscriptionStatus, UnknownSubscriptionStatus
from src.domain.user import AccountType
from .dtos import EventType, EventStatus, EventOutcomeDTO

logger = logging.getLogger(__name__)

Notification = Tuple[str, UserNotification, Dict[str, Any]]
Handler = Callable[[Dict[str, Any], List[Notification]], Awaitable[Tuple[EventStatus, str]]]


def credit_key(reference: str, product_id: str) -> str:
    return f"charge:{reference}:{product_id}"


class ProcessPaystackEvent:
    """
    Use Case: Process a Paystack webhook event

    Business Rules:
    1. Delivery is at-least-once; every handler checks current state
       before mutating, so a replayed event has no further effect
    2. Each event runs in its own transaction, rows re-read under lock
    3. A failing handler is rolled back and logged at CRITICAL with the
       full event; it never propagates to the caller
    4. Users are notified only after the transaction commits
    5. Unknown event types are ignored
    6. Platform revenue (subscriptions, sale commission) is recorded in
       the same transaction, once per provider event key

    Event handlers:
    - charge.success (purchase): orders, customers, seller credits, sale revenue
    - charge.success (renewal): subscription back to active, renewal revenue
    - subscription.create / not_renew / disable, invoice.payment_failed:
      subscription state machine
    - transfer.success / failed / reversed: settle the payout
    - invoice.create / invoice.update / subscription.expiring_cards: no effect
    """

    def __init__(
        self,
        uow: UnitOfWork,
        ledger_store: LedgerStore,
        payout_repo: PayoutRepository,
        subscription_repo: SubscriptionRepository,
        user_repo: UserRepository,
        order_repo: OrderRepository,
        customer_repo: CustomerRepository,
        revenue_repo: RevenueRepository,
        notification_service: NotificationService,
        subscription_price: int,
    ):
        self.uow = uow
        self.ledger_store = ledger_store
        self.payout_repo = payout_repo
        self.subscription_repo = subscription_repo
        self.user_repo = user_repo
        self.order_repo = order_repo
        self.customer_repo = customer_repo
        self.revenue_repo = revenue_repo
        self.notification_service = notification_service
        self.subscription_price = subscription_price

        self._handlers: Dict[EventType, Handler] = {
            EventType.CHARGE_SUCCESS: self._handle_charge_success,
            EventType.SUBSCRIPTION_CREATE: self._handle_subscription_create,
            EventType.SUBSCRIPTION_NOT_RENEW: self._handle_subscription_not_renew,
            EventType.SUBSCRIPTION_DISABLE: self._handle_subscription_disable,
            EventType.SUBSCRIPTION_EXPIRING_CARDS: self._acknowledge,
            EventType.INVOICE_CREATE: self._acknowledge,
            EventType.INVOICE_UPDATE: self._acknowledge,
            EventType.INVOICE_PAYMENT_FAILED: self._handle_invoice_payment_failed,
            EventType.TRANSFER_SUCCESS: self._handle_transfer_success,
            EventType.TRANSFER_FAILED: self._handle_transfer_failed,
            EventType.TRANSFER_REVERSED: self._handle_transfer_reversed,
        }

        missing = [t.value for t in EventType if t not in self._handlers]
        if missing:
            raise ValueError(f"No handler registered for events: {', '.join(missing)}")

    async def execute(self, payload: Dict[str, Any]) -> Result[EventOutcomeDTO]:
        """
        Process one webhook event

        Args:
            payload: Decoded webhook body ({"event": ..., "data": {...}})

        Returns:
            Result[EventOutcomeDTO]: Always ok; failures are reported in the outcome
        """
        event_name = str(payload.get("event", ""))
        data = payload.get("data") or {}

        try:
            event_type = EventType(event_name)
        except ValueError:
            logger.info(f"Ignoring unhandled Paystack event '{event_name}'")
            return Return.ok(
                EventOutcomeDTO(event=event_name, status=EventStatus.IGNORED, detail="unhandled event")
            )

        logger.info(f"Processing Paystack event {event_name}")

        handler = self._handlers[event_type]
        notifications: List[Notification] = []

        try:
            status, detail = await handler(data, notifications)

            if status is EventStatus.FAILED:
                await self.uow.rollback()
                logger.critical(
                    f"Paystack event {event_name} could not be applied: {detail}. Payload: {payload}"
                )
                return Return.ok(EventOutcomeDTO(event=event_name, status=status, detail=detail))

            await self.uow.commit()

        except ModelMismatch:
            raise
        except Exception as e:
            await self.uow.rollback()
            logger.critical(f"Paystack event {event_name} handler raised: {e}. Payload: {payload}")
            return Return.ok(
                EventOutcomeDTO(event=event_name, status=EventStatus.FAILED, detail=str(e))
            )

        for user_id, notification, context in notifications:
            await self.notification_service.notify_user(user_id, notification, context)

        logger.info(f"Paystack event {event_name}: {status.value} ({detail})")
        return Return.ok(EventOutcomeDTO(event=event_name, status=status, detail=detail))

    async def _acknowledge(
        self, data: Dict[str, Any], notifications: List[Notification]
    ) -> Tuple[EventStatus, str]:
        return EventStatus.IGNORED, "no action required"

    # Purchases and renewals

    async def _handle_charge_success(
        self, data: Dict[str, Any], notifications: List[Notification]
    ) -> Tuple[EventStatus, str]:
        metadata = data.get("metadata") or {}
        if isinstance(metadata, dict) and metadata.get("isPurchase"):
            return await self._handle_purchase(data, metadata, notifications)
        return await self._handle_subscription_renewal(data)

    async def _handle_purchase(
        self,
        data: Dict[str, Any],
        metadata: Dict[str, Any],
        notifications: List[Notification],
    ) -> Tuple[EventStatus, str]:
        reference = data.get("reference")
        buyer_id = metadata.get("buyer_id")
        recipient_id = metadata.get("recipient_id")

        if not reference:
            return EventStatus.FAILED, "charge has no reference"
        if not buyer_id and not recipient_id:
            return EventStatus.FAILED, "no buyer or recipient in purchase"

        # Gifts belong to the recipient
        owner_id = str(recipient_id or buyer_id)

        products = metadata.get("products") or []
        credited = 0
        gross = 0

        for product in products:
            product_id = str(product["product_id"])
            if not product.get("seller_id"):
                return EventStatus.FAILED, f"product {product_id} has no seller_id"
            seller_id = str(product["seller_id"])

            quantity = int(product.get("quantity", 1))
            total_amount = int(product["price"]) * quantity
            earning = int(product.get("amount", total_amount))
            gross += total_amount

            key = credit_key(reference, product_id)
            if await self.ledger_store.get_entry(key):
                logger.info(f"Line item {product_id} of {reference} already credited, skipping")
                continue

            credit = await self.ledger_store.credit(
                seller_id, earning, key, reference_type="order", reference_id=reference
            )
            if credit.is_err():
                return EventStatus.FAILED, credit.error.message

            order = await self.order_repo.create(
                Order(
                    reference_no=reference,
                    user_id=owner_id,
                    seller_id=seller_id,
                    product_id=product_id,
                    quantity=quantity,
                    total_amount=total_amount,
                )
            )
            await self.customer_repo.create(
                Customer(user_id=owner_id, merchant_id=seller_id, order_id=order.id)
            )

            notifications.append(
                (seller_id, UserNotification.ORDER_CREATED, {"order_id": order.id, "reference": reference})
            )
            notifications.append(
                (owner_id, UserNotification.PRODUCT_PURCHASED, {"product_id": product_id})
            )
            credited += 1

        if credited == 0:
            return EventStatus.SKIPPED, f"purchase {reference} already processed"

        await self._record_revenue(
            str(buyer_id or recipient_id),
            RevenueActivity.PURCHASE,
            "Purchase",
            gross,
            f"purchase:{reference}",
            commission_rate=SALE_COMMISSION,
        )
        return EventStatus.APPLIED, f"{credited} line item(s) credited for {reference}"

    async def _handle_subscription_renewal(self, data: Dict[str, Any]) -> Tuple[EventStatus, str]:
        subscription_code = data.get("subscription_code")
        if not subscription_code:
            return EventStatus.SKIPPED, "charge is neither a purchase nor a subscription renewal"

        subscription = await self.subscription_repo.get_by_subscription_code(
            subscription_code, for_update=True
        )
        if not subscription:
            return EventStatus.SKIPPED, f"unknown subscription {subscription_code}"

        status, detail = await self._transition(subscription, SubscriptionStatus.ACTIVE)

        # Cancelled subscriptions are not revived and earn nothing
        if subscription.status is not SubscriptionStatus.ACTIVE:
            return status, detail

        # Renewals of an already active subscription still pay
        reference = data.get("reference")
        if reference and await self._record_revenue(
            subscription.user_id,
            RevenueActivity.SUBSCRIPTION_RENEW,
            "Subscription",
            self._charged_amount(data),
            f"renew:{reference}",
        ):
            return EventStatus.APPLIED, f"renewal {reference} recorded for subscription {subscription.id}"
        return status, detail

    # Subscriptions

    async def _handle_subscription_create(
        self, data: Dict[str, Any], notifications: List[Notification]
    ) -> Tuple[EventStatus, str]:
        customer = data.get("customer") or {}
        customer_code = customer.get("customer_code")
        if not customer_code:
            return EventStatus.FAILED, "subscription.create without customer_code"

        subscription = await self.subscription_repo.get_by_customer_code(
            customer_code, for_update=True
        )
        if not subscription:
            return EventStatus.SKIPPED, f"no subscription for customer {customer_code}"

        target = self._provider_status(data, "active")
        if target is None:
            return EventStatus.FAILED, f"unrecognised subscription status {data.get('status')!r}"
        subscription_code = data.get("subscription_code") or subscription.subscription_code
        if subscription.status is target and subscription.subscription_code == subscription_code:
            return EventStatus.SKIPPED, f"subscription already {target.value}"
        if subscription.status is not target and not subscription.status.can_transition_to(target):
            logger.warning(
                f"Subscription {subscription.id} cannot move from "
                f"{subscription.status.value} to {target.value}"
            )
            return EventStatus.SKIPPED, f"subscription is {subscription.status.value}"

        subscription.subscription_code = subscription_code
        subscription.status = target
        await self.subscription_repo.update(subscription)

        if target.is_active_phase:
            await self._set_account_type(subscription.user_id, AccountType.PREMIUM)
            await self._record_revenue(
                subscription.user_id,
                RevenueActivity.SUBSCRIPTION,
                "Subscription",
                self._charged_amount(data),
                f"subscription:{subscription_code or subscription.id}",
            )

        return EventStatus.APPLIED, f"subscription {subscription.id} is {target.value}"

    async def _handle_subscription_not_renew(
        self, data: Dict[str, Any], notifications: List[Notification]
    ) -> Tuple[EventStatus, str]:
        subscription = await self._find_subscription(data.get("subscription_code"))
        if not subscription:
            return EventStatus.SKIPPED, "unknown subscription"

        target = self._provider_status(data, "non-renewing")
        if target is None:
            return EventStatus.FAILED, f"unrecognised subscription status {data.get('status')!r}"
        return await self._transition(subscription, target)

    async def _handle_invoice_payment_failed(
        self, data: Dict[str, Any], notifications: List[Notification]
    ) -> Tuple[EventStatus, str]:
        subscription_data = data.get("subscription") or {}
        subscription = await self._find_subscription(subscription_data.get("subscription_code"))
        if not subscription:
            return EventStatus.SKIPPED, "unknown subscription"

        status, detail = await self._transition(subscription, SubscriptionStatus.ATTENTION)
        if status is EventStatus.APPLIED:
            notifications.append(
                (
                    subscription.user_id,
                    UserNotification.SUBSCRIPTION_PAYMENT_FAILED,
                    {"description": data.get("description")},
                )
            )
        return status, detail

    async def _handle_subscription_disable(
        self, data: Dict[str, Any], notifications: List[Notification]
    ) -> Tuple[EventStatus, str]:
        subscription = await self._find_subscription(data.get("subscription_code"))
        if not subscription:
            return EventStatus.SKIPPED, "unknown subscription"

        status, detail = await self._transition(subscription, SubscriptionStatus.CANCELLED)
        if status is EventStatus.APPLIED:
            await self._set_account_type(subscription.user_id, AccountType.FREE)
            notifications.append(
                (subscription.user_id, UserNotification.SUBSCRIPTION_CANCELLED, {})
            )
        return status, detail

    async def _find_subscription(self, subscription_code: Optional[str]) -> Optional[Subscription]:
        if not subscription_code:
            return None
        return await self.subscription_repo.get_by_subscription_code(
            subscription_code, for_update=True
        )

    async def _transition(
        self, subscription: Subscription, target: SubscriptionStatus
    ) -> Tuple[EventStatus, str]:
        if subscription.status is target:
            return EventStatus.SKIPPED, f"subscription already {target.value}"

        if not subscription.status.can_transition_to(target):
            logger.warning(
                f"Subscription {subscription.id} cannot move from "
                f"{subscription.status.value} to {target.value}"
            )
            return EventStatus.SKIPPED, f"subscription is {subscription.status.value}"

        subscription.status = target
        await self.subscription_repo.update(subscription)
        return EventStatus.APPLIED, f"subscription {subscription.id} is {target.value}"

    async def _set_account_type(self, user_id: str, account_type: AccountType) -> None:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            logger.warning(f"Subscription owner {user_id} not found, account type unchanged")
            return
        user.account_type = account_type
        user.updated_at = datetime.utcnow()
        await self.user_repo.update(user)

    @staticmethod
    def _provider_status(data: Dict[str, Any], default: str) -> Optional[SubscriptionStatus]:
        try:
            return SubscriptionStatus.from_provider(data.get("status", default))
        except UnknownSubscriptionStatus as e:
            logger.error(f"Paystack sent unrecognised subscription status {e.status!r}")
            return None

    def _charged_amount(self, data: Dict[str, Any]) -> int:
        amount = data.get("amount")
        return int(amount) if amount else self.subscription_price

    # Revenue

    async def _record_revenue(
        self,
        user_id: str,
        activity: RevenueActivity,
        product: str,
        amount: int,
        reference: str,
        commission_rate=None,
    ) -> bool:
        if await self.revenue_repo.get_by_reference(reference):
            logger.info(f"Revenue {reference} already recorded, skipping")
            return False

        await self.revenue_repo.create(
            Revenue(
                user_id=user_id,
                activity=activity,
                product=product,
                amount=amount,
                commission_rate=commission_rate,
                reference=reference,
            )
        )
        return True

    # Transfers

    async def _handle_transfer_success(
        self, data: Dict[str, Any], notifications: List[Notification]
    ) -> Tuple[EventStatus, str]:
        return await self._settle_transfer(
            data, PayoutStatus.COMPLETED, UserNotification.WITHDRAW_SUCCESSFUL, notifications
        )

    async def _handle_transfer_failed(
        self, data: Dict[str, Any], notifications: List[Notification]
    ) -> Tuple[EventStatus, str]:
        return await self._settle_transfer(
            data, PayoutStatus.FAILED, UserNotification.WITHDRAW_FAILED, notifications
        )

    async def _handle_transfer_reversed(
        self, data: Dict[str, Any], notifications: List[Notification]
    ) -> Tuple[EventStatus, str]:
        return await self._settle_transfer(
            data, PayoutStatus.REVERSED, UserNotification.WITHDRAW_REVERSED, notifications
        )

    async def _settle_transfer(
        self,
        data: Dict[str, Any],
        outcome: PayoutStatus,
        notification: UserNotification,
        notifications: List[Notification],
    ) -> Tuple[EventStatus, str]:
        reference = data.get("reference")
        if not reference:
            return EventStatus.FAILED, "transfer event without reference"

        payout = await self.payout_repo.get_by_reference(reference, for_update=True)
        if not payout:
            logger.warning(f"Transfer event for unknown payout reference {reference}")
            return EventStatus.SKIPPED, f"unknown payout {reference}"

        if payout.status is not PayoutStatus.PENDING:
            return EventStatus.SKIPPED, f"payout {reference} already {payout.status.value}"

        event_amount = data.get("amount")
        if event_amount is not None and int(event_amount) != payout.amount:
            logger.warning(
                f"Transfer amount {event_amount} differs from payout {reference} "
                f"amount {payout.amount}; settling payout amount"
            )

        payout.status = outcome
        if outcome is not PayoutStatus.COMPLETED:
            reason = data.get("reason") or data.get("gateway_response") or outcome.value
            payout.failure_reason = str(reason)[:255]
        await self.payout_repo.update(payout)

        settled = await self.ledger_store.settle_withdrawal(
            payout.user_id, payout.amount, outcome, reference
        )
        if settled.is_err():
            return EventStatus.FAILED, settled.error.message

        notifications.append(
            (payout.user_id, notification, {"reference": reference, "amount": payout.amount})
        )
        return EventStatus.APPLIED, f"payout {reference} {outcome.value}"
