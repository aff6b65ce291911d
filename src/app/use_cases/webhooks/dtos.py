"""Data Transfer Objects for Webhook Use Cases"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel


class EventType(str, Enum):
    """Paystack events the service knows how to route"""
    CHARGE_SUCCESS = "charge.success"
    SUBSCRIPTION_CREATE = "subscription.create"
    SUBSCRIPTION_NOT_RENEW = "subscription.not_renew"
    SUBSCRIPTION_DISABLE = "subscription.disable"
    SUBSCRIPTION_EXPIRING_CARDS = "subscription.expiring_cards"
    INVOICE_CREATE = "invoice.create"
    INVOICE_UPDATE = "invoice.update"
    INVOICE_PAYMENT_FAILED = "invoice.payment_failed"
    TRANSFER_SUCCESS = "transfer.success"
    TRANSFER_FAILED = "transfer.failed"
    TRANSFER_REVERSED = "transfer.reversed"


class EventStatus(str, Enum):
    """What processing an event did"""
    APPLIED = "applied"
    SKIPPED = "skipped"    # already handled or state does not allow it
    IGNORED = "ignored"    # acknowledged, no effect
    FAILED = "failed"


class EventOutcomeDTO(BaseModel):
    """Result of processing one webhook event"""

    event: str
    status: EventStatus
    detail: Optional[str] = None
