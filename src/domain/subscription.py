"""Subscription Domain Entity

Tracks a user's premium subscription as reported by the payment provider.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import String
from src.domain.base import BaseModel, generate_uuid


class UnknownSubscriptionStatus(ValueError):
    """Provider reported a subscription status outside the known vocabulary"""

    def __init__(self, status):
        super().__init__(f"Unknown provider subscription status: {status!r}")
        self.status = status


class SubscriptionStatus(str, Enum):
    """Subscription status types (provider vocabulary)"""
    PENDING = "pending"
    ACTIVE = "active"
    NON_RENEWING = "non-renewing"
    ATTENTION = "attention"
    CANCELLED = "cancelled"

    @classmethod
    def from_provider(cls, value: str) -> "SubscriptionStatus":
        # Paystack reports finished plans as "completed"
        if value == "completed":
            return cls.CANCELLED
        try:
            return cls(value)
        except ValueError:
            raise UnknownSubscriptionStatus(value) from None

    @property
    def is_active_phase(self) -> bool:
        return self in _ACTIVE_PHASE

    def can_transition_to(self, target: "SubscriptionStatus") -> bool:
        if self is SubscriptionStatus.CANCELLED:
            return False
        if self is SubscriptionStatus.PENDING:
            return target is not SubscriptionStatus.PENDING
        return target is SubscriptionStatus.CANCELLED or target in _ACTIVE_PHASE


_ACTIVE_PHASE = frozenset({
    SubscriptionStatus.ACTIVE,
    SubscriptionStatus.NON_RENEWING,
    SubscriptionStatus.ATTENTION,
})


class Subscription(BaseModel, table=True):
    """
    Subscription - User premium plan

    Domain Rules:
    - Status transitions: pending -> active -> cancelled (or pending -> cancelled)
    - non-renewing and attention are active-phase states
    - cancelled is terminal
    - One non-cancelled subscription per user (enforced at business logic layer)
    """

    __tablename__ = "subscriptions"
    __table_args__ = (
        Index('ix_subscriptions_user_id', 'user_id'),
        Index('ix_subscriptions_customer_code', 'customer_code'),
        Index('ix_subscriptions_subscription_code', 'subscription_code'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Subscription identifier (uuid)"
    )

    user_id: str = Field(
        sa_column=Column(String(36), nullable=False),
        description="Subscribed user ID"
    )

    customer_code: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Provider customer code"
    )

    subscription_code: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100), nullable=True),
        description="Provider subscription code (set once the provider confirms)"
    )

    status: SubscriptionStatus = Field(
        default=SubscriptionStatus.PENDING,
        description="Subscription status"
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)

    updated_at: datetime = Field(default_factory=datetime.utcnow)
