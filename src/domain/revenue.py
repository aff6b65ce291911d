"""Revenue Domain Entity

Platform revenue: subscription payments and the commission share of
marketplace sales.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, Numeric, String
from src.domain.base import BaseModel, generate_uuid

SALE_COMMISSION = Decimal("0.05")


class RevenueActivity(str, Enum):
    """What earned the platform the revenue"""
    SUBSCRIPTION = "subscription"
    SUBSCRIPTION_RENEW = "subscription_renew"
    PURCHASE = "purchase"


class RevenueStatus(str, Enum):
    COMPLETED = "completed"
    PENDING = "pending"
    FAILED = "failed"


class Revenue(BaseModel, table=True):
    """
    Revenue - One platform revenue record

    Domain Rules:
    - reference is unique; a provider event records revenue at most once
    - amount is the gross charge in minor units
    - commission_rate is the platform share of a sale (None for subscriptions,
      which the platform keeps whole)
    """

    __tablename__ = "revenues"
    __table_args__ = (
        Index('ix_revenues_activity', 'activity'),
        Index('ix_revenues_created_at', 'created_at'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Revenue identifier (uuid)"
    )

    user_id: str = Field(
        sa_column=Column(String(36), nullable=False, index=True),
        description="Paying user"
    )

    activity: RevenueActivity = Field(description="Revenue source")

    product: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Display label (e.g. 'Subscription', 'Purchase')"
    )

    amount: int = Field(
        sa_column=Column(BigInteger, nullable=False),
        description="Gross amount in minor units"
    )

    commission_rate: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(5, 4), nullable=True),
        description="Platform share of a sale"
    )

    status: RevenueStatus = Field(default=RevenueStatus.COMPLETED)

    reference: str = Field(
        sa_column=Column(String(255), nullable=False, unique=True),
        description="Provider event key (e.g. renew:<charge reference>)"
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)
