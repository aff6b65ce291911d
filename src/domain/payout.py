"""Payout Domain Entity

A single withdrawal attempt and its lifecycle.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, ForeignKey, String
from src.domain.base import BaseModel, generate_uuid


class PayoutStatus(str, Enum):
    """Payout status types"""
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REVERSED = "reversed"

    @property
    def is_terminal(self) -> bool:
        return self is not PayoutStatus.PENDING


class Payout(BaseModel, table=True):
    """
    Payout - Withdrawal request to a payout account

    Domain Rules:
    - reference is unique and correlates the request with provider events
    - Created in PENDING; moves once to COMPLETED, FAILED or REVERSED
    - Terminal statuses never change again
    """

    __tablename__ = "payouts"
    __table_args__ = (
        Index('ix_payouts_user_id', 'user_id'),
        Index('ix_payouts_status', 'status'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Payout identifier (uuid)"
    )

    account_id: str = Field(
        sa_column=Column(String(36), ForeignKey("payout_accounts.id"), nullable=False),
        description="Destination payout account"
    )

    user_id: str = Field(
        sa_column=Column(String(36), nullable=False),
        description="User whose earnings are withdrawn"
    )

    reference: str = Field(
        sa_column=Column(String(64), nullable=False, unique=True, index=True),
        description="Unique transfer reference (idempotency/correlation key)"
    )

    amount: int = Field(
        sa_column=Column(BigInteger, nullable=False),
        description="Amount in minor units"
    )

    status: PayoutStatus = Field(
        default=PayoutStatus.PENDING,
        description="Payout status (pending, completed, failed, reversed)"
    )

    transfer_code: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100), nullable=True),
        description="Provider transfer code"
    )

    failure_reason: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Why the payout did not complete"
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)

    updated_at: datetime = Field(default_factory=datetime.utcnow)
