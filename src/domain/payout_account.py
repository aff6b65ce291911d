"""Payout Account Domain Entity

Bank accounts a user can be paid out to.
"""

from datetime import datetime
from sqlmodel import Field, Column, Index
from sqlalchemy import Boolean, String, text
from src.domain.base import BaseModel, generate_uuid


class PayoutAccount(BaseModel, table=True):
    """
    Payout Account - Registered withdrawal destination

    Domain Rules:
    - At most one account per user is active (partial unique index)
    - The first account a user adds becomes active
    - Activating an account deactivates its siblings in the same transaction
    - account_number is unique across the platform
    - Accounts are never hard-deleted while payouts reference them
    """

    __tablename__ = "payout_accounts"
    __table_args__ = (
        Index(
            'uq_payout_accounts_user_active',
            'user_id',
            unique=True,
            sqlite_where=text('active = 1'),
            postgresql_where=text('active'),
        ),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Account identifier (uuid)"
    )

    user_id: str = Field(
        sa_column=Column(String(36), nullable=False, index=True),
        description="Owner user ID"
    )

    # Kept as string so leading zeros survive
    account_number: str = Field(
        sa_column=Column(String(20), nullable=False, unique=True),
        description="Bank account number"
    )

    account_name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Account holder name"
    )

    bank_code: str = Field(
        sa_column=Column(String(20), nullable=False),
        description="Provider bank code"
    )

    bank_name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Bank display name"
    )

    recipient_code: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Provider transfer recipient token"
    )

    active: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False),
        description="Whether this is the user's payout destination"
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)

    updated_at: datetime = Field(default_factory=datetime.utcnow)
