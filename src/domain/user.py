"""User Domain Entity

Marketplace user. Only the fields the payout and subscription flows
read or write are modelled here.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import String
from src.domain.base import BaseModel, generate_uuid


class AccountType(str, Enum):
    """User account tiers"""
    FREE = "free"
    FREE_TRIAL = "free_trial"
    PREMIUM = "premium"


class User(BaseModel, table=True):
    """
    User - Marketplace account holder (buyer and/or seller)

    Domain Rules:
    - email is unique
    - account_type is driven by subscription events (premium/free)
    - payout_setup_at is stamped when the first payout account is added
    """

    __tablename__ = "users"

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="User identifier (uuid)"
    )

    email: str = Field(
        sa_column=Column(String(255), nullable=False, unique=True, index=True),
        description="Email address (unique)"
    )

    full_name: str = Field(
        default="",
        sa_column=Column(String(255), nullable=False, default=""),
        description="Full name as registered"
    )

    phone_number: Optional[str] = Field(
        default=None,
        sa_column=Column(String(32), nullable=True),
        description="Phone number"
    )

    account_type: AccountType = Field(
        default=AccountType.FREE,
        description="Account tier (free, free_trial, premium)"
    )

    payout_setup_at: Optional[datetime] = Field(
        default=None,
        description="When the user first configured a payout account"
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)

    updated_at: datetime = Field(default_factory=datetime.utcnow)
