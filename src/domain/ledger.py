"""Ledger Domain Entity

Tracks earnings per user. Each user has at most one ledger.
All amounts are integers in the minor currency unit (kobo).
"""

from datetime import datetime
from sqlmodel import Field, Column
from sqlalchemy import CheckConstraint, BigInteger, String
from src.domain.base import BaseModel, generate_uuid


class Ledger(BaseModel, table=True):
    """
    Ledger - Per-user running balance

    Domain Rules:
    - One ledger per user (user_id is unique)
    - total_earnings only ever grows (credited on settled sales)
    - withdrawn_earnings <= total_earnings
    - pending is the amount currently in flight for withdrawal
    - available = total_earnings - withdrawn_earnings - pending >= 0
    - Mutated only through LedgerStore, under a row lock
    """

    __tablename__ = "ledgers"
    __table_args__ = (
        CheckConstraint('total_earnings >= 0', name='total_earnings_non_negative'),
        CheckConstraint('withdrawn_earnings >= 0', name='withdrawn_earnings_non_negative'),
        CheckConstraint('pending >= 0', name='pending_non_negative'),
        CheckConstraint(
            'total_earnings - withdrawn_earnings - pending >= 0',
            name='available_non_negative',
        ),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Ledger identifier (uuid)"
    )

    user_id: str = Field(
        sa_column=Column(String(36), nullable=False, unique=True, index=True),
        description="Owner user ID (unique - one ledger per user)"
    )

    total_earnings: int = Field(
        default=0,
        sa_column=Column(BigInteger, nullable=False, default=0),
        description="Lifetime credited earnings"
    )

    withdrawn_earnings: int = Field(
        default=0,
        sa_column=Column(BigInteger, nullable=False, default=0),
        description="Earnings paid out successfully"
    )

    pending: int = Field(
        default=0,
        sa_column=Column(BigInteger, nullable=False, default=0),
        description="Earnings reserved for in-flight withdrawals"
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)

    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def available(self) -> int:
        return self.total_earnings - self.withdrawn_earnings - self.pending
