"""Ledger Entry Domain Entity

Immutable append-only audit trail of all ledger mutations.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, BigInteger, String
from src.domain.base import BaseModel, generate_uuid


class EntryType(str, Enum):
    """Ledger entry types"""
    CREDIT = "credit"                      # Sale settled, total_earnings += amount
    RESERVE = "reserve"                    # Withdrawal initiated, pending += amount
    SETTLE_COMPLETED = "settle_completed"  # Transfer succeeded, pending -> withdrawn
    RELEASE = "release"                    # Transfer failed/reversed, pending -= amount


class LedgerEntry(BaseModel, table=True):
    """
    Ledger Entry - Immutable audit trail of ledger mutations

    Domain Rules:
    - Entries are immutable (append-only)
    - idempotency_key must be unique (prevents double-crediting a sale
      or double-settling a payout)
    - Counter snapshots record the ledger state after the mutation
    """

    __tablename__ = "ledger_entries"
    __table_args__ = (
        Index('ix_ledger_entries_created_at', 'created_at'),
        Index('ix_ledger_entries_reference', 'reference_type', 'reference_id'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Entry identifier (uuid)"
    )

    user_id: str = Field(
        index=True,
        description="User ID for query optimization"
    )

    ledger_id: str = Field(
        sa_column=Column(String(36), ForeignKey("ledgers.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Ledger"
    )

    entry_type: EntryType = Field(
        description="Type of entry (credit, reserve, settle_completed, release)"
    )

    amount: int = Field(
        sa_column=Column(BigInteger, nullable=False),
        description="Amount moved (always positive)"
    )

    total_earnings_after: int = Field(sa_column=Column(BigInteger, nullable=False))

    withdrawn_earnings_after: int = Field(sa_column=Column(BigInteger, nullable=False))

    pending_after: int = Field(sa_column=Column(BigInteger, nullable=False))

    reference_type: Optional[str] = Field(
        default=None,
        sa_column=Column(String(50), nullable=True),
        description="Type of reference (e.g., 'order', 'payout')"
    )

    reference_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="ID of referenced entity (e.g., payout reference)"
    )

    idempotency_key: str = Field(
        unique=True,
        index=True,
        description="Unique key for idempotent mutations (e.g., charge:ref:product)"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Entry timestamp (immutable)"
    )
