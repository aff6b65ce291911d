"""Data Transfer Objects for Earnings Use Cases"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class EarningsResponseDTO(BaseModel):
    """
    Response DTO for a user's earnings

    Returned by GetEarnings. All amounts are in minor units.
    """

    user_id: str = Field(..., description="User identifier")

    total_earnings: int = Field(..., description="Lifetime credited earnings")

    withdrawn_earnings: int = Field(..., description="Earnings paid out")

    pending: int = Field(..., description="Earnings reserved for in-flight withdrawals")

    available_earnings: int = Field(
        ..., description="total_earnings - withdrawn_earnings - pending"
    )

    last_updated: Optional[datetime] = Field(
        default=None, description="Last ledger update (None if the user never earned)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": "9b1f3c2e-5d0a-4c55-9a53-2f1f0b7c1e11",
                "total_earnings": 1000000,
                "withdrawn_earnings": 250000,
                "pending": 50000,
                "available_earnings": 700000,
                "last_updated": "2024-06-01T12:00:00Z",
            }
        }


class EarningsSummaryDTO(BaseModel):
    """Platform-wide seller earnings totals and platform revenue"""

    total_earnings: int
    withdrawn_earnings: int
    pending: int
    available_earnings: int
    platform_revenue: int = Field(..., description="Subscription revenue plus sale commission")
    subscription_revenue: int
    sale_revenue: int = Field(..., description="Gross marketplace sales")
    sale_commission: int


class LedgerDiscrepancyDTO(BaseModel):
    """A ledger whose counters disagree with its entry history"""

    user_id: str
    ledger_id: str
    total_earnings: int
    calculated_total_earnings: int
    withdrawn_earnings: int
    calculated_withdrawn_earnings: int
    pending: int
    calculated_pending: int


class ReconciliationResultDTO(BaseModel):
    """Result of a ledger reconciliation run"""

    total_ledgers_checked: int
    discrepancies_found: int
    discrepancies: List[LedgerDiscrepancyDTO]
    reconciliation_time: datetime
    execution_time_ms: int
