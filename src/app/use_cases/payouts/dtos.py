"""Data Transfer Objects for Payout Use Cases"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class InitiatePayoutCommandDTO(BaseModel):
    """Command DTO for withdrawing earnings to the active payout account"""

    user_id: str = Field(..., min_length=1, description="User withdrawing earnings")

    amount: int = Field(..., gt=0, description="Amount in minor units (must be positive)")

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": "9b1f3c2e-5d0a-4c55-9a53-2f1f0b7c1e11",
                "amount": 250000,
            }
        }


class PayoutResponseDTO(BaseModel):
    """Response DTO for a payout"""

    id: str
    user_id: str
    account_id: str
    reference: str
    amount: int
    status: str
    transfer_code: Optional[str] = None
    failure_reason: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class PayoutListResponseDTO(BaseModel):
    """Paginated payout history"""

    payouts: List[PayoutResponseDTO]
    total: int
    limit: int
    offset: int
