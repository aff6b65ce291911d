"""Data Transfer Objects for Payout Account Use Cases"""

from datetime import datetime
from pydantic import BaseModel, Field


class AddPayoutAccountCommandDTO(BaseModel):
    """Command DTO for registering a bank account as a payout destination"""

    user_id: str = Field(..., min_length=1, description="Account owner")

    account_number: str = Field(
        ...,
        min_length=6,
        max_length=20,
        pattern=r"^\d+$",
        description="Bank account number (digits only, leading zeros preserved)",
    )

    account_name: str = Field(..., min_length=1, max_length=255, description="Account holder name")

    bank_code: str = Field(..., min_length=1, max_length=20, description="Provider bank code")

    bank_name: str = Field(..., min_length=1, max_length=255, description="Bank display name")

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": "9b1f3c2e-5d0a-4c55-9a53-2f1f0b7c1e11",
                "account_number": "0123456789",
                "account_name": "Ada Obi",
                "bank_code": "058",
                "bank_name": "Guaranty Trust Bank",
            }
        }


class PayoutAccountResponseDTO(BaseModel):
    """Response DTO for a payout account"""

    id: str
    user_id: str
    account_number: str
    account_name: str
    bank_code: str
    bank_name: str
    active: bool
    created_at: datetime
