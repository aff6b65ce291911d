"""Request schemas for the payout API

Pydantic models for validating incoming HTTP requests.
"""

from pydantic import BaseModel, Field, field_validator


class WithdrawRequestSchema(BaseModel):
    """
    Request schema for withdrawing earnings

    Used for POST /earnings/withdraw endpoint.
    """

    user_id: str = Field(..., min_length=1, description="User withdrawing earnings")

    amount: int = Field(..., gt=0, description="Amount in minor units (must be > 0)")


class AddPayoutAccountRequestSchema(BaseModel):
    """
    Request schema for adding a payout account

    Used for POST /payout-accounts endpoint.
    """

    user_id: str = Field(..., min_length=1)

    account_number: str = Field(..., min_length=6, max_length=20)

    account_name: str = Field(..., min_length=1, max_length=255)

    bank_code: str = Field(..., min_length=1, max_length=20)

    bank_name: str = Field(..., min_length=1, max_length=255)

    @field_validator("account_number")
    @classmethod
    def validate_account_number(cls, v: str) -> str:
        v = v.strip()
        if not v.isdigit():
            raise ValueError("account_number must contain digits only")
        return v


class AccountActionRequestSchema(BaseModel):
    """Owner of the account being activated or deactivated"""

    user_id: str = Field(..., min_length=1)


class StartSubscriptionRequestSchema(BaseModel):
    """
    Request schema for starting a subscription

    Used for POST /subscriptions endpoint.
    """

    user_id: str = Field(..., min_length=1)
