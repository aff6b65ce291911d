"""Data Transfer Objects for Subscription Use Cases"""

from pydantic import BaseModel, Field


class StartSubscriptionCommandDTO(BaseModel):
    """Command DTO for starting a premium subscription"""

    user_id: str = Field(..., min_length=1, description="Subscribing user")

    class Config:
        json_schema_extra = {
            "example": {"user_id": "9b1f3c2e-5d0a-4c55-9a53-2f1f0b7c1e11"}
        }


class StartSubscriptionResponseDTO(BaseModel):
    """Checkout details for the new subscription"""

    subscription_id: str
    status: str
    customer_code: str
    authorization_url: str
    access_code: str
    reference: str
