"""Payment Provider Interface

Defines the contract for the external payment provider (Paystack).
Every method raises ProviderError on failure, including timeouts.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from pydantic import BaseModel, Field


class ProviderSubscriptionDTO(BaseModel):
    subscription_code: str
    status: str


class ProviderCustomerDTO(BaseModel):
    customer_code: str
    email: str
    subscriptions: List[ProviderSubscriptionDTO] = Field(default_factory=list)

    def current_subscription(self) -> Optional[ProviderSubscriptionDTO]:
        # Provider lists the current plan first
        return self.subscriptions[0] if self.subscriptions else None


class TransactionInitializationDTO(BaseModel):
    authorization_url: str
    access_code: str
    reference: str


class TransferRecipientDTO(BaseModel):
    recipient_code: str


class TransferDTO(BaseModel):
    transfer_code: str
    reference: str
    status: str


class PaymentProvider(ABC):
    """Gateway to the payment provider's REST API and webhook signing"""

    @abstractmethod
    async def create_customer(
        self, email: str, full_name: str, phone: Optional[str] = None
    ) -> ProviderCustomerDTO:
        pass

    @abstractmethod
    async def fetch_customer(self, email: str) -> Optional[ProviderCustomerDTO]:
        """
        Retrieve a customer by email

        Returns:
            ProviderCustomerDTO, or None if the provider has no such customer
        """
        pass

    @abstractmethod
    async def initialize_transaction(
        self, email: str, amount: int, plan_code: Optional[str] = None
    ) -> TransactionInitializationDTO:
        pass

    @abstractmethod
    async def resolve_account_number(self, account_number: str, bank_code: str) -> bool:
        """Return True if the provider resolves the account number at the bank"""
        pass

    @abstractmethod
    async def create_transfer_recipient(
        self, name: str, account_number: str, bank_code: str
    ) -> TransferRecipientDTO:
        pass

    @abstractmethod
    async def initiate_transfer(
        self, amount: int, recipient_code: str, reference: str
    ) -> TransferDTO:
        """
        Start a transfer from the platform balance

        Args:
            amount: Amount in minor units
            recipient_code: Provider recipient token of the payout account
            reference: Unique reference echoed back in transfer.* events
        """
        pass

    @abstractmethod
    def verify_webhook_signature(self, payload: bytes, signature: Optional[str]) -> bool:
        """Check the signature header against the raw request body"""
        pass
