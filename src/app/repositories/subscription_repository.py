"""Subscription Repository Interface

Defines the contract for subscription persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.subscription import Subscription


class SubscriptionRepository(ABC):
    """
    Repository interface for Subscription persistence

    Lookups by provider codes lock the row when for_update is set, so
    webhook handlers re-check status before transitioning.
    """

    @abstractmethod
    async def get_current_by_user_id(self, user_id: str) -> Optional[Subscription]:
        """
        Retrieve the user's authoritative subscription

        Returns the newest non-cancelled subscription, or None.
        """
        pass

    @abstractmethod
    async def get_by_customer_code(
        self, customer_code: str, for_update: bool = False
    ) -> Optional[Subscription]:
        """Retrieve the newest subscription for a provider customer code"""
        pass

    @abstractmethod
    async def get_by_subscription_code(
        self, subscription_code: str, for_update: bool = False
    ) -> Optional[Subscription]:
        pass

    @abstractmethod
    async def create(self, subscription: Subscription) -> Subscription:
        pass

    @abstractmethod
    async def update(self, subscription: Subscription) -> Subscription:
        """
        Update an existing subscription

        Raises:
            ModelMismatch: If subscription is not a Subscription
        """
        pass
