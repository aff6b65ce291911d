"""Payout Repository Interface"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from src.domain.payout import Payout


class PayoutRepository(ABC):
    """Repository interface for Payout persistence"""

    @abstractmethod
    async def create(self, payout: Payout) -> Payout:
        pass

    @abstractmethod
    async def get_by_reference(self, reference: str, for_update: bool = False) -> Optional[Payout]:
        """
        Retrieve payout by transfer reference

        Args:
            reference: Unique transfer reference
            for_update: If True, lock the row so the status check and
                transition happen atomically
        """
        pass

    @abstractmethod
    async def get_by_user_id(
        self,
        user_id: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Payout], int]:
        """
        Retrieve a user's payouts with optional date range and pagination

        Returns:
            Tuple of (payouts newest first, total count)
        """
        pass

    @abstractmethod
    async def update(self, payout: Payout) -> Payout:
        """
        Persist changes to a payout

        Raises:
            ModelMismatch: If payout is not a Payout
        """
        pass
