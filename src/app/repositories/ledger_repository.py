"""Ledger Repository Interface

Defines the contract for ledger persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.ledger import Ledger


class LedgerRepository(ABC):
    """
    Repository interface for Ledger persistence

    Methods use pessimistic locking (SELECT FOR UPDATE) to serialize
    concurrent webhook deliveries and user actions on the same ledger.
    """

    @abstractmethod
    async def get_by_user_id(self, user_id: str, for_update: bool = False) -> Optional[Ledger]:
        """
        Retrieve ledger by user ID

        Args:
            user_id: User identifier
            for_update: If True, lock the row with SELECT FOR UPDATE (pessimistic lock)

        Returns:
            Ledger if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, ledger: Ledger) -> Ledger:
        """
        Create a new ledger

        Args:
            ledger: Ledger entity to persist

        Returns:
            Created Ledger
        """
        pass

    @abstractmethod
    async def update(self, ledger: Ledger) -> Ledger:
        """
        Persist counter changes on a ledger already locked by the caller

        Raises:
            ModelMismatch: If ledger is not a Ledger
        """
        pass

    @abstractmethod
    async def get_all(self) -> List[Ledger]:
        """Retrieve every ledger (used by reconciliation)"""
        pass

    @abstractmethod
    async def get_totals(self) -> dict:
        """
        Sum counters across all ledgers

        Returns:
            Dict with total_earnings, withdrawn_earnings and pending sums
        """
        pass
