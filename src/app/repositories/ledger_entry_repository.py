"""Ledger Entry Repository Interface

Defines the contract for ledger entry persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional
from src.domain.ledger_entry import LedgerEntry, EntryType


class LedgerEntryRepository(ABC):
    """
    Repository interface for LedgerEntry persistence

    Entries are immutable and append-only for audit trail.
    Idempotency is enforced via unique idempotency_key.
    """

    @abstractmethod
    async def create(self, entry: LedgerEntry) -> LedgerEntry:
        """
        Create a new ledger entry

        Raises:
            IntegrityError: If idempotency_key already exists
        """
        pass

    @abstractmethod
    async def get_by_idempotency_key(self, idempotency_key: str) -> Optional[LedgerEntry]:
        """
        Retrieve entry by idempotency key

        Used to check if a mutation was already applied.
        """
        pass

    @abstractmethod
    async def get_sums_by_ledger(self, ledger_id: str) -> Dict[EntryType, int]:
        """
        Sum entry amounts per entry type for a ledger

        Returns:
            Mapping of EntryType to summed amount (missing types are 0)
        """
        pass
