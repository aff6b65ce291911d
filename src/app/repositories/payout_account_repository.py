"""Payout Account Repository Interface"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.payout_account import PayoutAccount


class PayoutAccountRepository(ABC):
    """
    Repository interface for PayoutAccount persistence

    Sibling accounts of a user are locked together (SELECT FOR UPDATE)
    before the active flag changes.
    """

    @abstractmethod
    async def get_by_id(self, account_id: str, for_update: bool = False) -> Optional[PayoutAccount]:
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: str, for_update: bool = False) -> List[PayoutAccount]:
        """
        Retrieve all payout accounts of a user

        Args:
            user_id: User identifier
            for_update: If True, lock every returned row
        """
        pass

    @abstractmethod
    async def get_active(self, user_id: str, for_update: bool = False) -> Optional[PayoutAccount]:
        """
        Retrieve the user's active payout account

        Args:
            user_id: User identifier
            for_update: If True, lock the row until the transaction ends
        """
        pass

    @abstractmethod
    async def exists_by_account_number(self, account_number: str) -> bool:
        pass

    @abstractmethod
    async def create(self, account: PayoutAccount) -> PayoutAccount:
        pass

    @abstractmethod
    async def deactivate_siblings(self, user_id: str, keep_account_id: str) -> None:
        """Set active=False on every account of user_id except keep_account_id"""
        pass

    @abstractmethod
    async def update(self, account: PayoutAccount) -> PayoutAccount:
        """
        Persist changes to an account

        Raises:
            ModelMismatch: If account is not a PayoutAccount
        """
        pass
