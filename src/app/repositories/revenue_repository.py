"""Revenue Repository Interface"""

from abc import ABC, abstractmethod
from typing import Dict, Optional
from src.domain.revenue import Revenue, RevenueActivity


class RevenueRepository(ABC):
    """Repository interface for platform Revenue records"""

    @abstractmethod
    async def create(self, revenue: Revenue) -> Revenue:
        pass

    @abstractmethod
    async def get_by_reference(self, reference: str) -> Optional[Revenue]:
        pass

    @abstractmethod
    async def get_totals(self) -> Dict[RevenueActivity, int]:
        """
        Sum completed revenue per activity

        Returns:
            Mapping of every RevenueActivity to its gross total (0 if none)
        """
        pass

    @abstractmethod
    async def get_total_commission(self) -> int:
        """Platform share of completed sales, in minor units"""
        pass
