"""Order and Customer Repository Interfaces"""

from abc import ABC, abstractmethod
from src.domain.order import Order, Customer


class OrderRepository(ABC):
    """Repository interface for Order persistence"""

    @abstractmethod
    async def create(self, order: Order) -> Order:
        pass


class CustomerRepository(ABC):
    """Repository interface for buyer/merchant Customer records"""

    @abstractmethod
    async def create(self, customer: Customer) -> Customer:
        pass
