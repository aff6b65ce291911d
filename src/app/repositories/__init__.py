from .ledger_repository import LedgerRepository
from .ledger_entry_repository import LedgerEntryRepository
from .payout_account_repository import PayoutAccountRepository
from .payout_repository import PayoutRepository
from .subscription_repository import SubscriptionRepository
from .user_repository import UserRepository
from .order_repository import OrderRepository, CustomerRepository
from .revenue_repository import RevenueRepository

__all__ = [
    "LedgerRepository",
    "LedgerEntryRepository",
    "PayoutAccountRepository",
    "PayoutRepository",
    "SubscriptionRepository",
    "UserRepository",
    "OrderRepository",
    "CustomerRepository",
    "RevenueRepository",
]
