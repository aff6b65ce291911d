from .ledger_repository import SqlAlchemyLedgerRepository
from .ledger_entry_repository import SqlAlchemyLedgerEntryRepository
from .payout_account_repository import SqlAlchemyPayoutAccountRepository
from .payout_repository import SqlAlchemyPayoutRepository
from .subscription_repository import SqlAlchemySubscriptionRepository
from .user_repository import SqlAlchemyUserRepository
from .order_repository import SqlAlchemyOrderRepository, SqlAlchemyCustomerRepository
from .revenue_repository import SqlAlchemyRevenueRepository

__all__ = [
    "SqlAlchemyLedgerRepository",
    "SqlAlchemyLedgerEntryRepository",
    "SqlAlchemyPayoutAccountRepository",
    "SqlAlchemyPayoutRepository",
    "SqlAlchemySubscriptionRepository",
    "SqlAlchemyUserRepository",
    "SqlAlchemyOrderRepository",
    "SqlAlchemyCustomerRepository",
    "SqlAlchemyRevenueRepository",
]
