from .base import BaseModel, generate_uuid
from .user import User, AccountType
from .ledger import Ledger
from .ledger_entry import LedgerEntry, EntryType
from .payout_account import PayoutAccount
from .payout import Payout, PayoutStatus
from .subscription import Subscription, SubscriptionStatus, UnknownSubscriptionStatus
from .order import Order, Customer
from .revenue import Revenue, RevenueActivity, RevenueStatus, SALE_COMMISSION

__all__ = [
    "BaseModel",
    "generate_uuid",
    "User",
    "AccountType",
    "Ledger",
    "LedgerEntry",
    "EntryType",
    "PayoutAccount",
    "Payout",
    "PayoutStatus",
    "Subscription",
    "SubscriptionStatus",
    "UnknownSubscriptionStatus",
    "Order",
    "Customer",
    "Revenue",
    "RevenueActivity",
    "RevenueStatus",
    "SALE_COMMISSION",
]
