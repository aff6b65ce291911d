from .unit_of_work import UnitOfWork
from .notification_service import NotificationService, UserNotification
from .payment_provider import PaymentProvider
from .ledger_store import LedgerStore

__all__ = [
    "UnitOfWork",
    "NotificationService",
    "UserNotification",
    "PaymentProvider",
    "LedgerStore",
]
