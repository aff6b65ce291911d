"""Payout account use cases"""
from .add_payout_account import AddPayoutAccount
from .set_active_payout_account import SetActivePayoutAccount
from .deactivate_payout_account import DeactivatePayoutAccount
from .get_active_payout_account import GetActivePayoutAccount
from .list_payout_accounts import ListPayoutAccounts
from .dtos import AddPayoutAccountCommandDTO, PayoutAccountResponseDTO

__all__ = [
    "AddPayoutAccount",
    "SetActivePayoutAccount",
    "DeactivatePayoutAccount",
    "GetActivePayoutAccount",
    "ListPayoutAccounts",
    "AddPayoutAccountCommandDTO",
    "PayoutAccountResponseDTO",
]
