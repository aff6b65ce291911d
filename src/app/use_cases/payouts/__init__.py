"""Payout use cases"""
from .initiate_payout import InitiatePayout
from .list_payouts import ListPayouts
from .dtos import InitiatePayoutCommandDTO, PayoutResponseDTO, PayoutListResponseDTO

__all__ = [
    "InitiatePayout",
    "ListPayouts",
    "InitiatePayoutCommandDTO",
    "PayoutResponseDTO",
    "PayoutListResponseDTO",
]
