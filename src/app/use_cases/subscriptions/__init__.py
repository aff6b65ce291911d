"""Subscription use cases"""
from .start_subscription import StartSubscription
from .dtos import StartSubscriptionCommandDTO, StartSubscriptionResponseDTO

__all__ = [
    "StartSubscription",
    "StartSubscriptionCommandDTO",
    "StartSubscriptionResponseDTO",
]
