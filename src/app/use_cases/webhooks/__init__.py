"""Webhook use cases"""
from .process_paystack_event import ProcessPaystackEvent
from .dtos import EventType, EventStatus, EventOutcomeDTO

__all__ = [
    "ProcessPaystackEvent",
    "EventType",
    "EventStatus",
    "EventOutcomeDTO",
]
