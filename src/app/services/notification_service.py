"""Notification Service Interface

Defines the contract for notifying users and alerting operators.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional


class UserNotification(str, Enum):
    """Notifications sent to marketplace users"""
    ORDER_CREATED = "order_created"
    PRODUCT_PURCHASED = "product_purchased"
    WITHDRAW_SUCCESSFUL = "withdraw_successful"
    WITHDRAW_FAILED = "withdraw_failed"
    WITHDRAW_REVERSED = "withdraw_reversed"
    SUBSCRIPTION_PAYMENT_FAILED = "subscription_payment_failed"
    SUBSCRIPTION_CANCELLED = "subscription_cancelled"


class NotificationService(ABC):
    """
    Abstract notification service

    Implementations can send notifications via:
    - Logging
    - Webhook (HTTP POST)
    - Email/Slack bridges behind a webhook

    Notifications are sent after state is committed. A failed
    notification never rolls back state.
    """

    @abstractmethod
    async def notify_user(
        self,
        user_id: str,
        notification: UserNotification,
        context: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """
        Notify a user about an event on their account

        Returns:
            True if notification sent successfully, False otherwise
        """
        pass

    @abstractmethod
    async def alert_operators(self, message: str, context: Optional[Dict[str, Any]] = None) -> bool:
        """
        Alert operators about a condition that needs manual attention

        Returns:
            True if alert sent successfully, False otherwise
        """
        pass
