"""Notification Service Implementations

Provides concrete implementations for notifying users and alerting operators.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional
import httpx
from src.app.services.notification_service import NotificationService, UserNotification

logger = logging.getLogger(__name__)


class LoggingNotificationService(NotificationService):
    """
    Notification service that logs notifications

    Useful for development and testing, or as a fallback.
    """

    async def notify_user(
        self,
        user_id: str,
        notification: UserNotification,
        context: Optional[Dict[str, Any]] = None,
    ) -> bool:
        logger.info(
            f"[USER NOTIFICATION] User: {user_id}, "
            f"Type: {notification.value}, "
            f"Context: {context or {}}"
        )
        return True

    async def alert_operators(self, message: str, context: Optional[Dict[str, Any]] = None) -> bool:
        logger.warning(f"[OPERATOR ALERT] {message} Context: {context or {}}")
        return True


class WebhookNotificationService(NotificationService):
    """
    Notification service that delivers via HTTP webhook

    User notifications go to webhook_url. Operator alerts go to
    operator_webhook_url when set, otherwise to webhook_url.
    """

    def __init__(
        self,
        webhook_url: str,
        operator_webhook_url: Optional[str] = None,
        timeout: float = 10.0,
    ):
        """
        Initialize webhook notification service

        Args:
            webhook_url: URL to POST user notifications to
            operator_webhook_url: URL to POST operator alerts to
            timeout: Request timeout in seconds
        """
        self.webhook_url = webhook_url
        self.operator_webhook_url = operator_webhook_url or webhook_url
        self.timeout = timeout

    async def notify_user(
        self,
        user_id: str,
        notification: UserNotification,
        context: Optional[Dict[str, Any]] = None,
    ) -> bool:
        payload = {
            "type": "user_notification",
            "notification": notification.value,
            "user_id": user_id,
            "context": context or {},
            "sent_at": datetime.utcnow().isoformat(),
        }
        return await self._post(self.webhook_url, payload)

    async def alert_operators(self, message: str, context: Optional[Dict[str, Any]] = None) -> bool:
        payload = {
            "type": "operator_alert",
            "message": message,
            "context": context or {},
            "sent_at": datetime.utcnow().isoformat(),
        }
        return await self._post(self.operator_webhook_url, payload)

    async def _post(self, url: str, payload: Dict[str, Any]) -> bool:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
                logger.info(f"Webhook notification {payload['type']} sent to {url}")
                return True
        except httpx.HTTPError as e:
            logger.error(f"Failed to send webhook notification {payload['type']}: {e}")
            return False


class CompositeNotificationService(NotificationService):
    """
    Notification service that delegates to multiple services

    Useful for sending to multiple channels (e.g., log + webhook).
    """

    def __init__(self, services: list[NotificationService]):
        self.services = services

    async def notify_user(
        self,
        user_id: str,
        notification: UserNotification,
        context: Optional[Dict[str, Any]] = None,
    ) -> bool:
        success = False
        for service in self.services:
            try:
                if await service.notify_user(user_id, notification, context):
                    success = True
            except Exception as e:
                logger.error(f"Notification service {type(service).__name__} failed: {e}")
        return success

    async def alert_operators(self, message: str, context: Optional[Dict[str, Any]] = None) -> bool:
        success = False
        for service in self.services:
            try:
                if await service.alert_operators(message, context):
                    success = True
            except Exception as e:
                logger.error(f"Notification service {type(service).__name__} failed: {e}")
        return success


def create_notification_service(
    webhook_url: Optional[str] = None,
    operator_webhook_url: Optional[str] = None,
) -> NotificationService:
    """
    Factory function to create appropriate notification service

    Args:
        webhook_url: Optional webhook URL for user notifications
        operator_webhook_url: Optional webhook URL for operator alerts

    Returns:
        Logging service alone, or composite of logging + webhook
    """
    services: list[NotificationService] = [LoggingNotificationService()]

    if webhook_url or operator_webhook_url:
        services.append(
            WebhookNotificationService(
                webhook_url or operator_webhook_url,
                operator_webhook_url=operator_webhook_url,
            )
        )

    if len(services) == 1:
        return services[0]

    return CompositeNotificationService(services)
