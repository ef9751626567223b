"""
Mail Transport Factory

Returns the Mock or SendGrid transport based on ENV_MODE.

Author: Khalil Bannouri
Version: 1.0.0
"""

import logging

from cookhouse.core.config import Settings
from cookhouse.services.notifications.base import (
    BaseMailTransport,
    NotificationResult,
)
from cookhouse.services.notifications.dispatcher import NotificationDispatcher, OrderDetails
from cookhouse.services.notifications.mock import MockMailTransport
from cookhouse.services.notifications.sendgrid import SendGridMailTransport

logger = logging.getLogger(__name__)


def get_mail_transport(settings: Settings) -> BaseMailTransport:
    """Build the configured mail transport."""
    if settings.is_development:
        logger.info("Mail Transport: Using MockMailTransport (development mode)")
        return MockMailTransport(failure_rate=settings.mock_mail_failure_rate)

    logger.info(f"Mail Transport: Using SendGridMailTransport ({settings.env_mode.value} mode)")
    return SendGridMailTransport(
        api_key=settings.email_pass,
        timeout=settings.mail_timeout_seconds,
    )


def build_dispatcher(settings: Settings, transport: BaseMailTransport) -> NotificationDispatcher:
    """Wire a dispatcher to a transport with the configured addresses."""
    return NotificationDispatcher(
        transport=transport,
        sender=settings.email_user,
        orders_recipient=settings.orders_notify_email,
        restaurant_name=settings.restaurant_name,
        timeout=settings.mail_timeout_seconds,
    )


__all__ = [
    "get_mail_transport",
    "build_dispatcher",
    "BaseMailTransport",
    "MockMailTransport",
    "SendGridMailTransport",
    "NotificationDispatcher",
    "NotificationResult",
    "OrderDetails",
]
