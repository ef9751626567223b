"""
Notification Dispatcher

Builds the transactional emails tied to application events and hands them to
the configured mail transport. Every send is awaited with a timeout; a failed
or timed-out send raises ``NotificationError`` so the calling request fails.

Author: Khalil Bannouri
Version: 1.0.0
"""

import asyncio
import logging
from dataclasses import dataclass

from cookhouse.exceptions import ErrorKind, NotificationError
from cookhouse.services.notifications.base import BaseMailTransport, NotificationResult

logger = logging.getLogger(__name__)


@dataclass
class OrderDetails:
    """Fields of a submitted order, as shown in the operations alert."""
    name: str
    email: str
    phone: str
    quantity: int
    dish: str


class NotificationDispatcher:
    """Sends welcome, login alert and new order emails."""

    def __init__(
        self,
        transport: BaseMailTransport,
        sender: str,
        orders_recipient: str,
        restaurant_name: str = "Daddy's Cook House",
        timeout: float = 10.0,
    ):
        self.transport = transport
        self.sender = sender
        self.orders_recipient = orders_recipient
        self.restaurant_name = restaurant_name
        self.timeout = timeout

    async def _send(self, recipient: str, subject: str, body: str) -> NotificationResult:
        try:
            result = await asyncio.wait_for(
                self.transport.send(self.sender, recipient, subject, body),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise NotificationError(
                f"{self.transport.provider_name} did not answer within {self.timeout}s",
                kind=ErrorKind.UNAVAILABLE,
            ) from e

        if not result.success:
            raise NotificationError(
                f"{result.provider} rejected '{subject}' to {recipient}: {result.error_message}"
            )
        return result

    async def send_registration_welcome(self, to_email: str, username: str) -> NotificationResult:
        result = await self._send(
            to_email,
            f"Welcome to {self.restaurant_name}",
            f"Hello {username},\n\n"
            f"Your registration is successful!\n\n"
            f"Enjoy our services.\n\n"
            f"Thank you!",
        )
        logger.info(f"Registration email sent to: {to_email}")
        return result

    async def send_login_alert(self, to_email: str, username: str) -> NotificationResult:
        result = await self._send(
            to_email,
            f"Login Alert - {self.restaurant_name}",
            f"Hello {username},\n\n"
            f"You have successfully logged into {self.restaurant_name}.\n\n"
            f"If this wasn't you, please contact us immediately.",
        )
        logger.info(f"Login email sent to: {to_email}")
        return result

    async def send_new_order_alert(self, order: OrderDetails) -> NotificationResult:
        result = await self._send(
            self.orders_recipient,
            f"New Order - {self.restaurant_name}",
            f"New Order Details:\n"
            f"Name: {order.name}\n"
            f"Email: {order.email}\n"
            f"Phone: {order.phone}\n"
            f"Dish: {order.dish}\n"
            f"Quantity: {order.quantity}",
        )
        logger.info("Order email sent")
        return result
