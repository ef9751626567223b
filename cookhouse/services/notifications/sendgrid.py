"""
SendGrid Mail Transport

Production implementation using SendGrid's v3 Mail Send API.
The SendGrid client is blocking, so each call runs in a worker thread.
The HTTP timeout bounds that thread, so a send abandoned by the caller
cannot reach the provider long after the caller gave up.

Author: Khalil Bannouri
Version: 1.0.0
"""

import asyncio
import logging
from typing import Optional

from python_http_client.exceptions import HTTPError
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from cookhouse.services.notifications.base import (
    BaseMailTransport,
    NotificationResult,
)

logger = logging.getLogger(__name__)


class SendGridMailTransport(BaseMailTransport):
    """Production mail transport backed by SendGrid."""

    def __init__(self, api_key: str, timeout: Optional[float] = None):
        self.sendgrid_client = SendGridAPIClient(api_key)
        # Inherited by every request builder derived from the base client
        self.sendgrid_client.client.timeout = timeout
        logger.info("SendGridMailTransport initialized")

    @property
    def provider_name(self) -> str:
        return "sendgrid"

    def _send_sync(self, message: Mail):
        return self.sendgrid_client.send(message)

    async def send(
        self,
        sender: str,
        recipient: str,
        subject: str,
        body: str,
    ) -> NotificationResult:
        """Send email via SendGrid."""
        message = Mail(
            from_email=sender,
            to_emails=recipient,
            subject=subject,
            plain_text_content=body,
        )

        try:
            response = await asyncio.to_thread(self._send_sync, message)
        except (HTTPError, OSError) as e:
            logger.error(f"SendGrid error: {e}")
            return NotificationResult(
                success=False,
                error_message=str(e),
                provider="sendgrid"
            )

        logger.info(f"Email sent to {recipient}: {response.status_code}")

        return NotificationResult(
            success=response.status_code in [200, 201, 202],
            message_id=response.headers.get('X-Message-Id'),
            error_message=None if response.status_code < 300 else str(response.body),
            provider="sendgrid"
        )

    async def health_check(self) -> bool:
        """Check that the API key is accepted."""
        try:
            response = await asyncio.to_thread(
                self.sendgrid_client.client.scopes.get
            )
            return response.status_code == 200
        except (HTTPError, OSError) as e:
            logger.warning(f"SendGrid health check failed: {e}")
            return False
