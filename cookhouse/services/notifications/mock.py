"""
Mock Mail Transport

Simulates email sending for development and tests.
No actual messages are sent - they are logged and kept in ``outbox``.

Author: Khalil Bannouri
Version: 1.0.0
"""

import asyncio
import random
import uuid
import logging
from dataclasses import dataclass

from cookhouse.services.notifications.base import (
    BaseMailTransport,
    NotificationResult,
)

logger = logging.getLogger(__name__)


@dataclass
class SentMessage:
    """A message accepted by the mock transport."""
    sender: str
    recipient: str
    subject: str
    body: str
    message_id: str


class MockMailTransport(BaseMailTransport):
    """Mock mail transport for development."""

    def __init__(
        self,
        failure_rate: float = 0.0,
        min_latency: float = 0.0,
        max_latency: float = 0.0,
    ):
        self.failure_rate = failure_rate
        self.min_latency = min_latency
        self.max_latency = max_latency
        self.fail_all = False
        self.outbox: list[SentMessage] = []
        logger.info(f"MockMailTransport initialized (failure_rate={failure_rate:.0%})")

    @property
    def provider_name(self) -> str:
        return "mock"

    async def _simulate_latency(self) -> None:
        """Simulate network latency."""
        if self.max_latency > 0:
            await asyncio.sleep(random.uniform(self.min_latency, self.max_latency))

    def _should_fail(self) -> bool:
        return self.fail_all or random.random() < self.failure_rate

    async def send(
        self,
        sender: str,
        recipient: str,
        subject: str,
        body: str,
    ) -> NotificationResult:
        """Simulate sending email."""
        await self._simulate_latency()

        if self._should_fail():
            logger.warning(f"Mock email failed (simulated) to {recipient}")
            return NotificationResult(
                success=False,
                error_message="Simulated email failure",
                provider="mock"
            )

        message_id = f"email_mock_{uuid.uuid4().hex[:12]}"
        self.outbox.append(SentMessage(sender, recipient, subject, body, message_id))
        logger.info(f"Mock email sent to {recipient}: {subject} (ID: {message_id})")

        return NotificationResult(
            success=True,
            message_id=message_id,
            provider="mock"
        )

    async def health_check(self) -> bool:
        """Mock is healthy unless told to fail."""
        await self._simulate_latency()
        return not self.fail_all
