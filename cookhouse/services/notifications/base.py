"""
Mail Transport Abstract Base Class

Defines the single send operation the notification dispatcher relies on.
Supports both Mock (development) and SendGrid (production) implementations.

Author: Khalil Bannouri
Version: 1.0.0
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class NotificationResult:
    """Result from sending a notification."""
    success: bool
    message_id: Optional[str] = None
    error_message: Optional[str] = None
    provider: str = "unknown"


class BaseMailTransport(ABC):
    """Abstract base class for outbound mail transports."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name."""
        pass

    @abstractmethod
    async def send(
        self,
        sender: str,
        recipient: str,
        subject: str,
        body: str,
    ) -> NotificationResult:
        """Send a plain-text email."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check service connectivity."""
        pass
