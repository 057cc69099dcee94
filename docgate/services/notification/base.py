"""
Notification Sender Base Class
"""

from abc import ABC, abstractmethod

from docgate.core.logging import get_logger
from docgate.services.notification.models import EmailMessage, SendResult

logger = get_logger(__name__)


class NotificationSender(ABC):
    """
    Abstract email sender

    send() raises NotificationException when the message could not be
    delivered. Callers decide whether that failure matters.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        pass

    @abstractmethod
    async def send(self, message: EmailMessage) -> SendResult:
        pass

    async def close(self) -> None:
        """Release network resources"""
        return None


class LoggingSender(NotificationSender):
    """Sender used when no email API key is configured; only logs"""

    @property
    def provider_name(self) -> str:
        return "log"

    async def send(self, message: EmailMessage) -> SendResult:
        logger.info(f"Email delivery disabled, would send '{message.subject}' to {message.to}")
        return SendResult(provider=self.provider_name, delivered=False)
