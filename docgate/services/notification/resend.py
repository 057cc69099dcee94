"""
Resend Sender
HTTP client for the Resend email API

API Reference: https://resend.com/docs/api-reference/emails/send-email
"""

import asyncio
from typing import Optional

import aiohttp

from docgate.core.exceptions import NotificationException
from docgate.core.logging import get_logger
from docgate.services.notification.base import NotificationSender
from docgate.services.notification.models import EmailMessage, SendResult

logger = get_logger(__name__)


class ResendSender(NotificationSender):
    """
    Sends email through the Resend HTTP API

    Example:
        ```python
        sender = ResendSender(api_key="re_...", sender="docs@example.org")
        await sender.send(EmailMessage(to="a@example.org", subject="Hi", html="<p>Hi</p>"))
        await sender.close()
        ```
    """

    def __init__(
        self,
        api_key: str,
        sender: str,
        api_url: str = "https://api.resend.com/emails",
        timeout: float = 5.0,
    ):
        self.api_key = api_key
        self.sender = sender
        self.api_url = api_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: Optional[aiohttp.ClientSession] = None

        logger.info(f"ResendSender initialized (url={self.api_url}, timeout={timeout}s)")

    @property
    def provider_name(self) -> str:
        return "resend"

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def close(self) -> None:
        """Close HTTP session"""
        if self._session and not self._session.closed:
            await self._session.close()
            logger.debug("ResendSender session closed")

    async def send(self, message: EmailMessage) -> SendResult:
        payload = {
            "from": self.sender,
            "to": [message.to],
            "subject": message.subject,
            "html": message.html,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        try:
            session = await self._get_session()
            async with session.post(self.api_url, json=payload, headers=headers) as response:
                if response.status >= 300:
                    error_text = await response.text()
                    raise NotificationException(
                        f"Email API rejected message: HTTP {response.status}",
                        provider=self.provider_name,
                        details={"status": response.status, "error": error_text},
                    )

                data = await response.json()

        except asyncio.TimeoutError:
            raise NotificationException(
                "Email API timed out",
                provider=self.provider_name,
                details={"timeout_seconds": self.timeout.total},
            )
        except aiohttp.ClientError as e:
            raise NotificationException(
                f"Failed to reach email API: {str(e)}",
                provider=self.provider_name,
                details={"error_type": type(e).__name__},
            )

        message_id = data.get("id") if isinstance(data, dict) else None
        logger.debug(f"Email accepted by Resend (id={message_id})")
        return SendResult(provider=self.provider_name, message_id=message_id)
