"""
Notification Service
One-time emails sent when an address first opens a granted document

Senders:
- ResendSender: Resend HTTP API (aiohttp)
- LoggingSender: logs instead of sending, used without an API key
"""

from typing import Optional

from docgate.core.config import Settings, settings as default_settings
from docgate.services.notification.base import LoggingSender, NotificationSender
from docgate.services.notification.models import EmailMessage, SendResult
from docgate.services.notification.resend import ResendSender
from docgate.services.notification.templates import (
    build_first_access_email,
    render_body,
    render_subject,
)


def create_sender(config: Optional[Settings] = None) -> NotificationSender:
    """Build the sender configured by EMAIL_API_KEY"""
    config = config or default_settings
    if not config.EMAIL_API_KEY:
        return LoggingSender()
    return ResendSender(
        api_key=config.EMAIL_API_KEY,
        sender=config.EMAIL_FROM,
        api_url=config.EMAIL_API_URL,
        timeout=config.EMAIL_TIMEOUT_SECONDS,
    )


__all__ = [
    "NotificationSender",
    "LoggingSender",
    "ResendSender",
    "EmailMessage",
    "SendResult",
    "create_sender",
    "build_first_access_email",
    "render_body",
    "render_subject",
]
