"""
Pytest Configuration and Fixtures
Shared fixtures and configuration for all tests
"""

import uuid
from datetime import datetime, timezone
from typing import List

import pytest

from docgate.core.exceptions import NotificationException
from docgate.services.notification.base import NotificationSender
from docgate.services.notification.models import EmailMessage, SendResult
from docgate.services.store.models import DocumentRecord, PermissionRecord

# Fixed clock for unit tests
NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


# ============================================
# PYTEST CONFIGURATION
# ============================================

def pytest_collection_modifyitems(config, items):
    """Add default markers based on test file path"""
    for item in items:
        path = str(item.fspath)
        if "/unit/" in path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in path:
            item.add_marker(pytest.mark.integration)


# ============================================
# TEST DOUBLES
# ============================================

class RecordingSender(NotificationSender):
    """Sender that keeps messages in memory and can be told to fail"""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.messages: List[EmailMessage] = []

    @property
    def provider_name(self) -> str:
        return "recording"

    async def send(self, message: EmailMessage) -> SendResult:
        self.messages.append(message)
        if self.fail:
            raise NotificationException("Simulated provider outage", provider=self.provider_name)
        return SendResult(provider=self.provider_name, message_id=f"msg-{len(self.messages)}")


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def sender() -> RecordingSender:
    return RecordingSender()


@pytest.fixture
def failing_sender() -> RecordingSender:
    return RecordingSender(fail=True)


@pytest.fixture
def document_factory():
    """Build DocumentRecord instances with sensible defaults"""

    def _make(**overrides) -> DocumentRecord:
        data = {
            "id": uuid.uuid4(),
            "title": "Field Notes",
            "introduction": "Notes from the field.",
            "link": "https://example.com/docs/field-notes",
            "thank_you_content": "Thanks for reading!",
            "created_at": NOW,
            "updated_at": NOW,
        }
        data.update(overrides)
        return DocumentRecord(**data)

    return _make


@pytest.fixture
def permission_factory():
    """Build PermissionRecord instances with sensible defaults"""

    def _make(**overrides) -> PermissionRecord:
        data = {
            "id": uuid.uuid4(),
            "email": "a@x.com",
            "document_id": uuid.uuid4(),
            "first_access": True,
            "deadline": None,
            "created_at": NOW,
            "updated_at": NOW,
        }
        data.update(overrides)
        return PermissionRecord(**data)

    return _make
