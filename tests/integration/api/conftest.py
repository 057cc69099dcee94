"""
Conftest for API integration tests
Defines fixtures specific to API testing

Note: These tests use ASGI transport for testing without requiring a running server.
The lifespan does not run under ASGITransport, so the store and sender are
attached to app.state directly.
"""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from docgate.core.config import Settings
from docgate.core.security import create_admin_token
from docgate.db.session import create_engine, create_session_maker, create_tables
from docgate.main import create_app
from docgate.services.store import SQLPermissionStore

ADMIN_PASSWORD = "test-admin-password"


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        SECRET_KEY="test-secret-key-for-api-integration-tests",
        EMAIL_API_KEY=None,
        LOG_FILE=None,
    )


@pytest_asyncio.fixture
async def store(tmp_path):
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'api.db'}")
    await create_tables(engine)
    yield SQLPermissionStore(create_session_maker(engine))
    await engine.dispose()


@pytest.fixture
def outbox(sender):
    """Recording sender collecting every outgoing email"""
    return sender


@pytest.fixture
def app(test_settings, store, outbox):
    application = create_app(test_settings)
    application.state.store = store
    application.state.sender = outbox
    return application


@pytest_asyncio.fixture
async def client(app) -> AsyncClient:
    """
    Test HTTP client using ASGI transport
    Tests the FastAPI app directly without requiring a running server
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def admin_headers(test_settings) -> dict:
    """Cookie header carrying a valid admin session"""
    token = create_admin_token(test_settings)
    return {"Cookie": f"{test_settings.ADMIN_COOKIE_NAME}={token}"}


@pytest.fixture
def create_document(client, admin_headers):
    """Create a document through the admin API and return its JSON"""

    async def _create(**overrides) -> dict:
        payload = {
            "title": "Field Notes",
            "introduction": "Notes from the field.",
            "link": "https://example.com/docs/field-notes",
            "thank_you_content": "Thanks for reading!",
        }
        payload.update(overrides)
        response = await client.post("/api/v1/admin/documents", json=payload, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()["document"]

    return _create


@pytest.fixture
def grant(client, admin_headers):
    """Grant a document to an email through the admin API"""

    async def _grant(email: str, document_id: str, days=None) -> dict:
        payload = {"email": email, "document_id": document_id}
        if days is not None:
            deadline = datetime.now(timezone.utc) + timedelta(days=days) - timedelta(minutes=5)
            payload["deadline"] = deadline.isoformat()
        response = await client.post("/api/v1/admin/permissions", json=payload, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()["permission"]

    return _grant
