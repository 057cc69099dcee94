#!/usr/bin/env python3
"""
Integration Tests for Admin API
Tests for docgate/api/v1/admin.py endpoints
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient


class TestAdminSession:
    """Login, logout and route protection"""

    @pytest.mark.asyncio
    async def test_login_sets_cookie(self, client: AsyncClient, test_settings):
        response = await client.post("/api/v1/admin/login", json={"password": test_settings.ADMIN_PASSWORD})

        assert response.status_code == 200
        assert response.json()["success"] is True
        cookie = response.headers["set-cookie"]
        assert "admin-auth=" in cookie
        assert "httponly" in cookie.lower()

    @pytest.mark.asyncio
    async def test_wrong_password_returns_401(self, client: AsyncClient):
        response = await client.post("/api/v1/admin/login", json={"password": "guess"})

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Password error"
        assert "set-cookie" not in response.headers

    @pytest.mark.asyncio
    async def test_logout_clears_cookie(self, client: AsyncClient):
        response = await client.post("/api/v1/admin/logout")

        assert response.status_code == 200
        assert "admin-auth=" in response.headers["set-cookie"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method,path",
        [
            ("GET", "/api/v1/admin/documents"),
            ("POST", "/api/v1/admin/documents"),
            ("GET", "/api/v1/admin/permissions"),
            ("POST", "/api/v1/admin/permissions"),
            ("GET", "/api/v1/admin/stats"),
        ],
    )
    async def test_routes_require_session(self, client: AsyncClient, method, path):
        response = await client.request(method, path, json={})

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "authentication_error"

    @pytest.mark.asyncio
    async def test_forged_cookie_rejected(self, client: AsyncClient):
        response = await client.get(
            "/api/v1/admin/documents",
            headers={"Cookie": "admin-auth=forged.token.value"},
        )

        assert response.status_code == 401


class TestDocuments:
    """Document CRUD"""

    @pytest.mark.asyncio
    async def test_create_and_list(self, client: AsyncClient, admin_headers, create_document):
        created = await create_document(title="  Guide  ")

        response = await client.get("/api/v1/admin/documents", headers=admin_headers)

        assert response.status_code == 200
        documents = response.json()["documents"]
        assert [d["id"] for d in documents] == [created["id"]]
        assert documents[0]["title"] == "Guide"

    @pytest.mark.asyncio
    async def test_create_requires_fields(self, client: AsyncClient, admin_headers):
        response = await client.post(
            "/api/v1/admin/documents",
            json={"title": "Guide", "introduction": " "},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert set(response.json()["error"]["details"]["missing"]) == {"introduction", "link"}

    @pytest.mark.asyncio
    async def test_get_document(self, client: AsyncClient, admin_headers, create_document):
        created = await create_document()

        response = await client.get(f"/api/v1/admin/documents/{created['id']}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["document"]["thank_you_content"] == "Thanks for reading!"

    @pytest.mark.asyncio
    async def test_get_unknown_document_returns_404(self, client: AsyncClient, admin_headers):
        response = await client.get(f"/api/v1/admin/documents/{uuid.uuid4()}", headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Document not found"

    @pytest.mark.asyncio
    async def test_update_document(self, client: AsyncClient, admin_headers, create_document):
        created = await create_document()

        response = await client.put(
            f"/api/v1/admin/documents/{created['id']}",
            json={"title": "Renamed"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        document = response.json()["document"]
        assert document["title"] == "Renamed"
        assert document["link"] == created["link"]

    @pytest.mark.asyncio
    async def test_update_cannot_blank_required_field(
        self, client: AsyncClient, admin_headers, create_document
    ):
        created = await create_document()

        response = await client.put(
            f"/api/v1/admin/documents/{created['id']}",
            json={"link": ""},
            headers=admin_headers,
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_delete_document_cascades(
        self, client: AsyncClient, admin_headers, create_document, grant
    ):
        """Deleting a document removes every grant on it"""
        doomed = await create_document(title="Doomed")
        kept = await create_document(title="Kept")
        await grant("a@x.com", doomed["id"])
        await grant("b@x.com", doomed["id"])
        await grant("b@x.com", kept["id"])

        response = await client.delete(f"/api/v1/admin/documents/{doomed['id']}", headers=admin_headers)
        assert response.status_code == 200

        a_check = await client.post("/api/v1/access/check", json={"email": "a@x.com"})
        b_check = await client.post("/api/v1/access/check", json={"email": "b@x.com"})
        assert a_check.json()["documents"] == []
        assert [d["title"] for d in b_check.json()["documents"]] == ["Kept"]
        assert b_check.json()["missing_document_ids"] == []

        permissions = await client.get("/api/v1/admin/permissions", headers=admin_headers)
        assert len(permissions.json()["permissions"]) == 1

        again = await client.delete(f"/api/v1/admin/documents/{doomed['id']}", headers=admin_headers)
        assert again.status_code == 404


class TestPermissions:
    """Grants and revocation"""

    @pytest.mark.asyncio
    async def test_grant_and_list(self, client: AsyncClient, admin_headers, create_document, grant):
        document = await create_document(title="Guide")
        permission = await grant("A@X.com", document["id"], days=10)

        assert permission["email"] == "a@x.com"
        assert permission["first_access"] is True
        assert permission["deadline"] is not None

        response = await client.get("/api/v1/admin/permissions", headers=admin_headers)

        listed = response.json()["permissions"]
        assert len(listed) == 1
        assert listed[0]["document_title"] == "Guide"

    @pytest.mark.asyncio
    async def test_duplicate_grant_returns_409(
        self, client: AsyncClient, admin_headers, create_document, grant
    ):
        document = await create_document()
        await grant("a@x.com", document["id"])

        response = await client.post(
            "/api/v1/admin/permissions",
            json={"email": "a@x.com", "document_id": document["id"]},
            headers=admin_headers,
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "already_granted"
        count = await client.get("/api/v1/access/permissions-count")
        assert count.json()["count"] == 1

    @pytest.mark.asyncio
    async def test_grant_unknown_document_returns_404(self, client: AsyncClient, admin_headers):
        response = await client.post(
            "/api/v1/admin/permissions",
            json={"email": "a@x.com", "document_id": str(uuid.uuid4())},
            headers=admin_headers,
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_grant_past_deadline_returns_400(
        self, client: AsyncClient, admin_headers, create_document
    ):
        document = await create_document()
        past = datetime.now(timezone.utc) - timedelta(days=1)

        response = await client.post(
            "/api/v1/admin/permissions",
            json={"email": "a@x.com", "document_id": document["id"], "deadline": past.isoformat()},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Deadline must be in the future"

    @pytest.mark.asyncio
    async def test_revoke_permission(self, client: AsyncClient, admin_headers, create_document, grant):
        document = await create_document()
        permission = await grant("a@x.com", document["id"])

        response = await client.delete(
            f"/api/v1/admin/permissions/{permission['id']}", headers=admin_headers
        )
        assert response.status_code == 200

        check = await client.post("/api/v1/access/check", json={"email": "a@x.com"})
        assert check.json()["has_access"] is False

        again = await client.delete(
            f"/api/v1/admin/permissions/{permission['id']}", headers=admin_headers
        )
        assert again.status_code == 404


class TestStats:

    @pytest.mark.asyncio
    async def test_stats_track_first_access(
        self, client: AsyncClient, admin_headers, create_document, grant
    ):
        document = await create_document()
        await grant("a@x.com", document["id"])
        await grant("b@x.com", document["id"])
        await client.post(
            "/api/v1/access/mark-accessed",
            json={"email": "a@x.com", "document_id": document["id"]},
        )

        response = await client.get("/api/v1/admin/stats", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "documents": 1,
            "permissions": 2,
            "pending_first_access": 1,
            "accessed": 1,
        }
