"""Tests for authentication boundaries.

Verifies that user-scoped endpoints require X-User-Id and that
users cannot access other users' chats.
"""
import pytest
from httpx import AsyncClient

from tests.conftest import AUTH_HEADERS, AUTH_HEADERS_USER2


@pytest.mark.asyncio
async def test_chats_requires_auth_header(api_client: AsyncClient):
    """GET /api/chats without X-User-Id should return 422 (missing required header)."""
    resp = await api_client.get("/api/chats")
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_chat_requires_auth_header(api_client: AsyncClient):
    """POST /api/chat without X-User-Id should return 422."""
    resp = await api_client.post(
        "/api/chat", json={"messages": [{"role": "user", "content": "Привет"}]}
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_blank_user_id_is_unauthorized(api_client: AsyncClient):
    resp = await api_client.get("/api/chats", headers={"X-User-Id": "   "})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_wrong_user_cannot_access_chat(client: AsyncClient):
    """User 2 should get 404 when accessing user 1's chat."""
    resp = await client.post("/api/chats", headers=AUTH_HEADERS)
    assert resp.status_code == 200
    chat_id = resp.json()["id"]

    resp = await client.get(f"/api/chats/{chat_id}", headers=AUTH_HEADERS_USER2)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_wrong_user_cannot_delete_chat(client: AsyncClient):
    """User 2 should get 404 when trying to delete user 1's chat."""
    resp = await client.post("/api/chats", headers=AUTH_HEADERS)
    chat_id = resp.json()["id"]

    resp = await client.delete(f"/api/chats/{chat_id}", headers=AUTH_HEADERS_USER2)
    assert resp.status_code == 404

    resp = await client.get(f"/api/chats/{chat_id}", headers=AUTH_HEADERS)
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_nonexistent_chat_returns_404(client: AsyncClient):
    """Accessing a non-existent chat ID should return 404."""
    resp = await client.get("/api/chats/00000000-0000-0000-0000-000000000000", headers=AUTH_HEADERS)
    assert resp.status_code == 404
