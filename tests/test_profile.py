"""Tests for GET/PUT /api/profile."""
import pytest
from httpx import AsyncClient

from tests.conftest import AUTH_HEADERS, AUTH_HEADERS_USER2


@pytest.mark.asyncio
async def test_new_user_has_empty_profile(client: AsyncClient):
    resp = await client.get("/api/profile", headers=AUTH_HEADERS)
    assert resp.status_code == 200
    assert resp.json() == {"display_name": None, "position": None, "region": None}


@pytest.mark.asyncio
async def test_update_profile(client: AsyncClient):
    resp = await client.put(
        "/api/profile",
        json={
            "display_name": "Ахметов Б.К.",
            "position": "Частный судебный исполнитель",
            "region": "г. Алматы",
        },
        headers=AUTH_HEADERS,
    )
    assert resp.status_code == 200
    assert resp.json()["display_name"] == "Ахметов Б.К."

    resp = await client.get("/api/profile", headers=AUTH_HEADERS)
    assert resp.json() == {
        "display_name": "Ахметов Б.К.",
        "position": "Частный судебный исполнитель",
        "region": "г. Алматы",
    }


@pytest.mark.asyncio
async def test_partial_update_keeps_other_fields(client: AsyncClient):
    await client.put(
        "/api/profile",
        json={"display_name": "Ахметов Б.К.", "region": "г. Алматы"},
        headers=AUTH_HEADERS,
    )
    resp = await client.put("/api/profile", json={"region": "г. Астана"}, headers=AUTH_HEADERS)
    assert resp.json() == {"display_name": "Ахметов Б.К.", "position": None, "region": "г. Астана"}


@pytest.mark.asyncio
async def test_profiles_are_per_user(client: AsyncClient):
    await client.put("/api/profile", json={"display_name": "Первый"}, headers=AUTH_HEADERS)
    resp = await client.get("/api/profile", headers=AUTH_HEADERS_USER2)
    assert resp.json()["display_name"] is None
