"""Tests for the direct document generation endpoints."""
import io

import pytest
from docx import Document
from httpx import AsyncClient

from chsi.services.docx_serializer import DOCX_MIME_TYPE
from tests.conftest import AUTH_HEADERS


@pytest.mark.asyncio
async def test_list_document_types(api_client: AsyncClient):
    resp = await api_client.get("/api/documents/types")
    assert resp.status_code == 200
    types = resp.json()
    assert [t["type"] for t in types] == [
        "resolution_initiation",
        "bank_request",
        "debtor_notice",
        "property_inventory",
    ]
    assert all(t["title"] for t in types)


@pytest.mark.asyncio
async def test_generate_document(api_client: AsyncClient):
    resp = await api_client.post(
        "/api/documents/generate",
        json={
            "type": "property_inventory",
            "title": "Акт описи",
            "date": "01.02.2024",
            "data": {
                "city": "Алматы",
                "property_items": "1. Телевизор Samsung, 1, б/у\n2. Холодильник LG, 1, рабочий",
            },
        },
        headers=AUTH_HEADERS,
    )
    assert resp.status_code == 200
    assert resp.headers["content-type"] == DOCX_MIME_TYPE
    disposition = resp.headers["content-disposition"]
    assert disposition.startswith("attachment;")
    assert "filename*=UTF-8''" in disposition

    doc = Document(io.BytesIO(resp.content))
    texts = [p.text for p in doc.paragraphs]
    assert "г. Алматы" in texts
    assert "01.02.2024" in texts
    assert len(doc.tables[0].rows) == 3
    assert doc.tables[0].rows[2].cells[1].text == "Холодильник LG"


@pytest.mark.asyncio
async def test_generate_document_without_data(api_client: AsyncClient):
    resp = await api_client.post(
        "/api/documents/generate",
        json={"type": "bank_request"},
        headers=AUTH_HEADERS,
    )
    assert resp.status_code == 200
    doc = Document(io.BytesIO(resp.content))
    assert doc.core_properties.title == "Запрос в банк о наличии счетов"
    assert any("_______________" in p.text for p in doc.paragraphs)


@pytest.mark.asyncio
async def test_generate_unknown_type(api_client: AsyncClient):
    resp = await api_client.post(
        "/api/documents/generate",
        json={"type": "court_order", "data": {}},
        headers=AUTH_HEADERS,
    )
    assert resp.status_code == 400
    assert "court_order" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_generate_requires_auth_header(api_client: AsyncClient):
    resp = await api_client.post("/api/documents/generate", json={"type": "bank_request"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_generate_document_with_long_title(api_client: AsyncClient):
    title = "Уведомление " * 30
    resp = await api_client.post(
        "/api/documents/generate",
        json={"type": "debtor_notice", "title": title, "data": {"debtor_name": "Иванов И.И."}},
        headers=AUTH_HEADERS,
    )
    assert resp.status_code == 200
    doc = Document(io.BytesIO(resp.content))
    assert doc.core_properties.title == title.strip()[:255]
    assert "filename*=UTF-8''" in resp.headers["content-disposition"]
