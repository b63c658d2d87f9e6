"""Tests for the assistant service and document attachment."""
import base64
import io
import json
from datetime import date
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from docx import Document

from chsi.services.assistant import (
    SYSTEM_PROMPT,
    AssistantService,
    AssistantServiceError,
    attach_document,
)
from tests.conftest import DEBTOR_NOTICE_REPLY


def _mock_ollama(monkeypatch, handler):
    """Route every httpx.AsyncClient created by the service through ``handler``."""
    real_client = httpx.AsyncClient

    def _client(**kwargs):
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    monkeypatch.setattr(httpx, "AsyncClient", _client)


def test_plain_reply_has_no_attachment():
    reply = attach_document("Исполнительный лист предъявляется в течение трёх лет.")
    assert reply.text == "Исполнительный лист предъявляется в течение трёх лет."
    assert reply.attachment is None


def test_reply_with_block_gets_attachment():
    reply = attach_document(DEBTOR_NOTICE_REPLY, today=date(2024, 3, 7))
    assert reply.text == "Уведомление должнику подготовлено."
    assert reply.attachment is not None
    assert reply.attachment.name == "Уведомление.docx"
    assert reply.attachment.document_type == "debtor_notice"

    encoded = reply.attachment.url.split(",", 1)[1]
    doc = Document(io.BytesIO(base64.b64decode(encoded)))
    texts = [p.text for p in doc.paragraphs]
    assert "Уважаемый(ая) Иванов И.И.!" in texts
    assert "Сумма взыскания: 50000 тенге" in texts


def test_attachment_is_deterministic_for_pinned_date():
    first = attach_document(DEBTOR_NOTICE_REPLY, today=date(2024, 3, 7))
    second = attach_document(DEBTOR_NOTICE_REPLY, today=date(2024, 3, 7))
    assert first.attachment.url == second.attachment.url


@pytest.mark.parametrize(
    "block",
    [
        "{not json",
        '{"type": "court_order", "title": "Судебный приказ"}',
        '{"type": "bank_request", "data": [1, 2]}',
    ],
)
def test_bad_block_keeps_text_and_drops_attachment(block):
    reply = attach_document(f"Текст ответа.\n[DOCUMENT_DATA]\n{block}\n[/DOCUMENT_DATA]")
    assert reply.text == "Текст ответа."
    assert reply.attachment is None


def test_serializer_failure_is_not_fatal():
    with patch("chsi.services.assistant.generate", side_effect=RuntimeError("disk full")):
        reply = attach_document(DEBTOR_NOTICE_REPLY)
    assert reply.text == "Уведомление должнику подготовлено."
    assert reply.attachment is None


@pytest.mark.asyncio
async def test_reply_uses_llm_text():
    service = AssistantService()
    with patch.object(AssistantService, "_call_llm", new=AsyncMock(return_value=DEBTOR_NOTICE_REPLY)):
        reply = await service.reply([{"role": "user", "content": "Составь уведомление"}])
    assert reply.attachment is not None
    assert "[DOCUMENT_DATA]" not in reply.text


@pytest.mark.asyncio
async def test_call_llm_sends_system_prompt(monkeypatch):
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["path"] = request.url.path
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"message": {"role": "assistant", "content": "Здравствуйте!"}})

    _mock_ollama(monkeypatch, handler)
    reply = await AssistantService().reply([{"role": "user", "content": "Привет"}])

    assert reply.text == "Здравствуйте!"
    assert captured["path"] == "/api/chat"
    body = captured["body"]
    assert body["stream"] is False
    assert body["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert body["messages"][1] == {"role": "user", "content": "Привет"}


@pytest.mark.asyncio
async def test_call_llm_http_error(monkeypatch):
    _mock_ollama(monkeypatch, lambda request: httpx.Response(500, text="model crashed"))
    with pytest.raises(AssistantServiceError):
        await AssistantService().reply([{"role": "user", "content": "Привет"}])


@pytest.mark.asyncio
async def test_call_llm_connection_error(monkeypatch):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    _mock_ollama(monkeypatch, handler)
    with pytest.raises(AssistantServiceError):
        await AssistantService().reply([{"role": "user", "content": "Привет"}])


@pytest.mark.asyncio
async def test_check_health_ok(monkeypatch):
    _mock_ollama(monkeypatch, lambda request: httpx.Response(200, json={"models": []}))
    assert await AssistantService().check_health() is True


@pytest.mark.asyncio
async def test_check_health_down(monkeypatch):
    _mock_ollama(monkeypatch, lambda request: httpx.Response(503))
    assert await AssistantService().check_health() is False


def _reply_with_title(title):
    payload = json.dumps(
        {"type": "debtor_notice", "title": title, "data": {"debtor_name": "Иванов И.И."}},
        ensure_ascii=False,
    )
    return f"Готово.\n[DOCUMENT_DATA]\n{payload}\n[/DOCUMENT_DATA]"


def test_long_title_still_attaches_document():
    reply = attach_document(_reply_with_title("Уведомление " * 30))
    assert reply.attachment is not None
    assert reply.attachment.name.endswith(".docx")
    assert len(reply.attachment.name) <= 255


def test_attachment_name_has_no_path_separators():
    reply = attach_document(_reply_with_title("Уведомление 1/2"))
    assert reply.attachment.name == "Уведомление 1 2.docx"
