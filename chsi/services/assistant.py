"""
Assistant service: one chat turn against the LLM plus document attachment.

Public API
----------
AssistantService.reply(messages) -> AssistantReply
build_attachment(request)        -> DocumentAttachment

Uses Ollama's /api/chat endpoint with a single non-streaming request. The
reply text is always returned; a document block the assistant embeds is
rendered to .docx when possible and silently dropped otherwise.
"""
from __future__ import annotations

import dataclasses
import logging
from datetime import date
from typing import Dict, List, Optional, Sequence

import httpx

from chsi.config import settings
from chsi.services.document_generator import generate, to_data_uri
from chsi.services.document_model import (
    DocumentRequest,
    MalformedNode,
    MalformedPayload,
    UnknownDocumentType,
)
from chsi.services.document_payload import parse_document_payload, split_document_block

logger = logging.getLogger(__name__)


class AssistantServiceError(RuntimeError):
    """The language model could not be reached or returned an error."""


# ---------------------------------------------------------------------------
# Result dataclasses
# ---------------------------------------------------------------------------

@dataclasses.dataclass
class DocumentAttachment:
    """A rendered document ready for inline delivery."""

    name: str
    url: str          # base64 data URI
    document_type: str


@dataclasses.dataclass
class AssistantReply:
    """Returned by AssistantService.reply."""

    text: str
    attachment: Optional[DocumentAttachment] = None


# ---------------------------------------------------------------------------
# Prompt
# ---------------------------------------------------------------------------

SYSTEM_PROMPT = """\
Ты помощник частного судебного исполнителя в Казахстане. Помогаешь составлять \
документы и отвечаешь на вопросы по исполнительному производству.

Ты знаешь законодательство Республики Казахстан, в частности:
- Закон РК "Об исполнительном производстве и статусе судебных исполнителей"
- Гражданский процессуальный кодекс РК
- Гражданский кодекс РК

Когда пользователь просит составить документ, ты должен:
1. Уточнить необходимые данные (если не указаны): ФИО сторон, суммы, даты, номера дел и т.д.
2. Составить документ согласно требованиям законодательства РК
3. Оформить документ в соответствии с официальным стилем делопроизводства

Типовые документы, которые ты можешь составить:
- Постановление о возбуждении исполнительного производства
- Запрос в банк о наличии счетов должника
- Уведомление должнику
- Акт описи имущества
- Постановление о наложении ареста на имущество
- Постановление об обращении взыскания на денежные средства

Если пользователь предоставил достаточно данных для документа, составь его полностью.
Если данных недостаточно, вежливо запроси недостающую информацию.

ВАЖНО: Когда составляешь документ, в конце своего ответа добавь специальный маркер в формате:
[DOCUMENT_DATA]
{
  "type": "тип документа",
  "title": "название документа",
  "data": {
    // все данные документа
  }
}
[/DOCUMENT_DATA]

Типы документов (type):
- "resolution_initiation" - Постановление о возбуждении ИП
- "bank_request" - Запрос в банк
- "debtor_notice" - Уведомление должнику
- "property_inventory" - Акт описи имущества

Ключи data: city, date, outgoing_number, executor_name, executor_address, \
executor_phone, district, case_number, exec_doc_number, exec_doc_date, \
court_name, creditor_name, creditor_iin, creditor_address, debtor_name, \
debtor_iin, debtor_address, subject, amount, bank_name, bank_address, \
inventory_address, witness1_name, witness1_address, witness2_name, \
witness2_address, property_items (по одному предмету на строку: \
"название, количество, примечание"), storage_responsible, remarks.

Всегда отвечай на русском языке."""


# ---------------------------------------------------------------------------
# Attachment
# ---------------------------------------------------------------------------

def build_attachment(
    request: DocumentRequest,
    today: Optional[date] = None,
) -> DocumentAttachment:
    """Render a ``DocumentRequest`` and wrap it as a data-URI attachment."""
    blob = generate(
        request.type,
        request.data,
        today=today,
        title=request.title,
        font_name=settings.DOCUMENT_FONT_NAME,
    )
    return DocumentAttachment(
        name=request.filename,
        url=to_data_uri(blob),
        document_type=request.type.value,
    )


def attach_document(text: str, today: Optional[date] = None) -> AssistantReply:
    """
    Strip the document block from ``text`` and render it if possible.

    Never raises for a bad block: the conversational reply always survives.
    """
    clean, raw = split_document_block(text)
    if raw is None:
        return AssistantReply(text=clean)

    try:
        request = parse_document_payload(raw)
        attachment = build_attachment(request, today=today)
    except (MalformedPayload, UnknownDocumentType) as exc:
        logger.warning("Document block ignored: %s", exc)
        return AssistantReply(text=clean)
    except MalformedNode as exc:
        logger.error("Document tree rejected by serializer: %s", exc, exc_info=True)
        return AssistantReply(text=clean)
    except Exception as exc:
        logger.error("Error generating document: %s", exc, exc_info=True)
        return AssistantReply(text=clean)

    logger.info("Attached %s (%s)", attachment.name, attachment.document_type)
    return AssistantReply(text=clean, attachment=attachment)


# ---------------------------------------------------------------------------
# AssistantService
# ---------------------------------------------------------------------------

class AssistantService:
    """Single-turn chat with the legal-assistant prompt via Ollama /api/chat."""

    SYSTEM_PROMPT = SYSTEM_PROMPT

    def __init__(self) -> None:
        self.base_url = settings.OLLAMA_BASE_URL
        self.model = settings.OLLAMA_LLM_MODEL
        self.timeout = httpx.Timeout(float(settings.OLLAMA_TIMEOUT), connect=10.0)

    async def reply(self, messages: Sequence[Dict[str, str]]) -> AssistantReply:
        """
        Send the conversation to the model and build the reply.

        Args:
            messages: ``[{"role": "user"|"assistant", "content": str}, ...]``

        Raises:
            AssistantServiceError: if the model call fails.
        """
        text = await self._call_llm(messages)
        return attach_document(text)

    async def check_health(self) -> bool:
        """Return True if Ollama answers on /api/tags."""
        try:
            async with httpx.AsyncClient(timeout=10.0) as client:
                resp = await client.get(f"{self.base_url}/api/tags")
            return resp.status_code == 200
        except httpx.HTTPError as exc:
            logger.warning("Ollama health check failed: %s", exc)
            return False

    async def _call_llm(self, messages: Sequence[Dict[str, str]]) -> str:
        """POST to Ollama /api/chat and return the assistant message text."""
        payload_messages: List[Dict[str, str]] = [
            {"role": "system", "content": self.SYSTEM_PROMPT}
        ]
        payload_messages.extend(
            {"role": m["role"], "content": m["content"]} for m in messages
        )

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(
                    f"{self.base_url}/api/chat",
                    json={
                        "model": self.model,
                        "messages": payload_messages,
                        "stream": False,
                        "options": {
                            "num_predict": settings.LLM_MAX_TOKENS,
                            "temperature": settings.LLM_TEMPERATURE,
                        },
                    },
                )
        except httpx.TimeoutException as exc:
            logger.error("_call_llm: request timed out after %s s", settings.OLLAMA_TIMEOUT)
            raise AssistantServiceError("LLM request timed out") from exc
        except httpx.HTTPError as exc:
            logger.error("_call_llm: connection error: %s", exc)
            raise AssistantServiceError(f"LLM connection error: {exc}") from exc

        if resp.status_code != 200:
            logger.error(
                "_call_llm: Ollama returned HTTP %d: %s",
                resp.status_code,
                resp.text[:300],
            )
            raise AssistantServiceError(f"LLM returned HTTP {resp.status_code}")

        message = resp.json().get("message") or {}
        return message.get("content", "")
