"""
Chat turn endpoint.

Routes
------
POST /api/chat : one assistant turn → ChatResponse (+ optional .docx data URI)
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from chsi.config import settings
from chsi.database import get_db
from chsi.dependencies.auth import get_current_user_id, load_user_chat
from chsi.models.database_models import Chat, Message, MessageRole
from chsi.models.schemas import ChatMessage, ChatRequest, ChatResponse
from chsi.services.assistant import AssistantReply, AssistantService, AssistantServiceError
from chsi.utils.helpers import chat_title_from_message

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=ChatResponse, status_code=status.HTTP_200_OK)
async def chat(
    body: ChatRequest,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> ChatResponse:
    """
    Send the conversation to the assistant and return its reply.

    When the reply embeds a document block, the rendered .docx is returned as
    a base64 data URI. If ``chat_id`` is given, the last user message and the
    reply are appended to that chat.
    """
    chat_record: Optional[Chat] = None
    if body.chat_id:
        chat_record = await load_user_chat(db, body.chat_id, user_id)
        if chat_record is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Chat not found")

    service = AssistantService()
    try:
        reply = await service.reply([m.model_dump() for m in body.messages])
    except AssistantServiceError as exc:
        logger.error("Chat API error: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Ошибка при обработке запроса",
        )

    if chat_record is not None:
        await _persist_turn(db, chat_record, body.messages[-1], reply)

    attachment = reply.attachment
    return ChatResponse(
        content=reply.text,
        document_url=attachment.url if attachment else None,
        document_name=attachment.name if attachment else None,
    )


async def _persist_turn(
    db: AsyncSession,
    chat_record: Chat,
    last_message: ChatMessage,
    reply: AssistantReply,
) -> None:
    if last_message.role == MessageRole.USER.value:
        db.add(Message(
            chat_id=chat_record.id,
            role=MessageRole.USER,
            content=last_message.content,
        ))
        if chat_record.title == settings.CHAT_DEFAULT_TITLE:
            chat_record.title = chat_title_from_message(
                last_message.content, settings.CHAT_TITLE_MAX_LENGTH
            )

    attachment = reply.attachment
    db.add(Message(
        chat_id=chat_record.id,
        role=MessageRole.ASSISTANT,
        content=reply.text,
        document_url=attachment.url if attachment else None,
        document_name=attachment.name if attachment else None,
    ))
    chat_record.updated_at = func.now()
    await db.flush()
    logger.info("Chat %s: stored turn (attachment=%s)", chat_record.id, attachment is not None)
