"""
Chat history endpoints.

Route summary
-------------
GET    /api/chats            : list user's chats, newest first
POST   /api/chats            : create an empty chat
GET    /api/chats/{chat_id}  : chat with its messages
PATCH  /api/chats/{chat_id}  : rename chat
DELETE /api/chats/{chat_id}  : delete chat and its messages
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from chsi.config import settings
from chsi.database import get_db
from chsi.dependencies.auth import (
    get_authorized_chat,
    get_current_user_id,
    get_or_create_user,
)
from chsi.models.database_models import Chat, Message, User
from chsi.models.schemas import (
    ChatCreateResponse,
    ChatDetailResponse,
    ChatSummary,
    ChatUpdateRequest,
    DeleteResponse,
    MessageResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[ChatSummary])
async def list_chats(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> List[ChatSummary]:
    """List all chats belonging to the authenticated user, newest first."""
    result = await db.execute(
        select(Chat)
        .where(Chat.user_id == user_id)
        .order_by(Chat.updated_at.desc())
    )
    return [
        ChatSummary(id=c.id, title=c.title, updated_at=c.updated_at)
        for c in result.scalars().all()
    ]


@router.post("", response_model=ChatCreateResponse)
async def create_chat(
    user: User = Depends(get_or_create_user),
    db: AsyncSession = Depends(get_db),
) -> ChatCreateResponse:
    """Create a new, empty chat for the authenticated user."""
    chat = Chat(user_id=user.id, title=settings.CHAT_DEFAULT_TITLE)
    db.add(chat)
    await db.flush()
    await db.refresh(chat)

    logger.info("Created chat id=%s for user=%s", chat.id, user.id)
    return ChatCreateResponse.model_validate(chat)


@router.get("/{chat_id}", response_model=ChatDetailResponse)
async def get_chat(
    chat: Chat = Depends(get_authorized_chat),
    db: AsyncSession = Depends(get_db),
) -> ChatDetailResponse:
    """Get a chat with its messages in chronological order."""
    result = await db.execute(
        select(Message)
        .where(Message.chat_id == chat.id)
        .order_by(Message.created_at.asc(), Message.id.asc())
    )
    messages = [
        MessageResponse(
            id=m.id,
            role=m.role.value,
            content=m.content,
            document_url=m.document_url,
            document_name=m.document_name,
            created_at=m.created_at,
        )
        for m in result.scalars().all()
    ]
    return ChatDetailResponse(
        id=chat.id,
        title=chat.title,
        created_at=chat.created_at,
        updated_at=chat.updated_at,
        messages=messages,
    )


@router.patch("/{chat_id}", response_model=ChatCreateResponse)
async def rename_chat(
    body: ChatUpdateRequest,
    chat: Chat = Depends(get_authorized_chat),
    db: AsyncSession = Depends(get_db),
) -> ChatCreateResponse:
    """Rename a chat."""
    chat.title = body.title
    await db.flush()
    await db.refresh(chat)
    logger.info("Renamed chat id=%s to %r", chat.id, chat.title)
    return ChatCreateResponse.model_validate(chat)


@router.delete("/{chat_id}", response_model=DeleteResponse, status_code=status.HTTP_200_OK)
async def delete_chat(
    chat: Chat = Depends(get_authorized_chat),
    db: AsyncSession = Depends(get_db),
) -> DeleteResponse:
    """Delete a chat and all its messages."""
    await db.delete(chat)
    await db.flush()
    logger.info("Deleted chat id=%s", chat.id)
    return DeleteResponse(success=True)
