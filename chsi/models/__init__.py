"""Database and schema models for the CHSI assistant."""
from chsi.models.database_models import (
    User,
    Chat,
    Message,
    MessageRole,
)
from chsi.models.schemas import (
    ChatMessage,
    ChatRequest,
    ChatResponse,
    ChatSummary,
    ChatCreateResponse,
    ChatDetailResponse,
    ChatUpdateRequest,
    MessageResponse,
    DeleteResponse,
    ProfileResponse,
    ProfileUpdateRequest,
    DocumentTypeInfo,
    DocumentGenerateRequest,
    HealthCheckResponse,
)

__all__ = [
    # Database models
    "User",
    "Chat",
    "Message",
    "MessageRole",
    # Pydantic schemas
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "ChatSummary",
    "ChatCreateResponse",
    "ChatDetailResponse",
    "ChatUpdateRequest",
    "MessageResponse",
    "DeleteResponse",
    "ProfileResponse",
    "ProfileUpdateRequest",
    "DocumentTypeInfo",
    "DocumentGenerateRequest",
    "HealthCheckResponse",
]
