"""
Pydantic schemas for request/response validation.
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Dict, Any, Literal
from datetime import datetime

from chsi.services.document_model import DocumentType


# Chat Turn Schemas
class ChatMessage(BaseModel):
    """One message of the conversation sent to the assistant."""

    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """Request body for POST /api/chat."""

    messages: List[ChatMessage] = Field(..., min_length=1)
    chat_id: Optional[str] = None


class ChatResponse(BaseModel):
    """Response for POST /api/chat."""

    content: str
    document_url: Optional[str] = None
    document_name: Optional[str] = None


# Chat History Schemas
class ChatSummary(BaseModel):
    """Row of the chat list."""

    id: str
    title: str
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ChatCreateResponse(BaseModel):
    """Response for POST /api/chats."""

    id: str
    user_id: str
    title: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    """A stored chat message."""

    id: int
    role: str
    content: str
    document_url: Optional[str] = None
    document_name: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ChatDetailResponse(BaseModel):
    """Response for GET /api/chats/{chat_id}."""

    id: str
    title: str
    created_at: datetime
    updated_at: datetime
    messages: List[MessageResponse]

    model_config = ConfigDict(from_attributes=True)


class ChatUpdateRequest(BaseModel):
    """Request body for PATCH /api/chats/{chat_id}."""

    title: str = Field(..., min_length=1, max_length=255)


class DeleteResponse(BaseModel):
    success: bool = True


# Profile Schemas
class ProfileResponse(BaseModel):
    """Profile fields of the current user."""

    display_name: Optional[str] = None
    position: Optional[str] = None
    region: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ProfileUpdateRequest(BaseModel):
    """Request body for PUT /api/profile."""

    display_name: Optional[str] = Field(None, max_length=255)
    position: Optional[str] = Field(None, max_length=255)
    region: Optional[str] = Field(None, max_length=255)


# Document Schemas
class DocumentTypeInfo(BaseModel):
    type: DocumentType
    title: str


class DocumentGenerateRequest(BaseModel):
    """Request body for POST /api/documents/generate."""

    type: str
    title: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)
    date: Optional[str] = Field(
        None, description="Document date (DD.MM.YYYY); overrides data['date'] when set"
    )


# Health Check Schema
class HealthCheckResponse(BaseModel):
    """Schema for health check endpoint."""

    status: str
    database: str
    ollama: str
    timestamp: datetime
    version: str = "0.1.0"
