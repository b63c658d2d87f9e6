"""
SQLAlchemy ORM models for the CHSI assistant database.
"""
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    ForeignKey,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
import uuid

from chsi.database import Base


# Enums
class MessageRole(str, enum.Enum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


def _new_chat_id() -> str:
    return str(uuid.uuid4())


# Models
class User(Base):
    """User account (synced from the frontend auth session) with profile fields."""

    __tablename__ = "users"

    id = Column(String(255), primary_key=True)  # matches NextAuth UUID
    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=True)

    # Profile shown in the assistant sidebar
    display_name = Column(String(255), nullable=True)
    position = Column(String(255), nullable=True)
    region = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    chats = relationship("Chat", back_populates="user", cascade="all, delete-orphan")


class Chat(Base):
    """A conversation between one user and the assistant."""

    __tablename__ = "chats"

    id = Column(String(36), primary_key=True, default=_new_chat_id)
    user_id = Column(String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    # Relationships
    user = relationship("User", back_populates="chats")
    messages = relationship(
        "Message",
        back_populates="chat",
        cascade="all, delete-orphan",
        order_by="Message.id",
    )


class Message(Base):
    """One chat message; assistant messages may carry a rendered document."""

    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True)
    chat_id = Column(String(36), ForeignKey("chats.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(SQLEnum(MessageRole, values_callable=lambda e: [m.value for m in e]), nullable=False)
    content = Column(Text, nullable=False)
    document_url = Column(Text, nullable=True)  # base64 data URI of the .docx
    document_name = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    chat = relationship("Chat", back_populates="messages")
