"""Community chat messages, user moderation state and the single-row chat settings document."""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import BigInteger, Boolean, DateTime, Identity, Index, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from autoresponder.infra.database.models.base import Base, TimestampMixin, _uuid_pk


class ChatMessage(Base):
    """A single message posted to a chat by a user, an admin, the bot or the system."""

    __tablename__ = "chat_messages"
    __table_args__ = (
        Index("ix_chat_messages_chat_id", "chat_id"),
        Index("ix_chat_messages_created_at", "created_at"),
    )

    id: Mapped[uuid.UUID] = _uuid_pk()

    seq: Mapped[int] = mapped_column(BigInteger, Identity(), nullable=False, unique=True)
    """Insertion order; breaks ties between messages stored in one transaction."""

    chat_id: Mapped[str] = mapped_column(
        String(64), nullable=False, server_default="community",
    )

    sender_id: Mapped[str] = mapped_column(String(128), nullable=False)
    sender_name: Mapped[str] = mapped_column(String(255), nullable=False, server_default="")
    sender_role: Mapped[str] = mapped_column(
        String(16), nullable=False, server_default="user",
    )
    """Author role: user | admin | bot | system."""

    text: Mapped[str] = mapped_column(Text, nullable=False)

    message_type: Mapped[str] = mapped_column(
        String(16), nullable=False, server_default="text",
    )
    """text | bot | system."""

    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="false")

    rule_id: Mapped[Optional[uuid.UUID]] = mapped_column(UUID(as_uuid=True), nullable=True)
    """Auto-response rule that produced this message (bot replies only)."""

    # clock_timestamp(), unlike now(), advances within a transaction
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.clock_timestamp(),
    )

    def __repr__(self) -> str:
        preview = (self.text or "")[:40]
        return f"ChatMessage(id={self.id!r}, type={self.message_type!r}, text={preview!r})"


class ChatSettingsModel(Base, TimestampMixin):
    """Single-row table that persists the chat settings document as JSON.

    Always use id=1 as the single row.
    """

    __tablename__ = "chat_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=1)
    settings_json: Mapped[dict[str, Any]] = mapped_column(
        JSONB, nullable=False, server_default="{}",
    )


class ChatUserStatus(Base, TimestampMixin):
    """Moderation state of a chat user; a row exists only while the user is restricted."""

    __tablename__ = "chat_user_status"

    user_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    user_name: Mapped[str] = mapped_column(String(255), nullable=False, server_default="")
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    """muted | banned."""

    def __repr__(self) -> str:
        return f"ChatUserStatus(user_id={self.user_id!r}, status={self.status!r})"
