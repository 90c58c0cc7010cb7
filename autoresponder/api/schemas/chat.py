"""Pydantic v2 schemas for the community chat API."""
from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class MessageCreateRequest(BaseModel):
    sender_id: str = Field(..., min_length=1, max_length=128)
    sender_name: str = Field(default="", max_length=255)
    sender_role: Literal["user", "admin"] = "user"
    text: str = Field(..., min_length=1, max_length=8000)
    chat_id: str = Field(default="community", min_length=1, max_length=64)


class MessageSchema(BaseModel):
    id: UUID
    chat_id: str
    sender_id: str
    sender_name: str
    sender_role: str
    text: str
    message_type: str
    is_read: bool
    rule_id: Optional[UUID] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class SendMessageResponse(BaseModel):
    message: MessageSchema
    reply: Optional[MessageSchema] = None
    reason: Optional[str] = None
    """Why the bot answered (``keyword: ...`` / ``similarity: ...``), when it did."""


class ChatSettingsSchema(BaseModel):
    auto_respond: bool = True
    bot_sender_id: str = "bot"
    bot_name: str = "AI Assistant"
    moderation_enabled: bool = True
    allow_images: bool = True
    allow_files: bool = True
    slow_mode: bool = False
    slow_mode_delay: int = Field(default=5, ge=0, le=3600)


class ChatSettingsUpdateRequest(BaseModel):
    auto_respond: Optional[bool] = None
    bot_sender_id: Optional[str] = Field(default=None, min_length=1, max_length=128)
    bot_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    moderation_enabled: Optional[bool] = None
    allow_images: Optional[bool] = None
    allow_files: Optional[bool] = None
    slow_mode: Optional[bool] = None
    slow_mode_delay: Optional[int] = Field(default=None, ge=0, le=3600)


class ModerationRequest(BaseModel):
    user_name: str = Field(default="", max_length=255)
    chat_id: str = Field(default="community", min_length=1, max_length=64)


class ModerationResponse(BaseModel):
    user_id: str
    status: Literal["muted", "banned"]
    notice: MessageSchema
    """The system message announcing the restriction."""


class UserStatusSchema(BaseModel):
    user_id: str
    user_name: str
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}
