"""Repositories for chat messages and the chat settings row."""
from __future__ import annotations

from typing import Any, ClassVar, Dict, List, Optional
from uuid import UUID

from sqlalchemy import select

from autoresponder.infra.database.models.chat import ChatMessage, ChatSettingsModel, ChatUserStatus
from autoresponder.infra.database.repositories.base import BaseRepository


class ChatMessageRepository(BaseRepository[ChatMessage]):
    model: ClassVar[type] = ChatMessage

    async def add_user_message(
        self,
        chat_id: str,
        *,
        sender_id: str,
        sender_name: str,
        sender_role: str,
        text: str,
    ) -> ChatMessage:
        return await self.create({
            "chat_id": chat_id,
            "sender_id": sender_id,
            "sender_name": sender_name,
            "sender_role": sender_role,
            "text": text,
            "message_type": "text",
            "is_read": False,
        })

    async def add_bot_message(
        self,
        chat_id: str,
        text: str,
        *,
        sender_id: str,
        sender_name: str,
        rule_id: Optional[UUID] = None,
    ) -> ChatMessage:
        return await self.create({
            "chat_id": chat_id,
            "sender_id": sender_id,
            "sender_name": sender_name,
            "sender_role": "bot",
            "text": text,
            "message_type": "bot",
            "is_read": False,
            "rule_id": rule_id,
        })

    async def add_system_message(self, chat_id: str, text: str) -> ChatMessage:
        return await self.create({
            "chat_id": chat_id,
            "sender_id": "system",
            "sender_name": "System",
            "sender_role": "system",
            "text": text,
            "message_type": "system",
            "is_read": False,
        })

    async def list_recent(self, chat_id: str, *, limit: int = 100) -> List[ChatMessage]:
        """The last *limit* messages of a chat, oldest first."""
        stmt = (
            select(ChatMessage)
            .where(ChatMessage.chat_id == chat_id)
            .order_by(ChatMessage.created_at.desc(), ChatMessage.seq.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(reversed(result.scalars().all()))


class ChatSettingsRepository:
    """Load and save the single ``chat_settings`` row (id=1)."""

    def __init__(self, session) -> None:
        self.session = session

    async def load(self) -> Dict[str, Any]:
        result = await self.session.execute(
            select(ChatSettingsModel).where(ChatSettingsModel.id == 1)
        )
        row = result.scalar_one_or_none()
        return dict(row.settings_json) if row is not None else {}

    async def save(self, settings: Dict[str, Any]) -> None:
        row = await self.session.get(ChatSettingsModel, 1)
        if row is None:
            self.session.add(ChatSettingsModel(id=1, settings_json=settings))
        else:
            row.settings_json = settings
        await self.session.flush()


class ChatUserStatusRepository:
    """Muted and banned chat users, keyed by user id."""

    def __init__(self, session) -> None:
        self.session = session

    async def get_status(self, user_id: str) -> Optional[str]:
        row = await self.session.get(ChatUserStatus, user_id)
        return row.status if row is not None else None

    async def set_status(self, user_id: str, user_name: str, status: str) -> ChatUserStatus:
        row = await self.session.get(ChatUserStatus, user_id)
        if row is None:
            row = ChatUserStatus(user_id=user_id, user_name=user_name, status=status)
            self.session.add(row)
        else:
            row.user_name = user_name
            row.status = status
        await self.session.flush()
        return row

    async def clear(self, user_id: str) -> bool:
        row = await self.session.get(ChatUserStatus, user_id)
        if row is None:
            return False
        await self.session.delete(row)
        await self.session.flush()
        return True

    async def list_restricted(self) -> List[ChatUserStatus]:
        result = await self.session.execute(
            select(ChatUserStatus).order_by(ChatUserStatus.created_at.desc())
        )
        return list(result.scalars().all())
