"""ChatService: post community chat messages and auto-answer them from the rule set."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional
from uuid import UUID

from autoresponder.core.exceptions import NotFoundError, ValidationError
from autoresponder.infra.database.repositories.chat import (
    ChatMessageRepository,
    ChatSettingsRepository,
    ChatUserStatusRepository,
)
from autoresponder.responder.responder import AutoResponder
from autoresponder.responder.rules.matcher import rule_id
from autoresponder.responder.rules.repository import RuleRepository
from autoresponder.responder.types import AutoResponse, ChatSettings

if TYPE_CHECKING:
    from autoresponder.infra.database.models.chat import ChatMessage, ChatUserStatus
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

DEFAULT_CHAT_ID = "community"

MUTED = "muted"
BANNED = "banned"


class ChatMessageReplySink:
    """ReplySink that stores the bot answer as a chat message in the same chat."""

    def __init__(self, repo: ChatMessageRepository, chat_id: str, settings: ChatSettings) -> None:
        self._repo = repo
        self._chat_id = chat_id
        self._settings = settings

    async def publish_reply(self, rule: Any, text: str) -> "ChatMessage":
        return await self._repo.add_bot_message(
            self._chat_id,
            text,
            sender_id=self._settings.bot_sender_id,
            sender_name=self._settings.bot_name,
            rule_id=rule_id(rule),
        )


@dataclass
class SendResult:
    message: "ChatMessage"
    reply: Optional["ChatMessage"] = None
    response: Optional[AutoResponse] = None


class ChatService:
    def __init__(self, session: "AsyncSession") -> None:
        self._session = session
        self._msg_repo = ChatMessageRepository(session)
        self._settings_repo = ChatSettingsRepository(session)
        self._rule_repo = RuleRepository(session)
        self._status_repo = ChatUserStatusRepository(session)

    async def send_message(
        self,
        sender_id: str,
        sender_name: str,
        text: str,
        *,
        sender_role: str = "user",
        chat_id: str = DEFAULT_CHAT_ID,
    ) -> SendResult:
        """Store *text* and, when auto-respond is on, post the matching rule's answer.

        The user message is persisted before the matcher runs, so the bot reply
        always follows it in the chat history. The text is stored and matched
        exactly as given; surrounding whitespace only matters for the blank check.
        Muted and banned senders are rejected with a 403 ``ValidationError``.
        """
        if not isinstance(text, str) or not text.strip():
            raise ValidationError("Message text must not be blank", details={"field": "text"})

        status = await self._status_repo.get_status(sender_id)
        if status is not None:
            raise ValidationError(
                f"Sender is {status} and cannot post messages",
                code=f"SENDER_{status.upper()}",
                http_status=403,
                details={"sender_id": sender_id, "status": status},
            )

        message = await self._msg_repo.add_user_message(
            chat_id,
            sender_id=sender_id,
            sender_name=sender_name,
            sender_role=sender_role,
            text=text,
        )

        settings = await self.get_settings()
        if not settings.auto_respond:
            return SendResult(message=message)

        responder = AutoResponder(
            source=self._rule_repo,
            usage=self._rule_repo,
            replies=ChatMessageReplySink(self._msg_repo, chat_id, settings),
        )
        response = await responder.respond(text)
        if response is None:
            return SendResult(message=message)

        logger.info(
            "ChatService: auto-replied in %s", chat_id,
            extra={"chat_id": chat_id, "message_id": str(message.id), "rule_id": str(response.rule_id)},
        )
        return SendResult(message=message, reply=response.reply, response=response)

    async def list_messages(self, chat_id: str = DEFAULT_CHAT_ID, *, limit: int = 100) -> List["ChatMessage"]:
        return await self._msg_repo.list_recent(chat_id, limit=limit)

    async def delete_message(self, message_id: UUID) -> None:
        deleted = await self._msg_repo.delete(message_id)
        if not deleted:
            raise NotFoundError(
                f"Message {message_id} not found", details={"message_id": str(message_id)},
            )

    async def get_settings(self) -> ChatSettings:
        return ChatSettings.from_dict(await self._settings_repo.load())

    async def update_settings(self, changes: Dict[str, Any]) -> ChatSettings:
        settings = (await self.get_settings()).merged(changes)
        await self._settings_repo.save(settings.to_dict())
        logger.info("ChatService: settings updated (%s)", ", ".join(sorted(changes)))
        return settings

    async def mute_user(self, user_id: str, user_name: str, *, chat_id: str = DEFAULT_CHAT_ID) -> "ChatMessage":
        """Stop *user_id* from posting and announce it in the chat."""
        return await self._restrict(user_id, user_name, MUTED, chat_id)

    async def ban_user(self, user_id: str, user_name: str, *, chat_id: str = DEFAULT_CHAT_ID) -> "ChatMessage":
        return await self._restrict(user_id, user_name, BANNED, chat_id)

    async def lift_restriction(self, user_id: str) -> None:
        cleared = await self._status_repo.clear(user_id)
        if not cleared:
            raise NotFoundError(
                f"User {user_id} is not muted or banned", details={"user_id": user_id},
            )
        logger.info("ChatService: restriction lifted for %s", user_id)

    async def list_restricted_users(self) -> List["ChatUserStatus"]:
        return await self._status_repo.list_restricted()

    async def _restrict(self, user_id: str, user_name: str, status: str, chat_id: str) -> "ChatMessage":
        if not user_id or not user_id.strip():
            raise ValidationError("user_id must not be blank", details={"field": "user_id"})
        name = user_name.strip() if user_name and user_name.strip() else user_id
        await self._status_repo.set_status(user_id, name, status)
        notice = await self._msg_repo.add_system_message(chat_id, f"{name} has been {status} by admin")
        logger.info(
            "ChatService: %s %s", status, user_id,
            extra={"chat_id": chat_id, "message_id": str(notice.id)},
        )
        return notice
