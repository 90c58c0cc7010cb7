"""Repositories for the chat store."""
from autoresponder.infra.database.repositories.base import BaseRepository
from autoresponder.infra.database.repositories.chat import (
    ChatMessageRepository,
    ChatSettingsRepository,
    ChatUserStatusRepository,
)

__all__ = [
    "BaseRepository",
    "ChatMessageRepository",
    "ChatSettingsRepository",
    "ChatUserStatusRepository",
]
