"""
autoresponder.infra.database – PostgreSQL async engine, session, models and repositories.

Public API
──────────
  build_engine, build_session_factory, ensure_database_exists, init_db, close_engine
  Base, ChatMessage, ChatSettingsModel, ChatUserStatus (models)
  BaseRepository, ChatMessageRepository, ChatSettingsRepository, ChatUserStatusRepository
"""
from autoresponder.infra.database.engine import (
    build_engine,
    build_session_factory,
    close_engine,
    ensure_database_exists,
    init_db,
)
from autoresponder.infra.database.models import Base, ChatMessage, ChatSettingsModel, ChatUserStatus
from autoresponder.infra.database.repositories import (
    BaseRepository,
    ChatMessageRepository,
    ChatSettingsRepository,
    ChatUserStatusRepository,
)

__all__ = [
    "build_engine",
    "build_session_factory",
    "ensure_database_exists",
    "init_db",
    "close_engine",
    "Base",
    "ChatMessage",
    "ChatSettingsModel",
    "ChatUserStatus",
    "BaseRepository",
    "ChatMessageRepository",
    "ChatSettingsRepository",
    "ChatUserStatusRepository",
]
