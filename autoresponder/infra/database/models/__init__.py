"""
autoresponder.infra.database.models – SQLAlchemy 2.0 ORM models.

The auto-response rule model lives with the matcher in
``autoresponder.responder.rules.models``.
"""
from autoresponder.infra.database.models.base import Base, TimestampMixin, _uuid_pk
from autoresponder.infra.database.models.chat import ChatMessage, ChatSettingsModel, ChatUserStatus

__all__ = [
    "Base",
    "TimestampMixin",
    "_uuid_pk",
    "ChatMessage",
    "ChatSettingsModel",
    "ChatUserStatus",
]
