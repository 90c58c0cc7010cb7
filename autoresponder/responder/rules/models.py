"""AutoResponseRule ORM model: admin-curated question/answer rules stored in PostgreSQL."""
from __future__ import annotations

import uuid
from typing import List, Optional

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from autoresponder.infra.database.models.base import Base, TimestampMixin, _uuid_pk


class AutoResponseRule(Base, TimestampMixin):
    """A canned answer the bot posts when an incoming chat message matches.

    A rule fires when any of its ``keywords`` is a substring of the lowercased
    message, or when the message's word overlap with ``question`` is above the
    similarity threshold (see ``autoresponder.responder.rules.matcher``).
    """

    __tablename__ = "auto_response_rules"

    id: Mapped[uuid.UUID] = _uuid_pk()

    question: Mapped[str] = mapped_column(Text, nullable=False)
    """Reference text for similarity scoring."""

    answer: Mapped[str] = mapped_column(Text, nullable=False)
    """Reply posted by the bot when the rule fires."""

    keywords: Mapped[List[str]] = mapped_column(
        ARRAY(String), nullable=False, server_default="{}",
    )
    """Lowercase trigger phrases, kept in the order the admin entered them."""

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    usage_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0",
    )
    """Number of times the rule fired. Only ever incremented in SQL."""

    created_by: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)

    def __repr__(self) -> str:
        return (
            f"AutoResponseRule(id={self.id!r}, question={self.question[:40]!r}, "
            f"active={self.is_active}, used={self.usage_count})"
        )
