"""Ports (interfaces) used by the AutoResponder.

The responder depends only on these contracts, so the rule store, the usage
counter and the chat transport can each be swapped or faked independently.
"""
from __future__ import annotations

from typing import Any, Protocol, Sequence
from uuid import UUID


class RuleSource(Protocol):
    """Read accessor for the rules visible to a chat, in matching order."""

    async def list_rules(self) -> Sequence[Any]:
        ...


class UsageSink(Protocol):
    """Atomic ``usage_count + 1`` on a persisted rule."""

    async def increment_usage(self, rule_id: UUID) -> None:
        ...


class ReplySink(Protocol):
    """Publishes the bot's answer as a new outgoing chat message."""

    async def publish_reply(self, rule: Any, text: str) -> Any:
        ...
