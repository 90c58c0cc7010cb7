"""Core data structures for the responder layer."""
from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional


@dataclass
class ChatSettings:
    """Admin-editable chat behaviour, persisted as JSON in the ``chat_settings`` row.

    Only ``auto_respond`` and the bot identity drive behaviour here; the
    moderation and media flags are stored for the chat client and returned
    unchanged.
    """

    auto_respond: bool = True
    """When False the matcher is never consulted and no bot reply is posted."""

    bot_sender_id: str = "bot"
    bot_name: str = "AI Assistant"

    moderation_enabled: bool = True
    allow_images: bool = True
    allow_files: bool = True
    slow_mode: bool = False
    slow_mode_delay: int = 5
    """Seconds between messages per user when slow mode is on."""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ChatSettings":
        """Build from stored JSON; unknown keys are dropped, missing keys take defaults."""
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def merged(self, changes: Dict[str, Any]) -> "ChatSettings":
        return ChatSettings.from_dict({**self.to_dict(), **changes})


@dataclass(frozen=True)
class AutoResponse:
    """Outcome of one firing: which rule answered, why, and the published reply."""

    rule_id: Any
    answer: str
    reason: str
    reply: Any = None
