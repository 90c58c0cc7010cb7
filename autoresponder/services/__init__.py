"""Service layer: Rule and Chat services."""
from autoresponder.services.chat_service import ChatService
from autoresponder.services.rule_service import RuleService

__all__ = [
    "RuleService",
    "ChatService",
]
