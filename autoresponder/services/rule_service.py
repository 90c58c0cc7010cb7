"""RuleService: CRUD operations for auto-response rules."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Union
from uuid import UUID

from autoresponder.core.exceptions import NotFoundError, ValidationError
from autoresponder.responder.rules.repository import RuleRepository

if TYPE_CHECKING:
    from autoresponder.responder.rules.models import AutoResponseRule
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = ("question", "answer", "keywords", "is_active")


def normalize_keywords(raw: Union[str, Iterable[str], None]) -> List[str]:
    """Turn ``"Post, create , ,share"`` or a list into ``["post", "create", "share"]``.

    Strings are split on commas; every item is stripped and lowercased and
    empties are dropped. Order is kept, duplicates removed.
    """
    if raw is None:
        return []
    items = raw.split(",") if isinstance(raw, str) else list(raw)
    seen: List[str] = []
    for item in items:
        if not isinstance(item, str):
            continue
        keyword = item.strip().lower()
        if keyword and keyword not in seen:
            seen.append(keyword)
    return seen


def _require_text(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} must not be blank", details={"field": field})
    return value.strip()


class RuleService:
    """Manage auto-response rules in the database."""

    def __init__(self, session: "AsyncSession") -> None:
        self._session = session
        self._repo = RuleRepository(session)

    async def create(
        self,
        question: str,
        answer: str,
        keywords: Union[str, Iterable[str], None] = None,
        *,
        created_by: Optional[str] = None,
        is_active: bool = True,
    ) -> "AutoResponseRule":
        rule = await self._repo.create_rule(
            question=_require_text(question, "question"),
            answer=_require_text(answer, "answer"),
            keywords=normalize_keywords(keywords),
            is_active=is_active,
            created_by=created_by,
        )
        logger.info("RuleService: created rule %s", rule.id, extra={"rule_id": str(rule.id)})
        return rule

    async def get(self, rule_id: UUID) -> "AutoResponseRule":
        rule = await self._repo.get_by_id(rule_id)
        if rule is None:
            raise NotFoundError(f"Rule {rule_id} not found", details={"rule_id": str(rule_id)})
        return rule

    async def list_all(self, *, active_only: bool = False, limit: int = 500) -> List["AutoResponseRule"]:
        return await self._repo.list_all(active_only=active_only, limit=limit)

    async def update(self, rule_id: UUID, data: Dict[str, Any]) -> "AutoResponseRule":
        changes = {k: v for k, v in data.items() if k in _EDITABLE_FIELDS and v is not None}
        if "question" in changes:
            changes["question"] = _require_text(changes["question"], "question")
        if "answer" in changes:
            changes["answer"] = _require_text(changes["answer"], "answer")
        if "keywords" in changes:
            changes["keywords"] = normalize_keywords(changes["keywords"])

        rule = await self._repo.update_rule(rule_id, changes)
        if rule is None:
            raise NotFoundError(f"Rule {rule_id} not found", details={"rule_id": str(rule_id)})
        logger.info("RuleService: updated rule %s (%s)", rule_id, ", ".join(changes) or "no changes",
                    extra={"rule_id": str(rule_id)})
        return rule

    async def toggle_active(self, rule_id: UUID) -> "AutoResponseRule":
        rule = await self.get(rule_id)
        return await self.update(rule_id, {"is_active": not rule.is_active})

    async def delete(self, rule_id: UUID) -> None:
        deleted = await self._repo.delete_rule(rule_id)
        if not deleted:
            raise NotFoundError(f"Rule {rule_id} not found", details={"rule_id": str(rule_id)})
        logger.info("RuleService: deleted rule %s", rule_id, extra={"rule_id": str(rule_id)})
