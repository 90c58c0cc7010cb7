"""Repository for AutoResponseRule CRUD operations and usage counting."""
from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar, Dict, List, Optional
from uuid import UUID

from sqlalchemy import select, update

from autoresponder.infra.database.repositories.base import BaseRepository
from autoresponder.responder.rules.models import AutoResponseRule


class RuleRepository(BaseRepository[AutoResponseRule]):
    """Rule store. Also serves as the ``RuleSource`` and ``UsageSink`` of the AutoResponder."""

    model: ClassVar[type] = AutoResponseRule

    async def list_all(self, *, active_only: bool = False, limit: int = 500) -> List[AutoResponseRule]:
        """Rules newest first; this is also the order the matcher scans them in."""
        stmt = select(AutoResponseRule)
        if active_only:
            stmt = stmt.where(AutoResponseRule.is_active.is_(True))
        stmt = stmt.order_by(
            AutoResponseRule.created_at.desc(), AutoResponseRule.id.desc(),
        ).limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_rules(self) -> List[AutoResponseRule]:
        return await self.list_all(active_only=True)

    async def find_by_question(self, question: str) -> Optional[AutoResponseRule]:
        stmt = select(AutoResponseRule).where(AutoResponseRule.question == question).limit(1)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_rule(
        self,
        question: str,
        answer: str,
        keywords: List[str],
        *,
        is_active: bool = True,
        created_by: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> AutoResponseRule:
        data: Dict[str, Any] = {
            "question": question,
            "answer": answer,
            "keywords": keywords,
            "is_active": is_active,
            "usage_count": 0,
            "created_by": created_by,
        }
        if created_at is not None:
            data["created_at"] = created_at
        return await self.create(data)

    async def update_rule(self, rule_id: UUID, data: Dict[str, Any]) -> Optional[AutoResponseRule]:
        return await self.update(rule_id, data)

    async def delete_rule(self, rule_id: UUID) -> bool:
        return await self.delete(rule_id)

    async def increment_usage(self, rule_id: UUID) -> None:
        """Atomically add one to ``usage_count``.

        Runs in a savepoint so a failure leaves the caller's transaction usable.
        """
        stmt = (
            update(AutoResponseRule)
            .where(AutoResponseRule.id == rule_id)
            .values(usage_count=AutoResponseRule.usage_count + 1)
            .execution_options(synchronize_session=False)
        )
        async with self.session.begin_nested():
            await self.session.execute(stmt)
