#!/usr/bin/env python3
"""Seed the community chat with the sample Q&A auto-response rules.

Rules whose question already exists are left untouched, so the script can be
re-run safely. Also writes the default chat settings row if there is none.

Run:
    python -m autoresponder.scripts.seed_rules
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone

from autoresponder.core.logger import configure
from autoresponder.infra.database.engine import (
    build_engine,
    build_session_factory,
    close_engine,
    ensure_database_exists,
    init_db,
)
from autoresponder.infra.database.repositories.chat import ChatSettingsRepository
from autoresponder.responder.rules.repository import RuleRepository
from autoresponder.responder.types import ChatSettings

logger = logging.getLogger("autoresponder.scripts.seed_rules")

# In matching order: earlier entries win when keywords overlap
SAMPLE_RULES = [
    {
        "question": "How do I create a post?",
        "answer": "To create a post, click the 'Upload' button in the navigation menu, "
                  "then add your content and media.",
        "keywords": ["post", "create", "upload", "how to post"],
    },
    {
        "question": "How do I change my profile?",
        "answer": "Go to your Profile page and click 'Edit Profile' to update your "
                  "information, avatar, and settings.",
        "keywords": ["profile", "edit", "change", "update profile"],
    },
    {
        "question": "How do notifications work?",
        "answer": "You'll receive notifications for likes, comments, messages, and follows. "
                  "Check the bell icon to see all notifications.",
        "keywords": ["notifications", "alerts", "bell", "notify"],
    },
    {
        "question": "Can I chat with other users?",
        "answer": "Yes! Use the Chat feature to send messages to other users. "
                  "Admins can also moderate chats.",
        "keywords": ["chat", "message", "talk", "conversation"],
    },
]


async def seed_rules(session) -> int:
    """Insert the sample rules missing from the store; returns how many were added.

    Rules match newest first, so each sample gets a ``created_at`` one second
    older than the one before it; the store then scans them in list order.
    """
    repo = RuleRepository(session)
    base = datetime.now(timezone.utc)
    added = 0
    for position, rule_data in enumerate(SAMPLE_RULES):
        if await repo.find_by_question(rule_data["question"]) is not None:
            logger.info("  = exists: %s", rule_data["question"])
            continue
        await repo.create_rule(
            **rule_data, created_by="seed", created_at=base - timedelta(seconds=position),
        )
        logger.info("  + rule: %s", rule_data["question"])
        added += 1

    settings_repo = ChatSettingsRepository(session)
    if not await settings_repo.load():
        await settings_repo.save(ChatSettings().to_dict())
        logger.info("Created default chat settings.")
    return added


async def seed() -> None:
    configure()
    await ensure_database_exists()
    engine = build_engine()
    session_factory = build_session_factory(engine)
    await init_db()

    async with session_factory() as session:
        added = await seed_rules(session)
        await session.commit()

    await close_engine()
    logger.info("Seed complete: %d of %d sample rules added.", added, len(SAMPLE_RULES))


def main() -> None:
    asyncio.run(seed())


if __name__ == "__main__":
    main()
