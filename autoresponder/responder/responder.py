"""AutoResponder: decide whether a chat message gets a canned bot reply, and send it."""
from __future__ import annotations

import logging
from typing import Optional

from autoresponder.responder.ports import ReplySink, RuleSource, UsageSink
from autoresponder.responder.rules.matcher import match, rule_answer, rule_id
from autoresponder.responder.types import AutoResponse

logger = logging.getLogger(__name__)


class AutoResponder:
    """Fetch rules, run the matcher, publish the answer, count the firing.

    Per message, at most one rule fires and exactly one usage increment is
    requested for it. A failed increment is logged and otherwise ignored; the
    reply has already been published at that point.
    """

    def __init__(self, source: RuleSource, usage: UsageSink, replies: ReplySink) -> None:
        self._source = source
        self._usage = usage
        self._replies = replies

    async def respond(self, message: str) -> Optional[AutoResponse]:
        rules = await self._source.list_rules()
        result = match(message, rules)
        if result is None:
            logger.debug("AutoResponder: no rule matched (%d rules)", len(rules))
            return None

        rule = result.rule
        fired_id = rule_id(rule)
        answer = rule_answer(rule)
        logger.info(
            "AutoResponder: rule %s fired (%s)", fired_id, result.reason,
            extra={"rule_id": str(fired_id), "reason": result.reason},
        )
        reply = await self._replies.publish_reply(rule, answer)

        try:
            await self._usage.increment_usage(fired_id)
        except Exception as exc:
            logger.warning(
                "AutoResponder: usage increment failed for rule %s: %s", fired_id, exc,
                extra={"rule_id": str(fired_id)},
            )

        return AutoResponse(
            rule_id=fired_id,
            answer=answer,
            reason=result.reason,
            reply=reply,
        )
