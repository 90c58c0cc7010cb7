"""Auto-response matching: keyword containment or question word overlap, first match wins.

A rule fires for a message when either

* one of its keywords is a substring of the lowercased message
  (``"helper"`` contains ``"help"``), or
* the word-overlap score between the lowercased message and the rule's
  question is strictly greater than ``SIMILARITY_THRESHOLD``::

      |words(message) & words(question)| / max(|words(message)|, |words(question)|)

  where words are whitespace-separated tokens, with no stemming, punctuation
  stripping or stop-word removal.

Rules are scanned in the order given and the first one that fires wins;
scores are never compared across rules. Inactive rules are skipped.

Everything here is pure. Rules may be ORM rows, ``SimpleNamespace`` objects
or plain mappings (e.g. raw document snapshots); missing or malformed fields
read as empty, so a broken rule simply never matches.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence

SIMILARITY_THRESHOLD = 0.7


@dataclass(frozen=True)
class MatchResult:
    """The rule that fired and a short human-readable reason."""

    rule: Any
    reason: str


def tokenize(text: str) -> set[str]:
    """Lowercased whitespace-separated words of *text*."""
    return set(text.lower().split())


def similarity(message: str, question: str) -> float:
    """Word-overlap score in [0, 1]; 0 when both sides are empty."""
    return _overlap(tokenize(message), tokenize(question))


def _overlap(message_words: set[str], question_words: set[str]) -> float:
    denominator = max(len(message_words), len(question_words))
    if denominator == 0:
        return 0.0
    return len(message_words & question_words) / denominator


def _field(rule: Any, name: str) -> Any:
    if isinstance(rule, Mapping):
        return rule.get(name)
    return getattr(rule, name, None)


def rule_id(rule: Any) -> Any:
    """The rule's id, for ORM rows and mapping snapshots alike."""
    return _field(rule, "id")


def rule_answer(rule: Any) -> str:
    """The rule's answer text; ``""`` when missing or not a string."""
    raw = _field(rule, "answer")
    return raw if isinstance(raw, str) else ""


def _is_active(rule: Any) -> bool:
    flag = _field(rule, "is_active")
    return flag is None or bool(flag)


def _keywords(rule: Any) -> List[str]:
    raw = _field(rule, "keywords")
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = [raw]
    try:
        items: Iterable[Any] = list(raw)
    except TypeError:
        return []
    return [k.lower() for k in items if isinstance(k, str) and k]


def _question(rule: Any) -> str:
    raw = _field(rule, "question")
    return raw if isinstance(raw, str) else ""


def _match_reason(rule: Any, lowered: str, message_words: set[str]) -> Optional[str]:
    for keyword in _keywords(rule):
        if keyword in lowered:
            return f"keyword: {keyword}"

    score = _overlap(message_words, tokenize(_question(rule)))
    if score > SIMILARITY_THRESHOLD:
        return f"similarity: {score:.2f}"
    return None


def explain_match(message: str, rule: Any) -> Optional[str]:
    """Why *rule* would fire for *message*, or None. Ignores ``is_active``."""
    lowered = message.lower()
    return _match_reason(rule, lowered, set(lowered.split()))


def match(message: str, rules: Sequence[Any]) -> Optional[MatchResult]:
    """Return the first active rule that fires for *message*, with its reason."""
    lowered = message.lower()
    message_words = set(lowered.split())
    for rule in rules:
        if not _is_active(rule):
            continue
        reason = _match_reason(rule, lowered, message_words)
        if reason is not None:
            return MatchResult(rule=rule, reason=reason)
    return None


def find_response(message: str, rules: Sequence[Any]) -> Optional[Any]:
    """Return the rule whose answer should be sent for *message*, or None."""
    result = match(message, rules)
    return result.rule if result is not None else None
