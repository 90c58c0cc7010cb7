"""Auto-response rules: ORM model, repository and the pure matcher."""
from autoresponder.responder.rules.matcher import (
    SIMILARITY_THRESHOLD,
    MatchResult,
    explain_match,
    find_response,
    match,
    rule_answer,
    rule_id,
    similarity,
    tokenize,
)

__all__ = [
    "SIMILARITY_THRESHOLD",
    "MatchResult",
    "explain_match",
    "find_response",
    "match",
    "rule_answer",
    "rule_id",
    "similarity",
    "tokenize",
]
