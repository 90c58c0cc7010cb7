"""
Unit tests for the auto-response matcher: keyword containment, word-overlap
similarity, first-match-wins ordering and tolerance of malformed rules.
"""
from __future__ import annotations

from types import SimpleNamespace
from uuid import uuid4

import pytest

from autoresponder.responder.rules.matcher import (
    SIMILARITY_THRESHOLD,
    explain_match,
    find_response,
    match,
    rule_answer,
    rule_id,
    similarity,
    tokenize,
)

TEN_WORDS = "a b c d e f g h i j"


def _make_rule(
    question: str = "",
    answer: str = "Answer",
    keywords: list[str] | None = None,
    is_active: bool = True,
) -> SimpleNamespace:
    """Minimal rule-like object for testing (no DB)."""
    return SimpleNamespace(
        id=uuid4(),
        question=question,
        answer=answer,
        keywords=keywords if keywords is not None else [],
        is_active=is_active,
        usage_count=0,
    )


class TestTokenizeAndSimilarity:
    def test_tokenize_lowercases_and_splits_on_whitespace(self) -> None:
        assert tokenize("How  do\tI\nUpload") == {"how", "do", "i", "upload"}

    def test_punctuation_is_part_of_the_word(self) -> None:
        assert tokenize("upload?") == {"upload?"}
        assert similarity("upload?", "upload") == 0.0

    def test_duplicates_count_once(self) -> None:
        assert similarity("a a b", "a b") == 1.0

    def test_denominator_is_the_larger_word_set(self) -> None:
        assert similarity("a b", "a b c d") == 0.5
        assert similarity("a b c d", "a b") == 0.5

    def test_both_empty_scores_zero(self) -> None:
        assert similarity("", "") == 0.0
        assert similarity("   ", "") == 0.0

    def test_threshold_value(self) -> None:
        assert SIMILARITY_THRESHOLD == 0.7


class TestKeywordMatch:
    def test_keyword_is_case_insensitive_substring(self) -> None:
        rule = _make_rule(keywords=["Help"])
        result = match("HELPER needed", [rule])
        assert result is not None
        assert result.rule is rule
        assert result.reason == "keyword: help"

    @pytest.mark.parametrize("message", ["I need HELP please", "I need help please".upper()])
    def test_help_keyword_in_any_case(self, message: str) -> None:
        rule = _make_rule(keywords=["help"])
        assert find_response(message, [rule]) is rule

    def test_keyword_phrase_with_spaces(self) -> None:
        rule = _make_rule(keywords=["how to post"])
        assert find_response("So... how to post something?", [rule]) is rule

    def test_no_keyword_no_similarity_returns_none(self) -> None:
        rule = _make_rule(question="How do I change my profile?", keywords=["profile"])
        assert match("what time is it", [rule]) is None

    def test_empty_keyword_is_ignored(self) -> None:
        rule = _make_rule(keywords=["", "zzz"])
        assert match("hello there", [rule]) is None

    def test_keyword_checked_before_similarity(self) -> None:
        rule = _make_rule(question=TEN_WORDS, keywords=["a b"])
        result = match(TEN_WORDS, [rule])
        assert result is not None
        assert result.reason == "keyword: a b"


class TestSimilarityMatch:
    def test_exactly_threshold_does_not_fire(self) -> None:
        rule = _make_rule(question=TEN_WORDS)
        # 7 shared words out of 10
        assert match("a b c d e f g x y z", [rule]) is None

    def test_above_threshold_fires(self) -> None:
        rule = _make_rule(question=TEN_WORDS)
        result = match("a b c d e f g h y z", [rule])
        assert result is not None
        assert result.rule is rule
        assert result.reason == "similarity: 0.80"

    def test_four_of_five_words_fires(self) -> None:
        rule = _make_rule(question="how do notifications work here")
        assert find_response("How do notifications work there", [rule]) is rule

    def test_case_is_ignored(self) -> None:
        rule = _make_rule(question="Can I Chat With Users")
        assert find_response("can i chat with users", [rule]) is rule


class TestRuleSelection:
    def test_empty_message_never_fires(self) -> None:
        rules = [_make_rule(question="", keywords=["x"]), _make_rule(question="")]
        assert match("", rules) is None

    def test_whitespace_only_message_never_fires(self) -> None:
        assert match("   ", [_make_rule(question="   ")]) is None

    def test_no_rules(self) -> None:
        assert match("anything", []) is None

    def test_inactive_rule_is_skipped(self) -> None:
        inactive = _make_rule(keywords=["help"], answer="off", is_active=False)
        active = _make_rule(keywords=["help"], answer="on")
        assert find_response("help me", [inactive]) is None
        assert find_response("help me", [inactive, active]) is active

    def test_first_match_wins_over_better_score(self) -> None:
        loose = _make_rule(keywords=["photo"], answer="first")
        exact = _make_rule(question="how do i upload a photo", answer="second")
        result = match("how do i upload a photo", [loose, exact])
        assert result.rule is loose
        result = match("how do i upload a photo", [exact, loose])
        assert result.rule is exact

    def test_match_is_deterministic(self) -> None:
        rules = [_make_rule(keywords=["upload"]), _make_rule(keywords=["photo"])]
        first = match("upload a photo", rules)
        second = match("upload a photo", rules)
        assert first == second

    def test_upload_scenario(self) -> None:
        post = _make_rule(question="How do I create a post?", answer="Use Upload.", keywords=["post", "upload"])
        profile = _make_rule(question="How do I edit my profile?", answer="Go to Profile.", keywords=["profile"])
        result = match("how do i upload a photo", [post, profile])
        assert result is not None
        assert result.rule is post
        assert result.rule.answer == "Use Upload."
        assert result.reason == "keyword: upload"

    def test_upload_scenario_with_mapping_rules(self) -> None:
        rules = [
            {"keywords": ["post", "upload"], "question": "How do I create a post?", "answer": "Use Upload.", "is_active": True},
            {"keywords": ["profile"], "question": "How do I edit my profile?", "answer": "Go to Profile.", "is_active": True},
        ]
        rule = find_response("how do i upload a photo", rules)
        assert rule is rules[0]
        assert rule_answer(rule) == "Use Upload."


class TestMalformedRules:
    def test_mapping_rules_are_supported(self) -> None:
        rule = {"question": "How do I create a post?", "answer": "Click Upload", "keywords": ["post"]}
        assert find_response("new post please", [rule]) is rule

    def test_missing_is_active_counts_as_active(self) -> None:
        rule = {"keywords": ["bell"]}
        assert find_response("the bell icon", [rule]) is rule

    def test_string_keyword_is_a_single_keyword(self) -> None:
        rule = _make_rule()
        rule.keywords = "upload"
        assert find_response("Upload now", [rule]) is rule

    @pytest.mark.parametrize("keywords", [None, 5, [None, 3, ""], object()])
    def test_bad_keywords_degrade_to_no_keyword(self, keywords) -> None:
        rule = _make_rule()
        rule.keywords = keywords
        assert match("hello world", [rule]) is None

    def test_missing_question_scores_zero(self) -> None:
        rule = SimpleNamespace(id=uuid4(), answer="x", keywords=[], is_active=True)
        assert match("hello world", [rule]) is None

    def test_broken_rule_does_not_hide_later_rules(self) -> None:
        broken = {"question": None, "keywords": 42}
        good = _make_rule(keywords=["chat"])
        assert find_response("open the chat", [broken, good]) is good


class TestExplainMatch:
    def test_reports_reason_for_inactive_rule(self) -> None:
        rule = _make_rule(keywords=["profile"], is_active=False)
        assert explain_match("edit my profile", rule) == "keyword: profile"

    def test_none_when_rule_would_not_fire(self) -> None:
        assert explain_match("hello", _make_rule(question="goodbye")) is None


class TestRuleFieldAccess:
    def test_reads_attributes(self) -> None:
        rule = _make_rule(answer="Go to Profile.")
        assert rule_id(rule) == rule.id
        assert rule_answer(rule) == "Go to Profile."

    def test_reads_mappings(self) -> None:
        rule = {"id": "qa-1", "answer": "Use Upload."}
        assert rule_id(rule) == "qa-1"
        assert rule_answer(rule) == "Use Upload."

    def test_missing_or_bad_answer_reads_empty(self) -> None:
        assert rule_answer({"id": "qa-2"}) == ""
        assert rule_answer({"answer": 42}) == ""
        assert rule_id({}) is None
