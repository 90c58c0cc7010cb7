"""Tests for ChatService: posting, auto-replies, message deletion and chat settings."""
from __future__ import annotations

import asyncio
import unittest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from autoresponder.core.exceptions import NotFoundError, ValidationError
from autoresponder.responder.types import ChatSettings
from autoresponder.services.chat_service import ChatMessageReplySink, ChatService


def _run(coro):
    return asyncio.run(coro)


def _fake_message(text="hello", **kwargs):
    defaults = {"id": uuid4(), "chat_id": "community", "text": text, "message_type": "text"}
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def _fake_rule(**kwargs):
    defaults = {
        "id": uuid4(),
        "question": "How do I upload?",
        "answer": "Use Upload.",
        "keywords": ["upload"],
        "is_active": True,
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def _service(*, settings=None, rules=(), status=None):
    svc = ChatService(MagicMock())
    svc._msg_repo.add_user_message = AsyncMock(side_effect=lambda chat_id, **kw: _fake_message(kw["text"], chat_id=chat_id))
    svc._msg_repo.add_bot_message = AsyncMock(return_value=_fake_message("bot", message_type="bot"))
    svc._settings_repo.load = AsyncMock(return_value=settings or {})
    svc._settings_repo.save = AsyncMock()
    svc._rule_repo.list_rules = AsyncMock(return_value=list(rules))
    svc._rule_repo.increment_usage = AsyncMock()
    svc._msg_repo.add_system_message = AsyncMock(
        side_effect=lambda chat_id, text: _fake_message(text, chat_id=chat_id, message_type="system"),
    )
    svc._status_repo.get_status = AsyncMock(return_value=status)
    svc._status_repo.set_status = AsyncMock()
    svc._status_repo.clear = AsyncMock(return_value=True)
    return svc


class TestSendMessage(unittest.TestCase):
    def test_matching_message_gets_bot_reply(self):
        rule = _fake_rule()
        svc = _service(rules=[rule])

        result = _run(svc.send_message("u1", "Alice", "how do i upload a photo"))

        self.assertEqual(result.message.text, "how do i upload a photo")
        self.assertIs(result.reply, svc._msg_repo.add_bot_message.return_value)
        self.assertEqual(result.response.reason, "keyword: upload")
        svc._msg_repo.add_bot_message.assert_awaited_once_with(
            "community", "Use Upload.", sender_id="bot", sender_name="AI Assistant", rule_id=rule.id,
        )
        svc._rule_repo.increment_usage.assert_awaited_once_with(rule.id)

    def test_user_message_stored_with_sender_details(self):
        svc = _service()

        _run(svc.send_message("admin-1", "Mod", "  hi all  ", sender_role="admin", chat_id="room-2"))

        svc._msg_repo.add_user_message.assert_awaited_once_with(
            "room-2", sender_id="admin-1", sender_name="Mod", sender_role="admin", text="  hi all  ",
        )

    def test_bot_identity_comes_from_settings(self):
        rule = _fake_rule()
        svc = _service(settings={"bot_sender_id": "helper", "bot_name": "Helper"}, rules=[rule])

        _run(svc.send_message("u1", "Alice", "upload"))

        kwargs = svc._msg_repo.add_bot_message.await_args.kwargs
        self.assertEqual(kwargs["sender_id"], "helper")
        self.assertEqual(kwargs["sender_name"], "Helper")

    def test_no_match_posts_nothing(self):
        svc = _service(rules=[_fake_rule()])

        result = _run(svc.send_message("u1", "Alice", "good morning"))

        self.assertIsNone(result.reply)
        self.assertIsNone(result.response)
        svc._msg_repo.add_bot_message.assert_not_awaited()
        svc._rule_repo.increment_usage.assert_not_awaited()

    def test_auto_respond_off_skips_matching(self):
        svc = _service(settings={"auto_respond": False}, rules=[_fake_rule()])

        result = _run(svc.send_message("u1", "Alice", "upload"))

        self.assertIsNone(result.reply)
        svc._rule_repo.list_rules.assert_not_awaited()
        svc._msg_repo.add_bot_message.assert_not_awaited()

    def test_blank_text_rejected(self):
        svc = _service()

        with self.assertRaises(ValidationError):
            _run(svc.send_message("u1", "Alice", "   "))
        svc._msg_repo.add_user_message.assert_not_awaited()

    def test_text_is_stored_and_matched_unchanged(self):
        rule = _fake_rule(keywords=[" upload "])
        svc = _service(rules=[rule])

        result = _run(svc.send_message("u1", "Alice", "please upload "))

        self.assertEqual(svc._msg_repo.add_user_message.await_args.kwargs["text"], "please upload ")
        self.assertIsNotNone(result.response)

    def test_muted_sender_is_rejected(self):
        svc = _service(rules=[_fake_rule()], status="muted")

        with self.assertRaises(ValidationError) as ctx:
            _run(svc.send_message("u1", "Alice", "upload"))

        self.assertEqual(ctx.exception.http_status, 403)
        self.assertEqual(ctx.exception.code, "SENDER_MUTED")
        svc._msg_repo.add_user_message.assert_not_awaited()
        svc._rule_repo.list_rules.assert_not_awaited()

    def test_banned_sender_is_rejected(self):
        svc = _service(status="banned")

        with self.assertRaises(ValidationError) as ctx:
            _run(svc.send_message("u1", "Alice", "hello"))
        self.assertEqual(ctx.exception.code, "SENDER_BANNED")
        svc._msg_repo.add_user_message.assert_not_awaited()


class TestReplySink(unittest.TestCase):
    def test_publishes_bot_message_into_the_chat(self):
        repo = MagicMock()
        repo.add_bot_message = AsyncMock(return_value="stored")
        sink = ChatMessageReplySink(repo, "community", ChatSettings(bot_name="Bot"))
        rule = _fake_rule()

        self.assertEqual(_run(sink.publish_reply(rule, "Use Upload.")), "stored")
        repo.add_bot_message.assert_awaited_once_with(
            "community", "Use Upload.", sender_id="bot", sender_name="Bot", rule_id=rule.id,
        )

    def test_mapping_rule_id_is_recorded_on_the_reply(self):
        repo = MagicMock()
        repo.add_bot_message = AsyncMock(return_value="stored")
        sink = ChatMessageReplySink(repo, "community", ChatSettings())

        _run(sink.publish_reply({"id": "qa-1", "answer": "Use Upload."}, "Use Upload."))

        self.assertEqual(repo.add_bot_message.await_args.kwargs["rule_id"], "qa-1")


class TestMessages(unittest.TestCase):
    def test_list_messages_delegates(self):
        svc = _service()
        svc._msg_repo.list_recent = AsyncMock(return_value=[])

        _run(svc.list_messages(limit=20))
        svc._msg_repo.list_recent.assert_awaited_once_with("community", limit=20)

    def test_delete_unknown_message_raises_not_found(self):
        svc = _service()
        svc._msg_repo.delete = AsyncMock(return_value=False)

        with self.assertRaises(NotFoundError):
            _run(svc.delete_message(uuid4()))


class TestChatSettings(unittest.TestCase):
    def test_defaults(self):
        settings = ChatSettings.from_dict(None)
        self.assertTrue(settings.auto_respond)
        self.assertEqual(settings.bot_sender_id, "bot")
        self.assertEqual(settings.bot_name, "AI Assistant")
        self.assertEqual(settings.slow_mode_delay, 5)

    def test_unknown_keys_are_ignored(self):
        settings = ChatSettings.from_dict({"auto_respond": False, "theme": "dark"})
        self.assertFalse(settings.auto_respond)
        self.assertNotIn("theme", settings.to_dict())

    def test_get_settings_reads_stored_row(self):
        svc = _service(settings={"slow_mode": True})
        self.assertTrue(_run(svc.get_settings()).slow_mode)

    def test_update_merges_and_saves(self):
        svc = _service(settings={"bot_name": "Helper", "legacy": 1})

        result = _run(svc.update_settings({"auto_respond": False}))

        self.assertFalse(result.auto_respond)
        self.assertEqual(result.bot_name, "Helper")
        saved = svc._settings_repo.save.await_args.args[0]
        self.assertEqual(saved["bot_name"], "Helper")
        self.assertFalse(saved["auto_respond"])
        self.assertNotIn("legacy", saved)


class TestModeration(unittest.TestCase):
    def test_mute_records_status_and_posts_system_message(self):
        svc = _service()

        notice = _run(svc.mute_user("u7", "Bob"))

        svc._status_repo.set_status.assert_awaited_once_with("u7", "Bob", "muted")
        svc._msg_repo.add_system_message.assert_awaited_once_with("community", "Bob has been muted by admin")
        self.assertEqual(notice.message_type, "system")

    def test_ban_uses_user_id_when_name_missing(self):
        svc = _service()

        _run(svc.ban_user("u8", "  ", chat_id="room-2"))

        svc._status_repo.set_status.assert_awaited_once_with("u8", "u8", "banned")
        svc._msg_repo.add_system_message.assert_awaited_once_with("room-2", "u8 has been banned by admin")

    def test_blank_user_id_rejected(self):
        svc = _service()

        with self.assertRaises(ValidationError):
            _run(svc.mute_user(" ", "Bob"))
        svc._status_repo.set_status.assert_not_awaited()

    def test_lift_restriction_unknown_user_raises_not_found(self):
        svc = _service()
        svc._status_repo.clear = AsyncMock(return_value=False)

        with self.assertRaises(NotFoundError):
            _run(svc.lift_restriction("u9"))


if __name__ == "__main__":
    unittest.main()
