"""Tests for TelegramPublisher (bot client mocked)."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

from telegram.constants import ParseMode
from telegram.error import TelegramError

from issuesync.models import Issue
from issuesync.publishers.telegram import TelegramPublisher

CHAT_ID = -1001249449971
FOOTER = "https://simonaking.com/blog/weibo"


def _issue(body: str = "Hello") -> Issue:
    return Issue(
        title="Title",
        body=body,
        created_at=datetime(2024, 3, 5, tzinfo=timezone.utc),
        url="https://github.com/zsxcoder/weibo/issues/1",
        labels=["bug"],
    )


def _bot() -> MagicMock:
    bot = MagicMock()
    bot.__aenter__.return_value = bot
    bot.__aexit__.return_value = False
    bot.send_message = AsyncMock()
    bot.send_photo = AsyncMock()
    return bot


def _publisher(bot: MagicMock, token: str | None = "123:abc") -> tuple[TelegramPublisher, MagicMock]:
    factory = MagicMock(return_value=bot)
    return TelegramPublisher(bot_token=token, chat_id=CHAT_ID, footer_url=FOOTER, bot_factory=factory), factory


def test_publish_sends_markdown_message() -> None:
    """Text message has bold title, content, Markdown mode and notifications on."""
    bot = _bot()
    publisher, factory = _publisher(bot)

    assert publisher.publish(_issue()) is True

    factory.assert_called_once_with("123:abc")
    bot.send_message.assert_awaited_once()
    kwargs = bot.send_message.await_args.kwargs
    assert kwargs["chat_id"] == CHAT_ID
    assert kwargs["text"].startswith("*Title*\n\nHello\n\n---\nLabels: bug")
    assert kwargs["parse_mode"] == ParseMode.MARKDOWN
    assert kwargs["link_preview_options"].is_disabled is False
    assert kwargs["disable_notification"] is False
    bot.send_photo.assert_not_awaited()


def test_publish_sends_valid_images_in_body_order() -> None:
    """One photo per image link that passes the heuristic, in order."""
    bot = _bot()
    publisher, _ = _publisher(bot)
    body = "![a](https://x.com/1.png) text ![b](https://x.com/2.txt) ![c](https://x.com/3.jpg)"

    assert publisher.publish(_issue(body)) is True

    photos = [c.kwargs["photo"] for c in bot.send_photo.await_args_list]
    assert photos == ["https://x.com/1.png", "https://x.com/3.jpg"]
    assert all(c.kwargs["chat_id"] == CHAT_ID for c in bot.send_photo.await_args_list)


def test_publish_without_token_skips() -> None:
    """No token: no bot created, nothing sent, returns False."""
    bot = _bot()
    publisher, factory = _publisher(bot, token=None)

    assert publisher.enabled is False
    assert publisher.publish(_issue()) is False
    factory.assert_not_called()
    bot.send_message.assert_not_awaited()


def test_publish_error_returns_false() -> None:
    """A Telegram API error is caught and reported as False."""
    bot = _bot()
    bot.send_message.side_effect = TelegramError("Bad Request: can't parse entities")
    publisher, _ = _publisher(bot)

    assert publisher.publish(_issue("![a](https://x.com/1.png)")) is False
    bot.send_photo.assert_not_awaited()


def test_photo_error_returns_false_after_text_sent() -> None:
    """Failing photo send still reports False; the text message went out."""
    bot = _bot()
    bot.send_photo.side_effect = TelegramError("wrong file identifier")
    publisher, _ = _publisher(bot)

    assert publisher.publish(_issue("![a](https://x.com/1.png)")) is False
    bot.send_message.assert_awaited_once()
