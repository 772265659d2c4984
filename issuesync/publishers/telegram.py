"""Send the newest issue to a Telegram chat: one text message, then its images."""

import asyncio
import logging
from typing import Any, Callable

from telegram import Bot, LinkPreviewOptions
from telegram.constants import ParseMode

from issuesync.formatter import format_telegram_message
from issuesync.models import Issue
from issuesync.utils import photo_urls

LOG = logging.getLogger("issuesync.publishers.telegram")


class TelegramPublisher:
    """Publishes an issue to one fixed chat.

    The bot client is asynchronous; publish() drives it with asyncio.run so
    callers stay synchronous. Failures are logged and reported as False.
    """

    def __init__(
        self,
        bot_token: str | None,
        chat_id: int | str,
        footer_url: str,
        probe_images: bool = False,
        bot_factory: Callable[[str], Any] | None = None,
    ) -> None:
        self._bot_token = bot_token
        self._chat_id = chat_id
        self._footer_url = footer_url
        self._probe_images = probe_images
        self._bot_factory = bot_factory or Bot

    @property
    def enabled(self) -> bool:
        return bool(self._bot_token)

    def publish(self, issue: Issue) -> bool:
        """Send issue text and its image links. Returns True if all sends succeeded."""
        if not self.enabled:
            LOG.info("Telegram bot token not set, skipping Telegram notification")
            return False
        try:
            asyncio.run(self._send(issue))
        except Exception as e:
            LOG.error("Error sending to Telegram: %s", e)
            return False
        LOG.info("Successfully sent issue to Telegram")
        return True

    async def _send(self, issue: Issue) -> None:
        LOG.info("Sending issue to Telegram chat %s...", self._chat_id)
        text = format_telegram_message(issue, self._footer_url)
        images = photo_urls(issue.body, probe=self._probe_images)

        async with self._bot_factory(self._bot_token) as bot:
            await bot.send_message(
                chat_id=self._chat_id,
                text=text,
                parse_mode=ParseMode.MARKDOWN,
                link_preview_options=LinkPreviewOptions(is_disabled=False),
                disable_notification=False,
            )
            if images:
                LOG.info("Found %s images in issue, sending to Telegram...", len(images))
            for url in images:
                await bot.send_photo(chat_id=self._chat_id, photo=url)
