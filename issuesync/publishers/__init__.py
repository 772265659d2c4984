"""Publish targets for formatted issues."""

from issuesync.publishers.gist import GistPublisher
from issuesync.publishers.telegram import TelegramPublisher

__all__ = ["GistPublisher", "TelegramPublisher"]
