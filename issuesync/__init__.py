"""Issuesync: republish the newest GitHub issues to Telegram and Gists."""

__version__ = "0.1.0"
