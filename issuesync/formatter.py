"""Format issues as Markdown for Gists and Telegram.

All functions are pure: the same issue always gives the same text.
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from issuesync.models import Issue

# zh-CN short date: 2024/03/05
DATE_FORMAT = "%Y/%m/%d"


def format_content(issue: Issue, footer_url: str) -> str:
    """Issue body, a horizontal rule, optional labels line and the source footer."""
    labels_text = f"Labels: {', '.join(issue.labels)}\n\n" if issue.labels else ""
    return f"{issue.body}\n\n---\n{labels_text}Original post: {footer_url}"


def format_date(created_at: datetime, tz: str = "UTC") -> str:
    """Render a timestamp as YYYY/MM/DD in the given time zone.

    Naive datetimes are treated as UTC.
    """
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return created_at.astimezone(ZoneInfo(tz)).strftime(DATE_FORMAT)


def format_title(issue: Issue, tz: str = "UTC") -> str:
    """Title with the creation date appended: ``<title> - YYYY/MM/DD``."""
    return f"{issue.title} - {format_date(issue.created_at, tz)}"


def format_telegram_message(issue: Issue, footer_url: str) -> str:
    """Bold title, blank line, then the formatted content (Telegram Markdown)."""
    return f"*{issue.title}*\n\n{format_content(issue, footer_url)}"
