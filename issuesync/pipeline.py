"""One synchronization pass: fetch issues, publish to Telegram, then to Gists."""

import logging
from typing import List, Literal

from pydantic import BaseModel, Field

from issuesync.adapters.github import GitHubAdapter
from issuesync.config import AppConfig
from issuesync.errors import MissingCredentialError, RequestError
from issuesync.fetcher import fetch_latest_issues
from issuesync.formatter import format_content, format_title
from issuesync.publishers.gist import GistPublisher
from issuesync.publishers.telegram import TelegramPublisher

LOG = logging.getLogger("issuesync.pipeline")

RunStatus = Literal["ok", "missing_credentials", "fetch_failed", "no_issues", "no_gists", "error"]


class SyncResult(BaseModel):
    """Outcome of one run."""

    status: RunStatus = "ok"
    issues_fetched: int = 0
    telegram_attempted: bool = False
    telegram_sent: bool = False
    gists_updated: List[str] = Field(default_factory=list)
    gists_failed: List[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when the run completed and no attempted publish failed."""
        if self.status != "ok" or self.gists_failed:
            return False
        return self.telegram_sent or not self.telegram_attempted


def require_github_token(config: AppConfig) -> str:
    """Return the GitHub token or raise MissingCredentialError."""
    if not config.github.token:
        raise MissingCredentialError("GitHub token is not set (GIST_PAT or GITHUB_TOKEN)")
    return config.github.token


def run_sync(
    config: AppConfig,
    adapter: GitHubAdapter | None = None,
    telegram: TelegramPublisher | None = None,
    gists: GistPublisher | None = None,
) -> SyncResult:
    """Run one fetch-and-publish pass. Never raises; failures are logged and
    reflected in the returned SyncResult.

    adapter, telegram and gists are built from config when not given.
    """
    result = SyncResult()
    try:
        token = require_github_token(config)
    except MissingCredentialError as e:
        LOG.error("%s; nothing to do.", e)
        result.status = "missing_credentials"
        return result

    try:
        if adapter is None:
            adapter = GitHubAdapter(token=token, api_url=config.github.api_url, timeout=config.github.timeout)
        if telegram is None:
            telegram = TelegramPublisher(
                bot_token=config.telegram.bot_token,
                chat_id=config.telegram.chat_id,
                footer_url=config.format.footer_url,
                probe_images=config.telegram.probe_images,
            )

        source = config.source
        try:
            issues = fetch_latest_issues(adapter, source.owner, source.repo, source.count)
        except RequestError as e:
            LOG.error("Error fetching issues: %s", e)
            result.status = "fetch_failed"
            return result

        result.issues_fetched = len(issues)
        if not issues:
            LOG.error("No issues found. Exiting.")
            result.status = "no_issues"
            return result

        result.telegram_attempted = telegram.enabled
        result.telegram_sent = telegram.publish(issues[0])

        if not config.gist.enabled:
            LOG.info("Gist publishing disabled; run complete.")
            return result

        gist_ids = config.active_gist_ids
        if not gist_ids:
            LOG.error("No valid Gist IDs configured (GIST_SHORT_IDS_STR or gist.ids). Exiting.")
            result.status = "no_gists"
            return result

        if gists is None:
            gists = GistPublisher(adapter, filename=config.gist.filename)

        pairs = min(len(issues), len(gist_ids))
        LOG.info("Updating %s Gists with issue content...", pairs)
        for issue, gist_id in zip(issues[:pairs], gist_ids[:pairs]):
            content = format_content(issue, config.format.footer_url)
            title = format_title(issue, config.format.timezone)
            if gists.publish(gist_id, content, title) is None:
                result.gists_failed.append(gist_id)
            else:
                result.gists_updated.append(gist_id)
    except Exception as e:
        LOG.exception("Error in main execution: %s", e)
        result.status = "error"
    return result
