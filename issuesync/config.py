"""Configuration loading from YAML and environment.

Secrets (tokens) are taken from environment variables or from files
(Docker secrets). Never put real tokens in config files committed to the
repo.

Environment names kept for existing deployments:
- GIST_PAT (or GITHUB_TOKEN / GITHUB_TOKEN_FILE): GitHub personal access token
- BOT_TOKEN (or BOT_TOKEN_FILE): Telegram bot token
- GIST_SHORT_IDS_STR: comma-separated Gist ids
"""

import os
from pathlib import Path
from typing import Any, List, Mapping

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Gist ids starting with this are template leftovers, not real Gists
GIST_ID_PLACEHOLDER = "YOUR_GIST_ID"


def _read_secret(env: Mapping[str, str], *keys: str, file_env_key: str | None = None) -> str | None:
    """Read secret from the first set env var, or from file path in env
    (e.g. Docker secrets)."""
    for key in keys:
        value = env.get(key)
        if value and value.strip():
            return value.strip()
    if file_env_key:
        file_path = env.get(file_env_key)
        if file_path:
            return Path(file_path).read_text().strip()
    return None


def _is_unresolved(value: str | None) -> bool:
    """True for empty values and ${VAR} references that were not substituted."""
    return not value or value.startswith("${")


def parse_gist_ids(raw: str | None) -> List[str]:
    """Split a comma-separated id list, stripping whitespace."""
    if not raw:
        return []
    return [part.strip() for part in raw.split(",")]


class SourceConfig(BaseSettings):
    """Repository the issues are read from."""

    model_config = SettingsConfigDict(env_prefix="SOURCE_", extra="ignore", frozen=True)

    owner: str = Field(default="zsxcoder", description="Repository owner; only issues by this login are fetched")
    repo: str = Field(default="weibo", description="Repository name")
    count: int = Field(default=6, ge=1, le=100, description="Number of newest open issues to fetch")


class GitHubConfig(BaseSettings):
    """GitHub API settings."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore", frozen=True)

    token: str | None = Field(default=None, description="PAT with gist scope; use env or secret file")
    api_url: str = Field(default="https://api.github.com", description="API base URL")
    timeout: int = Field(default=30, ge=1, description="Request timeout in seconds")


class TelegramConfig(BaseSettings):
    """Telegram chat destination."""

    model_config = SettingsConfigDict(env_prefix="TELEGRAM_", extra="ignore", frozen=True)

    bot_token: str | None = Field(default=None, description="Bot token; use env or secret file")
    chat_id: int | str = Field(default=-1001249449971, description="Chat id or @channel name")
    # HEAD-request URLs without a file extension to check their Content-Type
    probe_images: bool = Field(default=False, description="Probe extensionless image URLs")


class GistConfig(BaseSettings):
    """Gist documents updated with the newest issues."""

    model_config = SettingsConfigDict(env_prefix="GIST_", extra="ignore", frozen=True)

    enabled: bool = Field(default=True, description="Publish issues to Gists")
    ids: List[str] = Field(default_factory=list, description="Pre-created Gist ids, newest issue first")
    filename: str = Field(default="content.md", description="File slot replaced in each Gist")


class FormatConfig(BaseSettings):
    """Formatting of the published content."""

    model_config = SettingsConfigDict(env_prefix="FORMAT_", extra="ignore", frozen=True)

    footer_url: str = Field(
        default="https://simonaking.com/blog/weibo",
        description="URL named in the 'Original post' footer",
    )
    timezone: str = Field(default="UTC", description="Time zone for the date in titles")


class RunConfig(BaseSettings):
    """Per-run behaviour."""

    model_config = SettingsConfigDict(env_prefix="RUN_", extra="ignore", frozen=True)

    # Off by default so a failed pass does not alert the scheduler
    exit_nonzero_on_failure: bool = Field(default=False, description="Exit with 1 when the run did not fully succeed")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore", frozen=True)

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore", frozen=True)

    source: SourceConfig = Field(default_factory=SourceConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    telegram: TelegramConfig = Field(default_factory=TelegramConfig)
    gist: GistConfig = Field(default_factory=GistConfig)
    format: FormatConfig = Field(default_factory=FormatConfig)
    run: RunConfig = Field(default_factory=RunConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def active_gist_ids(self) -> List[str]:
        """Configured Gist ids without blanks and placeholders."""
        ids = [i.strip() for i in self.gist.ids]
        return [i for i in ids if i and not i.startswith(GIST_ID_PLACEHOLDER)]


def _substitute_env(value: Any, env: Mapping[str, str]) -> Any:
    """Replace ${VAR} and $VAR in strings with values from env."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return env.get(key, value)
        # Simple $VAR
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v, env) for v in value]
    return value


def load_config(config_path: Path | None = None, env: Mapping[str, str] | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    Secrets: GIST_PAT, GITHUB_TOKEN or GITHUB_TOKEN_FILE for GitHub;
    BOT_TOKEN or BOT_TOKEN_FILE for Telegram. Gist ids fall back to
    GIST_SHORT_IDS_STR when the YAML lists none.
    """
    env = dict(os.environ) if env is None else dict(env)

    path = config_path or Path("config.yaml")
    raw: dict[str, Any] = {}
    if path.is_file():
        raw = yaml.safe_load(path.read_text()) or {}
        raw = _substitute_env(raw, env)

    github_raw = dict(raw.get("github") or {})
    if _is_unresolved(github_raw.get("token")):
        github_raw["token"] = _read_secret(env, "GIST_PAT", "GITHUB_TOKEN", file_env_key="GITHUB_TOKEN_FILE")

    telegram_raw = dict(raw.get("telegram") or {})
    if _is_unresolved(telegram_raw.get("bot_token")):
        telegram_raw["bot_token"] = _read_secret(env, "BOT_TOKEN", "TELEGRAM_BOT_TOKEN", file_env_key="BOT_TOKEN_FILE")

    gist_raw = dict(raw.get("gist") or {})
    ids = gist_raw.get("ids")
    if isinstance(ids, str):
        gist_raw["ids"] = parse_gist_ids(ids)
    elif not ids:
        gist_raw["ids"] = parse_gist_ids(env.get("GIST_SHORT_IDS_STR"))

    return AppConfig(
        source=SourceConfig(**(raw.get("source") or {})),
        github=GitHubConfig(**github_raw),
        telegram=TelegramConfig(**telegram_raw),
        gist=GistConfig(**gist_raw),
        format=FormatConfig(**(raw.get("format") or {})),
        run=RunConfig(**(raw.get("run") or {})),
        logging=LoggingConfig(**(raw.get("logging") or {})),
    )
