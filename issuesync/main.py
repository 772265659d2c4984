"""Issuesync entry point.

Runs one pass: fetch the newest issues, send the newest to Telegram, update
Gists. Meant to be started by cron or CI. Usage: issuesync [--config PATH].
"""

import argparse
import logging
import sys
from pathlib import Path

from issuesync.config import load_config
from issuesync.logging import IssueSyncLogging
from issuesync.pipeline import run_sync


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="issuesync",
        description="Republish the newest GitHub issues to Telegram and Gists",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point: load config, run one sync pass, return exit code."""
    args = parse_args(argv)

    config_path = args.config
    if not config_path.is_file() and config_path == Path("config.yaml"):
        if Path("config.example.yaml").is_file():
            config_path = Path("config.example.yaml")
            logging.basicConfig(level=logging.INFO)
            logging.getLogger("issuesync").warning("config.yaml not found, using config.example.yaml")

    config = load_config(config_path)
    IssueSyncLogging(config.logging).setup()

    if args.check:
        print(
            "Config OK:",
            f"{config.source.owner}/{config.source.repo}",
            f"telegram={'on' if config.telegram.bot_token else 'off'}",
            f"gists={len(config.active_gist_ids) if config.gist.enabled else 'off'}",
        )
        return 0

    result = run_sync(config)
    logging.getLogger("issuesync").info(
        "Run finished | status=%s | issues=%s | telegram=%s | gists updated=%s failed=%s",
        result.status,
        result.issues_fetched,
        result.telegram_sent,
        len(result.gists_updated),
        len(result.gists_failed),
    )
    if config.run.exit_nonzero_on_failure and not result.ok:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
