"""Git platform adapters."""

from issuesync.adapters.github import GitHubAdapter

__all__ = ["GitHubAdapter"]
