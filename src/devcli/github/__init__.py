"""GitHub REST client."""

from devcli.github.client import DRAFT_UNSUPPORTED_MESSAGE, GitHubClient

__all__ = ["DRAFT_UNSUPPORTED_MESSAGE", "GitHubClient"]
