"""GitHub release source."""

from .cache import ReleaseCache
from .client import GitHubClient

__all__ = ["GitHubClient", "ReleaseCache"]
