"""GitHub releases client using the requests library."""

import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from ..config import Config
from ..releasenote.model import Release
from .cache import ReleaseCache


class GitHubClient:
    """Read-only access to a repository's releases on GitHub."""

    def __init__(self, config: Config, logger: Optional[logging.Logger] = None,
                 cache: Optional[ReleaseCache] = None):
        """Initialize GitHub client.

        Args:
            config: Configuration object containing GitHub settings
            logger: Logger instance
            cache: Release cache, defaults to ``config.cache_file``
        """
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.cache = cache or ReleaseCache(config.cache_file)

        self.session = requests.Session()
        self.session.headers.update({
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        })
        if config.github_token:
            self.session.headers["Authorization"] = f"Bearer {config.github_token}"

    def fetch_releases(self, repo: str) -> List[Dict[str, Any]]:
        """Fetch the raw releases payload of a repository, all pages.

        Args:
            repo: Repository in ``org/repo`` format

        Returns:
            Release dictionaries as returned by the API

        Raises:
            requests.RequestException: On network or HTTP errors
        """
        url = f"{self.config.github_api_url}/repos/{repo}/releases"
        params: Optional[Dict[str, Any]] = {"per_page": 100}
        releases: List[Dict[str, Any]] = []

        while url:
            self.logger.debug(f"GET {url}")
            response = self.session.get(url, params=params, timeout=self.config.timeout)
            response.raise_for_status()
            releases.extend(response.json())
            # The next link already carries the query string
            url = response.links.get("next", {}).get("url")
            params = None

        return releases

    def list_releases(self, repo: str, refresh: bool = False) -> List[Release]:
        """List releases of a repository, served from the cache when possible.

        Args:
            repo: Repository in ``org/repo`` format
            refresh: Bypass the cached payload and fetch again

        Returns:
            Release records in API order; empty if they could not be fetched
        """
        payload = None if refresh else self.cache.get(repo)
        if payload is None:
            try:
                payload = self.fetch_releases(repo)
            except (requests.RequestException, ValueError) as e:
                self.logger.error(f"Failed to fetch releases for {repo}: {e}")
                return []
            try:
                self.cache.put(repo, payload)
            except OSError as e:
                self.logger.warning(f"Could not write release cache {self.cache.path}: {e}")
        else:
            self.logger.debug(f"Using cached releases for {repo}")

        releases = []
        for item in payload:
            try:
                releases.append(Release.model_validate(item))
            except ValidationError as e:
                self.logger.warning(f"Skipping malformed release in {repo}: {e}")
        return releases
