"""On-disk cache of release payloads."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class ReleaseCache:
    """JSON file mapping ``org/repo`` to the raw releases API payload.

    Entries never expire; use :meth:`clear` or a refreshing fetch to update
    them.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable cache file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, repo: str) -> Optional[List[Dict[str, Any]]]:
        """Cached payload for ``repo`` or None on a cache miss."""
        return self._load().get(repo)

    def put(self, repo: str, releases: List[Dict[str, Any]]) -> None:
        """Store the payload for ``repo``, keeping other repositories' entries."""
        data = self._load()
        data[repo] = releases
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def clear(self) -> bool:
        """Delete the cache file.

        Returns:
            True if a file was removed
        """
        if not self.path.exists():
            return False
        self.path.unlink()
        return True
