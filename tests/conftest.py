"""Test setup for relnotes."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def release_payload() -> list[dict]:
    """Two releases as returned by the GitHub releases API, oldest first."""
    return [
        {
            "tag_name": "v1.0.0",
            "name": "",
            "published_at": "2024-01-10T12:00:00Z",
            "html_url": "https://github.com/org/repo/releases/tag/v1.0.0",
            "body": "## Other merged PRs\n- 🚀 Release v1.0.0\n",
            "draft": False,
        },
        {
            "tag_name": "v1.1.0",
            "name": "Version 1.1.0",
            "published_at": "2024-03-05T08:30:00Z",
            "html_url": "https://github.com/org/repo/releases/tag/v1.1.0",
            "body": (
                "## Enhancements\n"
                "- feat A\n"
                "\n"
                "## Contributors to this release\n"
                "- user1\n"
            ),
            "draft": False,
        },
    ]
