"""Date handling for release selection."""

import logging
import re
from datetime import datetime
from typing import Iterable, List, Optional

import dateutil.parser
from dateutil import tz
from dateutil.relativedelta import relativedelta

from .model import Release

logger = logging.getLogger(__name__)

# Relative dates such as "-3m" (three months ago) or "-2w" (two weeks ago)
RELATIVE_DATE_RE = re.compile(r"^-(\d+)([wm])$")


def parse_after_date(value: Optional[str], now: Optional[datetime] = None) -> Optional[datetime]:
    """Parse the ``after`` option into a timezone-aware datetime.

    Args:
        value: ``YYYY-MM-DD`` (or any date dateutil understands), ``-Nw`` or ``-Nm``
        now: Reference time for relative values, defaults to the current time

    Returns:
        The cut-off datetime, or None if no usable value was given
    """
    if not value:
        return None
    value = value.strip()

    match = RELATIVE_DATE_RE.match(value)
    if match:
        amount, unit = int(match.group(1)), match.group(2)
        now = now or datetime.now(tz.UTC)
        if unit == "w":
            return now - relativedelta(weeks=amount)
        return now - relativedelta(months=amount)

    try:
        parsed = dateutil.parser.parse(value)
    except (ValueError, OverflowError) as e:
        logger.warning(f"Ignoring unparseable date '{value}': {e}")
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz.UTC)
    return parsed


def select_releases(releases: Iterable[Release], after: Optional[datetime] = None) -> List[Release]:
    """Filter releases by publish date and sort them newest first.

    Drafts without a publish timestamp are left out.
    """
    selected = []
    for release in releases:
        if release.published_at is None:
            logger.debug(f"Skipping unpublished release {release.tag_name}")
            continue
        if after and release.published_at < after:
            continue
        selected.append(release)

    selected.sort(key=lambda r: r.published_at, reverse=True)
    return selected


def format_date(value: datetime) -> str:
    """Format a timestamp as the ``YYYY-MM-DD`` of its UTC date."""
    if value.tzinfo is not None:
        value = value.astimezone(tz.UTC)
    return value.strftime("%Y-%m-%d")
