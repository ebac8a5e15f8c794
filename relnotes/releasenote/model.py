"""Release records as returned by the GitHub releases API."""

from datetime import datetime
from typing import Optional

import dateutil.parser
from dateutil import tz
from pydantic import BaseModel, ConfigDict, field_validator


class Release(BaseModel):
    """One published release of a repository."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    tag_name: str = ""
    name: Optional[str] = None
    published_at: Optional[datetime] = None
    html_url: str = ""
    body: Optional[str] = None

    @field_validator("published_at", mode="before")
    @classmethod
    def parse_published_at(cls, v):
        """Parse ISO-8601 timestamps, treating naive values as UTC."""
        if v is None or v == "":
            return None
        if isinstance(v, str):
            v = dateutil.parser.isoparse(v)
        if isinstance(v, datetime) and v.tzinfo is None:
            v = v.replace(tzinfo=tz.UTC)
        return v

    @property
    def display_name(self) -> str:
        return self.name or self.tag_name
