"""Release note generation module."""

from .generator import (
    assemble,
    build_release_notes,
    process_body,
    release_preamble,
)
from .filters import (
    filter_sections,
    filter_lines,
    remove_empty_sections,
    demote_headings,
)
from .model import Release

__all__ = [
    "assemble",
    "build_release_notes",
    "process_body",
    "release_preamble",
    "filter_sections",
    "filter_lines",
    "remove_empty_sections",
    "demote_headings",
    "Release",
]
