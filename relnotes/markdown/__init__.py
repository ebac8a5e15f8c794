"""Markdown parsing and serialisation for mdast trees."""

from .parser import parse_markdown
from .writer import to_markdown

__all__ = [
    "parse_markdown",
    "to_markdown",
]
