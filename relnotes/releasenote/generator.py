"""Release note assembly."""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from pydantic import ValidationError

from ..config import FilterOptions
from ..markdown.parser import parse_markdown
from ..mdast import (
    THEMATIC_BREAK,
    Node,
    heading,
    link,
    paragraph,
    text,
    thematic_break,
)
from .dates import format_date, parse_after_date, select_releases
from .filters import demote_headings, filter_lines, filter_sections, remove_empty_sections
from .model import Release

# Depth of the heading inserted for each release title
RELEASE_HEADING_DEPTH = 2
VIEW_RELEASE_LABEL = "View release"
REPO_FORMAT_ERROR = "Error: Please provide a repository in org/repo format."

logger = logging.getLogger(__name__)

Parser = Callable[[str], Optional[Node]]


def message(value: str) -> List[Node]:
    """Fragment made of a single explanatory paragraph."""
    return [paragraph(text(value))]


def no_releases_message(repo: Optional[str] = None, after: Optional[str] = None) -> List[Node]:
    if not repo:
        return message("No releases found.")
    if after:
        return message(f"No releases found for {repo} after {after}.")
    return message(f"No releases found for {repo}.")


def process_body(body: Optional[str], options: Optional[FilterOptions] = None,
                 parse: Parser = parse_markdown) -> List[Node]:
    """Parse a release body and run it through the filters.

    Sections are skipped first, then lines, then empty sections are pruned
    (when enabled) and finally all remaining headings are demoted.

    Args:
        body: Markdown body of the release
        options: Filter options
        parse: Markdown parser returning a root node

    Returns:
        Top-level nodes of the filtered body; empty for a blank or unparseable body

    Raises:
        InvalidPatternError: If a skip pattern is not a valid regular expression
    """
    if not body or not body.strip():
        return []
    options = options or FilterOptions()

    try:
        tree = parse(body)
    except Exception as e:
        logger.warning(f"Could not parse release body: {e}")
        return []

    nodes = (tree or {}).get("children") or []
    nodes = filter_sections(nodes, options.skip_sections)
    nodes = filter_lines(nodes, options.skip_lines)
    if options.remove_empty_sections:
        nodes = remove_empty_sections(nodes)
    return demote_headings(nodes)


def release_preamble(release: Release) -> List[Node]:
    """Title heading and date/link line of a release."""
    date = format_date(release.published_at) if release.published_at else "Unpublished"
    return [
        heading(RELEASE_HEADING_DEPTH, text(release.display_name)),
        paragraph(
            text(f"{date} | "),
            link(release.html_url, text(VIEW_RELEASE_LABEL)),
        ),
    ]


def assemble(releases: Iterable[Union[Release, Dict[str, Any]]],
             options: Optional[FilterOptions] = None,
             repo: Optional[str] = None,
             parse: Parser = parse_markdown) -> List[Node]:
    """Build one fragment from several releases.

    Releases are rendered in the given order, each followed by a thematic
    break; the break after the last release is dropped.

    Args:
        releases: Release records or raw API dictionaries
        options: Filter options applied to every body
        repo: Repository name used in the "no releases" message
        parse: Markdown parser returning a root node

    Returns:
        Fragment nodes ready to be spliced into a document
    """
    nodes: List[Node] = []

    for release in releases:
        if not isinstance(release, Release):
            try:
                release = Release.model_validate(release)
            except ValidationError as e:
                logger.warning(f"Skipping malformed release: {e}")
                continue
        logger.debug(f"Assembling release {release.display_name}")

        nodes.extend(release_preamble(release))
        nodes.extend(process_body(release.body, options, parse))
        nodes.append(thematic_break())

    if not nodes:
        return no_releases_message(repo)

    if nodes[-1].get("type") == THEMATIC_BREAK:
        nodes.pop()

    return nodes


def is_valid_repo(repo: Optional[str]) -> bool:
    return bool(repo) and "/" in repo


def build_release_notes(repo: str, source, options: Optional[FilterOptions] = None,
                        refresh: bool = False) -> List[Node]:
    """Render the release notes fragment of a repository.

    Args:
        repo: Repository in ``org/repo`` format
        source: Object with a ``list_releases(repo, refresh=...)`` method
        options: Filter options
        refresh: Ask the source to bypass its cache

    Returns:
        Fragment nodes; a single paragraph explains an invalid repository or
        an empty result
    """
    if not is_valid_repo(repo):
        return message(REPO_FORMAT_ERROR)

    options = options or FilterOptions()
    releases = source.list_releases(repo, refresh=refresh)
    if not releases:
        return no_releases_message(repo)

    after = parse_after_date(options.after)
    selected = select_releases(releases, after)
    logger.info(f"Rendering {len(selected)} of {len(releases)} releases for {repo}")
    if not selected:
        return no_releases_message(repo, options.after)

    return assemble(selected, options, repo)
