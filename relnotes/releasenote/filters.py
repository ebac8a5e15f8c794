"""Structural filters applied to parsed release bodies.

Each filter takes a list of sibling nodes and returns a new list; the input
list and its nodes are left untouched and surviving nodes keep their order.
"""

import logging
from typing import List, Optional, Sequence

from ..config import compile_pattern
from ..mdast import (
    CODE,
    LIST,
    PARAGRAPH,
    STRONG,
    Node,
    get_text_content,
    is_heading,
    paragraph,
    section_content,
    section_end,
    text,
)

logger = logging.getLogger(__name__)


def filter_sections(nodes: Sequence[Node], pattern: Optional[str]) -> List[Node]:
    """Remove sections whose heading text matches ``pattern``.

    A matched heading is dropped with everything up to the next heading of the
    same or a shallower depth. That next heading is evaluated on its own.

    Args:
        nodes: Sibling nodes
        pattern: Case-insensitive regular expression, None for no filtering

    Returns:
        Remaining nodes in their original order
    """
    regex = compile_pattern(pattern)
    if regex is None:
        return list(nodes)

    result = []
    i = 0
    while i < len(nodes):
        node = nodes[i]
        if is_heading(node) and regex.search(get_text_content(node)):
            end = section_end(nodes, i)
            logger.debug(f"Skipping section '{get_text_content(node)}' ({end - i} nodes)")
            i = end
            continue
        result.append(node)
        i += 1
    return result


def filter_lines(nodes: Sequence[Node], pattern: Optional[str]) -> List[Node]:
    """Remove list items whose text matches ``pattern``.

    Only top-level list nodes are inspected. A list that loses all of its
    items is dropped instead of being left empty.

    Args:
        nodes: Sibling nodes
        pattern: Case-insensitive regular expression, None for no filtering

    Returns:
        Remaining nodes in their original order
    """
    regex = compile_pattern(pattern)
    if regex is None:
        return list(nodes)

    result = []
    for node in nodes:
        if node.get("type") != LIST:
            result.append(node)
            continue
        items = [
            item for item in node.get("children") or []
            if not regex.search(get_text_content(item))
        ]
        if items:
            result.append({**node, "children": items})
    return result


def has_payload(nodes: Sequence[Node]) -> bool:
    """Check whether a section holds a non-empty list, a paragraph or code."""
    for node in nodes:
        node_type = node.get("type")
        if node_type == LIST and node.get("children"):
            return True
        if node_type in (PARAGRAPH, CODE):
            return True
    return False


def remove_empty_sections(nodes: Sequence[Node]) -> List[Node]:
    """Drop headings whose section has no payload left.

    Sections are judged independently; a kept section keeps all of its
    content, including any nested headings.
    """
    result = []
    i = 0
    while i < len(nodes):
        node = nodes[i]
        if not is_heading(node):
            result.append(node)
            i += 1
            continue

        content = section_content(nodes, i)
        if has_payload(content):
            result.append(node)
            result.extend(content)
        else:
            logger.debug(f"Removing empty section '{get_text_content(node)}'")
        i += 1 + len(content)
    return result


def demote_heading(node: Node) -> Node:
    """Turn a heading into a paragraph holding its content in bold."""
    return paragraph({"type": STRONG, "children": list(node.get("children") or [text("")])})


def demote_headings(nodes: Sequence[Node]) -> List[Node]:
    """Replace every heading in the tree with a bold paragraph."""
    result = []
    for node in nodes:
        if is_heading(node):
            result.append(demote_heading(node))
        elif "children" in node:
            result.append({**node, "children": demote_headings(node["children"] or [])})
        else:
            result.append(node)
    return result
