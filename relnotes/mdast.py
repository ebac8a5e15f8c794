"""Helpers for mdast-shaped document trees.

Nodes are plain dictionaries with a ``type`` key, a scalar ``value`` for leaf
nodes or a ``children`` list for containers. Headings carry a ``depth``.
Nothing in this package mutates a node it was given; transformed nodes are
rebuilt with ``{**node, ...}``.
"""

from typing import Any, Dict, List, Optional, Sequence

Node = Dict[str, Any]

HEADING = "heading"
PARAGRAPH = "paragraph"
LIST = "list"
CODE = "code"
TEXT = "text"
STRONG = "strong"
LINK = "link"
THEMATIC_BREAK = "thematicBreak"


def is_heading(node: Node) -> bool:
    return node.get("type") == HEADING


def heading_depth(node: Node) -> int:
    """Depth of a heading node, 1 when the parser left it out."""
    return node.get("depth") or 1


def get_text_content(node: Optional[Node]) -> str:
    """Concatenate the literal text of every text node below ``node``.

    Args:
        node: Tree node, may be None

    Returns:
        Text in document order; inline code and html contribute nothing
    """
    if not node:
        return ""
    if node.get("type") == TEXT:
        return node.get("value") or ""
    return "".join(get_text_content(child) for child in node.get("children") or [])


def section_end(nodes: Sequence[Node], index: int) -> int:
    """Find where the section owned by the heading at ``index`` ends.

    The section runs until the first later heading whose depth is less than
    or equal to the owner's depth.

    Args:
        nodes: Sibling nodes
        index: Position of a heading node in ``nodes``

    Returns:
        Exclusive end index of the section, ``len(nodes)`` if it runs to the end
    """
    depth = heading_depth(nodes[index])
    end = index + 1
    while end < len(nodes):
        node = nodes[end]
        if is_heading(node) and heading_depth(node) <= depth:
            break
        end += 1
    return end


def section_content(nodes: Sequence[Node], index: int) -> List[Node]:
    """Nodes owned by the heading at ``index``, excluding the heading itself."""
    return list(nodes[index + 1:section_end(nodes, index)])


def text(value: str) -> Node:
    return {"type": TEXT, "value": value}


def paragraph(*children: Node) -> Node:
    return {"type": PARAGRAPH, "children": list(children)}


def heading(depth: int, *children: Node) -> Node:
    return {"type": HEADING, "depth": depth, "children": list(children)}


def link(url: str, *children: Node) -> Node:
    return {"type": LINK, "url": url, "children": list(children)}


def thematic_break() -> Node:
    return {"type": THEMATIC_BREAK}
