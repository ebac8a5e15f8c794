"""Markdown parsing into mdast-shaped trees using mistune."""

import logging
from typing import Any, Dict, List, Optional

import mistune

from ..mdast import Node, paragraph, text

logger = logging.getLogger(__name__)

_markdown = mistune.create_markdown(renderer="ast", plugins=["url", "strikethrough"])

Token = Dict[str, Any]


def parse_markdown(source: Optional[str]) -> Node:
    """Parse markdown text into an mdast ``root`` node.

    Parsing is best effort: input mistune cannot handle yields an empty root.

    Args:
        source: Markdown text, may be None

    Returns:
        Root node whose children are the top-level blocks
    """
    if not source:
        return {"type": "root", "children": []}
    try:
        tokens = _markdown(source)
    except Exception as e:
        logger.warning(f"Could not parse markdown: {e}")
        tokens = []
    return {"type": "root", "children": convert_blocks(tokens)}


def convert_blocks(tokens: List[Token]) -> List[Node]:
    nodes = []
    for token in tokens:
        node = convert_block(token)
        if node is not None:
            nodes.append(node)
    return nodes


def convert_block(token: Token) -> Optional[Node]:
    """Convert one mistune block token, None for tokens without content."""
    token_type = token.get("type")
    attrs = token.get("attrs") or {}

    if token_type == "heading":
        return {
            "type": "heading",
            "depth": attrs.get("level", 1),
            "children": convert_inlines(token.get("children") or []),
        }
    if token_type in ("paragraph", "block_text"):
        return paragraph(*convert_inlines(token.get("children") or []))
    if token_type == "list":
        node = {
            "type": "list",
            "ordered": bool(attrs.get("ordered")),
            "spread": not token.get("tight", True),
            "children": [convert_list_item(item, token) for item in token.get("children") or []],
        }
        if node["ordered"]:
            node["start"] = attrs.get("start", 1)
        return node
    if token_type == "block_code":
        info = (attrs.get("info") or "").strip()
        lang, _, meta = info.partition(" ")
        return {
            "type": "code",
            "lang": lang or None,
            "meta": meta.strip() or None,
            "value": (token.get("raw") or "").rstrip("\n"),
        }
    if token_type == "block_quote":
        return {"type": "blockquote", "children": convert_blocks(token.get("children") or [])}
    if token_type == "thematic_break":
        return {"type": "thematicBreak"}
    if token_type == "block_html":
        return {"type": "html", "value": (token.get("raw") or "").strip()}
    if token_type == "blank_line":
        return None

    # Anything else is kept as plain text when it has any
    if "children" in token:
        return paragraph(*convert_inlines(token["children"]))
    if token.get("raw"):
        return paragraph(text(token["raw"]))
    logger.debug(f"Dropping unsupported markdown token '{token_type}'")
    return None


def convert_list_item(token: Token, parent: Token) -> Node:
    children = []
    for child in token.get("children") or []:
        node = convert_block(child)
        if node is not None:
            children.append(node)
    return {
        "type": "listItem",
        "spread": not parent.get("tight", True),
        "children": children,
    }


def convert_inlines(tokens: List[Token]) -> List[Node]:
    """Convert inline tokens, merging adjacent text runs."""
    nodes: List[Node] = []
    for token in tokens:
        node = convert_inline(token)
        if node is None:
            continue
        if node["type"] == "text" and nodes and nodes[-1]["type"] == "text":
            nodes[-1] = text(nodes[-1]["value"] + node["value"])
        else:
            nodes.append(node)
    return nodes


def convert_inline(token: Token) -> Optional[Node]:
    token_type = token.get("type")
    attrs = token.get("attrs") or {}

    if token_type == "text":
        return text(token.get("raw") or "")
    if token_type == "softbreak":
        return text("\n")
    if token_type == "linebreak":
        return {"type": "break"}
    if token_type == "strong":
        return {"type": "strong", "children": convert_inlines(token.get("children") or [])}
    if token_type == "emphasis":
        return {"type": "emphasis", "children": convert_inlines(token.get("children") or [])}
    if token_type == "strikethrough":
        return {"type": "delete", "children": convert_inlines(token.get("children") or [])}
    if token_type == "codespan":
        return {"type": "inlineCode", "value": token.get("raw") or ""}
    if token_type == "link":
        node = {
            "type": "link",
            "url": attrs.get("url", ""),
            "children": convert_inlines(token.get("children") or []),
        }
        if attrs.get("title"):
            node["title"] = attrs["title"]
        return node
    if token_type == "image":
        node = {
            "type": "image",
            "url": attrs.get("url", ""),
            "alt": "".join(n.get("value", "") for n in convert_inlines(token.get("children") or [])),
        }
        if attrs.get("title"):
            node["title"] = attrs["title"]
        return node
    if token_type == "inline_html":
        return {"type": "html", "value": token.get("raw") or ""}

    if token.get("raw"):
        return text(token["raw"])
    if token.get("children"):
        return text("".join(n.get("value", "") for n in convert_inlines(token["children"])))
    return None
