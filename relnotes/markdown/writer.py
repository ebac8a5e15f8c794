"""Serialise mdast fragments back to markdown text."""

import re
from typing import Sequence

from ..mdast import Node, get_text_content

# Characters with inline meaning inside a text run
INLINE_SPECIAL_RE = re.compile(r"([\\`*_])")
# Line starts that would open a block: bullets, rules, headings, quotes, numbers
BLOCK_START_RE = re.compile(r"^( {0,3})(?:([-+=#>])|(\d{1,9})([.)]))(?=\s|[-+=#]|$)")


def to_markdown(nodes: Sequence[Node]) -> str:
    """Render block nodes as markdown, separated by blank lines."""
    blocks = [render_block(node) for node in nodes]
    rendered = "\n\n".join(block for block in blocks if block)
    return rendered + "\n" if rendered else ""


def render_block(node: Node) -> str:
    node_type = node.get("type")

    if node_type == "root":
        return to_markdown(node.get("children") or []).rstrip("\n")
    if node_type == "heading":
        return "#" * (node.get("depth") or 1) + " " + render_inlines(node.get("children") or [])
    if node_type == "paragraph":
        inline = render_inlines(node.get("children") or [])
        return "\n".join(escape_line_start(line) for line in inline.split("\n"))
    if node_type == "thematicBreak":
        return "---"
    if node_type == "code":
        info = " ".join(part for part in (node.get("lang"), node.get("meta")) if part)
        fence = "````" if "```" in (node.get("value") or "") else "```"
        return f"{fence}{info}\n{node.get('value') or ''}\n{fence}"
    if node_type == "blockquote":
        inner = to_markdown(node.get("children") or []).rstrip("\n")
        return "\n".join(f"> {line}" if line else ">" for line in inner.split("\n"))
    if node_type == "list":
        return render_list(node)
    if node_type == "html":
        return node.get("value") or ""
    return render_inlines([node])


def render_list(node: Node) -> str:
    number = node.get("start") or 1
    separator = "\n\n" if node.get("spread") else "\n"
    items = []
    for item in node.get("children") or []:
        marker = f"{number}. " if node.get("ordered") else "- "
        number += 1
        body = separator.join(render_block(child) for child in item.get("children") or [])
        indent = " " * len(marker)
        lines = body.split("\n")
        rendered = marker + lines[0] + "".join(
            "\n" + (indent + line if line else "") for line in lines[1:]
        )
        items.append(rendered)
    return separator.join(items)


def render_inlines(nodes: Sequence[Node]) -> str:
    return "".join(render_inline(node) for node in nodes)


def render_inline(node: Node) -> str:
    node_type = node.get("type")
    children = node.get("children") or []

    if node_type == "text":
        return escape_text(node.get("value") or "")
    if node_type == "strong":
        return f"**{render_inlines(children)}**"
    if node_type == "emphasis":
        return f"*{render_inlines(children)}*"
    if node_type == "delete":
        return f"~~{render_inlines(children)}~~"
    if node_type == "inlineCode":
        return f"`{node.get('value') or ''}`"
    if node_type == "break":
        return "\\\n"
    if node_type == "link":
        label = render_inlines(children)
        url = node.get("url") or ""
        if get_text_content(node) == url:
            return f"<{url}>"
        return f"[{label}]({url})"
    if node_type == "image":
        return f"![{node.get('alt') or ''}]({node.get('url') or ''})"
    if node_type == "html":
        return node.get("value") or ""
    return render_inlines(children) if children else node.get("value") or ""


def escape_text(value: str) -> str:
    """Backslash-escape inline markup characters."""
    return INLINE_SPECIAL_RE.sub(r"\\\1", value)


def escape_line_start(line: str) -> str:
    """Escape a marker that would turn a paragraph line into another block."""
    match = BLOCK_START_RE.match(line)
    if not match:
        return line
    indent, marker, number, _ = match.groups()
    if marker:
        return f"{indent}\\{line[len(indent):]}"
    return f"{indent}{number}\\{line[len(indent) + len(number):]}"
