"""
Frontmatter codec - split, parse and render the YAML block at the top of a note
"""
from __future__ import annotations

import re
from typing import Any, Dict, Optional, Tuple

import yaml

from .errors import DocumentError


FRONTMATTER_PATTERN = re.compile(r"\A---\n(?P<yaml>.*?\n)?---[ \t]*(?:\n|\Z)", re.DOTALL)


def split_frontmatter(text: str) -> Tuple[Optional[Dict[str, Any]], str]:
    """
    Split a note into its frontmatter mapping and body

    Returns:
        ``(None, text)`` when the note has no frontmatter block, otherwise the
        parsed mapping (insertion order kept) and the text after the closing
        delimiter.

    Raises:
        DocumentError: if the block is not valid YAML or not a mapping
    """
    text = text.replace("\r\n", "\n")
    match = FRONTMATTER_PATTERN.match(text)
    if not match:
        return None, text

    raw = match.group("yaml") or ""
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise DocumentError(f"Invalid frontmatter: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise DocumentError("Frontmatter is not a key-value mapping")
    return data, text[match.end():]


def render_frontmatter(mapping: Dict[str, Any]) -> str:
    """Render a mapping as a delimited frontmatter block ending with a newline"""
    if not mapping:
        return "---\n---\n"
    dumped = yaml.safe_dump(
        mapping,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=1000,
    )
    return f"---\n{dumped}---\n"


def join_frontmatter(mapping: Optional[Dict[str, Any]], body: str) -> str:
    if mapping is None:
        return body
    return render_frontmatter(mapping) + body


def collapse_gap_after_frontmatter(text: str) -> str:
    """Make the body start on the line right after the closing delimiter"""
    match = FRONTMATTER_PATTERN.match(text)
    if not match or not match.group(0).endswith("\n"):
        return text
    return text[: match.end()] + text[match.end() :].lstrip("\n")
