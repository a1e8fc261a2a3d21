"""
Note filename and sibling-note helpers
"""
from __future__ import annotations

import re
from typing import Any, Dict

from .frontmatter import render_frontmatter
from .models import PaperRef
from .url_utils import ARXIV_ABS_PREFIX


_UNSAFE_CHARS = re.compile(r'[?:/\\<>*|"]')


def sanitize_file_name(file_name: str) -> str:
    """Replace path-hostile characters with ``_`` and squeeze whitespace"""
    cleaned = _UNSAFE_CHARS.sub("_", file_name)
    cleaned = re.sub(r"\s+", " ", cleaned)
    return cleaned.strip()


def note_name(title: str) -> str:
    return f"{sanitize_file_name(title)}.md"


def paper_frontmatter(paper: PaperRef) -> Dict[str, Any]:
    """Frontmatter fields of a related-paper note; missing values become ``N/A``"""
    paper_link = f"{ARXIV_ABS_PREFIX}{paper.arxiv_id}" if paper.arxiv_id else ""
    return {
        "title": paper.title,
        "authors": paper.authors or "N/A",
        "year": paper.year if paper.year is not None else "N/A",
        "venue": paper.venue or "N/A",
        "paper_link": paper_link,
        "semanticscholar_link": paper.url or "#",
        "arxiv_id": paper.arxiv_id or "N/A",
        "doi": paper.doi or "N/A",
        "citations": paper.citation_count if paper.citation_count is not None else "N/A",
        "intent": list(paper.intent),
    }


def format_paper_content(paper: PaperRef) -> str:
    """Render a frontmatter-only note for a related paper"""
    return render_frontmatter(paper_frontmatter(paper)).rstrip("\n")
