"""
Merge fetched paper data into an existing note without destroying its content

The pure helpers (``merge_frontmatter``, ``insert_abstract``,
``add_related_papers_section``, ``format_summary``) work on plain values.
``DocumentMerger`` binds them to a vault: each method re-reads the note right
before writing it and performs one independent, idempotent step.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from .errors import DocumentError, DuplicateFileError
from .file_utils import format_paper_content, note_name, sanitize_file_name
from .frontmatter import collapse_gap_after_frontmatter
from .models import PaperMetadata, PaperRef
from .vault import Vault

logger = logging.getLogger(__name__)


ABSTRACT_HEADING = "## Abstract"
CITED_BY_HEADING = "## Influential Papers Cited By"
CITING_HEADING = "## Influential Papers Citing"
SUMMARY_HEADING = "## Paper Summary"
NO_INFORMATION = "No information available.\n"
SUMMARY_DISCLAIMER = "This summary was generated by AI and may be inaccurate."

# Review state entered by the user; kept as-is across re-fetches.
REVIEW_DEFAULTS: Dict[str, Any] = {
    "checked": False,
    "interest": None,
    "rating": None,
    "tags": None,
}


def merge_frontmatter(existing: Mapping[str, Any], metadata: PaperMetadata) -> Dict[str, Any]:
    """
    Build the updated frontmatter mapping for ``metadata``

    Unrelated keys of ``existing`` survive in their original order. Known
    fields take the new value when present, else keep the prior one; a text
    field missing on both sides is not written. Review-state keys are only
    initialized when missing.
    """
    merged: Dict[str, Any] = dict(existing)
    for key, value in (
        ("title", metadata.title),
        ("paper_link", metadata.paper_link),
        ("publish_date", metadata.publish_date),
        ("authors", metadata.authors),
    ):
        if value:
            merged[key] = value
    # Zero counts come from a failed citation lookup as well
    for key, value in (
        ("num_cited_by", metadata.num_cited_by),
        ("num_citing", metadata.num_citing),
    ):
        merged[key] = value or existing.get(key) or 0
    for key, default in REVIEW_DEFAULTS.items():
        merged[key] = existing[key] if key in existing else default
    return merged


def insert_abstract(content: str, abstract: str) -> str:
    """
    Append an ``## Abstract`` section unless the heading is already present

    Leading and trailing newlines of the result are stripped.
    """
    if ABSTRACT_HEADING not in content:
        block = f"{ABSTRACT_HEADING}\n{abstract}\n"
        if content.strip() == "":
            content = block.strip()
        else:
            content = f"{content.strip()}\n\n{block}"
    return content.strip("\n")


def normalize_frontmatter_spacing(content: str) -> str:
    return collapse_gap_after_frontmatter(content)


def add_related_papers_section(
    content: str,
    heading: str,
    papers: Sequence[PaperRef],
    create_files: bool,
    materialize: Optional[Callable[[PaperRef], str]] = None,
) -> str:
    """
    Append ``heading`` with one line per related paper, once

    With ``create_files`` each paper is passed to ``materialize``, which
    returns the link target, and rendered as ``- [[target]]``; otherwise a
    plain ``- title`` bullet is written.
    """
    if heading in content:
        return content

    content += f"\n\n{heading}\n\n"
    if not papers:
        return content + NO_INFORMATION

    if create_files:
        if materialize is None:
            raise ValueError("materialize callback is required when create_files is set")
        content += "".join(f"- [[{materialize(paper)}]]\n" for paper in papers)
    else:
        content += "".join(f"- {paper.title}\n" for paper in papers)
    return content


def format_summary(summary: str) -> str:
    return f"{SUMMARY_HEADING}\n\n{summary}\n\n---\n{SUMMARY_DISCLAIMER}"


class DocumentMerger:
    """Apply paper metadata, related papers and summaries to vault notes"""

    def __init__(self, vault: Vault):
        self.vault = vault

    def update_frontmatter(self, path: str, metadata: PaperMetadata) -> None:
        existing = self.vault.read_frontmatter(path)
        updated = merge_frontmatter(existing, metadata)
        self.vault.process_frontmatter(path, lambda fm: fm.update(updated))
        logger.debug("Frontmatter of %s updated (%d keys)", path, len(updated))

    def update_content(self, path: str, metadata: PaperMetadata) -> None:
        content = self.vault.read(path)
        self.vault.modify(path, insert_abstract(content, metadata.abstract))

        final_content = self.vault.read(path)
        cleaned = normalize_frontmatter_spacing(final_content)
        if cleaned != final_content:
            self.vault.modify(path, cleaned)

    def rename_to_title(self, path: str, title: str) -> str:
        """
        Rename the note after the paper title, keeping its folder

        Returns:
            The note's path after the rename (unchanged if ``title`` is empty)

        Raises:
            DocumentError: if the rename fails; content already merged stays
        """
        if not title:
            return path
        new_path = Vault.join(Vault.parent_of(path), note_name(title))
        renamed = self.vault.rename(path, new_path)
        logger.info("Renamed %s -> %s", path, renamed)
        return renamed

    def apply_metadata(self, path: str, metadata: PaperMetadata) -> str:
        """Frontmatter merge, abstract insertion and rename, in that order"""
        self.update_frontmatter(path, metadata)
        self.update_content(path, metadata)
        return self.rename_to_title(path, metadata.title)

    def add_related_papers(self, path: str, metadata: PaperMetadata, create_files: bool) -> List[str]:
        """
        Add the influential cited-by / citing sections to a note

        Returns:
            Vault paths of the sibling notes created for related papers
        """
        created: List[str] = []
        folder = Vault.parent_of(path)

        def materialize(paper: PaperRef) -> str:
            target, is_new = self.create_paper_note(folder, paper)
            if is_new:
                created.append(target)
            return sanitize_file_name(paper.title)

        content = self.vault.read(path)
        content = add_related_papers_section(
            content, CITED_BY_HEADING, metadata.influential_citations, create_files, materialize
        )
        content = add_related_papers_section(
            content, CITING_HEADING, metadata.influential_references, create_files, materialize
        )
        self.vault.modify(path, content)
        return created

    def create_paper_note(self, folder: str, paper: PaperRef) -> Tuple[str, bool]:
        """
        Create a frontmatter-only sibling note for ``paper``

        An existing note with the same sanitized title is left untouched and
        reused as link target.

        Returns:
            ``(vault path, created)``
        """
        target = Vault.join(folder, note_name(paper.title))
        try:
            return self.vault.create(target, format_paper_content(paper)), True
        except DuplicateFileError:
            logger.warning("Related paper note already exists, keeping it: %s", target)
            return target, False

    def insert_summary(self, path: str, summary: str) -> None:
        if not self.vault.exists(path):
            raise DocumentError(f"Note not found: {path}")
        content = self.vault.read(path)
        self.vault.modify(path, f"{content}\n\n{format_summary(summary)}")
