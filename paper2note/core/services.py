"""
User commands - read clipboard, validate, call external services, update notes

Every public command catches all errors at its top level and reports them
through the notifier; nothing propagates to the caller. Within the metadata
command each phase is wrapped on its own so that a failed phase does not stop
the later ones.
"""
from __future__ import annotations

import logging
from datetime import date
from pathlib import PurePosixPath
from typing import Callable, Optional, TypeVar

from .config import Settings
from .document_merger import DocumentMerger
from .errors import Cancelled, DocumentError
from .models import PaperMetadata
from .paper_fetcher import PaperFetcher
from .pdf_extractor import extract_text_from_pdf
from .summarizer import DEFAULT_PROMPT, Summarizer, resolve_prompt
from .url_utils import url_from_clipboard
from .vault import Vault

logger = logging.getLogger(__name__)

T = TypeVar("T")

RELATED_PAPERS_QUESTION = "Would you like to create new files for related papers?"


class _Command:
    """Shared error reporting for commands"""

    error_prefix = "Error: "

    def __init__(self, notifier):
        self.notifier = notifier

    def _report(self, exc: Exception, prefix: Optional[str] = None) -> None:
        logger.error("%s failed: %s", type(self).__name__, exc)
        logger.debug("Traceback", exc_info=exc)
        self.notifier.notify(f"{prefix or self.error_prefix}{exc}")

    def _phase(self, name: str, action: Callable[[], T], failure_notice: str) -> Optional[T]:
        try:
            return action()
        except Exception as exc:
            logger.error("Phase %r failed: %s", name, exc)
            logger.debug("Traceback", exc_info=exc)
            self.notifier.notify(f"{failure_notice} ({exc})")
            return None


class ArxivMetadataService(_Command):
    """Fetch Arxiv metadata for the clipboard URL and merge it into a note"""

    def __init__(self, vault: Vault, fetcher: PaperFetcher, clipboard, notifier, prompter):
        super().__init__(notifier)
        self.vault = vault
        self.fetcher = fetcher
        self.clipboard = clipboard
        self.prompter = prompter
        self.merger = DocumentMerger(vault)

    def fetch_metadata_from_clipboard(self, active: Optional[str] = None) -> Optional[str]:
        """
        Run the whole metadata workflow

        Args:
            active: Vault path of the open note; a dated note is created at the
                vault root when omitted

        Returns:
            The note's final vault path, or ``None`` if nothing was merged
        """
        try:
            url = url_from_clipboard(self.clipboard.read_text())
            if active is None:
                file_name = f"Arxiv Paper - {date.today().isoformat()}.md"
                active = self.vault.create(file_name, "")
                self.notifier.notify(f"A new file has been created: {file_name}")
            metadata = self.fetcher.fetch_metadata(url)
        except Exception as exc:
            self._report(exc)
            return None

        return self.insert_metadata(metadata, active)

    def insert_metadata(self, metadata: PaperMetadata, path: str) -> str:
        self._phase(
            "frontmatter",
            lambda: self.merger.update_frontmatter(path, metadata),
            "An error occurred during frontmatter update.",
        )
        self._phase(
            "content",
            lambda: self.merger.update_content(path, metadata),
            "An error occurred during abstract insertion.",
        )
        renamed = self._phase(
            "rename",
            lambda: self.merger.rename_to_title(path, metadata.title),
            "An error occurred during file name update.",
        )
        if renamed is not None:
            if renamed != path:
                self.notifier.notify("File name has been updated")
            path = renamed
        self.notifier.notify("Metadata has been successfully inserted.")

        create_files = self.prompter.confirm(RELATED_PAPERS_QUESTION)
        if create_files is None:
            logger.info("Related papers skipped")
            return path

        created = self._phase(
            "related papers",
            lambda: self.merger.add_related_papers(path, metadata, create_files),
            "An error occurred while adding related papers.",
        )
        if created:
            self.notifier.notify(f"Created {len(created)} related paper note(s)")
        return path


class PDFDownloadService(_Command):
    """Download the clipboard paper's PDF into the configured vault folder"""

    error_prefix = "PDF download failed: "

    def __init__(self, vault: Vault, fetcher: PaperFetcher, settings: Settings, clipboard, notifier):
        super().__init__(notifier)
        self.vault = vault
        self.fetcher = fetcher
        self.settings = settings
        self.clipboard = clipboard

    def download_from_clipboard(self) -> Optional[str]:
        try:
            url = url_from_clipboard(self.clipboard.read_text())
            saved = self.fetcher.download_pdf(url, self.vault, self.settings.download_path)
        except Exception as exc:
            self._report(exc)
            return None
        self.notifier.notify(f"Paper downloaded: {saved}")
        return saved


class SummaryService(_Command):
    """Summarize the clipboard paper and append the summary to a note"""

    def __init__(
        self,
        vault: Vault,
        fetcher: PaperFetcher,
        summarizer: Summarizer,
        clipboard,
        notifier,
        prompter,
    ):
        super().__init__(notifier)
        self.vault = vault
        self.fetcher = fetcher
        self.summarizer = summarizer
        self.clipboard = clipboard
        self.prompter = prompter
        self.merger = DocumentMerger(vault)

    def summarize_from_clipboard(self, active: Optional[str]) -> Optional[str]:
        """
        Returns:
            The inserted summary text, or ``None`` on failure or cancel
        """
        try:
            url = url_from_clipboard(self.clipboard.read_text())
            if not active or not self.vault.exists(active):
                raise DocumentError("There is no active markdown note.")

            prompt = resolve_prompt(self.prompter.choose_prompt(DEFAULT_PROMPT))
            pdf_content = self.fetcher.get_pdf_content(url)
            extracted = extract_text_from_pdf(pdf_content)
            summary = self.summarizer.summarize(extracted, prompt)
            self.merger.insert_summary(active, summary)
        except Cancelled:
            self.notifier.notify("Summary cancelled.")
            return None
        except Exception as exc:
            self._report(exc)
            return None

        self.notifier.notify("The summary has been inserted successfully.")
        return summary


class PDFTextService(_Command):
    """Dump the text of a vault PDF into a ``<stem>-extracted.md`` note"""

    def __init__(self, vault: Vault, notifier):
        super().__init__(notifier)
        self.vault = vault

    def extract_to_note(self, pdf_path: str) -> Optional[str]:
        try:
            if not self.vault.exists(pdf_path):
                raise DocumentError(f"PDF file not found: {pdf_path}")
            text = extract_text_from_pdf(self.vault.read_binary(pdf_path))

            source = PurePosixPath(self.vault.relative(pdf_path))
            target = Vault.join(Vault.parent_of(source.as_posix()), f"{source.stem}-extracted.md")
            if self.vault.exists(target):
                self.vault.modify(target, text)
                self.notifier.notify(f"Existing file has been updated: {target}")
            else:
                self.vault.create(target, text)
                self.notifier.notify(f"A new file has been created: {target}")
        except Exception as exc:
            self._report(exc)
            return None
        return target
