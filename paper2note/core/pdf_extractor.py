"""
PDF text extraction - thin wrapper around pypdf
"""
from __future__ import annotations

import io
import logging
from typing import List

from pypdf import PdfReader

from .errors import ExtractionError

logger = logging.getLogger(__name__)


def extract_text_from_pdf(data: bytes) -> str:
    """
    Extract a page-segmented plain-text transcript from raw PDF bytes

    Each page contributes ``"\\n--- Page N ---\\n<text>\\n"`` (N starts at 1),
    where ``<text>`` is the page's text fragments in decoder order joined by
    single spaces.

    Raises:
        ExtractionError: wrapping any pypdf failure (corrupt or encrypted
            stream, unsupported encoding, ...)
    """
    try:
        reader = PdfReader(io.BytesIO(data))
        transcript: List[str] = []
        for number, page in enumerate(reader.pages, start=1):
            fragments = [line.strip() for line in (page.extract_text() or "").splitlines()]
            page_text = " ".join(fragment for fragment in fragments if fragment)
            transcript.append(f"\n--- Page {number} ---\n{page_text}\n")
    except Exception as exc:
        raise ExtractionError(f"Failed to extract text from PDF: {exc}") from exc

    text = "".join(transcript)
    logger.info("Extracted %s chars from %d pages", f"{len(text):,}", len(transcript))
    return text
