"""
paper2note - Arxiv papers into markdown notes

This package fetches Arxiv metadata and Semantic Scholar citations,
downloads PDFs, extracts their text and asks Gemini for a summary, merging
everything into notes of a markdown vault.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .document_merger import DocumentMerger
from .models import PaperMetadata, PaperRef
from .paper_fetcher import PaperFetcher
from .vault import Vault

__all__ = [
    "DocumentMerger",
    "PaperFetcher",
    "PaperMetadata",
    "PaperRef",
    "Vault",
]
