"""
paper2note - Arxiv papers into markdown notes

This is the main public API module.
"""

from .core import __version__
from .core.document_merger import DocumentMerger
from .core.models import PaperMetadata, PaperRef
from .core.paper_fetcher import PaperFetcher
from .core.vault import Vault

__all__ = [
    "DocumentMerger",
    "PaperFetcher",
    "PaperMetadata",
    "PaperRef",
    "Vault",
    "__version__",
]
