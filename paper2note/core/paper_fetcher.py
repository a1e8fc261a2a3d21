"""
Paper fetching module - Arxiv metadata, Semantic Scholar citations and PDFs
"""
from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional

import requests

from . import __version__
from .errors import ConfigError, RemoteFetchError
from .models import CitationInfo, PaperMetadata, PaperRef
from .url_utils import require_arxiv_id
from .vault import Vault

logger = logging.getLogger(__name__)


ARXIV_API_URL = "https://export.arxiv.org/api/query"
SEMANTIC_SCHOLAR_URL = "https://api.semanticscholar.org/v1/paper"
ARXIV_PDF_URL = "https://arxiv.org/pdf"

_ATOM_NS = {"atom": "http://www.w3.org/2005/Atom"}


class PaperFetcher:
    """Fetch paper metadata and content from Arxiv and Semantic Scholar"""

    def __init__(self, timeout: int = 30, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", f"paper2note/{__version__}")

    def fetch_metadata(self, url: str) -> PaperMetadata:
        """
        Fetch the bibliographic record of an Arxiv paper

        Args:
            url: Normalized Arxiv URL (https://arxiv.org/abs/XXXX.XXXXX)

        Returns:
            PaperMetadata with citation information attached

        Raises:
            InvalidUrlError: If the URL carries no Arxiv ID
            RemoteFetchError: If the Arxiv API fails or has no entry for the ID
        """
        arxiv_id = require_arxiv_id(url)
        response = self._get(ARXIV_API_URL, params={"id_list": arxiv_id})
        if response.status_code != 200:
            raise RemoteFetchError(f"Arxiv API request failed: {response.status_code}")

        entry = self.parse_arxiv_response(response.text)
        citations = self.fetch_citation_info(arxiv_id)
        metadata = PaperMetadata.from_parts(entry, citations)
        logger.info(
            "Fetched metadata for %s: %r (%d cited by, %d citing)",
            arxiv_id,
            metadata.title,
            metadata.num_cited_by,
            metadata.num_citing,
        )
        return metadata

    def fetch_citation_info(self, arxiv_id: str) -> CitationInfo:
        """
        Look up citation counts and influential papers on Semantic Scholar

        Never raises: any failure yields ``CitationInfo.empty()``.
        """
        url = f"{SEMANTIC_SCHOLAR_URL}/arXiv:{arxiv_id}"
        try:
            response = self.session.get(url, timeout=self.timeout)
            if response.status_code != 200:
                logger.warning(
                    "Citation lookup for %s returned status %s", arxiv_id, response.status_code
                )
                return CitationInfo.empty()
            data = response.json()
            return CitationInfo(
                num_cited_by=int(data.get("numCitedBy") or 0),
                num_citing=int(data.get("numCiting") or 0),
                influential_citations=self._influential_papers(data.get("citations")),
                influential_references=self._influential_papers(data.get("references")),
            )
        except Exception as exc:
            logger.warning("Error fetching citation info for %s: %s", arxiv_id, exc)
            return CitationInfo.empty()

    def get_pdf_content(self, url: str) -> bytes:
        """Download the PDF of the paper behind ``url``"""
        arxiv_id = require_arxiv_id(url)
        response = self._get(f"{ARXIV_PDF_URL}/{arxiv_id}.pdf")
        if response.status_code != 200:
            raise RemoteFetchError(f"PDF download failed: {response.status_code}")
        return response.content

    def download_pdf(self, url: str, vault: Vault, download_path: str) -> str:
        """
        Save the paper PDF as ``<download_path>/<id>.pdf`` inside the vault

        Returns:
            Vault-relative path of the saved PDF

        Raises:
            ConfigError: If no download path is configured
        """
        arxiv_id = require_arxiv_id(url)
        folder = (download_path or "").strip().strip("/")
        if not folder:
            raise ConfigError("Paper download path is not configured")

        pdf_bytes = self.get_pdf_content(url)
        vault.mkdir(folder)
        saved = vault.write_binary(f"{folder}/{arxiv_id}.pdf", pdf_bytes)
        logger.info("Saved %s (%s bytes)", saved, f"{len(pdf_bytes):,}")
        return saved

    @classmethod
    def parse_arxiv_response(cls, xml_text: str) -> Dict[str, str]:
        """
        Parse the first ``<entry>`` of an Arxiv Atom feed

        Raises:
            RemoteFetchError: If the feed is malformed or has no entry
        """
        try:
            root = ET.fromstring(xml_text)
        except ET.ParseError as exc:
            raise RemoteFetchError("Failed to parse Arxiv API response") from exc

        entry = root.find("atom:entry", _ATOM_NS)
        if entry is None:
            raise RemoteFetchError("Paper information not found")

        title = cls._clean_text(entry.findtext("atom:title", default="", namespaces=_ATOM_NS))
        published = (entry.findtext("atom:published", default="", namespaces=_ATOM_NS) or "").strip()
        summary = entry.findtext("atom:summary", default="", namespaces=_ATOM_NS) or ""
        authors = [
            (author.findtext("atom:name", default="", namespaces=_ATOM_NS) or "").strip()
            for author in entry.findall("atom:author", _ATOM_NS)
        ]

        return {
            "title": title or "No title",
            "paper_link": (entry.findtext("atom:id", default="", namespaces=_ATOM_NS) or "").strip(),
            "publish_date": published.split("T")[0] if published else "No date",
            "authors": ", ".join(name for name in authors if name),
            "abstract": cls.format_abstract(summary) or "No abstract available",
        }

    @staticmethod
    def format_abstract(text: str) -> str:
        return re.sub(r"\s+", " ", text).strip()

    @staticmethod
    def _influential_papers(papers: Any) -> List[PaperRef]:
        if not isinstance(papers, list):
            return []
        return [
            PaperRef.from_api(paper)
            for paper in papers
            if isinstance(paper, dict) and paper.get("isInfluential")
        ]

    def _get(self, url: str, params: Optional[Dict[str, str]] = None) -> requests.Response:
        try:
            return self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise RemoteFetchError(f"Request failed: {url}") from exc

    @staticmethod
    def _clean_text(text: str) -> str:
        return re.sub(r"\s+", " ", text or "").strip()
