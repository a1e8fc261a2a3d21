"""
Arxiv URL normalization and validation
"""
from __future__ import annotations

import re
from typing import Optional

from .errors import InvalidUrlError


ARXIV_ABS_PREFIX = "https://arxiv.org/abs/"

VALID_URL_PATTERN = re.compile(r"^https://arxiv\.org/abs/", re.IGNORECASE)
ARXIV_ID_PATTERN = re.compile(r"arxiv\.org/abs/(\d+\.\d+)")


def normalize_arxiv_url(url: str) -> str:
    """
    Canonicalize an Arxiv link to its abstract-page form

    http -> https, /pdf/ -> /abs/, trailing ".pdf" dropped.
    """
    value = re.sub(r"^http:", "https:", url)
    value = re.sub(r"arxiv\.org/pdf", "arxiv.org/abs", value)
    value = re.sub(r"\.pdf$", "", value)
    return value


def is_valid_arxiv_url(url: str) -> bool:
    return bool(VALID_URL_PATTERN.match(url or ""))


def validate_arxiv_url(url: str) -> str:
    """Return ``url`` unchanged, or raise InvalidUrlError"""
    if not is_valid_arxiv_url(url):
        raise InvalidUrlError(f"Not a valid Arxiv URL: {url!r}")
    return url


def extract_arxiv_id(url: str) -> Optional[str]:
    """Return the ``digits.digits`` identifier of an abstract URL, if any"""
    match = ARXIV_ID_PATTERN.search(url or "")
    return match.group(1) if match else None


def require_arxiv_id(url: str) -> str:
    arxiv_id = extract_arxiv_id(url)
    if not arxiv_id:
        raise InvalidUrlError(f"Could not find a valid Arxiv ID in {url!r}")
    return arxiv_id


def url_from_clipboard(text: str) -> str:
    """Normalize and validate raw clipboard content"""
    url = normalize_arxiv_url((text or "").strip())
    if not is_valid_arxiv_url(url):
        raise InvalidUrlError("The content in the clipboard is not a valid Arxiv URL.")
    return url
