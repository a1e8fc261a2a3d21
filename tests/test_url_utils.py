"""
Tests for Arxiv URL normalization
"""
import pytest

from paper2note.core.errors import InvalidUrlError
from paper2note.core.url_utils import (
    extract_arxiv_id,
    is_valid_arxiv_url,
    normalize_arxiv_url,
    require_arxiv_id,
    url_from_clipboard,
    validate_arxiv_url,
)


class TestNormalize:
    """Test normalize_arxiv_url"""

    def test_upgrades_http(self):
        """http becomes https"""
        assert normalize_arxiv_url("http://arxiv.org/abs/2404.16260") == "https://arxiv.org/abs/2404.16260"

    def test_pdf_link_becomes_abstract_link(self):
        """PDF links point to the abstract page"""
        assert normalize_arxiv_url("https://arxiv.org/pdf/1706.03762.pdf") == "https://arxiv.org/abs/1706.03762"

    def test_http_pdf_link(self):
        """Both rewrites apply together"""
        assert normalize_arxiv_url("http://arxiv.org/pdf/1706.03762.pdf") == "https://arxiv.org/abs/1706.03762"

    def test_pdf_link_without_suffix(self):
        """PDF links without .pdf are rewritten too"""
        assert normalize_arxiv_url("https://arxiv.org/pdf/1706.03762v2") == "https://arxiv.org/abs/1706.03762v2"

    @pytest.mark.parametrize(
        "url",
        [
            "http://arxiv.org/pdf/1706.03762.pdf",
            "https://arxiv.org/abs/2404.16260",
            "https://example.com/paper.pdf",
        ],
    )
    def test_idempotent(self, url):
        """Normalizing twice changes nothing"""
        once = normalize_arxiv_url(url)
        assert normalize_arxiv_url(once) == once


class TestValidate:
    """Test is_valid_arxiv_url / validate_arxiv_url"""

    def test_valid_abstract_url(self):
        """Abstract URLs are valid"""
        assert is_valid_arxiv_url("https://arxiv.org/abs/2404.16260")

    def test_other_scheme_rejected(self):
        """Other schemes are invalid"""
        assert not is_valid_arxiv_url("ftp://arxiv.org/abs/1")

    def test_bare_prefix_is_valid(self):
        """The identifier itself is checked later by extract_arxiv_id"""
        assert is_valid_arxiv_url("https://arxiv.org/abs/")
        assert extract_arxiv_id("https://arxiv.org/abs/") is None

    def test_http_rejected_before_normalization(self):
        """Plain http is invalid until normalized"""
        assert not is_valid_arxiv_url("http://arxiv.org/abs/2404.16260")

    def test_validate_raises(self):
        """validate_arxiv_url raises InvalidUrlError"""
        with pytest.raises(InvalidUrlError):
            validate_arxiv_url("https://example.com/abs/1")

    def test_url_from_clipboard_strips_and_normalizes(self):
        """Clipboard text is trimmed and normalized"""
        assert url_from_clipboard("  http://arxiv.org/pdf/1706.03762.pdf\n") == "https://arxiv.org/abs/1706.03762"

    def test_url_from_clipboard_rejects_text(self):
        """Non-URL clipboard text is rejected"""
        with pytest.raises(InvalidUrlError):
            url_from_clipboard("just some notes")


class TestExtractId:
    """Test extract_arxiv_id"""

    def test_extracts_id(self):
        """The numeric ID is extracted"""
        assert extract_arxiv_id("https://arxiv.org/abs/2404.16260") == "2404.16260"

    def test_version_suffix_ignored(self):
        """Version suffixes are dropped"""
        assert extract_arxiv_id("https://arxiv.org/abs/2404.16260v3") == "2404.16260"

    def test_no_identifier(self):
        """Missing IDs give None"""
        assert extract_arxiv_id("https://arxiv.org/abs/nohyphen") is None

    def test_require_raises(self):
        """require_arxiv_id raises InvalidUrlError"""
        with pytest.raises(InvalidUrlError):
            require_arxiv_id("https://arxiv.org/abs/nohyphen")
