"""
Shared fixtures: fake HTTP session, sample API payloads and a tiny PDF builder
"""
import json
import logging
from typing import Dict, List, Optional

import pytest

from paper2note.core.vault import Vault


ARXIV_XML = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>ArXiv Query: id_list=1706.03762</title>
  <entry>
    <id>http://arxiv.org/abs/1706.03762v7</id>
    <published>2017-06-12T17:57:34Z</published>
    <title>Attention Is All
      You Need</title>
    <summary>  The dominant sequence transduction models are based on complex
recurrent or convolutional neural networks.
  We propose the Transformer.
</summary>
    <author><name>Ashish Vaswani</name></author>
    <author><name>Noam Shazeer</name></author>
    <author><name>Niki Parmar</name></author>
  </entry>
</feed>
"""

EMPTY_FEED_XML = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom"><title>empty</title></feed>
"""

SEMANTIC_SCHOLAR = {
    "numCitedBy": 120,
    "numCiting": 40,
    "citations": [
        {
            "isInfluential": True,
            "paperId": "c1",
            "title": "BERT: Pre-training of Deep Bidirectional Transformers",
            "url": "https://www.semanticscholar.org/paper/c1",
            "venue": "NAACL",
            "year": 2019,
            "authors": [{"name": "Jacob Devlin"}, {"name": "Ming-Wei Chang"}],
            "arxivId": "1810.04805",
            "doi": "10.18653/v1/N19-1423",
            "citationCount": 90000,
            "intent": ["methodology", "background"],
        },
        {
            "isInfluential": False,
            "paperId": "c2",
            "title": "Some Minor Follow-up",
            "authors": [],
        },
    ],
    "references": [
        {
            "isInfluential": True,
            "paperId": "r1",
            "title": "Neural Machine Translation: Jointly Learning to Align?",
            "url": "https://www.semanticscholar.org/paper/r1",
            "venue": "ICLR",
            "year": 2015,
            "authors": [{"name": "Dzmitry Bahdanau"}],
            "arxivId": None,
            "doi": None,
            "citationCount": None,
            "intent": [],
        },
    ],
}


class FakeResponse:
    def __init__(self, status_code: int = 200, text: str = "", content: bytes = b"", payload=None):
        self.status_code = status_code
        self.text = text
        self.content = content or text.encode("utf-8")
        self._payload = payload

    def json(self):
        if self._payload is not None:
            return self._payload
        return json.loads(self.text)


class FakeSession:
    """Answer GET/POST calls from a table of URL fragments"""

    def __init__(self, routes: Optional[Dict[str, object]] = None):
        self.routes = routes or {}
        self.headers: Dict[str, str] = {}
        self.calls: List[dict] = []

    def _answer(self, method: str, url: str, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        for fragment, answer in self.routes.items():
            if fragment in url:
                if isinstance(answer, Exception):
                    raise answer
                return answer
        return FakeResponse(status_code=404, text="not found")

    def get(self, url, **kwargs):
        return self._answer("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._answer("POST", url, **kwargs)


def build_pdf(pages: List[str]) -> bytes:
    """Build a minimal PDF with one line of Helvetica text per page"""
    objects: List[bytes] = []
    page_count = len(pages)
    font_id = 3 + 2 * page_count
    kids = " ".join(f"{3 + 2 * i} 0 R" for i in range(page_count))

    objects.append(b"<< /Type /Catalog /Pages 2 0 R >>")
    objects.append(f"<< /Type /Pages /Kids [{kids}] /Count {page_count} >>".encode())
    for index, text in enumerate(pages):
        content_id = 4 + 2 * index
        objects.append(
            (
                f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Resources << /Font << /F1 {font_id} 0 R >> >> /Contents {content_id} 0 R >>"
            ).encode()
        )
        stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode()
        objects.append(
            b"<< /Length " + str(len(stream)).encode() + b" >>\nstream\n" + stream + b"\nendstream"
        )
    objects.append(b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>")

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"
    xref_at = len(out)
    out += f"xref\n0 {len(objects) + 1}\n0000000000 65535 f \n".encode()
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\nstartxref\n{xref_at}\n%%EOF\n".encode()
    return bytes(out)


@pytest.fixture(autouse=True)
def _reset_paper2note_logger():
    """Undo ``setup_logging`` between tests so caplog keeps working"""
    logger = logging.getLogger("paper2note")
    yield
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in (
        "PAPER2NOTE_API_KEY",
        "PAPER2NOTE_DOWNLOAD_PATH",
        "PAPER2NOTE_TRANSLATE_ENABLED",
        "PAPER2NOTE_TARGET_LANGUAGE",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def vault(tmp_path) -> Vault:
    root = tmp_path / "vault"
    root.mkdir()
    return Vault(root)


@pytest.fixture
def arxiv_routes() -> Dict[str, object]:
    return {
        "export.arxiv.org/api/query": FakeResponse(text=ARXIV_XML),
        "api.semanticscholar.org": FakeResponse(payload=SEMANTIC_SCHOLAR),
        "arxiv.org/pdf/": FakeResponse(content=build_pdf(["Attention Is All You Need"])),
    }
