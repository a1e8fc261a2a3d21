"""
Data models for paper2note
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class PaperRef:
    """A citing or cited paper as reported by the citation graph"""
    paper_id: str
    title: str
    url: Optional[str] = None
    venue: Optional[str] = None
    year: Optional[int] = None
    authors: str = ""
    arxiv_id: Optional[str] = None
    doi: Optional[str] = None
    citation_count: Optional[int] = None
    intent: List[str] = field(default_factory=list)

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "PaperRef":
        """Project one Semantic Scholar citation/reference entry"""
        authors = item.get("authors") or []
        return cls(
            paper_id=str(item.get("paperId") or ""),
            title=str(item.get("title") or ""),
            url=item.get("url"),
            venue=item.get("venue"),
            year=item.get("year"),
            authors=", ".join(
                str(author.get("name") or "")
                for author in authors
                if isinstance(author, dict)
            ),
            arxiv_id=item.get("arxivId"),
            doi=item.get("doi"),
            citation_count=item.get("citationCount"),
            intent=list(item.get("intent") or []),
        )

    def __str__(self):
        return f"{self.title} ({self.year or 'n.d.'})"


@dataclass(frozen=True)
class CitationInfo:
    """Citation counts and influential neighbours of a paper"""
    num_cited_by: int = 0
    num_citing: int = 0
    influential_citations: List[PaperRef] = field(default_factory=list)
    influential_references: List[PaperRef] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "CitationInfo":
        return cls()


@dataclass(frozen=True)
class PaperMetadata:
    """Bibliographic record of an Arxiv paper, built once per fetch"""
    title: str
    paper_link: str = ""
    publish_date: str = ""
    authors: str = ""
    abstract: str = ""
    num_cited_by: int = 0
    num_citing: int = 0
    influential_citations: List[PaperRef] = field(default_factory=list)
    influential_references: List[PaperRef] = field(default_factory=list)

    @classmethod
    def from_parts(cls, entry: Dict[str, str], citations: CitationInfo) -> "PaperMetadata":
        """Combine a parsed Arxiv entry with citation-graph information"""
        return cls(
            title=entry.get("title", ""),
            paper_link=entry.get("paper_link", ""),
            publish_date=entry.get("publish_date", ""),
            authors=entry.get("authors", ""),
            abstract=entry.get("abstract", ""),
            num_cited_by=citations.num_cited_by,
            num_citing=citations.num_citing,
            influential_citations=list(citations.influential_citations),
            influential_references=list(citations.influential_references),
        )

    def __str__(self):
        return f"{self.title} by {self.authors or 'Unknown'}"


@dataclass(frozen=True)
class UseDefault:
    """Summarize with the built-in prompt"""


@dataclass(frozen=True)
class Custom:
    """Summarize with a user-supplied prompt"""
    text: str


@dataclass(frozen=True)
class Cancel:
    """User dismissed the prompt dialog"""


PromptChoice = Union[UseDefault, Custom, Cancel]
