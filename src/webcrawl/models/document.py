"""
Crawled Document Models

Transient values produced per successful fetch and handed to the sinks.
"""

from dataclasses import asdict, dataclass, field


@dataclass(frozen=True)
class Document:
    url: str
    title: str
    body: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class PageData:
    """A fetched page: the document plus its resolved outbound links."""

    document: Document
    links: list[str] = field(default_factory=list)

    @property
    def url(self) -> str:
        return self.document.url

    @property
    def title(self) -> str:
        return self.document.title
