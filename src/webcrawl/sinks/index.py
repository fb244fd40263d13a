"""
In-Memory Search Index

Append-only document list answering case-insensitive substring queries.
"""

import logging
import threading
from typing import Protocol

from webcrawl.models.document import Document

logger = logging.getLogger(__name__)


class IndexSink(Protocol):
    def index(self, doc: Document) -> None: ...


class InMemoryIndex:
    """Thread-safe document store with substring search over title and body"""

    def __init__(self):
        self._lock = threading.RLock()
        self._documents: list[Document] = []

    def index(self, doc: Document) -> None:
        with self._lock:
            self._documents.append(doc)
        logger.info(f"Indexed document: {doc.url} (title: {doc.title})")

    def search(self, query: str) -> list[Document]:
        """Documents whose title or body contains query, ignoring case."""
        needle = query.lower()
        with self._lock:
            documents = list(self._documents)
        return [
            doc
            for doc in documents
            if needle in doc.title.lower() or needle in doc.body.lower()
        ]

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)


class CountingIndex:
    """
    Index sink for processes that never answer queries.

    Counts documents and drops them; the documents themselves live on in
    storage, where the search API picks them up.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._count = 0

    def index(self, doc: Document) -> None:
        with self._lock:
            self._count += 1
        logger.debug(f"Counted document: {doc.url}")

    def __len__(self) -> int:
        with self._lock:
            return self._count
