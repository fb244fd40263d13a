"""
Document sinks fed by the crawl workers
"""

from webcrawl.sinks.index import CountingIndex, IndexSink, InMemoryIndex
from webcrawl.sinks.storage import LocalStorage, StorageError, StorageSink

__all__ = [
    "CountingIndex",
    "IndexSink",
    "InMemoryIndex",
    "LocalStorage",
    "StorageError",
    "StorageSink",
]
