"""
Models package initialization
"""

from webcrawl.models.document import Document, PageData
from webcrawl.models.frontier import AddRequest, AddResponse, QueueStatus

__all__ = [
    "Document",
    "PageData",
    "AddRequest",
    "AddResponse",
    "QueueStatus",
]
