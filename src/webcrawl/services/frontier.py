"""
Frontier Queue Service

In-memory FIFO of URLs waiting to be crawled, shared by every worker.
"""

import logging
import threading
from collections import deque
from typing import Iterable

from webcrawl.services.frontier_client import FrontierAddResult

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 10


class FrontierQueue:
    """
    Mutex-serialized FIFO queue of discovered URLs.

    A URL handed out by take() is gone from the queue for good; there is no
    lease or requeue. Duplicates are kept as-is.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._urls: deque[str] = deque()

    def add(self, urls: Iterable[str]) -> int:
        """
        Append URLs to the tail of the queue, preserving their order.

        Args:
            urls: URLs to append (not validated)

        Returns:
            Number of URLs appended
        """
        batch = list(urls)
        with self._lock:
            self._urls.extend(batch)
            size = len(self._urls)
        logger.debug(f"Added {len(batch)} URLs (queue_size={size})")
        return len(batch)

    def take(self, batch_size: int = DEFAULT_BATCH_SIZE) -> list[str]:
        """
        Remove and return up to batch_size URLs from the head of the queue.

        Returns an empty list when the queue is empty.
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")

        with self._lock:
            count = min(batch_size, len(self._urls))
            batch = [self._urls.popleft() for _ in range(count)]
        if batch:
            logger.debug(f"Handed out {len(batch)} URLs")
        return batch

    def size(self) -> int:
        with self._lock:
            return len(self._urls)


class LocalFrontier:
    """
    FrontierQueue exposed through the same async take/add calls as
    FrontierClient, for single-process crawls.
    """

    def __init__(self, queue: FrontierQueue | None = None):
        self.queue = FrontierQueue() if queue is None else queue

    async def take(self, batch_size: int) -> list[str]:
        return self.queue.take(batch_size)

    async def add(self, urls: list[str]) -> FrontierAddResult:
        self.queue.add(urls)
        return FrontierAddResult(ok=True)
