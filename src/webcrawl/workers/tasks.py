"""
Background Crawler Tasks

Worker loop that takes URL batches from the frontier and crawls them.
"""

import asyncio
import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum

import aiohttp

from webcrawl.core.config import settings
from webcrawl.models.document import Document, PageData
from webcrawl.services.frontier_client import Frontier
from webcrawl.sinks.index import IndexSink
from webcrawl.sinks.storage import StorageSink
from webcrawl.utils.parser import parse_html, resolve_links
from webcrawl.utils.robots import RobotsCache

logger = logging.getLogger(__name__)

# Maximum response size (10 MB)
MAX_RESPONSE_SIZE = 10 * 1024 * 1024

# Read size for streaming response bodies
READ_CHUNK_SIZE = 64 * 1024


class CrawlOutcome(str, Enum):
    CRAWLED = "crawled"
    BLOCKED = "blocked"
    FETCH_FAILED = "fetch_failed"
    ERROR = "error"


class FetchError(Exception):
    """Page could not be fetched (transport error or non-2xx status)."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


@dataclass
class CrawlContext:
    """Collaborators shared by every URL a worker processes."""

    session: aiohttp.ClientSession
    robots: RobotsCache
    frontier: Frontier
    index: IndexSink
    storage: StorageSink
    timeout: float = settings.CRAWL_TIMEOUT_SEC


async def fetch_page(
    session: aiohttp.ClientSession, url: str, timeout: float
) -> PageData:
    """
    Fetch a page and extract its document and resolved outbound links.

    Raises:
        FetchError: network failure, timeout, non-2xx status or oversized body
    """
    try:
        async with session.get(
            url, timeout=aiohttp.ClientTimeout(total=timeout), allow_redirects=True
        ) as resp:
            if not 200 <= resp.status < 300:
                raise FetchError(f"non-OK HTTP status: {resp.status}", resp.status)

            content_length = resp.headers.get("Content-Length")
            if content_length:
                try:
                    if int(content_length) > MAX_RESPONSE_SIZE:
                        raise FetchError(
                            f"response too large ({content_length} bytes)", resp.status
                        )
                except ValueError:
                    pass

            # Read until EOF; Content-Length may be absent or wrong
            body = bytearray()
            async for chunk in resp.content.iter_chunked(READ_CHUNK_SIZE):
                body.extend(chunk)
                if len(body) > MAX_RESPONSE_SIZE:
                    raise FetchError(
                        f"response larger than {MAX_RESPONSE_SIZE} bytes", resp.status
                    )
    except FetchError:
        raise
    except asyncio.TimeoutError as e:
        raise FetchError(f"timed out after {timeout}s") from e
    except (aiohttp.ClientError, ValueError) as e:
        raise FetchError(f"error fetching page: {e}") from e

    html = bytes(body).decode("utf-8", errors="replace")

    # Parse HTML (offload to executor)
    loop = asyncio.get_running_loop()
    parsed = await loop.run_in_executor(None, parse_html, html)
    links = resolve_links(url, parsed.hrefs)

    return PageData(
        document=Document(url=url, title=parsed.title, body=parsed.text),
        links=links,
    )


async def _sink_document(ctx: CrawlContext, doc: Document) -> None:
    try:
        ctx.index.index(doc)
    except Exception as e:
        logger.error(f"Error indexing document {doc.url}: {e}")

    try:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, ctx.storage.save, doc)
    except Exception as e:
        logger.error(f"Error saving document {doc.url}: {e}")


async def process_url(ctx: CrawlContext, url: str) -> CrawlOutcome:
    """
    Process a single URL: check robots, fetch, parse, forward links, sink.

    Never raises: every failure is logged and only ends work on this URL.
    """
    # 1. Check robots.txt
    try:
        allowed = await ctx.robots.is_allowed(url)
    except ValueError as e:
        logger.warning(f"Invalid URL {url}: {e}")
        return CrawlOutcome.ERROR
    except Exception as e:
        logger.error(
            f"Unexpected error checking robots.txt for {url}: {e}", exc_info=True
        )
        return CrawlOutcome.ERROR

    if not allowed:
        logger.info(f"Skipping {url} due to robots.txt disallow rules")
        return CrawlOutcome.BLOCKED

    try:
        # 2. Fetch and parse
        page = await fetch_page(ctx.session, url, ctx.timeout)
        logger.info(
            f"Processed page: {page.url} with title: {page.title!r} "
            f"({len(page.links)} links)"
        )

        # 3. Forward discovered links
        if page.links:
            result = await ctx.frontier.add(page.links)
            if not result.ok:
                logger.error(
                    f"Lost {len(page.links)} links discovered on {url}: {result.detail}"
                )

        # 4. Feed sinks
        await _sink_document(ctx, page.document)
        return CrawlOutcome.CRAWLED

    except FetchError as e:
        logger.warning(f"Error processing {url}: {e}")
        return CrawlOutcome.FETCH_FAILED

    except Exception as e:
        logger.error(f"Unexpected error processing {url}: {e}", exc_info=True)
        return CrawlOutcome.ERROR


async def _idle(stop_event: asyncio.Event, seconds: float) -> None:
    """Sleep for `seconds`, waking early if stop_event is set."""
    try:
        await asyncio.wait_for(stop_event.wait(), timeout=seconds)
    except asyncio.TimeoutError:
        pass


async def worker_loop(
    ctx: CrawlContext,
    stop_event: asyncio.Event,
    name: str = "worker-1",
    batch_size: int = settings.CRAWL_BATCH_SIZE,
    poll_interval: float = settings.CRAWL_POLL_INTERVAL_SEC,
) -> None:
    """
    Main crawler worker loop.

    Polls the frontier for batches until stop_event is set. The stop signal
    is checked before every poll; a batch already taken is always finished.
    """
    logger.info(f"{name} started (batch_size={batch_size})")

    while not stop_event.is_set():
        urls = await ctx.frontier.take(batch_size)
        if not urls:
            # Nothing to do, wait before checking again
            await _idle(stop_event, poll_interval)
            continue

        outcomes: Counter = Counter()
        for url in urls:
            outcomes[await process_url(ctx, url)] += 1

        summary = ", ".join(f"{o.value}={n}" for o, n in sorted(outcomes.items()))
        logger.info(f"{name} finished batch of {len(urls)} URLs ({summary})")

    logger.info(f"{name} stopped")


async def crawl_until_empty(
    ctx: CrawlContext,
    stop_event: asyncio.Event | None = None,
    batch_size: int = settings.CRAWL_BATCH_SIZE,
) -> Counter:
    """
    Crawl batches until the frontier hands out an empty one.

    Only meaningful for a frontier no one else feeds (LocalFrontier): with
    a shared frontier an empty batch does not mean the crawl is over.

    Returns:
        Counter of CrawlOutcome over every URL processed
    """
    totals: Counter = Counter()
    while stop_event is None or not stop_event.is_set():
        urls = await ctx.frontier.take(batch_size)
        if not urls:
            logger.info("Queue exhausted; crawl finished")
            break
        for url in urls:
            totals[await process_url(ctx, url)] += 1
    return totals
