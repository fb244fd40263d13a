"""
Standalone Crawl

Single-process crawl: seeds go into an in-process queue, every page is
indexed and saved, discovered links are queued, and the run ends when the
queue is empty.
"""

import argparse
import asyncio
import logging
import signal

import aiohttp

from webcrawl.core.config import settings
from webcrawl.services.frontier import LocalFrontier
from webcrawl.sinks.index import InMemoryIndex
from webcrawl.sinks.storage import LocalStorage
from webcrawl.utils.robots import RobotsCache
from webcrawl.workers.tasks import CrawlContext, crawl_until_empty

logger = logging.getLogger(__name__)


async def crawl(
    seeds: list[str],
    storage_dir: str = settings.STORAGE_DIR,
    batch_size: int = settings.CRAWL_BATCH_SIZE,
    stop_event: asyncio.Event | None = None,
) -> InMemoryIndex:
    """
    Crawl from seeds until no URLs are left.

    Returns:
        The index holding every document crawled in this run
    """
    storage = LocalStorage(storage_dir)
    index = InMemoryIndex()
    frontier = LocalFrontier()
    await frontier.add(seeds)

    async with aiohttp.ClientSession(
        headers={"User-Agent": settings.CRAWL_USER_AGENT}
    ) as session:
        ctx = CrawlContext(
            session=session,
            robots=RobotsCache(session, timeout=settings.CRAWL_TIMEOUT_SEC),
            frontier=frontier,
            index=index,
            storage=storage,
            timeout=settings.CRAWL_TIMEOUT_SEC,
        )
        totals = await crawl_until_empty(ctx, stop_event, batch_size=batch_size)

    summary = ", ".join(f"{o.value}={n}" for o, n in sorted(totals.items()))
    logger.info(f"Crawl finished: {len(index)} documents ({summary or 'no URLs'})")
    return index


async def main(seeds: list[str]) -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(f"🚀 Starting standalone crawl from {len(seeds)} seed(s)")

    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:
            signal.signal(sig, lambda *_: loop.call_soon_threadsafe(stop_event.set))

    await crawl(seeds, stop_event=stop_event)
    logger.info("✅ Done")


def run() -> None:
    parser = argparse.ArgumentParser(
        description="Crawl from seed URLs in one process until the queue is empty"
    )
    parser.add_argument("seeds", nargs="*", help="Seed URLs (default: CRAWL_SEEDS)")
    args = parser.parse_args()

    seeds = args.seeds or settings.CRAWL_SEEDS
    if not seeds:
        parser.error("no seed URLs given and CRAWL_SEEDS is empty")

    asyncio.run(main(seeds))


if __name__ == "__main__":
    run()
