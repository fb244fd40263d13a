"""
Crawl Worker Process

Runs CRAWL_WORKERS worker loops against the frontier until SIGINT/SIGTERM.
"""

import asyncio
import logging
import signal

import aiohttp

from webcrawl.core.config import settings
from webcrawl.services.frontier_client import FrontierClient
from webcrawl.services.worker import WorkerService
from webcrawl.sinks.index import CountingIndex
from webcrawl.sinks.storage import LocalStorage
from webcrawl.utils.robots import RobotsCache
from webcrawl.workers.tasks import CrawlContext

logger = logging.getLogger(__name__)


async def main() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("🚀 Starting crawl worker")

    # Fatal on failure: nowhere to write documents
    storage = LocalStorage(settings.STORAGE_DIR)
    # Nothing queries the index in this process; storage keeps the documents
    index = CountingIndex()

    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:
            signal.signal(sig, lambda *_: loop.call_soon_threadsafe(stop_event.set))

    async with aiohttp.ClientSession(
        headers={"User-Agent": settings.CRAWL_USER_AGENT}
    ) as session:
        ctx = CrawlContext(
            session=session,
            robots=RobotsCache(session, timeout=settings.CRAWL_TIMEOUT_SEC),
            frontier=FrontierClient(
                session, settings.FRONTIER_URL, timeout=settings.CRAWL_TIMEOUT_SEC
            ),
            index=index,
            storage=storage,
            timeout=settings.CRAWL_TIMEOUT_SEC,
        )
        service = WorkerService(ctx)
        await service.start(
            workers=settings.CRAWL_WORKERS,
            batch_size=settings.CRAWL_BATCH_SIZE,
            poll_interval=settings.CRAWL_POLL_INTERVAL_SEC,
        )
        logger.info(f"Taking work from: {settings.FRONTIER_URL}")

        await stop_event.wait()
        logger.info("🛑 Shutting down worker...")
        await service.stop(graceful=True)

    logger.info(f"✅ Shutdown complete ({len(index)} documents indexed)")


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
