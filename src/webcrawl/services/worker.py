"""
Worker Service

Manages the lifecycle of the crawl worker loops running in this process.
"""

import asyncio
import logging

from webcrawl.workers.tasks import CrawlContext, worker_loop

logger = logging.getLogger(__name__)


class WorkerService:
    """Starts and stops a set of independent worker loops sharing one context"""

    def __init__(self, ctx: CrawlContext):
        self.ctx = ctx
        self.tasks: list[asyncio.Task] = []
        self.stop_event = asyncio.Event()

    @property
    def is_running(self) -> bool:
        return any(not task.done() for task in self.tasks)

    async def start(self, workers: int = 1, **loop_kwargs):
        """Start `workers` loops"""
        if self.is_running:
            raise RuntimeError("Worker is already running")
        if workers < 1:
            raise ValueError(f"workers must be positive, got {workers}")

        self.stop_event = asyncio.Event()
        self.tasks = [
            asyncio.create_task(
                worker_loop(
                    self.ctx, self.stop_event, name=f"worker-{i + 1}", **loop_kwargs
                )
            )
            for i in range(workers)
        ]
        logger.info(f"✅ Started {workers} worker loop(s)")

    async def wait(self):
        """Wait until every loop has exited; loop crashes are logged."""
        results = await asyncio.gather(*self.tasks, return_exceptions=True)
        for task, result in zip(self.tasks, results):
            if isinstance(result, Exception):
                logger.error(f"Worker task {task.get_name()} failed: {result}")

    async def stop(self, graceful: bool = True):
        """Stop all loops"""
        if not self.tasks:
            logger.warning("Worker is not running")
            return

        if graceful:
            logger.info("Stopping workers gracefully (finishing current batches)...")
            self.stop_event.set()
        else:
            logger.info("Stopping workers immediately...")
            for task in self.tasks:
                task.cancel()

        await self.wait()

        self.tasks = []
        logger.info("✅ Workers stopped")
