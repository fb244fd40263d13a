"""
Application Lifecycle Events

FastAPI lifespan handlers for the frontier and search services.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
import logging

from webcrawl.core.config import settings
from webcrawl.sinks.storage import LocalStorage

logger = logging.getLogger(__name__)


@asynccontextmanager
async def frontier_lifespan(app: FastAPI):
    """
    Frontier lifespan manager

    - Startup: seed the (empty) queue with CRAWL_SEEDS
    - Shutdown: report what is being dropped; the queue is never persisted
    """
    logger.info("🚀 Starting Frontier Service...")

    if settings.CRAWL_SEEDS:
        app.state.frontier.add(settings.CRAWL_SEEDS)
        logger.info(f"🌱 Seeded frontier with {len(settings.CRAWL_SEEDS)} URL(s)")

    yield  # Application runs here

    remaining = app.state.frontier.size()
    logger.info(f"🛑 Shutting down Frontier Service ({remaining} queued URLs dropped)")


@asynccontextmanager
async def search_lifespan(app: FastAPI):
    """
    Search lifespan manager

    - Startup: load saved documents from STORAGE_DIR into the index
    """
    logger.info("🚀 Starting Search API...")

    storage = LocalStorage(settings.STORAGE_DIR)
    loaded = 0
    for doc in storage.iter_documents():
        app.state.index.index(doc)
        loaded += 1
    logger.info(f"✅ Loaded {loaded} documents from {storage.directory}")

    yield

    logger.info("🛑 Shutting down Search API")
