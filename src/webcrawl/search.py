"""
Search API Entry Point

Read-side service over the documents saved by the crawl workers.
"""

import logging

import uvicorn
from fastapi import FastAPI

from webcrawl.api.routes import health, search
from webcrawl.core.config import settings
from webcrawl.core.events import search_lifespan
from webcrawl.sinks.index import InMemoryIndex


def create_app() -> FastAPI:
    app = FastAPI(
        title="Search API",
        version=settings.APP_VERSION,
        description="Substring search over crawled documents",
        lifespan=search_lifespan,
    )
    app.state.index = InMemoryIndex()

    app.include_router(health.router, tags=["health"])
    app.include_router(search.router, tags=["search"])

    return app


def run() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(create_app(), host=settings.SEARCH_HOST, port=settings.SEARCH_PORT)


if __name__ == "__main__":
    run()
