"""
Frontier Service Entry Point

FastAPI application factory and router registration for the frontier.
"""

import logging

import uvicorn
from fastapi import FastAPI

from webcrawl.api.routes import frontier, health
from webcrawl.core.config import settings
from webcrawl.core.events import frontier_lifespan
from webcrawl.services.frontier import FrontierQueue


def create_app() -> FastAPI:
    """
    FastAPI application factory

    Each application owns a fresh, empty FrontierQueue.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Shared URL frontier for crawl workers",
        lifespan=frontier_lifespan,
    )
    app.state.frontier = FrontierQueue()

    app.include_router(health.router, tags=["health"])
    app.include_router(frontier.router, tags=["frontier"])

    return app


# Application instance
app = create_app()


def run() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.FRONTIER_HOST, port=settings.FRONTIER_PORT)


if __name__ == "__main__":
    run()
