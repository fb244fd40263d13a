"""
Crawl Configuration

Settings for the frontier service, the crawl workers and the search API.
All values come from environment variables with local-development defaults.
"""

import os


class CrawlSettings:
    """Crawl system configuration"""

    # Application
    APP_NAME: str = "Frontier Service"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Frontier service
    FRONTIER_HOST: str = os.getenv("FRONTIER_HOST", "0.0.0.0")
    FRONTIER_PORT: int = int(os.getenv("FRONTIER_PORT", "8080"))
    CRAWL_SEEDS: list[str] = [
        s.strip() for s in os.getenv("CRAWL_SEEDS", "").split() if s.strip()
    ]

    # Worker
    FRONTIER_URL: str = os.getenv("FRONTIER_URL", "http://frontier:8080")
    CRAWL_USER_AGENT: str = os.getenv("CRAWL_USER_AGENT", "webcrawl/0.1")
    CRAWL_BATCH_SIZE: int = int(os.getenv("CRAWL_BATCH_SIZE", "10"))
    CRAWL_POLL_INTERVAL_SEC: float = float(os.getenv("CRAWL_POLL_INTERVAL_SEC", "3"))
    CRAWL_TIMEOUT_SEC: float = float(os.getenv("CRAWL_TIMEOUT_SEC", "10"))
    CRAWL_WORKERS: int = int(os.getenv("CRAWL_WORKERS", "1"))

    # Local storage (worker writes, search API reads)
    STORAGE_DIR: str = os.getenv("STORAGE_DIR", "data")

    # Search API
    SEARCH_HOST: str = os.getenv("SEARCH_HOST", "0.0.0.0")
    SEARCH_PORT: int = int(os.getenv("SEARCH_PORT", "8090"))


settings = CrawlSettings()


def _validate_required(settings: CrawlSettings) -> None:
    """Validate settings that have no sensible fallback."""
    if settings.CRAWL_BATCH_SIZE < 1:
        raise RuntimeError("CRAWL_BATCH_SIZE must be a positive integer")
    if settings.CRAWL_WORKERS < 1:
        raise RuntimeError("CRAWL_WORKERS must be a positive integer")
    if settings.CRAWL_TIMEOUT_SEC <= 0:
        raise RuntimeError("CRAWL_TIMEOUT_SEC must be positive")


_validate_required(settings)
