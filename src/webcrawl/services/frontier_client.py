"""
Frontier Client

Worker-side access to the Frontier API (take a batch, add discovered URLs).
"""

import json
import logging
from dataclasses import dataclass
from typing import Protocol

import aiohttp

logger = logging.getLogger(__name__)

MAX_ERROR_DETAIL_LENGTH = 240
ADD_OK_STATUSES = (200, 201, 202)


@dataclass(frozen=True)
class FrontierAddResult:
    ok: bool
    status_code: int | None = None
    detail: str | None = None


class Frontier(Protocol):
    """What a worker needs from a frontier, local or remote"""

    async def take(self, batch_size: int) -> list[str]: ...

    async def add(self, urls: list[str]) -> FrontierAddResult: ...


def _normalize_error_text(text: str) -> str:
    normalized = " ".join(text.split())
    if len(normalized) > MAX_ERROR_DETAIL_LENGTH:
        return normalized[: MAX_ERROR_DETAIL_LENGTH - 3] + "..."
    return normalized


def _summarize_frontier_error(status_code: int, body: str) -> str:
    body = (body or "").strip()
    if not body:
        return f"Frontier {status_code}"

    try:
        parsed = json.loads(body)
    except json.JSONDecodeError:
        return f"Frontier {status_code}: {_normalize_error_text(body)}"

    detail = parsed.get("detail") if isinstance(parsed, dict) else None
    if isinstance(detail, str):
        return f"Frontier {status_code}: {_normalize_error_text(detail)}"

    return f"Frontier {status_code}: {_normalize_error_text(body)}"


class FrontierClient:
    """HTTP client for the frontier service"""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        base_url: str,
        timeout: float = 10.0,
    ):
        self._session = session
        self.base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def take(self, batch_size: int) -> list[str]:
        """
        Take a batch of URLs from the frontier.

        Any failure (network, status, body) is logged and reported as an
        empty batch so the caller backs off.
        """
        endpoint = f"{self.base_url}/fetch"
        try:
            async with self._session.get(
                endpoint, params={"batch": str(batch_size)}, timeout=self._timeout
            ) as resp:
                if resp.status != 200:
                    logger.error(f"Frontier returned non-OK status: {resp.status}")
                    return []
                urls = await resp.json(content_type=None)
        except Exception as e:
            logger.error(f"Error fetching batch from frontier: {e}")
            return []

        if not isinstance(urls, list) or not all(isinstance(u, str) for u in urls):
            logger.error(f"Unexpected frontier response: {urls!r:.200}")
            return []
        return urls

    async def add(self, urls: list[str]) -> FrontierAddResult:
        """
        Send newly discovered URLs to the frontier.

        Returns:
            FrontierAddResult; failures are reported, never raised.
        """
        endpoint = f"{self.base_url}/add"
        try:
            async with self._session.post(
                endpoint, json={"urls": urls}, timeout=self._timeout
            ) as resp:
                if resp.status in ADD_OK_STATUSES:
                    return FrontierAddResult(ok=True, status_code=resp.status)

                error_text = await resp.text()
                detail = _summarize_frontier_error(resp.status, error_text)
                logger.error(f"Failed to add {len(urls)} URLs: {detail}")
                return FrontierAddResult(
                    ok=False, status_code=resp.status, detail=detail
                )

        except Exception as e:
            detail = _normalize_error_text(f"Frontier request failed: {e}")
            logger.error(f"Failed to add {len(urls)} URLs to frontier: {e}")
            return FrontierAddResult(ok=False, detail=detail)
