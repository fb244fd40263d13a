"""
Test configuration and fixtures for webcrawl tests
"""

import sys
from pathlib import Path

# Allow running the suite from a checkout without installing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402


async def _iterate(chunks):
    for chunk in chunks:
        yield chunk


def make_response(
    status: int = 200,
    body: bytes = b"",
    text: str = "",
    chunks: list[bytes] | None = None,
    headers: dict | None = None,
):
    """
    Mock aiohttp response usable as `async with session.get(...) as resp`.

    The body is streamed through `content.iter_chunked`, as `chunks` when
    given, otherwise as a single chunk.
    """
    if chunks is None:
        chunks = [body] if body else []

    response = AsyncMock()
    response.status = status
    response.headers = {"Content-Type": "text/html", **(headers or {})}
    response.text = AsyncMock(return_value=text)
    response.json = AsyncMock()
    response.content = MagicMock()
    response.content.iter_chunked = MagicMock(side_effect=lambda n: _iterate(chunks))
    return response


def make_session(*responses):
    """Mock ClientSession whose successive GETs yield `responses` in order."""
    session = MagicMock()
    if len(responses) == 1:
        session.get.return_value.__aenter__.return_value = responses[0]
    elif responses:
        contexts = []
        for response in responses:
            ctx = MagicMock()
            ctx.__aenter__ = AsyncMock(return_value=response)
            ctx.__aexit__ = AsyncMock(return_value=False)
            contexts.append(ctx)
        session.get.side_effect = contexts
    return session


@pytest.fixture
def frontier_client():
    """TestClient around a fresh frontier application"""
    from webcrawl.main import create_app

    with TestClient(create_app()) as client:
        yield client


@pytest.fixture
def storage(tmp_path):
    from webcrawl.sinks.storage import LocalStorage

    return LocalStorage(tmp_path / "docs")
