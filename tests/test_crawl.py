"""
Standalone Crawl Tests

Runs the single-process crawl against a local aiohttp server.
"""

import asyncio

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from webcrawl.crawl import crawl
from webcrawl.sinks.storage import LocalStorage


def _site() -> web.Application:
    pages = {
        "/": '<title>Home</title><a href="/a">a</a><a href="/b">b</a>',
        "/a": '<title>A</title><p>alpha</p><a href="/private/x">x</a>',
        "/b": "<title>B</title><p>beta</p>",
        "/private/x": "<title>Secret</title>",
    }

    async def robots(request):
        return web.Response(text="User-agent: *\nDisallow: /private\n")

    async def page(request):
        body = pages.get(request.path)
        if body is None:
            raise web.HTTPNotFound()
        return web.Response(text=body, content_type="text/html")

    app = web.Application()
    app.router.add_get("/robots.txt", robots)
    app.router.add_get("/{tail:.*}", page)
    return app


@pytest.mark.asyncio
async def test_crawl_from_seed_until_queue_is_empty(tmp_path):
    server = TestServer(_site())
    await server.start_server()
    try:
        seed = str(server.make_url("/"))
        index = await asyncio.wait_for(
            crawl([seed], storage_dir=str(tmp_path / "docs"), batch_size=2),
            timeout=10,
        )
    finally:
        await server.close()

    titles = sorted(doc.title for doc in index.search(""))
    assert titles == ["A", "B", "Home"]
    assert [doc.title for doc in index.search("beta")] == ["B"]

    storage = LocalStorage(tmp_path / "docs")
    saved = sorted(doc.title for doc in storage.iter_documents())
    assert saved == ["A", "B", "Home"]


@pytest.mark.asyncio
async def test_crawl_with_unreachable_seed_finishes(tmp_path):
    index = await asyncio.wait_for(
        crawl(["http://127.0.0.1:9/"], storage_dir=str(tmp_path)), timeout=30
    )

    assert len(index) == 0
