"""
Robots.txt Cache Tests

Tests for parse_robots and RobotsCache fetch/caching policy.
"""

import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock

import aiohttp

from webcrawl.utils.robots import RobotsCache, RobotsRules, parse_robots


def _robots_response(status: int, text: str = ""):
    response = AsyncMock()
    response.status = status
    response.text = AsyncMock(return_value=text)
    return response


def _session(response):
    session = MagicMock()
    session.get.return_value.__aenter__.return_value = response
    return session


# ==========================================
# Tests for parse_robots
# ==========================================


def test_parse_collects_wildcard_disallows():
    rules = parse_robots(
        [
            "User-agent: *",
            "Disallow: /private",
            "Disallow: /tmp",
        ]
    )
    assert rules.disallow == ("/private", "/tmp")


def test_parse_ignores_other_agents():
    rules = parse_robots(
        [
            "User-agent: Googlebot",
            "Disallow: /google-only",
            "",
            "User-agent: *",
            "Disallow: /all",
        ]
    )
    assert rules.disallow == ("/all",)


def test_parse_grouped_agents_share_rules():
    rules = parse_robots(
        [
            "User-agent: foo",
            "User-agent: *",
            "Disallow: /shared",
            "User-agent: bar",
            "Disallow: /bar",
        ]
    )
    assert rules.disallow == ("/shared",)


def test_parse_skips_comments_blank_and_empty_disallow():
    rules = parse_robots(
        [
            "# robots for example.com",
            "",
            "user-agent: *   # everyone",
            "disallow:",
            "DISALLOW: /cgi-bin  # scripts",
            "Allow: /cgi-bin/public",
        ]
    )
    assert rules.disallow == ("/cgi-bin",)


def test_parse_empty_file():
    assert parse_robots([]) == RobotsRules()


def test_rules_prefix_semantics():
    rules = RobotsRules(disallow=("/private", "/tmp"))

    assert rules.allows("/private/page") is False
    assert rules.allows("/privateer") is False
    assert rules.allows("/tmp") is False
    assert rules.allows("/pub") is True
    assert rules.allows("/") is True


# ==========================================
# Tests for RobotsCache
# ==========================================


@pytest.mark.asyncio
async def test_is_allowed_prefix_rules():
    session = _session(
        _robots_response(200, "User-agent: *\nDisallow: /private\nDisallow: /tmp")
    )
    cache = RobotsCache(session)

    assert await cache.is_allowed("http://x/private/page") is False
    assert await cache.is_allowed("http://x/pub") is True
    assert await cache.is_allowed("http://x/") is True
    assert await cache.is_allowed("http://x") is True

    # One fetch for the whole domain
    session.get.assert_called_once()
    assert session.get.call_args[0][0] == "http://x/robots.txt"


@pytest.mark.asyncio
async def test_cache_hit_skips_network():
    session = _session(_robots_response(200, "User-agent: *\nDisallow: /admin"))
    cache = RobotsCache(session)

    await cache.is_allowed("https://example.com/")
    session.get.reset_mock()

    assert await cache.is_allowed("https://example.com/admin/users") is False
    session.get.assert_not_called()
    assert cache.get_rules("example.com") == RobotsRules(disallow=("/admin",))


@pytest.mark.asyncio
async def test_robots_fetched_with_url_scheme_and_port():
    session = _session(_robots_response(200, ""))
    cache = RobotsCache(session)

    await cache.is_allowed("https://Example.com:8443/page")

    assert session.get.call_args[0][0] == "https://example.com:8443/robots.txt"
    assert cache.get_rules("example.com:8443") == RobotsRules()


@pytest.mark.asyncio
async def test_userinfo_is_not_part_of_host_key():
    session = _session(_robots_response(200, "User-agent: *\nDisallow: /x"))
    cache = RobotsCache(session)

    assert await cache.is_allowed("http://u:p@Host.com:8080/x") is False
    assert await cache.is_allowed("http://host.com:8080/x/y") is False

    session.get.assert_called_once()
    assert session.get.call_args[0][0] == "http://host.com:8080/robots.txt"
    assert cache.get_rules("host.com:8080") == RobotsRules(disallow=("/x",))
    assert cache.get_rules("u:p@host.com:8080") is None


@pytest.mark.asyncio
async def test_ipv6_host_keeps_brackets():
    session = _session(_robots_response(404))
    cache = RobotsCache(session)

    assert await cache.is_allowed("http://[::1]:8000/page") is True
    assert session.get.call_args[0][0] == "http://[::1]:8000/robots.txt"


@pytest.mark.asyncio
async def test_404_allows_and_is_cached():
    session = _session(_robots_response(404))
    cache = RobotsCache(session)

    assert await cache.is_allowed("http://example.com/anything") is True
    assert await cache.is_allowed("http://example.com/else") is True

    session.get.assert_called_once()
    assert cache.get_rules("example.com") == RobotsRules()


@pytest.mark.asyncio
async def test_network_error_fails_open_without_caching():
    session = MagicMock()
    session.get.side_effect = aiohttp.ClientConnectionError("Network error")
    cache = RobotsCache(session)

    assert await cache.is_allowed("http://example.com/test") is True
    assert cache.get_rules("example.com") is None

    # Next lookup retries the fetch
    assert await cache.is_allowed("http://example.com/test") is True
    assert session.get.call_count == 2


@pytest.mark.asyncio
async def test_timeout_fails_open():
    session = MagicMock()
    session.get.side_effect = asyncio.TimeoutError()
    cache = RobotsCache(session)

    assert await cache.is_allowed("http://slow.example.com/") is True
    assert len(cache) == 0


@pytest.mark.asyncio
async def test_server_error_fails_open_then_retries():
    session = _session(_robots_response(500))
    cache = RobotsCache(session)

    assert await cache.is_allowed("http://example.com/private") is True
    assert cache.get_rules("example.com") is None

    session.get.return_value.__aenter__.return_value = _robots_response(
        200, "User-agent: *\nDisallow: /private"
    )
    assert await cache.is_allowed("http://example.com/private") is False
    assert session.get.call_count == 2


@pytest.mark.asyncio
async def test_malformed_url_raises():
    cache = RobotsCache(MagicMock())

    with pytest.raises(ValueError):
        await cache.is_allowed("not-a-url")


@pytest.mark.asyncio
async def test_domains_are_cached_independently():
    session = _session(_robots_response(200, "User-agent: *\nDisallow: /"))
    cache = RobotsCache(session)

    results = await asyncio.gather(
        cache.is_allowed("http://a.com/page"),
        cache.is_allowed("http://b.com/page"),
    )

    assert results == [False, False]
    assert len(cache) == 2
