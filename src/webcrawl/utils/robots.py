"""
Robots.txt Handling

Per-domain robots.txt cache. Each domain is fetched at most once per process
(unless the fetch fails) and its Disallow rules are evaluated locally after
that.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Iterable
from urllib.parse import SplitResult, quote, urlsplit

import aiohttp

logger = logging.getLogger(__name__)

# Characters left untouched when escaping a URL path for comparison
PATH_SAFE_CHARS = "/%:@!$&'()*+,;=-._~"


@dataclass(frozen=True)
class RobotsRules:
    """Disallow path prefixes that apply to the wildcard user agent."""

    disallow: tuple[str, ...] = ()

    def allows(self, path: str) -> bool:
        return not any(path.startswith(prefix) for prefix in self.disallow)


class RobotsFetchError(Exception):
    """robots.txt could not be retrieved (network error or unexpected status)."""


def parse_robots(lines: Iterable[str]) -> RobotsRules:
    """
    Collect Disallow prefixes from the groups addressed to ``User-agent: *``.

    Consecutive User-agent lines form one group. Allow, Crawl-delay and
    other directives are ignored.
    """
    disallow: list[str] = []
    group_agents: list[str] = []
    in_agent_lines = False

    for raw in lines:
        line = raw.split("#", 1)[0].strip()
        if not line or ":" not in line:
            continue

        key, _, value = line.partition(":")
        key = key.strip().lower()
        value = value.strip()

        if key == "user-agent":
            if not in_agent_lines:
                group_agents = []
                in_agent_lines = True
            group_agents.append(value.lower())
            continue

        in_agent_lines = False
        if key == "disallow" and "*" in group_agents and value:
            if value not in disallow:
                disallow.append(value)

    return RobotsRules(disallow=tuple(disallow))


def _host_key(parsed: SplitResult) -> str:
    """host[:port] in lower case, without any userinfo."""
    host = parsed.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    port = parsed.port  # ValueError on a non-numeric or out-of-range port
    return host if port is None or not host else f"{host}:{port}"


def _escaped_path(url: str) -> str:
    path = urlsplit(url).path or "/"
    return quote(path, safe=PATH_SAFE_CHARS)


class RobotsCache:
    """
    Process-lifetime robots.txt cache keyed by host.

    No eviction and no TTL. A failed fetch is not cached, so the next lookup
    for that host tries again.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        timeout: float = 10.0,
    ):
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._rules: dict[str, RobotsRules] = {}

    def get_rules(self, domain: str) -> RobotsRules | None:
        """Cached rules for a domain, or None if it was never fetched."""
        return self._rules.get(domain.lower())

    def __len__(self) -> int:
        return len(self._rules)

    async def is_allowed(self, url: str) -> bool:
        """
        Check if URL may be crawled by the wildcard user agent.

        Raises:
            ValueError: URL has no scheme or host
        """
        parsed = urlsplit(url)
        domain = _host_key(parsed)
        if not parsed.scheme or not domain:
            raise ValueError(f"Cannot check robots.txt for malformed URL: {url!r}")

        rules = self._rules.get(domain)
        if rules is None:
            try:
                rules = await self._fetch_rules(parsed.scheme, domain)
            except RobotsFetchError as e:
                logger.warning(
                    f"Could not fetch robots.txt for {domain}, allowing by default: {e}"
                )
                return True
            self._rules[domain] = rules
        else:
            logger.debug(f"robots.txt cache hit: {domain}")

        return rules.allows(_escaped_path(url))

    async def _fetch_rules(self, scheme: str, domain: str) -> RobotsRules:
        robots_url = f"{scheme}://{domain}/robots.txt"
        content = ""
        try:
            async with self._session.get(robots_url, timeout=self._timeout) as resp:
                status = resp.status
                if status == 200:
                    content = await resp.text(errors="replace")
        except asyncio.TimeoutError as e:
            raise RobotsFetchError(f"timed out fetching {robots_url}") from e
        except Exception as e:
            raise RobotsFetchError(str(e) or type(e).__name__) from e

        if status == 404:
            logger.info(f"No robots.txt for {domain} (404), allowing all")
            return RobotsRules()
        if status != 200:
            raise RobotsFetchError(f"received status {status} fetching {robots_url}")

        rules = parse_robots(content.splitlines())
        logger.info(f"Fetched robots.txt for {domain}: {len(rules.disallow)} rules")
        return rules
