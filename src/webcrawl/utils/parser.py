"""
HTML Parser Utilities

Functions for extracting title, text and links from HTML.
"""

import re
import warnings
from dataclasses import dataclass, field

from bs4 import BeautifulSoup, Comment, MarkupResemblesLocatorWarning, Tag
from bs4.element import Declaration, Doctype, NavigableString, ProcessingInstruction

from webcrawl.core.utils import resolve_url

warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

# Elements whose text never belongs to the page body
SKIP_TEXT_TAGS = frozenset({"script", "style", "noscript", "template"})
NON_TEXT_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)


@dataclass
class ParsedHtml:
    title: str = ""
    text: str = ""
    hrefs: list[str] = field(default_factory=list)


def _strip_nul(text: str) -> str:
    return text.replace("\x00", " ")


def parse_html(html: str) -> ParsedHtml:
    """
    Extract title, body text and anchor hrefs from HTML.

    Walks the parse tree with an explicit stack so deeply nested documents
    cannot exhaust the interpreter's recursion limit. The first <title>
    wins; hrefs are returned in document order, unresolved.

    Args:
        html: Raw HTML string

    Returns:
        ParsedHtml with title, whitespace-collapsed text and raw hrefs
    """
    soup = BeautifulSoup(_strip_nul(html), "html.parser")

    result = ParsedHtml()
    title_found = False
    chunks: list[str] = []

    # (node, inside a skipped element)
    stack: list[tuple] = [(child, False) for child in reversed(soup.contents)]
    while stack:
        node, skipped = stack.pop()

        if isinstance(node, NavigableString):
            if not skipped and not isinstance(node, NON_TEXT_STRINGS):
                chunks.append(str(node))
            continue

        if not isinstance(node, Tag):
            continue

        name = node.name.lower() if node.name else ""
        if name == "title" and not title_found:
            result.title = node.get_text().strip()
            title_found = True
        elif name == "a":
            href = node.get("href")
            if isinstance(href, list):
                href = href[0] if href else None
            if href is not None:
                result.hrefs.append(href)

        child_skipped = skipped or name in SKIP_TEXT_TAGS
        stack.extend((child, child_skipped) for child in reversed(node.contents))

    result.text = re.sub(r"\s+", " ", " ".join(chunks)).strip()
    return result


def resolve_links(base_url: str, hrefs: list[str]) -> list[str]:
    """
    Resolve hrefs against base_url into absolute links.

    Empty and non-navigable hrefs (no scheme or no host after resolution)
    are dropped. Repeats within the page are collapsed, keeping first
    occurrence order.
    """
    urls: dict[str, None] = {}
    for href in hrefs:
        u = resolve_url(base_url, href)
        if u:
            urls.setdefault(u, None)
    return list(urls)
