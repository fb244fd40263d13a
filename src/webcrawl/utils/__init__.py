"""
Utilities package initialization
"""

from webcrawl.utils.parser import parse_html, resolve_links
from webcrawl.utils.robots import RobotsCache, RobotsRules, parse_robots

__all__ = [
    "parse_html",
    "resolve_links",
    "RobotsCache",
    "RobotsRules",
    "parse_robots",
]
