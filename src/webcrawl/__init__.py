"""
webcrawl: shared URL frontier, crawl workers and robots.txt cache
"""

__version__ = "0.1.0"
