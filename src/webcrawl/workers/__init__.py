"""
Crawl worker loop
"""
