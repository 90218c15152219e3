"""Core crawl engine – models, visited set, fetcher and recursive crawler."""

from cache_warmer.core.models import CrawlOutcome, CrawlTarget, PageResult, ParseResult
from cache_warmer.core.visited import VisitedSet
from cache_warmer.core.fetcher import Fetcher
from cache_warmer.core.frontier import plan_children
from cache_warmer.core.crawler import SiteCrawler, crawl_sites

__all__ = [
    "CrawlOutcome",
    "CrawlTarget",
    "PageResult",
    "ParseResult",
    "VisitedSet",
    "Fetcher",
    "plan_children",
    "SiteCrawler",
    "crawl_sites",
]
