"""
cache_warmer
============
Bounded, concurrent crawler that pre-warms a caching layer by touching
every same-site page reachable from one or more seed URLs.

Package structure
-----------------
cache_warmer/
├── __init__.py       – package init and public API
├── config.py         – configuration constants and settings
├── session.py        – requests.Session factory
├── cli.py            – argparse CLI (``python -m cache_warmer``)
├── core/             – crawl engine
│   ├── models.py     – CrawlTarget, PageResult, ParseResult, CrawlOutcome
│   ├── visited.py    – thread-safe VisitedSet
│   ├── fetcher.py    – single-page GET with bypass key
│   ├── frontier.py   – pure link planning
│   └── crawler.py    – SiteCrawler and crawl_sites
├── extraction/       – anchor extraction via BeautifulSoup
└── utils/            – URL normalisation and logging

Quick start
-----------
    from cache_warmer import CrawlSettings, crawl_sites

    settings = CrawlSettings(max_depth=3, parallel=True)
    outcomes = crawl_sites(["example.com"], settings)
"""

__version__ = "1.0.0"

from .config import CrawlSettings
from .core import (
    CrawlOutcome,
    CrawlTarget,
    Fetcher,
    PageResult,
    SiteCrawler,
    VisitedSet,
    crawl_sites,
    plan_children,
)
from .extraction import extract_hrefs
from .utils import normalize_link

__all__ = [
    "CrawlSettings",
    "CrawlOutcome",
    "CrawlTarget",
    "Fetcher",
    "PageResult",
    "SiteCrawler",
    "VisitedSet",
    "crawl_sites",
    "plan_children",
    "extract_hrefs",
    "normalize_link",
]
