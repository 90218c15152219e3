"""
HTTP session creation for the cache warmer.

One ``requests.Session`` is shared by every crawl thread of a run.  It
keeps connections alive per host and never retries: a failed page is
reported once and left alone.

Per-level thread pools mean the number of in-flight requests to one host
can exceed any fixed pool size.  urllib3 still serves those requests on
extra connections, but discards them afterwards and logs "Connection pool
is full"; :func:`session_for` sizes the pool from the worker count so this
only happens under deep, wide fan-out.
"""

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from cache_warmer.config import POOL_MAXSIZE, USER_AGENT, CrawlSettings


def build_session(verify_ssl: bool = True, pool_maxsize: int = POOL_MAXSIZE) -> requests.Session:
    """Return a ``requests.Session`` with keep-alive pooling and retries
    disabled."""
    session = requests.Session()
    retry = Retry(total=0, raise_on_status=False)
    adapter = HTTPAdapter(
        max_retries=retry,
        pool_connections=pool_maxsize,
        pool_maxsize=pool_maxsize,
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = verify_ssl
    session.headers.update({
        "User-Agent": USER_AGENT,
        "Accept": (
            "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
        ),
        "Accept-Language": "en-US,en;q=0.9",
        "Accept-Encoding": "gzip, deflate",
        "Connection": "keep-alive",
    })
    return session


def session_for(settings: CrawlSettings) -> requests.Session:
    """Build the shared session for a run, with a per-host pool at least as
    large as ``settings.max_workers``."""
    return build_session(
        verify_ssl=settings.verify_ssl,
        pool_maxsize=max(POOL_MAXSIZE, settings.max_workers),
    )
