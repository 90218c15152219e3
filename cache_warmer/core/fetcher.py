"""
Single-page GET for the crawl engine.

Transport errors never escape :meth:`Fetcher.fetch`; they come back as a
:class:`PageResult` with ``error`` set so the engine can treat them like
any other non-200 outcome.
"""

import time

import requests

from cache_warmer.config import DEFAULT_REQUEST_TIMEOUT, USER_AGENT
from cache_warmer.core.models import PageResult
from cache_warmer.utils.log import describe_exception, log


class Fetcher:
    """Issues GET requests that identify themselves with a bypass key."""

    def __init__(
        self,
        session: requests.Session,
        bypass_key: str,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        self.session = session
        self.bypass_key = bypass_key
        self.timeout = timeout
        base_agent = session.headers.get("User-Agent") or USER_AGENT
        self.user_agent = f"{base_agent} {bypass_key}" if bypass_key else base_agent

    def fetch(self, url: str) -> PageResult:
        """GET *url*; the body is only kept for HTTP 200 responses."""
        start = time.monotonic()
        try:
            resp = self.session.get(
                url,
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
                allow_redirects=True,
            )
        except requests.RequestException as exc:
            elapsed = time.monotonic() - start
            log.debug("GET %s failed after %.3f s: %s", url, elapsed, exc)
            return PageResult(
                url=url,
                elapsed=elapsed,
                error=describe_exception(exc),
            )

        with resp:
            body = resp.text if resp.status_code == 200 else None
            return PageResult(
                url=url,
                status_code=resp.status_code,
                body=body,
                elapsed=time.monotonic() - start,
                reason=resp.reason or "",
            )
