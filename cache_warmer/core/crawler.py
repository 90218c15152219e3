"""
Depth-bounded recursive crawler that warms a site's cache.

Starting from a seed page, every same-site link is fetched once, recursing
until the configured depth.  Features:

* Atomic claim of each canonical URL so cyclic link graphs terminate
* Sequential (depth-first, document order) or parallel mode
* Per-level thread pools in parallel mode: each page dispatches its
  children to its own pool of ``max_workers`` threads, so the total number
  of in-flight fetches is bounded by link fan-out, not by a global cap
* Branch-local failure handling: a failed page never affects its siblings
  or its parent
"""

import time
from concurrent.futures import ThreadPoolExecutor
from collections.abc import Iterable

import requests

from cache_warmer.config import (
    DEFAULT_MAX_DEPTH,
    CrawlSettings,
    auto_concurrency,
)
from cache_warmer.core.fetcher import Fetcher
from cache_warmer.core.frontier import plan_children
from cache_warmer.core.models import CrawlOutcome, CrawlTarget
from cache_warmer.core.visited import VisitedSet
from cache_warmer.extraction.links import parse_hrefs
from cache_warmer.session import session_for
from cache_warmer.utils.log import describe_exception, log
from cache_warmer.utils.url import crawl_key, ensure_scheme


class SiteCrawler:
    """
    Crawls one site at a time.

    A fresh :class:`VisitedSet` is created by :meth:`process_site` for every
    seed, so a single instance can be reused across sites.  The fetcher may
    be any object with a ``fetch(url) -> PageResult`` method.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        max_depth: int = DEFAULT_MAX_DEPTH,
        parallel: bool = True,
        max_workers: int = 0,
    ) -> None:
        if max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        self.fetcher = fetcher
        self.max_depth = max_depth
        self.parallel = parallel
        self.max_workers = max_workers if max_workers > 0 else auto_concurrency()
        self.visited = VisitedSet()

    @classmethod
    def from_settings(
        cls,
        settings: CrawlSettings,
        session: requests.Session | None = None,
    ) -> "SiteCrawler":
        """Build a crawler with a real HTTP fetcher configured by *settings*."""
        if session is None:
            session = session_for(settings)
        fetcher = Fetcher(session, settings.bypass_key, timeout=settings.timeout)
        return cls(
            fetcher,
            max_depth=settings.max_depth,
            parallel=settings.parallel,
            max_workers=settings.max_workers,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def process_site(self, site: str) -> CrawlOutcome:
        """Crawl *site* and everything reachable from it within the depth
        limit."""
        seed = ensure_scheme(site)
        self.visited = VisitedSet()
        try:
            self.visited.try_claim(crawl_key(seed))
        except ValueError as exc:
            log.error("[ERR] Invalid seed %r: %s", site, describe_exception(exc))
            return CrawlOutcome(seed=seed, success=False)

        log.info("[SITE] Processing %s", seed)
        t0 = time.monotonic()
        success = self.visit(CrawlTarget(seed, 0))
        elapsed = time.monotonic() - t0
        log.info(
            "[SITE] Finished %s: %d page(s) in %.1f s%s",
            seed, len(self.visited), elapsed, "" if success else " (seed failed)",
        )

        return CrawlOutcome(
            seed=seed,
            success=success,
            pages_claimed=len(self.visited),
            elapsed=elapsed,
        )

    def visit(self, target: CrawlTarget) -> bool:
        """
        Fetch *target* and recurse into its unclaimed same-site links.

        The caller must already have claimed ``target.url``.  Returns False
        only when this page itself could not be fetched; failures further
        down the branch are logged but do not change the result.
        """
        try:
            page = self.fetcher.fetch(target.url)
            if not page.ok:
                if page.error is not None:
                    log.warning("[FAIL] %s: %s", target.url, page.error)
                else:
                    log.warning(
                        "[FAIL] %s returned HTTP %d %s",
                        target.url, page.status_code, page.reason,
                    )
                return False

            log.info("[VISIT] %s (%.3f s, depth %d)", target.url, page.elapsed, target.depth)

            if target.depth >= self.max_depth:
                return True

            parsed = parse_hrefs(page.body or "")
            if not parsed.ok:
                log.warning("[PARSE] Could not parse %s: %s", target.url, parsed.error)
                return True

            claimed = [
                url for url in plan_children(target.url, parsed.hrefs)
                if self.visited.try_claim(url)
            ]
            if claimed:
                log.info("[LINKS] Processing %d inner link(s) of %s", len(claimed), target.url)
                self._visit_children(target.child(url) for url in claimed)
            return True
        except Exception as exc:
            log.error("[ERR] %s: %s", target.url, describe_exception(exc))
            log.debug("Traceback for %s", target.url, exc_info=True)
            return False

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _visit_children(self, children: Iterable[CrawlTarget]) -> None:
        if not self.parallel:
            for child in children:
                self.visit(child)
            return

        with ThreadPoolExecutor(
            max_workers=self.max_workers,
            thread_name_prefix="warm",
        ) as pool:
            # visit() never raises, so results need not be inspected
            list(pool.map(self.visit, children))


def crawl_sites(
    sites: Iterable[str],
    settings: CrawlSettings,
    session: requests.Session | None = None,
) -> list[CrawlOutcome]:
    """
    Warm every site in *sites*, each with its own crawler and visited set.

    In parallel mode the sites themselves are also crawled concurrently on
    a pool of ``settings.max_workers`` threads.  Outcomes are returned in
    the order of *sites*.
    """
    seeds = [site.strip() for site in sites if site and site.strip()]
    if session is None:
        session = session_for(settings)

    def _run(site: str) -> CrawlOutcome:
        return SiteCrawler.from_settings(settings, session=session).process_site(site)

    if not settings.parallel:
        return [_run(site) for site in seeds]

    with ThreadPoolExecutor(
        max_workers=settings.max_workers,
        thread_name_prefix="site",
    ) as pool:
        return list(pool.map(_run, seeds))


__all__ = ["SiteCrawler", "crawl_sites"]
