"""
URL normalisation and same-site filtering helpers.
"""

import posixpath
import urllib.parse

from cache_warmer.config import (
    CACHEABLE_EXTENSIONS,
    CRAWLABLE_SCHEMES,
    DEFAULT_SCHEME,
    EXCLUDED_PATH_MARKERS,
)
from cache_warmer.utils.log import log


def ensure_scheme(site: str) -> str:
    """Prefix ``http://`` to *site* unless it already names a web scheme."""
    site = site.strip()
    if not site.startswith(("http://", "https://")):
        site = DEFAULT_SCHEME + site
    return site


def _canonical(parts: urllib.parse.SplitResult) -> str:
    """Scheme, host, path and query of *parts*; the fragment is dropped."""
    return urllib.parse.urlunsplit((
        parts.scheme.lower(),
        parts.netloc.lower(),
        parts.path or "/",
        parts.query,
        "",
    ))


def crawl_key(url: str) -> str:
    """Deduplication key for an absolute URL (used to claim seeds)."""
    return _canonical(urllib.parse.urlsplit(url))


def is_cacheable_path(path: str) -> bool:
    """
    Return True for paths worth warming.

    A last segment without a ``.`` is a navigable page; anything else must
    carry one of ``CACHEABLE_EXTENSIONS``.  Paths under an excluded marker
    such as ``/wp-admin/`` are always rejected.
    """
    segment = path.rsplit("/", 1)[-1]
    if segment and "." in segment:
        ext = posixpath.splitext(segment)[1]
        if ext not in CACHEABLE_EXTENSIONS:
            return False
    return not any(marker in path for marker in EXCLUDED_PATH_MARKERS)


def normalize_link(referrer: str, raw_href: str) -> str | None:
    """
    Convert *raw_href* found on *referrer* to a canonical same-site URL.

    Root-relative links are resolved against the referrer; every other link
    must already be absolute.  Returns ``None`` for fragment-only anchors,
    malformed or non-web URLs, other hosts (subdomains included) and
    non-cacheable paths.
    """
    href = raw_href.strip()
    if not href or href.startswith("#"):
        return None

    try:
        if href.startswith("/"):
            href = urllib.parse.urljoin(referrer, href)
        parts = urllib.parse.urlsplit(href)
        host = parts.hostname
        referrer_host = urllib.parse.urlsplit(referrer).hostname
    except ValueError as exc:
        log.debug("[SKIP] Malformed link %r on %s: %s", raw_href, referrer, exc)
        return None

    if parts.scheme.lower() not in CRAWLABLE_SCHEMES or not host:
        log.debug("[SKIP] Not an absolute web link %r on %s", raw_href, referrer)
        return None

    if host != referrer_host:
        return None

    if not is_cacheable_path(parts.path):
        return None

    return _canonical(parts)
