"""
Decides which links of a fetched page are worth crawling next.

Pure functions only: no network, no parsing, no shared state.
"""

from collections.abc import Iterable

from cache_warmer.utils.url import normalize_link


def plan_children(page_url: str, hrefs: Iterable[str]) -> list[str]:
    """
    Reduce the raw *hrefs* of *page_url* to canonical same-site URLs.

    Duplicates within the page are removed case-insensitively; the first
    occurrence wins and document order is preserved.
    """
    seen: set[str] = set()
    children: list[str] = []
    for href in hrefs:
        url = normalize_link(page_url, href)
        if url is None:
            continue
        key = url.casefold()
        if key in seen:
            continue
        seen.add(key)
        children.append(url)
    return children
