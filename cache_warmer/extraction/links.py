"""
Anchor extraction via BeautifulSoup.
"""

from bs4 import BeautifulSoup

from cache_warmer.core.models import ParseResult
from cache_warmer.utils.log import describe_exception

try:
    import lxml  # noqa: F401
    _BS4_PARSER = "lxml"
except ImportError:
    _BS4_PARSER = "html.parser"


def parse_hrefs(html: str) -> ParseResult:
    """
    Return the ``href`` of every ``<a>`` tag in *html*, in document order.

    Hrefs are returned raw; resolving and filtering them is the caller's
    job.  A document the parser cannot handle yields an empty result with
    ``error`` set.
    """
    try:
        soup = BeautifulSoup(html, _BS4_PARSER)
        hrefs = []
        for anchor in soup.find_all("a", href=True):
            href = anchor.get("href")
            if isinstance(href, list):
                href = " ".join(href)
            if href:
                hrefs.append(href)
    except Exception as exc:
        return ParseResult(error=describe_exception(exc))
    return ParseResult(hrefs=hrefs)


def extract_hrefs(html: str) -> list[str]:
    """Like :func:`parse_hrefs` but returns only the hrefs."""
    return parse_hrefs(html).hrefs
