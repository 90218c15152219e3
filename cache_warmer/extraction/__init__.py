"""Link extraction from fetched HTML."""

from cache_warmer.extraction.links import extract_hrefs, parse_hrefs

__all__ = ["extract_hrefs", "parse_hrefs"]
