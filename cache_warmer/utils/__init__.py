"""Utility helpers for URL normalisation and logging."""

from cache_warmer.utils.url import crawl_key, ensure_scheme, is_cacheable_path, normalize_link
from cache_warmer.utils.log import describe_exception, setup_logging, log

__all__ = [
    "crawl_key",
    "ensure_scheme",
    "is_cacheable_path",
    "normalize_link",
    "describe_exception",
    "setup_logging",
    "log",
]
