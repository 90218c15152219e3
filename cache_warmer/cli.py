"""
Command-line interface for the cache warmer.
"""

import argparse
import logging
import os
import sys
import time

from cache_warmer.config import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_PARALLEL,
    DEFAULT_REQUEST_TIMEOUT,
    ENV_BYPASS_KEY,
    ENV_CONCURRENCY,
    ENV_MAX_DEPTH,
    ENV_PARALLEL,
    ENV_SITES,
    ENV_TIMEOUT,
    CrawlSettings,
    auto_concurrency,
    env_bool,
    env_float,
    env_int,
    env_list,
)
from cache_warmer.core.crawler import crawl_sites
from cache_warmer.utils.log import setup_logging, log

try:
    import colorlog  # noqa: F401
    _COLORLOG_AVAILABLE = True
except ImportError:
    _COLORLOG_AVAILABLE = False


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="cache-warmer",
        description="Pre-warm a cache by crawling every same-site page "
                    "reachable from the given seed sites.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m cache_warmer example.com\n"
            "  python -m cache_warmer https://example.com blog.example.com --depth 3\n"
            "  python -m cache_warmer example.com --sequential --bypass-key s3cr3t\n"
            f"  {ENV_SITES}=a.test,b.test python -m cache_warmer\n"
        ),
    )
    parser.add_argument(
        "sites", nargs="*",
        help=f"Seed hosts or URLs; http:// is assumed when no scheme is given "
             f"(default: ${ENV_SITES}, comma-separated)",
    )
    parser.add_argument(
        "--depth", type=int,
        default=env_int(ENV_MAX_DEPTH, DEFAULT_MAX_DEPTH),
        help=f"Maximum link depth below each seed (default: {DEFAULT_MAX_DEPTH})",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--parallel", dest="parallel", action="store_true",
        default=env_bool(ENV_PARALLEL, DEFAULT_PARALLEL),
        help="Fetch sibling links concurrently (default)",
    )
    mode.add_argument(
        "--sequential", dest="parallel", action="store_false",
        help="Fetch one page at a time in document order",
    )
    parser.add_argument(
        "--bypass-key",
        default=os.environ.get(ENV_BYPASS_KEY, ""),
        help="Token appended to the User-Agent of every request so the cache "
             "front end can recognise the warmer (default: random)",
    )
    parser.add_argument(
        "--timeout", type=float,
        default=env_float(ENV_TIMEOUT, DEFAULT_REQUEST_TIMEOUT),
        help=f"Per-request timeout in seconds (default: {DEFAULT_REQUEST_TIMEOUT})",
    )
    parser.add_argument(
        "--concurrency",
        default=os.environ.get(ENV_CONCURRENCY, "auto"), metavar="N",
        help="Worker threads per recursion level, or 'auto' to detect "
             "from CPU/RAM (default: auto)",
    )
    parser.add_argument(
        "--no-verify-ssl", dest="verify_ssl", action="store_false", default=True,
        help="Disable TLS certificate verification",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable verbose debug logging (includes rejected links)",
    )
    parser.add_argument(
        "--log-file",
        help="Write detailed logs to this file (always at DEBUG level)",
    )
    return parser.parse_args(argv)


def resolve_concurrency(raw: str) -> int:
    """Turn a ``--concurrency`` value into a worker count."""
    raw = str(raw).strip().lower()
    if raw in ("auto", "0", ""):
        workers = auto_concurrency()
        log.info("Auto-detected concurrency: %d workers per level (CPU: %s, RAM-aware)",
                 workers, os.cpu_count())
        return workers
    try:
        workers = int(raw)
    except ValueError:
        log.warning("Invalid --concurrency value '%s', using auto", raw)
        return auto_concurrency()
    if workers < 1:
        log.warning("--concurrency must be positive, using auto")
        return auto_concurrency()
    return workers


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    setup_logging(debug=args.debug, log_file=args.log_file)

    if args.debug:
        logging.getLogger("urllib3").setLevel(logging.DEBUG)

    if not args.verify_ssl:
        import urllib3
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        log.warning("TLS certificate verification is DISABLED (--no-verify-ssl)")

    if not _COLORLOG_AVAILABLE:
        log.debug("Tip: install colorlog for colored output   (pip install colorlog)")

    sites = args.sites or env_list(ENV_SITES)
    if not sites:
        log.error("No sites given (pass them as arguments or set %s)", ENV_SITES)
        return 2

    try:
        settings = CrawlSettings(
            max_depth=args.depth,
            parallel=args.parallel,
            bypass_key=args.bypass_key,
            timeout=args.timeout,
            max_workers=resolve_concurrency(args.concurrency),
            verify_ssl=args.verify_ssl,
        )
    except ValueError as exc:
        log.error("Invalid settings: %s", exc)
        return 2

    if not args.bypass_key.strip():
        log.info("No bypass key configured; generated one for this run")
    log.info("Sites            : %s", ", ".join(sites))
    log.info("Max depth        : %d", settings.max_depth)
    log.info("Mode             : %s", "parallel" if settings.parallel else "sequential")
    log.info("Workers per level: %d", settings.max_workers)
    log.info("Request timeout  : %.0f s", settings.timeout)

    t0 = time.monotonic()
    outcomes = crawl_sites(sites, settings)
    elapsed = time.monotonic() - t0

    failed = [o.seed for o in outcomes if not o.success]
    log.info(
        "Warmed %d site(s), %d page(s) claimed, %d seed failure(s). Total elapsed time: %.1f s",
        len(outcomes), sum(o.pages_claimed for o in outcomes), len(failed), elapsed,
    )
    for seed in failed:
        log.warning("Seed could not be fetched: %s", seed)
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
