"""
Configuration constants for the cache warmer.
"""

import os
import secrets
import string
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
DEFAULT_MAX_DEPTH = 10
DEFAULT_PARALLEL = True
DEFAULT_REQUEST_TIMEOUT = 100  # seconds per HTTP request
DEFAULT_SCHEME = "http://"

# Seed list and settings can also be supplied via environment variables
ENV_SITES = "CACHE_WARMER_SITES"
ENV_MAX_DEPTH = "CACHE_WARMER_MAX_DEPTH"
ENV_PARALLEL = "CACHE_WARMER_PARALLEL"
ENV_BYPASS_KEY = "CACHE_WARMER_BYPASS_KEY"
ENV_TIMEOUT = "CACHE_WARMER_TIMEOUT"
ENV_CONCURRENCY = "CACHE_WARMER_CONCURRENCY"

# Limits for auto-concurrency calculation
_MIN_WORKERS = 2
_MAX_WORKERS = 64
_RAM_PER_WORKER_MB = 32        # estimated RSS per worker thread


def auto_concurrency() -> int:
    """Calculate the per-level worker count based on available CPU cores
    and system RAM.

    Heuristic:
      * Start with ``cpu_count * 2`` (I/O-bound workload).
      * Cap by available RAM (``free_mb / _RAM_PER_WORKER_MB``).
      * Clamp between ``_MIN_WORKERS`` and ``_MAX_WORKERS``.
    """
    cpus = os.cpu_count() or 2
    workers = cpus * 2

    try:
        with open("/proc/meminfo") as f:
            for line in f:
                if line.startswith("MemAvailable:"):
                    mem_kb = int(line.split()[1])
                    mem_mb = mem_kb // 1024
                    ram_cap = max(1, mem_mb // _RAM_PER_WORKER_MB)
                    workers = min(workers, ram_cap)
                    break
    except (OSError, ValueError):
        pass

    return max(_MIN_WORKERS, min(workers, _MAX_WORKERS))

# ---------------------------------------------------------------------------
# Link filtering
# ---------------------------------------------------------------------------
# Extensions of files worth warming; pages without an extension are always
# followed.  Matched case-sensitively against the last path segment.
CACHEABLE_EXTENSIONS = frozenset({".php", ".htm", ".html", ".aspx", ".js", ".css"})

# Paths containing any of these markers are never crawled
EXCLUDED_PATH_MARKERS = ("/wp-admin/",)

CRAWLABLE_SCHEMES = frozenset({"http", "https"})

# ---------------------------------------------------------------------------
# Request identity
# ---------------------------------------------------------------------------
# The bypass key is appended to this User-Agent so the cache front end can
# recognise warmer traffic.
USER_AGENT = "Mozilla/5.0 (compatible; cache-warmer/1.0)"
BYPASS_KEY_LENGTH = 10
BYPASS_KEY_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits

# Minimum connection pool size per host for the shared requests session;
# raised to the worker count when that is larger
POOL_MAXSIZE = 32

# Values accepted as "true" by env_bool (compared upper-cased)
_TRUTHY = frozenset({"T", "TRUE", "1", "Y", "YES", "O"})


def generate_bypass_key(length: int = BYPASS_KEY_LENGTH) -> str:
    """Return a random alphanumeric token of *length* characters."""
    if length <= 0:
        length = BYPASS_KEY_LENGTH
    return "".join(secrets.choice(BYPASS_KEY_ALPHABET) for _ in range(length))


def env_int(name: str, default: int) -> int:
    """Read an integer environment variable, falling back to *default*
    when it is unset or not a valid integer."""
    raw = os.environ.get(name, "").strip()
    try:
        return int(raw)
    except ValueError:
        return default


def env_float(name: str, default: float) -> float:
    """Read a float environment variable, falling back to *default* when
    it is unset or not a valid number."""
    raw = os.environ.get(name, "").strip()
    try:
        return float(raw)
    except ValueError:
        return float(default)


def env_bool(name: str, default: bool) -> bool:
    """Read a boolean environment variable.

    Blank or unset values yield *default*; otherwise only the values in
    ``_TRUTHY`` count as true.
    """
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    return raw.upper() in _TRUTHY


def env_list(name: str) -> list[str]:
    """Read a comma-separated environment variable, dropping blank entries."""
    raw = os.environ.get(name, "")
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(frozen=True)
class CrawlSettings:
    """Resolved settings for one cache-warming run."""

    max_depth: int = DEFAULT_MAX_DEPTH
    parallel: bool = DEFAULT_PARALLEL
    bypass_key: str = ""
    timeout: float = DEFAULT_REQUEST_TIMEOUT
    max_workers: int = 0
    verify_ssl: bool = True

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        if self.timeout <= 0:
            raise ValueError("timeout must be > 0")
        # Generated once here so every fetch of the run carries the same key
        if not self.bypass_key.strip():
            object.__setattr__(self, "bypass_key", generate_bypass_key())
        if self.max_workers <= 0:
            object.__setattr__(self, "max_workers", auto_concurrency())
