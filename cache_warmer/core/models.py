"""
Value types passed between the fetcher, the link extractor and the
crawl engine.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CrawlTarget:
    """A page scheduled for a visit at a given recursion depth."""

    url: str
    depth: int = 0

    def __post_init__(self) -> None:
        if self.depth < 0:
            raise ValueError(f"depth must be >= 0, got {self.depth}")

    def child(self, url: str) -> "CrawlTarget":
        return CrawlTarget(url, self.depth + 1)


@dataclass(frozen=True)
class PageResult:
    """Outcome of a single GET.

    ``status_code`` is 0 when no response was received; ``error`` then
    carries the transport failure.
    """

    url: str
    status_code: int = 0
    body: str | None = None
    elapsed: float = 0.0
    error: str | None = None
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None and self.status_code == 200


@dataclass(frozen=True)
class ParseResult:
    """Anchor hrefs found in a page, in document order."""

    hrefs: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class CrawlOutcome:
    """Summary of one seed's crawl, for reporting only."""

    seed: str
    success: bool
    pages_claimed: int = 0
    elapsed: float = 0.0
