"""
Thread-safe record of the URLs already dispatched during one site run.
"""

import threading


class VisitedSet:
    """
    Set of canonical URLs with an atomic claim operation.

    Keys are compared case-insensitively.  Entries are never removed; a new
    instance is created for every seed site.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._urls: set[str] = set()

    @staticmethod
    def _key(url: str) -> str:
        return url.casefold()

    def try_claim(self, url: str) -> bool:
        """Record *url* and return True, unless it was already recorded."""
        key = self._key(url)
        with self._lock:
            if key in self._urls:
                return False
            self._urls.add(key)
            return True

    def __contains__(self, url: object) -> bool:
        if not isinstance(url, str):
            return False
        with self._lock:
            return self._key(url) in self._urls

    def __len__(self) -> int:
        with self._lock:
            return len(self._urls)

    def snapshot(self) -> frozenset[str]:
        """Return the claimed keys (case-folded) at this moment."""
        with self._lock:
            return frozenset(self._urls)
