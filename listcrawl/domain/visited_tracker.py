import threading
from typing import Set


class VisitedTracker:
    """
    Tracks which absolute URLs have been claimed during a crawl.

    The only mutation is `claim`, an atomic check-and-insert. There is no
    separate "mark" call so two workers can never both see a URL as new.
    Entries are never evicted; the set lives for the whole crawl.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._visited: Set[str] = set()

    def claim(self, url: str) -> bool:
        """Claim `url` for processing.

        Returns True if the URL was newly claimed, False if it was already
        claimed and the caller must not process it again.
        """
        with self._lock:
            if url in self._visited:
                return False
            self._visited.add(url)
            return True

    def __contains__(self, url: str) -> bool:
        with self._lock:
            return url in self._visited

    def __len__(self) -> int:
        with self._lock:
            return len(self._visited)
