import threading
from typing import Optional

from listcrawl.domain.config import CrawlerConfig
from listcrawl.domain.crawl_result import CrawlResult
from listcrawl.domain.visited_tracker import VisitedTracker


class CrawlContext:
    """Per-run state shared by every directory walked in one crawl.

    Holds the immutable config, the visited tracker, the stop signal and the
    progress counters. Counters are lock-protected so directory tasks running
    on a worker pool can update them.
    """

    def __init__(
        self,
        config: CrawlerConfig,
        visited_tracker: Optional[VisitedTracker] = None,
        stop_event: Optional[threading.Event] = None,
    ):
        self.config = config
        self.visited_tracker = visited_tracker if visited_tracker is not None else VisitedTracker()
        self.stop_event = stop_event if stop_event is not None else threading.Event()
        self._lock = threading.Lock()
        self.directories_walked = 0
        self.files_downloaded = 0
        self.files_failed = 0
        self.stopped = False

    def claim(self, url: str) -> bool:
        """Delegate to visited tracker."""
        return self.visited_tracker.claim(url)

    def visited_count(self) -> int:
        return len(self.visited_tracker)

    def increment_directories(self) -> None:
        with self._lock:
            self.directories_walked += 1

    def record_download(self, ok: bool) -> None:
        with self._lock:
            if ok:
                self.files_downloaded += 1
            else:
                self.files_failed += 1

    def is_stopped(self) -> bool:
        return self.stop_event.is_set()

    def mark_stopped(self) -> None:
        with self._lock:
            self.stopped = True
        self.stop_event.set()

    def result(self) -> CrawlResult:
        with self._lock:
            return CrawlResult(
                directories_walked=self.directories_walked,
                files_downloaded=self.files_downloaded,
                files_failed=self.files_failed,
                stopped=self.stopped or self.stop_event.is_set(),
            )
