"""Crawl result data model."""
from typing import NamedTuple


class CrawlResult(NamedTuple):
    """Result of a crawl operation.

    Lets callers and tests see what happened without the crawler printing
    a summary of its own.
    """
    directories_walked: int
    """Number of listing pages fetched and walked, root included"""

    files_downloaded: int
    """Number of file candidates downloaded (or printed, when simulating)"""

    files_failed: int
    """Number of file candidates whose download failed"""

    stopped: bool
    """True if the crawl stopped early (stop event or visited-count bound)"""
