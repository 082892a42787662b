import logging

from listcrawl.domain.crawl_context import CrawlContext

logger = logging.getLogger(__name__)


class CrawlPolicy:
    """Encapsulates crawl decision rules: depth bound, visited-count bound and the download filter.

    Separates policy decisions from crawl orchestration logic.
    """

    def should_skip_due_to_depth(self, url: str, depth: int, context: CrawlContext) -> bool:
        """Check if a directory at `depth` is deeper than the configured bound."""
        max_depth = context.config.max_depth
        if max_depth is not None and depth > max_depth:
            logger.info("Skipping (max depth %s reached) %s", max_depth, url)
            return True
        return False

    def should_stop_due_to_visited_limit(self, context: CrawlContext) -> bool:
        """Check if the crawl has claimed as many URLs as it is allowed to."""
        max_urls = context.config.max_urls
        if max_urls is None:
            return False
        if context.visited_count() >= max_urls:
            if not context.is_stopped():
                logger.warning("Visited-URL limit of %s reached; stopping crawl", max_urls)
            return True
        return False

    def should_skip_due_to_filter(self, url: str, context: CrawlContext) -> bool:
        """Check if a file candidate's absolute URL fails the configured filter."""
        pattern = context.config.filter_pattern
        if pattern is None:
            return False
        if pattern.search(url) is None:
            logger.debug("Skipping (filter) %s", url)
            return True
        return False
