"""Domain objects for listcrawl - explicit re-exports to satisfy linters."""
from .config import CrawlerConfig as CrawlerConfig
from .crawl_context import CrawlContext as CrawlContext
from .crawl_result import CrawlResult as CrawlResult
from .link import LinkKind as LinkKind
from .link import ResolvedLink as ResolvedLink
from .visited_tracker import VisitedTracker as VisitedTracker

__all__ = ["CrawlerConfig", "CrawlContext", "CrawlResult", "LinkKind", "ResolvedLink", "VisitedTracker"]
