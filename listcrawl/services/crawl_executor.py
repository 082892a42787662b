import logging
import threading
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from typing import Callable, List, NamedTuple, Optional

from listcrawl.domain.config import CrawlerConfig
from listcrawl.domain.crawl_context import CrawlContext
from listcrawl.domain.crawl_result import CrawlResult
from listcrawl.domain.link import LinkKind, ResolvedLink
from listcrawl.exceptions import DownloadError, HttpFetchError, InvalidResponseError
from listcrawl.services.page_fetcher import Fetcher
from listcrawl.services.url_resolver import UrlResolver

logger = logging.getLogger(__name__)

_EXHAUSTED = object()


class DirectoryTask(NamedTuple):
    """A fetched listing page waiting to be walked."""
    url: str
    links: List[str]
    depth: int


class CrawlExecutor:
    """Executes a crawl given configured collaborators.

    This class owns the crawl control-flow (traversal, claim checks, directory
    fetches and downloads). It does NOT construct dependencies (that stays in
    the DI layer).

    With `workers == 1` listing pages are walked depth-first in document order
    using an explicit stack. With more workers each directory becomes a task on
    a bounded thread pool; the visited tracker keeps both schedules free of
    duplicate fetches and downloads.
    """

    def __init__(
        self,
        *,
        page_fetcher: Fetcher,
        link_extractor,
        crawl_policy,
        downloader_factory: Callable,
        resolver_factory: Callable[[str, str], UrlResolver] = UrlResolver,
    ):
        self.page_fetcher = page_fetcher
        self.link_extractor = link_extractor
        self.crawl_policy = crawl_policy
        self.downloader_factory = downloader_factory
        self.resolver_factory = resolver_factory

    def fetch_links(self, url: str) -> List[str]:
        """Fetch a listing page and return its raw links.

        Raises HttpFetchError or InvalidResponseError if the page cannot be fetched.
        """
        body = self.page_fetcher.fetch(url)
        return self.link_extractor.extract_links(body)

    def crawl(self, config: CrawlerConfig, stop_event: Optional[threading.Event] = None) -> CrawlResult:
        """Crawl the listing tree under `config.root_url`.

        A failure to fetch the root page propagates to the caller; every later
        failure is logged and the crawl continues.
        """
        if config is None:
            raise ValueError("config is required for crawl")
        context = CrawlContext(config, stop_event=stop_event)
        resolver = self.resolver_factory(config.origin, config.file_type)
        downloader = self.downloader_factory(simulate=config.simulate)

        context.claim(config.root_url)
        links = self.fetch_links(config.root_url)
        context.increment_directories()
        root = DirectoryTask(config.root_url, links, 0)
        logger.debug("Root %s has %d links", config.root_url, len(links))

        if config.workers > 1:
            self._walk_concurrently(root, resolver, downloader, context)
        else:
            self._walk(root, resolver, downloader, context)
        return context.result()

    def _walk(self, root: DirectoryTask, resolver, downloader, context: CrawlContext) -> None:
        stack = [(root, iter(root.links))]
        while stack:
            if context.is_stopped():
                logger.info("Crawl stopped with %d directories pending", len(stack))
                return
            task, links = stack[-1]
            raw = next(links, _EXHAUSTED)
            if raw is _EXHAUSTED:
                stack.pop()
                continue
            child = self.visit_link(raw, task, resolver, downloader, context)
            if child is not None:
                stack.append((child, iter(child.links)))

    def _walk_concurrently(self, root: DirectoryTask, resolver, downloader, context: CrawlContext) -> None:
        workers = context.config.workers
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="listcrawl") as pool:
            pending = {pool.submit(self._walk_directory, root, resolver, downloader, context)}
            while pending:
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    for child in future.result():
                        if context.is_stopped():
                            break
                        pending.add(pool.submit(self._walk_directory, child, resolver, downloader, context))

    def _walk_directory(self, task: DirectoryTask, resolver, downloader, context: CrawlContext) -> List[DirectoryTask]:
        """Walk one listing page; return the subdirectories it fetched for further walking."""
        children = []
        for raw in task.links:
            if context.is_stopped():
                break
            child = self.visit_link(raw, task, resolver, downloader, context)
            if child is not None:
                children.append(child)
        return children

    def visit_link(self, raw: str, task: DirectoryTask, resolver, downloader, context: CrawlContext) -> Optional[DirectoryTask]:
        """Resolve, claim and act on one raw link found on `task`'s page.

        Returns a DirectoryTask when the link was a directory whose page was
        fetched successfully, otherwise None.
        """
        link = resolver.resolve(raw, task.url)
        if link.kind.is_skipped:
            return None
        if self.crawl_policy.should_stop_due_to_visited_limit(context):
            context.mark_stopped()
            return None
        if not context.claim(link.url):
            logger.debug("Skipping (visited) %s", link.url)
            return None

        if link.kind is LinkKind.DIRECTORY:
            return self._enter_directory(link.url, task.depth + 1, context)
        if link.kind is LinkKind.FILE_CANDIDATE:
            self._download(link, downloader, context)
        return None

    def _enter_directory(self, url: str, depth: int, context: CrawlContext) -> Optional[DirectoryTask]:
        if self.crawl_policy.should_skip_due_to_depth(url, depth, context):
            return None
        try:
            links = self.fetch_links(url)
        except (HttpFetchError, InvalidResponseError) as e:
            logger.warning("Failed to get %s: %s", url, e)
            return None
        context.increment_directories()
        return DirectoryTask(url, links, depth)

    def _download(self, link: ResolvedLink, downloader, context: CrawlContext) -> None:
        if self.crawl_policy.should_skip_due_to_filter(link.url, context):
            return
        config = context.config
        if config.simulate:
            logger.debug("Would download %s", link.url)
        else:
            logger.info("Downloading %s ...", link.raw)
        try:
            downloader.download(link.url, link.raw, config.output_dir)
        except (HttpFetchError, InvalidResponseError, DownloadError) as e:
            logger.warning("Failed %s: %s", link.url, e)
            context.record_download(False)
            return
        if not config.simulate:
            logger.info("DONE %s", link.raw)
        context.record_download(True)
