"""Dependency injection container for the application."""
from dependency_injector import containers, providers
import requests

from listcrawl.services.crawl_executor import CrawlExecutor
from listcrawl.services.crawl_policy import CrawlPolicy
from listcrawl.services.downloader import DEFAULT_CHUNK_SIZE, Downloader
from listcrawl.services.http_service import HttpService
from listcrawl.services.link_extractor import LinkExtractor
from listcrawl.services.page_fetcher import PageFetcher
from listcrawl.services.url_resolver import UrlResolver
from listcrawl import config as env


# Environment variables used by the container and the CLI (read via `listcrawl.config` helpers).
#
# Command-line flags and a `--config` YAML file take precedence over these.
#
# USER_AGENT (str | optional)
#   User-Agent header for outbound requests. If unset, no custom header is sent.
#
# HTTP_TIMEOUT (float seconds, default: 10)
#   Timeout for every listing fetch and file download.
#
# LISTCRAWL_FILETYPE (str, default: ".zip")
#   Suffix a link must end with to be downloaded.
#
# LISTCRAWL_OUTPUT_DIR (str, default: ".")
#   Directory downloads are written to.
#
# LISTCRAWL_MAX_DEPTH (int, default: 32)
#   Deepest directory level walked; the root page is depth 0.
#
# LISTCRAWL_MAX_URLS (int, default: 100000)
#   Crawl stops once this many URLs have been claimed.
#
# LISTCRAWL_WORKERS (int, default: 1)
#   Directories walked concurrently. 1 keeps the depth-first, document-order walk.
#
# LISTCRAWL_CHUNK_SIZE (int bytes, default: 65536)
#   Chunk size used when streaming downloads to disk.
ENV = {
    "USER_AGENT": env.get_optional_str_env("USER_AGENT"),
    "HTTP_TIMEOUT": env.get_float_env("HTTP_TIMEOUT", 10.0),
    "LISTCRAWL_FILETYPE": env.get_str_env("LISTCRAWL_FILETYPE", ".zip"),
    "LISTCRAWL_OUTPUT_DIR": env.get_str_env("LISTCRAWL_OUTPUT_DIR", "."),
    "LISTCRAWL_MAX_DEPTH": env.get_int_env("LISTCRAWL_MAX_DEPTH", 32),
    "LISTCRAWL_MAX_URLS": env.get_int_env("LISTCRAWL_MAX_URLS", 100_000),
    "LISTCRAWL_WORKERS": env.get_int_env("LISTCRAWL_WORKERS", 1),
    "LISTCRAWL_CHUNK_SIZE": env.get_int_env("LISTCRAWL_CHUNK_SIZE", DEFAULT_CHUNK_SIZE),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for listcrawl."""

    # Configuration
    config = providers.Configuration(default=ENV)

    # Services - Singleton instances
    http_service = providers.Singleton(
        HttpService,
        http_client=providers.Object(requests.get),
        user_agent=config.USER_AGENT,
        timeout=config.HTTP_TIMEOUT.as_(float),
    )

    page_fetcher = providers.Singleton(
        PageFetcher,
        http_service=http_service,
    )

    link_extractor = providers.Singleton(
        LinkExtractor
    )

    crawl_policy = providers.Singleton(
        CrawlPolicy
    )

    # `simulate` comes from the per-run CrawlerConfig, supplied by the executor.
    downloader = providers.Factory(
        Downloader,
        http_service=http_service,
        chunk_size=config.LISTCRAWL_CHUNK_SIZE.as_(int),
    )

    crawl_executor = providers.Factory(
        CrawlExecutor,
        page_fetcher=page_fetcher,
        link_extractor=link_extractor,
        crawl_policy=crawl_policy,
        downloader_factory=downloader.provider,
        resolver_factory=providers.Object(UrlResolver),
    )
