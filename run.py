import argparse
import logging
import os
import sys
from typing import Optional

from listcrawl.configs import load_config_file
from listcrawl.container import Container
from listcrawl.domain.config import CrawlerConfig
from listcrawl.exceptions import ConfigError, HttpFetchError, InvalidResponseError

logger = logging.getLogger("listcrawl")

EXIT_OK = 0
EXIT_ROOT_FAILED = 1
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="listcrawl",
        description="Recursively crawl directory-listing pages and download matching files.",
    )
    parser.add_argument("--root", help="Root web URL to crawl")
    parser.add_argument("--filetype", help="File suffix to look for (default: .zip)")
    parser.add_argument("--filter", help="Regex applied to the absolute URL of each candidate file")
    parser.add_argument("--output", help="Output directory (default: current directory)")
    parser.add_argument("-s", "--simulate", action="store_true", default=None,
                        help="Simulate: just print the URLs that would be downloaded")
    parser.add_argument("--max-depth", type=int, help="Deepest directory level to walk (root is 0)")
    parser.add_argument("--max-urls", type=int, help="Stop after claiming this many URLs")
    parser.add_argument("--workers", type=int, help="Directories to walk concurrently")
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds")
    parser.add_argument("--config", help="YAML file with crawl options")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        stream=sys.stdout,
        format="%(message)s" if not verbose else "%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def resolve_options(args: argparse.Namespace, container: Container) -> dict:
    """Merge CLI flags over the config file over environment defaults."""
    file_opts = load_config_file(args.config) if args.config else {}
    env = container.config

    def pick(flag_value, key, default):
        if flag_value is not None:
            return flag_value
        if key in file_opts:
            return file_opts[key]
        return default

    return {
        "root_url": pick(args.root, "root", None),
        "file_type": pick(args.filetype, "filetype", env.LISTCRAWL_FILETYPE()),
        "filter_pattern": pick(args.filter, "filter", None),
        "output_dir": pick(args.output, "output", env.LISTCRAWL_OUTPUT_DIR()),
        "simulate": pick(args.simulate, "simulate", False),
        "max_depth": pick(args.max_depth, "max_depth", env.LISTCRAWL_MAX_DEPTH()),
        "max_urls": pick(args.max_urls, "max_urls", env.LISTCRAWL_MAX_URLS()),
        "workers": pick(args.workers, "workers", env.LISTCRAWL_WORKERS()),
        "timeout": pick(args.timeout, "timeout", env.HTTP_TIMEOUT()),
    }


def main(argv: Optional[list] = None, container: Optional[Container] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    container = container or Container()

    try:
        options = resolve_options(args, container)
        timeout = float(options.pop("timeout"))
        if timeout <= 0:
            raise ConfigError(f"timeout must be > 0, got {timeout}")
        container.config.HTTP_TIMEOUT.from_value(timeout)
        crawler_config = CrawlerConfig.from_options(**options)
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        return EXIT_CONFIG_ERROR

    if not crawler_config.root_url.endswith("/"):
        logger.warning("Root URL %s does not end in '/'; relative links are appended to it as-is", crawler_config.root_url)

    if not crawler_config.simulate:
        try:
            os.makedirs(crawler_config.output_dir, exist_ok=True)
        except OSError as e:
            logger.error("Cannot create output directory %s: %s", crawler_config.output_dir, e)
            return EXIT_CONFIG_ERROR

    executor = container.crawl_executor()
    try:
        result = executor.crawl(crawler_config)
    except (HttpFetchError, InvalidResponseError) as e:
        logger.error("Failed to get root page: %s", e)
        return EXIT_ROOT_FAILED
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return EXIT_INTERRUPTED

    logger.debug("Crawl finished: %s", result)
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
