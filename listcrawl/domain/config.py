from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import urlsplit

from listcrawl.exceptions import ConfigError

DEFAULT_FILE_TYPE = ".zip"
DEFAULT_OUTPUT_DIR = "."
DEFAULT_MAX_DEPTH = 32
DEFAULT_MAX_URLS = 100_000


def origin_of(root_url: str) -> str:
    """Return `scheme://host[:port]` for an absolute http(s) URL.

    Raises ConfigError if the URL is not absolute or not http(s).
    """
    try:
        parts = urlsplit(root_url)
        parts.port
    except ValueError as e:
        raise ConfigError(f"Invalid root URL {root_url!r}: {e}") from e
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigError(f"Invalid root URL {root_url!r}: expected an absolute http(s) URL")
    return f"{parts.scheme}://{parts.netloc}"


def compile_filter(pattern: Optional[str]) -> Optional[re.Pattern]:
    if pattern is None or pattern == "":
        return None
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigError(f"Failed to compile filter {pattern!r}: {e}") from e


@dataclass(frozen=True)
class CrawlerConfig:
    """Immutable crawl settings, built once at startup and passed into the crawl.

    `origin` is derived from `root_url` on construction; construction fails with
    ConfigError when the root URL or the numeric bounds are invalid.
    """

    root_url: str
    file_type: str = DEFAULT_FILE_TYPE
    filter_pattern: Optional[re.Pattern] = None
    output_dir: str = DEFAULT_OUTPUT_DIR
    simulate: bool = False
    max_depth: Optional[int] = DEFAULT_MAX_DEPTH
    max_urls: Optional[int] = DEFAULT_MAX_URLS
    workers: int = 1
    origin: str = field(init=False)

    def __post_init__(self):
        if not self.root_url:
            raise ConfigError("A root URL is required")
        object.__setattr__(self, "origin", origin_of(self.root_url))
        if not self.file_type:
            raise ConfigError("file type suffix must not be empty")
        if self.max_depth is not None and self.max_depth < 0:
            raise ConfigError(f"max_depth must be >= 0, got {self.max_depth}")
        if self.max_urls is not None and self.max_urls <= 0:
            raise ConfigError(f"max_urls must be > 0, got {self.max_urls}")
        if self.workers < 1:
            raise ConfigError(f"workers must be >= 1, got {self.workers}")

    @classmethod
    def from_options(
        cls,
        *,
        root_url: Optional[str],
        file_type: Optional[str] = None,
        filter_pattern: Optional[str] = None,
        output_dir: Optional[str] = None,
        simulate: bool = False,
        max_depth: Optional[int] = DEFAULT_MAX_DEPTH,
        max_urls: Optional[int] = DEFAULT_MAX_URLS,
        workers: int = 1,
    ) -> "CrawlerConfig":
        """Build a config from plain option values (CLI, YAML or env)."""
        return cls(
            root_url=root_url or "",
            file_type=file_type or DEFAULT_FILE_TYPE,
            filter_pattern=compile_filter(filter_pattern),
            output_dir=output_dir or DEFAULT_OUTPUT_DIR,
            simulate=bool(simulate),
            max_depth=max_depth,
            max_urls=max_urls,
            workers=int(workers),
        )

    def __repr__(self):
        pattern = self.filter_pattern.pattern if self.filter_pattern is not None else None
        return (
            f"<CrawlerConfig root={self.root_url} filetype={self.file_type} "
            f"filter={pattern} output={self.output_dir} simulate={self.simulate}>"
        )
