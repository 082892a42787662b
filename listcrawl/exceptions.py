"""Custom exceptions for listcrawl services."""


class ConfigError(Exception):
    """Raised when crawl options are missing or invalid. Fatal before crawling starts."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class HttpFetchError(Exception):
    """Raised when an HTTP fetch fails due to network/transport errors."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"HTTP fetch failed for {url}: {original}")


class InvalidResponseError(Exception):
    """Raised when the server answers with a status other than 200."""

    def __init__(self, url: str, status_code: int):
        self.url = url
        self.status_code = status_code
        super().__init__(f"Invalid response for {url}: status {status_code}")


class DownloadError(Exception):
    """Raised when a downloaded body cannot be written to its destination."""

    def __init__(self, url: str, path: str, original: Exception):
        self.url = url
        self.path = path
        self.original = original
        super().__init__(f"Could not write {url} to {path}: {original}")
