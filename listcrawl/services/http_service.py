import requests
from typing import Callable, Optional

from listcrawl.domain.http_response import HttpResponse
from listcrawl.exceptions import HttpFetchError


class HttpService:
    """
    HTTP client wrapper for listing pages and file downloads.

    Requires http_client callable (normally `requests.get`) so tests can pass
    a mock instead of patching. Every request carries `timeout`; transport
    failures, timeouts included, are raised as HttpFetchError.
    """

    def __init__(self, http_client: Callable, user_agent: Optional[str] = None, timeout: float = 10):
        self.http_client = http_client
        self.user_agent = user_agent
        self.timeout = timeout

    def _headers(self) -> dict:
        # No custom headers unless a User-Agent was configured.
        if self.user_agent:
            return {"User-Agent": self.user_agent}
        return {}

    def fetch(self, url: str) -> HttpResponse:
        """Fetch URL and return response with status code, body text, and Content-Type."""
        try:
            resp = self.http_client(url, headers=self._headers(), timeout=self.timeout)
            text = resp.text
        except requests.exceptions.RequestException as e:
            raise HttpFetchError(url, e) from e

        ct = None
        if hasattr(resp, 'headers'):
            ct = resp.headers.get('Content-Type')

        return HttpResponse(url, resp.status_code, text, ct)

    def stream(self, url: str):
        """Start a streamed GET and return the open response.

        The caller owns the response and must close it (it is a context manager).
        """
        try:
            return self.http_client(url, headers=self._headers(), timeout=self.timeout, stream=True)
        except requests.exceptions.RequestException as e:
            raise HttpFetchError(url, e) from e
