from __future__ import annotations

import logging
from typing import Protocol

from listcrawl.domain.http_response import HttpResponse
from listcrawl.exceptions import InvalidResponseError

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    """Fetch a listing page and return its body text.

    Raises HttpFetchError on transport failure and InvalidResponseError on a
    non-200 status.
    """

    def fetch(self, url: str) -> str: ...


class PageFetcher:
    def __init__(self, http_service):
        self._http_service = http_service

    def fetch(self, url: str) -> str:
        response: HttpResponse = self._http_service.fetch(url)
        if not response.ok:
            raise InvalidResponseError(url, response.status_code)
        logger.debug("Fetched %s (%s, %d bytes)", url, response.content_type, len(response.text))
        return response.text
