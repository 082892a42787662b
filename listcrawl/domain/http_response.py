from typing import NamedTuple, Optional


class HttpResponse(NamedTuple):
    """Response from an HTTP GET: requested URL, status code, decoded body and Content-Type."""
    url: str
    status_code: int
    text: str
    content_type: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status_code == 200
