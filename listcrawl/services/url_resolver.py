import logging
import re
from urllib.parse import urlsplit, urlunsplit

from listcrawl.domain.link import LinkKind, ResolvedLink

logger = logging.getLogger(__name__)

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class UrlResolver:
    """Resolve and classify raw links found on a listing page.

    The rules are listing-server heuristics, not RFC 3986 resolution:

    - a link that is exactly `/` points at the site root and is skipped;
    - a link the current directory URL ends with is a parent link and is skipped;
    - `/`-prefixed links are joined to the origin, everything else is appended
      to the current directory URL (directory URLs are expected to end in `/`);
    - a link ending in `/` is a directory, one ending in the file type suffix
      is a download candidate, anything else is ignored.

    Replacing this class is the only change needed for a different listing format.
    """

    def __init__(self, origin: str, file_type: str):
        self.origin = origin
        self.file_type = file_type

    def _string_form(self, raw: str):
        """Return the normalized string form of `raw`, or None if it does not parse."""
        if not raw or not raw.isprintable() or any(ch.isspace() for ch in raw):
            return None
        if _BAD_ESCAPE.search(raw):
            return None
        try:
            return urlunsplit(urlsplit(raw))
        except ValueError:
            return None

    def resolve(self, raw: str, directory: str) -> ResolvedLink:
        link = self._string_form(raw)
        if link is None:
            logger.debug("Bad URL: %r", raw)
            return ResolvedLink(raw, None, LinkKind.MALFORMED)
        if link == "/":
            return ResolvedLink(raw, None, LinkKind.SKIP_ROOT)
        if directory.endswith(link):
            logger.debug("Skipping parent: %s", link)
            return ResolvedLink(raw, None, LinkKind.SKIP_PARENT)

        if raw.startswith("/"):
            url = self.origin + raw
        else:
            url = directory + raw

        if raw.endswith("/"):
            kind = LinkKind.DIRECTORY
        elif raw.endswith(self.file_type):
            kind = LinkKind.FILE_CANDIDATE
        else:
            kind = LinkKind.IGNORED
        return ResolvedLink(raw, url, kind)
