import re
from typing import List

# Listing servers emit upper-case anchors; anything else is not a listing link.
ANCHOR_PATTERN = re.compile(r'<A HREF="([^"]+)">')


class LinkExtractor:
    """Pull raw link targets out of a listing page.

    A strict textual match on `<A HREF="...">`, not an HTML parse: lower-case
    or single-quoted anchors are not extracted.
    """

    def __init__(self, pattern: re.Pattern = ANCHOR_PATTERN):
        self.pattern = pattern

    def extract_links(self, body: str) -> List[str]:
        if not body:
            return []
        return self.pattern.findall(body)
