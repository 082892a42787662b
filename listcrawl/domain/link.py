from enum import Enum
from typing import NamedTuple, Optional


class LinkKind(Enum):
    MALFORMED = "malformed"
    SKIP_ROOT = "skip_root"
    SKIP_PARENT = "skip_parent"
    DIRECTORY = "directory"
    FILE_CANDIDATE = "file_candidate"
    IGNORED = "ignored"

    @property
    def is_skipped(self) -> bool:
        """True for kinds that are dropped before reaching the visited tracker."""
        return self in (LinkKind.MALFORMED, LinkKind.SKIP_ROOT, LinkKind.SKIP_PARENT)


class ResolvedLink(NamedTuple):
    """A raw link from a listing page together with its absolute URL and classification.

    `url` is None for links dropped before resolution (malformed, root or parent links).
    """
    raw: str
    url: Optional[str]
    kind: LinkKind

    def __repr__(self):
        return f"<ResolvedLink {self.kind.value} raw={self.raw!r} url={self.url}>"
