import logging
import os
import posixpath
import sys
from typing import Optional, TextIO

import requests

from listcrawl.exceptions import DownloadError, HttpFetchError, InvalidResponseError

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


class Downloader:
    """Download file candidates into a destination directory.

    Files are written to `destination_dir/basename(suggested_name)`. An existing
    file with that name is overwritten, so equal basenames found in different
    directories clobber each other.

    With `simulate=True` no request is made; the URL is printed to `out` instead.
    """

    def __init__(self, http_service, simulate: bool = False, chunk_size: int = DEFAULT_CHUNK_SIZE, out: Optional[TextIO] = None):
        self.http_service = http_service
        self.simulate = simulate
        self.chunk_size = int(chunk_size) if chunk_size and chunk_size > 0 else DEFAULT_CHUNK_SIZE
        self._out = out

    @staticmethod
    def destination_path(suggested_name: str, destination_dir: str) -> str:
        return os.path.join(destination_dir, posixpath.basename(suggested_name))

    def download(self, url: str, suggested_name: str, destination_dir: str) -> Optional[str]:
        """Fetch `url` and write it to disk.

        Returns the written path, or None in simulation mode. Raises
        HttpFetchError, InvalidResponseError or DownloadError on failure.
        """
        if self.simulate:
            print(url, file=self._out if self._out is not None else sys.stdout)
            return None

        path = self.destination_path(suggested_name, destination_dir)
        with self.http_service.stream(url) as resp:
            if resp.status_code != 200:
                raise InvalidResponseError(url, resp.status_code)
            try:
                fout = open(path, "wb")
            except OSError as e:
                raise DownloadError(url, path, e) from e
            try:
                with fout:
                    for chunk in resp.iter_content(chunk_size=self.chunk_size):
                        if chunk:
                            fout.write(chunk)
            except requests.exceptions.RequestException as e:
                self._remove_partial(path)
                raise HttpFetchError(url, e) from e
            except OSError as e:
                self._remove_partial(path)
                raise DownloadError(url, path, e) from e
        logger.debug("Wrote %s -> %s", url, path)
        return path

    def _remove_partial(self, path: str) -> None:
        try:
            os.remove(path)
        except OSError:
            logger.warning("Could not remove partial download %s", path)
