"""
dbxcore - Download Stream Model

Wraps a streaming HTTP response so the caller owns and releases the body.
"""

import logging
from typing import Iterator, Optional

import requests

from dbxcore.exceptions import DropboxTransportError

from .entry import Entry

logger = logging.getLogger(__name__)


class DownloadStream:
    """
    Scoped file body returned by downloads and thumbnails.

    Must be closed by the caller, preferably with a `with` block:

        with downloads.download("/notes.txt") as stream:
            for chunk in stream.iter_content():
                ...
    """

    def __init__(self, response: requests.Response, entry: Optional[Entry] = None):
        """
        Args:
            response: Streaming response whose status was already checked
            entry: Metadata sent alongside the body, if any
        """
        self._response = response
        self.entry = entry
        length = response.headers.get("Content-Length")
        self.length: int = int(length) if length is not None else -1

    @property
    def status_code(self) -> int:
        return self._response.status_code

    def iter_content(self, chunk_size: int = 64 * 1024) -> Iterator[bytes]:
        """
        Yield the body in chunks of at most chunk_size bytes.

        Raises:
            DropboxTransportError: If the connection fails while the body is read
        """
        try:
            for chunk in self._response.iter_content(chunk_size=chunk_size):
                if chunk:
                    yield chunk
        except requests.exceptions.RequestException as e:
            logger.error(f"Download interrupted: {e}")
            raise DropboxTransportError(f"Download interrupted: {e}")

    def read(self) -> bytes:
        """Read the whole remaining body."""
        return b"".join(self.iter_content())

    def close(self):
        self._response.close()
        logger.debug("Download stream closed")

    def __enter__(self) -> "DownloadStream":
        return self

    def __exit__(self, *args):
        self.close()
