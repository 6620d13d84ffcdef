"""
dbxcore - Download Operations Module

Implements file downloads (whole, to disk, resumed) and thumbnail retrieval.
Streaming bodies are handed to the caller as DownloadStream objects.

Author: dbxcore Project
"""

import logging
import os
from typing import Optional

from dbxcore.api import DropboxAPI
from dbxcore.codec import decode_entry_header
from dbxcore.constants import METADATA_HEADER
from dbxcore.exceptions import DropboxRequestError, DropboxUnsupportedMediaError
from dbxcore.models import DownloadStream, Entry, ThumbnailFormat, ThumbnailSize

# Configure logging
logger = logging.getLogger(__name__)


class DownloadOperations:
    """
    Handles file and thumbnail downloads.

    Responsibilities:
    - Open streaming downloads, optionally from a byte offset
    - Write downloads to local files, removing partial files on failure
    - Resume interrupted downloads by appending to the local file
    - Fetch thumbnails and their metadata
    """

    def __init__(self, api_client: DropboxAPI):
        """
        Initialize download operations handler.

        Args:
            api_client: DropboxAPI instance for server communication
        """
        self.api = api_client

    def download(self, src: str, rev: str = "", offset: int = 0) -> DownloadStream:
        """
        Open the file located at src.

        Args:
            src: Path of the file
            rev: Specific revision, empty for the latest
            offset: Byte offset to start from when resuming an interrupted download

        Returns:
            DownloadStream the caller must close

        Raises:
            DropboxNotFoundError: If the file does not exist
        """
        url = self.api.build_url(self.api.config.api_content_url, self.api.root_path("files", src))
        params = {"rev": rev} if rev else None
        headers = {"Range": f"bytes={offset}-"} if offset else None

        logger.debug(f"Downloading {src} from offset {offset}")
        response = self.api.open_stream(url, params=params, headers=headers)
        return DownloadStream(response)

    def download_to_file(self, src: str, dst: str, rev: str = ""):
        """
        Download src into the local file dst, truncating it first.

        If anything fails, the partially written dst is removed.
        """
        logger.info(f"Downloading {src} to {dst}")
        f = open(dst, 'wb')
        try:
            with self.download(src, rev) as stream:
                for chunk in stream.iter_content():
                    f.write(chunk)
        except Exception:
            f.close()
            logger.warning(f"Download of {src} failed, removing {dst}")
            os.remove(dst)
            raise
        f.close()

    def download_to_file_resume(self, src: str, dst: str, rev: str = ""):
        """
        Continue downloading src into dst from the size dst already has.

        Partial content is kept on failure so the next call resumes from it.
        """
        with open(dst, 'ab') as f:
            offset = f.tell()
            logger.info(f"Resuming download of {src} to {dst} at byte {offset}")
            try:
                stream = self.download(src, rev, offset)
            except DropboxRequestError as e:
                if e.status_code == 416:
                    logger.info(f"{dst} is already complete")
                    return
                raise
            with stream:
                for chunk in stream.iter_content():
                    f.write(chunk)

    def thumbnails(self, src: str, format: str = "", size: str = "") -> DownloadStream:
        """
        Get a thumbnail for an image.

        Args:
            src: Path of the image
            format: "jpeg" (default) or "png"
            size: "xs", "s" (default), "m", "l" or "xl"

        Returns:
            DownloadStream whose `entry` holds the image metadata

        Raises:
            DropboxUnsupportedMediaError: If format or size is invalid (nothing is
                sent), or the image cannot be converted
            DropboxNotFoundError: If the image does not exist
        """
        try:
            format = ThumbnailFormat(format or "jpeg").value
        except ValueError:
            raise DropboxUnsupportedMediaError(f"unsupported format '{format}' must be jpeg or png")
        try:
            size = ThumbnailSize(size or "s").value
        except ValueError:
            raise DropboxUnsupportedMediaError(f"unsupported size '{size}' must be xs, s, m, l or xl")

        url = self.api.build_url(self.api.config.api_content_url, self.api.root_path("thumbnails", src))
        logger.debug(f"Fetching {size} {format} thumbnail of {src}")
        response = self.api.open_stream(url, params={"format": format, "size": size})
        try:
            entry = decode_entry_header(response.headers.get(METADATA_HEADER))
        except Exception:
            response.close()
            raise
        return DownloadStream(response, entry)

    def thumbnails_to_file(self, src: str, dst: str, format: str = "", size: str = "") -> Optional[Entry]:
        """
        Write the thumbnail of src into the local file dst.

        If anything fails, the partially written dst is removed.

        Returns:
            Metadata of the source image
        """
        logger.info(f"Saving thumbnail of {src} to {dst}")
        f = open(dst, 'wb')
        try:
            with self.thumbnails(src, format, size) as stream:
                for chunk in stream.iter_content():
                    f.write(chunk)
        except Exception:
            f.close()
            logger.warning(f"Thumbnail of {src} failed, removing {dst}")
            os.remove(dst)
            raise
        f.close()
        return stream.entry
