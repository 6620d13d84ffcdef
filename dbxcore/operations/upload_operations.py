"""
dbxcore - Upload Operations Module

Implements whole-file uploads (files_put) and the chunked upload protocol:
a sequence of bounded chunks sent against a server-assigned upload id and
offset, finished by a single commit that names the uploaded file.

Author: dbxcore Project
"""

import logging
import os
from typing import BinaryIO, Callable, Dict, Optional, Tuple

from dbxcore.api import DropboxAPI
from dbxcore.api.dropbox_api import bool_param
from dbxcore.codec import decode_chunk_session, decode_entry
from dbxcore.constants import DEFAULT_CHUNK_SIZE, MAX_PUT_FILE_SIZE
from dbxcore.exceptions import DropboxSizeLimitError
from dbxcore.models import ChunkSession, Entry

# Configure logging
logger = logging.getLogger(__name__)


def clamp_chunk_size(chunk_size: int) -> int:
    """Bring chunk_size into (0, MAX_PUT_FILE_SIZE]; <= 0 means the default."""
    if chunk_size <= 0:
        return DEFAULT_CHUNK_SIZE
    return min(chunk_size, MAX_PUT_FILE_SIZE)


def read_chunk(source: BinaryIO, size: int) -> bytes:
    """
    Read up to size bytes, retrying short reads until size or end of input.

    Streams such as pipes and sockets may return fewer bytes than asked
    without being exhausted; only an empty read marks the end.
    """
    parts = []
    remaining = size
    while remaining > 0:
        data = source.read(remaining)
        if not data:
            break
        parts.append(data)
        remaining -= len(data)
    return b"".join(parts)


class UploadOperations:
    """
    Handles file uploads to the server.

    Responsibilities:
    - Send one chunk of a chunked upload (creating the session if needed)
    - Commit a chunked upload under a destination path
    - Drive a whole chunked upload from a byte source
    - Upload small files in a single request
    """

    def __init__(self, api_client: DropboxAPI):
        """
        Initialize upload operations handler.

        Args:
            api_client: DropboxAPI instance for server communication
        """
        self.api = api_client

    def chunked_upload(self, session: Optional[ChunkSession], source: BinaryIO,
                       chunk_size: int = DEFAULT_CHUNK_SIZE) -> Tuple[ChunkSession, bool]:
        """
        Send the next chunk of source.

        Args:
            session: Session returned by the previous chunk, None to start a new upload
            source: Binary stream to read the chunk from
            chunk_size: Maximum chunk size in bytes, clamped into (0, MAX_PUT_FILE_SIZE]

        Returns:
            Tuple of (session with the new offset, finished). finished is True
            when fewer bytes than chunk_size were read, i.e. source is exhausted
            and the upload is ready to commit.

        Raises:
            DropboxAPIError: If the chunk is rejected or the server is unreachable
        """
        chunk_size = clamp_chunk_size(chunk_size)
        data = read_chunk(source, chunk_size)

        params: Dict[str, str] = {}
        if session is not None:
            params = {"upload_id": session.upload_id, "offset": str(session.offset)}
            logger.debug(f"Sending {len(data)} bytes for upload {session.upload_id} at offset {session.offset}")
        else:
            logger.debug(f"Starting chunked upload with {len(data)} bytes")

        # An empty dict keeps the locale off the chunk endpoint
        reply = self.api.make_request(
            "POST",
            "chunked_upload",
            params,
            base_url=self.api.config.api_content_url,
            data=data,
            headers={"Content-Type": "application/octet-stream"}
        )
        next_session = decode_chunk_session(reply)

        finished = len(data) < chunk_size
        return next_session, finished

    def commit_chunked_upload(self, upload_id: str, dst: str, overwrite: bool = True,
                              parent_rev: str = "") -> Entry:
        """
        Finish a chunked upload by giving the uploaded data a path.

        Args:
            upload_id: Upload id of the completed session
            dst: Destination path
            overwrite: Replace an existing file instead of renaming the upload
            parent_rev: Revision the upload is based on; a mismatch is reported by the server

        Returns:
            Metadata of the committed file
        """
        params = {
            "locale": self.api.config.locale,
            "upload_id": upload_id,
            "overwrite": bool_param(overwrite)
        }
        if parent_rev:
            params["parent_rev"] = parent_rev

        logger.info(f"Committing upload {upload_id} to {dst}")
        reply = self.api.make_request(
            "POST",
            self.api.root_path("commit_chunked_upload", dst),
            params,
            base_url=self.api.config.api_content_url
        )
        return decode_entry(reply)

    def upload_by_chunk(self, source: BinaryIO, chunk_size: int, dst: str, overwrite: bool = True,
                        parent_rev: str = "", progress_callback: Optional[Callable] = None) -> Entry:
        """
        Upload everything readable from source to dst, chunk_size bytes at a time.

        An empty source still opens a session with one empty chunk, so the
        commit creates an empty file.

        Args:
            source: Binary stream to upload
            chunk_size: Chunk size in bytes (<= 0 for the default)
            dst: Destination path
            overwrite: Replace an existing file
            parent_rev: Revision the upload is based on
            progress_callback: Optional callback for progress updates
                             Called with (message: str, current: int, total: int)
                             where total is 0 because the source size is unknown

        Returns:
            Metadata of the committed file

        Raises:
            DropboxAPIError: Any failure aborts the upload without committing
        """
        logger.info(f"Starting chunked upload to {dst}")
        session: Optional[ChunkSession] = None
        finished = False
        chunks = 0

        while not finished:
            session, finished = self.chunked_upload(session, source, chunk_size)
            chunks += 1
            if progress_callback:
                progress_callback(f"Uploaded {session.offset} bytes", session.offset, 0)

        logger.info(f"Sent {chunks} chunk(s), {session.offset} bytes for {dst}")
        return self.commit_chunked_upload(session.upload_id, dst, overwrite, parent_rev)

    def files_put(self, source: BinaryIO, size: int, dst: str, overwrite: bool = True,
                  parent_rev: str = "") -> Entry:
        """
        Upload size bytes from source in a single request.

        Args:
            source: Binary stream positioned at the data to send
            size: Number of bytes to send; anything after them is left unread
            dst: Destination path
            overwrite: Replace an existing file
            parent_rev: Revision the upload is based on

        Returns:
            Metadata of the uploaded file

        Raises:
            DropboxSizeLimitError: If size exceeds 150 MiB (nothing is sent)
        """
        if size > MAX_PUT_FILE_SIZE:
            raise DropboxSizeLimitError(
                "could not upload files bigger than 150MB using this method, use upload_by_chunk instead"
            )

        params = {"overwrite": bool_param(overwrite)}
        if parent_rev:
            params["parent_rev"] = parent_rev

        data = read_chunk(source, size)
        if len(data) < size:
            logger.warning(f"Source ended after {len(data)} of {size} bytes")

        logger.info(f"Uploading {len(data)} bytes to {dst}")
        reply = self.api.make_request(
            "PUT",
            self.api.root_path("files_put", dst),
            params,
            base_url=self.api.config.api_content_url,
            data=data,
            headers={"Content-Length": str(len(data))}
        )
        return decode_entry(reply)

    def upload_file(self, src: str, dst: str, overwrite: bool = True, parent_rev: str = "") -> Entry:
        """
        Upload the local file src to dst.

        Files above the files_put limit go through the chunked upload path.
        """
        size = os.path.getsize(src)
        with open(src, 'rb') as f:
            if size > MAX_PUT_FILE_SIZE:
                logger.info(f"{src} is {size} bytes, using chunked upload")
                return self.upload_by_chunk(f, self.api.config.chunk_size, dst, overwrite, parent_rev)
            return self.files_put(f, size, dst, overwrite, parent_rev)
