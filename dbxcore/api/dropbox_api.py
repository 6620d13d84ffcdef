"""
dbxcore - API Communication Module

Handles all communication with the Dropbox Core API via REST.
Builds authenticated requests, translates error replies into exceptions and
decodes JSON payloads. Also hosts the one-call endpoints (metadata, search,
file operations, sharing).

Author: dbxcore Project
"""

import json
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from dbxcore.api.oauth_session import OAuthSession
from dbxcore.codec import (
    decode_account,
    decode_copy_ref,
    decode_entries,
    decode_entry,
    decode_link
)
from dbxcore.constants import (
    METADATA_LIMIT_DEFAULT,
    METADATA_LIMIT_MAX,
    REVISIONS_LIMIT_DEFAULT,
    REVISIONS_LIMIT_MAX,
    SEARCH_LIMIT_DEFAULT,
    SEARCH_LIMIT_MAX
)
from dbxcore.exceptions import (
    DropboxAuthError,
    DropboxBadRequestError,
    DropboxMalformedReplyError,
    DropboxNotFoundError,
    DropboxRequestError,
    DropboxTransportError,
    DropboxUnsupportedMediaError
)
from dbxcore.models import Account, ClientConfig, CopyRef, Entry, Link

# Configure logging
logger = logging.getLogger(__name__)


def bool_param(value: bool) -> str:
    """Format a boolean the way the API expects it in a query string."""
    return "true" if value else "false"


def clamp_limit(limit: int, default: int, maximum: int) -> int:
    """Use default for limit <= 0 and cap anything above maximum."""
    if limit <= 0:
        return default
    return min(limit, maximum)


def error_message_from_envelope(body: bytes, status_code: int) -> str:
    """
    Extract a human-readable message from an error envelope.

    The envelope is either {"error": "reason"} or {"error": {"param": "reason"}}.
    """
    try:
        envelope = json.loads(body)
    except ValueError:
        return f"request error HTTP code {status_code}"

    error = envelope.get("error") if isinstance(envelope, dict) else None
    if isinstance(error, str):
        return error
    if isinstance(error, dict):
        for param, reason in error.items():
            if isinstance(reason, str):
                return f"{param}: {reason}"
        return "wrong parameter"
    return f"request error HTTP code {status_code}"


class DropboxAPI:
    """
    API client for the Dropbox Core API.

    Responsibilities:
    - Make authenticated API requests through the credential provider
    - Translate HTTP errors into typed exceptions
    - Decode JSON replies into models
    - Expose the single-request endpoints
    """

    def __init__(self, config: ClientConfig, credentials: Optional[OAuthSession] = None):
        """
        Initialize API client.

        Args:
            config: Configuration for this client instance
            credentials: Credential provider; built from config when omitted
        """
        self.config = config
        if credentials is None:
            credentials = OAuthSession(
                config.auth_url,
                config.token_url,
                client_id=config.client_id,
                client_secret=config.client_secret,
                verify_ssl=config.verify_ssl
            )
        self.credentials = credentials
        logger.debug(f"Initialized API client for {self.config.api_url} (root: {self.config.root_directory})")

    def close(self):
        """
        Close the session and release resources.

        Should be called when done using the API client.
        """
        if getattr(self, 'credentials', None):
            self.credentials.close()
            logger.debug("API client session closed")

    def __enter__(self) -> "DropboxAPI":
        return self

    def __exit__(self, *args):
        self.close()

    # ==================== Request Plumbing ====================

    def root_path(self, prefix: str, path: str = "") -> str:
        """
        Build "<prefix>/<root>/<path>" with any leading separator of path removed.

        Args:
            prefix: Endpoint name (e.g. "metadata")
            path: Path inside the root directory
        """
        return "/".join([prefix, self.config.root_directory, path.lstrip("/")])

    def build_url(self, base_url: str, path: str) -> str:
        """Join base_url and a percent-encoded relative path."""
        return f"{base_url}/{quote(path, safe='/')}"

    def send(self, method: str, url: str, params: Optional[Dict[str, str]] = None,
             authenticated: bool = True, **kwargs) -> requests.Response:
        """
        Execute one HTTP request.

        Returns:
            The raw response; the caller must close it

        Raises:
            DropboxAuthError: If authenticated and no token is set
            DropboxTransportError: If the server cannot be reached
        """
        if "timeout" not in kwargs:
            kwargs["timeout"] = self.config.timeout

        logger.debug(f"API request: {method} {url}")
        try:
            return self.credentials.request(method, url, authenticated=authenticated, params=params, **kwargs)
        except requests.exceptions.ConnectionError as e:
            logger.error(f"Cannot connect to {url}: {e}")
            raise DropboxTransportError(f"Cannot connect to {url}")
        except requests.exceptions.Timeout:
            logger.error("Request timed out")
            raise DropboxTransportError("Request timed out")
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error: {str(e)}")
            raise DropboxTransportError(f"Request error: {str(e)}")

    def raise_for_status(self, response: requests.Response):
        """
        Translate an error reply into the matching exception.

        2xx and 304 replies pass through untouched.

        Raises:
            DropboxAuthError: HTTP 401
            DropboxNotFoundError: HTTP 404
            DropboxBadRequestError: HTTP 400 or 405
            DropboxUnsupportedMediaError: HTTP 415
            DropboxRequestError: Any other error status
        """
        status = response.status_code
        if 200 <= status < 300 or status == 304:
            return

        if status == 401:
            logger.warning("Authentication token missing, expired or revoked")
            raise DropboxAuthError("authentication required")

        if status == 404:
            raise DropboxNotFoundError("file or folder not found")

        message = error_message_from_envelope(response.content, status)
        if status in (400, 405):
            logger.error(f"Request failed with status {status}: {message}")
            raise DropboxBadRequestError(message, status_code=status)
        if status == 415:
            raise DropboxUnsupportedMediaError(message)

        logger.error(f"Request failed with status {status}: {message}")
        raise DropboxRequestError(f"Request failed with status {status}: {message}", status_code=status)

    def make_request(self, method: str, path: str, params: Optional[Dict[str, str]] = None,
                     base_url: Optional[str] = None, authenticated: bool = True, **kwargs) -> Any:
        """
        Make an API request and return its decoded JSON body.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: API path relative to base_url (e.g. "account/info")
            params: Query parameters; None sends only the configured locale
            base_url: Defaults to the configured API URL
            authenticated: Attach the bearer token
            **kwargs: Additional arguments for the request (data, headers, ...)

        Returns:
            Parsed JSON, or None for a 304 Not Modified reply

        Raises:
            DropboxAPIError: Subclass matching the failure
        """
        if params is None:
            params = {"locale": self.config.locale}
        url = self.build_url(base_url or self.config.api_url, path)

        response = self.send(method, url, params=params, authenticated=authenticated, **kwargs)
        try:
            body = response.content
            self.raise_for_status(response)
            if response.status_code == 304:
                logger.debug(f"{path} not modified")
                return None
            try:
                return json.loads(body)
            except ValueError:
                logger.error(f"Invalid JSON reply from {path}")
                raise DropboxMalformedReplyError(f"malformed reply from {path}")
        finally:
            response.close()

    def open_stream(self, url: str, params: Optional[Dict[str, str]] = None,
                    headers: Optional[Dict[str, str]] = None) -> requests.Response:
        """
        Start a streaming GET and check its status.

        On success the open response is returned and the caller owns it; on
        failure it is closed before the error propagates.
        """
        response = self.send("GET", url, params=params, headers=headers, stream=True)
        try:
            self.raise_for_status(response)
        except Exception:
            response.close()
            raise
        return response

    # ==================== Account ====================

    def account_info(self) -> Account:
        """Get account information for the user currently authenticated."""
        return decode_account(self.make_request("GET", "account/info"))

    # ==================== Metadata ====================

    def metadata(self, src: str, list_contents: bool = False, include_deleted: bool = False,
                 hash: str = "", rev: str = "", limit: int = 0) -> Optional[Entry]:
        """
        Get the metadata of a file or folder.

        Args:
            src: Path of the file or folder
            list_contents: Include immediate children of a folder in `contents`
            include_deleted: Include deleted children
            hash: Hash of a previous listing; unchanged folders are not resent
            rev: Specific revision of a file
            limit: Maximum number of children (<= 0 for the default)

        Returns:
            Entry, or None when hash matches the folder's current hash
        """
        limit = clamp_limit(limit, METADATA_LIMIT_DEFAULT, METADATA_LIMIT_MAX)
        params = {
            "list": bool_param(list_contents),
            "include_deleted": bool_param(include_deleted),
            "file_limit": str(limit)
        }
        if rev:
            params["rev"] = rev
        if hash:
            params["hash"] = hash

        data = self.make_request("GET", self.root_path("metadata", src), params)
        if data is None:
            return None
        return decode_entry(data)

    def search(self, path: str, query: str, file_limit: int = 0,
               include_deleted: bool = False) -> List[Entry]:
        """
        Search entries whose names contain every word of query under path.

        Args:
            path: Folder to search in
            query: Space separated words to match
            file_limit: Maximum number of results (<= 0 for the default)
            include_deleted: Include deleted files in the results
        """
        file_limit = clamp_limit(file_limit, SEARCH_LIMIT_DEFAULT, SEARCH_LIMIT_MAX)
        params = {
            "query": query,
            "file_limit": str(file_limit),
            "include_deleted": bool_param(include_deleted)
        }
        return decode_entries(self.make_request("GET", self.root_path("search", path), params))

    def revisions(self, src: str, rev_limit: int = 0) -> List[Entry]:
        """
        Get the previous revisions of a file, newest first.

        Args:
            src: Path of the file
            rev_limit: Maximum number of revisions (<= 0 for the default)
        """
        rev_limit = clamp_limit(rev_limit, REVISIONS_LIMIT_DEFAULT, REVISIONS_LIMIT_MAX)
        params = {"rev_limit": str(rev_limit)}
        return decode_entries(self.make_request("GET", self.root_path("revisions", src), params))

    def restore(self, src: str, rev: str) -> Entry:
        """Restore a file to the given revision."""
        return decode_entry(self.make_request("POST", self.root_path("restore", src), {"rev": rev}))

    # ==================== Sharing ====================

    def shares(self, path: str, short_url: bool = False) -> Link:
        """Create a shareable link to a file or folder."""
        params = {"short_url": bool_param(short_url)} if short_url else None
        return decode_link(self.make_request("POST", self.root_path("shares", path), params))

    def media(self, path: str) -> Link:
        """Create a direct streaming link to a file."""
        return decode_link(self.make_request("POST", self.root_path("media", path)))

    def copy_ref(self, src: str) -> CopyRef:
        """
        Get a reference to a file, usable once with copy(..., is_ref=True)
        to copy the file into another user's account.
        """
        return decode_copy_ref(self.make_request("GET", self.root_path("copy_ref", src)))

    # ==================== File Operations ====================

    def copy(self, src: str, dst: str, is_ref: bool = False) -> Entry:
        """
        Copy a file or folder.

        Args:
            src: Source path, or a copy reference when is_ref is True
            dst: Destination path
            is_ref: Treat src as a reference obtained from copy_ref
        """
        params = {"root": self.config.root_directory, "to_path": dst}
        if is_ref:
            params["from_copy_ref"] = src
        else:
            params["from_path"] = src
        logger.info(f"Copying {'reference' if is_ref else src} to {dst}")
        return decode_entry(self.make_request("POST", "fileops/copy", params))

    def create_folder(self, path: str) -> Entry:
        """Create a new folder."""
        params = {"root": self.config.root_directory, "path": path}
        logger.info(f"Creating folder {path}")
        return decode_entry(self.make_request("POST", "fileops/create_folder", params))

    def delete(self, path: str) -> Entry:
        """Delete a file or folder; folders are deleted recursively."""
        params = {"root": self.config.root_directory, "path": path}
        logger.info(f"Deleting {path}")
        return decode_entry(self.make_request("POST", "fileops/delete", params))

    def move(self, src: str, dst: str) -> Entry:
        """Move a file or folder."""
        params = {"root": self.config.root_directory, "from_path": src, "to_path": dst}
        logger.info(f"Moving {src} to {dst}")
        return decode_entry(self.make_request("POST", "fileops/move", params))
