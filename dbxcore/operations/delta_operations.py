"""
dbxcore - Delta Operations Module

Implements the cursor-based change feed (delta) and the long-poll call that
blocks until the feed changes.

Author: dbxcore Project
"""

import logging
from typing import Dict, Iterator

from dbxcore.api import DropboxAPI
from dbxcore.codec import decode_delta_page, decode_delta_poll
from dbxcore.constants import POLL_JITTER_MARGIN, POLL_MAX_TIMEOUT, POLL_MIN_TIMEOUT
from dbxcore.exceptions import DropboxOutOfRangeError
from dbxcore.models import DeltaPage, DeltaPoll, Entry

# Configure logging
logger = logging.getLogger(__name__)


def apply_delta_page(state: Dict[str, Entry], page: DeltaPage) -> Dict[str, Entry]:
    """
    Apply one delta page to a local view of the account.

    Args:
        state: Entries keyed by lowercased path; updated in place
        page: Page returned by delta

    Returns:
        The updated state
    """
    if page.reset:
        logger.info("Delta reset - discarding local state")
        state.clear()

    for change in page.entries:
        if change.entry is None:
            # Deleting a folder deletes everything below it
            prefix = change.path.rstrip("/") + "/"
            for path in [p for p in state if p == change.path or p.startswith(prefix)]:
                del state[path]
        else:
            state[change.path] = change.entry

    return state


class DeltaOperations:
    """
    Handles change feed retrieval.

    Responsibilities:
    - Fetch one delta page for a cursor
    - Page through the feed while the server reports more data
    - Long-poll until the feed changes
    """

    def __init__(self, api_client: DropboxAPI):
        """
        Initialize delta operations handler.

        Args:
            api_client: DropboxAPI instance for server communication
        """
        self.api = api_client

    def delta(self, cursor: str = "", path_prefix: str = "") -> DeltaPage:
        """
        Get the changes since cursor.

        Args:
            cursor: Cursor from a previous page, empty to start from the beginning
            path_prefix: Only report changes under this path

        Returns:
            DeltaPage. When has_more is True call again with the returned
            cursor. When reset is True local state must be rebuilt from empty.

        Raises:
            DropboxMalformedReplyError: If an entry is not a [path, metadata] pair
        """
        params = {}
        if cursor:
            params["cursor"] = cursor
        if path_prefix:
            params["path_prefix"] = path_prefix

        logger.debug(f"Fetching delta (cursor: {cursor or '<start>'}, prefix: {path_prefix or '<none>'})")
        page = decode_delta_page(self.api.make_request("POST", "delta", params))
        logger.info(f"Delta returned {len(page.entries)} entries (reset: {page.reset}, has_more: {page.has_more})")
        return page

    def iter_delta(self, cursor: str = "", path_prefix: str = "") -> Iterator[DeltaPage]:
        """
        Yield delta pages until the server has nothing more to send.

        Each request reuses the cursor returned by the previous page.
        """
        while True:
            page = self.delta(cursor, path_prefix)
            yield page
            if not page.has_more:
                break
            cursor = page.cursor

    def longpoll_delta(self, cursor: str, timeout: int = 0) -> DeltaPoll:
        """
        Wait until the changes behind cursor differ or timeout elapses.

        The call does not need a token and may legitimately block for the
        whole timeout. Honor DeltaPoll.backoff before polling again.

        Args:
            cursor: Cursor returned by delta
            timeout: Seconds to wait, 0 for the server default,
                     otherwise within [POLL_MIN_TIMEOUT, POLL_MAX_TIMEOUT]

        Returns:
            DeltaPoll with the changes flag and the backoff hint

        Raises:
            DropboxOutOfRangeError: If timeout is out of range (nothing is sent)
        """
        params = {}
        if timeout != 0:
            if timeout < POLL_MIN_TIMEOUT or timeout > POLL_MAX_TIMEOUT:
                raise DropboxOutOfRangeError(
                    f"timeout out of range [{POLL_MIN_TIMEOUT}; {POLL_MAX_TIMEOUT}]"
                )
            params["timeout"] = str(timeout)
        params["cursor"] = cursor

        wait = (timeout or POLL_MIN_TIMEOUT) + POLL_JITTER_MARGIN
        logger.debug(f"Long-polling delta for up to {timeout or POLL_MIN_TIMEOUT}s")
        reply = self.api.make_request(
            "GET",
            "longpoll_delta",
            params,
            base_url=self.api.config.api_notify_url,
            authenticated=False,
            timeout=wait
        )
        poll = decode_delta_poll(reply)
        if poll.changes:
            logger.info("Long-poll reports changes")
        return poll
