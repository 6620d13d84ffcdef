"""
dbxcore - Entry and Delta Codec

Converts wire JSON into Entry / DeltaPage values and back.

Most endpoints reply with plain JSON objects that map directly onto Entry.
The delta feed is different: each element of "entries" is a two-element
array [lowercased path, metadata-or-null]. Those elements are kept as raw
untyped lists until decode_delta_entry projects them into DeltaEntry.

Author: dbxcore Project
"""

import json
import logging
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Any, List, Optional

from pydantic import ValidationError

from dbxcore.exceptions import DropboxMalformedReplyError
from dbxcore.models import Account, ChunkSession, CopyRef, DeltaEntry, DeltaPage, DeltaPoll, Entry, Link

logger = logging.getLogger(__name__)


def _validate(model, data: Any):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.error(f"Cannot decode {model.__name__}: {e}")
        raise DropboxMalformedReplyError(f"malformed reply: cannot decode {model.__name__}")


def decode_entry(data: Any) -> Entry:
    """Decode a metadata object into an Entry."""
    return _validate(Entry, data)


def decode_entries(data: Any) -> List[Entry]:
    """
    Decode a JSON array of metadata objects (search, revisions).

    Raises:
        DropboxMalformedReplyError: If data is not a list of objects
    """
    if not isinstance(data, list):
        raise DropboxMalformedReplyError("malformed reply: expected a list of entries")
    return [decode_entry(item) for item in data]


def decode_chunk_session(data: Any) -> ChunkSession:
    return _validate(ChunkSession, data)


def decode_copy_ref(data: Any) -> CopyRef:
    return _validate(CopyRef, data)


def decode_link(data: Any) -> Link:
    return _validate(Link, data)


def decode_account(data: Any) -> Account:
    return _validate(Account, data)


def decode_delta_poll(data: Any) -> DeltaPoll:
    return _validate(DeltaPoll, data)


def decode_delta_entry(raw: Any) -> DeltaEntry:
    """
    Project one raw delta element into a DeltaEntry.

    Args:
        raw: A [path, metadata] pair as sent on the wire

    Returns:
        DeltaEntry whose entry is None when the path was deleted. A null
        metadata value and metadata with an empty path both mean deletion.

    Raises:
        DropboxMalformedReplyError: If raw is not a two-element array or its
            members have the wrong types
    """
    if not isinstance(raw, list) or len(raw) != 2:
        raise DropboxMalformedReplyError("malformed reply")

    path, metadata = raw
    if not isinstance(path, str):
        raise DropboxMalformedReplyError("malformed reply: delta path is not a string")

    entry: Optional[Entry] = None
    if metadata is not None:
        entry = decode_entry(metadata)
        if not entry.path:
            entry = None

    return DeltaEntry(path=path, entry=entry)


def encode_delta_entry(delta_entry: DeltaEntry) -> list:
    """Inverse of decode_delta_entry: build the [path, metadata-or-null] pair."""
    if delta_entry.entry is None:
        return [delta_entry.path, None]
    return [delta_entry.path, delta_entry.entry.model_dump(by_alias=True, exclude_none=True)]


def decode_delta_page(data: Any) -> DeltaPage:
    """
    Decode the reply of delta.

    Raises:
        DropboxMalformedReplyError: If the envelope or any entry is malformed
    """
    if not isinstance(data, dict):
        raise DropboxMalformedReplyError("malformed reply: delta reply is not an object")

    raw_entries = data.get("entries") or []
    if not isinstance(raw_entries, list):
        raise DropboxMalformedReplyError("malformed reply: delta entries is not a list")

    entries = [decode_delta_entry(raw) for raw in raw_entries]

    return DeltaPage(
        reset=bool(data.get("reset", False)),
        has_more=bool(data.get("has_more", False)),
        cursor=data.get("cursor") or "",
        entries=entries
    )


def decode_entry_header(value: Optional[str]) -> Optional[Entry]:
    """
    Decode the Entry carried in the x-dropbox-metadata header.

    Returns:
        Entry, or None when the header is absent or empty
    """
    if not value:
        return None
    try:
        data = json.loads(value)
    except json.JSONDecodeError:
        raise DropboxMalformedReplyError("malformed reply: invalid metadata header")
    return decode_entry(data)


def parse_date(value: str) -> Optional[datetime]:
    """
    Parse an API timestamp such as "Sat, 21 Aug 2010 22:31:20 +0000".

    The offset sent by the server is kept; the result is never assumed UTC.
    Day and month names are matched in English whatever the process locale.

    Returns:
        Timezone-aware datetime, or None for an empty string
    """
    if not value:
        return None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        parsed = None
    if parsed is None or parsed.tzinfo is None:
        raise DropboxMalformedReplyError(f"malformed reply: invalid date '{value}'")
    return parsed
