"""
dbxcore - Delta Models

Pydantic models for the change feed (delta) and its long-poll notification.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from .entry import Entry


class DeltaEntry(BaseModel):
    """Change for one lowercased path; entry is None when the path was deleted"""
    model_config = ConfigDict(frozen=True)

    path: str
    entry: Optional[Entry] = None


class DeltaPage(BaseModel):
    """
    One page of the change feed.

    reset: local state must be cleared before applying the entries
    has_more: call delta again right away with this page's cursor
    """
    model_config = ConfigDict(frozen=True)

    reset: bool = False
    has_more: bool = False
    cursor: str = ""
    entries: List[DeltaEntry] = []


class DeltaPoll(BaseModel):
    """Reply of longpoll_delta; backoff is in seconds and 0 when not sent"""
    model_config = ConfigDict(frozen=True)

    changes: bool = False
    backoff: int = 0
