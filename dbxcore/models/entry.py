"""
dbxcore - Entry Model

Pydantic model for the metadata of a file or folder.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Entry(BaseModel):
    """
    Metadata for one file or directory.

    `contents` is only populated for directory listings requested with
    list_contents, and only one level deep. Dates are kept as the opaque
    strings sent by the server; use `modified_at` / `client_modified_at`
    for timezone-aware datetimes.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    bytes: int = 0
    client_mtime: str = ""
    contents: Optional[List["Entry"]] = None
    hash: str = ""
    icon: str = ""
    is_deleted: bool = False
    is_dir: bool = False
    mime_type: str = ""
    modified: str = ""
    path: str = ""
    revision: str = Field(default="", alias="rev")
    root: str = ""
    size: str = ""
    thumb_exists: bool = False

    @property
    def modified_at(self) -> Optional[datetime]:
        from dbxcore.codec import parse_date
        return parse_date(self.modified)

    @property
    def client_modified_at(self) -> Optional[datetime]:
        from dbxcore.codec import parse_date
        return parse_date(self.client_mtime)
