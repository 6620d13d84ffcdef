"""
dbxcore - Link Model
"""

from pydantic import BaseModel, ConfigDict


class Link(BaseModel):
    """Shareable or streaming URL returned by shares and media"""
    model_config = ConfigDict(frozen=True)

    url: str
    expires: str = ""
