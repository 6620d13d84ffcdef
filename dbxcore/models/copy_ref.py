"""
dbxcore - Copy Reference Model
"""

from pydantic import BaseModel, ConfigDict


class CopyRef(BaseModel):
    """One-time token to copy a file version into another account"""
    model_config = ConfigDict(frozen=True)

    copy_ref: str
    expires: str = ""
