"""
dbxcore - Chunk Session Model

Pydantic model for the reply of chunked_upload.
"""

from pydantic import BaseModel, ConfigDict


class ChunkSession(BaseModel):
    """Server-side upload handle and the number of bytes it has accepted"""
    model_config = ConfigDict(frozen=True)

    upload_id: str
    offset: int = 0
    expires: str = ""
