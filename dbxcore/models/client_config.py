"""
dbxcore - Client Configuration Model

Pydantic model holding everything a client instance needs to reach the API.
Each DropboxAPI receives its own ClientConfig; nothing is process-wide.
"""

from typing import Optional

from pydantic import BaseModel

from dbxcore.constants import DEFAULT_CHUNK_SIZE


class ClientConfig(BaseModel):
    """Per-client configuration"""
    root_directory: str = "dropbox"  # dropbox or sandbox
    locale: str = "en"
    api_url: str = "https://api.dropbox.com/1"
    api_content_url: str = "https://api-content.dropbox.com/1"
    api_notify_url: str = "https://api-notify.dropbox.com/1"
    auth_url: str = "https://www.dropbox.com/1/oauth2/authorize"
    token_url: str = "https://api.dropbox.com/1/oauth2/token"
    client_id: Optional[str] = None  # app key
    client_secret: Optional[str] = None  # app secret
    timeout: float = 30
    verify_ssl: bool = True
    chunk_size: int = DEFAULT_CHUNK_SIZE
    log_level: str = "INFO"
    log_retention_days: int = 30
