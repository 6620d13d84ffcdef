"""
dbxcore - Not Found Error Exception

Exception raised when the requested path or revision does not exist (HTTP 404).

Author: dbxcore Project
"""

from .api_error import DropboxAPIError


class DropboxNotFoundError(DropboxAPIError):
    """Exception for missing files, folders and thumbnail sources."""
    pass
