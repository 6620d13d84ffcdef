"""
dbxcore - Unsupported Media Error Exception

Exception raised for thumbnail formats/sizes that are not supported, or
source files that cannot be converted to a thumbnail (HTTP 415).

Author: dbxcore Project
"""

from .api_error import DropboxAPIError


class DropboxUnsupportedMediaError(DropboxAPIError):
    """Exception for unsupported thumbnail options or sources."""
    pass
