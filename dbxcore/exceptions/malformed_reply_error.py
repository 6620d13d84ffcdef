"""
dbxcore - Malformed Reply Error Exception

Exception raised when a server reply cannot be decoded.

Author: dbxcore Project
"""

from .api_error import DropboxAPIError


class DropboxMalformedReplyError(DropboxAPIError):
    """Exception for invalid JSON or unexpected reply shapes."""
    pass
