"""
dbxcore - Authentication Error Exception

Exception raised when the bearer credential is missing or rejected (HTTP 401).

Author: dbxcore Project
"""

from .api_error import DropboxAPIError


class DropboxAuthError(DropboxAPIError):
    """Exception for authentication errors."""
    pass
