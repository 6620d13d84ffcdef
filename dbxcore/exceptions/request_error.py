"""
dbxcore - Request Error Exceptions

Exceptions raised when the server rejects a request with an HTTP error status.

Author: dbxcore Project
"""

from typing import Optional

from .api_error import DropboxAPIError


class DropboxRequestError(DropboxAPIError):
    """Exception for unexpected HTTP status codes."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DropboxBadRequestError(DropboxRequestError):
    """
    Exception for HTTP 400/405 replies carrying the error envelope.

    The message is either the envelope's error string or "param: reason"
    for the first parameter named in the envelope.
    """
    pass
