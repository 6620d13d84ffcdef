"""
dbxcore - Out Of Range Error Exception

Exception raised when an argument falls outside the range accepted by the API.

Author: dbxcore Project
"""

from .api_error import DropboxAPIError


class DropboxOutOfRangeError(DropboxAPIError):
    """Exception for out-of-range arguments such as long-poll timeouts."""
    pass
