"""
dbxcore - Transport Error Exception

Exception raised for network and connection failures.

Author: dbxcore Project
"""

from .api_error import DropboxAPIError


class DropboxTransportError(DropboxAPIError):
    """Exception for connection errors and timeouts."""
    pass
