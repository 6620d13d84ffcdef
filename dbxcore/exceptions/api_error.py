"""
dbxcore - API Error Exception

Base exception class for all API-related errors.

Author: dbxcore Project
"""


class DropboxAPIError(Exception):
    """Base exception for API errors."""
    pass
