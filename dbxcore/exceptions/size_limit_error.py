"""
dbxcore - Size Limit Error Exception

Exception raised when a whole-file upload exceeds the files_put limit.

Author: dbxcore Project
"""

from .api_error import DropboxAPIError


class DropboxSizeLimitError(DropboxAPIError):
    """Exception for uploads that must go through the chunked upload path."""
    pass
