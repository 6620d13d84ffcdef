"""
dbxcore - Exceptions Package

Contains all exception classes for the dbxcore client.

Author: dbxcore Project
"""

from .api_error import DropboxAPIError
from .auth_error import DropboxAuthError
from .not_found_error import DropboxNotFoundError
from .request_error import DropboxRequestError, DropboxBadRequestError
from .unsupported_media_error import DropboxUnsupportedMediaError
from .malformed_reply_error import DropboxMalformedReplyError
from .size_limit_error import DropboxSizeLimitError
from .out_of_range_error import DropboxOutOfRangeError
from .transport_error import DropboxTransportError

__all__ = [
    'DropboxAPIError',
    'DropboxAuthError',
    'DropboxNotFoundError',
    'DropboxRequestError',
    'DropboxBadRequestError',
    'DropboxUnsupportedMediaError',
    'DropboxMalformedReplyError',
    'DropboxSizeLimitError',
    'DropboxOutOfRangeError',
    'DropboxTransportError'
]
