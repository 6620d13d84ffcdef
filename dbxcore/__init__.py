"""
dbxcore - Dropbox Core API client

Synchronous client for the Dropbox Core API: metadata, file operations,
chunked uploads, downloads, thumbnails and the delta change feed.

Author: dbxcore Project
"""

from dbxcore.api import DropboxAPI, OAuthSession
from dbxcore.models import ClientConfig
from dbxcore.operations import DeltaOperations, DownloadOperations, UploadOperations

__version__ = "1.0.0"

__all__ = [
    'DropboxAPI',
    'OAuthSession',
    'ClientConfig',
    'UploadOperations',
    'DeltaOperations',
    'DownloadOperations'
]
