"""
dbxcore - Models Package

Contains the value objects decoded from API replies and the client configuration.

Author: dbxcore Project
"""

from .entry import Entry
from .delta import DeltaEntry, DeltaPage, DeltaPoll
from .chunk_session import ChunkSession
from .copy_ref import CopyRef
from .link import Link
from .account import Account, QuotaInfo
from .client_config import ClientConfig
from .thumbnail_options import ThumbnailFormat, ThumbnailSize
from .download_stream import DownloadStream

__all__ = [
    'Entry',
    'DeltaEntry',
    'DeltaPage',
    'DeltaPoll',
    'ChunkSession',
    'CopyRef',
    'Link',
    'Account',
    'QuotaInfo',
    'ClientConfig',
    'ThumbnailFormat',
    'ThumbnailSize',
    'DownloadStream'
]
