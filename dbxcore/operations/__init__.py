"""
dbxcore - Operations Package

This package contains the multi-step transfer and change feed operations.
"""

from .upload_operations import UploadOperations
from .delta_operations import DeltaOperations, apply_delta_page
from .download_operations import DownloadOperations

__all__ = ['UploadOperations', 'DeltaOperations', 'DownloadOperations', 'apply_delta_page']
