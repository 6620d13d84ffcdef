"""
dbxcore - API Package

This package contains the API communication classes and the credential provider.
"""

from .oauth_session import OAuthSession
from .dropbox_api import DropboxAPI

__all__ = ['DropboxAPI', 'OAuthSession']
