"""
dbxcore - Managers Package

Contains the configuration manager.

Author: dbxcore Project
"""

from .config_manager import ConfigManager, KEYRING_SERVICE

__all__ = [
    'ConfigManager',
    'KEYRING_SERVICE'
]
