"""
dbxcore - Configuration Manager

Handles loading and saving client configuration from/to config.json.
Manages OS credential store integration for access token storage.

Author: dbxcore Project
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from dbxcore.models import ClientConfig

# Configure logging
logger = logging.getLogger(__name__)

KEYRING_SERVICE = "dbxcore"


class ConfigManager:
    """
    Manages client configuration and credentials.

    Responsibilities:
    - Load/save config.json next to the executable (same location as logs folder)
    - Store/retrieve the access token from OS credential store via keyring
    - Provide the ClientConfig handed to each API client
    """

    def __init__(self, config_file: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Explicit config.json location; defaults next to the
                         executable or in the current directory
        """
        if config_file is None:
            if getattr(sys, 'frozen', False):
                # Running as compiled executable
                base_dir = Path(sys.executable).parent
            else:
                # Running as script
                base_dir = Path.cwd()
            config_file = base_dir / "config.json"

        self.config_file = Path(config_file)
        self.config = ClientConfig()

    def load_config(self) -> ClientConfig:
        """
        Load configuration from config.json.
        Creates default config if file doesn't exist.

        Returns:
            ClientConfig with defaults filled in for missing keys
        """
        if self.config_file.exists():
            logger.debug(f"Loading configuration from {self.config_file}")
            with open(self.config_file, 'r') as f:
                self.config = ClientConfig.model_validate(json.load(f))
            logger.info("Configuration loaded successfully")
        else:
            logger.info(f"Configuration file not found, creating default at {self.config_file}")
            self.config = ClientConfig()
            self.save_config()

        return self.config

    def save_config(self):
        """Save current configuration to config.json."""
        logger.debug(f"Saving configuration to {self.config_file}")
        with open(self.config_file, 'w') as f:
            json.dump(self.config.model_dump(), f, indent=2)
        logger.debug("Configuration saved successfully")

    def get(self, key: str, default=None) -> Any:
        """
        Get configuration value.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value
        """
        return getattr(self.config, key, default)

    def set(self, key: str, value: Any):
        """
        Set configuration value and save to file.

        Args:
            key: Configuration key
            value: Configuration value
        """
        self.config = self.config.model_copy(update={key: value})
        self.save_config()

    def _token_account(self) -> str:
        return self.config.client_id or "default"

    def store_token(self, access_token: str):
        """
        Store the access token in OS credential store.

        Args:
            access_token: OAuth2 bearer token
        """
        import keyring

        logger.info(f"Storing access token for app: {self._token_account()}")
        keyring.set_password(KEYRING_SERVICE, self._token_account(), access_token)
        logger.debug("Access token stored successfully")

    def get_token(self) -> Optional[str]:
        """
        Retrieve the access token from OS credential store.

        Returns:
            Access token or None if not found
        """
        import keyring

        logger.debug("Retrieving access token from OS credential store")
        token = keyring.get_password(KEYRING_SERVICE, self._token_account())
        if not token:
            logger.warning(f"No access token found in credential store for app: {self._token_account()}")
            return None
        return token

    def delete_token(self):
        """Remove the stored access token, if any."""
        import keyring
        from keyring.errors import PasswordDeleteError

        try:
            keyring.delete_password(KEYRING_SERVICE, self._token_account())
            logger.info("Access token removed from credential store")
        except PasswordDeleteError:
            logger.debug("No access token to remove")
