"""Authentication headers for the Circonus API client."""

import logging
from typing import Dict
from urllib.parse import urlparse

from .config import CirconusConfig
from .exceptions import ConfigurationError


logger = logging.getLogger(__name__)


class CirconusAuth:
    """Builds the token headers sent with every Circonus API request.

    The API authenticates each call with an API token and the application
    name the token was approved for; there is no session to establish.

    Attributes:
        config: Circonus configuration containing credentials and settings
    """

    TOKEN_HEADER = "X-Circonus-Auth-Token"
    APP_HEADER = "X-Circonus-App-Name"

    def __init__(self, config: CirconusConfig):
        """Initialize authentication with configuration.

        Args:
            config: Circonus configuration containing credentials and settings

        Raises:
            ConfigurationError: If required credentials are missing or invalid
        """
        self.config = config
        self._validate_credentials()

        logger.info(
            "Initialized Circonus authentication",
            extra={
                "url": self.config.url,
                "app_name": self.config.app_name,
                "token_key": self.config.token_key[:8] + "..."
            }
        )

    def _validate_credentials(self) -> None:
        """Validate that required credentials are provided.

        Raises:
            ConfigurationError: If credentials are missing or invalid
        """
        if not self.config.token_key:
            raise ConfigurationError(
                "Circonus API token is required",
                config_key="token_key"
            )

        if not self.config.app_name:
            raise ConfigurationError(
                "Circonus API app name is required",
                config_key="app_name"
            )

        parsed = urlparse(self.config.url)
        if not parsed.scheme or not parsed.netloc:
            raise ConfigurationError(
                "Invalid Circonus API URL",
                config_key="url",
                config_value=self.config.url
            )

    def get_auth_headers(self) -> Dict[str, str]:
        """Get headers required for authenticated API requests."""
        return {
            self.TOKEN_HEADER: self.config.token_key,
            self.APP_HEADER: self.config.app_name,
        }
