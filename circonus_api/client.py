"""High-level Circonus API client."""

import logging
from typing import Dict, Optional

from .api_client import CirconusAPIClient
from .config import CirconusConfig
from .resources import Annotations, MaintenanceWindows, Resource, Users


logger = logging.getLogger(__name__)


class CirconusClient:
    """One API transport plus the resources that use it.

    Example::

        with CirconusClient(CirconusConfig.from_env()) as client:
            window = client.maintenance.fetch("1234")
            me = client.users.fetch()
    """

    def __init__(self, config: CirconusConfig, transport: Optional[CirconusAPIClient] = None):
        """Initialize the client.

        Args:
            config: Circonus configuration
            transport: Optional pre-built transport (built from config if omitted)
        """
        self.config = config
        self.transport = transport or CirconusAPIClient(config)

        self.maintenance = MaintenanceWindows(self.transport)
        self.annotations = Annotations(self.transport)
        self.users = Users(self.transport)

        logger.debug("Circonus client ready", extra={"resources": sorted(self.resources)})

    @property
    def resources(self) -> Dict[str, Resource]:
        """Resources keyed by their command-line name."""
        return {
            "maintenance": self.maintenance,
            "annotation": self.annotations,
            "user": self.users,
        }

    def close(self) -> None:
        self.transport.close()
        logger.debug("Circonus client closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
