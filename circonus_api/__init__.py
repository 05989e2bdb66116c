"""Circonus API client - maintenance windows, annotations and users."""

__version__ = "0.1.0"
__description__ = "Client for the Circonus monitoring REST API"

from .client import CirconusClient
from .config import CirconusConfig
from .api_client import CirconusAPIClient
from .cid import resolve_cid

__all__ = ["CirconusClient", "CirconusConfig", "CirconusAPIClient", "resolve_cid"]
