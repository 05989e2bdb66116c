"""Allow ``python -m circonus_api``."""

from .main import cli

cli()
