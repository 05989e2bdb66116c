"""Maintenance window resource: fetch, create, update, delete and search."""

from ..models.maintenance import MaintenanceWindow
from .base import Resource, ResourceSpec


MAINTENANCE_PREFIX = "/maintenance"
MAINTENANCE_CID_REGEX = r"^/maintenance/[0-9]+$"

MAINTENANCE_SPEC = ResourceSpec(
    kind="maintenance window",
    plural="maintenance windows",
    prefix=MAINTENANCE_PREFIX,
    cid_pattern=MAINTENANCE_CID_REGEX,
    record_type=MaintenanceWindow
)


class MaintenanceWindows(Resource[MaintenanceWindow]):
    """Operations on ``/maintenance``."""

    def __init__(self, transport):
        super().__init__(transport, MAINTENANCE_SPEC)
