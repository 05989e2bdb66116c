"""Circonus API resources."""

from .base import ALL_OPERATIONS, Resource, ResourceSpec
from .maintenance import MaintenanceWindows, MAINTENANCE_SPEC
from .annotation import Annotations, ANNOTATION_SPEC
from .user import Users, USER_SPEC

__all__ = [
    'ALL_OPERATIONS',
    'Resource',
    'ResourceSpec',
    'MaintenanceWindows',
    'MAINTENANCE_SPEC',
    'Annotations',
    'ANNOTATION_SPEC',
    'Users',
    'USER_SPEC'
]
