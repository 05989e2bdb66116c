"""Data models for Circonus API records."""

from .base import WireModel, APIRecord
from .maintenance import MaintenanceWindow
from .annotation import Annotation
from .user import User, UserContactInfo

__all__ = [
    'WireModel',
    'APIRecord',
    'MaintenanceWindow',
    'Annotation',
    'User',
    'UserContactInfo'
]
