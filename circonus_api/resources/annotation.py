"""Annotation resource: fetch, create, update, delete and search."""

from ..models.annotation import Annotation
from .base import Resource, ResourceSpec


ANNOTATION_PREFIX = "/annotation"
ANNOTATION_CID_REGEX = r"^/annotation/[0-9]+$"

ANNOTATION_SPEC = ResourceSpec(
    kind="annotation",
    plural="annotations",
    prefix=ANNOTATION_PREFIX,
    cid_pattern=ANNOTATION_CID_REGEX,
    record_type=Annotation
)


class Annotations(Resource[Annotation]):
    """Operations on ``/annotation``."""

    def __init__(self, transport):
        super().__init__(transport, ANNOTATION_SPEC)
