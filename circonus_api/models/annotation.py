"""Annotation record."""

from typing import ClassVar, FrozenSet, List

from pydantic import Field

from .base import APIRecord


class Annotation(APIRecord):
    """A timeline annotation, optionally tied to metrics."""

    category: str = ""
    title: str = ""
    description: str = ""
    rel_metrics: List[str] = Field(default_factory=list)
    created: int = Field(default=0, ge=0, alias="_created")
    last_modified: int = Field(default=0, ge=0, alias="_last_modified")
    last_modified_by: str = Field(default="", alias="_last_modified_by")
    start: int = Field(default=0, ge=0)
    stop: int = Field(default=0, ge=0)

    omit_empty: ClassVar[FrozenSet[str]] = frozenset(
        {"_cid", "_created", "_last_modified", "_last_modified_by"}
    )
