"""Maintenance window record."""

from typing import Any, ClassVar, FrozenSet, List

from pydantic import Field, field_validator

from .base import APIRecord


class MaintenanceWindow(APIRecord):
    """A maintenance window suppressing alerts for an item.

    ``severities`` is accepted from the API either as a comma separated
    string or as a list; it is always held and sent as a list of strings.
    """

    item: str = ""
    notes: str = ""
    type: str = ""
    tags: List[str] = Field(default_factory=list)
    severities: List[str] = Field(default_factory=list)
    start: int = Field(default=0, ge=0)
    stop: int = Field(default=0, ge=0)

    omit_empty: ClassVar[FrozenSet[str]] = frozenset(
        {"_cid", "item", "notes", "type", "tags", "severities", "start", "stop"}
    )

    @field_validator("severities", mode="before")
    @classmethod
    def split_severities(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        if isinstance(v, (list, tuple)):
            return [str(s) for s in v]
        return v
