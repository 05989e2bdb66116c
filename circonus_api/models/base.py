"""Shared wire handling for Circonus API records."""

from typing import Any, ClassVar, Dict, FrozenSet

from pydantic import BaseModel, ConfigDict, Field, model_validator


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == 0 or value == [] or value == {}


class WireModel(BaseModel):
    """Base model whose JSON shape follows the API's field names exactly.

    Keys listed in ``omit_empty`` are dropped from encoded bodies when their
    value is empty; every other key is always sent.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    omit_empty: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        """Treat explicit JSON nulls as absent so field defaults apply."""
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    def to_wire(self) -> Dict[str, Any]:
        """Encode to a JSON-ready dict keyed by wire names."""
        data: Dict[str, Any] = {}
        for name, field in type(self).model_fields.items():
            key = field.alias or name
            value = getattr(self, name)
            if isinstance(value, WireModel):
                value = value.to_wire()
            elif isinstance(value, list):
                value = list(value)
            if key in self.omit_empty and _is_empty(value):
                continue
            data[key] = value
        return data


class APIRecord(WireModel):
    """A server-side resource identified by its CID."""

    cid: str = Field(default="", alias="_cid")

    omit_empty: ClassVar[FrozenSet[str]] = frozenset({"_cid"})
