"""Generic CRUD operations shared by every Circonus resource.

Each resource type is an instance of :class:`Resource` configured with a
:class:`ResourceSpec`: its collection prefix, CID pattern, record model and
the verbs its endpoint offers.
"""

import copy
import json
import logging
from dataclasses import dataclass
from typing import (
    Any, Dict, FrozenSet, Generic, List, Mapping, Optional, Sequence, Tuple,
    Type, TypeVar, Union
)
from urllib.parse import urlencode

from pydantic import ValidationError as PydanticValidationError

from ..api_client import CirconusAPIClient
from ..cid import RawCID, resolve_cid
from ..exceptions import (
    DecodeError,
    InvalidConfigError,
    InvalidIdentifierError,
    MissingIdentifierError,
    TransportError,
    UnsupportedOperationError
)
from ..models.base import APIRecord


logger = logging.getLogger(__name__)

R = TypeVar("R", bound=APIRecord)

FilterCriteria = Mapping[str, Union[str, Sequence[str]]]

ALL_OPERATIONS = frozenset(
    {"fetch", "fetch_all", "search", "create", "update", "delete"}
)


@dataclass(frozen=True)
class ResourceSpec:
    """Everything that distinguishes one resource type from another."""

    kind: str
    plural: str
    prefix: str
    cid_pattern: str
    record_type: Type[APIRecord]
    default_cid: Optional[str] = None
    operations: FrozenSet[str] = ALL_OPERATIONS
    free_text_search: bool = True


class Resource(Generic[R]):
    """Fetch, create, update, delete and search one resource type.

    Attributes:
        transport: API client performing the HTTP calls
        spec: Resource configuration
    """

    def __init__(self, transport: CirconusAPIClient, spec: ResourceSpec):
        self.transport = transport
        self.spec = spec

    def resolve(self, cid: RawCID, use_default: bool = False) -> str:
        """Resolve ``cid`` to a full, validated resource path.

        With ``use_default`` an absent or empty ``cid`` resolves to the
        resource's default CID, if it has one.
        """
        if use_default and (cid is None or cid == "") and self.spec.default_cid:
            cid = self.spec.default_cid
        return resolve_cid(cid, self.spec.prefix, self.spec.cid_pattern, kind=self.spec.kind)

    def fetch(self, cid: RawCID = None) -> R:
        """Retrieve the record with the given CID.

        Raises:
            MissingIdentifierError: If no CID is given and there is no default
            InvalidIdentifierError: If the CID does not match the resource pattern
            TransportError: If the request fails
            DecodeError: If the response is not a valid record
        """
        self._require("fetch")
        path = self.resolve(cid, use_default=True)

        result = self._call(f"fetching {self.spec.kind}", self.transport.get, path)

        if self.transport.debug_enabled:
            self.transport.log_line(f"fetch {self.spec.kind}, received JSON: {_text(result)}")

        return self._decode_one(result, f"parsing {self.spec.kind}")

    def fetch_all(self) -> List[R]:
        """Retrieve every record available to the API token."""
        self._require("fetch_all")
        result = self._call(f"fetching {self.spec.plural}", self.transport.get, self.spec.prefix)
        return self._decode_many(result, f"parsing {self.spec.plural}")

    def search(
        self,
        query: Optional[str] = None,
        filters: Optional[FilterCriteria] = None
    ) -> List[R]:
        """Return records matching a free-text query and/or filter criteria.

        Filter values are sent as repeated query parameters in the order
        given. With neither a query nor any filter value this is
        :meth:`fetch_all`.

        Args:
            query: Free-text search term
            filters: Mapping of filter name to one value or a list of values
        """
        self._require("search")
        params = self._search_params(query, filters)

        if not params:
            return self.fetch_all()

        path = f"{self.spec.prefix}?{urlencode(params)}"
        result = self._call(f"searching {self.spec.plural}", self.transport.get, path)
        return self._decode_many(result, f"parsing {self.spec.plural}")

    def create(self, record: Union[R, Dict[str, Any], None]) -> R:
        """Create a new record; the server assigns its CID.

        Raises:
            InvalidConfigError: If no record is given
        """
        self._require("create")
        record = self._coerce(record)

        payload = record.to_wire()
        payload.pop("_cid", None)
        body = json.dumps(payload)

        if self.transport.debug_enabled:
            self.transport.log_line(f"create {self.spec.kind}, sending JSON: {body}")

        logger.info(f"Creating {self.spec.kind}", extra={"prefix": self.spec.prefix})

        result = self._call(f"creating {self.spec.kind}", self.transport.post, self.spec.prefix, body)
        return self._decode_one(result, f"parsing {self.spec.kind}")

    def update(self, record: Union[R, Dict[str, Any], None]) -> R:
        """Overwrite the server copy of ``record`` with its full contents.

        Raises:
            InvalidConfigError: If no record is given
            InvalidIdentifierError: If the record's CID is missing or invalid
        """
        self._require("update")
        record = self._coerce(record)

        try:
            path = self.resolve(record.cid)
        except MissingIdentifierError as e:
            raise InvalidIdentifierError(
                f"invalid {self.spec.kind} CID (none)", cid=record.cid
            ) from e

        payload = record.to_wire()
        payload["_cid"] = path
        body = json.dumps(payload)

        if self.transport.debug_enabled:
            self.transport.log_line(f"update {self.spec.kind}, sending JSON: {body}")

        logger.info(f"Updating {self.spec.kind} {path}")

        result = self._call(f"updating {self.spec.kind}", self.transport.put, path, body)
        return self._decode_one(result, f"parsing {self.spec.kind}")

    def delete(self, record: Union[R, Dict[str, Any], None]) -> bool:
        """Delete ``record`` using its own CID."""
        self._require("delete")
        return self.delete_by_cid(self._coerce(record).cid)

    def delete_by_cid(self, cid: RawCID) -> bool:
        """Delete the record with the given CID.

        Returns:
            True once the API has accepted the deletion
        """
        self._require("delete")
        path = self.resolve(cid)

        logger.info(f"Deleting {self.spec.kind} {path}")

        self._call(f"deleting {self.spec.kind}", self.transport.delete, path)
        return True

    def _require(self, operation: str) -> None:
        if operation not in self.spec.operations:
            raise UnsupportedOperationError(
                f"{operation} is not supported by the {self.spec.prefix} endpoint",
                operation=operation
            )

    def _coerce(self, record: Union[R, Dict[str, Any], None]) -> R:
        if record is None:
            raise InvalidConfigError(f"invalid {self.spec.kind} config (nil)")
        if isinstance(record, dict):
            try:
                return self.spec.record_type.model_validate(record)
            except PydanticValidationError as e:
                raise InvalidConfigError(f"invalid {self.spec.kind} config: {e}") from e
        if not isinstance(record, self.spec.record_type):
            raise InvalidConfigError(
                f"invalid {self.spec.kind} config ({type(record).__name__})"
            )
        return record

    def _search_params(
        self,
        query: Optional[str],
        filters: Optional[FilterCriteria]
    ) -> List[Tuple[str, str]]:
        params: List[Tuple[str, str]] = []

        if query:
            if not self.spec.free_text_search:
                raise UnsupportedOperationError(
                    f"search queries are not supported by the {self.spec.prefix} endpoint",
                    operation="search"
                )
            params.append(("search", query))

        for name, values in (filters or {}).items():
            if isinstance(values, str):
                values = [values]
            for value in values:
                params.append((name, value))

        return params

    def _call(self, action: str, func, *args) -> bytes:
        """Run a transport call, prefixing any failure with ``action``."""
        try:
            return func(*args)
        except TransportError as e:
            # Same subtype and attributes (retry_after, timeout_seconds), prefixed message
            wrapped = copy.copy(e)
            wrapped.message = f"{action}: {e.message}"
            wrapped.args = (wrapped.message,)
            raise wrapped from e

    def _decode_one(self, body: bytes, action: str) -> R:
        try:
            return self.spec.record_type.model_validate(json.loads(body))
        except (ValueError, PydanticValidationError) as e:
            raise DecodeError(f"{action}: {e}", response_body=_text(body)) from e

    def _decode_many(self, body: bytes, action: str) -> List[R]:
        try:
            data = json.loads(body)
        except ValueError as e:
            raise DecodeError(f"{action}: {e}", response_body=_text(body)) from e

        if data is None:
            return []
        if not isinstance(data, list):
            raise DecodeError(
                f"{action}: expected a JSON array, got {type(data).__name__}",
                response_body=_text(body)
            )

        try:
            return [self.spec.record_type.model_validate(item) for item in data]
        except PydanticValidationError as e:
            raise DecodeError(f"{action}: {e}", response_body=_text(body)) from e


def _text(body: Union[bytes, str]) -> str:
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return body


__all__ = [
    'ALL_OPERATIONS',
    'FilterCriteria',
    'Resource',
    'ResourceSpec'
]
