"""Canonical identifier (CID) normalization and validation."""

import re
from typing import Optional, Pattern, Union

from .exceptions import InvalidIdentifierError, MissingIdentifierError


RawCID = Union[str, int, None]


def resolve_cid(
    raw: RawCID,
    prefix: str,
    pattern: Union[str, Pattern[str]],
    kind: Optional[str] = None
) -> str:
    """Turn a possibly-partial identifier into a validated resource path.

    ``"1234"`` and ``"/maintenance/1234"`` both resolve to
    ``"/maintenance/1234"`` for the ``/maintenance`` prefix.

    Args:
        raw: Identifier as given by the caller; ints are accepted
        prefix: Collection prefix, e.g. ``/maintenance``
        pattern: Anchored regular expression the full path must match
        kind: Resource name used in error messages

    Returns:
        The fully-qualified CID

    Raises:
        MissingIdentifierError: If ``raw`` is None or empty
        InvalidIdentifierError: If the resolved path does not match ``pattern``
    """
    label = f"{kind} CID" if kind else "CID"

    if raw is None or raw == "":
        raise MissingIdentifierError(f"invalid {label} (none)")

    raw = str(raw)
    cid = raw if raw.startswith(prefix) else f"{prefix}/{raw}"

    if re.fullmatch(pattern, cid) is None:
        raise InvalidIdentifierError(f"invalid {label} ({cid})", cid=cid)

    return cid
