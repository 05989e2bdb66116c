"""User resource: fetch, update and filter.

Users are invited to and removed from accounts through the account
endpoint, so ``/user`` offers no create or delete, and it filters but does
not take free-text search queries.
"""

from ..models.user import User
from .base import Resource, ResourceSpec


USER_PREFIX = "/user"
USER_CID_REGEX = r"^/user/([0-9]+|current)$"
CURRENT_USER_CID = USER_PREFIX + "/current"

USER_SPEC = ResourceSpec(
    kind="user",
    plural="users",
    prefix=USER_PREFIX,
    cid_pattern=USER_CID_REGEX,
    record_type=User,
    default_cid=CURRENT_USER_CID,
    operations=frozenset({"fetch", "fetch_all", "search", "update"}),
    free_text_search=False
)


class Users(Resource[User]):
    """Operations on ``/user``. ``fetch()`` with no CID returns the token's own user."""

    def __init__(self, transport):
        super().__init__(transport, USER_SPEC)
