"""User record."""

from typing import ClassVar, FrozenSet

from pydantic import Field

from .base import APIRecord, WireModel


class UserContactInfo(WireModel):
    """Known contact details for a user."""

    sms: str = ""
    xmpp: str = ""

    omit_empty: ClassVar[FrozenSet[str]] = frozenset({"sms", "xmpp"})


class User(APIRecord):
    """A user of the Circonus account."""

    contact_info: UserContactInfo = Field(default_factory=UserContactInfo)
    email: str = ""
    firstname: str = ""
    lastname: str = ""
