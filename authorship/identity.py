"""Author identities.

An author is known by a registered user id, by an email only, or not at
all. Each case is its own variant so a record can never end up with both
identity fields unset (or set to disagreeing values) by accident.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Mapping, Union


@dataclass(frozen=True)
class RegisteredAuthor:
    """Matched to a registered user."""

    uid: int
    email: str | None = None


@dataclass(frozen=True)
class EmailAuthor:
    """Known only by the commit email."""

    email: str


@dataclass(frozen=True)
class UnresolvedAuthor:
    """Blame carried no usable email."""

    raw: str = ""


AuthorIdentity = Union[RegisteredAuthor, EmailAuthor, UnresolvedAuthor]


def identity_uid(identity: AuthorIdentity) -> int | None:
    if isinstance(identity, RegisteredAuthor):
        return identity.uid
    return None


def identity_email(identity: AuthorIdentity) -> str | None:
    if isinstance(identity, (RegisteredAuthor, EmailAuthor)):
        return identity.email
    return None


def author_key(identity: AuthorIdentity) -> str:
    """One key per author, whichever of their emails a commit carried.

    Registered authors group by uid, everyone else by email.
    """
    if isinstance(identity, RegisteredAuthor):
        return f"uid:{identity.uid}"
    if isinstance(identity, EmailAuthor):
        return f"email:{identity.email}"
    return f"unresolved:{identity.raw}"


class IdentityResolver(ABC):
    """Maps a blame author email onto an :data:`AuthorIdentity`."""

    @abstractmethod
    def resolve(self, email: str) -> AuthorIdentity:
        ...


class EmailIdentityResolver(IdentityResolver):
    """No user directory: every author is known by email only."""

    def resolve(self, email: str) -> AuthorIdentity:
        if not email:
            return UnresolvedAuthor(raw=email)
        return EmailAuthor(email=email)


class StaticIdentityResolver(EmailIdentityResolver):
    """Resolve against a fixed ``email -> uid`` table, falling back to email."""

    def __init__(self, users: Mapping[str, int]) -> None:
        self._users = {email.strip().lower(): uid for email, uid in users.items()}

    def resolve(self, email: str) -> AuthorIdentity:
        uid = self._users.get(email)
        if uid is not None:
            return RegisteredAuthor(uid=uid, email=email)
        return super().resolve(email)
