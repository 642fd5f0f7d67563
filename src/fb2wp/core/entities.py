"""Core domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class IdentityKind(str, Enum):
    """Kind of commenter identity."""

    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


@dataclass(eq=False)
class Category:
    """Blog category. Two categories are equal when their ids match."""

    id: int
    title: str
    alias: str

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Category):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


@dataclass
class Entry:
    """Single blog post."""

    id: int
    title: str
    timestamp: datetime
    content: str
    excerpt: Optional[str]
    author: str
    categories: list[Category] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)


@dataclass
class Identity:
    """Commenter identity.

    Anonymous identities are complete when created. Authenticated ones carry
    a user id and get their name filled in once by the resolver.
    """

    kind: IdentityKind
    name: Optional[str] = None
    email: Optional[str] = None
    user_id: Optional[int] = None

    @classmethod
    def anonymous(cls, name: str, email: Optional[str]) -> "Identity":
        return cls(kind=IdentityKind.ANONYMOUS, name=name, email=email)

    @classmethod
    def authenticated(cls, user_id: int, name: Optional[str] = None) -> "Identity":
        return cls(kind=IdentityKind.AUTHENTICATED, name=name, user_id=user_id)

    @property
    def is_authenticated(self) -> bool:
        return self.kind == IdentityKind.AUTHENTICATED

    @property
    def is_resolved(self) -> bool:
        return self.name is not None


class IdentityTable:
    """Owns every identity seen during a run."""

    def __init__(self) -> None:
        self._identities: list[Identity] = []

    def add(self, identity: Identity) -> "AuthorHandle":
        self._identities.append(identity)
        return AuthorHandle(self, len(self._identities) - 1)

    def get(self, index: int) -> Identity:
        return self._identities[index]

    def __len__(self) -> int:
        return len(self._identities)


@dataclass(frozen=True)
class AuthorHandle:
    """Reference from a comment to its author's entry in the identity table.

    Every comment by the same authenticated user holds an equal handle, so a
    name written during resolution is visible through all of them.
    """

    table: IdentityTable = field(repr=False, compare=False)
    index: int

    @property
    def identity(self) -> Identity:
        return self.table.get(self.index)

    @property
    def kind(self) -> IdentityKind:
        return self.identity.kind

    @property
    def name(self) -> Optional[str]:
        return self.identity.name

    @property
    def email(self) -> Optional[str]:
        return self.identity.email


@dataclass
class Comment:
    """Comment attached to an entry by id."""

    id: int
    entry_id: int
    author: AuthorHandle
    content: str
    timestamp: datetime
    ip: Optional[str] = None


@dataclass
class RawAuthor:
    """Author indicator as it appears in a source comment."""

    is_authenticated: bool
    value: str
    email: Optional[str] = None


@dataclass
class MigrationReport:
    """Summary of a finished migration run."""

    categories: int
    entries: int
    comments: int
    exported_comments: int
    looked_up_authors: int
