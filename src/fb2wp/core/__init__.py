"""Core domain layer."""

from fb2wp.core.author_cache import load_cache, persist_cache
from fb2wp.core.author_resolver import AuthorResolver
from fb2wp.core.entities import (
    AuthorHandle,
    Category,
    Comment,
    Entry,
    Identity,
    IdentityKind,
    IdentityTable,
    MigrationReport,
    RawAuthor,
)
from fb2wp.core.errors import Fb2WpError, LookupFailure, ParseError, UsageError
from fb2wp.core.interfaces import Exporter, Importer, NameLookup

__all__ = [
    "Category",
    "Entry",
    "Comment",
    "Identity",
    "IdentityKind",
    "IdentityTable",
    "AuthorHandle",
    "RawAuthor",
    "MigrationReport",
    "Importer",
    "Exporter",
    "NameLookup",
    "AuthorResolver",
    "load_cache",
    "persist_cache",
    "Fb2WpError",
    "UsageError",
    "ParseError",
    "LookupFailure",
]
