"""Error types raised during a migration run."""

from typing import Optional


class Fb2WpError(Exception):
    """Base class for all converter errors."""


class UsageError(Fb2WpError):
    """Invalid command line usage or driver configuration."""


class ParseError(Fb2WpError, ValueError):
    """A source document or the author cache could not be parsed.

    Always fatal: the run aborts before anything is written.
    """

    def __init__(self, message: str, document: Optional[str] = None) -> None:
        self.document = document
        if document:
            message = f"{document}: {message}"
        super().__init__(message)


class LookupFailure(Fb2WpError):
    """An author-name lookup did not produce a name."""

    def __init__(self, user_id: int, reason: str) -> None:
        self.user_id = user_id
        self.reason = reason
        super().__init__(f"Lookup for user {user_id} failed: {reason}")
