"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from fb2wp.core.entities import Category, Comment, Entry


class Importer(ABC):
    """Interface for reading a blog export into entities."""

    @abstractmethod
    def read_categories(self) -> set[Category]:
        """Read all categories."""
        pass

    @abstractmethod
    def read_entries(self) -> list[Entry]:
        """Read all entries with their categories resolved."""
        pass

    @abstractmethod
    def read_comments(self) -> list[Comment]:
        """Read all comments, registering their authors with the resolver."""
        pass


class Exporter(ABC):
    """Interface for producing the target document."""

    @abstractmethod
    def build(self, entries: list[Entry], comments: list[Comment]) -> Any:
        """Build the output document from a complete entity set."""
        pass

    @abstractmethod
    def exported_comments(self, entries: list[Entry], comments: list[Comment]) -> int:
        """Number of comments build() puts into the document."""
        pass

    @abstractmethod
    def write(self, document: Any, target: Path) -> None:
        """Write a built document to the target path."""
        pass


class NameLookup(ABC):
    """Interface for resolving an authenticated user id to a display name."""

    @abstractmethod
    async def lookup_name(self, user_id: int) -> str:
        """Return the display name for user_id. May raise on failure."""
        pass
