"""Freeblog XML export reader."""

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from pathlib import Path
from typing import Optional
from xml.etree import ElementTree as ET

from fb2wp.core import (
    AuthorResolver,
    Category,
    Comment,
    Entry,
    Importer,
    ParseError,
    RawAuthor,
)

EXPORT_NS = "http://enyim.com/schemas/blossom/export/2008"
ENYIM_NS = "http://enyim.com/schemas/rss/core/2006"

ITEM_PATH = "channel/item"


def parse_timestamp(value: Optional[str], document: str) -> datetime:
    """Parse an RSS pubDate (RFC 822), accepting ISO 8601 as well.

    Values without an offset are taken as UTC.
    """
    if not value or not value.strip():
        raise ParseError("missing pubDate", document)

    value = value.strip()
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise ParseError(f"malformed timestamp {value!r}", document) from None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)

    return parsed


class FreeblogImporter(Importer):
    """Read categories.xml, entries.xml and comments.xml from an export directory."""

    CATEGORIES_FILE = "categories.xml"
    ENTRIES_FILE = "entries.xml"
    COMMENTS_FILE = "comments.xml"

    def __init__(self, root: Path, resolver: AuthorResolver) -> None:
        self.root = Path(root)
        self.resolver = resolver
        self._category_map: Optional[dict[str, Category]] = None

    def read_categories(self) -> set[Category]:
        """Read categories and remember them for entry lookups."""
        document = self.CATEGORIES_FILE
        categories: dict[str, Category] = {}

        for item in self._items(document):
            category = Category(
                id=self._int_field(item, "guid", document),
                alias=self._required_text(item, f"{{{ENYIM_NS}}}alias", document),
                title=self._required_text(item, "title", document),
            )
            categories.setdefault(str(category.id), category)

        self._category_map = categories
        return set(categories.values())

    def read_entries(self) -> list[Entry]:
        """Read entries, resolving category references by id."""
        if self._category_map is None:
            self.read_categories()

        document = self.ENTRIES_FILE
        entries: list[Entry] = []

        for item in self._items(document):
            entry_id = self._int_field(item, "guid", document)

            categories = []
            for category_elem in item.findall("category"):
                key = (category_elem.text or "").strip()
                category = self._category_map.get(key)
                if category is None:
                    raise ParseError(
                        f"entry {entry_id} references unknown category {key!r}", document
                    )
                categories.append(category)

            entries.append(Entry(
                id=entry_id,
                title=self._text(item, "title") or "",
                timestamp=parse_timestamp(self._text(item, "pubDate"), document),
                content=self._text(item, "description") or "",
                excerpt=self._text(item, f"{{{ENYIM_NS}}}excerpt"),
                author=self._text(item, "author") or "",
                categories=categories,
                tags=[tag.text or "" for tag in item.findall(f"{{{ENYIM_NS}}}tag")],
            ))

        return entries

    def read_comments(self) -> list[Comment]:
        """Read comments. Comments of unknown entries are kept here."""
        document = self.COMMENTS_FILE
        comments: list[Comment] = []

        for item in self._items(document):
            author_elem = item.find("author")
            if author_elem is None:
                raise ParseError("comment without author", document)

            raw_author = RawAuthor(
                is_authenticated=author_elem.get("isAuthenticated") == "true",
                value=author_elem.text or "",
                email=self._text(item, f"{{{EXPORT_NS}}}email"),
            )

            try:
                author = self.resolver.resolve_author(raw_author)
            except ParseError as e:
                raise ParseError(str(e), document) from e

            comments.append(Comment(
                id=self._int_field(item, "guid", document),
                entry_id=self._int_field(item, f"{{{EXPORT_NS}}}entry", document),
                author=author,
                content=self._text(item, "description") or "",
                timestamp=parse_timestamp(self._text(item, "pubDate"), document),
                ip=self._text(item, f"{{{EXPORT_NS}}}ip"),
            ))

        return comments

    def _items(self, document: str) -> list[ET.Element]:
        path = self.root / document
        if not path.exists():
            raise ParseError("document not found", document)

        try:
            root = ET.parse(path).getroot()
        except ET.ParseError as e:
            raise ParseError(f"malformed XML: {e}", document) from e

        return root.findall(ITEM_PATH)

    @staticmethod
    def _text(item: ET.Element, tag: str) -> Optional[str]:
        elem = item.find(tag)
        if elem is None:
            return None
        return elem.text or ""

    def _required_text(self, item: ET.Element, tag: str, document: str) -> str:
        value = self._text(item, tag)
        if value is None:
            raise ParseError(f"item is missing required field {tag!r}", document)
        return value

    def _int_field(self, item: ET.Element, tag: str, document: str) -> int:
        value = self._required_text(item, tag, document)
        try:
            return int(value.strip())
        except ValueError:
            raise ParseError(f"field {tag!r} is not a number: {value!r}", document) from None
