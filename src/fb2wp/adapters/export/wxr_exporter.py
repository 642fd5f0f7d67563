"""WordPress WXR document builder."""

import os
import tempfile
from collections import defaultdict
from datetime import datetime, timezone
from email.utils import format_datetime
from pathlib import Path
from typing import Optional

from lxml import etree

from fb2wp.config import ExportConfig
from fb2wp.core import Category, Comment, Entry, Exporter

WP_NS = "http://wordpress.org/export/1.2/"
NSMAP = {
    "excerpt": "http://wordpress.org/export/1.2/excerpt/",
    "content": "http://purl.org/rss/1.0/modules/content/",
    "wfw": "http://wellformedweb.org/CommentAPI/",
    "dc": "http://purl.org/dc/elements/1.1/",
    "wp": WP_NS,
}

WP_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def make_slug(value: Optional[str]) -> Optional[str]:
    """Replace spaces with hyphens. Nothing else is normalized."""
    if not value:
        return value
    return value.replace(" ", "-")


def format_pub_date(timestamp: datetime) -> str:
    """RFC 1123 date in UTC, e.g. 'Mon, 15 Jan 2024 09:00:00 GMT'."""
    return format_datetime(timestamp.astimezone(timezone.utc), usegmt=True)


def format_local(timestamp: datetime) -> str:
    """Wall clock time at the timestamp's own offset."""
    return timestamp.strftime(WP_DATE_FORMAT)


def format_gmt(timestamp: datetime) -> str:
    return timestamp.astimezone(timezone.utc).strftime(WP_DATE_FORMAT)


def _cdata(text: Optional[str]):
    text = text or ""
    # CDATA sections cannot contain their own terminator
    if "]]>" in text:
        return text
    return etree.CDATA(text)


def _wp(name: str) -> str:
    return f"{{{WP_NS}}}{name}"


def _ns(prefix: str, name: str) -> str:
    return f"{{{NSMAP[prefix]}}}{name}"


class WxrExporter(Exporter):
    """Build a WXR 1.2 document from entries and comments."""

    def __init__(self, config: Optional[ExportConfig] = None) -> None:
        self.config = config or ExportConfig()

    def build(self, entries: list[Entry], comments: list[Comment]) -> etree._Element:
        """Build the complete document tree.

        Synthetic ids (post, term and comment ids) depend only on input order.
        """
        known_authors = self.known_authors(entries)
        comments_by_entry = self.group_comments(entries, comments)

        document = etree.Element("rss", version="2.0", nsmap=NSMAP)
        channel = self._channel(document)

        self._add_section(channel, "AUTHOR LIST", self._authors(known_authors))
        self._add_section(channel, "CATEGORY LIST", self._categories(self.distinct_categories(entries)))
        self._add_section(channel, "TAG LIST", self._tags(self.distinct_tags(entries)))

        for index, entry in enumerate(entries):
            channel.append(self._item(entry, index, comments_by_entry.get(entry.id, []), known_authors))

        return document

    def exported_comments(self, entries: list[Entry], comments: list[Comment]) -> int:
        return sum(len(group) for group in self.group_comments(entries, comments).values())

    def write(self, document: etree._Element, target: Path) -> None:
        """Write the document, replacing target only once it is complete."""
        target = Path(target)
        target.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                etree.ElementTree(document).write(
                    f, encoding="utf-8", xml_declaration=True, pretty_print=False
                )
            os.replace(tmp_name, target)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    @staticmethod
    def known_authors(entries: list[Entry]) -> dict[str, tuple[int, str]]:
        """Map lower-cased entry author -> (synthetic id, first-seen spelling)."""
        authors: dict[str, tuple[int, str]] = {}
        for entry in entries:
            key = entry.author.lower()
            if key not in authors:
                authors[key] = (len(authors), entry.author)
        return authors

    @staticmethod
    def distinct_categories(entries: list[Entry]) -> list[Category]:
        seen: dict[Category, None] = {}
        for entry in entries:
            for category in entry.categories:
                seen.setdefault(category, None)
        return list(seen)

    @staticmethod
    def distinct_tags(entries: list[Entry]) -> list[str]:
        seen: dict[str, None] = {}
        for entry in entries:
            for tag in entry.tags:
                seen.setdefault(tag, None)
        return list(seen)

    @staticmethod
    def group_comments(entries: list[Entry], comments: list[Comment]) -> dict[int, list[Comment]]:
        """Group comments by entry id, dropping unknown entries and empty content."""
        known_ids = {entry.id for entry in entries}
        grouped: dict[int, list[Comment]] = defaultdict(list)

        for comment in comments:
            if comment.entry_id in known_ids and comment.content:
                grouped[comment.entry_id].append(comment)

        return dict(grouped)

    def _channel(self, document: etree._Element) -> etree._Element:
        config = self.config
        channel = etree.SubElement(document, "channel")

        etree.SubElement(channel, "title").text = config.title
        etree.SubElement(channel, "link").text = config.base_blog_url
        etree.SubElement(channel, "language").text = config.language
        etree.SubElement(channel, _wp("wxr_version")).text = "1.2"
        etree.SubElement(channel, _wp("base_site_url")).text = config.base_site_url
        etree.SubElement(channel, _wp("base_blog_url")).text = config.base_blog_url
        etree.SubElement(channel, "pubDate").text = format_pub_date(datetime.now(timezone.utc))
        etree.SubElement(channel, "generator").text = config.generator

        return channel

    @staticmethod
    def _add_section(channel: etree._Element, name: str, elements: list[etree._Element]) -> None:
        channel.append(etree.Comment(f"\n\t{name}\n\t"))
        for element in elements:
            channel.append(element)
        channel.append(etree.Comment("\n\n\t"))

    def _authors(self, known_authors: dict[str, tuple[int, str]]) -> list[etree._Element]:
        elements = []
        for _, login in known_authors.values():
            author = etree.Element(_wp("author"))
            etree.SubElement(author, _wp("author_login")).text = login
            etree.SubElement(author, _wp("author_email")).text = self.config.author_email
            elements.append(author)
        return elements

    @staticmethod
    def _categories(categories: list[Category]) -> list[etree._Element]:
        elements = []
        for term_id, category in enumerate(categories):
            element = etree.Element(_wp("category"))
            etree.SubElement(element, _wp("term_id")).text = str(term_id)
            etree.SubElement(element, _wp("category_nicename")).text = category.alias
            etree.SubElement(element, _wp("category_parent")).text = ""
            etree.SubElement(element, _wp("cat_name")).text = _cdata(category.title)
            elements.append(element)
        return elements

    @staticmethod
    def _tags(tags: list[str]) -> list[etree._Element]:
        elements = []
        for term_id, tag in enumerate(tags):
            element = etree.Element(_wp("tag"))
            etree.SubElement(element, _wp("term_id")).text = str(term_id)
            etree.SubElement(element, _wp("tag_slug")).text = make_slug(tag)
            etree.SubElement(element, _wp("tag_name")).text = _cdata(tag)
            elements.append(element)
        return elements

    def _item(
        self,
        entry: Entry,
        index: int,
        comments: list[Comment],
        known_authors: dict[str, tuple[int, str]],
    ) -> etree._Element:
        permalink = f"{self.config.link_base}{index}"
        item = etree.Element("item")

        etree.SubElement(item, "title").text = entry.title
        etree.SubElement(item, "link").text = permalink
        etree.SubElement(item, "guid", isPermaLink="false").text = permalink
        etree.SubElement(item, "pubDate").text = format_pub_date(entry.timestamp)
        etree.SubElement(item, _ns("dc", "creator")).text = entry.author
        etree.SubElement(item, "description").text = ""
        etree.SubElement(item, _ns("content", "encoded")).text = _cdata(entry.content)
        etree.SubElement(item, _ns("excerpt", "encoded")).text = _cdata(entry.excerpt)

        fields = [
            ("post_id", str(index)),
            ("post_date", format_local(entry.timestamp)),
            ("post_date_gmt", format_gmt(entry.timestamp)),
            ("comment_status", "open"),
            ("ping_status", "open"),
            ("status", "publish"),
            ("post_parent", "0"),
            ("menu_order", "0"),
            ("is_sticky", "0"),
            ("post_type", "post"),
            ("post_name", make_slug(entry.title) or ""),
        ]
        for name, value in fields:
            etree.SubElement(item, _wp(name)).text = value

        for category in entry.categories:
            element = etree.SubElement(item, "category", domain="category", nicename=category.alias)
            element.text = _cdata(category.title)

        for comment_id, comment in enumerate(comments):
            item.append(self._comment(comment, comment_id, known_authors))

        for tag in entry.tags:
            element = etree.SubElement(item, "category", domain="post_tag", nicename=make_slug(tag) or "")
            element.text = _cdata(tag)

        return item

    @staticmethod
    def _comment(
        comment: Comment, comment_id: int, known_authors: dict[str, tuple[int, str]]
    ) -> etree._Element:
        name = comment.author.name or ""
        user_id = known_authors[name.lower()][0] if name and name.lower() in known_authors else 0

        fields = [
            ("comment_id", str(comment_id)),
            ("comment_author", name),
            ("comment_author_email", comment.author.email or ""),
            ("comment_author_url", ""),
            ("comment_author_IP", comment.ip or ""),
            ("comment_date", format_local(comment.timestamp)),
            ("comment_date_gmt", format_gmt(comment.timestamp)),
            ("comment_content", _cdata(comment.content)),
            ("comment_approved", "1"),
            ("comment_type", ""),
            ("comment_parent", "0"),
            ("comment_user_id", str(user_id)),
        ]

        element = etree.Element(_wp("comment"))
        for field_name, value in fields:
            etree.SubElement(element, _wp(field_name)).text = value

        return element
