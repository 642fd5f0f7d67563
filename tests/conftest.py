"""Shared fixtures: a small Freeblog export on disk."""

from pathlib import Path

import pytest

CATEGORIES_XML = """<?xml version="1.0" encoding="utf-8"?>
<rss version="2.0" xmlns:enyim="http://enyim.com/schemas/rss/core/2006">
  <channel>
    <title>categories</title>
    <item>
      <guid>1</guid>
      <title>News</title>
      <enyim:alias>news</enyim:alias>
    </item>
    <item>
      <guid>2</guid>
      <title>Travel Notes</title>
      <enyim:alias>travel-notes</enyim:alias>
    </item>
  </channel>
</rss>
"""

ENTRIES_XML = """<?xml version="1.0" encoding="utf-8"?>
<rss version="2.0" xmlns:enyim="http://enyim.com/schemas/rss/core/2006">
  <channel>
    <item>
      <guid>100</guid>
      <title>Hello</title>
      <pubDate>Mon, 15 Jan 2024 10:00:00 +0100</pubDate>
      <description>body</description>
      <author>Jane</author>
      <category>1</category>
      <enyim:tag>intro</enyim:tag>
    </item>
    <item>
      <guid>101</guid>
      <title>Second post</title>
      <pubDate>Tue, 16 Jan 2024 18:30:00 +0100</pubDate>
      <description>&lt;p&gt;more&lt;/p&gt;</description>
      <enyim:excerpt>short</enyim:excerpt>
      <author>jane</author>
      <category>1</category>
      <category>2</category>
      <enyim:tag>intro</enyim:tag>
      <enyim:tag>long read</enyim:tag>
    </item>
  </channel>
</rss>
"""

COMMENTS_XML = """<?xml version="1.0" encoding="utf-8"?>
<rss version="2.0" xmlns:export="http://enyim.com/schemas/blossom/export/2008">
  <channel>
    <item>
      <guid>200</guid>
      <export:entry>100</export:entry>
      <author>Bob</author>
      <export:email>bob@x.com</export:email>
      <export:ip>10.0.0.1</export:ip>
      <description>nice post</description>
      <pubDate>Mon, 15 Jan 2024 12:00:00 +0100</pubDate>
    </item>
    <item>
      <guid>201</guid>
      <export:entry>999</export:entry>
      <author>Ghost</author>
      <description>lost comment</description>
      <pubDate>Mon, 15 Jan 2024 12:05:00 +0100</pubDate>
    </item>
    <item>
      <guid>202</guid>
      <export:entry>100</export:entry>
      <author isAuthenticated="true">42</author>
      <description>thanks</description>
      <pubDate>Mon, 15 Jan 2024 13:00:00 +0100</pubDate>
    </item>
    <item>
      <guid>203</guid>
      <export:entry>101</export:entry>
      <author isAuthenticated="true">42</author>
      <description>again</description>
      <pubDate>Tue, 16 Jan 2024 19:00:00 +0100</pubDate>
    </item>
    <item>
      <guid>204</guid>
      <export:entry>101</export:entry>
      <author>Quiet</author>
      <description></description>
      <pubDate>Tue, 16 Jan 2024 19:10:00 +0100</pubDate>
    </item>
  </channel>
</rss>
"""


def write_export(
    directory: Path,
    categories: str = CATEGORIES_XML,
    entries: str = ENTRIES_XML,
    comments: str = COMMENTS_XML,
) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "categories.xml").write_text(categories, encoding="utf-8")
    (directory / "entries.xml").write_text(entries, encoding="utf-8")
    (directory / "comments.xml").write_text(comments, encoding="utf-8")
    return directory


@pytest.fixture
def export_dir(tmp_path: Path) -> Path:
    """Freeblog export with two entries and five comments."""
    return write_export(tmp_path / "export")
