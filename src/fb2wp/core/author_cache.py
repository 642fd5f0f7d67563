"""Persistent cache of resolved author names."""

import re
from pathlib import Path

from fb2wp.core.errors import ParseError


def load_cache(path: Path) -> dict[int, str]:
    """Load the id -> name mapping from a tab separated file.

    A missing file yields an empty mapping. Malformed lines raise ParseError.
    """
    if not path.exists():
        return {}

    cache: dict[int, str] = {}

    with open(path, "r", encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            line = line.rstrip("\r\n")
            if not line.strip():
                continue

            parts = line.split("\t", 1)
            if len(parts) != 2:
                raise ParseError(f"line {line_number}: expected '<id>\\t<name>'", path.name)

            try:
                user_id = int(parts[0])
            except ValueError:
                raise ParseError(
                    f"line {line_number}: invalid user id {parts[0]!r}", path.name
                ) from None

            cache[user_id] = parts[1]

    return cache


def _clean_name(name: str) -> str:
    """Names are stored on a single tab separated line."""
    return re.sub(r"[\t\r\n]+", " ", name).strip()


def persist_cache(path: Path, mapping: dict[int, str]) -> None:
    """Overwrite the cache file with the given mapping.

    Tabs and line breaks inside names are replaced with spaces.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        for user_id, name in mapping.items():
            f.write(f"{user_id}\t{_clean_name(name)}\n")
