"""Tests for author resolution."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from fb2wp.core import AuthorResolver, IdentityKind, LookupFailure, NameLookup, ParseError, RawAuthor


class CountingLookup(NameLookup):
    """Lookup that tracks how many calls run at the same time."""

    def __init__(self) -> None:
        self.active = 0
        self.max_active = 0
        self.calls: list[int] = []

    async def lookup_name(self, user_id: int) -> str:
        self.calls.append(user_id)
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        await asyncio.sleep(0.01)
        self.active -= 1
        return f"user-{user_id}"


def test_anonymous_author_is_complete() -> None:
    """Anonymous authors get name and email right away."""
    resolver = AuthorResolver(lookup=AsyncMock())

    handle = resolver.resolve_author(RawAuthor(False, "Bob", "bob@x.com"))

    assert handle.kind == IdentityKind.ANONYMOUS
    assert handle.name == "Bob"
    assert handle.email == "bob@x.com"
    assert resolver.pending() == []


def test_authenticated_author_is_shared() -> None:
    """The same user id always maps to the same handle."""
    resolver = AuthorResolver(lookup=AsyncMock())

    first = resolver.resolve_author(RawAuthor(True, "42"))
    second = resolver.resolve_author(RawAuthor(True, " 42 "))

    assert first == second
    assert first.name is None
    assert len(resolver.pending()) == 1


def test_authenticated_author_needs_numeric_id() -> None:
    """A non-numeric authenticated id is a parse error."""
    resolver = AuthorResolver(lookup=AsyncMock())

    with pytest.raises(ParseError):
        resolver.resolve_author(RawAuthor(True, "jane"))


@pytest.mark.asyncio
async def test_flush_resolves_once_per_user() -> None:
    """Each pending id is looked up exactly once and seen by all handles."""
    lookup = AsyncMock()
    lookup.lookup_name.return_value = "Jane"
    resolver = AuthorResolver(lookup=lookup)

    first = resolver.resolve_author(RawAuthor(True, "42"))
    second = resolver.resolve_author(RawAuthor(True, "42"))

    await resolver.flush()
    await resolver.flush()

    lookup.lookup_name.assert_called_once_with(42)
    assert first.name == "Jane"
    assert second.name == "Jane"
    assert resolver.looked_up == 1


@pytest.mark.asyncio
async def test_cached_names_are_not_looked_up() -> None:
    """Ids present in the cache keep their cached name."""
    lookup = AsyncMock()
    resolver = AuthorResolver(lookup=lookup, cache={42: "Cached Jane"})

    handle = resolver.resolve_author(RawAuthor(True, "42"))
    await resolver.flush()

    lookup.lookup_name.assert_not_called()
    assert handle.name == "Cached Jane"


@pytest.mark.asyncio
async def test_failed_lookup_falls_back_to_id() -> None:
    """A failing lookup leaves the stringified id as the name."""
    lookup = AsyncMock()
    lookup.lookup_name.side_effect = LookupFailure(42, "connection refused")
    resolver = AuthorResolver(lookup=lookup)

    handle = resolver.resolve_author(RawAuthor(True, "42"))
    await resolver.flush()

    assert handle.name == "42"
    assert resolver.cached_names() == {42: "42"}


@pytest.mark.asyncio
async def test_one_failure_does_not_stop_others() -> None:
    """Other lookups complete even when one raises."""
    async def lookup_name(user_id: int) -> str:
        if user_id == 1:
            raise RuntimeError("boom")
        return f"name-{user_id}"

    lookup = AsyncMock()
    lookup.lookup_name.side_effect = lookup_name
    resolver = AuthorResolver(lookup=lookup)

    for user_id in ("1", "2", "3"):
        resolver.resolve_author(RawAuthor(True, user_id))

    await resolver.flush()

    assert resolver.cached_names() == {1: "1", 2: "name-2", 3: "name-3"}


@pytest.mark.asyncio
async def test_flush_is_bounded() -> None:
    """No more than `concurrency` lookups run at once."""
    lookup = CountingLookup()
    resolver = AuthorResolver(lookup=lookup, concurrency=3)

    for user_id in range(1, 11):
        resolver.resolve_author(RawAuthor(True, str(user_id)))

    await resolver.flush()

    assert sorted(lookup.calls) == list(range(1, 11))
    assert lookup.max_active <= 3
    assert resolver.pending() == []


@pytest.mark.asyncio
async def test_user_zero_is_not_looked_up() -> None:
    """User id 0 gets the fallback name without a lookup."""
    lookup = AsyncMock()
    resolver = AuthorResolver(lookup=lookup)

    handle = resolver.resolve_author(RawAuthor(True, "0"))
    await resolver.flush()

    lookup.lookup_name.assert_not_called()
    assert handle.name == "0"
    assert resolver.looked_up == 0


@pytest.mark.asyncio
async def test_looked_up_counts_only_fetched_ids() -> None:
    """User id 0 is not counted next to a real lookup."""
    lookup = AsyncMock()
    lookup.lookup_name.return_value = "Jane"
    resolver = AuthorResolver(lookup=lookup)

    resolver.resolve_author(RawAuthor(True, "0"))
    resolver.resolve_author(RawAuthor(True, "42"))
    await resolver.flush()

    lookup.lookup_name.assert_called_once_with(42)
    assert resolver.looked_up == 1
