"""Resolution of comment authors to identities."""

import asyncio
from typing import Optional

from fb2wp.core.entities import AuthorHandle, Identity, IdentityTable, RawAuthor
from fb2wp.core.errors import ParseError
from fb2wp.core.interfaces import NameLookup


class AuthorResolver:
    """Turn raw comment authors into identities and enrich authenticated names.

    Authenticated users are registered once per user id; every comment by the
    same user shares one handle. Names already in the cache are reused and
    never looked up again.
    """

    def __init__(
        self,
        lookup: NameLookup,
        cache: Optional[dict[int, str]] = None,
        concurrency: int = 8,
    ) -> None:
        self.lookup = lookup
        self.concurrency = max(1, concurrency)
        self.table = IdentityTable()
        self._by_user_id: dict[int, AuthorHandle] = {}
        self.looked_up = 0

        for user_id, name in (cache or {}).items():
            self._by_user_id[user_id] = self.table.add(Identity.authenticated(user_id, name))

    def resolve_author(self, raw: RawAuthor) -> AuthorHandle:
        """Return the handle for a raw author, registering it if needed."""
        if not raw.is_authenticated:
            return self.table.add(Identity.anonymous(raw.value, raw.email))

        try:
            user_id = int(raw.value.strip())
        except ValueError:
            raise ParseError(f"invalid authenticated user id {raw.value!r}") from None

        handle = self._by_user_id.get(user_id)
        if handle is None:
            handle = self.table.add(Identity.authenticated(user_id))
            self._by_user_id[user_id] = handle

        return handle

    def pending(self) -> list[Identity]:
        """Authenticated identities still waiting for a name."""
        return [
            handle.identity
            for handle in self._by_user_id.values()
            if not handle.identity.is_resolved
        ]

    async def flush(self) -> None:
        """Look up every unresolved name and wait until all lookups finish.

        A failed lookup leaves the user id as the name.
        """
        pending = self.pending()
        if not pending:
            return

        print(f"\n👤 Looking up {len(pending)} author names (up to {self.concurrency} at once)")

        semaphore = asyncio.Semaphore(self.concurrency)
        await asyncio.gather(*(self._resolve(identity, semaphore) for identity in pending))

    async def _resolve(self, identity: Identity, semaphore: asyncio.Semaphore) -> None:
        user_id = identity.user_id
        fallback = str(user_id)

        if not user_id:
            identity.name = fallback
            return

        async with semaphore:
            self.looked_up += 1
            try:
                identity.name = await self.lookup.lookup_name(user_id)
                print(f"  ✓ {user_id}: {identity.name}")
            except Exception as e:
                print(f"  ⚠️  {user_id}: {e}")
                identity.name = fallback

    def cached_names(self) -> dict[int, str]:
        """Current id -> name mapping of resolved authenticated users."""
        return {
            user_id: handle.name
            for user_id, handle in self._by_user_id.items()
            if handle.name is not None
        }
