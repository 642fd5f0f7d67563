"""Freeblog profile page lookup for authenticated commenter names."""

import httpx
from bs4 import BeautifulSoup

from fb2wp.core import LookupFailure, NameLookup


class FreeblogProfileLookup(NameLookup):
    """Scrape the display name from a Freeblog profile page."""

    # Heading prefix shown for users without a public name ("Ez a felhasználó ...")
    NO_PUBLIC_NAME_MARKER = "Ez a "
    TITLE_SUFFIXES = (" bloggerina", " blogger")

    def __init__(
        self,
        profile_url: str = "http://admin.freeblog.hu/profile/{user_id}/",
        timeout: float = 30.0,
    ) -> None:
        self.profile_url = profile_url
        self.timeout = timeout

    async def lookup_name(self, user_id: int) -> str:
        """Fetch the profile page of user_id and extract the display name."""
        url = self.profile_url.format(user_id=user_id)

        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            try:
                response = await client.get(url)
                response.raise_for_status()
            except httpx.HTTPError as e:
                raise LookupFailure(user_id, str(e) or e.__class__.__name__) from e

        return self.extract_name(response.text, user_id)

    def extract_name(self, html: str, user_id: int) -> str:
        """Pull the display name out of the first <h1> of a profile page."""
        soup = BeautifulSoup(html, "html.parser")
        heading = soup.find("h1")

        if heading is None:
            raise LookupFailure(user_id, "no <h1> on profile page")

        # Collapse line breaks and runs of spaces inside the heading
        name = " ".join(heading.get_text().split())

        if not name or name.startswith(self.NO_PUBLIC_NAME_MARKER):
            return str(user_id)

        for suffix in self.TITLE_SUFFIXES:
            name = name.replace(suffix, "")

        return name


class StaticNameLookup(NameLookup):
    """Offline lookup: every user is named by their id."""

    async def lookup_name(self, user_id: int) -> str:
        return str(user_id)
