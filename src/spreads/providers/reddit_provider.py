"""Reddit public JSON client."""

import logging

import httpx

from spreads.providers.http import get_json, parse
from spreads.providers.schemas import RedditListing, RedditPostData

logger = logging.getLogger(__name__)

PROVIDER = "reddit"


class RedditProvider:
    """Subreddit search and listing over reddit.com's JSON endpoints."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        user_agent: str,
        base_url: str = "https://www.reddit.com",
        timeout: float = 10.0,
    ):
        self._client = client
        self._headers = {"User-Agent": user_agent, "Accept": "application/json"}
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def _listing(self, path: str, params: dict) -> RedditListing:
        payload = await get_json(
            self._client,
            PROVIDER,
            f"{self._base_url}{path}",
            params=params,
            timeout=self._timeout,
            headers=self._headers,
        )
        return parse(PROVIDER, RedditListing, payload)

    async def search_posts(
        self, subreddit: str, symbol: str, time_filter: str
    ) -> list[RedditPostData]:
        listing = await self._listing(
            f"/r/{subreddit}/search.json",
            {"q": symbol, "sort": "new", "t": time_filter, "limit": 100, "restrict_sr": "on"},
        )
        return [child.data for child in listing.data.children]

    async def count_recent_posts(self, subreddit: str, time_filter: str) -> int:
        listing = await self._listing(
            f"/r/{subreddit}/new.json", {"limit": 100, "t": time_filter}
        )
        return len(listing.data.children)
