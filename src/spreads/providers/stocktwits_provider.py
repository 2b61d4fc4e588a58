"""StockTwits trending symbols client."""

import httpx

from spreads.providers.http import get_json, parse
from spreads.providers.schemas import StockTwitsSymbol, StockTwitsTrending

PROVIDER = "stocktwits"


class StockTwitsProvider:
    def __init__(self, client: httpx.AsyncClient, url: str, timeout: float = 5.0):
        self._client = client
        self._url = url
        self._timeout = timeout

    async def get_trending(self) -> list[StockTwitsSymbol]:
        payload = await get_json(self._client, PROVIDER, self._url, timeout=self._timeout)
        return parse(PROVIDER, StockTwitsTrending, payload).symbols
