"""
Singleton page-fetch client with rate limiting using aiolimiter.
"""
from aiohttp import ClientSession, ClientTimeout, BasicAuth
from aiolimiter import AsyncLimiter
from typing import Optional
from loguru import logger

from company_match.config import CONCURRENCY, CRAWL_TIMEOUT, USER_AGENT, ZYTE_API_KEY, ZYTE_URL


class FetchError(Exception):
    """Raised when a page could not be fetched."""


class WebClient:
    """
    Singleton client for fetching website HTML.

    Pages are rendered through Zyte's browser API when ZYTE_API_KEY is set,
    otherwise fetched directly. Uses AsyncLimiter for rate limiting.
    """
    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not WebClient._initialized:
            self.api_key = ZYTE_API_KEY
            self.base_url = ZYTE_URL
            # Allow CONCURRENCY requests per second
            self.rate_limiter = AsyncLimiter(max_rate=CONCURRENCY, time_period=1.0)
            self._session: Optional[ClientSession] = None
            WebClient._initialized = True

    async def _get_session(self) -> ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = ClientSession(timeout=ClientTimeout(total=CRAWL_TIMEOUT))
        return self._session

    async def get_html(self, url: str) -> str:
        """
        Fetch the HTML of a page.

        Args:
            url: Absolute URL of the page.

        Returns:
            The page HTML as text.
        """
        async with self.rate_limiter:
            session = await self._get_session()
            try:
                if self.api_key:
                    return await self._get_browser_html(session, url)
                return await self._get_direct_html(session, url)
            except Exception as e:
                logger.debug(f"⚠️ Fetch failed for {url}: {e}")
                raise

    async def _get_browser_html(self, session: ClientSession, url: str) -> str:
        payload = {"url": url, "browserHtml": True}
        async with session.post(
            self.base_url,
            auth=BasicAuth(self.api_key, ""),
            json=payload,
            timeout=ClientTimeout(total=CRAWL_TIMEOUT * 6),
        ) as resp:
            data = await resp.json()

            # Zyte reports failures (bans, timeouts) as a problem document instead of a page
            if "status" in data and data.get("status") not in [200, None]:
                raise FetchError(
                    f"Zyte API error ({data.get('title', 'unknown')}): "
                    f"{data.get('detail', 'no details')}. Status: {data.get('status')}"
                )
            if "browserHtml" not in data:
                raise FetchError(f"Missing browserHtml in Zyte response. Response keys: {list(data.keys())}")
            return data["browserHtml"]

    async def _get_direct_html(self, session: ClientSession, url: str) -> str:
        async with session.get(url, headers={"User-Agent": USER_AGENT}) as resp:
            if resp.status >= 400:
                raise FetchError(f"HTTP {resp.status} for {url}")
            return await resp.text(errors="ignore")

    async def close(self):
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
