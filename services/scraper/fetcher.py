import aiohttp
import asyncio
from core.config import settings
from core.logger import get_logger
from core.exceptions import NetworkException

logger = get_logger(__name__)


class ListingFetcher:
    """
    Handles network operations for fetching listing pages.
    One attempt per call; a failed fetch is fatal to the run.
    """
    def __init__(self, timeout: int = None):
        total = timeout or settings.FETCH_TIMEOUT
        self.timeout = aiohttp.ClientTimeout(total=total, connect=10)
        self.headers = {
            "User-Agent": settings.USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": settings.ACCEPT_LANGUAGE,
        }

    async def create_session(self) -> aiohttp.ClientSession:
        """Creates and returns a new aiohttp session."""
        return aiohttp.ClientSession(timeout=self.timeout, headers=self.headers)

    async def fetch_url(self, session: aiohttp.ClientSession, url: str) -> str:
        """
        Fetches URL content; any non-2xx status is an error.
        """
        try:
            async with session.get(url) as resp:
                if resp.status // 100 != 2:
                    raise NetworkException(
                        f"Status code error: {resp.status} {resp.reason}",
                        {"url": url, "status": resp.status},
                    )
                html = await resp.text()
                logger.info(f"[FETCHER] Fetched {len(html)} chars", context={"url": url})
                return html
        except asyncio.TimeoutError:
            raise NetworkException(f"Timeout fetching {url}", {"url": url})
        except aiohttp.ClientError as e:
            raise NetworkException(f"HTTP error fetching {url}", {"url": url, "error": str(e)})
