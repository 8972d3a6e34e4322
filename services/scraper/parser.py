from typing import Dict, List, Optional, Sequence

import aiohttp
from bs4 import BeautifulSoup, Tag

from core.exceptions import ParsingException
from core.logger import get_logger
from services.scraper.fetcher import ListingFetcher

logger = get_logger(__name__)


class ListingParser:
    """
    Turns listing HTML into a document tree and splits it into item containers.
    """

    def parse_document(self, html: str, url: str = "") -> BeautifulSoup:
        """
        Parses HTML into a BeautifulSoup tree.
        Blank or whitespace-only bodies cannot hold listings and are rejected.
        """
        if not html or not html.strip():
            raise ParsingException("Empty listing document", {"url": url})
        try:
            return BeautifulSoup(html, "html.parser")
        except Exception as e:
            raise ParsingException("Failed to parse listing document", {"url": url, "error": str(e)}) from e

    def partition_containers(
        self,
        soup: BeautifulSoup,
        container_selector: str,
        group_selector: Optional[str] = None,
        labels: Sequence[Optional[str]] = (None,),
    ) -> Dict[Optional[str], List[Tag]]:
        """
        Groups item containers under their bucket labels, in document order.

        Without a group selector every container goes to the first label.
        With one, the i-th matched group feeds the i-th label; labels
        without a group get an empty list, extra groups are ignored.
        """
        labels = list(labels) or [None]

        if not group_selector:
            containers = soup.select(container_selector)
            if not containers:
                logger.warning(f"[PARSER] No items found with selector '{container_selector}'")
            return {labels[0]: containers}

        groups = soup.select(group_selector)
        if len(groups) < len(labels):
            logger.warning(
                f"[PARSER] Expected {len(labels)} groups with selector '{group_selector}', found {len(groups)}"
            )

        partitioned: Dict[Optional[str], List[Tag]] = {}
        for index, label in enumerate(labels):
            partitioned[label] = groups[index].select(container_selector) if index < len(groups) else []
        return partitioned


class MarkupSource:
    """Fetch + parse: a URL in, a document tree out."""

    def __init__(self, fetcher: Optional[ListingFetcher] = None, parser: Optional[ListingParser] = None):
        self.fetcher = fetcher or ListingFetcher()
        self.parser = parser or ListingParser()

    async def fetch_document(self, session: aiohttp.ClientSession, url: str) -> BeautifulSoup:
        html = await self.fetcher.fetch_url(session, url)
        return self.parser.parse_document(html, url)
