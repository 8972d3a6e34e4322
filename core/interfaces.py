"""
Protocol-based interfaces for Dependency Injection.
The listing service depends on these, so tests can swap in fakes.
"""
from typing import Protocol, runtime_checkable

import aiohttp
from bs4 import BeautifulSoup


@runtime_checkable
class IMarkupSource(Protocol):
    """Interface for anything that turns a URL into a document tree."""

    async def fetch_document(self, session: aiohttp.ClientSession, url: str) -> BeautifulSoup:
        """Fetches and parses the page. Raises SourceUnavailableException."""
        ...


@runtime_checkable
class INotifier(Protocol):
    """Interface for payload delivery."""

    async def send(self, session: aiohttp.ClientSession, payload: str) -> bool:
        """Delivers an already serialized payload. Raises DeliveryException."""
        ...
