import os

# Keep test runs from writing a log file; settings are read at import time
os.environ.setdefault("LOG_FILE", "")

import pytest
from typing import List, Optional
from unittest.mock import AsyncMock, MagicMock

from bs4 import BeautifulSoup


# =============================================================================
# HTML Builders
# =============================================================================


def rating_item_html(tconst: Optional[str], rating: Optional[str], title: str = "Film") -> str:
    """One .lister-item block of the advanced search page."""
    ribbon = f'<div class="ribbonize" data-tconst="{tconst}"></div>' if tconst is not None else ""
    score = (
        f'<div class="inline-block ratings-imdb-rating" name="ir" data-value="{rating}">'
        f"<strong>{rating}</strong></div>"
        if rating is not None
        else ""
    )
    return f"""
    <div class="lister-item mode-advanced">
        <div class="lister-top-right">{ribbon}</div>
        <div class="lister-item-content">
            <h3 class="lister-item-header"><a href="/title/{tconst or 'tt0'}/">{title}</a></h3>
            <div class="ratings-bar">{score}</div>
        </div>
    </div>
    """


def rating_page_html(items: List[str]) -> str:
    return f'<html><body><div class="lister-list">{"".join(items)}</div></body></html>'


def rich_item_html(
    tconst: str,
    title_year: str,
    metascore: Optional[str] = "74",
    plot: Optional[str] = "\n    A plot.  ",
    director: Optional[str] = "Some Director",
    cast: Optional[List[str]] = None,
) -> str:
    """One .list_item block of the release calendar page."""
    score = f'<span class="metascore favorable">{metascore}</span>' if metascore is not None else ""
    outline = f'<div class="outline" itemprop="description">{plot}</div>' if plot is not None else ""
    direct = (
        f'<div class="txt-block director"><h5>Director:</h5> <span><a href="/name/nm1/">{director}</a></span></div>'
        if director is not None
        else ""
    )
    stars = ""
    if cast:
        stars = '<div class="txt-block cast"><h5>Stars:</h5> ' + " | ".join(
            f'<a href="/name/nm{i}/">{name}</a>' for i, name in enumerate(cast)
        ) + "</div>"
    return f"""
    <div class="list_item">
        <h4 itemprop="name"><a href="/title/{tconst}/?ref_=cs_ov_tt"> {title_year}</a></h4>
        {score}
        {outline}
        {direct}
        {stars}
    </div>
    """


def rich_page_html(*groups: List[str]) -> str:
    body = "".join(f'<div class="list detail">{"".join(items)}</div>' for items in groups)
    return f"<html><body><div id=\"main\">{body}</div></body></html>"


# =============================================================================
# Sample Data Fixtures
# =============================================================================


@pytest.fixture
def sample_rating_html() -> str:
    """Three listings: the second has neither an id nor a usable rating."""
    return rating_page_html(
        [
            rating_item_html("tt1", "8.1", "First"),
            rating_item_html(None, "", "Second"),
            rating_item_html("tt3", "7.4", "Third"),
        ]
    )


@pytest.fixture
def sample_rating_soup(sample_rating_html) -> BeautifulSoup:
    return BeautifulSoup(sample_rating_html, "html.parser")


@pytest.fixture
def sample_rich_html() -> str:
    return rich_page_html(
        [
            rich_item_html(
                "tt1160419",
                "Dune (2021)",
                metascore="74",
                plot="\n    Feature adaptation of Frank Herbert's\n    novel.  ",
                director="Denis Villeneuve",
                cast=["Timothée Chalamet", "Rebecca Ferguson"],
            ),
            rich_item_html("tt0000002", "Untitled", metascore="tbd", plot=None, director=None),
        ],
        [
            rich_item_html("tt0000003", "Older Film (2020)", cast=["Someone"]),
        ],
    )


@pytest.fixture
def sample_rich_soup(sample_rich_html) -> BeautifulSoup:
    return BeautifulSoup(sample_rich_html, "html.parser")


# =============================================================================
# Mock Fixtures - External Services
# =============================================================================


def make_response(status: int = 200, text: str = "", reason: str = "OK") -> MagicMock:
    response = MagicMock()
    response.status = status
    response.reason = reason
    response.text = AsyncMock(return_value=text)
    return response


@pytest.fixture
def mock_aiohttp_session():
    """Mock aiohttp ClientSession; get/post return async context managers."""
    session = MagicMock()
    response = make_response(200, "<html><body>Test HTML</body></html>")

    session.get.return_value.__aenter__.return_value = response
    session.get.return_value.__aexit__.return_value = False
    session.post.return_value.__aenter__.return_value = response
    session.post.return_value.__aexit__.return_value = False

    return session


@pytest.fixture
def fake_source():
    """Markup source returning a preset soup."""

    class FakeSource:
        def __init__(self):
            self.soup = None
            self.urls = []

        async def fetch_document(self, session, url):
            self.urls.append(url)
            return self.soup

    return FakeSource()


@pytest.fixture
def fake_notifier():
    notifier = MagicMock()
    notifier.send = AsyncMock(return_value=True)
    return notifier


@pytest.fixture
def rating_page_builder():
    """Builds a rating page with n numbered listings (tt0, tt1, ...)."""

    def build(count: int) -> BeautifulSoup:
        items = [rating_item_html(f"tt{i}", f"{5 + (i % 5)}.{i % 10}", f"Film {i}") for i in range(count)]
        return BeautifulSoup(rating_page_html(items), "html.parser")

    return build


@pytest.fixture
def rich_page_builder():
    """Builds a release calendar page; one argument per group, giving its item count."""

    def build(*counts: int) -> BeautifulSoup:
        groups = [
            [rich_item_html(f"tt{g}{i:03d}", f"Film {g}-{i} (2024)") for i in range(count)]
            for g, count in enumerate(counts)
        ]
        return BeautifulSoup(rich_page_html(*groups), "html.parser")

    return build
