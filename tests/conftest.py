from pathlib import Path
from typing import Dict, Optional, Union
from urllib.parse import parse_qs, urlparse

import pytest

from jobcrawler.core.config import Settings
from jobcrawler.core.exceptions import BrowserUnavailableError, RenderError
from jobcrawler.services.renderer import BaseRenderer

FIXTURES = Path(__file__).parent / "fixtures"

Page = Union[str, Exception]


def load_fixture(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


class FakeRenderer(BaseRenderer):
    """Serves canned HTML by listing page index or detail job id"""

    name = "fake"

    def __init__(
        self,
        listings: Optional[Dict[int, Page]] = None,
        details: Optional[Dict[str, Page]] = None,
        fail_open: bool = False,
    ):
        super().__init__()
        self.listings = listings or {}
        self.details = details or {}
        self.fail_open = fail_open
        self.rendered = []
        self.open_calls = 0
        self.close_calls = 0
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self):
        self.open_calls += 1
        if self.fail_open:
            raise BrowserUnavailableError("Failed to initialize browser: chrome not found")
        self._open = True

    def close(self):
        self.close_calls += 1
        self._open = False

    def render(self, url, headers=None, timeout=None, wait_selector=None) -> str:
        self.rendered.append(url)
        query = parse_qs(urlparse(url).query)
        if "/viewjob" in url:
            page = self.details.get(query["jk"][0])
        else:
            page = self.listings.get(int(query.get("start", ["0"])[0]) // 10)

        if page is None:
            raise RenderError(url, "page not found")
        if isinstance(page, Exception):
            raise page
        return page


class RecordingSleep:
    def __init__(self):
        self.calls = []

    def __call__(self, seconds: float):
        self.calls.append(seconds)


@pytest.fixture
def fast_settings() -> Settings:
    return Settings(
        LISTING_DELAY_MIN=0.0,
        LISTING_DELAY_MAX=0.0,
        DETAIL_DELAY_MIN=0.0,
        DETAIL_DELAY_MAX=0.0,
        SETTLE_DELAY_MIN=0.0,
        SETTLE_DELAY_MAX=0.0,
        MAX_PAGES=10,
        MAX_ITEMS_PER_RUN=10,
    )


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def detail_html() -> str:
    return load_fixture("detail_page.html")


@pytest.fixture
def detail_dom_html() -> str:
    return load_fixture("detail_page_dom.html")


@pytest.fixture
def site_renderer() -> FakeRenderer:
    """Two listing pages and one detail page per outcome: parsed, parsed, skipped, failed."""
    return FakeRenderer(
        listings={
            0: load_fixture("listing_page.html"),
            1: load_fixture("listing_page_2.html"),
        },
        details={
            "a1b2c3": load_fixture("detail_page.html"),
            "d4e5f6": load_fixture("detail_page_dom.html"),
            "g7h8i9": load_fixture("detail_page_no_title.html"),
            "j0k1l2": RenderError("https://jp.indeed.com/viewjob?jk=j0k1l2", "page load timed out after 30s"),
        },
    )
