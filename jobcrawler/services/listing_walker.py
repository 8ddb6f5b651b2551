"""
Walks search-result pages and collects job identifiers
"""
import logging
import random
import time
from typing import Callable, List, Optional
from urllib.parse import urlencode

from bs4 import BeautifulSoup

from jobcrawler.core.config import Settings, settings as default_settings
from jobcrawler.core.exceptions import RenderError
from jobcrawler.models.company_model import dedupe
from jobcrawler.models.crawl_model import CrawlRun, PageResult, StageOutcome
from jobcrawler.services.renderer import BaseRenderer

logger = logging.getLogger(__name__)

RESULTS_PER_PAGE = 10
JOB_ID_SELECTOR = "[data-jk]"
LISTING_WAIT_SELECTOR = "[data-jk], #mosaic-provider-jobcards"


def clamp_pages(requested: int, ceiling: int) -> int:
    """Number of pages to walk: never negative, never above the ceiling."""
    return max(0, min(requested, ceiling))


def build_listing_url(base_url: str, query: str, location: str, page: int) -> str:
    params = urlencode({"q": query, "l": location, "start": page * RESULTS_PER_PAGE})
    return f"{base_url.rstrip('/')}/jobs?{params}"


def parse_job_ids(page_html: str) -> List[str]:
    """Job identifiers on a listing page, in page order without repeats."""
    soup = BeautifulSoup(page_html or "", "html.parser")
    return dedupe([card.get("data-jk", "").strip() for card in soup.select(JOB_ID_SELECTOR)])


class ListingWalker:
    def __init__(
        self,
        renderer: BaseRenderer,
        settings: Optional[Settings] = None,
        sleep: Callable[[float], None] = time.sleep,
        rng: Optional[random.Random] = None,
    ):
        self.renderer = renderer
        self.settings = settings or default_settings
        self.sleep = sleep
        self.rng = rng or random.Random()

    def walk(self, run: CrawlRun) -> List[str]:
        """
        Render every listing page of the run and append new identifiers to it.

        A page that fails to render or parse is recorded as failed and the walk
        moves on to the next one.

        Returns:
            All identifiers collected in this run, in discovery order
        """
        for page in range(run.page_count):
            url = build_listing_url(self.settings.BASE_URL, run.search_query, run.location, page)
            logger.info(f"Navigating to page {page + 1}/{run.page_count}: {url}")
            run.record_page(self._walk_page(run, page, url))

            if page < run.page_count - 1:
                delay = self.rng.uniform(self.settings.LISTING_DELAY_MIN, self.settings.LISTING_DELAY_MAX)
                logger.debug(f"Waiting {delay:.1f}s before next page")
                self.sleep(delay)

        logger.info(f"Collected {len(run.job_ids)} job ids from {run.counts.pages_succeeded}/{run.page_count} pages")
        return run.job_ids

    def _walk_page(self, run: CrawlRun, page: int, url: str) -> PageResult:
        try:
            page_html = self.renderer.render(
                url,
                timeout=self.settings.LISTING_TIMEOUT,
                wait_selector=LISTING_WAIT_SELECTOR,
            )
            ids = parse_job_ids(page_html)
        except RenderError as e:
            logger.error(f"Error loading listing page {page + 1}: {e.reason}")
            return PageResult(page=page, url=url, outcome=StageOutcome.FAILED, error=str(e))
        except Exception as e:
            logger.error(f"Error processing listing page {page + 1}: {e}")
            return PageResult(page=page, url=url, outcome=StageOutcome.FAILED, error=str(e))

        if not ids:
            logger.warning(f"No job cards found on page {page + 1}")
        new_ids = run.add_job_ids(ids)
        logger.info(f"Found {len(ids)} job ids on page {page + 1} ({new_ids} new)")
        return PageResult(page=page, url=url, outcome=StageOutcome.SUCCESS, new_ids=new_ids)
