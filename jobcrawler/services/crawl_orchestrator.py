"""
One crawl run: acquire the renderer, walk listings, fetch details, summarize
"""
import logging
from typing import Optional

from jobcrawler.core.config import Settings, settings as default_settings
from jobcrawler.core.exceptions import BrowserUnavailableError
from jobcrawler.models.crawl_model import CrawlResult, CrawlRun
from jobcrawler.services.detail_fetcher import DetailFetcher
from jobcrawler.services.listing_walker import ListingWalker, clamp_pages
from jobcrawler.services.renderer import BaseRenderer
from jobcrawler.services.text_normalizer import normalize

logger = logging.getLogger(__name__)


class CrawlOrchestrator:
    def __init__(
        self,
        renderer: BaseRenderer,
        settings: Optional[Settings] = None,
        walker: Optional[ListingWalker] = None,
        fetcher: Optional[DetailFetcher] = None,
    ):
        self.renderer = renderer
        self.settings = settings or default_settings
        self.walker = walker or ListingWalker(renderer, self.settings)
        self.fetcher = fetcher or DetailFetcher(renderer, self.settings)

    def run(self, query: Optional[str] = None, location: Optional[str] = None, pages: int = 1) -> CrawlResult:
        """
        Crawl up to `pages` listing pages for a query and return the records found.

        Only a failure to start the renderer ends the run early; it comes back as
        an empty result with status failed. Page and item failures are counted
        on the result instead of raised.

        Args:
            query: Search keywords (default search query when blank)
            location: Search location (default location when blank)
            pages: Requested listing pages, clamped to MAX_PAGES

        Returns:
            CrawlResult with the records, per-stage counts and overall status
        """
        query = normalize(query) or self.settings.DEFAULT_SEARCH_QUERY
        location = normalize(location) or self.settings.DEFAULT_LOCATION
        page_count = clamp_pages(pages, self.settings.MAX_PAGES)
        if page_count != pages:
            logger.info(f"Requested {pages} pages, crawling {page_count}")

        run = CrawlRun(search_query=query, location=location, requested_pages=pages, page_count=page_count)
        logger.info(f"Starting crawl: query='{query}' location='{location}' pages={page_count}")

        try:
            self.renderer.open()
        except BrowserUnavailableError as e:
            logger.error(f"Crawl aborted, renderer unavailable: {e}")
            return CrawlResult.acquisition_failed(query, location, str(e))

        try:
            self.walker.walk(run)
            if run.job_ids:
                self.fetcher.fetch_all(run)
            else:
                logger.warning("No job ids collected, skipping detail pages")
        finally:
            self.renderer.close()

        result = CrawlResult.from_run(run)
        counts = result.counts
        logger.info(
            f"Crawl {result.status.value} in {run.elapsed:.1f}s: "
            f"pages {counts.pages_succeeded}/{counts.pages_attempted}, "
            f"ids {counts.ids_found}, "
            f"records {counts.details_succeeded}/{counts.details_attempted} "
            f"(skipped {counts.details_skipped}, failed {counts.details_failed})"
        )
        return result
