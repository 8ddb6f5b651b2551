import asyncio
import logging

from fastapi import APIRouter, Query

from jobcrawler.core.config import settings
from jobcrawler.models.crawl_model import (
    CrawlerStatusResponse,
    CrawlResponse,
    CrawlResult,
    CrawlStatus,
    MockCrawlResponse,
)
from jobcrawler.services.crawl_orchestrator import CrawlOrchestrator
from jobcrawler.services.job_repository import job_repository
from jobcrawler.services.listing_walker import clamp_pages
from jobcrawler.services.mock_jobs import load_mock_jobs
from jobcrawler.services.renderer import create_renderer

logger = logging.getLogger(__name__)

router = APIRouter()

orchestrator = CrawlOrchestrator(create_renderer(settings), settings)
_crawl_lock = asyncio.Lock()

FAILURE_MESSAGE = "Crawling failed, but you can use mock data for testing"
MOCK_ENDPOINT = "POST /api/crawler/crawl/mock - Create mock jobs for testing"


def _crawl_message(result: CrawlResult, saved: int) -> str:
    found = len(result.records)
    if result.status is CrawlStatus.FAILED:
        return FAILURE_MESSAGE
    stored = f" and saved {saved}" if settings.PERSIST_CRAWLED_JOBS else ""
    if result.status is CrawlStatus.PARTIAL:
        counts = result.counts
        failed = counts.pages_failed + counts.details_failed + counts.details_skipped
        return f"Partially crawled {found} jobs{stored} ({failed} pages or jobs could not be read)"
    return f"Successfully crawled {found} jobs{stored}"


@router.post("/crawler/crawl", response_model=CrawlResponse)
async def crawl_jobs(
    search: str = Query(settings.DEFAULT_SEARCH_QUERY, description="Search keywords, e.g. 'バックエンドエンジニア'"),
    location: str = Query(settings.DEFAULT_LOCATION, description="Search location, e.g. '東京都'"),
    pages: int = Query(1, ge=1, description="Listing pages to scan, at least 1 (values above 10 are clamped)"),
):
    """
    Crawl Indeed Japan listings and store the parsed jobs

    Walks up to `pages` search-result pages, opens the first job detail pages
    found and extracts title, company, location, description, salary,
    requirements, benefits and listing flags from each.

    Always answers 200. The message tells full success, partial success (some
    pages or jobs failed) and failure apart; on failure use
    POST /api/crawler/crawl/mock to load fixture data instead.

    Only one crawl runs at a time; concurrent requests wait for the running one.
    """
    page_count = clamp_pages(pages, settings.MAX_PAGES)

    async with _crawl_lock:
        # Run the crawl in a thread pool to avoid blocking
        loop = asyncio.get_event_loop()
        try:
            result = await loop.run_in_executor(None, orchestrator.run, search, location, page_count)
        except Exception as e:
            logger.error(f"Crawl failed: {e}")
            return CrawlResponse(
                message=FAILURE_MESSAGE,
                status=CrawlStatus.FAILED.value,
                jobsFound=0,
                searchQuery=search,
                location=location,
                pagesScanned=0,
                counts={},
                error=str(e),
            )

    saved = 0
    if result.records and settings.PERSIST_CRAWLED_JOBS:
        saved = job_repository.save_records(result.records).saved

    return CrawlResponse(
        message=_crawl_message(result, saved),
        status=result.status.value,
        jobsFound=len(result.records),
        jobsSaved=saved,
        searchQuery=result.search_query or search,
        location=result.location or location,
        pagesScanned=result.pages_scanned,
        counts=result.counts.to_dict(),
        error=result.error,
    )


@router.post("/crawler/crawl/mock", response_model=MockCrawlResponse)
async def create_mock_jobs():
    """Load fixture jobs into the store for testing without crawling."""
    try:
        created = load_mock_jobs(job_repository)
    except Exception as e:
        logger.error(f"Error creating mock jobs: {e}")
        return MockCrawlResponse(message="Failed to create mock jobs", jobsCreated=0, error=str(e))
    return MockCrawlResponse(message="Successfully created mock jobs for testing", jobsCreated=created)


@router.get("/crawler/status", response_model=CrawlerStatusResponse)
async def get_crawler_status():
    busy = _crawl_lock.locked()
    return CrawlerStatusResponse(
        status="busy" if busy else "ready",
        message="A crawl is in progress" if busy else "Crawler service is ready",
        renderer=orchestrator.renderer.name,
        rendererOpen=orchestrator.renderer.is_open,
        mockEndpoint=MOCK_ENDPOINT,
    )
