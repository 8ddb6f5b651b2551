"""
Run-scoped bookkeeping for one crawl, plus the crawl endpoint response shapes
"""
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from jobcrawler.models.job_model import JobRecord


class StageOutcome(Enum):
    """Outcome of one listing page or one detail item"""
    SUCCESS = "success"
    SKIPPED = "skipped"  # Fetched fine but the record failed its invariants
    FAILED = "failed"


class CrawlStatus(Enum):
    SUCCEEDED = "succeeded"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass
class PageResult:
    page: int
    url: str
    outcome: StageOutcome
    new_ids: int = 0
    error: Optional[str] = None


@dataclass
class DetailResult:
    job_id: str
    url: str
    outcome: StageOutcome
    record: Optional[JobRecord] = None
    error: Optional[str] = None


@dataclass
class CrawlCounts:
    pages_attempted: int = 0
    pages_succeeded: int = 0
    pages_failed: int = 0
    ids_found: int = 0
    details_attempted: int = 0
    details_succeeded: int = 0
    details_skipped: int = 0
    details_failed: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "pagesAttempted": self.pages_attempted,
            "pagesSucceeded": self.pages_succeeded,
            "pagesFailed": self.pages_failed,
            "idsFound": self.ids_found,
            "detailsAttempted": self.details_attempted,
            "detailsSucceeded": self.details_succeeded,
            "detailsSkipped": self.details_skipped,
            "detailsFailed": self.details_failed,
        }


class CrawlRun:
    """State owned by the orchestrator for the duration of one crawl"""

    def __init__(self, search_query: str, location: str, requested_pages: int, page_count: int):
        self.search_query = search_query
        self.location = location
        self.requested_pages = requested_pages
        self.page_count = page_count
        self.started_at = time.monotonic()
        self.job_ids: List[str] = []
        self._seen_ids = set()
        self.records: List[JobRecord] = []
        self.counts = CrawlCounts()
        self.page_results: List[PageResult] = []
        self.detail_results: List[DetailResult] = []

    def add_job_ids(self, ids: List[str]) -> int:
        """Append ids not seen earlier in this run; returns how many were new."""
        added = 0
        for job_id in ids:
            if job_id and job_id not in self._seen_ids:
                self._seen_ids.add(job_id)
                self.job_ids.append(job_id)
                added += 1
        self.counts.ids_found = len(self.job_ids)
        return added

    def record_page(self, result: PageResult):
        self.page_results.append(result)
        self.counts.pages_attempted += 1
        if result.outcome is StageOutcome.SUCCESS:
            self.counts.pages_succeeded += 1
        else:
            self.counts.pages_failed += 1

    def record_detail(self, result: DetailResult):
        self.detail_results.append(result)
        self.counts.details_attempted += 1
        if result.outcome is StageOutcome.SUCCESS:
            self.counts.details_succeeded += 1
            self.records.append(result.record)
        elif result.outcome is StageOutcome.SKIPPED:
            self.counts.details_skipped += 1
        else:
            self.counts.details_failed += 1

    def status(self) -> CrawlStatus:
        counts = self.counts
        failures = counts.pages_failed + counts.details_failed + counts.details_skipped
        if failures == 0:
            return CrawlStatus.SUCCEEDED
        if not self.records:
            return CrawlStatus.FAILED
        return CrawlStatus.PARTIAL

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self.started_at


@dataclass
class CrawlResult:
    records: List[JobRecord]
    counts: CrawlCounts
    status: CrawlStatus
    search_query: str = ""
    location: str = ""
    pages_scanned: int = 0
    error: Optional[str] = None
    detail_results: List[DetailResult] = field(default_factory=list)

    @classmethod
    def from_run(cls, run: CrawlRun) -> "CrawlResult":
        return cls(
            records=list(run.records),
            counts=run.counts,
            status=run.status(),
            search_query=run.search_query,
            location=run.location,
            pages_scanned=run.counts.pages_attempted,
            detail_results=list(run.detail_results),
        )

    @classmethod
    def acquisition_failed(cls, query: str, location: str, error: str) -> "CrawlResult":
        return cls(
            records=[],
            counts=CrawlCounts(),
            status=CrawlStatus.FAILED,
            search_query=query,
            location=location,
            error=error,
        )


class CrawlResponse(BaseModel):
    message: str
    status: str
    jobsFound: int
    jobsSaved: int = 0
    searchQuery: str
    location: str
    pagesScanned: int
    counts: Dict[str, Any]
    error: Optional[str] = None


class MockCrawlResponse(BaseModel):
    message: str
    jobsCreated: int
    error: Optional[str] = None


class CrawlerStatusResponse(BaseModel):
    status: str
    message: str
    renderer: str
    rendererOpen: bool
    mockEndpoint: str
