"""
In-memory job and company store with the list/search queries the API serves
"""
import logging
import math
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Iterable, Optional

from jobcrawler.models.company_model import CompanyProfile
from jobcrawler.models.job_model import JobFilters, JobPage, JobRecord, StoredJob
from jobcrawler.services.text_normalizer import fold

logger = logging.getLogger(__name__)


@dataclass
class SaveSummary:
    saved: int = 0
    skipped: int = 0
    failed: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {"saved": self.saved, "skipped": self.skipped, "failed": self.failed}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class JobRepository:
    """Thread-safe store keyed by source URL (jobs) and name (companies)"""

    def __init__(self):
        self._lock = threading.Lock()
        self._jobs: Dict[int, StoredJob] = {}
        self._job_ids_by_url: Dict[str, int] = {}
        self._job_ids_by_source_id: Dict[str, int] = {}
        self._companies: Dict[int, CompanyProfile] = {}
        self._company_ids_by_name: Dict[str, int] = {}
        self._next_job_id = 1
        self._next_company_id = 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)

    def clear(self):
        with self._lock:
            self._jobs.clear()
            self._job_ids_by_url.clear()
            self._job_ids_by_source_id.clear()
            self._companies.clear()
            self._company_ids_by_name.clear()
            self._next_job_id = 1
            self._next_company_id = 1

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def upsert_company(self, profile: CompanyProfile) -> int:
        """Insert or overwrite a company by name; returns its id."""
        with self._lock:
            return self._upsert_company(profile)

    def _upsert_company(self, profile: CompanyProfile) -> int:
        company_id = self._company_ids_by_name.get(profile.name)
        if company_id is None:
            company_id = self._next_company_id
            self._next_company_id += 1
            self._company_ids_by_name[profile.name] = company_id
        self._companies[company_id] = profile.model_copy(deep=True)
        return company_id

    def save(self, record: JobRecord) -> int:
        """
        Store a job record.

        Records are deduplicated by source URL; saving a URL that is already
        stored returns the existing id and leaves the stored job unchanged.
        """
        with self._lock:
            if record.original_url and record.original_url in self._job_ids_by_url:
                return self._job_ids_by_url[record.original_url]

            company_id = None
            company_name = record.company.name or record.company_name
            if company_name:
                company = record.company.model_copy(update={"name": company_name})
                company_id = self._upsert_company(company)

            job_id = self._next_job_id
            self._next_job_id += 1
            timestamp = _now()
            self._jobs[job_id] = StoredJob(
                **record.model_dump(),
                id=job_id,
                company_id=company_id,
                created_at=timestamp,
                updated_at=timestamp,
            )
            if record.original_url:
                self._job_ids_by_url[record.original_url] = job_id
            self._job_ids_by_source_id[record.job_id] = job_id
            return job_id

    def save_records(self, records: Iterable[JobRecord]) -> SaveSummary:
        """Persist crawled records, skipping ids already stored. One bad record never stops the rest."""
        summary = SaveSummary()
        for record in records:
            try:
                if self.find_existing(record.job_id):
                    logger.info(f"Job {record.job_id} already stored, skipping")
                    summary.skipped += 1
                    continue
                self.save(record)
                summary.saved += 1
                logger.info(f"Saved job: {record.title}")
            except Exception as e:
                summary.failed += 1
                logger.error(f"Error saving job {record.job_id}: {e}")
        return summary

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def find_existing(self, job_id: str) -> bool:
        with self._lock:
            return job_id in self._job_ids_by_source_id

    def get(self, job_id: int) -> Optional[StoredJob]:
        with self._lock:
            return self._jobs.get(job_id)

    def get_company(self, company_id: int) -> Optional[CompanyProfile]:
        with self._lock:
            return self._companies.get(company_id)

    def find(self, filters: Optional[JobFilters] = None) -> JobPage:
        """
        Filtered, paginated job list, newest first.

        Args:
            filters: search (title, description or company name), industry,
                location and company_type are case-insensitive substring
                filters; page is 1-based

        Returns:
            JobPage with the requested slice and the total match count
        """
        filters = filters or JobFilters()
        page = max(filters.page, 1)
        limit = max(filters.limit, 1)

        with self._lock:
            jobs = sorted(self._jobs.values(), key=lambda job: job.id, reverse=True)

        matches = [job for job in jobs if self._matches(job, filters)]
        start = (page - 1) * limit
        return JobPage(
            data=matches[start:start + limit],
            total=len(matches),
            page=page,
            limit=limit,
            total_pages=math.ceil(len(matches) / limit),
        )

    @staticmethod
    def _matches(job: StoredJob, filters: JobFilters) -> bool:
        if filters.search:
            needle = fold(filters.search)
            haystack = fold(" ".join([job.title, job.description, job.company_name, job.company.name]))
            if needle not in haystack:
                return False

        checks = [
            (filters.industry, job.company.industry),
            (filters.location, job.location),
            (filters.company_type, job.company.company_type),
        ]
        for wanted, actual in checks:
            if wanted and fold(wanted) not in fold(actual):
                return False
        return True


job_repository = JobRepository()
