"""
Detail page fetching and JobRecord assembly
"""
import logging
import random
import time
from typing import Callable, List, Optional

from jobcrawler.core.config import Settings, settings as default_settings
from jobcrawler.core.exceptions import RenderError
from jobcrawler.models.crawl_model import CrawlRun, DetailResult, StageOutcome
from jobcrawler.models.job_model import JobRecord
from jobcrawler.services.classifiers import (
    analyze_company,
    classify_role_type,
    extract_job_metadata,
    parse_benefits,
    parse_requirements,
)
from jobcrawler.services.field_extractor import FieldExtractor, body_text, parse_html
from jobcrawler.services.renderer import BaseRenderer
from jobcrawler.services.salary import parse_salary

logger = logging.getLogger(__name__)

DETAIL_WAIT_SELECTOR = "h1, #jobDescriptionText"


def build_detail_url(base_url: str, job_id: str) -> str:
    return f"{base_url.rstrip('/')}/viewjob?jk={job_id}"


def build_job_record(
    page_html: str,
    job_id: str,
    url: str,
    extractor: Optional[FieldExtractor] = None,
) -> Optional[JobRecord]:
    """
    Parse a rendered detail page into a JobRecord.

    Args:
        page_html: Detail page source
        job_id: Identifier the page was requested for
        url: Source URL, stored as the record's persistence key
        extractor: Field extractor to use (default selectors when omitted)

    Returns:
        JobRecord, or None when the identifier or title is missing
    """
    if not job_id:
        logger.warning(f"Discarding record without identifier ({url})")
        return None

    extractor = extractor or FieldExtractor()
    doc = parse_html(page_html)

    title = extractor.extract(doc, "title")
    if not title:
        logger.warning(f"Discarding job {job_id}: no title found")
        return None

    company_name = extractor.extract(doc, "company")
    location = extractor.extract(doc, "location")
    description = extractor.extract(doc, "description")
    salary_text = extractor.extract(doc, "salary")
    website = extractor.extract_company_website(doc)
    page_text = body_text(doc)

    # Classifiers see the title too, it often names the role and stack
    details = description or page_text
    analysis_text = f"{title}\n{details}"

    company = analyze_company(analysis_text, company_name, location, website)
    metadata = extract_job_metadata(page_text)

    salary = parse_salary(salary_text)
    if salary is not None:
        salary.employment_type = metadata.employment_type

    benefits = parse_benefits(details)
    benefits.tags = list(metadata.tags)

    return JobRecord(
        job_id=job_id,
        title=title,
        description=description,
        location=location,
        original_url=url,
        company_name=company_name,
        role_type=classify_role_type(analysis_text, company.technologies),
        company=company,
        salary=salary,
        requirements=parse_requirements(details),
        benefits=benefits,
        metadata=metadata,
    )


class DetailFetcher:
    def __init__(
        self,
        renderer: BaseRenderer,
        settings: Optional[Settings] = None,
        sleep: Callable[[float], None] = time.sleep,
        rng: Optional[random.Random] = None,
        extractor: Optional[FieldExtractor] = None,
    ):
        self.renderer = renderer
        self.settings = settings or default_settings
        self.sleep = sleep
        self.rng = rng or random.Random()
        self.extractor = extractor or FieldExtractor(base_url=self.settings.BASE_URL)

    def fetch_all(self, run: CrawlRun) -> List[JobRecord]:
        """
        Fetch and parse the run's identifiers, up to MAX_ITEMS_PER_RUN.

        Each item is independent: a failure is recorded on the run and the
        next identifier is attempted.
        """
        job_ids = run.job_ids[:self.settings.MAX_ITEMS_PER_RUN]
        logger.info(f"Fetching details for {len(job_ids)} of {len(run.job_ids)} job ids")

        for index, job_id in enumerate(job_ids):
            result = self.fetch_one(job_id)
            run.record_detail(result)

            if index < len(job_ids) - 1:
                self.sleep(self.rng.uniform(self.settings.DETAIL_DELAY_MIN, self.settings.DETAIL_DELAY_MAX))

        return run.records

    def fetch_one(self, job_id: str) -> DetailResult:
        url = build_detail_url(self.settings.BASE_URL, job_id)
        try:
            page_html = self.renderer.render(
                url,
                timeout=self.settings.DETAIL_TIMEOUT,
                wait_selector=DETAIL_WAIT_SELECTOR,
            )
        except RenderError as e:
            logger.error(f"Error loading job {job_id}: {e.reason}")
            return DetailResult(job_id=job_id, url=url, outcome=StageOutcome.FAILED, error=str(e))
        except Exception as e:
            logger.error(f"Error loading job {job_id}: {e}")
            return DetailResult(job_id=job_id, url=url, outcome=StageOutcome.FAILED, error=str(e))

        try:
            record = build_job_record(page_html, job_id, url, self.extractor)
        except Exception as e:
            logger.error(f"Error parsing job {job_id}: {e}")
            return DetailResult(job_id=job_id, url=url, outcome=StageOutcome.FAILED, error=str(e))

        if record is None:
            return DetailResult(job_id=job_id, url=url, outcome=StageOutcome.SKIPPED, error="missing title")

        logger.info(f"✓ Extracted: {record.title} - {record.company_name or 'unknown company'}")
        return DetailResult(job_id=job_id, url=url, outcome=StageOutcome.SUCCESS, record=record)
