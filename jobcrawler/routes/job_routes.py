from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from jobcrawler.models.job_model import JobFilters, JobPage, StoredJob
from jobcrawler.services.job_repository import job_repository

router = APIRouter()


@router.get("/jobs", response_model=JobPage)
async def list_jobs(
    search: Optional[str] = Query(None, description="Matches title, description or company name"),
    industry: Optional[str] = Query(None, description="Industry filter, e.g. 'IT / AI'"),
    location: Optional[str] = Query(None, description="Location filter, e.g. '東京都'"),
    company_type: Optional[str] = Query(None, alias="companyType", description="'Startup', 'Mid-size' or 'Enterprise'"),
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Query(20, ge=1, le=100, description="Jobs per page"),
):
    """
    List stored jobs, newest first

    All filters are case-insensitive substring matches and can be combined.
    """
    filters = JobFilters(
        search=search,
        industry=industry,
        location=location,
        company_type=company_type,
        page=page,
        limit=limit,
    )
    return job_repository.find(filters)


@router.get("/jobs/{job_id}", response_model=StoredJob)
async def get_job(job_id: int):
    job = job_repository.get(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail=f"Job {job_id} not found")
    return job
