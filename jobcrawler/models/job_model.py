from enum import Enum
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List

from jobcrawler.models.company_model import CompanyProfile, dedupe


class SalaryPeriod(str, Enum):
    MONTHLY = "monthly"  # 月給
    HOURLY = "hourly"  # 時給
    ANNUAL_FIXED = "annual_fixed"  # 年俸
    ANNUAL = "annual"  # 年収


class SalaryInfo(BaseModel):
    min: Optional[int] = None
    max: Optional[int] = None
    currency: str = "JPY"
    period: Optional[SalaryPeriod] = None
    display: str = ""
    employment_type: str = ""  # 正社員, 業務委託, アルバイト・パート


class Requirements(BaseModel):
    experience: str = ""
    skills: List[str] = Field(default_factory=list)
    education: str = ""
    languages: List[str] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)

    @field_validator("skills", "languages", "certifications")
    @classmethod
    def _unique(cls, value: List[str]) -> List[str]:
        return dedupe(value)


class Benefits(BaseModel):
    work_style: List[str] = Field(default_factory=list)
    welfare: List[str] = Field(default_factory=list)
    vacation: List[str] = Field(default_factory=list)
    allowances: List[str] = Field(default_factory=list)
    development: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)  # Listing tags such as "在宅OK", "急募"

    @field_validator("work_style", "welfare", "vacation", "allowances", "development", "tags")
    @classmethod
    def _unique(cls, value: List[str]) -> List[str]:
        return dedupe(value)


class JobMetadata(BaseModel):
    employment_type: str = ""
    work_schedule: str = ""
    is_sponsored: bool = False
    is_urgent: bool = False
    responds_quickly: bool = False
    is_new_job: bool = False
    is_remote: bool = False
    tags: List[str] = Field(default_factory=list)

    @field_validator("tags")
    @classmethod
    def _unique(cls, value: List[str]) -> List[str]:
        return dedupe(value)


class JobRecord(BaseModel):
    job_id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    description: str = ""
    location: str = ""
    original_url: str = ""
    company_name: str = ""
    role_type: str = ""
    company: CompanyProfile = Field(default_factory=CompanyProfile)
    salary: Optional[SalaryInfo] = None
    requirements: Requirements = Field(default_factory=Requirements)
    benefits: Benefits = Field(default_factory=Benefits)
    metadata: JobMetadata = Field(default_factory=JobMetadata)


class StoredJob(JobRecord):
    id: int
    company_id: Optional[int] = None
    status: str = "active"  # active, expired, deleted
    created_at: str = ""
    updated_at: str = ""


class JobFilters(BaseModel):
    search: Optional[str] = None
    industry: Optional[str] = None
    location: Optional[str] = None
    company_type: Optional[str] = None
    page: int = 1
    limit: int = 20


class JobPage(BaseModel):
    data: List[StoredJob]
    total: int
    page: int
    limit: int
    total_pages: int
