"""
Keyword classifiers that turn free job text into structured fields.

All functions are pure: they fold their input (NFKC, lowercase) and look it
up against the ordered tables in vocabulary.py. Same text in, same labels
out, in table order and without duplicates.
"""
import re
import unicodedata
from functools import lru_cache
from typing import Iterable, List, Optional, Tuple

from jobcrawler.models.company_model import (
    CompanyCharacteristics,
    CompanyProfile,
    TechStack,
    dedupe,
)
from jobcrawler.models.job_model import Benefits, JobMetadata, Requirements
from jobcrawler.services import vocabulary as vocab
from jobcrawler.services.text_normalizer import fold, normalize


_HEADCOUNT = re.compile(
    r"(?:" + "|".join(vocab.HEADCOUNT_LABELS) + r")\s*[:]?\s*(?:約)?\s*(\d[\d,]*)\s*(?:名|人)"
)
_YEARS = re.compile(r"(\d+)\s*年以上")
# "【歓迎スキル】" or "■待遇" opening a line, never "経験者歓迎" inside a bullet
_SECTION_END = re.compile(
    r"^[" + re.escape(vocab.HEADING_MARKS) + r"]?\s*(?:" + "|".join(vocab.SECTION_END_HEADINGS) + r")",
    re.MULTILINE,
)

EXPERIENCE_PREVIEW_LENGTH = 20
COMPANY_DESCRIPTION_LENGTH = 200


# ============================================================================
# MATCHING HELPERS
# ============================================================================

@lru_cache(maxsize=None)
def _ascii_pattern(term: str) -> re.Pattern:
    return re.compile(r"(?<![a-z0-9])" + re.escape(term) + r"(?![a-z0-9])")


def contains_term(folded: str, term: str) -> bool:
    """Substring match, with ASCII word boundaries for plain-ASCII terms."""
    if term.isascii():
        return _ascii_pattern(term).search(folded) is not None
    return term in folded


def contains_any(folded: str, terms: Iterable[str]) -> bool:
    return any(contains_term(folded, term) for term in terms)


def match_labels(folded: str, table: vocab.Vocabulary) -> List[str]:
    """Labels of every table entry with at least one matching term, in table order."""
    return dedupe([label for label, terms in table if contains_any(folded, terms)])


def first_label(folded: str, table: vocab.Vocabulary) -> str:
    for label, terms in table:
        if contains_any(folded, terms):
            return label
    return ""


# ============================================================================
# COMPANY
# ============================================================================

def classify_industry(text: Optional[str]) -> Tuple[str, str]:
    """Return (industry, sub_industry); the first matching rule wins."""
    folded = fold(text)
    for terms, result in vocab.INDUSTRY_RULES:
        if contains_any(folded, terms):
            return result
    return vocab.DEFAULT_INDUSTRY


def classify_company_type(text: Optional[str], company_name: Optional[str] = "") -> str:
    folded = fold(text)
    name = fold(company_name)

    if contains_any(folded, vocab.STARTUP_TERMS):
        return "Startup"
    if contains_any(name, vocab.LEGAL_ENTITY_MARKERS) and contains_any(folded, vocab.INNOVATION_TERMS):
        return "Startup"
    if contains_any(folded, vocab.ENTERPRISE_TERMS):
        return "Enterprise"
    return "Mid-size"


def classify_company_size(text: Optional[str]) -> str:
    """Headcount label such as "~40名", or "" when the text states none."""
    cleaned = unicodedata.normalize("NFKC", normalize(text))
    match = _HEADCOUNT.search(cleaned)
    if not match:
        return ""
    return f"~{int(match.group(1).replace(',', ''))}名"


def detect_tech_stack(text: Optional[str]) -> TechStack:
    folded = fold(text)
    return TechStack(
        backend=match_labels(folded, vocab.BACKEND_TECH),
        frontend=match_labels(folded, vocab.FRONTEND_TECH),
        infrastructure=match_labels(folded, vocab.INFRASTRUCTURE_TECH),
        other=match_labels(folded, vocab.OTHER_TECH),
    )


def detect_culture(text: Optional[str]) -> List[str]:
    return match_labels(fold(text), vocab.CULTURE_TAGS)


def analyze_company(
    text: Optional[str],
    company_name: str = "",
    location: str = "",
    website: str = "",
) -> CompanyProfile:
    """Build the company profile inferred from a job description."""
    folded = fold(text)
    industry, sub_industry = classify_industry(text)
    stack = detect_tech_stack(text)

    return CompanyProfile(
        name=company_name,
        industry=industry,
        sub_industry=sub_industry,
        company_type=classify_company_type(text, company_name),
        description=normalize(text)[:COMPANY_DESCRIPTION_LENGTH],
        technologies=stack,
        characteristics=CompanyCharacteristics(
            size=classify_company_size(text),
            culture=detect_culture(text),
            tech_stack=stack.summary(),
            work_style=match_labels(folded, vocab.WORK_STYLE),
        ),
        location=location,
        website=website,
    )


# ============================================================================
# ROLE / REQUIREMENTS
# ============================================================================

def classify_role_type(text: Optional[str], tech_stack: Optional[TechStack] = None) -> str:
    """
    Role bucket for a posting.

    Infrastructure wins over everything else, so a posting that mentions both
    an infra keyword and a backend keyword is never Full-stack.
    """
    folded = fold(text)
    stack = tech_stack if tech_stack is not None else detect_tech_stack(text)

    if contains_any(folded, vocab.INFRA_ROLE_TERMS) or stack.infrastructure:
        return vocab.ROLE_INFRASTRUCTURE

    backend = contains_any(folded, vocab.BACKEND_ROLE_TERMS) or bool(stack.backend)
    frontend = contains_any(folded, vocab.FRONTEND_ROLE_TERMS) or bool(stack.frontend)

    if backend and frontend:
        return vocab.ROLE_FULL_STACK
    if backend:
        return vocab.ROLE_BACKEND
    if frontend:
        return vocab.ROLE_FRONTEND
    return vocab.ROLE_GENERAL


def classify_experience(text: Optional[str]) -> str:
    cleaned = unicodedata.normalize("NFKC", normalize(text))
    if not cleaned:
        return ""

    years = _YEARS.search(cleaned)
    if years:
        return f"{years.group(1)}年以上"
    if vocab.NO_EXPERIENCE_TERM in cleaned:
        return "未経験可"
    if vocab.EXPERIENCED_TERM in cleaned:
        return "経験者"

    if len(cleaned) > EXPERIENCE_PREVIEW_LENGTH:
        return cleaned[:EXPERIENCE_PREVIEW_LENGTH] + "…"
    return cleaned


def requirements_section(description: Optional[str]) -> str:
    """
    Slice of the description under its requirements heading.

    Runs from the first requirements heading to the next line that opens an
    unrelated heading (welcome skills, benefits, salary, location...). Falls
    back to the whole description when no heading is present.
    """
    text = normalize(description, keep_newlines=True)
    starts = [text.find(heading) for heading in vocab.REQUIREMENT_HEADINGS if heading in text]
    if not starts:
        return text

    section = text[min(starts):]
    # Skip the heading line itself before looking for where the section ends
    body_offset = section.find("\n")
    if body_offset < 0:
        return section.strip()
    end = _SECTION_END.search(section, body_offset + 1)
    if end:
        section = section[:end.start()]
    return section.strip()


def parse_requirements(text: Optional[str]) -> Requirements:
    folded = fold(text)
    return Requirements(
        experience=classify_experience(requirements_section(text)),
        skills=match_labels(folded, vocab.SKILLS),
        education=first_label(folded, vocab.EDUCATION),
        languages=match_labels(folded, vocab.LANGUAGES),
        certifications=match_labels(folded, vocab.CERTIFICATIONS),
    )


# ============================================================================
# BENEFITS / METADATA
# ============================================================================

def parse_benefits(text: Optional[str]) -> Benefits:
    folded = fold(text)
    return Benefits(
        work_style=match_labels(folded, vocab.WORK_STYLE),
        welfare=match_labels(folded, vocab.WELFARE),
        vacation=match_labels(folded, vocab.VACATION),
        allowances=match_labels(folded, vocab.ALLOWANCES),
        development=match_labels(folded, vocab.DEVELOPMENT),
    )


def extract_job_metadata(body_text: Optional[str]) -> JobMetadata:
    """Listing flags and tags read from the whole page text."""
    folded = fold(body_text)

    employment_type = next((kind for kind in vocab.EMPLOYMENT_TYPES if kind in folded), "")

    tags = []
    is_remote = contains_any(folded, vocab.REMOTE_TERMS)
    if is_remote:
        tags.append(vocab.REMOTE_TAG)

    work_schedule = ""
    if contains_any(folded, vocab.FLEX_TERMS):
        work_schedule = vocab.FLEX_SCHEDULE
        tags.append(vocab.FLEX_SCHEDULE)

    tags.extend(match_labels(folded, vocab.LISTING_TAGS))

    return JobMetadata(
        employment_type=employment_type,
        work_schedule=work_schedule,
        is_sponsored=contains_any(folded, vocab.SPONSORED_TERMS),
        is_urgent=contains_any(folded, vocab.URGENT_TERMS),
        responds_quickly=contains_any(folded, vocab.RESPONDS_QUICKLY_TERMS),
        is_new_job=contains_any(folded, vocab.NEW_JOB_TERMS),
        is_remote=is_remote,
        tags=dedupe(tags),
    )
