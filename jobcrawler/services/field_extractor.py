"""
Selector-fallback field extraction for job detail pages.

Each field has an ordered SelectorConfig. Selectors are tried in order and the
first non-empty, plausible, non-markup value wins. A field that no strategy
can find comes back as "" (unknown), never as an error.
"""
import logging
import re
import unicodedata
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Comment

from jobcrawler.core.config import settings
from jobcrawler.models.company_model import dedupe
from jobcrawler.services.text_normalizer import (
    decode_escapes,
    html_to_text,
    looks_like_markup,
    normalize,
)

logger = logging.getLogger(__name__)


@dataclass
class SelectorConfig:
    """Configuration for element selectors with fallbacks"""
    primary: str
    fallbacks: List[str] = field(default_factory=list)
    attribute: Optional[str] = None  # Read this attribute first, element text otherwise

    def all_selectors(self) -> List[str]:
        """Get all selectors in priority order"""
        return [self.primary] + self.fallbacks


# ============================================================================
# SELECTORS
# ============================================================================

FIELD_SELECTORS: Dict[str, SelectorConfig] = {
    "title": SelectorConfig(
        primary='h1[data-testid="jobsearch-JobInfoHeader-title"] span',
        fallbacks=[
            'h1 span[title]',
            '.jobsearch-JobInfoHeader-title span',
            'h1.jobsearch-JobInfoHeader-title',
            'title',
        ],
        attribute="title",
    ),
    "company": SelectorConfig(
        primary='[data-testid="inlineHeader-companyName"] a',
        fallbacks=[
            '[data-testid="inlineHeader-companyName"]',
            '.jobsearch-CompanyInfoContainer a',
            '.jobsearch-CompanyInfoContainer span',
        ],
    ),
    "location": SelectorConfig(
        primary='[data-testid="inlineHeader-companyLocation"]',
        fallbacks=[
            '[data-testid="job-location"]',
            '.jobsearch-JobInfoHeader-subtitle div',
            '.jobsearch-CompanyInfoContainer div',
        ],
    ),
    "description": SelectorConfig(
        primary='.css-fdgeuo',
        fallbacks=[
            '.jobsearch-JobComponent-description .css-fdgeuo',
            '#jobDescriptionText',
            '.jobsearch-jobDescriptionText',
            '.jobsearch-JobComponent-description',
        ],
    ),
    "salary": SelectorConfig(
        primary='[data-testid="job-compensation"]',
        fallbacks=[
            '.salaryText',
            '.salary',
            '[data-testid="salaries-section"]',
            '.jobsearch-JobMetadataHeader-item',
            '.css-1ih6vdn',
            'div',
        ],
    ),
}

COMPANY_LINK_SELECTORS = SelectorConfig(
    primary='[data-testid="inlineHeader-companyName"] a[href]',
    fallbacks=['.jobsearch-CompanyInfoContainer a[href]'],
)

# Header texts the site shows when the real title has not rendered
BANNER_TITLES = {"indeed.com", "indeed", "求人検索", "求人", "仕事検索"}
_TITLE_SUFFIX = re.compile(r"\s+[-|]\s+.*indeed(?:\.com)?\s*$", re.IGNORECASE)

_SALARY_IN_TEXT = re.compile(r"円|月給|年収|年俸|時給")
# An amount such as "30万"; a bare 万 is also part of place names (万代, 万博記念公園)
_MAN_AMOUNT = re.compile(r"\d+\s*万")
_HEADCOUNT_IN_TEXT = re.compile(r"社員|\d+\s*(?:名|人)")

# JSON payload keys that carry the full description HTML
_JSON_DESCRIPTION = re.compile(r'"description"\s*:\s*\{[^}]*?"html"\s*:\s*"((?:[^"\\]|\\.)*)"')
_JSON_JOB_DESCRIPTION = re.compile(r'"jobDescription"\s*:\s*"((?:[^"\\]|\\.)*)"')

_SALARY_IN_BODY = re.compile(r"(月給|年収|年俸|時給)[\s:]*([\d,]+)\s*万?円?[\s~〜]*([\d,]+)?\s*万?円?")

MAX_HEADER_LENGTH = 200
MIN_DESCRIPTION_ELEMENT = 20
MIN_DESCRIPTION_LENGTH = 50
MAX_SALARY_LENGTH = 100

FIELDS = tuple(FIELD_SELECTORS)


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def body_text(doc: BeautifulSoup) -> str:
    """Visible page text: scripts, styles and comments left out."""
    parts = [
        str(node)
        for node in doc.find_all(string=True)
        if not isinstance(node, Comment) and node.parent.name not in ("script", "style", "noscript", "head", "title")
    ]
    return normalize(" ".join(parts))


# ============================================================================
# EXTRACTOR
# ============================================================================

class FieldExtractor:
    """Extracts header fields, description and raw salary text from a detail page."""

    def __init__(self, base_url: Optional[str] = None, selectors: Optional[Dict[str, SelectorConfig]] = None):
        self.base_url = base_url or settings.BASE_URL
        self.selectors = selectors or FIELD_SELECTORS
        self._strategies: Dict[str, Callable[[BeautifulSoup], str]] = {
            "title": self._extract_title,
            "company": self._extract_company,
            "location": self._extract_location,
            "description": self._extract_description,
            "salary": self._extract_salary,
        }

    def extract(self, doc: BeautifulSoup, field_name: str) -> str:
        """
        Extract one field from a parsed detail page.

        Args:
            doc: Parsed detail page
            field_name: One of title, company, location, description, salary

        Returns:
            Extracted text, "" when every strategy is exhausted
        """
        strategy = self._strategies.get(field_name)
        if strategy is None:
            raise ValueError(f"Unknown field: {field_name}")
        value = strategy(doc)
        if not value:
            logger.debug(f"No value found for field '{field_name}'")
        return value

    def extract_company_website(self, doc: BeautifulSoup) -> str:
        for selector in COMPANY_LINK_SELECTORS.all_selectors():
            link = doc.select_one(selector)
            if link and link.get("href"):
                return urljoin(self.base_url, link["href"])
        return ""

    # ------------------------------------------------------------------
    # Header fields
    # ------------------------------------------------------------------

    def _first_plausible(self, doc: BeautifulSoup, config: SelectorConfig, accept: Callable[[str], bool]) -> str:
        for selector in config.all_selectors():
            try:
                elements = doc.select(selector)
            except Exception as e:
                logger.warning(f"Selector '{selector}' failed: {e}")
                continue
            for element in elements:
                raw = element.get(config.attribute) if config.attribute else None
                text = normalize(raw or element.get_text(" "))
                if text and not looks_like_markup(text) and accept(text):
                    return text
        return ""

    def _extract_title(self, doc: BeautifulSoup) -> str:
        def accept(text: str) -> bool:
            return text.lower() not in BANNER_TITLES and len(text) <= MAX_HEADER_LENGTH

        title = self._first_plausible(doc, self.selectors["title"], accept)
        # <title> carries "<job> - <company> - <place> - Indeed.com"
        if _TITLE_SUFFIX.search(title):
            title = title.split(" - ")[0].strip()
            if title.lower() in BANNER_TITLES:
                return ""
        return title

    def _extract_company(self, doc: BeautifulSoup) -> str:
        def accept(text: str) -> bool:
            return len(text) <= MAX_HEADER_LENGTH and not _SALARY_IN_TEXT.search(text)

        return self._first_plausible(doc, self.selectors["company"], accept)

    def _extract_location(self, doc: BeautifulSoup) -> str:
        def accept(text: str) -> bool:
            return (
                len(text) <= MAX_HEADER_LENGTH
                and not _MAN_AMOUNT.search(text)
                and not _SALARY_IN_TEXT.search(text)
                and not _HEADCOUNT_IN_TEXT.search(text)
            )

        return self._first_plausible(doc, self.selectors["location"], accept)

    # ------------------------------------------------------------------
    # Description
    # ------------------------------------------------------------------

    def _extract_description(self, doc: BeautifulSoup) -> str:
        json_text = self._description_from_json(doc)
        if len(json_text) >= MIN_DESCRIPTION_LENGTH:
            return json_text

        dom_text = self._description_from_dom(doc)
        if len(dom_text) > len(json_text):
            return dom_text
        return json_text

    def _description_from_json(self, doc: BeautifulSoup) -> str:
        """Read the description HTML embedded in an inline script payload."""
        for script in doc.find_all("script"):
            payload = script.string or script.get_text()
            if not payload or ('"description"' not in payload and '"jobDescription"' not in payload):
                continue
            for pattern in (_JSON_DESCRIPTION, _JSON_JOB_DESCRIPTION):
                match = pattern.search(payload)
                if not match:
                    continue
                text = html_to_text(decode_escapes(match.group(1)))
                if text:
                    logger.debug(f"Description from script payload ({len(text)} chars)")
                    return text
        return ""

    def _description_from_dom(self, doc: BeautifulSoup) -> str:
        for selector in self.selectors["description"].all_selectors():
            parts = []
            for element in doc.select(selector):
                text = normalize(element.get_text("\n"), keep_newlines=True)
                if len(text) > MIN_DESCRIPTION_ELEMENT and not looks_like_markup(text):
                    parts.append(text)
            combined = "\n\n".join(dedupe(parts))
            if len(combined) > MIN_DESCRIPTION_LENGTH:
                logger.debug(f"Description from selector '{selector}' ({len(combined)} chars)")
                return combined
        return ""

    # ------------------------------------------------------------------
    # Salary
    # ------------------------------------------------------------------

    def _extract_salary(self, doc: BeautifulSoup) -> str:
        # Period keyword followed by an amount is the most precise signal
        page_text = unicodedata.normalize("NFKC", body_text(doc))
        match = _SALARY_IN_BODY.search(page_text)
        if match:
            return match.group(0).strip()

        def accept(text: str) -> bool:
            return ("円" in text or "万" in text) and len(text) < MAX_SALARY_LENGTH

        return self._first_plausible(doc, self.selectors["salary"], accept)
