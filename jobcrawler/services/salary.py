"""
Salary text parsing.

Handles the two shapes seen on Japanese listings, a range ("500〜800万円",
"月給25万円以上") and a single value ("時給1,200円"). Amounts are yen; a 万
marker anywhere in the text scales every amount by 10,000.
"""
import logging
import re
import unicodedata
from typing import Optional

from jobcrawler.models.job_model import SalaryInfo, SalaryPeriod
from jobcrawler.services.text_normalizer import normalize
from jobcrawler.services.vocabulary import SALARY_KEYWORDS

logger = logging.getLogger(__name__)

_AMOUNT = r"(\d+(?:,\d+)*)"
_RANGE = re.compile(_AMOUNT + r"\s*万?円?\s*(?:~|〜|以上)\s*" + r"(\d+(?:,\d+)*)?\s*万?円?")
_SINGLE = re.compile(_AMOUNT)

TEN_THOUSAND = 10_000

# Priority order: first hit decides the period
_PERIODS = [
    ("月給", SalaryPeriod.MONTHLY),
    ("時給", SalaryPeriod.HOURLY),
    ("年俸", SalaryPeriod.ANNUAL_FIXED),
]


def _to_int(digits: Optional[str]) -> Optional[int]:
    if not digits:
        return None
    return int(digits.replace(",", ""))


def detect_period(text: str) -> SalaryPeriod:
    for marker, period in _PERIODS:
        if marker in text:
            return period
    return SalaryPeriod.ANNUAL


def parse_salary(text: Optional[str]) -> Optional[SalaryInfo]:
    """
    Parse raw salary text into a SalaryInfo.

    Args:
        text: Salary text as isolated by the field extractor

    Returns:
        SalaryInfo with min/max/period when a number was found, a display-only
        SalaryInfo when the text looks like a salary but has no number, None
        when there is nothing salary-like at all
    """
    display = normalize(text)
    if not display:
        return None

    # NFKC turns full-width digits and the full-width tilde into ASCII
    cleaned = unicodedata.normalize("NFKC", display)

    minimum = maximum = None
    match = _RANGE.search(cleaned)
    if match:
        minimum, maximum = _to_int(match.group(1)), _to_int(match.group(2))
    else:
        single = _SINGLE.search(cleaned)
        if single:
            minimum = _to_int(single.group(1))

    if minimum is None:
        if any(keyword in cleaned for keyword in SALARY_KEYWORDS):
            return SalaryInfo(display=display, currency="JPY")
        logger.debug(f"No salary pattern in: {display[:50]}")
        return None

    if "万" in cleaned:
        minimum *= TEN_THOUSAND
        if maximum is not None:
            maximum *= TEN_THOUSAND

    return SalaryInfo(
        min=minimum,
        max=maximum,
        currency="JPY",
        period=detect_period(cleaned),
        display=display,
    )
