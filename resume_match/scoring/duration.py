from __future__ import annotations

import logging
import re
from datetime import date

from resume_match.core.scoring import get_scoring_value
from resume_match.features.sections import extract_experience_section
from resume_match.schemas.analysis import ExperienceInterval

logger = logging.getLogger(__name__)

_MONTH = (
    r"(jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sept?(?:ember)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)"
)
_DASH = r"\s*[-–—]\s*"
_MONTH_RANGE_RE = re.compile(
    rf"\b{_MONTH}\.?\s+(\d{{4}}){_DASH}(?:{_MONTH}\.?\s+(\d{{4}})|(present|current))\b",
    re.IGNORECASE,
)
_YEAR_RANGE_RE = re.compile(rf"\b(\d{{4}}){_DASH}(?:(\d{{4}})|(present|current))\b", re.IGNORECASE)
_REQUIRED_YEARS_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(?:\+|-\s*\d+)?\s*(?:years?|yrs?)\b", re.IGNORECASE)
_EXPERIENCE_YEARS_RE = re.compile(
    r"(\d+(?:\.\d+)?)\s*(?:\+|-\s*\d+)?\s*(?:years?|yrs?)\b(?:\s+[\w./+#-]+){0,3}?\s+experience\b",
    re.IGNORECASE,
)

_MONTH_INDEX = {
    "jan": 0,
    "feb": 1,
    "mar": 2,
    "apr": 3,
    "may": 4,
    "jun": 5,
    "jul": 6,
    "aug": 7,
    "sep": 8,
    "oct": 9,
    "nov": 10,
    "dec": 11,
}


def _month(name: str) -> int:
    return _MONTH_INDEX[name[:3].lower()]


def _max_total_years() -> float:
    return float(get_scoring_value("scoring.experience.max_total_years", 20.0))


def parse_experience_intervals(section: str, today: date | None = None) -> list[ExperienceInterval]:
    """Find ``Month YYYY - Month YYYY`` and ``YYYY - YYYY`` ranges in a section.

    Either end may be ``Present``/``Current``, which resolves to ``today``.
    Numeric-only years start and end in January (month 0). Year ranges that
    fall inside an already matched month range are ignored.
    """
    today = today or date.today()
    intervals: list[ExperienceInterval] = []
    claimed: list[tuple[int, int]] = []

    for match in _MONTH_RANGE_RE.finditer(section):
        start_month, start_year, end_month, end_year, current = match.groups()
        claimed.append(match.span())
        if current:
            end = (today.year, today.month - 1)
        else:
            end = (int(end_year), _month(end_month))
        intervals.append(
            ExperienceInterval(
                start_year=int(start_year),
                start_month=_month(start_month),
                end_year=end[0],
                end_month=end[1],
                is_current=bool(current),
            )
        )

    for match in _YEAR_RANGE_RE.finditer(section):
        start, stop = match.span()
        if any(start < claimed_stop and stop > claimed_start for claimed_start, claimed_stop in claimed):
            continue
        start_year, end_year, current = match.groups()
        if current:
            end = (today.year, today.month - 1)
        else:
            end = (int(end_year), 0)
        intervals.append(
            ExperienceInterval(
                start_year=int(start_year),
                start_month=0,
                end_year=end[0],
                end_month=end[1],
                is_current=bool(current),
            )
        )

    return intervals


def extract_years_of_experience(resume_text: str, today: date | None = None) -> float:
    """Total years across all date ranges in the experience section.

    Overlapping ranges are summed as-is. The total is capped at
    ``scoring.experience.max_total_years``; no experience section yields 0.
    """
    section = extract_experience_section(resume_text)
    if section is None:
        logger.info("experience_section_missing")
        return 0.0

    intervals = parse_experience_intervals(section, today=today)
    total = sum(interval.years for interval in intervals)
    logger.debug("experience_intervals count=%s total_years=%.2f", len(intervals), total)
    return min(total, _max_total_years())


def calculate_duration_score(actual_years: float, required_years: float) -> float:
    """Map ``actual / required`` onto 0-100.

    Continuous and non-decreasing: 0 at ratio 0, 80 at ratio 1, 100 from
    ratio 2 upward. No stated requirement scores 100.
    """
    if required_years <= 0:
        return 100.0
    ratio = max(0.0, actual_years) / required_years
    if ratio < 0.6:
        score = ratio * (40.0 / 0.6)
    elif ratio < 0.8:
        score = 40.0 + (ratio - 0.6) * 100.0
    elif ratio < 1.0:
        score = 60.0 + (ratio - 0.8) * 100.0
    else:
        score = 80.0 + (ratio - 1.0) * 20.0
    return max(0.0, min(100.0, score))


def _years_in(text: str) -> list[float]:
    return [float(value) for value in _REQUIRED_YEARS_RE.findall(text or "")]


def _years_from_job_text(job_description: str) -> float | None:
    anchored = [float(value) for value in _EXPERIENCE_YEARS_RE.findall(job_description or "")]
    if anchored:
        return max(anchored)
    figures = _years_in(job_description)
    return figures[0] if figures else None


def parse_required_years(experience_requirements: list[str], job_description: str = "") -> float:
    """Required years of experience for a job.

    Uses the largest "N years" figure in ``experience_requirements``. Failing
    that, the job text is read: figures tied to "experience" ("5+ years of
    backend experience") win, otherwise the first figure is taken, so company
    copy like "founded 25 years ago" later in the posting is ignored. 0 when
    nothing is found.
    """
    found = [years for requirement in experience_requirements for years in _years_in(requirement)]
    if found:
        required = max(found)
    else:
        required = _years_from_job_text(job_description)
    if required is None:
        return 0.0
    return min(required, _max_total_years())
