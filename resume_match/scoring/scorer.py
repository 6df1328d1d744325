from __future__ import annotations

import logging
from typing import Callable

from resume_match.ai.config import AIConfig
from resume_match.ai.gateway import structured_completion
from resume_match.ai.prompts import SectionKind, build_section_score_messages
from resume_match.ai.types import AIClient
from resume_match.core.scoring import get_scoring_value
from resume_match.errors import ExternalCapabilityError
from resume_match.features.sections import (
    extract_achievements_section,
    extract_education_section,
    extract_experience_section,
    has_section,
)
from resume_match.schemas.analysis import ScoreBreakdown, ScoringWeights, SectionScore, SkillGap, SkillMatch

logger = logging.getLogger(__name__)

_WEIGHT_FIELDS = ("experience_match", "skills", "education", "achievements", "ats")
_DEFAULT_WEIGHTS = {
    "entry": (0.25, 0.30, 0.30, 0.10, 0.05),
    "mid": (0.50, 0.25, 0.15, 0.05, 0.05),
    "senior": (0.55, 0.25, 0.10, 0.05, 0.05),
}
_DEFAULT_RELEVANCE_POINTS = {"high": 100, "medium": 70, "low": 40}
_DEFAULT_MOCK_SCORES = {"experience_relevance": 70, "education": 75, "achievements": 60}

_SECTION_EXTRACTORS: dict[str, Callable[[str], str | None]] = {
    "experience_relevance": extract_experience_section,
    "education": extract_education_section,
    "achievements": extract_achievements_section,
}


def experience_band(total_years: float) -> str:
    if total_years < 2:
        return "entry"
    if total_years < 6:
        return "mid"
    return "senior"


def get_weights_for_experience_level(total_years: float) -> ScoringWeights:
    band = experience_band(total_years)
    defaults = dict(zip(_WEIGHT_FIELDS, _DEFAULT_WEIGHTS[band]))
    configured = get_scoring_value(f"weights.{band}", {}) or {}
    values = {name: float(configured.get(name, defaults[name])) for name in _WEIGHT_FIELDS}
    return ScoringWeights(**values)


def calculate_skills_score(matches: list[SkillMatch], gaps: list[SkillGap]) -> int:
    """Relevance-weighted share of matched skills, less a flat penalty per critical gap."""
    if not matches:
        return 0
    points = {**_DEFAULT_RELEVANCE_POINTS, **(get_scoring_value("scoring.skills.relevance_points", {}) or {})}
    earned = sum(float(points[match.relevance]) for match in matches)
    penalty_per_gap = float(get_scoring_value("scoring.skills.critical_gap_penalty", 10))
    critical = sum(1 for gap in gaps if gap.priority == "critical")
    score = earned / (len(matches) * 100) * 100 - critical * penalty_per_gap
    return int(round(max(0.0, min(100.0, score))))


def count_keyword_hits(resume_text: str, keywords: list[str]) -> int:
    lowered = (resume_text or "").lower()
    return sum(1 for keyword in keywords if keyword.strip() and keyword.strip().lower() in lowered)


def calculate_ats_score(resume_text: str, matched_required: int, total_required: int) -> int:
    score = 100.0
    if not has_section(resume_text, "experience"):
        score -= 15
    if not has_section(resume_text, "education"):
        score -= 10
    if not has_section(resume_text, "skills"):
        score -= 15

    coverage = matched_required / max(1, total_required)
    score = min(100.0, score - 40 + coverage * 40)

    length = len(resume_text or "")
    if length < 500:
        score -= 10
    elif length > 5000:
        score -= 5
    return int(round(max(0.0, min(100.0, score))))


def calculate_experience_match_score(relevance_score: float, duration_score: float) -> int:
    relevance_weight = float(get_scoring_value("scoring.experience.relevance_weight", 0.7))
    duration_weight = float(get_scoring_value("scoring.experience.duration_weight", 0.3))
    blended = relevance_weight * relevance_score + duration_weight * duration_score
    return int(round(max(0.0, min(100.0, blended))))


def calculate_overall_score(breakdown: ScoreBreakdown, weights: ScoringWeights) -> int:
    total = sum(getattr(weights, name) * getattr(breakdown, name) for name in _WEIGHT_FIELDS)
    return int(round(max(0.0, min(100.0, total))))


def mock_section_score(kind: SectionKind, domain: str) -> SectionScore:
    table = get_scoring_value(f"mock_scores.{kind}", {}) or {}
    domains = table.get("domains") or {}
    default = table.get("default", _DEFAULT_MOCK_SCORES[kind])
    score = domains.get(domain, default)
    return SectionScore(
        score=float(score),
        reasoning=f"Baseline {kind.replace('_', ' ')} score for {domain or 'General'} roles.",
    )


async def score_section(
    kind: SectionKind,
    *,
    resume_text: str,
    job_description: str,
    domain: str,
    config: AIConfig,
    client: AIClient | None,
) -> SectionScore:
    if client is None:
        return mock_section_score(kind, domain)

    messages = build_section_score_messages(
        kind,
        section_text=_SECTION_EXTRACTORS[kind](resume_text),
        job_description=job_description,
        domain=domain,
    )
    try:
        return await structured_completion(
            client,
            messages,
            SectionScore,
            purpose=f"score_{kind}",
            timeout_s=config.timeout_s,
        )
    except ExternalCapabilityError as exc:
        logger.warning("section_score_fallback kind=%s code=%s: %s", kind, exc.code, exc)
        return mock_section_score(kind, domain)


async def score_experience_relevance(
    resume_text: str, job_description: str, domain: str, *, config: AIConfig, client: AIClient | None
) -> SectionScore:
    return await score_section(
        "experience_relevance",
        resume_text=resume_text,
        job_description=job_description,
        domain=domain,
        config=config,
        client=client,
    )


async def score_education(
    resume_text: str, job_description: str, domain: str, *, config: AIConfig, client: AIClient | None
) -> SectionScore:
    return await score_section(
        "education",
        resume_text=resume_text,
        job_description=job_description,
        domain=domain,
        config=config,
        client=client,
    )


async def score_achievements(
    resume_text: str, job_description: str, domain: str, *, config: AIConfig, client: AIClient | None
) -> SectionScore:
    return await score_section(
        "achievements",
        resume_text=resume_text,
        job_description=job_description,
        domain=domain,
        config=config,
        client=client,
    )
