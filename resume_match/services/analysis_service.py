from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import date

from resume_match.ai.config import AIConfig, load_ai_config
from resume_match.ai.factory import get_ai_client
from resume_match.ai.types import AIClient
from resume_match.feedback.categories import transform_to_category_analysis
from resume_match.feedback.generator import generate_comprehensive_feedback
from resume_match.features.skill_extraction import (
    categorize_skill,
    detect_domain,
    extract_job_requirements,
    extract_skills_from_text,
)
from resume_match.schemas.analysis import AnalysisResult, JobRequirements, ScoreBreakdown, SkillGap, SkillMatch
from resume_match.schemas.feedback import CategoryAnalysisResponse, ComprehensiveFeedback
from resume_match.scoring.duration import calculate_duration_score, extract_years_of_experience, parse_required_years
from resume_match.scoring.scorer import (
    calculate_ats_score,
    calculate_experience_match_score,
    calculate_overall_score,
    calculate_skills_score,
    count_keyword_hits,
    get_weights_for_experience_level,
    score_achievements,
    score_education,
    score_experience_relevance,
)
from resume_match.semantic.embeddings import EmbeddingProvider, SimpleEmbeddingProvider
from resume_match.semantic.matcher import match_skills, match_skills_simple
from resume_match.taxonomy import skill_key

logger = logging.getLogger(__name__)


def identify_missing_skills(job_requirements: JobRequirements, matches: list[SkillMatch]) -> list[SkillGap]:
    """Unmatched required skills are critical gaps, unmatched preferred skills nice-to-have."""
    matched_keys = {skill_key(match.job_skill) for match in matches}
    gaps: list[SkillGap] = []
    seen: set[str] = set()
    for skills, priority in (
        (job_requirements.required_skills, "critical"),
        (job_requirements.preferred_skills, "nice-to-have"),
    ):
        for skill in skills:
            key = skill_key(skill)
            if not key or key in matched_keys or key in seen:
                continue
            seen.add(key)
            gaps.append(SkillGap(skill=skill, priority=priority, category=categorize_skill(skill)))
    return gaps


@dataclass(frozen=True)
class AnalysisOutcome:
    result: AnalysisResult
    feedback: ComprehensiveFeedback


def _resolve_client(config: AIConfig, ai_client: AIClient | None) -> AIClient | None:
    if not config.is_live:
        return None
    return ai_client if ai_client is not None else get_ai_client(config)


def _resolve_embedder(
    config: AIConfig,
    client: AIClient | None,
    embedder: EmbeddingProvider | None,
) -> EmbeddingProvider | None:
    if config.is_disabled or not config.semantic_matching:
        return None
    if embedder is not None:
        return embedder
    if client is not None and hasattr(client, "embed_batch"):
        return client  # type: ignore[return-value]
    return SimpleEmbeddingProvider()


async def run_analysis(
    resume_text: str,
    job_description: str,
    domain: str | None = None,
    job_title: str | None = None,
    company: str | None = None,
    *,
    config: AIConfig | None = None,
    ai_client: AIClient | None = None,
    embedder: EmbeddingProvider | None = None,
    today: date | None = None,
) -> AnalysisOutcome:
    """Score a resume against a job description.

    External failures never escape: every capability falls back to mock data.
    Only configuration and programming errors propagate.
    """
    started = time.perf_counter()
    config = config or load_ai_config()
    client = _resolve_client(config, ai_client)

    domain = domain or await detect_domain(job_description, config=config, client=client)

    resume_skills, job_requirements = await asyncio.gather(
        extract_skills_from_text(resume_text, "resume", domain, config=config, client=client),
        extract_job_requirements(job_description, domain, config=config, client=client),
    )

    resume_names = resume_skills.all_skills
    job_names = job_requirements.all_required_skills
    if config.semantic_matching:
        matches = await match_skills(
            resume_names,
            job_names,
            embedder=_resolve_embedder(config, client, embedder),
            timeout_s=config.timeout_s,
        )
    else:
        matches = match_skills_simple(resume_names, job_names)
    gaps = identify_missing_skills(job_requirements, matches)

    total_years = extract_years_of_experience(resume_text, today=today)
    required_years = parse_required_years(job_requirements.experience_requirements, job_description)
    duration_score = calculate_duration_score(total_years, required_years)

    relevance, education, achievements, feedback = await asyncio.gather(
        score_experience_relevance(resume_text, job_description, domain, config=config, client=client),
        score_education(resume_text, job_description, domain, config=config, client=client),
        score_achievements(resume_text, job_description, domain, config=config, client=client),
        generate_comprehensive_feedback(
            resume_text,
            job_description,
            domain,
            matches,
            job_requirements,
            config=config,
            client=client,
        ),
    )

    ats_score = calculate_ats_score(
        resume_text,
        matched_required=count_keyword_hits(resume_text, job_requirements.required_skills),
        total_required=len(job_requirements.required_skills),
    )
    breakdown = ScoreBreakdown(
        experience_match=calculate_experience_match_score(relevance.score, duration_score),
        skills=calculate_skills_score(matches, gaps),
        education=int(round(education.score)),
        achievements=int(round(achievements.score)),
        ats=ats_score,
    )
    weights = get_weights_for_experience_level(total_years)
    overall = calculate_overall_score(breakdown, weights)

    result = AnalysisResult(
        overall_score=overall,
        ats_score=ats_score,
        domain=domain,
        job_title=job_title,
        company=company,
        score_breakdown=breakdown,
        weights=weights,
        total_years_experience=round(total_years, 2),
        required_years_experience=required_years,
        score_rationales={
            "experience_relevance": relevance.reasoning,
            "education": education.reasoning,
            "achievements": achievements.reasoning,
        },
        resume_skills=resume_skills.to_records("resume"),
        matched_skills=matches,
        missing_skills=gaps,
        relevant_experiences=feedback.relevant_experiences,
        experience_gaps=feedback.experience_gaps,
        strength_areas=feedback.strength_areas,
        improvement_areas=feedback.improvement_areas,
        ats_tips=feedback.ats_tips,
        suggested_bullets=feedback.suggested_bullets,
        missing_keywords=[gap.skill for gap in gaps],
    )
    logger.info(
        "analysis_complete mode=%s domain=%s overall=%s matches=%s gaps=%s latency_ms=%s",
        config.mode,
        domain,
        overall,
        len(matches),
        len(gaps),
        int((time.perf_counter() - started) * 1000),
    )
    return AnalysisOutcome(result=result, feedback=feedback)


async def analyze(
    resume_text: str,
    job_description: str,
    domain: str | None = None,
    job_title: str | None = None,
    company: str | None = None,
    *,
    config: AIConfig | None = None,
    ai_client: AIClient | None = None,
    embedder: EmbeddingProvider | None = None,
    today: date | None = None,
) -> AnalysisResult:
    outcome = await run_analysis(
        resume_text,
        job_description,
        domain,
        job_title,
        company,
        config=config,
        ai_client=ai_client,
        embedder=embedder,
        today=today,
    )
    return outcome.result


async def analyze_categories(
    resume_text: str,
    job_description: str,
    domain: str | None = None,
    job_title: str | None = None,
    company: str | None = None,
    *,
    config: AIConfig | None = None,
    ai_client: AIClient | None = None,
    embedder: EmbeddingProvider | None = None,
    today: date | None = None,
) -> CategoryAnalysisResponse:
    outcome = await run_analysis(
        resume_text,
        job_description,
        domain,
        job_title,
        company,
        config=config,
        ai_client=ai_client,
        embedder=embedder,
        today=today,
    )
    return transform_to_category_analysis(outcome.feedback, outcome.result)
