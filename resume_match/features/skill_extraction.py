from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from resume_match.ai.config import AIConfig
from resume_match.ai.gateway import structured_completion, text_completion
from resume_match.ai.prompts import (
    TextContext,
    build_domain_messages,
    build_requirements_messages,
    build_skill_extraction_messages,
)
from resume_match.ai.types import AIClient
from resume_match.errors import ExternalCapabilityError
from resume_match.schemas.analysis import ExtractedSkills, JobRequirements, SkillCategory

logger = logging.getLogger(__name__)

DEFAULT_DOMAIN = "General"

_TOKEN_PATTERN = re.compile(r"[a-z0-9+#.]+")
_MAX_MISSING_KEYWORDS = 50
_MAX_DOMAIN_WORDS = 4
_MAX_DOMAIN_CHARS = 60

_SOFT_KEYWORDS = ("leadership", "communication", "teamwork", "problem", "analytical", "creative", "management")
_CERTIFICATION_KEYWORDS = ("certified", "certification", "degree", "bachelor", "master", "phd")
_TOOL_KEYWORDS = ("software", "platform", "tool", "system", "application")


def tokenize(text: str) -> list[str]:
    if not text:
        return []
    return _TOKEN_PATTERN.findall(text.lower())


@dataclass(frozen=True)
class KeywordMatch:
    score: int
    missing_keywords: list[str] = field(default_factory=list)


def score_keyword_match(resume_text: str, job_description: str) -> KeywordMatch:
    """Share of distinct job-description tokens that also appear in the resume."""
    job_tokens = list(dict.fromkeys(tokenize(job_description)))
    resume_tokens = set(tokenize(resume_text))
    missing = [token for token in job_tokens if token not in resume_tokens]
    score = round((len(job_tokens) - len(missing)) / max(1, len(job_tokens)) * 100)
    return KeywordMatch(score=max(0, score), missing_keywords=missing[:_MAX_MISSING_KEYWORDS])


def categorize_skill(skill: str) -> SkillCategory:
    lowered = (skill or "").lower()
    if any(keyword in lowered for keyword in _SOFT_KEYWORDS):
        return "soft"
    if any(keyword in lowered for keyword in _CERTIFICATION_KEYWORDS):
        return "certification"
    if any(keyword in lowered for keyword in _TOOL_KEYWORDS):
        return "tool"
    return "technical"


def mock_extracted_skills() -> ExtractedSkills:
    return ExtractedSkills(
        technical_skills=["React", "TypeScript", "Node.js", "Python", "SQL"],
        soft_skills=["Leadership", "Communication", "Problem Solving", "Teamwork"],
        tools=["Git", "Docker", "VS Code", "Jira"],
        certifications=["Bachelor's in Computer Science", "AWS Certified"],
        domain_keywords=["Agile", "CI/CD", "Microservices"],
    )


def mock_job_requirements() -> JobRequirements:
    return JobRequirements(
        required_skills=["React", "TypeScript", "3+ years experience"],
        preferred_skills=["AWS", "Docker", "GraphQL"],
        experience_requirements=["Bachelor's degree", "5+ years in software development"],
    )


async def extract_skills_from_text(
    text: str,
    context: TextContext,
    domain: str | None = None,
    *,
    config: AIConfig,
    client: AIClient | None,
) -> ExtractedSkills:
    if config.is_disabled:
        return ExtractedSkills.empty()
    if client is None:
        return mock_extracted_skills()

    try:
        return await structured_completion(
            client,
            build_skill_extraction_messages(text, context, domain),
            ExtractedSkills,
            purpose=f"extract_skills_{context}",
            timeout_s=config.timeout_s,
        )
    except ExternalCapabilityError as exc:
        logger.warning("skill_extraction_fallback context=%s code=%s: %s", context, exc.code, exc)
        return mock_extracted_skills()


async def extract_job_requirements(
    job_description: str,
    domain: str | None = None,
    *,
    config: AIConfig,
    client: AIClient | None,
) -> JobRequirements:
    if config.is_disabled:
        return JobRequirements.empty()
    if client is None:
        return mock_job_requirements()

    try:
        return await structured_completion(
            client,
            build_requirements_messages(job_description, domain),
            JobRequirements,
            purpose="extract_requirements",
            timeout_s=config.timeout_s,
        )
    except ExternalCapabilityError as exc:
        logger.warning("requirements_extraction_fallback code=%s: %s", exc.code, exc)
        return mock_job_requirements()


def _clean_domain(raw: str) -> str | None:
    candidate = raw.strip().splitlines()[0] if raw.strip() else ""
    candidate = candidate.strip().strip("\"'`.").strip()
    if not candidate or len(candidate) > _MAX_DOMAIN_CHARS:
        return None
    if len(candidate.split()) > _MAX_DOMAIN_WORDS:
        return None
    return candidate


async def detect_domain(job_description: str, *, config: AIConfig, client: AIClient | None) -> str:
    if client is None:
        return DEFAULT_DOMAIN

    try:
        raw = await text_completion(
            client,
            build_domain_messages(job_description),
            purpose="detect_domain",
            timeout_s=config.timeout_s,
        )
    except ExternalCapabilityError as exc:
        logger.warning("domain_detection_fallback code=%s: %s", exc.code, exc)
        return DEFAULT_DOMAIN

    domain = _clean_domain(raw)
    if domain is None:
        logger.warning("domain_detection_fallback code=invalid_schema: unusable domain %r", raw[:80])
        return DEFAULT_DOMAIN
    return domain
