from __future__ import annotations

import logging

from resume_match.ai.config import AIConfig
from resume_match.ai.gateway import structured_completion
from resume_match.ai.prompts import build_feedback_messages
from resume_match.ai.types import AIClient
from resume_match.errors import ExternalCapabilityError
from resume_match.schemas.analysis import JobRequirements, SkillMatch
from resume_match.schemas.feedback import ComprehensiveFeedback

from .mock_feedback import mock_comprehensive_feedback

logger = logging.getLogger(__name__)


async def generate_comprehensive_feedback(
    resume_text: str,
    job_description: str,
    domain: str,
    matches: list[SkillMatch],
    job_requirements: JobRequirements,
    *,
    config: AIConfig,
    client: AIClient | None,
) -> ComprehensiveFeedback:
    """Ask the provider for structured feedback; fall back to the domain's static table."""
    if client is None:
        return mock_comprehensive_feedback(domain)

    messages = build_feedback_messages(
        resume_text=resume_text,
        job_description=job_description,
        domain=domain,
        matches=matches,
        job_requirements=job_requirements,
    )
    try:
        return await structured_completion(
            client,
            messages,
            ComprehensiveFeedback,
            purpose="comprehensive_feedback",
            timeout_s=config.timeout_s,
        )
    except ExternalCapabilityError as exc:
        logger.warning("feedback_fallback domain=%s code=%s: %s", domain, exc.code, exc)
        return mock_comprehensive_feedback(domain)
