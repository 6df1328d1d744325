from __future__ import annotations

from typing import Literal

from resume_match.ai.types import ChatMessage
from resume_match.schemas.analysis import JobRequirements, SkillMatch

TextContext = Literal["resume", "job_description"]

_MAX_DOMAIN_INPUT_CHARS = 1000
_MAX_FEEDBACK_SKILLS = 10


def build_skill_extraction_messages(text: str, context: TextContext, domain: str | None = None) -> list[ChatMessage]:
    domain_hint = f" for a {domain} position" if domain else ""
    focus = "demonstrated capabilities" if context == "resume" else "required qualifications"
    system = (
        "You are an expert career advisor. Extract the skills, qualifications and keywords "
        f"from the provided text. Context: this is a {context}{domain_hint}. "
        "Return a JSON object with exactly these keys, each an array of strings: "
        "\"technical_skills\", \"soft_skills\", \"tools\", \"certifications\", \"domain_keywords\". "
        "Do not nest categories. Normalize spelling variants (\"React.js\" -> \"React\", "
        "\"JS\" -> \"JavaScript\"). Include implied skills as well as explicit ones. "
        f"Focus on {focus}. Return only the JSON object."
    )
    user = f"Extract skills from this {context}:\n\n{text}"
    return [ChatMessage(role="system", content=system), ChatMessage(role="user", content=user)]


def build_requirements_messages(job_description: str, domain: str | None = None) -> list[ChatMessage]:
    domain_hint = f" in {domain}" if domain else ""
    system = (
        "You are an expert career advisor. Extract and categorize the requirements of a job "
        f"description{domain_hint}. Return a JSON object with exactly these keys, each an array "
        "of strings: \"required_skills\", \"preferred_skills\", \"experience_requirements\". "
        "Use wording such as 'must have', 'required' or 'essential' versus 'nice to have', "
        "'preferred' or 'bonus' to separate required from preferred. Normalize skill names. "
        "Put tenure and degree requirements such as \"5+ years\" or \"Bachelor's degree\" in "
        "\"experience_requirements\" only, never in the skill arrays. Return only the JSON object."
    )
    user = f"Extract requirements from this job description:\n\n{job_description}"
    return [ChatMessage(role="system", content=system), ChatMessage(role="user", content=user)]


def build_domain_messages(job_description: str) -> list[ChatMessage]:
    system = (
        "You categorize job postings. Identify the primary industry or job domain of the posting "
        "and answer with a concise domain name of two to four words, for example "
        "\"Software Engineering\", \"Healthcare\", \"Financial Services\", \"Digital Marketing\" "
        "or \"Data Science\". Answer with the domain name only."
    )
    user = f"Identify the domain:\n\n{job_description[:_MAX_DOMAIN_INPUT_CHARS]}"
    return [ChatMessage(role="system", content=system), ChatMessage(role="user", content=user)]


_SECTION_RUBRICS = {
    "experience_relevance": (
        "the QUALITY and RELEVANCE of the candidate's work experience",
        "task complexity (40 points), impact and measurable outcomes (30 points), relevance to "
        "the target role (20 points), leadership and collaboration (10 points). Judge what was "
        "accomplished rather than where. Transferable skills count when domains differ.",
    ),
    "education": (
        "the candidate's EDUCATION",
        "degree level against the requirements (40 points), relevance of the field of study "
        "(30 points), academic performance (20 points), institution reputation (10 points). "
        "Relevant certifications or strong experience may compensate for a missing degree.",
    ),
    "achievements": (
        "the candidate's ACHIEVEMENTS and IMPACT",
        "quantified results (40 points), scope of impact (30 points), recognition such as awards "
        "or promotions (20 points), relevance to the target role (10 points).",
    ),
}

SectionKind = Literal["experience_relevance", "education", "achievements"]


def build_section_score_messages(
    kind: SectionKind,
    *,
    section_text: str | None,
    job_description: str,
    domain: str,
) -> list[ChatMessage]:
    subject, rubric = _SECTION_RUBRICS[kind]
    system = (
        f"You are an expert recruiter for {domain} roles. Score {subject} from 0 to 100. "
        f"Weigh: {rubric} "
        "Return JSON: {\"score\": number, \"reasoning\": string}."
    )
    section = section_text.strip() if section_text and section_text.strip() else "No matching section found"
    user = (
        f"RESUME SECTION:\n{section}\n\n"
        f"JOB DESCRIPTION:\n{job_description}\n\n"
        f"TARGET DOMAIN: {domain}\n\n"
        "SCORE:"
    )
    return [ChatMessage(role="system", content=system), ChatMessage(role="user", content=user)]


_FEEDBACK_SCHEMA = (
    "Keys (snake_case):\n"
    "- strength_areas: 3-5 strengths relevant to the role\n"
    "- improvement_areas: 3-5 constructive improvement areas\n"
    "- experience_gaps: missing experience or qualifications\n"
    "- relevant_experiences: resume experiences that align with the role\n"
    "- ats_tips: 5-7 applicant tracking system optimization tips\n"
    "- suggested_bullets: 5-8 rewritten bullet points with metrics\n"
    "- match_overview: {top_strengths: 3-5, top_improvements: 3-5, priority_actions: 3-5}\n"
    "- required_skills: {skill_gaps: [], missing_critical_skills: []}\n"
    "- work_experience: {duration_analysis: string, relevant_experiences: [], experience_gaps: []}\n"
    "- education_credentials: {education_match: string, missing_credentials: []}\n"
    "- impact_achievements: {current_achievements: [], missing_metrics: []}\n"
    "- ats_compatibility: {ats_issues: [], missing_keywords: [], formatting_problems: []}\n"
    "- professional_quality: {writing_issues: [], consistency_problems: [], formatting_concerns: []}"
)


def build_feedback_messages(
    *,
    resume_text: str,
    job_description: str,
    domain: str,
    matches: list[SkillMatch],
    job_requirements: JobRequirements,
) -> list[ChatMessage]:
    matched = [match.resume_skill for match in matches if match.relevance == "high"][:_MAX_FEEDBACK_SKILLS]
    matched_jobs = {match.job_skill.lower() for match in matches if match.relevance != "low"}
    missing = [
        skill for skill in job_requirements.required_skills if skill.lower() not in matched_jobs
    ][:_MAX_FEEDBACK_SKILLS]

    system = (
        f"You are an expert career advisor for {domain}. Review the resume against the job "
        "description and return honest, actionable feedback as a JSON object.\n"
        "Tenure requirements such as \"5+ years\" are not skills; flag an experience gap only "
        "when the employment dates in the resume fall short. Strengths must be relevant to the "
        f"{domain} role; on a domain mismatch, favour transferable skills and say so in "
        "improvement_areas.\n"
        f"{_FEEDBACK_SCHEMA}\n"
        "Return only valid JSON."
    )
    user = (
        f"RESUME:\n{resume_text}\n\n"
        f"JOB DESCRIPTION:\n{job_description}\n\n"
        f"MATCHED SKILLS (high relevance): {', '.join(matched) or 'None'}\n"
        f"MISSING REQUIRED SKILLS: {', '.join(missing) or 'None'}\n"
        f"EXPERIENCE REQUIREMENTS: {', '.join(job_requirements.experience_requirements) or 'None'}\n"
        f"TARGET DOMAIN: {domain}"
    )
    return [ChatMessage(role="system", content=system), ChatMessage(role="user", content=user)]
