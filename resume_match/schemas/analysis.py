from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

SkillCategory = Literal["technical", "soft", "tool", "certification", "domain"]
SkillSource = Literal["resume", "job"]
Relevance = Literal["high", "medium", "low"]
MatchTier = Literal["exact", "fuzzy", "semantic", "simple"]
GapPriority = Literal["critical", "important", "nice-to-have"]

_EXPERIENCE_REQUIREMENT_RE = re.compile(r"\d+\s*(?:\+|-\s*\d+)?\s*(?:years?|yrs?)\b", re.IGNORECASE)


def looks_like_experience_requirement(value: str) -> bool:
    """True for strings such as '3+ years experience' that are not skills."""
    return bool(_EXPERIENCE_REQUIREMENT_RE.search(value or ""))


def _clean_list(values: list[str]) -> list[str]:
    seen: set[str] = set()
    output: list[str] = []
    for value in values:
        text = re.sub(r"\s+", " ", value or "").strip()
        key = text.lower()
        if not text or key in seen:
            continue
        seen.add(key)
        output.append(text)
    return output


class SkillRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    category: SkillCategory
    source: SkillSource


class ExtractedSkills(BaseModel):
    technical_skills: list[str]
    soft_skills: list[str]
    tools: list[str]
    certifications: list[str]
    domain_keywords: list[str]

    @classmethod
    def empty(cls) -> "ExtractedSkills":
        return cls(technical_skills=[], soft_skills=[], tools=[], certifications=[], domain_keywords=[])

    @property
    def all_skills(self) -> list[str]:
        return _clean_list(
            [
                *self.technical_skills,
                *self.soft_skills,
                *self.tools,
                *self.certifications,
                *self.domain_keywords,
            ]
        )

    def to_records(self, source: SkillSource) -> list[SkillRecord]:
        groups: list[tuple[SkillCategory, list[str]]] = [
            ("technical", self.technical_skills),
            ("soft", self.soft_skills),
            ("tool", self.tools),
            ("certification", self.certifications),
            ("domain", self.domain_keywords),
        ]
        records: list[SkillRecord] = []
        seen: set[str] = set()
        for category, names in groups:
            for name in _clean_list(names):
                if name.lower() in seen:
                    continue
                seen.add(name.lower())
                records.append(SkillRecord(name=name, category=category, source=source))
        return records


class JobRequirements(BaseModel):
    required_skills: list[str]
    preferred_skills: list[str]
    experience_requirements: list[str]

    @classmethod
    def empty(cls) -> "JobRequirements":
        return cls(required_skills=[], preferred_skills=[], experience_requirements=[])

    @model_validator(mode="after")
    def _split_experience_requirements(self) -> "JobRequirements":
        moved: list[str] = []
        for field_name in ("required_skills", "preferred_skills"):
            kept: list[str] = []
            for value in getattr(self, field_name):
                if looks_like_experience_requirement(value):
                    moved.append(value)
                else:
                    kept.append(value)
            setattr(self, field_name, _clean_list(kept))
        self.experience_requirements = _clean_list([*self.experience_requirements, *moved])
        return self

    @property
    def all_required_skills(self) -> list[str]:
        return _clean_list([*self.required_skills, *self.preferred_skills])


class SkillMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    resume_skill: str
    job_skill: str
    similarity: float = Field(ge=0.0, le=1.0)
    relevance: Relevance
    tier: MatchTier


class SkillGap(BaseModel):
    model_config = ConfigDict(frozen=True)

    skill: str
    priority: GapPriority
    category: SkillCategory


class ScoreBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    experience_match: int = Field(ge=0, le=100)
    skills: int = Field(ge=0, le=100)
    education: int = Field(ge=0, le=100)
    achievements: int = Field(ge=0, le=100)
    ats: int = Field(ge=0, le=100)


class ScoringWeights(BaseModel):
    model_config = ConfigDict(frozen=True)

    experience_match: float = Field(ge=0.0, le=1.0)
    skills: float = Field(ge=0.0, le=1.0)
    education: float = Field(ge=0.0, le=1.0)
    achievements: float = Field(ge=0.0, le=1.0)
    ats: float = Field(ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _validate_total(self) -> "ScoringWeights":
        total = self.experience_match + self.skills + self.education + self.achievements + self.ats
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"scoring weights must sum to 1.0, got {total:.6f}")
        return self


class SectionScore(BaseModel):
    """Score returned by the generative capability for one resume section."""

    score: float = Field(ge=0, le=100)
    reasoning: str


class ExperienceInterval(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_year: int
    start_month: int = Field(ge=0, le=11)
    end_year: int
    end_month: int = Field(ge=0, le=11)
    is_current: bool = False

    @property
    def years(self) -> float:
        span = (self.end_year - self.start_year) + (self.end_month - self.start_month) / 12
        return max(0.0, span)


class AnalysisResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    overall_score: int = Field(ge=0, le=100)
    ats_score: int = Field(ge=0, le=100)
    domain: str
    job_title: str | None = None
    company: str | None = None

    score_breakdown: ScoreBreakdown
    weights: ScoringWeights
    total_years_experience: float = Field(ge=0.0)
    required_years_experience: float = Field(default=0.0, ge=0.0)
    score_rationales: dict[str, str] = Field(default_factory=dict)

    resume_skills: list[SkillRecord] = Field(default_factory=list)
    matched_skills: list[SkillMatch] = Field(default_factory=list)
    missing_skills: list[SkillGap] = Field(default_factory=list)

    relevant_experiences: list[str] = Field(default_factory=list)
    experience_gaps: list[str] = Field(default_factory=list)
    strength_areas: list[str] = Field(default_factory=list)
    improvement_areas: list[str] = Field(default_factory=list)
    ats_tips: list[str] = Field(default_factory=list)
    suggested_bullets: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
