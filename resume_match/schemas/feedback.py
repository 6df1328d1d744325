from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from .analysis import SkillGap, SkillMatch

CategoryId = Literal["overview", "skills", "experience", "education", "impact", "ats", "quality"]
ActionPriority = Literal["high", "medium", "low"]

CATEGORY_IDS: tuple[str, ...] = ("overview", "skills", "experience", "education", "impact", "ats", "quality")

CATEGORY_NAME_MAP: dict[str, str] = {
    "matchOverview": "overview",
    "match_overview": "overview",
    "requiredSkills": "skills",
    "required_skills": "skills",
    "workExperience": "experience",
    "work_experience": "experience",
    "educationCredentials": "education",
    "education_credentials": "education",
    "impactAchievements": "impact",
    "impact_achievements": "impact",
    "atsCompatibility": "ats",
    "ats_compatibility": "ats",
    "professionalQuality": "quality",
    "professional_quality": "quality",
    **{category_id: category_id for category_id in CATEGORY_IDS},
}


class ActionItem(BaseModel):
    id: str
    category: CategoryId
    title: str
    description: str = ""
    priority: ActionPriority = "medium"
    estimated_impact: int = Field(default=0, ge=0, le=100)

    @field_validator("category", mode="before")
    @classmethod
    def _normalize_category(cls, value: str) -> str:
        raw = str(value or "").strip()
        return CATEGORY_NAME_MAP.get(raw, raw.lower())


class MatchOverviewData(BaseModel):
    top_strengths: list[str] = Field(min_length=3, max_length=5)
    top_improvements: list[str] = Field(min_length=3, max_length=5)
    priority_actions: list[str] = Field(min_length=3, max_length=5)
    action_items: list[ActionItem] = Field(default_factory=list)


class RequiredSkillsData(BaseModel):
    skill_gaps: list[str]
    missing_critical_skills: list[str]
    action_items: list[ActionItem] = Field(default_factory=list)


class WorkExperienceData(BaseModel):
    duration_analysis: str
    relevant_experiences: list[str]
    experience_gaps: list[str]
    action_items: list[ActionItem] = Field(default_factory=list)


class EducationCredentialsData(BaseModel):
    education_match: str
    missing_credentials: list[str]
    action_items: list[ActionItem] = Field(default_factory=list)


class ImpactAchievementsData(BaseModel):
    current_achievements: list[str]
    missing_metrics: list[str]
    action_items: list[ActionItem] = Field(default_factory=list)


class AtsCompatibilityData(BaseModel):
    ats_issues: list[str]
    missing_keywords: list[str]
    formatting_problems: list[str]
    action_items: list[ActionItem] = Field(default_factory=list)


class ProfessionalQualityData(BaseModel):
    writing_issues: list[str]
    consistency_problems: list[str]
    formatting_concerns: list[str]
    action_items: list[ActionItem] = Field(default_factory=list)


class ComprehensiveFeedback(BaseModel):
    strength_areas: list[str] = Field(min_length=3, max_length=5)
    improvement_areas: list[str] = Field(min_length=3, max_length=5)
    experience_gaps: list[str]
    relevant_experiences: list[str]
    ats_tips: list[str] = Field(min_length=5, max_length=7)
    suggested_bullets: list[str] = Field(min_length=5, max_length=8)

    match_overview: MatchOverviewData | None = None
    required_skills: RequiredSkillsData | None = None
    work_experience: WorkExperienceData | None = None
    education_credentials: EducationCredentialsData | None = None
    impact_achievements: ImpactAchievementsData | None = None
    ats_compatibility: AtsCompatibilityData | None = None
    professional_quality: ProfessionalQualityData | None = None


class CategoryData(BaseModel):
    score: int = Field(ge=0, le=100)
    action_items_count: int = Field(ge=0)
    action_items: list[ActionItem] = Field(default_factory=list)


class MatchOverviewCategoryData(CategoryData):
    top_strengths: list[str]
    top_improvements: list[str]
    priority_actions: list[str]


class RequiredSkillsCategoryData(CategoryData):
    matched_skills: list[SkillMatch]
    missing_skills: list[SkillGap]
    skill_gaps: list[str]
    missing_critical_skills: list[str]


class WorkExperienceCategoryData(CategoryData):
    duration_analysis: str
    relevant_experiences: list[str]
    experience_gaps: list[str]


class EducationCredentialsCategoryData(CategoryData):
    education_match: str
    missing_credentials: list[str]


class ImpactAchievementsCategoryData(CategoryData):
    current_achievements: list[str]
    missing_metrics: list[str]


class AtsCompatibilityCategoryData(CategoryData):
    ats_issues: list[str]
    missing_keywords: list[str]
    formatting_problems: list[str]


class ProfessionalQualityCategoryData(CategoryData):
    writing_issues: list[str]
    consistency_problems: list[str]
    formatting_concerns: list[str]


class CategoryAnalysisResponse(BaseModel):
    overview: MatchOverviewCategoryData
    skills: RequiredSkillsCategoryData
    experience: WorkExperienceCategoryData
    education: EducationCredentialsCategoryData
    impact: ImpactAchievementsCategoryData
    ats: AtsCompatibilityCategoryData
    quality: ProfessionalQualityCategoryData


class CategorySummary(BaseModel):
    id: CategoryId
    name: str
    score: int = Field(ge=0, le=100)
    action_items_count: int = Field(ge=0)
