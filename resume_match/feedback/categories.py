from __future__ import annotations

from resume_match.schemas.analysis import AnalysisResult
from resume_match.schemas.feedback import (
    CATEGORY_IDS,
    ActionItem,
    AtsCompatibilityCategoryData,
    CategoryAnalysisResponse,
    CategoryData,
    CategorySummary,
    ComprehensiveFeedback,
    EducationCredentialsCategoryData,
    ImpactAchievementsCategoryData,
    MatchOverviewCategoryData,
    ProfessionalQualityCategoryData,
    RequiredSkillsCategoryData,
    WorkExperienceCategoryData,
)

CATEGORY_DISPLAY_NAMES: dict[str, str] = {
    "overview": "Match Overview",
    "skills": "Required Skills",
    "experience": "Work Experience",
    "education": "Education & Credentials",
    "impact": "Impact & Achievements",
    "ats": "ATS Compatibility",
    "quality": "Professional Quality",
}

_LEGACY_LIST_LIMIT = 5
_ATS_WEIGHT = 0.7
_WRITING_WEIGHT = 0.3


def calculate_professional_quality_score(ats_score: int, feedback: ComprehensiveFeedback) -> int:
    quality = feedback.professional_quality
    writing = 100
    if quality is not None:
        writing -= min(30, 5 * len(quality.writing_issues))
        writing -= min(20, 5 * len(quality.consistency_problems))
        writing -= min(20, 5 * len(quality.formatting_concerns))
    writing = max(0, writing)
    return int(round(max(0.0, min(100.0, ats_score * _ATS_WEIGHT + writing * _WRITING_WEIGHT))))


def _count(action_items: list[ActionItem], *fallback_lists: list[str]) -> int:
    if action_items:
        return len(action_items)
    return sum(len(items) for items in fallback_lists)


def transform_to_category_analysis(
    feedback: ComprehensiveFeedback,
    analysis: AnalysisResult,
) -> CategoryAnalysisResponse:
    """Regroup feedback and scores into the seven fixed result categories.

    Each category prefers its structured sub-object from ``feedback`` and falls
    back to the flat legacy lists when the provider did not return one.
    """
    breakdown = analysis.score_breakdown

    overview_src = feedback.match_overview
    overview_items = overview_src.action_items if overview_src else []
    priority_actions = (
        overview_src.priority_actions if overview_src else feedback.improvement_areas[:_LEGACY_LIST_LIMIT]
    )
    overview = MatchOverviewCategoryData(
        score=analysis.overall_score,
        action_items_count=_count(overview_items, priority_actions),
        action_items=overview_items,
        top_strengths=overview_src.top_strengths if overview_src else feedback.strength_areas[:_LEGACY_LIST_LIMIT],
        top_improvements=(
            overview_src.top_improvements if overview_src else feedback.improvement_areas[:_LEGACY_LIST_LIMIT]
        ),
        priority_actions=priority_actions,
    )

    skills_src = feedback.required_skills
    skill_gaps = skills_src.skill_gaps if skills_src else []
    missing_critical = skills_src.missing_critical_skills if skills_src else []
    skills_items = skills_src.action_items if skills_src else []
    skills = RequiredSkillsCategoryData(
        score=breakdown.skills,
        action_items_count=_count(skills_items, skill_gaps, missing_critical),
        action_items=skills_items,
        matched_skills=analysis.matched_skills,
        missing_skills=analysis.missing_skills,
        skill_gaps=skill_gaps,
        missing_critical_skills=missing_critical,
    )

    work_src = feedback.work_experience
    experience_gaps = work_src.experience_gaps if work_src else feedback.experience_gaps
    work_items = work_src.action_items if work_src else []
    experience = WorkExperienceCategoryData(
        score=breakdown.experience_match,
        action_items_count=_count(work_items, experience_gaps),
        action_items=work_items,
        duration_analysis=(
            work_src.duration_analysis
            if work_src
            else f"Total years of experience: {analysis.total_years_experience:.1f}"
        ),
        relevant_experiences=work_src.relevant_experiences if work_src else feedback.relevant_experiences,
        experience_gaps=experience_gaps,
    )

    education_src = feedback.education_credentials
    missing_credentials = education_src.missing_credentials if education_src else []
    education_items = education_src.action_items if education_src else []
    education = EducationCredentialsCategoryData(
        score=breakdown.education,
        action_items_count=_count(education_items, missing_credentials),
        action_items=education_items,
        education_match=(
            education_src.education_match
            if education_src
            else "Education background assessed against the job requirements."
        ),
        missing_credentials=missing_credentials,
    )

    impact_src = feedback.impact_achievements
    missing_metrics = impact_src.missing_metrics if impact_src else []
    impact_items = impact_src.action_items if impact_src else []
    impact = ImpactAchievementsCategoryData(
        score=breakdown.achievements,
        action_items_count=_count(impact_items, missing_metrics),
        action_items=impact_items,
        current_achievements=impact_src.current_achievements if impact_src else [],
        missing_metrics=missing_metrics,
    )

    ats_src = feedback.ats_compatibility
    ats_issues = ats_src.ats_issues if ats_src else feedback.ats_tips
    missing_keywords = ats_src.missing_keywords if ats_src else analysis.missing_keywords
    formatting_problems = ats_src.formatting_problems if ats_src else []
    ats_items = ats_src.action_items if ats_src else []
    ats = AtsCompatibilityCategoryData(
        score=analysis.ats_score,
        action_items_count=_count(ats_items, ats_issues, missing_keywords, formatting_problems),
        action_items=ats_items,
        ats_issues=ats_issues,
        missing_keywords=missing_keywords,
        formatting_problems=formatting_problems,
    )

    quality_src = feedback.professional_quality
    writing_issues = quality_src.writing_issues if quality_src else []
    consistency_problems = quality_src.consistency_problems if quality_src else []
    formatting_concerns = quality_src.formatting_concerns if quality_src else []
    quality_items = quality_src.action_items if quality_src else []
    quality = ProfessionalQualityCategoryData(
        score=calculate_professional_quality_score(analysis.ats_score, feedback),
        action_items_count=_count(quality_items, writing_issues, consistency_problems, formatting_concerns),
        action_items=quality_items,
        writing_issues=writing_issues,
        consistency_problems=consistency_problems,
        formatting_concerns=formatting_concerns,
    )

    return CategoryAnalysisResponse(
        overview=overview,
        skills=skills,
        experience=experience,
        education=education,
        impact=impact,
        ats=ats,
        quality=quality,
    )


def get_category_data(response: CategoryAnalysisResponse, category_id: str) -> CategoryData | None:
    if category_id not in CATEGORY_IDS:
        return None
    return getattr(response, category_id)


def summarize_categories(response: CategoryAnalysisResponse) -> list[CategorySummary]:
    summaries: list[CategorySummary] = []
    for category_id in CATEGORY_IDS:
        data: CategoryData = getattr(response, category_id)
        summaries.append(
            CategorySummary(
                id=category_id,
                name=CATEGORY_DISPLAY_NAMES[category_id],
                score=data.score,
                action_items_count=data.action_items_count,
            )
        )
    return summaries


def total_action_items_count(response: CategoryAnalysisResponse) -> int:
    return sum(summary.action_items_count for summary in summarize_categories(response))


def categories_sorted_by_score(response: CategoryAnalysisResponse) -> list[CategorySummary]:
    """Lowest score first."""
    return sorted(summarize_categories(response), key=lambda summary: summary.score)


def low_score_categories(response: CategoryAnalysisResponse, threshold: int = 60) -> list[CategorySummary]:
    return [summary for summary in summarize_categories(response) if summary.score < threshold]
