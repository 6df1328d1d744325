from .analysis import (
    AnalysisResult,
    ExperienceInterval,
    ExtractedSkills,
    JobRequirements,
    ScoreBreakdown,
    ScoringWeights,
    SectionScore,
    SkillGap,
    SkillMatch,
    SkillRecord,
)
from .feedback import (
    ActionItem,
    CategoryAnalysisResponse,
    CategorySummary,
    ComprehensiveFeedback,
)

__all__ = [
    "AnalysisResult",
    "ExperienceInterval",
    "ExtractedSkills",
    "JobRequirements",
    "ScoreBreakdown",
    "ScoringWeights",
    "SectionScore",
    "SkillGap",
    "SkillMatch",
    "SkillRecord",
    "ActionItem",
    "CategoryAnalysisResponse",
    "CategorySummary",
    "ComprehensiveFeedback",
]
