import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_match.feedback.categories import (  # noqa: E402
    calculate_professional_quality_score,
    categories_sorted_by_score,
    get_category_data,
    low_score_categories,
    summarize_categories,
    total_action_items_count,
    transform_to_category_analysis,
)
from resume_match.scoring.scorer import get_weights_for_experience_level  # noqa: E402
from resume_match.schemas.analysis import AnalysisResult, ScoreBreakdown, SkillGap, SkillMatch  # noqa: E402
from resume_match.schemas.feedback import ComprehensiveFeedback  # noqa: E402


def _legacy_feedback(**extra) -> ComprehensiveFeedback:
    return ComprehensiveFeedback(
        strength_areas=["S1", "S2", "S3", "S4"],
        improvement_areas=["I1", "I2", "I3"],
        experience_gaps=["G1", "G2"],
        relevant_experiences=["R1"],
        ats_tips=["T1", "T2", "T3", "T4", "T5"],
        suggested_bullets=["B1", "B2", "B3", "B4", "B5"],
        **extra,
    )


def _analysis(ats_score: int = 80) -> AnalysisResult:
    return AnalysisResult(
        overall_score=72,
        ats_score=ats_score,
        domain="Software Engineering",
        score_breakdown=ScoreBreakdown(experience_match=70, skills=55, education=85, achievements=40, ats=ats_score),
        weights=get_weights_for_experience_level(4),
        total_years_experience=4.0,
        matched_skills=[
            SkillMatch(resume_skill="React", job_skill="React", similarity=1.0, relevance="high", tier="exact")
        ],
        missing_skills=[SkillGap(skill="GraphQL", priority="critical", category="technical")],
        missing_keywords=["GraphQL"],
    )


class ProfessionalQualityScoreTests(unittest.TestCase):
    def test_writing_issues_reduce_score(self):
        feedback = _legacy_feedback(
            professional_quality={
                "writing_issues": ["w1", "w2"],
                "consistency_problems": [],
                "formatting_concerns": [],
            }
        )
        self.assertEqual(calculate_professional_quality_score(80, feedback), 83)

    def test_per_list_caps(self):
        feedback = _legacy_feedback(
            professional_quality={
                "writing_issues": [f"w{i}" for i in range(10)],
                "consistency_problems": [f"c{i}" for i in range(10)],
                "formatting_concerns": [f"f{i}" for i in range(10)],
            }
        )
        # writing score = 100 - 30 - 20 - 20 = 30
        self.assertEqual(calculate_professional_quality_score(100, feedback), 79)

    def test_without_quality_data_writing_is_perfect(self):
        self.assertEqual(calculate_professional_quality_score(80, _legacy_feedback()), 86)


class TransformTests(unittest.TestCase):
    def test_legacy_fields_fill_every_category(self):
        response = transform_to_category_analysis(_legacy_feedback(), _analysis())

        self.assertEqual(response.overview.score, 72)
        self.assertEqual(response.overview.top_strengths, ["S1", "S2", "S3", "S4"])
        self.assertEqual(response.overview.priority_actions, ["I1", "I2", "I3"])
        self.assertEqual(response.overview.action_items_count, 3)

        self.assertEqual(response.skills.score, 55)
        self.assertEqual(response.skills.matched_skills[0].job_skill, "React")
        self.assertEqual(response.skills.missing_skills[0].skill, "GraphQL")
        self.assertEqual(response.skills.action_items_count, 0)

        self.assertEqual(response.experience.score, 70)
        self.assertEqual(response.experience.experience_gaps, ["G1", "G2"])
        self.assertEqual(response.experience.action_items_count, 2)
        self.assertIn("4.0", response.experience.duration_analysis)

        self.assertEqual(response.education.score, 85)
        self.assertEqual(response.impact.score, 40)

        self.assertEqual(response.ats.score, 80)
        self.assertEqual(response.ats.ats_issues, ["T1", "T2", "T3", "T4", "T5"])
        self.assertEqual(response.ats.missing_keywords, ["GraphQL"])
        self.assertEqual(response.ats.action_items_count, 6)

        self.assertEqual(response.quality.score, 86)

    def test_structured_sub_objects_take_precedence(self):
        feedback = _legacy_feedback(
            match_overview={
                "top_strengths": ["A", "B", "C"],
                "top_improvements": ["D", "E", "F"],
                "priority_actions": ["P1", "P2", "P3"],
                "action_items": [
                    {"id": "o1", "category": "matchOverview", "title": "Add metrics", "priority": "high"},
                    {"id": "o2", "category": "overview", "title": "Add AWS"},
                ],
            },
            required_skills={"skill_gaps": ["Missing: GraphQL"], "missing_critical_skills": ["GraphQL", "gRPC"]},
            ats_compatibility={"ats_issues": ["Tables"], "missing_keywords": [], "formatting_problems": []},
        )
        response = transform_to_category_analysis(feedback, _analysis())

        self.assertEqual(response.overview.top_strengths, ["A", "B", "C"])
        self.assertEqual(response.overview.action_items_count, 2)
        self.assertTrue(all(item.category == "overview" for item in response.overview.action_items))
        self.assertEqual(response.skills.action_items_count, 3)
        self.assertEqual(response.ats.ats_issues, ["Tables"])
        self.assertEqual(response.ats.action_items_count, 1)


class CategoryUtilityTests(unittest.TestCase):
    def setUp(self):
        self.response = transform_to_category_analysis(_legacy_feedback(), _analysis())

    def test_summaries_follow_fixed_order_with_display_names(self):
        summaries = summarize_categories(self.response)
        self.assertEqual(
            [summary.id for summary in summaries],
            ["overview", "skills", "experience", "education", "impact", "ats", "quality"],
        )
        self.assertEqual(summaries[3].name, "Education & Credentials")

    def test_total_action_items(self):
        # overview 3 + skills 0 + experience 2 + education 0 + impact 0 + ats 6 + quality 0
        self.assertEqual(total_action_items_count(self.response), 11)

    def test_sorted_lowest_first(self):
        ordered = categories_sorted_by_score(self.response)
        self.assertEqual(ordered[0].id, "impact")
        scores = [summary.score for summary in ordered]
        self.assertEqual(scores, sorted(scores))

    def test_low_score_categories(self):
        self.assertEqual([summary.id for summary in low_score_categories(self.response)], ["skills", "impact"])
        self.assertEqual(low_score_categories(self.response, threshold=40), [])

    def test_get_category_data(self):
        self.assertEqual(get_category_data(self.response, "ats").score, 80)
        self.assertIsNone(get_category_data(self.response, "unknown"))


if __name__ == "__main__":
    unittest.main()
