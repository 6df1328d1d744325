import asyncio
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_match.ai.config import AIConfig  # noqa: E402
from resume_match.schemas.analysis import ScoreBreakdown, SkillGap, SkillMatch  # noqa: E402
from resume_match.scoring.scorer import (  # noqa: E402
    calculate_ats_score,
    calculate_experience_match_score,
    calculate_overall_score,
    calculate_skills_score,
    count_keyword_hits,
    get_weights_for_experience_level,
    mock_section_score,
    score_education,
)

_FULL_RESUME = (
    "EXPERIENCE\nSenior Engineer at Acme, January 2019 - Present. Built Python services and React apps.\n"
    "EDUCATION\nBSc Computer Science\n"
    "SKILLS\nPython, React, SQL, Docker\n"
) + ("Delivered measurable improvements across teams. " * 12)


def _match(relevance: str) -> SkillMatch:
    return SkillMatch(resume_skill="x", job_skill="x", similarity=1.0, relevance=relevance, tier="exact")


def _gap(skill: str, priority: str = "critical") -> SkillGap:
    return SkillGap(skill=skill, priority=priority, category="technical")


class FakeSectionClient:
    def __init__(self, payload=None, error: Exception | None = None, delay: float = 0.0):
        self.payload = payload
        self.error = error
        self.delay = delay

    async def complete_json(self, messages):
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.payload

    async def complete_text(self, messages):
        return ""


class WeightTests(unittest.TestCase):
    def test_bands_sum_to_one(self):
        for years in (0, 1.9, 2, 5.9, 6, 15):
            weights = get_weights_for_experience_level(years)
            total = (
                weights.experience_match + weights.skills + weights.education + weights.achievements + weights.ats
            )
            self.assertAlmostEqual(total, 1.0, places=6, msg=str(years))

    def test_band_boundaries(self):
        self.assertEqual(get_weights_for_experience_level(1.9).education, 0.30)
        self.assertEqual(get_weights_for_experience_level(2).experience_match, 0.50)
        self.assertEqual(get_weights_for_experience_level(5.9).experience_match, 0.50)
        self.assertEqual(get_weights_for_experience_level(6).experience_match, 0.55)


class SkillsScoreTests(unittest.TestCase):
    def test_all_high_without_gaps(self):
        self.assertEqual(calculate_skills_score([_match("high")] * 3, []), 100)

    def test_critical_gaps_are_penalized(self):
        gaps = [_gap("node"), _gap("sql"), _gap("graphql", "nice-to-have")]
        self.assertEqual(calculate_skills_score([_match("high")], gaps), 80)

    def test_relevance_points(self):
        self.assertEqual(calculate_skills_score([_match("medium"), _match("low")], []), 55)

    def test_no_matches_scores_zero(self):
        self.assertEqual(calculate_skills_score([], [_gap("sql")]), 0)

    def test_floor_at_zero(self):
        gaps = [_gap(f"skill-{index}") for index in range(5)]
        self.assertEqual(calculate_skills_score([_match("low")], gaps), 0)


class AtsScoreTests(unittest.TestCase):
    def test_complete_resume_with_full_coverage(self):
        self.assertGreaterEqual(len(_FULL_RESUME), 500)
        self.assertEqual(calculate_ats_score(_FULL_RESUME, matched_required=2, total_required=2), 100)

    def test_partial_keyword_coverage(self):
        self.assertEqual(calculate_ats_score(_FULL_RESUME, matched_required=1, total_required=2), 80)

    def test_missing_sections_and_short_text(self):
        self.assertEqual(calculate_ats_score("hello", matched_required=0, total_required=3), 10)

    def test_no_required_keywords_counts_as_no_coverage(self):
        self.assertEqual(calculate_ats_score("hello", matched_required=0, total_required=0), 10)

    def test_long_text_penalty(self):
        long_resume = _FULL_RESUME + "x" * 5000
        self.assertEqual(calculate_ats_score(long_resume, matched_required=2, total_required=2), 95)

    def test_keyword_hits_are_case_insensitive_substrings(self):
        self.assertEqual(count_keyword_hits(_FULL_RESUME, ["python", "REACT", "Kubernetes", ""]), 2)


class CombinedScoreTests(unittest.TestCase):
    def test_experience_match_blend(self):
        self.assertEqual(calculate_experience_match_score(90, 80), 87)

    def test_overall_is_weighted_sum(self):
        senior = get_weights_for_experience_level(10)
        breakdown = ScoreBreakdown(experience_match=100, skills=40, education=0, achievements=0, ats=0)
        self.assertEqual(calculate_overall_score(breakdown, senior), 65)

        uniform = ScoreBreakdown(experience_match=80, skills=80, education=80, achievements=80, ats=80)
        self.assertEqual(calculate_overall_score(uniform, get_weights_for_experience_level(0)), 80)


class SectionScoreTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.config = AIConfig(mode="live", timeout_s=0.5)

    def test_mock_table_lookup_and_default(self):
        self.assertEqual(mock_section_score("education", "Healthcare").score, 90)
        self.assertEqual(mock_section_score("education", "Underwater Basket Weaving").score, 75)
        self.assertEqual(mock_section_score("achievements", "Software Engineering").score, 80)

    async def test_without_client_uses_mock_table(self):
        result = await score_education(_FULL_RESUME, "job", "Finance", config=self.config, client=None)
        self.assertEqual(result.score, 80)

    async def test_valid_provider_payload(self):
        client = FakeSectionClient(payload={"score": 88, "reasoning": "Relevant CS degree."})
        result = await score_education(_FULL_RESUME, "job", "Finance", config=self.config, client=client)
        self.assertEqual(result.score, 88)
        self.assertEqual(result.reasoning, "Relevant CS degree.")

    async def test_out_of_range_payload_falls_back(self):
        client = FakeSectionClient(payload={"score": 150, "reasoning": "?"})
        result = await score_education(_FULL_RESUME, "job", "Finance", config=self.config, client=client)
        self.assertEqual(result.score, 80)

    async def test_provider_error_falls_back(self):
        client = FakeSectionClient(error=RuntimeError("boom"))
        result = await score_education(_FULL_RESUME, "job", "Marketing", config=self.config, client=client)
        self.assertEqual(result.score, 75)

    async def test_timeout_falls_back(self):
        config = AIConfig(mode="live", timeout_s=0.01)
        client = FakeSectionClient(payload={"score": 10, "reasoning": "slow"}, delay=0.5)
        result = await score_education(_FULL_RESUME, "job", "Healthcare", config=config, client=client)
        self.assertEqual(result.score, 90)


if __name__ == "__main__":
    unittest.main()
