import asyncio
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_match.ai.config import AIConfig  # noqa: E402
from resume_match.feedback.generator import generate_comprehensive_feedback  # noqa: E402
from resume_match.feedback.mock_feedback import mock_comprehensive_feedback  # noqa: E402
from resume_match.schemas.analysis import JobRequirements  # noqa: E402
from resume_match.schemas.feedback import ActionItem, ComprehensiveFeedback  # noqa: E402


def _valid_payload() -> dict:
    return {
        "strength_areas": ["Python depth", "API design", "Mentoring"],
        "improvement_areas": ["Add metrics", "Mention AWS", "Tighten summary"],
        "experience_gaps": ["No Kubernetes"],
        "relevant_experiences": ["Built FastAPI services"],
        "ats_tips": ["Tip 1", "Tip 2", "Tip 3", "Tip 4", "Tip 5"],
        "suggested_bullets": ["B1", "B2", "B3", "B4", "B5"],
        "professional_quality": {
            "writing_issues": ["Passive voice"],
            "consistency_problems": [],
            "formatting_concerns": [],
            "action_items": [
                {"id": "q1", "category": "professionalQuality", "title": "Use active voice", "priority": "low"}
            ],
        },
    }


class FakeFeedbackClient:
    def __init__(self, payload=None, delay: float = 0.0):
        self.payload = payload
        self.delay = delay
        self.calls = 0

    async def complete_json(self, messages):
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.payload

    async def complete_text(self, messages):
        return ""


class MockFeedbackTests(unittest.TestCase):
    def test_domain_tables_validate(self):
        for domain in ("Human Resources", "Software Engineering", "General", None):
            feedback = mock_comprehensive_feedback(domain)
            self.assertIsInstance(feedback, ComprehensiveFeedback)
            self.assertGreaterEqual(len(feedback.ats_tips), 5)
            self.assertIsNotNone(feedback.match_overview)

    def test_unknown_domain_uses_generic_table(self):
        generic = mock_comprehensive_feedback("Astrophysics")
        self.assertEqual(generic, mock_comprehensive_feedback(None))
        self.assertNotEqual(generic, mock_comprehensive_feedback("Software Engineering"))


class ActionItemTests(unittest.TestCase):
    def test_category_names_are_normalized(self):
        self.assertEqual(ActionItem(id="a", category="requiredSkills", title="t").category, "skills")
        self.assertEqual(ActionItem(id="b", category="impact_achievements", title="t").category, "impact")
        self.assertEqual(ActionItem(id="c", category="ATS", title="t").category, "ats")


class GenerateFeedbackTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.config = AIConfig(mode="live", timeout_s=0.5)
        self.requirements = JobRequirements(
            required_skills=["Python"], preferred_skills=["AWS"], experience_requirements=["3+ years"]
        )

    async def _generate(self, client, config=None, domain="Software Engineering"):
        return await generate_comprehensive_feedback(
            "resume text",
            "job text",
            domain,
            [],
            self.requirements,
            config=config or self.config,
            client=client,
        )

    async def test_valid_payload_is_returned(self):
        feedback = await self._generate(FakeFeedbackClient(payload=_valid_payload()))
        self.assertEqual(feedback.strength_areas[0], "Python depth")
        self.assertEqual(feedback.professional_quality.action_items[0].category, "quality")

    async def test_schema_violation_falls_back_to_mock(self):
        payload = _valid_payload()
        payload["ats_tips"] = ["only one"]
        feedback = await self._generate(FakeFeedbackClient(payload=payload))
        self.assertEqual(feedback, mock_comprehensive_feedback("Software Engineering"))

    async def test_timeout_falls_back_to_mock(self):
        config = AIConfig(mode="live", timeout_s=0.01)
        feedback = await self._generate(FakeFeedbackClient(payload=_valid_payload(), delay=0.5), config=config)
        self.assertEqual(feedback, mock_comprehensive_feedback("Software Engineering"))

    async def test_no_client_uses_domain_table(self):
        feedback = await self._generate(None, config=AIConfig(mode="disabled"), domain="Human Resources")
        self.assertEqual(feedback, mock_comprehensive_feedback("Human Resources"))


if __name__ == "__main__":
    unittest.main()
