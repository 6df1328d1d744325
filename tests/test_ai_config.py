import asyncio
import os
import sys
import unittest
from pathlib import Path
from unittest.mock import patch

from pydantic import BaseModel

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_match.ai.config import AIConfig, load_ai_config  # noqa: E402
from resume_match.ai.factory import get_ai_client  # noqa: E402
from resume_match.ai.gateway import embed_texts, structured_completion, text_completion  # noqa: E402
from resume_match.ai.types import ChatMessage  # noqa: E402
from resume_match.errors import ExternalCapabilityError, ResponseValidationError  # noqa: E402

_AI_ENV_KEYS = ("AI_MODE", "ENABLE_AI_SUGGESTIONS", "MOCK_AI_SUGGESTIONS", "AI_TIMEOUT_S", "ENABLE_SEMANTIC_MATCHING")
_MESSAGES = [ChatMessage(role="user", content="hi")]


def _clean_env(**values):
    env = {key: value for key, value in os.environ.items() if key not in _AI_ENV_KEYS}
    env.update(values)
    return patch.dict(os.environ, env, clear=True)


class _Answer(BaseModel):
    answer: str


class FakeClient:
    def __init__(self, payload=None, text="", vectors=None, delay: float = 0.0):
        self.payload = payload
        self.text = text
        self.vectors = vectors or []
        self.delay = delay

    async def complete_json(self, messages):
        await asyncio.sleep(self.delay)
        return self.payload

    async def complete_text(self, messages):
        return self.text

    async def embed_batch(self, texts):
        return self.vectors


class LoadAIConfigTests(unittest.TestCase):
    def test_defaults_to_live(self):
        with _clean_env():
            config = load_ai_config()
        self.assertEqual(config.mode, "live")
        self.assertTrue(config.semantic_matching)
        self.assertEqual(config.timeout_s, 10.0)

    def test_explicit_mode(self):
        with _clean_env(AI_MODE=" Mock "):
            self.assertEqual(load_ai_config().mode, "mock")

    def test_invalid_mode_raises(self):
        with _clean_env(AI_MODE="sometimes"):
            with self.assertRaises(ValueError):
                load_ai_config()

    def test_legacy_switches(self):
        with _clean_env(ENABLE_AI_SUGGESTIONS="false"):
            self.assertEqual(load_ai_config().mode, "disabled")
        with _clean_env(MOCK_AI_SUGGESTIONS="true"):
            self.assertEqual(load_ai_config().mode, "mock")

    def test_bad_timeout_uses_default(self):
        with _clean_env(AI_TIMEOUT_S="soon", ENABLE_SEMANTIC_MATCHING="0"):
            config = load_ai_config()
        self.assertEqual(config.timeout_s, 10.0)
        self.assertFalse(config.semantic_matching)


class FactoryTests(unittest.TestCase):
    def test_mock_mode_has_no_client(self):
        self.assertIsNone(get_ai_client(AIConfig(mode="mock")))

    def test_live_without_key_has_no_client(self):
        env = {key: value for key, value in os.environ.items() if key != "OPENAI_API_KEY"}
        with patch.dict(os.environ, env, clear=True):
            self.assertIsNone(get_ai_client(AIConfig(mode="live")))

    def test_unknown_provider_raises(self):
        with patch.dict(os.environ, {"OPENAI_API_KEY": "sk-test"}):
            with self.assertRaises(ValueError):
                get_ai_client(AIConfig(mode="live", provider="acme"))


class GatewayTests(unittest.IsolatedAsyncioTestCase):
    async def test_structured_completion_validates(self):
        result = await structured_completion(
            FakeClient(payload={"answer": "yes"}), _MESSAGES, _Answer, purpose="test", timeout_s=1.0
        )
        self.assertEqual(result.answer, "yes")

    async def test_schema_violation(self):
        with self.assertRaises(ResponseValidationError) as ctx:
            await structured_completion(
                FakeClient(payload={"wrong": 1}), _MESSAGES, _Answer, purpose="test", timeout_s=1.0
            )
        self.assertEqual(ctx.exception.code, "invalid_schema")

    async def test_timeout(self):
        with self.assertRaises(ExternalCapabilityError) as ctx:
            await structured_completion(
                FakeClient(payload={"answer": "late"}, delay=0.5), _MESSAGES, _Answer, purpose="test", timeout_s=0.01
            )
        self.assertEqual(ctx.exception.code, "timeout")

    async def test_empty_text_response(self):
        with self.assertRaises(ExternalCapabilityError) as ctx:
            await text_completion(FakeClient(text="   "), _MESSAGES, purpose="test", timeout_s=1.0)
        self.assertEqual(ctx.exception.code, "empty_response")

    async def test_embedding_count_mismatch(self):
        with self.assertRaises(ResponseValidationError):
            await embed_texts(FakeClient(vectors=[[1.0, 0.0]]), ["a", "b"], timeout_s=1.0)


if __name__ == "__main__":
    unittest.main()
