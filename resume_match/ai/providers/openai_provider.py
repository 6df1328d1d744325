from __future__ import annotations

import json
import os
from typing import Any, Optional, Sequence

from openai import AsyncOpenAI

from resume_match.ai.types import ChatMessage
from resume_match.errors import ExternalCapabilityError


class OpenAIProvider:
    def __init__(
        self,
        model: str,
        embedding_model: str = "text-embedding-3-small",
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: float = 30.0,
        max_retries: int = 0,
        temperature: float = 0.2,
        max_output_tokens: int = 1500,
    ):
        self._model = model
        self._embedding_model = embedding_model
        self._temperature = temperature
        self._max_output_tokens = max_output_tokens
        key = (api_key or os.getenv("OPENAI_API_KEY") or "").strip()
        if not key:
            raise RuntimeError("OPENAI_API_KEY is missing")

        # Failures fall back to mock data, so the SDK does not retry.
        self._client = AsyncOpenAI(
            api_key=key,
            base_url=(base_url or os.getenv("OPENAI_BASE_URL") or None),
            timeout=timeout_s,
            max_retries=max_retries,
        )

    @staticmethod
    def _payload(messages: Sequence[ChatMessage]) -> list[dict[str, str]]:
        return [{"role": m.role, "content": m.content} for m in messages]

    async def complete_json(self, messages: Sequence[ChatMessage]) -> dict[str, Any]:
        response = await self._client.chat.completions.create(
            model=self._model,
            messages=self._payload(messages),
            temperature=self._temperature,
            max_tokens=self._max_output_tokens,
            response_format={"type": "json_object"},
        )
        content = response.choices[0].message.content if response.choices else ""
        if not content:
            raise ExternalCapabilityError("Model returned an empty response.", code="empty_response")
        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as exc:
            raise ExternalCapabilityError(f"Model returned invalid JSON: {exc}", code="invalid_json") from exc
        if not isinstance(parsed, dict):
            raise ExternalCapabilityError("Model returned JSON that is not an object.", code="invalid_json")
        return parsed

    async def complete_text(self, messages: Sequence[ChatMessage]) -> str:
        response = await self._client.chat.completions.create(
            model=self._model,
            messages=self._payload(messages),
            temperature=0.1,
            max_tokens=20,
        )
        content = response.choices[0].message.content if response.choices else ""
        return (content or "").strip()

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []
        response = await self._client.embeddings.create(model=self._embedding_model, input=texts)
        return [list(item.embedding) for item in response.data]
