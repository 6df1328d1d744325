from __future__ import annotations

import asyncio
import logging
import time
from typing import Sequence, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from resume_match.ai.types import AIClient, ChatMessage, EmbeddingClient
from resume_match.errors import ExternalCapabilityError, ResponseValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


async def _call(awaitable, *, purpose: str, timeout_s: float):
    started = time.perf_counter()
    try:
        result = await asyncio.wait_for(awaitable, timeout=timeout_s)
    except asyncio.TimeoutError as exc:
        raise ExternalCapabilityError(
            f"{purpose} timed out after {timeout_s:.1f}s", code="timeout"
        ) from exc
    except ExternalCapabilityError:
        raise
    except Exception as exc:  # noqa: BLE001 - provider errors are expected-rate
        raise ExternalCapabilityError(f"{purpose} failed: {exc}", code="provider_error") from exc
    logger.debug(
        "ai_call_ok purpose=%s latency_ms=%s",
        purpose,
        int((time.perf_counter() - started) * 1000),
    )
    return result


async def structured_completion(
    client: AIClient,
    messages: Sequence[ChatMessage],
    schema: type[ModelT],
    *,
    purpose: str,
    timeout_s: float,
) -> ModelT:
    """Run a JSON completion and validate it against ``schema``.

    Raises ExternalCapabilityError on timeout or provider failure and
    ResponseValidationError when the payload does not fit the schema.
    """
    payload = await _call(client.complete_json(messages), purpose=purpose, timeout_s=timeout_s)
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as exc:
        raise ResponseValidationError(
            f"{purpose} returned a payload that failed {schema.__name__} validation: "
            f"{exc.error_count()} error(s)"
        ) from exc


async def text_completion(
    client: AIClient,
    messages: Sequence[ChatMessage],
    *,
    purpose: str,
    timeout_s: float,
) -> str:
    text = await _call(client.complete_text(messages), purpose=purpose, timeout_s=timeout_s)
    if not isinstance(text, str) or not text.strip():
        raise ExternalCapabilityError(f"{purpose} returned an empty response", code="empty_response")
    return text.strip()


async def embed_texts(
    client: EmbeddingClient,
    texts: list[str],
    *,
    timeout_s: float,
) -> list[list[float]]:
    vectors = await _call(client.embed_batch(texts), purpose="embed_batch", timeout_s=timeout_s)
    if len(vectors) != len(texts):
        raise ResponseValidationError(
            f"embed_batch returned {len(vectors)} vectors for {len(texts)} texts"
        )
    return vectors
