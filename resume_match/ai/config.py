from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

AIMode = Literal["live", "mock", "disabled"]

_MODES = ("live", "mock", "disabled")


@dataclass(frozen=True)
class AIConfig:
    mode: AIMode = "live"
    provider: str = "openai"
    model: str = "gpt-4o-mini"
    embedding_model: str = "text-embedding-3-small"
    timeout_s: float = 10.0
    semantic_matching: bool = True

    @property
    def is_live(self) -> bool:
        return self.mode == "live"

    @property
    def is_disabled(self) -> bool:
        return self.mode == "disabled"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _resolve_mode() -> AIMode:
    raw = (os.getenv("AI_MODE") or "").strip().lower()
    if raw in _MODES:
        return raw  # type: ignore[return-value]
    if raw:
        raise ValueError(f"Unsupported AI_MODE='{raw}'. Expected one of: {', '.join(_MODES)}")

    # Legacy switches kept for existing deployments.
    if not _env_bool("ENABLE_AI_SUGGESTIONS", True):
        return "disabled"
    if _env_bool("MOCK_AI_SUGGESTIONS", False):
        return "mock"
    return "live"


def load_ai_config() -> AIConfig:
    provider = os.getenv("AI_PROVIDER", "openai").strip().lower()
    model = (os.getenv("AI_MODEL") or os.getenv("OPENAI_MODEL") or "gpt-4o-mini").strip()
    embedding_model = os.getenv("OPENAI_EMBEDDING_MODEL", "text-embedding-3-small").strip()
    try:
        timeout_s = float(os.getenv("AI_TIMEOUT_S", "10"))
    except ValueError:
        timeout_s = 10.0
    return AIConfig(
        mode=_resolve_mode(),
        provider=provider,
        model=model,
        embedding_model=embedding_model,
        timeout_s=timeout_s,
        semantic_matching=_env_bool("ENABLE_SEMANTIC_MATCHING", True),
    )
