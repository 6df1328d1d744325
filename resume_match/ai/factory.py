import logging

from resume_match.ai.config import AIConfig
from resume_match.ai.providers.openai_provider import OpenAIProvider

logger = logging.getLogger(__name__)


def get_ai_client(cfg: AIConfig) -> OpenAIProvider | None:
    """Build the live provider, or None when the pipeline should use mock paths."""
    if not cfg.is_live:
        return None

    if cfg.provider == "openai":
        try:
            return OpenAIProvider(
                model=cfg.model,
                embedding_model=cfg.embedding_model,
                timeout_s=cfg.timeout_s,
            )
        except RuntimeError as exc:
            logger.warning("ai_client_unavailable provider=%s: %s", cfg.provider, exc)
            return None

    raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")
