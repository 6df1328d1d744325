from functools import lru_cache

from .local_taxonomy import LocalTaxonomy, TaxonomyProvider, normalize_skill_text


@lru_cache(maxsize=1)
def get_default_taxonomy_provider() -> TaxonomyProvider:
    return LocalTaxonomy()


def skill_key(raw: str, taxonomy_provider: TaxonomyProvider | None = None) -> str:
    """Comparison key for a skill name: canonical ID when known, else folded text."""
    provider = taxonomy_provider or get_default_taxonomy_provider()
    normalized, canonical_id = provider.normalize_skill(raw)
    return canonical_id or normalized


__all__ = [
    "TaxonomyProvider",
    "LocalTaxonomy",
    "get_default_taxonomy_provider",
    "normalize_skill_text",
    "skill_key",
]
