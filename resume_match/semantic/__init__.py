from .embeddings import EmbeddingProvider, SimpleEmbeddingProvider
from .matcher import match_skills, match_skills_lexical, match_skills_simple, relevance_for_similarity
from .similarity import cosine_similarity, edit_distance_similarity

__all__ = [
    "EmbeddingProvider",
    "SimpleEmbeddingProvider",
    "cosine_similarity",
    "edit_distance_similarity",
    "match_skills",
    "match_skills_lexical",
    "match_skills_simple",
    "relevance_for_similarity",
]
