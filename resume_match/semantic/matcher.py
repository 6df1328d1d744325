from __future__ import annotations

import logging
from dataclasses import dataclass, field

from resume_match.ai.gateway import embed_texts
from resume_match.core.scoring import get_scoring_value
from resume_match.errors import ExternalCapabilityError
from resume_match.schemas.analysis import MatchTier, Relevance, SkillMatch
from resume_match.taxonomy import TaxonomyProvider, get_default_taxonomy_provider, normalize_skill_text

from .embeddings import EmbeddingProvider
from .similarity import cosine_similarity, edit_distance_similarity

logger = logging.getLogger(__name__)


def _fuzzy_thresholds() -> tuple[float, float]:
    accept = float(get_scoring_value("matching.fuzzy.accept_threshold", 0.8))
    high = float(get_scoring_value("matching.fuzzy.high_threshold", 0.9))
    return accept, high


def _semantic_thresholds() -> tuple[float, float, float]:
    accept = float(get_scoring_value("matching.semantic.accept_threshold", 0.3))
    high = float(get_scoring_value("matching.semantic.high_threshold", 0.8))
    medium = float(get_scoring_value("matching.semantic.medium_threshold", 0.6))
    return accept, high, medium


def relevance_for_similarity(similarity: float, tier: MatchTier) -> Relevance:
    if tier in ("exact", "simple"):
        return "high"
    if tier == "fuzzy":
        _, high = _fuzzy_thresholds()
        return "high" if similarity >= high else "medium"
    _, high, medium = _semantic_thresholds()
    if similarity >= high:
        return "high"
    if similarity >= medium:
        return "medium"
    return "low"


@dataclass(slots=True)
class _MatchState:
    resume_skills: list[str]
    job_skills: list[str]
    used_resume: set[int] = field(default_factory=set)
    used_job: set[int] = field(default_factory=set)
    matches: list[SkillMatch] = field(default_factory=list)

    def __post_init__(self) -> None:
        # Blank entries can never match anything.
        self.used_resume |= {i for i, s in enumerate(self.resume_skills) if not normalize_skill_text(s)}
        self.used_job |= {i for i, s in enumerate(self.job_skills) if not normalize_skill_text(s)}

    def open_resume(self) -> list[int]:
        return [i for i in range(len(self.resume_skills)) if i not in self.used_resume]

    def open_jobs(self) -> list[int]:
        return [j for j in range(len(self.job_skills)) if j not in self.used_job]

    def accept(self, resume_idx: int, job_idx: int, similarity: float, tier: MatchTier) -> None:
        similarity = min(1.0, max(0.0, similarity))
        self.used_resume.add(resume_idx)
        self.used_job.add(job_idx)
        self.matches.append(
            SkillMatch(
                resume_skill=self.resume_skills[resume_idx],
                job_skill=self.job_skills[job_idx],
                similarity=similarity,
                relevance=relevance_for_similarity(similarity, tier),
                tier=tier,
            )
        )


def _exact_tier(state: _MatchState, taxonomy: TaxonomyProvider) -> None:
    def key(raw: str) -> str:
        normalized, canonical_id = taxonomy.normalize_skill(raw)
        return canonical_id or normalized

    resume_keys = {idx: key(state.resume_skills[idx]) for idx in state.open_resume()}
    for job_idx in state.open_jobs():
        job_key = key(state.job_skills[job_idx])
        for resume_idx in state.open_resume():
            if resume_keys[resume_idx] == job_key:
                state.accept(resume_idx, job_idx, 1.0, "exact")
                break


def _fuzzy_tier(state: _MatchState) -> None:
    accept_threshold, _ = _fuzzy_thresholds()
    for job_idx in state.open_jobs():
        job_text = normalize_skill_text(state.job_skills[job_idx])
        for resume_idx in state.open_resume():
            resume_text = normalize_skill_text(state.resume_skills[resume_idx])
            similarity = edit_distance_similarity(resume_text, job_text)
            if similarity >= accept_threshold:
                state.accept(resume_idx, job_idx, similarity, "fuzzy")
                break


async def _semantic_tier(state: _MatchState, embedder: EmbeddingProvider, timeout_s: float) -> None:
    resume_open = state.open_resume()
    job_open = state.open_jobs()
    if not resume_open or not job_open:
        return

    texts = [state.resume_skills[i] for i in resume_open] + [state.job_skills[j] for j in job_open]
    try:
        vectors = await embed_texts(embedder, texts, timeout_s=timeout_s)
    except ExternalCapabilityError as exc:
        logger.warning("semantic_tier_skipped code=%s: %s", exc.code, exc)
        return

    resume_vectors = dict(zip(resume_open, vectors[: len(resume_open)]))
    job_vectors = dict(zip(job_open, vectors[len(resume_open) :]))
    accept_threshold, _, _ = _semantic_thresholds()

    for job_idx in job_open:
        best_idx: int | None = None
        best_similarity = 0.0
        for resume_idx in state.open_resume():
            similarity = cosine_similarity(resume_vectors[resume_idx], job_vectors[job_idx])
            if similarity > best_similarity and similarity >= accept_threshold:
                best_similarity = similarity
                best_idx = resume_idx
        if best_idx is not None:
            state.accept(best_idx, job_idx, best_similarity, "semantic")


def _sorted(matches: list[SkillMatch]) -> list[SkillMatch]:
    return sorted(matches, key=lambda item: item.similarity, reverse=True)


def match_skills_lexical(
    resume_skills: list[str],
    job_skills: list[str],
    *,
    taxonomy_provider: TaxonomyProvider | None = None,
) -> list[SkillMatch]:
    """Exact and fuzzy tiers only; no external calls."""
    state = _MatchState(list(resume_skills), list(job_skills))
    _exact_tier(state, taxonomy_provider or get_default_taxonomy_provider())
    _fuzzy_tier(state)
    return _sorted(state.matches)


async def match_skills(
    resume_skills: list[str],
    job_skills: list[str],
    *,
    embedder: EmbeddingProvider | None = None,
    taxonomy_provider: TaxonomyProvider | None = None,
    timeout_s: float = 10.0,
) -> list[SkillMatch]:
    """Match job skills to resume skills with the exact, fuzzy and semantic tiers.

    Each tier only sees skills left unmatched by the tiers before it. The
    semantic tier is skipped when ``embedder`` is None or the embedding call
    fails. Matches are greedy (first acceptable candidate wins), so results
    depend on input order but are deterministic for a given order.
    """
    state = _MatchState(list(resume_skills), list(job_skills))
    if not state.open_resume() or not state.open_jobs():
        return []

    _exact_tier(state, taxonomy_provider or get_default_taxonomy_provider())
    _fuzzy_tier(state)
    if embedder is not None:
        await _semantic_tier(state, embedder, timeout_s)
    return _sorted(state.matches)


def match_skills_simple(resume_skills: list[str], job_skills: list[str]) -> list[SkillMatch]:
    """Substring-containment matching used when semantic matching is switched off."""
    state = _MatchState(list(resume_skills), list(job_skills))
    lowered_resume = [normalize_skill_text(s) for s in state.resume_skills]
    for job_idx in state.open_jobs():
        job_text = normalize_skill_text(state.job_skills[job_idx])
        for resume_idx in state.open_resume():
            resume_text = lowered_resume[resume_idx]
            if resume_text == job_text or job_text in resume_text or resume_text in job_text:
                state.accept(resume_idx, job_idx, 1.0, "simple")
                break
    return state.matches
