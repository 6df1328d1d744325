from __future__ import annotations

import math
from typing import Sequence

from rapidfuzz.distance import Levenshtein

from resume_match.errors import DimensionMismatch


def edit_distance_similarity(left: str, right: str) -> float:
    """Levenshtein distance normalized to [0, 1]; callers lowercase first."""
    max_len = max(len(left), len(right))
    if max_len == 0:
        return 1.0
    distance = Levenshtein.distance(left, right)
    return 1.0 - distance / max_len


def cosine_similarity(left: Sequence[float], right: Sequence[float]) -> float:
    if len(left) != len(right):
        raise DimensionMismatch(f"vector lengths differ: {len(left)} != {len(right)}")
    dot = sum(a * b for a, b in zip(left, right))
    left_norm = math.sqrt(sum(a * a for a in left))
    right_norm = math.sqrt(sum(b * b for b in right))
    if left_norm <= 0 or right_norm <= 0:
        return 0.0
    return dot / (left_norm * right_norm)
