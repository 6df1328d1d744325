from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Protocol

_SPACE_RE = re.compile(r"\s+")
_SEPARATOR_RE = re.compile(r"[\s./_-]+")


def normalize_skill_text(raw: str) -> str:
    return _SPACE_RE.sub(" ", (raw or "").strip().lower())


def _compact(normalized: str) -> str:
    # "Node JS", "node-js" and "NodeJS" all compact to "nodejs".
    return _SEPARATOR_RE.sub("", normalized)


class TaxonomyProvider(Protocol):
    def normalize_skill(self, raw: str) -> tuple[str, str | None]:
        """Return folded skill text and the canonical skill id, if the skill is known."""


class LocalTaxonomy:
    """Skill synonyms read from a JSON file mapping alias -> canonical id."""

    def __init__(self, synonyms_path: str | Path | None = None) -> None:
        path = Path(synonyms_path) if synonyms_path else Path(__file__).with_name("synonyms.json")
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)

        self._by_alias: dict[str, str] = {}
        self._by_compact: dict[str, str] = {}
        for alias, canonical_id in raw.items():
            normalized = normalize_skill_text(str(alias))
            self._by_alias[normalized] = str(canonical_id)
            self._by_compact.setdefault(_compact(normalized), str(canonical_id))

    def normalize_skill(self, raw: str) -> tuple[str, str | None]:
        normalized = normalize_skill_text(raw)
        canonical_id = self._by_alias.get(normalized)
        if canonical_id is None and normalized:
            canonical_id = self._by_compact.get(_compact(normalized))
        return normalized, canonical_id
