from __future__ import annotations

import re

EXPERIENCE_HEADINGS = ("experience", "work history", "employment", "professional experience")
EDUCATION_HEADINGS = ("education", "academic background", "qualifications")
ACHIEVEMENT_HEADINGS = ("achievements", "accomplishments", "awards", "honors")

_MAX_HEADING_WORDS = 4
_MAX_TERMINATOR_LENGTH = 50

# Loose presence checks used by the ATS heuristic.
_SECTION_PRESENCE = {
    "experience": re.compile(r"experience|work history|employment", re.IGNORECASE),
    "education": re.compile(r"education|academic|degree", re.IGNORECASE),
    "skills": re.compile(r"skills|technical skills|competencies", re.IGNORECASE),
}


def _heading_text(line: str) -> str:
    return line.strip().rstrip(":").strip().lower()


def _is_exact_heading(line: str, aliases: tuple[str, ...]) -> bool:
    return _heading_text(line) in aliases


def _is_heading(line: str, aliases: tuple[str, ...]) -> bool:
    lowered = _heading_text(line)
    if not lowered or len(lowered.split()) > _MAX_HEADING_WORDS:
        return False
    return any(alias in lowered for alias in aliases)


def _is_terminator(line: str, aliases: tuple[str, ...]) -> bool:
    stripped = line.strip()
    if not stripped or len(stripped) >= _MAX_TERMINATOR_LENGTH:
        return False
    if " " in stripped or stripped != stripped.upper() or not any(ch.isalpha() for ch in stripped):
        return False
    return not _is_heading(stripped, aliases)


def extract_section(text: str, aliases: tuple[str, ...]) -> str | None:
    """Return the body of the first section whose heading matches one of ``aliases``.

    A line equal to an alias (ignoring case and a trailing colon) takes
    precedence; otherwise the first short line (at most four words) containing
    an alias is the heading. The section runs until the next short all-caps line
    without spaces that is not itself one of the aliases (e.g. ``EDUCATION``),
    or to the end of the document. Returns None when no heading is found.
    """
    lines = (text or "").splitlines()
    start = next((i for i, line in enumerate(lines) if _is_exact_heading(line, aliases)), None)
    if start is None:
        start = next((i for i, line in enumerate(lines) if _is_heading(line, aliases)), None)
    if start is None:
        return None

    body: list[str] = []
    for candidate in lines[start + 1 :]:
        if _is_terminator(candidate, aliases):
            break
        body.append(candidate)
    return "\n".join(body)


def extract_experience_section(text: str) -> str | None:
    return extract_section(text, EXPERIENCE_HEADINGS)


def extract_education_section(text: str) -> str | None:
    return extract_section(text, EDUCATION_HEADINGS)


def extract_achievements_section(text: str) -> str | None:
    return extract_section(text, ACHIEVEMENT_HEADINGS)


def has_section(text: str, kind: str) -> bool:
    pattern = _SECTION_PRESENCE.get(kind)
    if pattern is None:
        raise ValueError(f"unknown section kind '{kind}'")
    return bool(pattern.search(text or ""))
