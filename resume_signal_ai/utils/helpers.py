"""Helper utilities for skill strings and downstream job matching."""

from typing import Iterable, List

from resume_signal_ai.config import TOP_SKILLS_FOR_SEARCH
from resume_signal_ai.schemas.resume_data import StructuredResumeData


def title_case_words(term: str) -> str:
    """Upper-case the first character of each space-separated word; keep the rest as is."""
    return " ".join(word[:1].upper() + word[1:] for word in term.split(" "))


def clean_string_list(values: object) -> List[str]:
    """Keep only non-blank strings (trimmed) from a list-like value; anything else yields []."""
    if not isinstance(values, list):
        return []
    return [v.strip() for v in values if isinstance(v, str) and v.strip()]


def top_skill_keywords(data: StructuredResumeData, limit: int = TOP_SKILLS_FOR_SEARCH) -> str:
    """Job-search keywords: the first `limit` technical skills joined by spaces."""
    return " ".join(data.technical_skills[:limit])


def matching_skills(skills: Iterable[str], description: str) -> List[str]:
    """Skills that occur (case-insensitive) in a job description, in input order."""
    if not description:
        return []
    lower_desc = description.lower()
    return list(dict.fromkeys(s for s in skills if s and s.lower() in lower_desc))
