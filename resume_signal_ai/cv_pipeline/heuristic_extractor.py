"""
Heuristic (keyword and regex) extraction of skills and experience from resume text.

Pure and deterministic: no network, no randomness, no clock. Used by the
heuristic-only processing path and as a local pass that needs no API key.
"""

from typing import Iterable, List, Optional, Sequence

from resume_signal_ai.cv_pipeline.skill_vocabulary import (
    DEFAULT_PATTERNS,
    SOFT_SKILLS,
    TECHNICAL_SKILLS,
    ExtractionPatterns,
)
from resume_signal_ai.schemas.resume_data import ExperienceEntry, StructuredResumeData
from resume_signal_ai.utils.helpers import title_case_words

PLACEHOLDER_TITLE = "Position"
PLACEHOLDER_COMPANY = "Company"
PLACEHOLDER_DURATION = "Duration"


def detect_skills(text: str, vocabulary: Iterable[str]) -> List[str]:
    """Vocabulary terms found (case-insensitive substring) in text, title-cased, in vocabulary order."""
    lower_text = (text or "").lower()
    found = [title_case_words(term) for term in vocabulary if term.lower() in lower_text]
    return list(dict.fromkeys(found))


def find_experience_section(text: str, patterns: ExtractionPatterns = DEFAULT_PATTERNS) -> str:
    """
    Slice of text between the first experience heading and the next education heading.
    Starts right after the heading (and a trailing colon). Without an experience heading
    the whole text is used.
    """
    heading = patterns.experience_heading.search(text)
    if not heading:
        return text
    start = heading.end()
    if text.startswith(":", start):
        start += 1
    education = patterns.education_heading.search(text, start)
    end = education.start() if education else len(text)
    return text[start:end]


def _collect(pattern, section: str) -> List[str]:
    return [m.group(m.lastindex or 0).strip() for m in pattern.finditer(section)]


def _titles(section: str, patterns: ExtractionPatterns) -> List[str]:
    """Title-like lines, minus lines that are only an experience heading."""
    titles = _collect(patterns.job_title, section)
    return [t for t in titles if not patterns.experience_heading.fullmatch(t)]


def _zip_entries(titles: Sequence[str], companies: Sequence[str], dates: Sequence[str]) -> List[ExperienceEntry]:
    entries = []
    for i in range(max(len(titles), len(companies), len(dates))):
        if i < len(companies):
            company = companies[i]
        else:
            company = PLACEHOLDER_COMPANY if i < len(titles) else ""
        entries.append(
            ExperienceEntry(
                title=titles[i] if i < len(titles) else PLACEHOLDER_TITLE,
                company=company,
                duration=dates[i] if i < len(dates) else PLACEHOLDER_DURATION,
            )
        )
    return entries


def _looks_purely_educational(paragraphs: Sequence[str], patterns: ExtractionPatterns) -> bool:
    """True when every paragraph mentioning work also mentions school."""
    work = [p for p in paragraphs if patterns.paragraph_experience.search(p)]
    return all(patterns.education_hint.search(p) for p in work)


def _entry_from_paragraph(paragraph: str, patterns: ExtractionPatterns) -> Optional[ExperienceEntry]:
    titles = _titles(paragraph, patterns)
    company = patterns.company.search(paragraph)
    duration = patterns.date_range.search(paragraph)
    if not (titles or company or duration):
        return None
    return ExperienceEntry(
        title=titles[0] if titles else PLACEHOLDER_TITLE,
        company=company.group(1).strip() if company else PLACEHOLDER_COMPANY,
        duration=duration.group(0).strip() if duration else PLACEHOLDER_DURATION,
    )


def _scan_paragraphs(text: str, patterns: ExtractionPatterns) -> List[ExperienceEntry]:
    paragraphs = patterns.paragraph_break.split(text)
    if _looks_purely_educational(paragraphs, patterns):
        return []
    entries = []
    for paragraph in paragraphs:
        if not patterns.paragraph_experience.search(paragraph):
            continue
        if patterns.education_hint.search(paragraph):
            continue
        entry = _entry_from_paragraph(paragraph, patterns)
        if entry:
            entries.append(entry)
    return entries


def extract_experience(text: str, patterns: ExtractionPatterns = DEFAULT_PATTERNS) -> List[ExperienceEntry]:
    """Experience entries from the experience section, with a paragraph-level fallback."""
    section = find_experience_section(text, patterns)
    entries = _zip_entries(
        _titles(section, patterns),
        _collect(patterns.company, section),
        _collect(patterns.date_range, section),
    )
    if not entries and patterns.experience_hint.search(text):
        entries = _scan_paragraphs(text, patterns)
    return entries


def extract_heuristic(
    text: Optional[str],
    technical_vocabulary: Iterable[str] = TECHNICAL_SKILLS,
    soft_vocabulary: Iterable[str] = SOFT_SKILLS,
    patterns: ExtractionPatterns = DEFAULT_PATTERNS,
) -> StructuredResumeData:
    """
    Build StructuredResumeData from raw resume text without any external call.
    Never raises; text without recognizable content yields empty lists.
    """
    text = text or ""
    return StructuredResumeData(
        technical_skills=detect_skills(text, technical_vocabulary),
        soft_skills=detect_skills(text, soft_vocabulary),
        experience=extract_experience(text, patterns),
    )
