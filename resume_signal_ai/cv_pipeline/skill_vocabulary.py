"""Skill vocabularies and regex patterns used by the heuristic extractor."""

import re
from typing import NamedTuple

TECHNICAL_SKILLS: tuple = (
    "javascript", "react", "typescript", "node", "nodejs", "html", "css", "sass", "less",
    "python", "java", "c++", "c#", ".net", "sql", "mysql", "postgresql", "mongodb", "nosql",
    "aws", "azure", "gcp", "cloud", "git", "docker", "kubernetes", "ci/cd", "jenkins",
    "redux", "graphql", "rest", "api", "express", "vue", "angular", "svelte", "nextjs",
    "gatsby", "flutter", "swift", "kotlin", "php", "laravel", "spring", "django",
    "ruby", "rails", "golang", "rust", "scala", "terraform", "devops", "agile", "scrum",
    "jira", "figma", "sketch", "adobe", "photoshop", "illustrator", "ui/ux", "seo",
    "analytics", "marketing", "excel", "tableau", "power bi", "data analysis", "machine learning",
    "artificial intelligence", "ai", "nlp", "computer vision", "deep learning",
)

SOFT_SKILLS: tuple = (
    "communication", "teamwork", "leadership", "problem solving", "problem-solving",
    "time management", "adaptability", "creativity", "critical thinking",
    "conflict resolution", "negotiation", "presentation", "public speaking",
    "mentoring", "coaching", "collaboration", "decision making", "decision-making",
    "planning", "organization", "analytical", "research", "detail oriented", "detail-oriented",
    "innovative", "motivated", "proactive", "interpersonal", "multitasking",
    "customer service", "project management", "team player", "self-motivated",
    "flexible", "resourceful", "strategic thinking", "strategic-thinking",
)

_MONTH = r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\.?"
_RANGE_SEP = r"\s+(?:to|-|–)\s+"
_OPEN_END = r"(?:Present|Current|Now)"


class ExtractionPatterns(NamedTuple):
    """Compiled patterns driving section bounding and experience detection."""

    experience_heading: re.Pattern
    education_heading: re.Pattern
    job_title: re.Pattern
    company: re.Pattern
    date_range: re.Pattern
    experience_hint: re.Pattern
    paragraph_experience: re.Pattern
    education_hint: re.Pattern
    paragraph_break: re.Pattern


DEFAULT_PATTERNS = ExtractionPatterns(
    experience_heading=re.compile(
        r"PROFESSIONAL EXPERIENCE|WORK EXPERIENCE|WORK HISTORY|EMPLOYMENT|EXPERIENCE",
        re.IGNORECASE,
    ),
    education_heading=re.compile(r"EDUCATION|ACADEMIC|QUALIFICATION", re.IGNORECASE),
    # Capitalized phrase at line start ending at newline, comma, " at" or a hyphen
    job_title=re.compile(r"^([A-Z][A-Za-z \t]*?[A-Za-z])(?=[ \t]*(?:$|,|[ \t]+at\b|[ \t]*[-–]))", re.MULTILINE),
    # Capitalized phrase after "at"/"@" ending at newline, comma, "from" or "("
    company=re.compile(
        r"(?:\bat\b|@)[ \t]+([A-Z][A-Za-z0-9 \t&.]*?)(?=[ \t]*(?:$|,|\bfrom\b|\())",
        re.MULTILINE,
    ),
    date_range=re.compile(
        rf"\b(?:{_MONTH}\s+\d{{4}}{_RANGE_SEP}(?:{_MONTH}\s+\d{{4}}|{_OPEN_END})"
        rf"|\d{{4}}{_RANGE_SEP}(?:\d{{4}}|{_OPEN_END}))\b",
        re.IGNORECASE,
    ),
    experience_hint=re.compile(r"work|experience|job|position|role", re.IGNORECASE),
    paragraph_experience=re.compile(r"experience|work|position|job", re.IGNORECASE),
    education_hint=re.compile(r"education|university|college|school", re.IGNORECASE),
    paragraph_break=re.compile(r"\n\s*\n"),
)

# Role keywords used to synthesize one experience entry when AI output has none
ROLE_KEYWORD = re.compile(
    r"developer|engineer|manager|analyst|designer|architect|specialist|consultant",
    re.IGNORECASE,
)
