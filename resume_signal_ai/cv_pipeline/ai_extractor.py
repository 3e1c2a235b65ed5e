"""AI-assisted extraction of structured resume data, run as a strategy cascade.

Strategies are tried in order until one succeeds:

1. ``primary``  - full prompt, skills and experience, up to 30,000 chars of text
2. ``degraded`` - short prompt, skills only, up to 5,000 chars of text
3. ``empty``    - canonical empty result with an "unable to extract" note

Every strategy is total: failures are returned as an unsuccessful
ExtractionAttempt, never raised, and the last strategy cannot fail.
"""

from typing import Awaitable, Callable, List, Optional, Sequence, Tuple

import httpx

from resume_signal_ai.config import (
    DEGRADED_GENERATION_CONFIG,
    DEGRADED_MAX_INPUT_CHARS,
    MIN_TEXT_LENGTH,
    PRIMARY_GENERATION_CONFIG,
    PRIMARY_MAX_INPUT_CHARS,
)
from resume_signal_ai.cv_pipeline.skill_vocabulary import ROLE_KEYWORD
from resume_signal_ai.errors import (
    AnalysisDegradation,
    GenerationServiceError,
    TotalAnalysisFailure,
)
from resume_signal_ai.schemas.extraction_attempt import ExtractionAttempt
from resume_signal_ai.schemas.resume_data import ExperienceEntry, StructuredResumeData
from resume_signal_ai.services.gemini_service import generate_content
from resume_signal_ai.utils.helpers import clean_string_list
from resume_signal_ai.utils.llm_json import parse_llm_json
from resume_signal_ai.utils.logger import get_logger

logger = get_logger(__name__)

PLACEHOLDER_TEXT = "Failed to extract resume text"

DEGRADED_EXTRACTION_NOTE = (
    "Extracted using fallback AI method. Limited information was available from the document."
)
UNABLE_TO_EXTRACT_NOTE = (
    "Unable to extract information from the document. "
    "Please try uploading a different file or format."
)

PRIMARY_PROMPT = """Analyze this resume text and extract structured information. Follow these rules:
1. Technical skills: List specific technologies, tools, and programming languages
2. Soft skills: Identify interpersonal and professional skills
3. Experience: Extract job titles, company names, and durations in MM/YYYY format

Return ONLY a JSON object with exactly these three keys and no other text:
{{
    "technical_skills": ["JavaScript", "React"],
    "soft_skills": ["Teamwork", "Communication"],
    "experience": [
        {{
            "title": "Software Engineer",
            "company": "Tech Corp",
            "duration": "01/2020 - Present"
        }}
    ]
}}

Resume text:
{text}
"""

DEGRADED_PROMPT = """Extract skills from this text that might come from a resume. Separate technical skills from soft skills.
Even if the text is partial or corrupted, try to identify any skills that might be present.

Format your response ONLY as a valid JSON object with this structure:
{{
  "technical_skills": ["skill1", "skill2"],
  "soft_skills": ["skill1", "skill2"],
  "experience": []
}}

Text:
{text}
"""

Strategy = Callable[[str, Optional[httpx.AsyncClient]], Awaitable[ExtractionAttempt]]


def _normalize_experience(values: object) -> List[ExperienceEntry]:
    """Keep entries that are objects with both a title and a company."""
    if not isinstance(values, list):
        return []
    entries = []
    for item in values:
        if not isinstance(item, dict):
            continue
        title, company = item.get("title"), item.get("company")
        if not title or not company:
            continue
        duration = item.get("duration")
        entries.append(
            ExperienceEntry(
                title=str(title).strip(),
                company=str(company).strip(),
                duration=str(duration).strip() if duration else "Duration",
            )
        )
    return entries


def normalize_resume_payload(payload: dict) -> StructuredResumeData:
    """Coerce parsed model output into StructuredResumeData; malformed fields become empty lists."""
    return StructuredResumeData(
        technical_skills=clean_string_list(payload.get("technical_skills")),
        soft_skills=clean_string_list(payload.get("soft_skills")),
        experience=_normalize_experience(payload.get("experience")),
    )


def _role_keyword_entry(text: str) -> List[ExperienceEntry]:
    match = ROLE_KEYWORD.search(text or "")
    if not match:
        return []
    keyword = match.group(0)
    return [ExperienceEntry(title=keyword[:1].upper() + keyword[1:], company="Unknown", duration="Unknown")]


async def _request_payload(prompt: str, generation_config: dict, client: Optional[httpx.AsyncClient]) -> dict:
    """Call the service and parse its JSON; GenerationServiceError on any failure."""
    response_text = await generate_content(prompt, generation_config, client=client)
    payload = parse_llm_json(response_text)
    if payload is None:
        logger.warning("Unparsable model output: %s", response_text[:200])
        raise GenerationServiceError("Model output is not a JSON object")
    return payload


async def primary_strategy(text: str, client: Optional[httpx.AsyncClient] = None) -> ExtractionAttempt:
    """Full extraction prompt: skills and experience."""
    if not text or len(text) < MIN_TEXT_LENGTH:
        reason = f"text shorter than {MIN_TEXT_LENGTH} characters"
        logger.warning("Skipping primary extraction: %s", reason)
        return ExtractionAttempt(strategy="primary", success=False, error=reason)
    prompt = PRIMARY_PROMPT.format(text=text[:PRIMARY_MAX_INPUT_CHARS])
    try:
        payload = await _request_payload(prompt, PRIMARY_GENERATION_CONFIG, client)
    except GenerationServiceError as e:
        degradation = AnalysisDegradation(e.message)
        logger.warning("Primary extraction degraded: %s", degradation.message)
        return ExtractionAttempt(strategy="primary", success=False, error=degradation.message)
    result = normalize_resume_payload(payload)
    logger.info(
        "Primary extraction: technical=%s soft=%s experience=%s",
        len(result.technical_skills), len(result.soft_skills), len(result.experience),
    )
    return ExtractionAttempt(strategy="primary", success=True, result=result)


async def degraded_strategy(text: str, client: Optional[httpx.AsyncClient] = None) -> ExtractionAttempt:
    """Short skills-only prompt; synthesizes one experience entry from a role keyword."""
    source = text if text and text.strip() else PLACEHOLDER_TEXT
    prompt = DEGRADED_PROMPT.format(text=source[:DEGRADED_MAX_INPUT_CHARS])
    try:
        payload = await _request_payload(prompt, DEGRADED_GENERATION_CONFIG, client)
    except GenerationServiceError as e:
        failure = TotalAnalysisFailure(e.message)
        logger.error("Degraded extraction failed: %s", failure.message)
        return ExtractionAttempt(strategy="degraded", success=False, error=failure.message)
    experience = _normalize_experience(payload.get("experience")) or _role_keyword_entry(source)
    result = StructuredResumeData(
        technical_skills=clean_string_list(payload.get("technical_skills")),
        soft_skills=clean_string_list(payload.get("soft_skills")),
        experience=experience,
        extraction_note=DEGRADED_EXTRACTION_NOTE,
    )
    return ExtractionAttempt(strategy="degraded", success=True, result=result)


async def empty_strategy(text: str, client: Optional[httpx.AsyncClient] = None) -> ExtractionAttempt:
    return ExtractionAttempt(
        strategy="empty",
        success=True,
        result=StructuredResumeData.empty(UNABLE_TO_EXTRACT_NOTE),
    )


DEFAULT_STRATEGIES: Tuple[Strategy, ...] = (primary_strategy, degraded_strategy, empty_strategy)


async def run_extraction_cascade(
    text: Optional[str],
    client: Optional[httpx.AsyncClient] = None,
    strategies: Sequence[Strategy] = DEFAULT_STRATEGIES,
) -> Tuple[StructuredResumeData, List[ExtractionAttempt]]:
    """
    Try strategies in order; return the first successful result and all attempts made.
    Falls back to the empty result if every strategy (including a custom last one) fails.
    """
    text = text or ""
    attempts: List[ExtractionAttempt] = []
    for strategy in strategies:
        try:
            attempt = await strategy(text, client)
        except Exception as e:
            logger.exception("Extraction strategy %s raised", getattr(strategy, "__name__", strategy))
            attempt = ExtractionAttempt(strategy=getattr(strategy, "__name__", "unknown"), success=False, error=str(e))
        attempts.append(attempt)
        if attempt.success and attempt.result is not None:
            logger.info("Extraction finished with strategy=%s after %s attempt(s)", attempt.strategy, len(attempts))
            return attempt.result, attempts
    logger.error("All extraction strategies failed")
    return StructuredResumeData.empty(UNABLE_TO_EXTRACT_NOTE), attempts


async def extract_with_ai(text: Optional[str], client: Optional[httpx.AsyncClient] = None) -> StructuredResumeData:
    """Structured data for resume text; never raises for service or parsing failures."""
    result, _ = await run_extraction_cascade(text, client)
    return result
