"""Resume pipeline: text extraction (PDF/DOCX), heuristic and AI-assisted field extraction."""

from resume_signal_ai.cv_pipeline.ai_extractor import extract_with_ai, run_extraction_cascade
from resume_signal_ai.cv_pipeline.heuristic_extractor import extract_heuristic
from resume_signal_ai.cv_pipeline.text_extractor import extract_text, validate_document

__all__ = [
    "extract_text",
    "validate_document",
    "extract_heuristic",
    "extract_with_ai",
    "run_extraction_cascade",
]
