"""Schema exports."""

from .extracted_text import ExtractedText
from .extraction_attempt import ExtractionAttempt
from .processing import ProcessingResult, ProcessingStep
from .raw_document import DocumentReference, MediaType, RawDocument
from .resume_data import ExperienceEntry, StructuredResumeData
from .resume_record import ResumeRecord

__all__ = [
    "DocumentReference",
    "ExperienceEntry",
    "ExtractedText",
    "ExtractionAttempt",
    "MediaType",
    "ProcessingResult",
    "ProcessingStep",
    "RawDocument",
    "ResumeRecord",
    "StructuredResumeData",
]
