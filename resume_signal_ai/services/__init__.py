"""Service exports."""

from .document_source import DocumentSource, HttpDocumentSource, StaticDocumentSource
from .gemini_service import generate_content
from .resume_store import InMemoryResumeStore, ResumeStore

__all__ = [
    "generate_content",
    "DocumentSource",
    "HttpDocumentSource",
    "StaticDocumentSource",
    "ResumeStore",
    "InMemoryResumeStore",
]
