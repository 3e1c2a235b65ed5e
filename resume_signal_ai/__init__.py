"""Resume Signal AI: turn an uploaded resume into structured skills and experience."""

from resume_signal_ai.agents.resume_agent import ResumeAgent, run_heuristic_pipeline, run_upload_pipeline
from resume_signal_ai.schemas.resume_data import ExperienceEntry, StructuredResumeData

__version__ = "0.1.0"

__all__ = [
    "ResumeAgent",
    "run_upload_pipeline",
    "run_heuristic_pipeline",
    "StructuredResumeData",
    "ExperienceEntry",
]
