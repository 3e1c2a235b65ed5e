"""Agent exports."""

from .resume_agent import ResumeAgent, run_heuristic_pipeline, run_upload_pipeline

__all__ = ["ResumeAgent", "run_upload_pipeline", "run_heuristic_pipeline"]
