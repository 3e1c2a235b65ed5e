"""Outcome of one extraction strategy inside the cascade (never persisted)."""

from typing import Optional

from pydantic import BaseModel, Field

from resume_signal_ai.schemas.resume_data import StructuredResumeData


class ExtractionAttempt(BaseModel):
    strategy: str = Field(..., description="Strategy identifier (primary, degraded, empty)")
    success: bool = Field(..., description="True if the strategy produced a result")
    error: Optional[str] = Field(default=None, description="Failure detail when success is False")
    result: Optional[StructuredResumeData] = Field(default=None, description="Result when success is True")
