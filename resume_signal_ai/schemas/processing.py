"""Processing steps and the result reported by the resume agent."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from resume_signal_ai.schemas.resume_data import StructuredResumeData


class ProcessingStep(str, Enum):
    FETCHING = "fetching"
    EXTRACTING = "extracting"
    ANALYZING = "analyzing"
    SAVING = "saving"
    DONE = "done"
    FAILED = "failed"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    ProcessingStep.FETCHING: "Fetching document",
    ProcessingStep.EXTRACTING: "Extracting text",
    ProcessingStep.ANALYZING: "Analyzing resume",
    ProcessingStep.SAVING: "Saving results",
    ProcessingStep.DONE: "Resume processed",
    ProcessingStep.FAILED: "Processing failed",
}


class ProcessingResult(BaseModel):
    """Final state of one processing request."""

    step: ProcessingStep = Field(..., description="DONE or FAILED")
    resume_id: Optional[str] = Field(default=None, description="Stored resume id")
    data: Optional[StructuredResumeData] = Field(default=None, description="Extracted data when DONE")
    strategy: Optional[str] = Field(default=None, description="Strategy that produced the data")
    error: Optional[str] = Field(default=None, description="User-facing error when FAILED")
    error_code: Optional[str] = Field(default=None, description="Structured error code when FAILED")
    retryable: bool = Field(default=False, description="Whether the user should be offered a retry")

    @property
    def succeeded(self) -> bool:
        return self.step is ProcessingStep.DONE
