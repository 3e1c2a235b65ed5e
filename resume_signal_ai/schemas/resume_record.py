"""Resume row handed to the persistence collaborator."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from resume_signal_ai.schemas.resume_data import StructuredResumeData


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ResumeRecord(BaseModel):
    """Stored resume: file location, extracted data and a text prefix for audit."""

    id: Optional[str] = Field(default=None, description="Store-assigned identifier")
    user_id: Optional[str] = Field(default=None, description="Owner, when known")
    file_name: str = Field(..., description="Original filename")
    file_url: str = Field(..., description="Content URL in file storage")
    media_type: str = Field(default="", description="Declared content type")
    extracted_data: Optional[StructuredResumeData] = Field(default=None, description="Pipeline output")
    extracted_text: str = Field(default="", description="Bounded prefix of the extracted text")
    created_at: datetime = Field(default_factory=_utcnow)
    processed_at: Optional[datetime] = Field(default=None, description="Set by the heuristic reprocessing path")
