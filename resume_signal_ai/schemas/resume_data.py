"""Structured resume data: the canonical output of the extraction pipeline."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class ExperienceEntry(BaseModel):
    """One position; fields hold placeholders when not confidently extracted."""

    title: str = Field(default="Position", description="Job title")
    company: str = Field(default="Company", description="Employer name")
    duration: str = Field(default="Duration", description="Date range as written in the resume")


class StructuredResumeData(BaseModel):
    """Skills and experience extracted from a resume, plus an optional caveat."""

    technical_skills: List[str] = Field(default_factory=list, description="Technical skills in detection order")
    soft_skills: List[str] = Field(default_factory=list, description="Soft skills in detection order")
    experience: List[ExperienceEntry] = Field(default_factory=list, description="Positions in document order")
    extraction_note: Optional[str] = Field(default=None, description="Caveat when extraction degraded")

    @field_validator("technical_skills", "soft_skills")
    @classmethod
    def _dedupe(cls, value: List[str]) -> List[str]:
        return list(dict.fromkeys(value))

    @classmethod
    def empty(cls, note: Optional[str] = None) -> "StructuredResumeData":
        return cls(extraction_note=note)

    def to_record(self) -> Dict[str, Any]:
        """JSON-compatible dict as stored by the resume store."""
        return self.model_dump(mode="json", exclude_none=True)
