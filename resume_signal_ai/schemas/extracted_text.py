"""Linear text produced by the document text extractor."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class ExtractedText(BaseModel):
    """Text in document order; never blank."""

    text: str = Field(..., description="Document text, pages joined by newlines")
    page_count: Optional[int] = Field(default=None, description="Number of pages for paginated formats")
    skipped_pages: List[int] = Field(default_factory=list, description="1-based pages that failed to extract")

    @field_validator("text")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("extracted text is empty")
        return value
