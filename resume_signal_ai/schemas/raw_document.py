"""Uploaded document as received from storage, plus its resolved media type."""

from enum import Enum
from pathlib import PurePosixPath
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MediaType(str, Enum):
    """Document formats the text extractor understands."""

    PDF = "application/pdf"
    DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

    @classmethod
    def resolve(cls, declared: str, filename: str = "") -> Optional["MediaType"]:
        """
        Map a declared content type to a MediaType.
        Generic or missing content types fall back to the filename extension.
        Returns None for anything unsupported.
        """
        content_type = (declared or "").split(";")[0].strip().lower()
        for member in cls:
            if content_type == member.value:
                return member
        if content_type and content_type != "application/octet-stream":
            return None
        suffix = PurePosixPath((filename or "").strip().lower()).suffix
        return _EXTENSIONS.get(suffix)


_EXTENSIONS = {".pdf": MediaType.PDF, ".docx": MediaType.DOCX}


class RawDocument(BaseModel):
    """Binary document owned by the caller for one extraction request."""

    model_config = ConfigDict(frozen=True)

    content: bytes = Field(..., description="Raw file bytes")
    media_type: str = Field(default="", description="Declared content type")
    filename: str = Field(default="", description="Original filename")

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def resolved_media_type(self) -> Optional[MediaType]:
        return MediaType.resolve(self.media_type, self.filename)


class DocumentReference(BaseModel):
    """Pointer to a stored document: where it lives and what it claims to be."""

    file_url: str = Field(..., description="Public or signed URL of the stored file")
    file_name: str = Field(default="", description="Original filename")
    media_type: str = Field(default="", description="Declared content type")
