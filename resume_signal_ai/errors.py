"""
Error taxonomy for the resume pipeline.

Only DocumentRetrievalError and ExtractionError reach the user. Analysis
failures (GenerationServiceError, AnalysisDegradation, TotalAnalysisFailure)
are raised inside the extraction cascade and always absorbed there.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Structured error codes."""

    DOCUMENT_NOT_FOUND = "DOCUMENT_NOT_FOUND"
    DOCUMENT_UNREACHABLE = "DOCUMENT_UNREACHABLE"
    EXTRACTION_ERROR = "EXTRACTION_ERROR"
    GENERATION_SERVICE_ERROR = "GENERATION_SERVICE_ERROR"
    ANALYSIS_DEGRADED = "ANALYSIS_DEGRADED"
    ANALYSIS_FAILED = "ANALYSIS_FAILED"
    PROCESSING_IN_PROGRESS = "PROCESSING_IN_PROGRESS"


class ExtractionErrorReason(str, Enum):
    """Why a document could not be turned into text."""

    UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"
    DECODE_FAILURE = "DECODE_FAILURE"
    EMPTY_CONTENT = "EMPTY_CONTENT"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"


class ResumePipelineError(Exception):
    """
    Base exception for all pipeline errors.

    Attributes:
        message: Human-readable error message
        code: Structured error code
        details: Additional context
        retryable: Whether the user may retry the request
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        retryable: bool = False,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        self.retryable = retryable
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dict for API responses and logs."""
        return {
            "error": {
                "message": self.message,
                "code": self.code.value,
                "details": self.details,
                "retryable": self.retryable,
            }
        }


class DocumentRetrievalError(ResumePipelineError):
    """Source unreachable or document missing in storage."""

    def __init__(self, message: str, url: str = "", status_code: Optional[int] = None):
        details: Dict[str, Any] = {}
        if url:
            details["url"] = url
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(
            message=message,
            code=ErrorCode.DOCUMENT_NOT_FOUND if status_code == 404 else ErrorCode.DOCUMENT_UNREACHABLE,
            details=details,
            retryable=True,
        )


class ExtractionError(ResumePipelineError):
    """Document could not be converted into text."""

    def __init__(self, reason: ExtractionErrorReason, message: str, filename: str = ""):
        self.reason = reason
        details: Dict[str, Any] = {"reason": reason.value}
        if filename:
            details["filename"] = filename
        super().__init__(
            message=f"Extraction failed: {message}",
            code=ErrorCode.EXTRACTION_ERROR,
            details=details,
            retryable=True,
        )


class GenerationServiceError(ResumePipelineError):
    """Generative service unavailable, rejected the request or answered malformed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        details = {"status_code": status_code} if status_code is not None else {}
        super().__init__(
            message=message,
            code=ErrorCode.GENERATION_SERVICE_ERROR,
            details=details,
            retryable=False,
        )


class AnalysisDegradation(ResumePipelineError):
    """Primary AI extraction failed; the cascade moves to the degraded prompt."""

    def __init__(self, message: str):
        super().__init__(message=message, code=ErrorCode.ANALYSIS_DEGRADED)


class TotalAnalysisFailure(ResumePipelineError):
    """Degraded AI extraction failed; the cascade returns the empty result."""

    def __init__(self, message: str):
        super().__init__(message=message, code=ErrorCode.ANALYSIS_FAILED)


class ProcessingInProgressError(ResumePipelineError):
    """The same resume request is already being processed."""

    def __init__(self, request_key: str):
        super().__init__(
            message=f"Resume is already being processed: {request_key}",
            code=ErrorCode.PROCESSING_IN_PROGRESS,
            details={"request_key": request_key},
            retryable=True,
        )
