"""Resume Agent: fetch document, extract text, analyze, save.

Two entry points share the same steps and differ only in the analysis:

* ``process_upload``         - AI cascade (primary -> degraded -> empty)
* ``process_stored_resume``  - heuristic extractor only, for re-processing
                               a resume that is already in the store

Only document retrieval and text extraction can fail a request; analysis
always yields a StructuredResumeData.
"""

import asyncio
import threading
from datetime import datetime, timezone
from typing import Callable, Optional, Set, Tuple

import httpx

from resume_signal_ai.config import STORED_TEXT_MAX_CHARS
from resume_signal_ai.cv_pipeline.ai_extractor import run_extraction_cascade
from resume_signal_ai.cv_pipeline.heuristic_extractor import extract_heuristic
from resume_signal_ai.cv_pipeline.text_extractor import extract_text
from resume_signal_ai.errors import (
    DocumentRetrievalError,
    ExtractionError,
    ProcessingInProgressError,
    ResumePipelineError,
)
from resume_signal_ai.schemas.extracted_text import ExtractedText
from resume_signal_ai.schemas.processing import ProcessingResult, ProcessingStep
from resume_signal_ai.schemas.raw_document import DocumentReference, RawDocument
from resume_signal_ai.schemas.resume_record import ResumeRecord
from resume_signal_ai.services.document_source import DocumentSource, HttpDocumentSource, StaticDocumentSource
from resume_signal_ai.services.resume_store import ResumeStore
from resume_signal_ai.utils.logger import get_logger

logger = get_logger(__name__)

USER_FACING_READ_ERROR = "We could not read your document. Please try again or upload a different file."

StepCallback = Callable[[ProcessingStep], None]


class ResumeAgent:
    """Runs one resume through the pipeline and hands the result to the store."""

    def __init__(
        self,
        source: DocumentSource,
        store: ResumeStore,
        on_step: Optional[StepCallback] = None,
        ai_client: Optional[httpx.AsyncClient] = None,
    ):
        self.source = source
        self.store = store
        self.on_step = on_step
        self.ai_client = ai_client
        self._in_flight: Set[str] = set()
        self._in_flight_lock = threading.Lock()

    def _advance(self, key: str, step: ProcessingStep) -> None:
        logger.info("[%s] %s", key, step.label)
        if self.on_step is None:
            return
        try:
            self.on_step(step)
        except Exception:
            logger.exception("[%s] Step callback failed at %s", key, step.value)

    def _claim(self, key: str) -> None:
        with self._in_flight_lock:
            if key in self._in_flight:
                raise ProcessingInProgressError(key)
            self._in_flight.add(key)

    def _release(self, key: str) -> None:
        with self._in_flight_lock:
            self._in_flight.discard(key)

    def _failed(self, key: str, error: ResumePipelineError, resume_id: Optional[str] = None) -> ProcessingResult:
        logger.error("[%s] Processing failed: %s", key, error.message)
        self._advance(key, ProcessingStep.FAILED)
        return ProcessingResult(
            step=ProcessingStep.FAILED,
            resume_id=resume_id,
            error=USER_FACING_READ_ERROR,
            error_code=error.code.value,
            retryable=error.retryable,
        )

    async def _read_document(self, key: str, reference: DocumentReference) -> Tuple[RawDocument, ExtractedText]:
        """Fetching and Extracting steps; raises DocumentRetrievalError or ExtractionError."""
        self._advance(key, ProcessingStep.FETCHING)
        document = await self.source.fetch(reference)
        self._advance(key, ProcessingStep.EXTRACTING)
        return document, await asyncio.to_thread(extract_text, document)

    async def process_upload(self, reference: DocumentReference, user_id: Optional[str] = None) -> ProcessingResult:
        """Upload flow: AI-assisted analysis, then insert a new resume record."""
        key = reference.file_url
        self._claim(key)
        try:
            try:
                document, extracted = await self._read_document(key, reference)
            except (DocumentRetrievalError, ExtractionError) as e:
                return self._failed(key, e)

            self._advance(key, ProcessingStep.ANALYZING)
            data, attempts = await run_extraction_cascade(extracted.text, client=self.ai_client)
            strategy = attempts[-1].strategy if attempts else None

            self._advance(key, ProcessingStep.SAVING)
            record = ResumeRecord(
                user_id=user_id,
                file_name=document.filename or reference.file_name,
                file_url=reference.file_url,
                media_type=document.media_type,
                extracted_data=data,
                extracted_text=extracted.text[:STORED_TEXT_MAX_CHARS],
            )
            resume_id = await self.store.insert(record)

            self._advance(key, ProcessingStep.DONE)
            logger.info(
                "[%s] Resume processed: chars=%s technical=%s soft=%s experience=%s strategy=%s",
                key, len(extracted.text), len(data.technical_skills), len(data.soft_skills),
                len(data.experience), strategy,
            )
            return ProcessingResult(step=ProcessingStep.DONE, resume_id=resume_id, data=data, strategy=strategy)
        finally:
            self._release(key)

    async def process_stored_resume(self, resume_id: str) -> ProcessingResult:
        """Re-process a stored resume with the heuristic extractor and update its record."""
        key = resume_id
        self._claim(key)
        try:
            try:
                self._advance(key, ProcessingStep.FETCHING)
                stored = await self.store.get(resume_id)
                if stored is None:
                    raise DocumentRetrievalError(f"Resume not found: {resume_id}", status_code=404)
                reference = DocumentReference(
                    file_url=stored.file_url,
                    file_name=stored.file_name,
                    media_type=stored.media_type,
                )
                document = await self.source.fetch(reference)
                self._advance(key, ProcessingStep.EXTRACTING)
                extracted = await asyncio.to_thread(extract_text, document)
            except (DocumentRetrievalError, ExtractionError) as e:
                return self._failed(key, e, resume_id=resume_id)

            self._advance(key, ProcessingStep.ANALYZING)
            data = extract_heuristic(extracted.text)

            self._advance(key, ProcessingStep.SAVING)
            await self.store.update_extracted_data(resume_id, data, datetime.now(timezone.utc))

            self._advance(key, ProcessingStep.DONE)
            return ProcessingResult(step=ProcessingStep.DONE, resume_id=resume_id, data=data, strategy="heuristic")
        finally:
            self._release(key)


def _run(coro):
    """Run a coroutine on a fresh event loop; safe to call from sync code."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def run_upload_pipeline(
    document: RawDocument,
    file_url: str,
    store: ResumeStore,
    user_id: Optional[str] = None,
    on_step: Optional[StepCallback] = None,
) -> ProcessingResult:
    """Process an uploaded document whose bytes are already in memory."""
    agent = ResumeAgent(StaticDocumentSource(document), store, on_step=on_step)
    reference = DocumentReference(file_url=file_url, file_name=document.filename, media_type=document.media_type)
    return _run(agent.process_upload(reference, user_id=user_id))


def run_heuristic_pipeline(
    resume_id: str,
    store: ResumeStore,
    source: Optional[DocumentSource] = None,
    on_step: Optional[StepCallback] = None,
) -> ProcessingResult:
    """Re-process a stored resume (downloaded by URL unless a source is given)."""
    agent = ResumeAgent(source or HttpDocumentSource(), store, on_step=on_step)
    return _run(agent.process_stored_resume(resume_id))
