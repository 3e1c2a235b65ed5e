"""Tests for the resume agent: step sequence, failures, persistence and single-flight."""

import asyncio

import httpx
import pytest

import resume_signal_ai.services.gemini_service as gemini_service
from conftest import DOCX_TYPE, SAMPLE_RESUME, make_docx, ok
from resume_signal_ai.agents.resume_agent import (
    USER_FACING_READ_ERROR,
    ResumeAgent,
    run_upload_pipeline,
)
from resume_signal_ai.cv_pipeline.ai_extractor import DEGRADED_EXTRACTION_NOTE, UNABLE_TO_EXTRACT_NOTE
from resume_signal_ai.errors import ProcessingInProgressError
from resume_signal_ai.schemas.processing import ProcessingStep
from resume_signal_ai.schemas.raw_document import DocumentReference, RawDocument
from resume_signal_ai.schemas.resume_record import ResumeRecord
from resume_signal_ai.services.document_source import HttpDocumentSource, StaticDocumentSource
from resume_signal_ai.services.resume_store import InMemoryResumeStore

FILE_URL = "https://storage.example.com/resumes/jane.docx"
AI_PAYLOAD = {
    "technical_skills": ["Python", "Docker", "AWS"],
    "soft_skills": ["Communication"],
    "experience": [{"title": "Software Engineer", "company": "Acme Corp", "duration": "01/2020 - Present"}],
}


def _reference(name="jane.docx", media_type=DOCX_TYPE, url=FILE_URL):
    return DocumentReference(file_url=url, file_name=name, media_type=media_type)


def _storage_client(content: bytes, status: int = 200) -> httpx.AsyncClient:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, content=content, headers={"content-type": DOCX_TYPE})

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_upload_runs_all_steps_and_saves(sample_docx, gemini_stub) -> None:
    store = InMemoryResumeStore()
    steps = []
    document = RawDocument(content=sample_docx, media_type=DOCX_TYPE, filename="jane.docx")
    agent = ResumeAgent(StaticDocumentSource(document), store, on_step=steps.append,
                        ai_client=gemini_stub(ok(AI_PAYLOAD)).client())

    result = asyncio.run(agent.process_upload(_reference(), user_id="user-1"))

    assert steps == [
        ProcessingStep.FETCHING,
        ProcessingStep.EXTRACTING,
        ProcessingStep.ANALYZING,
        ProcessingStep.SAVING,
        ProcessingStep.DONE,
    ]
    assert result.succeeded and result.strategy == "primary"
    assert result.data.technical_skills == ["Python", "Docker", "AWS"]

    record = asyncio.run(store.get(result.resume_id))
    assert record.user_id == "user-1"
    assert record.file_name == "jane.docx"
    assert record.file_url == FILE_URL
    assert record.extracted_data == result.data
    assert record.extracted_text.startswith("Jane Doe")
    assert record.processed_at is None


def test_failing_step_callback_does_not_abort_upload(sample_docx, gemini_stub) -> None:
    store = InMemoryResumeStore()
    seen = []

    def on_step(step):
        seen.append(step)
        if step is ProcessingStep.ANALYZING:
            raise RuntimeError("progress display closed")

    document = RawDocument(content=sample_docx, media_type=DOCX_TYPE, filename="jane.docx")
    agent = ResumeAgent(StaticDocumentSource(document), store, on_step=on_step,
                        ai_client=gemini_stub(ok(AI_PAYLOAD)).client())

    result = asyncio.run(agent.process_upload(_reference()))

    assert result.succeeded
    assert seen[-1] is ProcessingStep.DONE
    assert len(store) == 1


def test_upload_stores_bounded_text_prefix(gemini_stub) -> None:
    content = make_docx(["word " * 3000])
    store = InMemoryResumeStore()
    document = RawDocument(content=content, media_type=DOCX_TYPE, filename="long.docx")
    agent = ResumeAgent(StaticDocumentSource(document), store, ai_client=gemini_stub(ok(AI_PAYLOAD)).client())
    result = asyncio.run(agent.process_upload(_reference("long.docx")))
    record = asyncio.run(store.get(result.resume_id))
    assert len(record.extracted_text) == 10000


def test_upload_absorbs_ai_failure(sample_docx, gemini_stub) -> None:
    store = InMemoryResumeStore()
    stub = gemini_stub(httpx.Response(500), ok({"technical_skills": ["Python"], "soft_skills": []}))
    document = RawDocument(content=sample_docx, media_type=DOCX_TYPE, filename="jane.docx")
    agent = ResumeAgent(StaticDocumentSource(document), store, ai_client=stub.client())

    result = asyncio.run(agent.process_upload(_reference()))

    assert result.step is ProcessingStep.DONE
    assert result.strategy == "degraded"
    assert result.data.extraction_note == DEGRADED_EXTRACTION_NOTE
    assert len(store) == 1


def test_unsupported_document_fails_with_retry(gemini_stub) -> None:
    store = InMemoryResumeStore()
    steps = []
    document = RawDocument(content=b"plain text", media_type="text/plain", filename="cv.txt")
    stub = gemini_stub()
    agent = ResumeAgent(StaticDocumentSource(document), store, on_step=steps.append, ai_client=stub.client())

    result = asyncio.run(agent.process_upload(_reference("cv.txt", "text/plain")))

    assert steps == [ProcessingStep.FETCHING, ProcessingStep.EXTRACTING, ProcessingStep.FAILED]
    assert result.step is ProcessingStep.FAILED
    assert result.error == USER_FACING_READ_ERROR
    assert result.error_code == "EXTRACTION_ERROR"
    assert result.retryable
    assert result.data is None
    assert len(store) == 0
    assert stub.prompts == []


def test_storage_404_fails_during_fetch() -> None:
    store = InMemoryResumeStore()
    steps = []
    source = HttpDocumentSource(client=_storage_client(b"", status=404))
    agent = ResumeAgent(source, store, on_step=steps.append)

    result = asyncio.run(agent.process_upload(_reference()))

    assert steps == [ProcessingStep.FETCHING, ProcessingStep.FAILED]
    assert result.error_code == "DOCUMENT_NOT_FOUND"
    assert result.retryable


def test_storage_redirect_is_followed(sample_docx, gemini_stub) -> None:
    final_url = "https://cdn.example.com/resumes/jane.docx"

    def handler(request: httpx.Request) -> httpx.Response:
        if str(request.url) == FILE_URL:
            return httpx.Response(302, headers={"location": final_url})
        return httpx.Response(200, content=sample_docx, headers={"content-type": DOCX_TYPE})

    store = InMemoryResumeStore()
    source = HttpDocumentSource(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
    agent = ResumeAgent(source, store, ai_client=gemini_stub(ok(AI_PAYLOAD)).client())

    result = asyncio.run(agent.process_upload(_reference()))

    assert result.succeeded
    assert len(store) == 1


def test_storage_unreachable_fails_during_fetch() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("no route to host", request=request)

    source = HttpDocumentSource(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
    agent = ResumeAgent(source, InMemoryResumeStore())
    result = asyncio.run(agent.process_upload(_reference()))
    assert result.step is ProcessingStep.FAILED
    assert result.error_code == "DOCUMENT_UNREACHABLE"


def test_stored_resume_reprocessed_with_heuristics(sample_docx, gemini_stub) -> None:
    store = InMemoryResumeStore()
    resume_id = asyncio.run(store.insert(ResumeRecord(file_name="jane.docx", file_url=FILE_URL, media_type=DOCX_TYPE)))
    stub = gemini_stub()
    steps = []
    agent = ResumeAgent(
        HttpDocumentSource(client=_storage_client(sample_docx)), store, on_step=steps.append, ai_client=stub.client()
    )

    result = asyncio.run(agent.process_stored_resume(resume_id))

    assert result.succeeded and result.strategy == "heuristic"
    assert steps[-1] is ProcessingStep.DONE
    assert stub.prompts == []
    assert "Python" in result.data.technical_skills
    assert "Communication" in result.data.soft_skills
    assert result.data.experience[0].company == "Acme Corp"
    record = asyncio.run(store.get(resume_id))
    assert record.extracted_data == result.data
    assert record.processed_at is not None


def test_unknown_stored_resume_fails() -> None:
    agent = ResumeAgent(StaticDocumentSource(RawDocument(content=b"x")), InMemoryResumeStore())
    result = asyncio.run(agent.process_stored_resume("missing"))
    assert result.step is ProcessingStep.FAILED
    assert result.error_code == "DOCUMENT_NOT_FOUND"
    assert result.resume_id == "missing"


def test_same_request_cannot_run_twice_concurrently(sample_docx, gemini_stub) -> None:
    document = RawDocument(content=sample_docx, media_type=DOCX_TYPE, filename="jane.docx")

    async def scenario():
        started, release = asyncio.Event(), asyncio.Event()

        class SlowSource:
            async def fetch(self, reference):
                started.set()
                await release.wait()
                return document

        agent = ResumeAgent(SlowSource(), InMemoryResumeStore(), ai_client=gemini_stub(ok(AI_PAYLOAD)).client())
        first = asyncio.create_task(agent.process_upload(_reference()))
        await started.wait()
        with pytest.raises(ProcessingInProgressError):
            await agent.process_upload(_reference())
        release.set()
        return await first

    assert asyncio.run(scenario()).succeeded


def test_sync_upload_wrapper_without_api_key(sample_docx, monkeypatch) -> None:
    monkeypatch.setattr(gemini_service, "GEMINI_API_KEY", "")
    store = InMemoryResumeStore()
    document = RawDocument(content=sample_docx, media_type=DOCX_TYPE, filename="jane.docx")

    result = run_upload_pipeline(document, FILE_URL, store)

    assert result.succeeded and result.strategy == "empty"
    assert result.data.extraction_note == UNABLE_TO_EXTRACT_NOTE
    assert len(store) == 1


def test_sample_text_matches_docx(sample_docx) -> None:
    document = RawDocument(content=sample_docx, media_type=DOCX_TYPE, filename="jane.docx")
    from resume_signal_ai.cv_pipeline.text_extractor import extract_text

    assert extract_text(document).text == SAMPLE_RESUME.strip()
