"""Shared fixtures: sample resume text, DOCX builder and a mocked Gemini endpoint."""

import json
from io import BytesIO
from typing import Callable, List, Optional

import httpx
import pytest
from docx import Document

import resume_signal_ai.services.gemini_service as gemini_service

DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

SAMPLE_RESUME = (
    "Jane Doe\n"
    "Senior software engineer with strong communication and leadership skills.\n"
    "\n"
    "EXPERIENCE\n"
    "Software Engineer at Acme Corp, Jan 2020 to Present\n"
    "Built Python and Docker services on AWS.\n"
    "\n"
    "EDUCATION\n"
    "BS Computer Science, State University\n"
)


def make_docx(paragraphs: List[str], table_rows: Optional[List[List[str]]] = None) -> bytes:
    """Build a DOCX file in memory."""
    doc = Document()
    for text in paragraphs:
        doc.add_paragraph(text)
    if table_rows:
        table = doc.add_table(rows=len(table_rows), cols=len(table_rows[0]))
        for r, row in enumerate(table_rows):
            for c, value in enumerate(row):
                table.cell(r, c).text = value
    out = BytesIO()
    doc.save(out)
    return out.getvalue()


def gemini_body(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class GeminiStub:
    """Records prompts and answers each request with the next scripted response."""

    def __init__(self, responses: List[httpx.Response | Exception]):
        self.responses = list(responses)
        self.prompts: List[str] = []
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        body = json.loads(request.content)
        self.prompts.append(body["contents"][0]["parts"][0]["text"])
        response = self.responses.pop(0) if self.responses else httpx.Response(500)
        if isinstance(response, Exception):
            raise response
        return response

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


def ok(payload) -> httpx.Response:
    """200 response whose candidate text is payload (JSON-encoded unless already a string)."""
    text = payload if isinstance(payload, str) else json.dumps(payload)
    return httpx.Response(200, json=gemini_body(text))


@pytest.fixture(autouse=True)
def gemini_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(gemini_service, "GEMINI_API_KEY", "test-key")


@pytest.fixture
def gemini_stub() -> Callable[..., GeminiStub]:
    def factory(*responses) -> GeminiStub:
        return GeminiStub(list(responses))

    return factory


@pytest.fixture
def sample_docx() -> bytes:
    return make_docx(SAMPLE_RESUME.split("\n"))
