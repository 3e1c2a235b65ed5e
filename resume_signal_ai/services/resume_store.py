"""Persistence collaborator for processed resumes."""

import asyncio
import uuid
from datetime import datetime
from typing import Dict, Optional, Protocol

from resume_signal_ai.schemas.resume_data import StructuredResumeData
from resume_signal_ai.schemas.resume_record import ResumeRecord
from resume_signal_ai.utils.logger import get_logger

logger = get_logger(__name__)


class ResumeStore(Protocol):
    async def insert(self, record: ResumeRecord) -> str:
        """Persist a new resume row and return its id."""
        ...

    async def get(self, resume_id: str) -> Optional[ResumeRecord]:
        ...

    async def update_extracted_data(
        self, resume_id: str, data: StructuredResumeData, processed_at: datetime
    ) -> None:
        """Replace extracted data of an existing row; KeyError if it does not exist."""
        ...


class InMemoryResumeStore:
    """Dict-backed ResumeStore for local runs and tests. Returns copies, never shared instances."""

    def __init__(self) -> None:
        self._rows: Dict[str, ResumeRecord] = {}
        self._lock = asyncio.Lock()

    async def insert(self, record: ResumeRecord) -> str:
        async with self._lock:
            resume_id = record.id or str(uuid.uuid4())
            self._rows[resume_id] = record.model_copy(update={"id": resume_id}, deep=True)
        logger.info("Stored resume %s (%s)", resume_id, record.file_name)
        return resume_id

    async def get(self, resume_id: str) -> Optional[ResumeRecord]:
        row = self._rows.get(resume_id)
        return row.model_copy(deep=True) if row else None

    async def update_extracted_data(
        self, resume_id: str, data: StructuredResumeData, processed_at: datetime
    ) -> None:
        async with self._lock:
            if resume_id not in self._rows:
                raise KeyError(f"Resume not found: {resume_id}")
            self._rows[resume_id] = self._rows[resume_id].model_copy(
                update={"extracted_data": data.model_copy(deep=True), "processed_at": processed_at},
                deep=True,
            )
        logger.info("Updated extracted data for resume %s", resume_id)

    def __len__(self) -> int:
        return len(self._rows)
