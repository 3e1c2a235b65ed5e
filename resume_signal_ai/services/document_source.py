"""Document sources: where the resume agent gets document bytes from."""

from typing import Optional, Protocol

import httpx

from resume_signal_ai.config import HTTP_TIMEOUT_SECONDS
from resume_signal_ai.errors import DocumentRetrievalError
from resume_signal_ai.schemas.raw_document import DocumentReference, RawDocument
from resume_signal_ai.utils.logger import get_logger

logger = get_logger(__name__)


class DocumentSource(Protocol):
    async def fetch(self, reference: DocumentReference) -> RawDocument:
        """Return the document behind reference or raise DocumentRetrievalError."""
        ...


class HttpDocumentSource:
    """Download documents from file storage by URL. Single attempt, no retries."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout: float = HTTP_TIMEOUT_SECONDS):
        self._client = client
        self._timeout = timeout

    async def _get(self, url: str) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(url, follow_redirects=True, timeout=self._timeout)
        async with httpx.AsyncClient(follow_redirects=True, timeout=self._timeout) as client:
            return await client.get(url)

    async def fetch(self, reference: DocumentReference) -> RawDocument:
        url = reference.file_url
        try:
            response = await self._get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("Storage returned %s for %s", status, url)
            raise DocumentRetrievalError(
                f"Failed to download file: {e.response.reason_phrase or status}",
                url=url,
                status_code=status,
            ) from e
        except httpx.HTTPError as e:
            logger.warning("Storage unreachable for %s: %s", url, e)
            raise DocumentRetrievalError(f"Failed to download file: {e}", url=url) from e

        media_type = reference.media_type or response.headers.get("content-type", "")
        logger.info("Downloaded %s bytes from %s", len(response.content), url)
        return RawDocument(content=response.content, media_type=media_type, filename=reference.file_name)


class StaticDocumentSource:
    """Serve a document whose bytes are already in hand (direct upload)."""

    def __init__(self, document: RawDocument):
        self._document = document

    async def fetch(self, reference: DocumentReference) -> RawDocument:
        return self._document
