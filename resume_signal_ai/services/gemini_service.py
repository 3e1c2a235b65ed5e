"""Gemini generateContent service for structured resume extraction."""

from typing import Any, Optional

import httpx

from resume_signal_ai.config import GEMINI_API_BASE, GEMINI_API_KEY, GEMINI_MODEL, HTTP_TIMEOUT_SECONDS
from resume_signal_ai.errors import GenerationServiceError
from resume_signal_ai.utils.logger import get_logger

logger = get_logger(__name__)


def build_generate_url(model: str = GEMINI_MODEL, api_base: str = GEMINI_API_BASE) -> str:
    return f"{api_base.rstrip('/')}/models/{model}:generateContent"


def build_request_body(prompt: str, generation_config: dict) -> dict[str, Any]:
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": dict(generation_config),
    }


def _response_text(data: Any) -> str:
    """Pull candidates[0].content.parts[0].text out of a response body."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise GenerationServiceError(f"Unexpected response format: missing {e}") from e
    if not isinstance(text, str):
        raise GenerationServiceError("Unexpected response format: text is not a string")
    return text


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return response.reason_phrase or "Unknown error"


async def generate_content(
    prompt: str,
    generation_config: dict,
    client: Optional[httpx.AsyncClient] = None,
    api_key: Optional[str] = None,
    model: str = GEMINI_MODEL,
) -> str:
    """
    Send one generateContent request and return the first candidate's text.
    Raises GenerationServiceError on missing key, network error, non-2xx status or bad payload.
    No retries; the caller decides what to do next.
    """
    key = api_key if api_key is not None else GEMINI_API_KEY
    if not key:
        raise GenerationServiceError("GEMINI_API_KEY is not set")

    url = build_generate_url(model)
    body = build_request_body(prompt, generation_config)
    headers = {"Content-Type": "application/json", "x-goog-api-key": key}

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS) as own_client:
                response = await own_client.post(url, json=body, headers=headers)
        else:
            response = await client.post(url, json=body, headers=headers, timeout=HTTP_TIMEOUT_SECONDS)
    except httpx.TimeoutException as e:
        logger.warning("Gemini request timed out after %ss", HTTP_TIMEOUT_SECONDS)
        raise GenerationServiceError(f"Gemini request timed out: {e}") from e
    except httpx.HTTPError as e:
        logger.warning("Gemini request failed: %s", e)
        raise GenerationServiceError(f"Gemini request failed: {e}") from e

    if response.is_error:
        message = _error_message(response)
        logger.error("Gemini API error: %s %s", response.status_code, message)
        raise GenerationServiceError(
            f"Gemini API error ({response.status_code}): {message}",
            status_code=response.status_code,
        )

    try:
        data = response.json()
    except ValueError as e:
        raise GenerationServiceError("Gemini response is not JSON") from e

    text = _response_text(data)
    logger.info("Gemini returned %s chars (prompt %s chars)", len(text), len(prompt))
    return text
