"""Tolerant JSON parsing of generative-model output."""

import json
import re
from typing import Optional

_FENCED_BLOCK = re.compile(r"```(?:json)?[ \t]*\n(.*?)\n?[ \t]*```", re.DOTALL | re.IGNORECASE)


def _loads_object(raw: str) -> Optional[dict]:
    try:
        parsed = json.loads(raw)
    except (json.JSONDecodeError, TypeError, ValueError):
        return None
    return parsed if isinstance(parsed, dict) else None


def parse_llm_json(text: Optional[str]) -> Optional[dict]:
    """
    Parse a JSON object from model output.
    Tries the whole text first, then the first fenced ```json block.
    Returns None when neither yields a JSON object.
    """
    raw = (text or "").strip()
    if not raw:
        return None
    parsed = _loads_object(raw)
    if parsed is not None:
        return parsed
    match = _FENCED_BLOCK.search(raw)
    if match:
        return _loads_object(match.group(1).strip())
    return None
