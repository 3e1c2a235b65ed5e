"""Configuration loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env: try package dir then project root
_base = Path(__file__).resolve().parent
for _env_path in (_base / ".env", _base.parent / ".env"):
    if load_dotenv(_env_path):
        break
load_dotenv()  # also allow process env

# API keys – never hardcode
GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-1.5-flash-latest")
GEMINI_API_BASE: str = os.getenv(
    "GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta"
)

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# HTTP settings (no retries: the strategy cascade is the only fallback)
HTTP_TIMEOUT_SECONDS: float = 30.0

# Upload limits
MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

# Text limits
MIN_TEXT_LENGTH: int = 50
PRIMARY_MAX_INPUT_CHARS: int = 30000
DEGRADED_MAX_INPUT_CHARS: int = 5000
STORED_TEXT_MAX_CHARS: int = 10000

# Number of technical skills joined into the job-search keywords
TOP_SKILLS_FOR_SEARCH: int = 3

# Generation parameters per prompt tier
PRIMARY_GENERATION_CONFIG: dict = {
    "temperature": 0.3,
    "topK": 20,
    "topP": 0.8,
    "maxOutputTokens": 2048,
}
DEGRADED_GENERATION_CONFIG: dict = {
    "temperature": 0.1,
    "topK": 40,
    "topP": 0.95,
    "maxOutputTokens": 512,
}
