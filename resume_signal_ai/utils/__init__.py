"""Utility exports."""

from .helpers import clean_string_list, matching_skills, title_case_words, top_skill_keywords
from .llm_json import parse_llm_json
from .logger import get_logger

__all__ = [
    "get_logger",
    "parse_llm_json",
    "clean_string_list",
    "matching_skills",
    "title_case_words",
    "top_skill_keywords",
]
