# grc_ai/utils.py

"""
Utility helpers for the generation layer.

Token and cost estimation, input sanitation and JSON safety checks.
"""

import json
import logging
import re
import time
import uuid
import warnings
from typing import Any, Dict, Union

from .config.model_configs import get_model_capabilities as _lookup_capabilities, get_price_per_1k
from .base.exceptions import ParseAdvisory
from .content_types import ARRAY_CONTENT_TYPES, ContentType

logger = logging.getLogger(__name__)

DEFAULT_MAX_INPUT_LENGTH = 10000
CHARS_PER_TOKEN = 4

_WHITESPACE = re.compile(r"\s+")
_ANGLE_BRACKETS = re.compile(r"[<>]")


def estimate_tokens(text: str) -> int:
    """Rough token count, about four characters per token."""
    if not text:
        return 0
    return max(1, len(text) // CHARS_PER_TOKEN)


def estimate_cost(provider: str, model: str, tokens: int) -> float:
    """Estimated dollar cost for ``tokens``; zero for local or unknown models."""
    return (tokens / 1000) * get_price_per_1k(provider, model)


def format_tokens(tokens: int) -> str:
    if tokens >= 1_000_000:
        return f"{tokens / 1_000_000:.1f}M"
    if tokens >= 1000:
        return f"{tokens / 1000:.1f}K"
    return str(tokens)


def sanitize_input(text: str, max_length: int = DEFAULT_MAX_INPUT_LENGTH) -> str:
    """Strip angle brackets, collapse whitespace and cap the length."""
    if not text:
        return ""
    cleaned = _WHITESPACE.sub(" ", _ANGLE_BRACKETS.sub("", text)).strip()
    return cleaned[:max_length]


def generate_request_id() -> str:
    return f"ai_req_{int(time.time() * 1000)}_{uuid.uuid4().hex[:13]}"


def is_json_response(content: str) -> bool:
    if not content:
        return False
    trimmed = content.strip()
    return (
        (trimmed.startswith("{") and trimmed.endswith("}"))
        or (trimmed.startswith("[") and trimmed.endswith("]"))
    )


def safe_json_parse(content: str) -> Any:
    """Parse JSON, returning the input unchanged when it is not valid JSON."""
    try:
        return json.loads(content)
    except (TypeError, ValueError):
        return content


def parse_structured_output(content_type: Union[ContentType, str], text: str) -> Union[str, list]:
    """
    Turn an array-shaped response into a list for array-producing content types.

    Anything that does not parse to a JSON list is returned as the raw text.
    """
    type_value = content_type.value if isinstance(content_type, ContentType) else content_type
    if type_value not in ARRAY_CONTENT_TYPES or not isinstance(text, str):
        return text

    if not text.strip().startswith("["):
        return text

    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError) as e:
        logger.debug(f"Structured output for {type_value} is not valid JSON, keeping raw text: {e}")
        warnings.warn(f"Could not parse {type_value} output as a JSON array", ParseAdvisory, stacklevel=2)
        return text

    if isinstance(parsed, list):
        return parsed
    return text


def validate_api_key(provider: str, api_key: str) -> bool:
    """Format check only; it does not contact the provider."""
    if not api_key or not api_key.strip():
        return False

    if provider == "openai":
        return api_key.startswith("sk-")
    if provider == "claude":
        return api_key.startswith("sk-ant-")
    if provider == "gemini":
        return len(api_key) == 39
    return True


def get_model_capabilities(provider: str, model: str) -> Dict[str, Any]:
    return _lookup_capabilities(provider, model).to_dict()
