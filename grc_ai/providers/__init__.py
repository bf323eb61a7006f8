# grc_ai/providers/__init__.py

"""
Backend adapters and the dispatch table keyed on backend identity.
"""

from typing import Dict, Optional

import aiohttp

from ..base.interfaces import BaseBackend
from .base_provider import AsyncHTTPProviderMixin, BaseProviderMixin, ProviderUtils
from .anthropic_llm import AnthropicLLM
from .gemini_llm import GeminiLLM
from .ollama_llm import OllamaLLM
from .openai_llm import OpenAILLM


def build_backend_registry(settings, session: Optional[aiohttp.ClientSession] = None) -> Dict[str, BaseBackend]:
    """
    Create one adapter per backend identity.

    Args:
        settings: Application settings (base URLs and timeouts)
        session: Optional shared HTTP session for the aiohttp-based adapters
    """
    http_options = {
        'session': session,
        'availability_timeout': settings.AVAILABILITY_TIMEOUT_SECONDS,
        'generation_timeout': settings.GENERATION_TIMEOUT_SECONDS
    }
    return {
        'ollama': OllamaLLM(settings.OLLAMA_BASE_URL, **http_options),
        'openai': OpenAILLM(settings.OPENAI_BASE_URL, generation_timeout=settings.GENERATION_TIMEOUT_SECONDS),
        'claude': AnthropicLLM(settings.ANTHROPIC_BASE_URL, settings.ANTHROPIC_VERSION, **http_options),
        'gemini': GeminiLLM(settings.GEMINI_BASE_URL, **http_options),
    }


__all__ = [
    'BaseProviderMixin',
    'ProviderUtils',
    'AsyncHTTPProviderMixin',
    'OpenAILLM',
    'GeminiLLM',
    'AnthropicLLM',
    'OllamaLLM',
    'build_backend_registry'
]
