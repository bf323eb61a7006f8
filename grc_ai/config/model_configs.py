# grc_ai/config/model_configs.py

"""
Per-model capability and pricing tables.

Used by the utility helpers for cost estimation and by callers that size
max-token settings per model.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class ModelCapabilities:
    supports_streaming: bool
    supports_function_calling: bool
    max_tokens: int
    context_window: int

    def to_dict(self) -> Dict[str, object]:
        return {
            'supports_streaming': self.supports_streaming,
            'supports_function_calling': self.supports_function_calling,
            'max_tokens': self.max_tokens,
            'context_window': self.context_window
        }


DEFAULT_CAPABILITIES = ModelCapabilities(
    supports_streaming=False,
    supports_function_calling=False,
    max_tokens=4096,
    context_window=8000
)

# Keyed by provider, then model; "default" applies to any model of that provider
MODEL_CAPABILITIES: Dict[str, Dict[str, ModelCapabilities]] = {
    'openai': {
        'gpt-4o': ModelCapabilities(True, True, 4096, 128000),
        'gpt-4o-mini': ModelCapabilities(True, True, 16384, 128000),
    },
    'claude': {
        'claude-3-5-sonnet-20241022': ModelCapabilities(True, True, 8192, 200000),
        'claude-3-haiku-20240307': ModelCapabilities(True, True, 4096, 200000),
    },
    'gemini': {
        'gemini-1.5-pro': ModelCapabilities(True, True, 8192, 1048576),
        'gemini-1.5-flash': ModelCapabilities(True, True, 8192, 1048576),
    },
    'ollama': {
        'default': DEFAULT_CAPABILITIES,
    },
}

# Blended price in dollars per 1K tokens
MODEL_PRICING_PER_1K: Dict[str, Dict[str, float]] = {
    'openai': {
        'gpt-4o': 0.03,
        'gpt-4o-mini': 0.0015,
        'gpt-4-turbo': 0.03,
        'gpt-3.5-turbo': 0.002,
    },
    'claude': {
        'claude-3-5-sonnet-20241022': 0.015,
        'claude-3-haiku-20240307': 0.0025,
        'claude-3-opus-20240229': 0.075,
    },
    'gemini': {
        'gemini-1.5-pro': 0.0125,
        'gemini-1.5-flash': 0.0005,
        'gemini-pro': 0.005,
    },
}


def get_model_capabilities(provider: str, model: str) -> ModelCapabilities:
    """Look up capabilities, falling back to the provider default, then the global one."""
    provider_table = MODEL_CAPABILITIES.get(provider, {})
    return provider_table.get(model) or provider_table.get('default') or DEFAULT_CAPABILITIES


def get_price_per_1k(provider: str, model: str) -> float:
    return MODEL_PRICING_PER_1K.get(provider, {}).get(model, 0.0)
