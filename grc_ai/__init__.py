# grc_ai/__init__.py

"""
GRC AI generation orchestration layer.

Builds prompts for governance, risk and compliance content, dispatches
them to a local or hosted text-generation backend and records every
outcome.
"""

# Core components
from .orchestrator import AIOrchestrator
from .factory import configure_logging, create_orchestrator

# Base interfaces and models
from .base.interfaces import BaseBackend
from .base.models import (
    ChatMessage, ChatRequest, ContextFields, ControlSetFields, GenerationConfiguration,
    GenerationRequest, GenerationResult, GenerationStats, PrivacyFields, Template,
    TemplateSelectionCriteria
)
from .base.exceptions import (
    AIError, AvailabilityError, BackendProtocolError, ConfigurationError,
    ModelNotFoundError, PersistenceError
)
from .content_types import ARRAY_CONTENT_TYPES, AuditType, ContentType

# Provider implementations
from .providers import AnthropicLLM, GeminiLLM, OllamaLLM, OpenAILLM

__all__ = [
    'AIOrchestrator',
    'configure_logging',
    'create_orchestrator',

    'BaseBackend',
    'ChatMessage',
    'ChatRequest',
    'ContextFields',
    'ControlSetFields',
    'GenerationConfiguration',
    'GenerationRequest',
    'GenerationResult',
    'GenerationStats',
    'PrivacyFields',
    'Template',
    'TemplateSelectionCriteria',

    'AIError',
    'AvailabilityError',
    'BackendProtocolError',
    'ConfigurationError',
    'ModelNotFoundError',
    'PersistenceError',

    'ARRAY_CONTENT_TYPES',
    'AuditType',
    'ContentType',

    'AnthropicLLM',
    'GeminiLLM',
    'OllamaLLM',
    'OpenAILLM'
]
