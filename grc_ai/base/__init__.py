# grc_ai/base/__init__.py

"""
Base components for the AI generation layer.

This module provides the core interfaces, data models, and exceptions
used throughout the backend adapters and services.
"""

from .interfaces import BaseBackend
from .models import (
    BackendAvailability,
    BackendKind,
    ChatMessage,
    ChatRequest,
    ChatRole,
    ContextFields,
    ControlSetFields,
    GenerationConfiguration,
    GenerationRequest,
    GenerationResult,
    GenerationStats,
    PrivacyFields,
    ProviderDescriptor,
    Template,
    TemplateSelectionCriteria,
)
from .exceptions import (
    AIError,
    AvailabilityError,
    BackendProtocolError,
    ConfigurationError,
    ModelNotFoundError,
    ParseAdvisory,
    PersistenceError,
)

__all__ = [
    'BaseBackend',
    'BackendAvailability',
    'BackendKind',
    'ChatMessage',
    'ChatRequest',
    'ChatRole',
    'ContextFields',
    'ControlSetFields',
    'GenerationConfiguration',
    'GenerationRequest',
    'GenerationResult',
    'GenerationStats',
    'PrivacyFields',
    'ProviderDescriptor',
    'Template',
    'TemplateSelectionCriteria',
    'AIError',
    'AvailabilityError',
    'BackendProtocolError',
    'ConfigurationError',
    'ModelNotFoundError',
    'ParseAdvisory',
    'PersistenceError'
]
