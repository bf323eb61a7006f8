# grc_ai/base/exceptions.py

"""
Exception hierarchy for AI generation operations.

Every adapter-level error derives from AIError so the dispatch boundary can
convert it into a failed GenerationResult.
"""

from typing import List, Optional


class AIError(Exception):
    """Base exception for all AI generation operations."""
    pass


class ConfigurationError(AIError):
    """Raised when a provider, model or credential is missing or invalid."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class AvailabilityError(AIError):
    """Raised when a backend is unreachable or not running."""

    def __init__(self, provider: str, message: str, endpoint: Optional[str] = None):
        self.provider = provider
        self.endpoint = endpoint
        super().__init__(message)


class ModelNotFoundError(AIError):
    """Raised when the requested model is absent from the backend's catalog."""

    def __init__(
        self,
        provider: str,
        model_name: str,
        available_models: Optional[List[str]] = None,
        remediation: Optional[str] = None
    ):
        self.provider = provider
        self.model_name = model_name
        self.available_models = available_models or []
        self.remediation = remediation

        message = f'Model "{model_name}" not found.'
        if self.available_models:
            message += f" Available models: {', '.join(self.available_models)}."
        if remediation:
            message += f' Run "{remediation}" to download it.'
        super().__init__(message)


class BackendProtocolError(AIError):
    """Raised on a non-success HTTP status or a malformed response body."""

    def __init__(self, provider: str, message: str, status: Optional[int] = None):
        self.provider = provider
        self.status = status
        super().__init__(message)


class PersistenceError(AIError):
    """Raised by repositories when the storage layer fails."""

    def __init__(self, operation: str, original_error: Exception = None):
        self.operation = operation
        self.original_error = original_error
        detail = f": {original_error}" if original_error else ""
        super().__init__(f"Persistence operation '{operation}' failed{detail}")


class ParseAdvisory(UserWarning):
    """Structured-output parse attempt failed; the raw text was kept."""
    pass
