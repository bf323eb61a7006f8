# grc_ai/services/__init__.py

from .configuration_service import ConfigurationService, default_fallback_configurations
from .generation_log_service import GenerationLogService

__all__ = [
    'ConfigurationService',
    'GenerationLogService',
    'default_fallback_configurations'
]
