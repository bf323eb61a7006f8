# grc_ai/config/__init__.py

"""
Catalog and model tables for the generation layer.

This module provides the provider catalog and the per-model capability
and pricing tables.
"""

from .provider_catalog import DEFAULT_PROVIDERS, LOCAL_PROVIDER_ID, ProviderCatalog
from .model_configs import ModelCapabilities, get_model_capabilities, get_price_per_1k

__all__ = [
    'DEFAULT_PROVIDERS',
    'LOCAL_PROVIDER_ID',
    'ProviderCatalog',
    'ModelCapabilities',
    'get_model_capabilities',
    'get_price_per_1k'
]
