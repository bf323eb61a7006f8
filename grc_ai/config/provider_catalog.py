# grc_ai/config/provider_catalog.py

"""
Provider catalog.

Static registry of backend descriptors, with live model discovery for the
local runtime.
"""

import logging
from typing import Awaitable, Callable, Dict, List, Optional

from ..base.exceptions import AIError
from ..base.models import BackendKind, ProviderDescriptor

logger = logging.getLogger(__name__)

ModelLister = Callable[[Optional[str]], Awaitable[List[str]]]

DEFAULT_PROVIDERS = (
    ProviderDescriptor(
        id="ollama",
        name="Ollama (Local)",
        kind=BackendKind.OLLAMA,
        description="Local AI models running on your machine",
        requires_api_key=False,
        models=("llama3.2", "llama3.1", "mistral", "codellama", "phi3", "gemma2"),
        default_model="llama3.2"
    ),
    ProviderDescriptor(
        id="openai",
        name="OpenAI",
        kind=BackendKind.OPENAI,
        description="GPT models from OpenAI",
        requires_api_key=True,
        models=("gpt-4o", "gpt-4o-mini", "gpt-4-turbo", "gpt-3.5-turbo"),
        default_model="gpt-4o-mini"
    ),
    ProviderDescriptor(
        id="claude",
        name="Anthropic Claude",
        kind=BackendKind.CLAUDE,
        description="Claude models from Anthropic",
        requires_api_key=True,
        models=("claude-3-5-sonnet-20241022", "claude-3-haiku-20240307", "claude-3-opus-20240229"),
        default_model="claude-3-5-sonnet-20241022"
    ),
    ProviderDescriptor(
        id="gemini",
        name="Google Gemini",
        kind=BackendKind.GEMINI,
        description="Gemini models from Google",
        requires_api_key=True,
        models=("gemini-1.5-pro", "gemini-1.5-flash", "gemini-pro"),
        default_model="gemini-1.5-flash"
    ),
)

LOCAL_PROVIDER_ID = "ollama"


class ProviderCatalog:
    """Read-only catalog of generation backends."""

    def __init__(
        self,
        providers=DEFAULT_PROVIDERS,
        model_listers: Optional[Dict[str, ModelLister]] = None
    ):
        """
        Args:
            providers: Provider descriptors, in display order
            model_listers: Per-provider coroutine returning installed model names
        """
        self._providers: Dict[str, ProviderDescriptor] = {p.id: p for p in providers}
        self._model_listers = dict(model_listers or {})

    def register_model_lister(self, provider_id: str, lister: ModelLister):
        self._model_listers[provider_id] = lister

    def list_providers(self) -> List[ProviderDescriptor]:
        return list(self._providers.values())

    def get_provider(self, provider_id: str) -> Optional[ProviderDescriptor]:
        return self._providers.get(provider_id)

    def get_default_model(self, provider_id: str) -> str:
        provider = self.get_provider(provider_id)
        if provider is None:
            return self._providers[LOCAL_PROVIDER_ID].default_model
        return provider.default_model

    async def get_provider_with_live_models(
        self,
        provider_id: str,
        endpoint: Optional[str] = None
    ) -> Optional[ProviderDescriptor]:
        """
        Get a provider, substituting the models installed on a running instance.

        Only providers with a registered model lister are queried. A failed
        query or an empty listing silently yields the static descriptor.
        """
        provider = self.get_provider(provider_id)
        if provider is None:
            return None

        lister = self._model_listers.get(provider_id)
        if lister is None:
            return provider

        try:
            live_models = await lister(endpoint)
        except AIError as e:
            logger.warning(f"[CATALOG] Could not fetch live models for {provider_id}, using static list: {e}")
            return provider

        if not live_models:
            return provider

        logger.debug(f"[CATALOG] {provider_id} live models: {live_models}")
        return provider.with_models(live_models)
