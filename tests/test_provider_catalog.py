"""
Tests for the provider catalog.
"""

from unittest.mock import AsyncMock

import pytest

from grc_ai.base.exceptions import AvailabilityError
from grc_ai.base.models import BackendKind
from grc_ai.config.provider_catalog import ProviderCatalog


@pytest.fixture
def catalog():
    return ProviderCatalog()


class TestProviderCatalog:

    def test_providers_in_display_order(self, catalog):
        providers = catalog.list_providers()

        assert [p.id for p in providers] == ["ollama", "openai", "claude", "gemini"]
        assert providers[0].requires_api_key is False
        assert all(p.requires_api_key for p in providers[1:])

    def test_descriptor_to_dict(self, catalog):
        data = catalog.get_provider("gemini").to_dict()

        assert data['type'] == BackendKind.GEMINI.value
        assert data['default_model'] in data['models']

    def test_default_model(self, catalog):
        assert catalog.get_default_model("openai") == "gpt-4o-mini"
        assert catalog.get_default_model("unknown") == "llama3.2"

    @pytest.mark.asyncio
    async def test_live_models_replace_static_list(self):
        lister = AsyncMock(return_value=["phi3:mini", "llama3.2:latest"])
        catalog = ProviderCatalog(model_listers={"ollama": lister})

        provider = await catalog.get_provider_with_live_models("ollama", "http://gpu-box:11434")

        assert provider.models == ("phi3:mini", "llama3.2:latest")
        assert provider.default_model == "phi3:mini"
        lister.assert_awaited_once_with("http://gpu-box:11434")
        assert catalog.get_provider("ollama").default_model == "llama3.2"

    @pytest.mark.asyncio
    async def test_failed_listing_yields_static_descriptor(self, catalog):
        catalog.register_model_lister("ollama", AsyncMock(side_effect=AvailabilityError("ollama", "down")))

        provider = await catalog.get_provider_with_live_models("ollama")

        assert provider == catalog.get_provider("ollama")

    @pytest.mark.asyncio
    async def test_empty_listing_yields_static_descriptor(self, catalog):
        catalog.register_model_lister("ollama", AsyncMock(return_value=[]))

        provider = await catalog.get_provider_with_live_models("ollama")

        assert provider.default_model == "llama3.2"

    @pytest.mark.asyncio
    async def test_hosted_providers_are_static(self, catalog):
        assert await catalog.get_provider_with_live_models("claude") == catalog.get_provider("claude")
        assert await catalog.get_provider_with_live_models("unknown") is None
