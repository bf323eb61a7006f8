"""
Tests for per-user configuration storage.
"""

from datetime import datetime, timedelta, timezone

import pytest

from grc_ai.base.exceptions import ConfigurationError, PersistenceError
from grc_ai.base.models import GenerationConfiguration
from grc_ai.services import ConfigurationService, default_fallback_configurations


@pytest.fixture
def service(repository, test_settings):
    return ConfigurationService(repository, test_settings)


class TestConfigurationService:

    def test_save_then_get(self, service):
        saved = service.save_configuration(
            GenerationConfiguration(provider="openai", model_name="gpt-4o-mini", api_key="sk-test"),
            user_id="user-1"
        )

        assert saved.id
        assert saved.created_by == "user-1"
        assert saved.updated_at is not None

        configs = service.get_configurations("user-1")
        assert [c.model_name for c in configs] == ["gpt-4o-mini"]

    def test_save_same_provider_updates_in_place(self, service, repository):
        first = service.save_configuration(
            GenerationConfiguration(provider="claude", model_name="claude-3-haiku-20240307"), "user-1"
        )
        second = service.save_configuration(
            GenerationConfiguration(provider="claude", model_name="claude-3-5-sonnet-20241022", temperature=0.2),
            "user-1"
        )

        configs = service.get_configurations("user-1")
        assert len(configs) == 1
        assert second.id == first.id
        assert configs[0].model_name == "claude-3-5-sonnet-20241022"
        assert configs[0].temperature == 0.2

    def test_save_without_user_is_rejected(self, service, repository):
        with pytest.raises(ConfigurationError) as exc_info:
            service.save_configuration(GenerationConfiguration(provider="ollama", model_name="llama3.2"), None)

        assert exc_info.value.field == "user_id"
        assert str(exc_info.value) == "User not authenticated"
        assert repository.get_configurations("local") == []

    def test_save_storage_failure_propagates(self, failing_repository, test_settings):
        service = ConfigurationService(failing_repository, test_settings)

        with pytest.raises(PersistenceError):
            service.save_configuration(GenerationConfiguration(provider="ollama", model_name="llama3.2"), "user-1")

    def test_no_user_gets_fallback(self, service, test_settings):
        configs = service.get_configurations()

        assert len(configs) == 1
        assert configs[0].provider == "ollama"
        assert configs[0].model_name == test_settings.OLLAMA_MODEL
        assert configs[0].api_endpoint == test_settings.OLLAMA_BASE_URL

    def test_storage_failure_gets_fallback(self, failing_repository, test_settings):
        service = ConfigurationService(failing_repository, test_settings)

        configs = service.get_configurations("user-1")

        assert [c.id for c in configs] == ["local-ollama"]

    def test_fallback_can_be_replaced(self, service):
        service.set_fallback_configurations([
            GenerationConfiguration(provider="gemini", model_name="gemini-1.5-flash", id="shared-gemini")
        ])

        assert service.get_active_configuration().id == "shared-gemini"

    def test_inactive_hidden_and_newest_first(self, service, repository):
        now = datetime.now(timezone.utc)
        repository.upsert_configuration(GenerationConfiguration(
            provider="openai", model_name="gpt-4o", created_by="user-1", created_at=now - timedelta(days=2)
        ))
        repository.upsert_configuration(GenerationConfiguration(
            provider="gemini", model_name="gemini-1.5-pro", created_by="user-1", created_at=now
        ))
        repository.upsert_configuration(GenerationConfiguration(
            provider="claude", model_name="claude-3-haiku-20240307", created_by="user-1", is_active=False
        ))

        configs = service.get_configurations("user-1")

        assert [c.provider for c in configs] == ["gemini", "openai"]
        assert service.get_active_configuration("user-1").provider == "gemini"

    def test_get_configuration_by_provider(self, service):
        service.save_configuration(GenerationConfiguration(provider="openai", model_name="gpt-4o"), "user-1")

        assert service.get_configuration("user-1", "openai").model_name == "gpt-4o"
        assert service.get_configuration("user-1", "gemini") is None
        assert service.get_configuration("user-2", "openai") is None

    def test_delete_only_own_configuration(self, service):
        saved = service.save_configuration(GenerationConfiguration(provider="openai", model_name="gpt-4o"), "user-1")

        assert service.delete_configuration(saved.id, "user-2") is False
        assert service.delete_configuration(saved.id, "user-1") is True
        assert service.get_configurations("user-1") == []

    def test_delete_requires_user(self, service):
        with pytest.raises(ConfigurationError):
            service.delete_configuration("any", None)

    def test_to_dict_hides_key(self, service):
        saved = service.save_configuration(
            GenerationConfiguration(provider="openai", model_name="gpt-4o", api_key="sk-secret"), "user-1"
        )

        data = saved.to_dict()
        assert data['has_api_key'] is True
        assert "sk-secret" not in data.values()

    def test_default_fallback_without_settings(self):
        config = default_fallback_configurations()[0]

        assert config.model_name == "llama3.2"
        assert config.api_endpoint == "http://localhost:11434"

    @pytest.mark.parametrize("kwargs", [{'temperature': 2.5}, {'temperature': -0.1}, {'max_tokens': 0}])
    def test_invalid_sampling_values(self, kwargs):
        with pytest.raises(ValueError):
            GenerationConfiguration(provider="ollama", model_name="llama3.2", **kwargs)
