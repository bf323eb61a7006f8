# grc_ai/services/configuration_service.py

"""
Configuration Store Adapter

Reads and writes per-user generation configurations through the
repository, with an in-process fallback list for callers without a user
id or when storage is unavailable.
"""

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, List, Optional

from ..base.exceptions import ConfigurationError, PersistenceError
from ..base.models import GenerationConfiguration, utc_now

if TYPE_CHECKING:
    from database.repository import AIRepository

logger = logging.getLogger(__name__)

LOCAL_USER = "local"


def default_fallback_configurations(settings=None) -> List[GenerationConfiguration]:
    """The local-runtime configuration used before anything is saved."""
    return [
        GenerationConfiguration(
            id="local-ollama",
            provider="ollama",
            model_name=getattr(settings, 'OLLAMA_MODEL', "llama3.2"),
            api_endpoint=getattr(settings, 'OLLAMA_BASE_URL', "http://localhost:11434"),
            temperature=getattr(settings, 'DEFAULT_TEMPERATURE', 0.7),
            max_tokens=getattr(settings, 'DEFAULT_MAX_TOKENS', 500),
            created_by=LOCAL_USER,
            is_active=True
        )
    ]


class ConfigurationService:
    """Per-user backend configuration storage."""

    def __init__(self, repository: 'AIRepository', settings=None):
        self.repository = repository
        self._fallback = default_fallback_configurations(settings)

    def get_fallback_configurations(self) -> List[GenerationConfiguration]:
        return list(self._fallback)

    def set_fallback_configurations(self, configs: List[GenerationConfiguration]):
        self._fallback = list(configs)

    def save_configuration(self, config: GenerationConfiguration, user_id: Optional[str]) -> GenerationConfiguration:
        """
        Create or update the user's configuration for ``config.provider``.

        Raises:
            ConfigurationError: No user id was given
            PersistenceError: The repository write failed
        """
        if not user_id:
            raise ConfigurationError("User not authenticated", field="user_id")

        record = replace(config, created_by=user_id, updated_at=utc_now())
        try:
            stored = self.repository.upsert_configuration(record)
        except PersistenceError as e:
            logger.error(f"Error saving AI configuration: {e}")
            raise

        logger.info(f"Saved {stored.provider} configuration for user {user_id}")
        return stored

    def get_configurations(self, user_id: Optional[str] = None) -> List[GenerationConfiguration]:
        """Active configurations of ``user_id``, newest first."""
        if not user_id:
            return self.get_fallback_configurations()

        try:
            configs = self.repository.get_configurations(user_id)
        except PersistenceError as e:
            logger.warning(f"Falling back to local AI configurations: {e}")
            return self.get_fallback_configurations()

        active = [c for c in configs if c.is_active]
        return sorted(active, key=lambda c: c.created_at.timestamp() if c.created_at else 0.0, reverse=True)

    def get_configuration(self, user_id: Optional[str], provider: str) -> Optional[GenerationConfiguration]:
        for config in self.get_configurations(user_id):
            if config.provider == provider:
                return config
        return None

    def get_active_configuration(self, user_id: Optional[str] = None) -> Optional[GenerationConfiguration]:
        configs = self.get_configurations(user_id)
        return configs[0] if configs else None

    def delete_configuration(self, config_id: str, user_id: Optional[str]) -> bool:
        if not user_id:
            raise ConfigurationError("User not authenticated", field="user_id")
        try:
            deleted = self.repository.delete_configuration(config_id, user_id)
        except PersistenceError as e:
            logger.error(f"Error deleting AI configuration: {e}")
            raise
        if not deleted:
            logger.warning(f"No configuration {config_id} owned by {user_id}")
        return deleted
