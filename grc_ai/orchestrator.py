# grc_ai/orchestrator.py

"""
AI generation orchestrator.

Single entry point for content generation and chat: validates the
request, applies the caller's saved configuration, builds the prompt,
dispatches to the backend adapter and records the outcome. It never
raises for a single request; every failure comes back as a failed
GenerationResult.
"""

import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional

from . import reporting
from .base.exceptions import AIError
from .base.interfaces import BaseBackend
from .base.models import (
    BackendAvailability, ChatRequest, GenerationConfiguration, GenerationRequest,
    GenerationResult, GenerationStats, ProviderDescriptor, Template,
    TemplateSelectionCriteria
)
from .chat_adapter import ChatAdapter
from .config.provider_catalog import LOCAL_PROVIDER_ID, ProviderCatalog
from .content_types import ContentType
from .prompt_builder import PromptBuilder
from .prompt_templates import TemplateCatalog
from .services.configuration_service import ConfigurationService
from .services.generation_log_service import GenerationLogService

logger = logging.getLogger(__name__)

PROVIDER_NOT_CONFIGURED = "AI provider is not configured. Please set up your AI configuration."
MODEL_NOT_CONFIGURED = "AI model is not configured. Please set up your AI configuration."

TEST_CONNECTION_PROMPT = "Test connection"
TEST_CONNECTION_CONTEXT = "This is a test to verify the AI connection is working."


def _validation_error(provider: Optional[str], model: Optional[str]) -> Optional[str]:
    if not provider or provider == "undefined":
        return PROVIDER_NOT_CONFIGURED
    if not model:
        return MODEL_NOT_CONFIGURED
    return None


class AIOrchestrator:
    """
    Coordinates the catalog, configuration store, prompt builder, backend
    adapters and outcome logger.

    The owner of the instance (see ``grc_ai.factory.create_orchestrator``)
    is responsible for calling ``close``.
    """

    def __init__(
        self,
        catalog: ProviderCatalog,
        configuration_service: ConfigurationService,
        template_catalog: TemplateCatalog,
        prompt_builder: PromptBuilder,
        backends: Dict[str, BaseBackend],
        chat_adapter: ChatAdapter,
        log_service: GenerationLogService,
        settings=None
    ):
        self.catalog = catalog
        self.configuration_service = configuration_service
        self.template_catalog = template_catalog
        self.prompt_builder = prompt_builder
        self.backends = backends
        self.chat_adapter = chat_adapter
        self.log_service = log_service
        self.settings = settings

    # Providers

    def list_providers(self) -> List[ProviderDescriptor]:
        return self.catalog.list_providers()

    def get_provider(self, provider_id: str) -> Optional[ProviderDescriptor]:
        return self.catalog.get_provider(provider_id)

    async def get_provider_with_live_models(
        self,
        provider_id: str,
        endpoint: Optional[str] = None
    ) -> Optional[ProviderDescriptor]:
        return await self.catalog.get_provider_with_live_models(provider_id, endpoint)

    async def get_local_models(self, endpoint: Optional[str] = None) -> List[str]:
        """Models installed on the local runtime, or the static list when it cannot be queried."""
        provider = await self.catalog.get_provider_with_live_models(LOCAL_PROVIDER_ID, endpoint)
        return list(provider.models) if provider else []

    async def check_availability(
        self,
        provider_id: str = LOCAL_PROVIDER_ID,
        endpoint: Optional[str] = None
    ) -> BackendAvailability:
        backend = self.backends.get(provider_id)
        if backend is None:
            return BackendAvailability(is_running=False, error=f"Unsupported provider: {provider_id}")
        return await backend.check_availability(endpoint)

    async def test_connection(
        self,
        provider: str,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None
    ) -> bool:
        """Issue a short real generation and report whether it succeeded."""
        backend = self.backends.get(provider)
        if backend is None:
            logger.warning(f"[ORCHESTRATOR] Connection test for unsupported provider {provider}")
            return False

        request = GenerationRequest(
            provider=provider,
            model=model,
            context=TEST_CONNECTION_CONTEXT,
            content_type=ContentType.DESCRIPTION,
            temperature=0.1,
            max_tokens=50,
            api_key=api_key,
            base_url=base_url,
            prompt=TEST_CONNECTION_PROMPT
        )
        try:
            result = await backend.generate(TEST_CONNECTION_PROMPT, request)
        except Exception as e:
            logger.exception(f"[ORCHESTRATOR] Connection test raised for {provider}/{model}: {e}")
            return False
        if not result.success:
            logger.warning(f"[ORCHESTRATOR] Connection test failed for {provider}/{model}: {result.error}")
        return result.success

    # Configurations

    def save_configuration(self, config: GenerationConfiguration, user_id: Optional[str]) -> GenerationConfiguration:
        return self.configuration_service.save_configuration(config, user_id)

    def get_configurations(self, user_id: Optional[str] = None) -> List[GenerationConfiguration]:
        return self.configuration_service.get_configurations(user_id)

    def delete_configuration(self, config_id: str, user_id: Optional[str]) -> bool:
        return self.configuration_service.delete_configuration(config_id, user_id)

    # Templates

    def get_templates(self, criteria: Optional[TemplateSelectionCriteria] = None) -> List[Template]:
        return self.template_catalog.list_templates(criteria)

    def create_template(self, template: Template) -> Optional[Template]:
        return self.template_catalog.create_template(template)

    def update_template(self, template_id: str, updates: Dict[str, Any]) -> Optional[Template]:
        return self.template_catalog.update_template(template_id, updates)

    def delete_template(self, template_id: str) -> bool:
        return self.template_catalog.delete_template(template_id)

    # Generation

    def _apply_configuration(self, request):
        """
        Copy of ``request`` with the credential, endpoint and sampling values
        it leaves unset filled from the caller's saved configuration.
        """
        config = self.configuration_service.get_configuration(request.user_id, request.provider)
        if config is None:
            return replace(request)
        return replace(
            request,
            api_key=request.api_key or config.api_key,
            base_url=request.base_url or config.api_endpoint,
            temperature=config.temperature if request.temperature is None else request.temperature,
            max_tokens=config.max_tokens if request.max_tokens is None else request.max_tokens
        )

    def _unexpected_failure(self, operation: str, request, error: Exception) -> GenerationResult:
        logger.exception(f"[ORCHESTRATOR] Unexpected error in {operation}: {error}")
        message = f"Unexpected error: {error.__class__.__name__}: {str(error)}"
        self.log_service.log_error(request.user_id, operation, message, {'provider': request.provider})
        return GenerationResult.failure(message, model=request.model, provider=request.provider)

    async def generate_content(self, request: GenerationRequest) -> GenerationResult:
        error = _validation_error(request.provider, request.model)
        if error:
            logger.error(f"[ORCHESTRATOR] Invalid AI request: {error}")
            return GenerationResult.failure(error)

        try:
            configured = self._apply_configuration(request)
            prepared = self.prompt_builder.prepare(configured)
        except AIError as e:
            logger.error(f"[ORCHESTRATOR] Error preparing request: {e}")
            self.log_service.log_error(request.user_id, "generate_content", str(e), {'provider': request.provider})
            return GenerationResult.failure(str(e), model=request.model, provider=request.provider)
        except Exception as e:
            return self._unexpected_failure("generate_content", request, e)

        dispatched = replace(configured, prompt=prepared.text, max_tokens=prepared.max_tokens)
        logger.debug(f"[ORCHESTRATOR] Prompt length: {len(prepared.text)} (template: {prepared.from_template})")

        backend = self.backends.get(dispatched.provider)
        if backend is None:
            result = GenerationResult.failure(f"Unsupported provider: {dispatched.provider}")
        else:
            try:
                result = await backend.generate(prepared.text, dispatched)
            except Exception as e:
                result = self._unexpected_failure("generate_content", dispatched, e)
                self.log_service.log_generation(dispatched, result)
                return result

        self.log_service.log_generation(dispatched, result)
        if not result.success:
            self.log_service.log_error(
                dispatched.user_id,
                "generate_content",
                result.error or "Unknown error occurred",
                {'provider': dispatched.provider, 'model': dispatched.model, 'content_type': dispatched.content_type_value}
            )
        return result

    async def generate_chat(self, request: ChatRequest) -> GenerationResult:
        error = _validation_error(request.provider, request.model)
        if error:
            logger.error(f"[ORCHESTRATOR] Invalid chat request: {error}")
            return GenerationResult.failure(error)

        try:
            configured = self._apply_configuration(request)
            result = await self.chat_adapter.generate_chat(configured)
        except Exception as e:
            return self._unexpected_failure("generate_chat", request, e)

        if result.success:
            self.log_service.log_chat_interaction(
                configured.user_id,
                configured.provider,
                configured.model,
                configured.messages,
                result.content,
                result.tokens_used
            )
        else:
            self.log_service.log_error(
                configured.user_id,
                "generate_chat",
                result.error or "Chat generation failed",
                {'provider': configured.provider, 'model': configured.model}
            )
        return result

    # Logs and statistics

    def get_generation_logs(self, user_id: str, limit: int = 50):
        return self.log_service.get_generation_logs(user_id, limit)

    def get_chat_logs(self, user_id: str, limit: int = 50):
        return self.log_service.get_chat_logs(user_id, limit)

    def get_generation_stats(self, user_id: str) -> GenerationStats:
        return self.log_service.get_generation_stats(user_id)

    # Report helpers

    generate_report_structure = staticmethod(reporting.generate_report_structure)
    generate_executive_summary = staticmethod(reporting.generate_executive_summary)
    generate_metrics_dashboard = staticmethod(reporting.generate_metrics_dashboard)
    generate_compliance_matrix = staticmethod(reporting.generate_compliance_matrix)
    generate_risk_heatmap = staticmethod(reporting.generate_risk_heatmap)

    async def close(self):
        for backend in self.backends.values():
            await backend.close()
