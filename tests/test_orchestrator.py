"""
End-to-end tests for the generation orchestrator with stub backends.
"""

from unittest.mock import AsyncMock, patch

import pytest

from grc_ai import create_orchestrator
from grc_ai.base.models import (
    ChatRequest, ContextFields, GenerationConfiguration, GenerationResult
)
from grc_ai.chat_adapter import messages_from_dicts
from grc_ai.content_types import ContentType
from grc_ai.orchestrator import MODEL_NOT_CONFIGURED, PROVIDER_NOT_CONFIGURED, TEST_CONNECTION_PROMPT
from grc_ai.prompts import RISK_MATRIX_JSON_RULES


@pytest.fixture
def backends(backend_factory):
    return {
        "ollama": backend_factory("ollama", reply="Local description", native_chat=False),
        "openai": backend_factory("openai", reply="Hosted description"),
    }


@pytest.fixture
def orchestrator(test_settings, repository, backends):
    return create_orchestrator(settings=test_settings, repository=repository, backends=backends)


@pytest.mark.integration
class TestGenerateContent:

    @pytest.mark.asyncio
    async def test_description_end_to_end(self, orchestrator, backends, make_request):
        request = make_request(user_id="user-1")

        result = await orchestrator.generate_content(request)

        assert result.success is True
        assert result.content == "Local description"
        assert result.provider == "ollama"
        assert result.model == "llama3.2"

        prompt = backends["ollama"].prompts[0]
        assert "Q3 Data Privacy Review" in prompt
        assert backends["ollama"].requests[0].prompt == prompt

        logs = orchestrator.get_generation_logs("user-1")
        assert len(logs) == 1
        assert logs[0].success is True
        assert logs[0].request_type == "description"
        assert logs[0].tokens_used == 42
        assert logs[0].prompt == prompt

    @pytest.mark.asyncio
    @pytest.mark.parametrize("provider,model,message", [
        ("", "llama3.2", PROVIDER_NOT_CONFIGURED),
        ("undefined", "llama3.2", PROVIDER_NOT_CONFIGURED),
        ("ollama", "", MODEL_NOT_CONFIGURED),
    ])
    async def test_missing_provider_or_model(self, orchestrator, backends, make_request, provider, model, message):
        result = await orchestrator.generate_content(make_request(provider=provider, model=model))

        assert result.success is False
        assert result.error == message
        assert backends["ollama"].prompts == []

    @pytest.mark.asyncio
    async def test_unsupported_provider_is_logged(self, orchestrator, repository, make_request):
        result = await orchestrator.generate_content(make_request(provider="mistral", model="large", user_id="user-1"))

        assert result.success is False
        assert result.error == "Unsupported provider: mistral"
        assert orchestrator.get_generation_logs("user-1")[0].success is False
        assert repository.query_error_logs("user-1")[0].operation == "generate_content"

    @pytest.mark.asyncio
    async def test_saved_configuration_fills_request(self, orchestrator, backends, make_request):
        orchestrator.save_configuration(
            GenerationConfiguration(
                provider="openai",
                model_name="gpt-4o",
                api_key="sk-saved",
                api_endpoint="https://proxy.example.com/v1",
                temperature=0.2,
                max_tokens=900
            ),
            user_id="user-1"
        )

        await orchestrator.generate_content(make_request(provider="openai", model="gpt-4o", user_id="user-1"))

        sent = backends["openai"].requests[0]
        assert sent.api_key == "sk-saved"
        assert sent.base_url == "https://proxy.example.com/v1"
        assert sent.temperature == 0.2
        assert sent.max_tokens == 900

    @pytest.mark.asyncio
    async def test_caller_request_is_not_modified(self, orchestrator, make_request):
        orchestrator.save_configuration(
            GenerationConfiguration(provider="openai", model_name="gpt-4o", api_key="sk-saved", max_tokens=900),
            user_id="user-1"
        )
        request = make_request(provider="openai", model="gpt-4o", user_id="user-1", context=" <b>notes</b> ")

        await orchestrator.generate_content(request)

        assert request.api_key is None
        assert request.max_tokens is None
        assert request.prompt == ""
        assert request.context == " <b>notes</b> "

    @pytest.mark.asyncio
    async def test_request_values_win_over_configuration(self, orchestrator, backends, make_request):
        orchestrator.save_configuration(
            GenerationConfiguration(provider="openai", model_name="gpt-4o", api_key="sk-saved", temperature=0.2),
            user_id="user-1"
        )

        await orchestrator.generate_content(make_request(
            provider="openai", model="gpt-4o", user_id="user-1", api_key="sk-explicit", temperature=0.9
        ))

        sent = backends["openai"].requests[0]
        assert sent.api_key == "sk-explicit"
        assert sent.temperature == 0.9

    @pytest.mark.asyncio
    async def test_risk_matrix_budget_and_rules(self, orchestrator, backends, make_request):
        request = make_request(
            content_type=ContentType.RISK_CONTROL_MATRIX,
            fields=ContextFields(title="Enterprise Risk Matrix", details={"matrix_size": "3x3"})
        )

        await orchestrator.generate_content(request)

        sent = backends["ollama"].requests[0]
        assert sent.max_tokens == 4000
        assert backends["ollama"].prompts[0].endswith(RISK_MATRIX_JSON_RULES)

    @pytest.mark.asyncio
    async def test_template_is_used_when_present(self, orchestrator, backends, make_template, make_request):
        orchestrator.create_template(make_template(
            "scope-default", field_type="scope", is_default=True, template_content="Scope of {{title}}"
        ))

        await orchestrator.generate_content(make_request(content_type=ContentType.SCOPE))

        assert backends["ollama"].prompts == ["Scope of Q3 Data Privacy Review"]

    @pytest.mark.asyncio
    async def test_backend_failure_is_returned_and_logged(self, orchestrator, backends, repository, make_request):
        backends["ollama"].generate = AsyncMock(return_value=GenerationResult.failure(
            "Ollama is not running", model="llama3.2", provider="ollama"
        ))

        result = await orchestrator.generate_content(make_request(user_id="user-1"))

        assert result.success is False
        assert result.error == "Ollama is not running"
        stats = orchestrator.get_generation_stats("user-1")
        assert stats.failed_generations == 1
        assert repository.query_error_logs("user-1")[0].error_message == "Ollama is not running"

    @pytest.mark.asyncio
    async def test_raising_backend_becomes_failure(self, orchestrator, backends, repository, make_request):
        backends["ollama"].generate = AsyncMock(side_effect=AttributeError("'list' object has no attribute 'get'"))

        result = await orchestrator.generate_content(make_request(user_id="user-1"))

        assert result.success is False
        assert result.error.startswith("Unexpected error: AttributeError")
        assert orchestrator.get_generation_logs("user-1")[0].success is False
        assert repository.query_error_logs("user-1")[0].operation == "generate_content"

    @pytest.mark.asyncio
    async def test_raising_prompt_preparation_becomes_failure(self, orchestrator, backends, make_request):
        with patch.object(orchestrator.prompt_builder, 'prepare', side_effect=TypeError("bad context")):
            result = await orchestrator.generate_content(make_request(user_id="user-1"))

        assert result.success is False
        assert "TypeError" in result.error
        assert backends["ollama"].prompts == []

    @pytest.mark.asyncio
    async def test_matrix_without_details(self, orchestrator, backends, make_request):
        request = make_request(
            content_type=ContentType.RISK_CONTROL_MATRIX,
            fields=ContextFields(title="Enterprise Risk Matrix", details=None)
        )

        result = await orchestrator.generate_content(request)

        assert result.success is True
        assert backends["ollama"].prompts[0].endswith(RISK_MATRIX_JSON_RULES)


@pytest.mark.integration
class TestGenerateChat:

    @pytest.mark.asyncio
    async def test_chat_is_logged(self, orchestrator):
        request = ChatRequest(
            provider="openai",
            model="gpt-4o",
            messages=messages_from_dicts([{"role": "user", "content": "Summarize SOX 404"}]),
            user_id="user-1"
        )

        result = await orchestrator.generate_chat(request)

        assert result.success is True
        logs = orchestrator.get_chat_logs("user-1")
        assert logs[0].response == "Hosted description"
        assert logs[0].messages[0].content == "Summarize SOX 404"

    @pytest.mark.asyncio
    async def test_chat_through_flattening(self, orchestrator, backends):
        request = ChatRequest(
            provider="ollama",
            model="llama3.2",
            messages=messages_from_dicts([{"role": "user", "content": "Hello"}])
        )

        result = await orchestrator.generate_chat(request)

        assert result.success is True
        assert backends["ollama"].prompts[0].endswith("Please reply to the last USER message.")

    @pytest.mark.asyncio
    async def test_raising_chat_backend_becomes_failure(self, orchestrator, backends, repository):
        backends["openai"].generate_chat = AsyncMock(side_effect=TypeError("object of type 'NoneType' has no len()"))
        request = ChatRequest(
            provider="openai",
            model="gpt-4o",
            messages=messages_from_dicts([{"role": "user", "content": "Hello"}]),
            user_id="user-1"
        )

        result = await orchestrator.generate_chat(request)

        assert result.success is False
        assert repository.query_error_logs("user-1")[0].operation == "generate_chat"
        assert orchestrator.get_chat_logs("user-1") == []

    @pytest.mark.asyncio
    async def test_connection_test_with_raising_backend(self, orchestrator, backends):
        backends["openai"].generate = AsyncMock(side_effect=KeyError("choices"))

        assert await orchestrator.test_connection("openai", "gpt-4o", api_key="sk-test") is False

    @pytest.mark.asyncio
    async def test_chat_validation(self, orchestrator):
        result = await orchestrator.generate_chat(ChatRequest(provider="openai", model=""))

        assert result.error == MODEL_NOT_CONFIGURED


@pytest.mark.integration
class TestProvidersAndConnection:

    def test_list_providers(self, orchestrator):
        ids = [p.id for p in orchestrator.list_providers()]

        assert ids == ["ollama", "openai", "claude", "gemini"]
        assert orchestrator.get_provider("claude").requires_api_key is True
        assert orchestrator.get_provider("unknown") is None

    @pytest.mark.asyncio
    async def test_local_models_use_live_listing(self, orchestrator, backends):
        backends["ollama"].list_models = AsyncMock(return_value=["qwen2.5:7b", "llama3.2:latest"])
        orchestrator.catalog.register_model_lister("ollama", backends["ollama"].list_models)

        assert await orchestrator.get_local_models() == ["qwen2.5:7b", "llama3.2:latest"]
        provider = await orchestrator.get_provider_with_live_models("ollama")
        assert provider.default_model == "qwen2.5:7b"

    @pytest.mark.asyncio
    async def test_local_models_fall_back_to_static_list(self, orchestrator):
        models = await orchestrator.get_local_models()

        assert models == list(orchestrator.get_provider("ollama").models)

    @pytest.mark.asyncio
    async def test_check_availability(self, orchestrator):
        assert (await orchestrator.check_availability()).is_running is True

        unknown = await orchestrator.check_availability("mistral")
        assert unknown.is_running is False
        assert unknown.error == "Unsupported provider: mistral"

    @pytest.mark.asyncio
    async def test_connection_test(self, orchestrator, backends):
        assert await orchestrator.test_connection("openai", "gpt-4o", api_key="sk-test") is True

        sent = backends["openai"].requests[0]
        assert backends["openai"].prompts == [TEST_CONNECTION_PROMPT]
        assert sent.temperature == 0.1
        assert sent.max_tokens == 50

        assert await orchestrator.test_connection("mistral", "large") is False

    @pytest.mark.asyncio
    async def test_close_closes_backends(self, orchestrator, backends):
        await orchestrator.close()

        assert all(b.closed for b in backends.values())


@pytest.mark.integration
def test_factory_seeds_templates(test_settings, repository, backends):
    from grc_ai.factory import DEFAULT_TEMPLATES_PATH

    settings = test_settings.model_copy(update={'TEMPLATE_SEED_PATH': str(DEFAULT_TEMPLATES_PATH)})

    orchestrator = create_orchestrator(settings=settings, repository=repository, backends=backends)

    names = {t.name for t in orchestrator.get_templates()}
    assert "Financial Services SOX Methodology" in names


def test_factory_defaults_to_memory_storage(test_settings):
    from database import InMemoryRepository
    from grc_ai.factory import build_repository

    assert isinstance(build_repository(test_settings), InMemoryRepository)
