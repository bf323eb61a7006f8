"""
Tests for the Ollama backend: availability probe, model presence check,
generate call and response normalization.
"""

import asyncio

import pytest

from grc_ai.base.exceptions import AvailabilityError, BackendProtocolError, ParseAdvisory
from grc_ai.base.models import ContextFields, GenerationRequest
from grc_ai.content_types import ContentType
from grc_ai.providers import OllamaLLM

BASE_URL = "http://localhost:11434"
TAGS_URL = f"{BASE_URL}/api/tags"
GENERATE_URL = f"{BASE_URL}/api/generate"


def tags(*names):
    return {"models": [{"name": n} for n in names]}


@pytest.fixture
def request_factory():
    def _make(content_type=ContentType.DESCRIPTION, model="llama3.2", **kwargs):
        return GenerationRequest(
            provider="ollama",
            model=model,
            content_type=content_type,
            fields=ContextFields(title="Q3 Data Privacy Review"),
            **kwargs
        )
    return _make


@pytest.mark.llm
class TestOllamaLLM:
    """Test suite for the local-runtime adapter."""

    @pytest.mark.asyncio
    async def test_generate_success(self, fake_session_factory, http_response, request_factory):
        session = fake_session_factory({
            ("GET", TAGS_URL): http_response(payload=tags("llama3.2:latest", "mistral:latest")),
            ("POST", GENERATE_URL): http_response(payload={
                "response": "Generated description",
                "prompt_eval_count": 30,
                "eval_count": 12
            }),
        })
        llm = OllamaLLM(BASE_URL, session=session)

        result = await llm.generate("prompt text", request_factory(temperature=0.2, max_tokens=300))

        assert result.success is True
        assert result.content == "Generated description"
        assert result.tokens_used == 42
        assert result.provider == "ollama"
        assert result.model == "llama3.2"

        post = next(c for c in session.calls if c['method'] == "POST")
        assert post['json'] == {
            "model": "llama3.2",
            "prompt": "prompt text",
            "stream": False,
            "options": {"temperature": 0.2, "num_predict": 300}
        }

    @pytest.mark.asyncio
    async def test_unset_sampling_uses_defaults(self, fake_session_factory, http_response, request_factory):
        session = fake_session_factory({
            ("GET", TAGS_URL): http_response(payload=tags("llama3.2")),
            ("POST", GENERATE_URL): http_response(payload={"response": "ok"}),
        })
        llm = OllamaLLM(BASE_URL, session=session)

        result = await llm.generate("p", request_factory(temperature=0.0))

        post = next(c for c in session.calls if c['method'] == "POST")
        assert post['json']['options'] == {"temperature": 0.0, "num_predict": 500}
        assert result.tokens_used is None

    @pytest.mark.asyncio
    async def test_unreachable_server_never_posts(self, fake_session_factory, request_factory):
        session = fake_session_factory({})
        llm = OllamaLLM(BASE_URL, session=session)

        result = await llm.generate("prompt", request_factory())

        assert result.success is False
        assert BASE_URL in result.error
        assert "not running" in result.error
        assert session.count("POST") == 0

    @pytest.mark.asyncio
    async def test_probe_non_success_status_is_not_running(self, fake_session_factory, http_response, request_factory):
        session = fake_session_factory({
            ("GET", TAGS_URL): http_response(status=503, reason="Service Unavailable"),
        })
        llm = OllamaLLM(BASE_URL, session=session)

        availability = await llm.check_availability()
        assert availability.is_running is False
        assert "503" in availability.error

        result = await llm.generate("prompt", request_factory())
        assert result.success is False
        assert session.count("POST") == 0

    @pytest.mark.asyncio
    async def test_probe_timeout_is_not_running(self, fake_session_factory):
        session = fake_session_factory({("GET", TAGS_URL): asyncio.TimeoutError()})
        llm = OllamaLLM(BASE_URL, session=session)

        availability = await llm.check_availability()

        assert availability.is_running is False
        assert availability.available_models == []

    @pytest.mark.asyncio
    async def test_missing_model_names_remediation(self, fake_session_factory, http_response, request_factory):
        session = fake_session_factory({
            ("GET", TAGS_URL): http_response(payload=tags("mistral:latest", "phi3:latest")),
        })
        llm = OllamaLLM(BASE_URL, session=session)

        result = await llm.generate("prompt", request_factory(model="llama3.2"))

        assert result.success is False
        assert '"llama3.2"' in result.error
        assert "ollama pull llama3.2" in result.error
        assert "mistral:latest" in result.error
        assert session.count("POST") == 0

    @pytest.mark.asyncio
    async def test_failed_presence_listing_does_not_block(self, fake_session_factory, http_response, request_factory):
        session = fake_session_factory({
            ("GET", TAGS_URL): [
                http_response(payload=tags("llama3.2")),
                http_response(status=500, reason="Internal Server Error"),
            ],
            ("POST", GENERATE_URL): http_response(payload={"response": "still generated"}),
        })
        llm = OllamaLLM(BASE_URL, session=session)

        result = await llm.generate("prompt", request_factory())

        assert result.success is True
        assert result.content == "still generated"
        assert session.count("POST", GENERATE_URL) == 1

    @pytest.mark.asyncio
    async def test_generate_404_reports_missing_model(self, fake_session_factory, http_response, request_factory):
        session = fake_session_factory({
            ("GET", TAGS_URL): http_response(payload=tags("llama3.2")),
            ("POST", GENERATE_URL): http_response(status=404, reason="Not Found"),
        })
        llm = OllamaLLM(BASE_URL, session=session)

        result = await llm.generate("prompt", request_factory())

        assert result.success is False
        assert "ollama pull llama3.2" in result.error

    @pytest.mark.asyncio
    async def test_generate_server_error(self, fake_session_factory, http_response, request_factory):
        session = fake_session_factory({
            ("GET", TAGS_URL): http_response(payload=tags("llama3.2")),
            ("POST", GENERATE_URL): http_response(status=500, reason="Internal Server Error", text="boom"),
        })
        llm = OllamaLLM(BASE_URL, session=session)

        result = await llm.generate("prompt", request_factory())

        assert result.success is False
        assert result.error == "Ollama API error: 500 Internal Server Error"

    @pytest.mark.asyncio
    async def test_malformed_body_is_failure(self, fake_session_factory, http_response, request_factory):
        session = fake_session_factory({
            ("GET", TAGS_URL): http_response(payload=tags("llama3.2")),
            ("POST", GENERATE_URL): http_response(payload={"unexpected": True}),
        })
        llm = OllamaLLM(BASE_URL, session=session)

        result = await llm.generate("prompt", request_factory())

        assert result.success is False
        assert "Malformed response from Ollama" in result.error

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [[], None, "ok"])
    async def test_non_object_tags_body_is_not_running(self, fake_session_factory, http_response, request_factory, body):
        session = fake_session_factory({("GET", TAGS_URL): http_response(payload=body)})
        llm = OllamaLLM(BASE_URL, session=session)

        availability = await llm.check_availability()
        assert availability.is_running is False

        result = await llm.generate("prompt", request_factory())
        assert result.success is False
        assert "not running" in result.error
        assert session.count("POST") == 0

    @pytest.mark.asyncio
    async def test_non_object_listing_raises_protocol_error(self, fake_session_factory, http_response):
        llm = OllamaLLM(BASE_URL, session=fake_session_factory({
            ("GET", TAGS_URL): http_response(payload=[]),
        }))

        with pytest.raises(BackendProtocolError):
            await llm.list_models()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{"response": None}, {"response": 17}, [], None])
    async def test_missing_response_text_is_failure(self, fake_session_factory, http_response, request_factory, body):
        session = fake_session_factory({
            ("GET", TAGS_URL): http_response(payload=tags("llama3.2")),
            ("POST", GENERATE_URL): http_response(payload=body),
        })
        llm = OllamaLLM(BASE_URL, session=session)

        result = await llm.generate("prompt", request_factory())

        assert result.success is False
        assert result.content == ""
        assert "Malformed response from Ollama" in result.error

    @pytest.mark.asyncio
    async def test_endpoint_override(self, fake_session_factory, http_response, request_factory):
        other = "http://gpu-box:11434"
        session = fake_session_factory({
            ("GET", f"{other}/api/tags"): http_response(payload=tags("llama3.2")),
            ("POST", f"{other}/api/generate"): http_response(payload={"response": "remote"}),
        })
        llm = OllamaLLM(BASE_URL, session=session)

        result = await llm.generate("prompt", request_factory(base_url=other + "/"))

        assert result.content == "remote"
        assert session.count("GET", TAGS_URL) == 0

    @pytest.mark.asyncio
    async def test_objectives_array_is_parsed(self, fake_session_factory, http_response, request_factory):
        session = fake_session_factory({
            ("GET", TAGS_URL): http_response(payload=tags("llama3.2")),
            ("POST", GENERATE_URL): http_response(payload={"response": '["Assess X", "Evaluate Y"]'}),
        })
        llm = OllamaLLM(BASE_URL, session=session)

        result = await llm.generate("prompt", request_factory(content_type=ContentType.OBJECTIVES))

        assert result.content == ["Assess X", "Evaluate Y"]

    @pytest.mark.asyncio
    async def test_objectives_malformed_array_kept_raw(self, fake_session_factory, http_response, request_factory):
        raw = "['Assess X', 'Evaluate Y']"
        session = fake_session_factory({
            ("GET", TAGS_URL): http_response(payload=tags("llama3.2")),
            ("POST", GENERATE_URL): http_response(payload={"response": raw}),
        })
        llm = OllamaLLM(BASE_URL, session=session)

        with pytest.warns(ParseAdvisory):
            result = await llm.generate("prompt", request_factory(content_type=ContentType.OBJECTIVES))

        assert result.success is True
        assert result.content == raw

    @pytest.mark.asyncio
    async def test_list_models(self, fake_session_factory, http_response):
        session = fake_session_factory({
            ("GET", TAGS_URL): http_response(payload=tags("llama3.2:latest", "gemma2:2b")),
        })
        llm = OllamaLLM(BASE_URL, session=session)

        assert await llm.list_models() == ["llama3.2:latest", "gemma2:2b"]

    @pytest.mark.asyncio
    async def test_list_models_errors(self, fake_session_factory, http_response):
        llm = OllamaLLM(BASE_URL, session=fake_session_factory({}))
        with pytest.raises(AvailabilityError):
            await llm.list_models()

        llm = OllamaLLM(BASE_URL, session=fake_session_factory({
            ("GET", TAGS_URL): http_response(status=500),
        }))
        with pytest.raises(BackendProtocolError):
            await llm.list_models()

    @pytest.mark.asyncio
    async def test_injected_session_is_not_closed(self, fake_session_factory):
        session = fake_session_factory({})
        llm = OllamaLLM(BASE_URL, session=session)

        await llm.close()

        assert session.closed is False

    def test_does_not_support_native_chat(self):
        assert OllamaLLM(BASE_URL).supports_native_chat() is False
