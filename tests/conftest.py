"""
Test configuration and fixtures for the GRC AI generation layer.
"""
import pytest
import aiohttp
from unittest.mock import AsyncMock, MagicMock
from typing import Any, Dict, List, Optional

from config import TestSettings
from database import InMemoryRepository
from grc_ai.base.interfaces import BaseBackend
from grc_ai.base.models import (
    ContextFields, GenerationRequest, GenerationResult, Template
)
from grc_ai.content_types import ContentType


# Test settings
@pytest.fixture
def test_settings():
    """Test settings configuration."""
    return TestSettings()


class FakeResponse:
    """Stand-in for an aiohttp response used as an async context manager."""

    def __init__(self, status: int = 200, payload: Any = None, text: str = "", reason: str = "OK"):
        self.status = status
        self.reason = reason
        self._payload = payload
        self._text = text

    async def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload

    async def text(self):
        return self._text

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """
    Records every request; routes map (method, url) to a FakeResponse, an
    exception to raise, or a list of those consumed in order.
    Unrouted requests fail like a refused connection.
    """

    def __init__(self, routes: Optional[Dict[tuple, Any]] = None):
        self.routes = dict(routes or {})
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def get(self, url, **kwargs):
        return self._request("GET", url, kwargs)

    def post(self, url, **kwargs):
        return self._request("POST", url, kwargs)

    def _request(self, method, url, kwargs):
        self.calls.append({'method': method, 'url': url, **kwargs})
        route = self.routes.get((method, url))
        if isinstance(route, list):
            route = route.pop(0) if len(route) > 1 else route[0]
        if route is None:
            raise aiohttp.ClientConnectionError(f"Cannot connect to host {url}")
        if isinstance(route, Exception):
            raise route
        return route

    def count(self, method: str, url: Optional[str] = None) -> int:
        return sum(
            1 for c in self.calls
            if c['method'] == method and (url is None or c['url'] == url)
        )

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_session_factory():
    """Build a FakeSession from a routes mapping."""
    return FakeSession


@pytest.fixture
def http_response():
    """Build a FakeResponse for a FakeSession route."""
    return FakeResponse


class EchoBackend(BaseBackend):
    """Backend stub returning a fixed string and recording prompts."""

    def __init__(self, provider_name: str = "ollama", reply: str = "stub reply", native_chat: bool = True):
        super().__init__(provider_name)
        self.reply = reply
        self.native_chat = native_chat
        self.prompts: List[str] = []
        self.requests: List[Any] = []
        self.chat_requests: List[Any] = []
        self.closed = False

    async def generate(self, prompt, request):
        self.prompts.append(prompt)
        self.requests.append(request)
        return GenerationResult(
            success=True,
            content=self.reply,
            tokens_used=42,
            model=request.model,
            provider=self.provider_name
        )

    async def generate_chat(self, request):
        self.chat_requests.append(request)
        return GenerationResult(
            success=True,
            content=self.reply,
            tokens_used=7,
            model=request.model,
            provider=self.provider_name
        )

    def supports_native_chat(self):
        return self.native_chat

    async def close(self):
        self.closed = True


@pytest.fixture
def echo_backend():
    return EchoBackend()


@pytest.fixture
def backend_factory():
    return EchoBackend


@pytest.fixture
def repository():
    return InMemoryRepository()


@pytest.fixture
def failing_repository():
    """Repository whose every call raises PersistenceError."""
    from grc_ai.base.exceptions import PersistenceError

    mock_repo = MagicMock()
    for name in (
        'get_configurations', 'upsert_configuration', 'delete_configuration',
        'list_templates', 'get_template', 'create_template', 'update_template', 'delete_template',
        'append_generation_log', 'query_generation_logs', 'append_chat_log', 'query_chat_logs',
        'append_error_log', 'query_error_logs'
    ):
        getattr(mock_repo, name).side_effect = PersistenceError(name, RuntimeError("database is down"))
    return mock_repo


@pytest.fixture
def make_request():
    """Build a GenerationRequest with sensible defaults."""
    def _make(content_type=ContentType.DESCRIPTION, provider="ollama", model="llama3.2", **kwargs):
        fields = kwargs.pop('fields', None) or ContextFields(title="Q3 Data Privacy Review")
        return GenerationRequest(
            provider=provider,
            model=model,
            content_type=content_type,
            fields=fields,
            **kwargs
        )
    return _make


@pytest.fixture
def make_template():
    def _make(template_id, field_type="description", **kwargs):
        kwargs.setdefault('name', f"Template {template_id}")
        kwargs.setdefault('template_content', f"Template {template_id} for {{{{title}}}}")
        return Template(id=template_id, field_type=field_type, **kwargs)
    return _make


@pytest.fixture
def mock_openai_client():
    """OpenAI client double whose chat.completions.create is an AsyncMock."""
    client = MagicMock()
    completion = MagicMock()
    completion.choices = [MagicMock()]
    completion.choices[0].message.content = "OpenAI reply"
    completion.usage.total_tokens = 21
    client.chat.completions.create = AsyncMock(return_value=completion)
    client.close = AsyncMock()
    return client


# Pytest markers for different test categories
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "llm: Backend adapter tests")
    config.addinivalue_line("markers", "database: Database repository tests")
