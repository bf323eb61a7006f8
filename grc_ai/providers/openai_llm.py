# grc_ai/providers/openai_llm.py

"""
OpenAI backend implementation.

Uses the official async client; the credential and endpoint travel with
each request, so one client is kept per (api_key, base_url) pair.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

import openai

from ..base.exceptions import AvailabilityError, BackendProtocolError
from ..base.interfaces import BaseBackend
from ..base.models import ChatRequest, GenerationRequest, GenerationResult
from .base_provider import (
    DEFAULT_GENERATION_TIMEOUT,
    BaseProviderMixin,
    ProviderUtils,
    requires_api_key,
)

logger = logging.getLogger(__name__)

DEFAULT_OPENAI_URL = "https://api.openai.com/v1"


class OpenAILLM(BaseProviderMixin, BaseBackend):
    """OpenAI chat completions backend."""

    display_name = "OpenAI"

    def __init__(self, base_url: str = DEFAULT_OPENAI_URL, generation_timeout: float = DEFAULT_GENERATION_TIMEOUT):
        """
        Initialize OpenAI provider.

        Args:
            base_url: API base URL used when a request has no endpoint override
            generation_timeout: Per-call timeout in seconds
        """
        super().__init__("openai")
        self.base_url = base_url.rstrip('/')
        self.generation_timeout = generation_timeout
        self._clients: Dict[Tuple[str, str], openai.AsyncOpenAI] = {}

    def _get_client(self, api_key: str, base_url: Optional[str] = None) -> openai.AsyncOpenAI:
        """Get or create a client for this credential and endpoint."""
        endpoint = (base_url or self.base_url).rstrip('/')
        key = (api_key, endpoint)
        if key not in self._clients:
            self._clients[key] = openai.AsyncOpenAI(
                api_key=api_key,
                base_url=endpoint,
                max_retries=0,
                timeout=self.generation_timeout
            )
        return self._clients[key]

    async def _complete(
        self,
        messages: List[Dict[str, str]],
        request: Any
    ) -> Tuple[str, Optional[int]]:
        """Run one chat completion and return its text and total token usage."""
        client = self._get_client(request.api_key, request.base_url)
        temperature, max_tokens = ProviderUtils.sampling(request)

        try:
            response = await client.chat.completions.create(
                model=request.model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens
            )
        except openai.APIStatusError as e:
            raise BackendProtocolError(
                self.provider_name,
                f"OpenAI API error: {e.status_code} {e.message}",
                status=e.status_code
            ) from e
        except openai.APIConnectionError as e:
            raise AvailabilityError(
                self.provider_name,
                f"Cannot connect to OpenAI at {request.base_url or self.base_url}: {str(e)}",
                endpoint=request.base_url or self.base_url
            ) from e

        if not response.choices:
            raise BackendProtocolError(self.provider_name, "OpenAI returned no choices")

        text = response.choices[0].message.content or ""
        tokens_used = response.usage.total_tokens if getattr(response, 'usage', None) else None
        return text, tokens_used

    @requires_api_key
    async def _generate(self, prompt: str, request: GenerationRequest) -> GenerationResult:
        text, tokens_used = await self._complete([{"role": "user", "content": prompt}], request)
        return ProviderUtils.create_result(text, request, self.provider_name, tokens_used)

    @requires_api_key
    async def _generate_chat(self, request: ChatRequest) -> GenerationResult:
        messages = [{"role": m.role.value, "content": m.content} for m in request.messages]
        text, tokens_used = await self._complete(messages, request)
        return GenerationResult(
            success=True,
            content=text,
            tokens_used=tokens_used,
            model=request.model,
            provider=self.provider_name
        )

    async def close(self):
        for client in self._clients.values():
            await client.close()
        self._clients.clear()
