# grc_ai/providers/anthropic_llm.py

"""
Anthropic Claude backend implementation.

Talks to the Messages API over aiohttp with the ``x-api-key`` header.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..base.interfaces import BaseBackend
from ..base.models import ChatRequest, ChatRole, GenerationRequest, GenerationResult
from .base_provider import AsyncHTTPProviderMixin, ProviderUtils, requires_api_key

logger = logging.getLogger(__name__)

DEFAULT_ANTHROPIC_URL = "https://api.anthropic.com/v1"
DEFAULT_ANTHROPIC_VERSION = "2023-06-01"


class AnthropicLLM(AsyncHTTPProviderMixin, BaseBackend):
    """Anthropic Claude-specific backend."""

    display_name = "Claude"

    def __init__(
        self,
        base_url: str = DEFAULT_ANTHROPIC_URL,
        api_version: str = DEFAULT_ANTHROPIC_VERSION,
        **kwargs
    ):
        """
        Initialize Anthropic provider.

        Args:
            base_url: API base URL, including the version path
            api_version: Value of the ``anthropic-version`` header
        """
        super().__init__("claude", base_url, **kwargs)
        self.api_version = api_version

    def _headers(self, api_key: str) -> Dict[str, str]:
        return {
            "x-api-key": api_key,
            "anthropic-version": self.api_version,
            "content-type": "application/json"
        }

    async def _messages(
        self,
        messages: List[Dict[str, str]],
        request: Any,
        system: Optional[str] = None
    ) -> Tuple[str, Optional[int]]:
        """Call /messages and return the text and token usage."""
        temperature, max_tokens = ProviderUtils.sampling(request)
        payload = {
            "model": request.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": messages
        }
        if system:
            payload["system"] = system

        result = await self._post_json(
            f"{self._endpoint(request.base_url)}/messages",
            payload,
            headers=self._headers(request.api_key)
        )

        # Extract response text from Claude format
        text = ProviderUtils.require_text(result["content"][0]["text"], self.provider_name, self.display_name)
        usage = result.get("usage") or {}
        tokens_used = ProviderUtils.sum_tokens(usage.get("input_tokens"), usage.get("output_tokens"))
        return text, tokens_used

    @requires_api_key
    async def _generate(self, prompt: str, request: GenerationRequest) -> GenerationResult:
        text, tokens_used = await self._messages([{"role": "user", "content": prompt}], request)
        return ProviderUtils.create_result(text, request, self.provider_name, tokens_used)

    @requires_api_key
    async def _generate_chat(self, request: ChatRequest) -> GenerationResult:
        # System turns go in the top-level field; the messages list only takes user/assistant
        system_parts = [m.content for m in request.messages if m.role == ChatRole.SYSTEM]
        messages = [
            {"role": m.role.value, "content": m.content}
            for m in request.messages
            if m.role != ChatRole.SYSTEM
        ]
        text, tokens_used = await self._messages(messages, request, system="\n\n".join(system_parts) or None)
        return GenerationResult(
            success=True,
            content=text,
            tokens_used=tokens_used,
            model=request.model,
            provider=self.provider_name
        )
