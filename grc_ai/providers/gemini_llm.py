# grc_ai/providers/gemini_llm.py

"""
Google Gemini backend implementation.

Calls the generateContent REST endpoint directly; the API key travels as
the ``key`` query parameter of each request.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..base.interfaces import BaseBackend
from ..base.models import ChatRequest, ChatRole, GenerationRequest, GenerationResult
from .base_provider import AsyncHTTPProviderMixin, ProviderUtils, requires_api_key

logger = logging.getLogger(__name__)

DEFAULT_GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta"


class GeminiLLM(AsyncHTTPProviderMixin, BaseBackend):
    """Google Gemini-specific backend."""

    display_name = "Gemini"

    def __init__(self, base_url: str = DEFAULT_GEMINI_URL, **kwargs):
        super().__init__("gemini", base_url, **kwargs)

    async def _generate_content(
        self,
        contents: List[Dict[str, Any]],
        request: Any,
        system: Optional[str] = None
    ) -> Tuple[str, Optional[int]]:
        temperature, max_tokens = ProviderUtils.sampling(request)
        payload = {
            "contents": contents,
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": max_tokens
            }
        }
        if system:
            payload["systemInstruction"] = {"parts": [{"text": system}]}

        result = await self._post_json(
            f"{self._endpoint(request.base_url)}/models/{request.model}:generateContent",
            payload,
            params={"key": request.api_key}
        )

        text = ProviderUtils.require_text(
            result["candidates"][0]["content"]["parts"][0]["text"], self.provider_name, self.display_name
        )
        tokens_used = (result.get("usageMetadata") or {}).get("totalTokenCount")
        return text, tokens_used

    @requires_api_key
    async def _generate(self, prompt: str, request: GenerationRequest) -> GenerationResult:
        text, tokens_used = await self._generate_content([{"parts": [{"text": prompt}]}], request)
        return ProviderUtils.create_result(text, request, self.provider_name, tokens_used)

    @requires_api_key
    async def _generate_chat(self, request: ChatRequest) -> GenerationResult:
        system_parts = [m.content for m in request.messages if m.role == ChatRole.SYSTEM]
        # Gemini names the assistant turn "model"
        contents = [
            {
                "role": "model" if m.role == ChatRole.ASSISTANT else "user",
                "parts": [{"text": m.content}]
            }
            for m in request.messages
            if m.role != ChatRole.SYSTEM
        ]
        text, tokens_used = await self._generate_content(
            contents, request, system="\n\n".join(system_parts) or None
        )
        return GenerationResult(
            success=True,
            content=text,
            tokens_used=tokens_used,
            model=request.model,
            provider=self.provider_name
        )
