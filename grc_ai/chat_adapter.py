# grc_ai/chat_adapter.py

"""
Chat Adapter

Backends with native multi-turn support receive the message list as-is.
Others receive the conversation flattened into a single prompt and go
through the normal single-prompt pipeline.
"""

import logging
from typing import Dict, List, Sequence

from .base.interfaces import BaseBackend
from .base.models import (
    ChatMessage, ChatRequest, ChatRole, ContextFields,
    GenerationRequest, GenerationResult
)
from .content_types import ContentType

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_PREAMBLE = (
    "You are a helpful AI assistant for governance, risk, audit, and any general topic. "
    "Respond clearly and provide actionable steps when relevant."
)


def flatten_conversation(messages: Sequence[ChatMessage]) -> str:
    """Render a conversation as one prompt for single-prompt backends."""
    preamble = next(
        (m.content for m in messages if m.role == ChatRole.SYSTEM),
        DEFAULT_SYSTEM_PREAMBLE
    )
    transcript = "\n".join(f"{m.role.value.upper()}: {m.content}" for m in messages)
    return f"{preamble}\n\nConversation so far:\n{transcript}\n\nPlease reply to the last USER message."


class ChatAdapter:
    """Routes chat requests to native chat or to flattened single-prompt generation."""

    def __init__(self, backends: Dict[str, BaseBackend]):
        self.backends = backends

    async def generate_chat(self, request: ChatRequest) -> GenerationResult:
        backend = self.backends.get(request.provider)
        if backend is None:
            return GenerationResult.failure(f"Unsupported provider: {request.provider}")

        if backend.supports_native_chat():
            return await backend.generate_chat(request)

        prompt = flatten_conversation(request.messages)
        logger.debug(f"[CHAT] Flattened {len(request.messages)} messages for {request.provider}")
        single = GenerationRequest(
            provider=request.provider,
            model=request.model,
            content_type=ContentType.DESCRIPTION,
            fields=ContextFields(title="AI Chat"),
            api_key=request.api_key,
            base_url=request.base_url,
            temperature=request.temperature,
            max_tokens=request.max_tokens,
            user_id=request.user_id,
            prompt=prompt
        )
        return await backend.generate(prompt, single)


def messages_from_dicts(messages: List[Dict[str, str]]) -> List[ChatMessage]:
    """Build ChatMessage objects from ``{"role": ..., "content": ...}`` mappings."""
    return [ChatMessage.of(m['role'], m['content']) for m in messages]
