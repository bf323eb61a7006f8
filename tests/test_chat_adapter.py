"""
Tests for chat routing between native chat and flattened prompts.
"""

import pytest

from grc_ai.base.models import ChatRequest
from grc_ai.chat_adapter import DEFAULT_SYSTEM_PREAMBLE, ChatAdapter, flatten_conversation, messages_from_dicts

CONVERSATION = [
    {"role": "user", "content": "What is a DPIA?"},
    {"role": "assistant", "content": "A data protection impact assessment."},
    {"role": "user", "content": "When is one required?"},
]


def test_flatten_uses_default_preamble():
    prompt = flatten_conversation(messages_from_dicts(CONVERSATION))

    assert prompt == (
        f"{DEFAULT_SYSTEM_PREAMBLE}\n\n"
        "Conversation so far:\n"
        "USER: What is a DPIA?\n"
        "ASSISTANT: A data protection impact assessment.\n"
        "USER: When is one required?\n\n"
        "Please reply to the last USER message."
    )


def test_flatten_uses_system_message_as_preamble():
    messages = messages_from_dicts([{"role": "system", "content": "Answer as a privacy officer."}] + CONVERSATION)

    prompt = flatten_conversation(messages)

    assert prompt.startswith("Answer as a privacy officer.\n\nConversation so far:\nSYSTEM: ")
    assert DEFAULT_SYSTEM_PREAMBLE not in prompt


def test_messages_from_dicts_rejects_unknown_role():
    with pytest.raises(ValueError):
        messages_from_dicts([{"role": "tool", "content": "x"}])


class TestChatAdapter:

    @pytest.mark.asyncio
    async def test_native_backend_gets_messages(self, backend_factory):
        backend = backend_factory("openai", native_chat=True)
        adapter = ChatAdapter({"openai": backend})
        request = ChatRequest(provider="openai", model="gpt-4o", messages=messages_from_dicts(CONVERSATION))

        result = await adapter.generate_chat(request)

        assert result.success is True
        assert result.tokens_used == 7
        assert backend.chat_requests == [request]
        assert backend.prompts == []

    @pytest.mark.asyncio
    async def test_other_backend_gets_flattened_prompt(self, backend_factory):
        backend = backend_factory("ollama", native_chat=False)
        adapter = ChatAdapter({"ollama": backend})
        request = ChatRequest(
            provider="ollama",
            model="llama3.2",
            messages=messages_from_dicts(CONVERSATION),
            temperature=0.3,
            user_id="user-1"
        )

        result = await adapter.generate_chat(request)

        assert result.success is True
        assert backend.chat_requests == []
        assert backend.prompts == [flatten_conversation(request.messages)]
        single = backend.requests[0]
        assert single.model == "llama3.2"
        assert single.temperature == 0.3
        assert single.user_id == "user-1"
        assert single.fields.title == "AI Chat"

    @pytest.mark.asyncio
    async def test_unknown_provider(self):
        adapter = ChatAdapter({})

        result = await adapter.generate_chat(ChatRequest(provider="mistral", model="large"))

        assert result.success is False
        assert result.error == "Unsupported provider: mistral"
