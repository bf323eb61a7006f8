# grc_ai/base/interfaces.py

"""
Core interfaces for generation backends.

Defines the abstract base class every backend adapter implements so the
orchestrator can dispatch through a single lookup keyed on backend identity.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from .models import BackendAvailability, ChatRequest, GenerationRequest, GenerationResult


class BaseBackend(ABC):
    """
    Abstract base class for all generation backends.

    Implementations must never let an exception escape ``generate`` or
    ``generate_chat``: every failure is reported as a failed GenerationResult.
    """

    def __init__(self, provider_name: str):
        """Initialize the backend."""
        self.provider_name = provider_name

    @abstractmethod
    async def generate(self, prompt: str, request: GenerationRequest) -> GenerationResult:
        """
        Generate content for a single prompt.

        Args:
            prompt: Final prompt text
            request: Originating request (model, credential, endpoint, limits)

        Returns:
            Normalized GenerationResult
        """
        pass

    async def generate_chat(self, request: ChatRequest) -> GenerationResult:
        """
        Generate a reply for a multi-turn conversation.

        Only meaningful when ``supports_native_chat`` returns True.
        """
        return GenerationResult.failure(
            f"{self.provider_name} does not support native chat",
            model=request.model,
            provider=self.provider_name
        )

    async def check_availability(self, endpoint: Optional[str] = None) -> BackendAvailability:
        """
        Pre-flight liveness probe.

        Hosted backends are assumed reachable; local runtimes override this.
        """
        return BackendAvailability(is_running=True)

    async def list_models(self, endpoint: Optional[str] = None) -> List[str]:
        """List model names currently served by the backend."""
        return []

    def supports_native_chat(self) -> bool:
        """Check if the backend accepts structured multi-turn messages."""
        return True

    async def close(self):
        """Release network resources held by the backend."""
        pass
