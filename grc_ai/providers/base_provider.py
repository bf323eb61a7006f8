# grc_ai/providers/base_provider.py

"""
Common utilities and helpers for backend adapters.

Provides the dispatch boundary that turns every adapter failure into a
failed GenerationResult, HTTP session management and response helpers.
"""

import asyncio
import functools
import logging
from typing import Any, Dict, Optional, Tuple

import aiohttp

from ..base.exceptions import AIError, AvailabilityError, BackendProtocolError, ConfigurationError
from ..base.models import ChatRequest, GenerationRequest, GenerationResult
from ..utils import parse_structured_output

logger = logging.getLogger(__name__)

DEFAULT_AVAILABILITY_TIMEOUT = 5.0
DEFAULT_GENERATION_TIMEOUT = 120.0
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 500


class ProviderUtils:
    """Utility functions for backend adapters."""

    @staticmethod
    def create_result(
        text: str,
        request: GenerationRequest,
        provider_name: str,
        tokens_used: Optional[int] = None
    ) -> GenerationResult:
        """Create a successful result, parsing array output where the content type asks for it."""
        return GenerationResult(
            success=True,
            content=parse_structured_output(request.content_type, text),
            tokens_used=tokens_used,
            model=request.model,
            provider=provider_name
        )

    @staticmethod
    def sampling(request) -> Tuple[float, int]:
        """Temperature and max tokens for a request, with defaults for unset values."""
        temperature = request.temperature if request.temperature is not None else DEFAULT_TEMPERATURE
        max_tokens = request.max_tokens if request.max_tokens is not None else DEFAULT_MAX_TOKENS
        return temperature, max_tokens

    @staticmethod
    def sum_tokens(*counts: Optional[int]) -> Optional[int]:
        """Add reported token counts; None when the backend reported none."""
        reported = [c for c in counts if c is not None]
        return sum(reported) if reported else None

    @staticmethod
    def require_text(value: Any, provider_name: str, display_name: str) -> str:
        """Return ``value`` when the backend sent a text field, else raise BackendProtocolError."""
        if not isinstance(value, str):
            raise BackendProtocolError(
                provider_name,
                f"Malformed response from {display_name}: expected text, got {type(value).__name__}"
            )
        return value

    @staticmethod
    def require_object(body: Any, provider_name: str, display_name: str) -> Dict[str, Any]:
        """Return ``body`` when it is a JSON object, else raise BackendProtocolError."""
        if not isinstance(body, dict):
            raise BackendProtocolError(
                provider_name,
                f"Malformed response from {display_name}: expected a JSON object, got {type(body).__name__}"
            )
        return body

    @staticmethod
    def describe_failure(display_name: str, error: Exception) -> str:
        """Convert adapter errors to the message carried by a failed result."""
        if isinstance(error, AIError):
            return str(error)
        if isinstance(error, asyncio.TimeoutError):
            return f"{display_name} request timed out"
        if isinstance(error, aiohttp.ClientError):
            return f"Failed to reach {display_name}: {str(error)}"
        return f"Malformed response from {display_name}: {error.__class__.__name__}: {str(error)}"


# Malformed payloads surface as lookup, attribute or type errors while parsing
BOUNDARY_ERRORS = (
    AIError,
    aiohttp.ClientError,
    asyncio.TimeoutError,
    AttributeError,
    KeyError,
    IndexError,
    TypeError,
    ValueError,
)


class BaseProviderMixin:
    """
    Mixin class that provides the dispatch boundary for backend adapters.

    Subclasses implement ``_generate`` (and ``_generate_chat`` when they
    support native chat) and may raise any AIError; ``generate`` and
    ``generate_chat`` convert failures into failed results.
    """

    display_name = "Backend"

    def __init__(self, provider_name: str, **kwargs):
        super().__init__(provider_name, **kwargs)
        self.provider_name = provider_name

    async def generate(self, prompt: str, request: GenerationRequest) -> GenerationResult:
        self._log_request(request.model, len(prompt))
        try:
            result = await self._generate(prompt, request)
            self._log_response(request.model, result)
        except BOUNDARY_ERRORS as e:
            self._log_error(request.model, e)
            return GenerationResult.failure(
                ProviderUtils.describe_failure(self.display_name, e),
                model=request.model,
                provider=self.provider_name
            )
        return result

    async def generate_chat(self, request: ChatRequest) -> GenerationResult:
        self._log_request(request.model, sum(len(m.content) for m in request.messages))
        try:
            result = await self._generate_chat(request)
            self._log_response(request.model, result)
        except BOUNDARY_ERRORS as e:
            self._log_error(request.model, e)
            return GenerationResult.failure(
                ProviderUtils.describe_failure(self.display_name, e),
                model=request.model,
                provider=self.provider_name
            )
        return result

    async def _generate(self, prompt: str, request: GenerationRequest) -> GenerationResult:
        raise NotImplementedError

    async def _generate_chat(self, request: ChatRequest) -> GenerationResult:
        raise BackendProtocolError(self.provider_name, f"{self.display_name} does not support native chat")

    def _log_request(self, model_name: str, prompt_length: int):
        """Log request information."""
        logger.debug(f"[{self.provider_name}] Request to {model_name}, prompt length: {prompt_length}")

    def _log_response(self, model_name: str, result: GenerationResult):
        """Log response information."""
        logger.debug(
            f"[{self.provider_name}] Response from {model_name}, "
            f"length: {len(result.content)}, tokens: {result.tokens_used}"
        )

    def _log_error(self, model_name: str, error: Exception):
        """Log error information."""
        logger.error(f"[{self.provider_name}] Error with {model_name}: {str(error)}")


class AsyncHTTPProviderMixin(BaseProviderMixin):
    """
    Mixin for backends that use HTTP APIs.

    Provides session management and common HTTP utilities. A session passed
    in by the caller is used as-is and never closed by the adapter.
    """

    def __init__(
        self,
        provider_name: str,
        base_url: str,
        session: Optional[aiohttp.ClientSession] = None,
        availability_timeout: float = DEFAULT_AVAILABILITY_TIMEOUT,
        generation_timeout: float = DEFAULT_GENERATION_TIMEOUT,
        **kwargs
    ):
        """Initialize HTTP provider mixin."""
        super().__init__(provider_name, **kwargs)
        self.base_url = base_url.rstrip('/')
        self._session = session
        self._owns_session = session is None
        self.availability_timeout = aiohttp.ClientTimeout(total=availability_timeout)
        self.generation_timeout = aiohttp.ClientTimeout(total=generation_timeout)

    def _endpoint(self, override: Optional[str] = None) -> str:
        return (override or self.base_url).rstrip('/')

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self):
        """Close HTTP session."""
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None

    async def __aenter__(self):
        """Async context manager entry."""
        await self._get_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _post_json(
        self,
        url: str,
        payload: Dict[str, Any],
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        """POST a JSON payload under the generation timeout and return the JSON body."""
        session = await self._get_session()
        async with session.post(
            url,
            json=payload,
            headers=headers,
            params=params,
            timeout=self.generation_timeout
        ) as response:
            if response.status != 200:
                error_text = await response.text()
                logger.error(f"[{self.provider_name}] HTTP error - Status: {response.status}, Response: {error_text[:500]}")
                raise BackendProtocolError(
                    self.provider_name,
                    f"{self.display_name} API error: {response.status} {response.reason or ''}".rstrip(),
                    status=response.status
                )
            return ProviderUtils.require_object(await response.json(), self.provider_name, self.display_name)


def requires_api_key(func):
    """Decorator to check the request carries a credential before any network call."""

    @functools.wraps(func)
    async def wrapper(self, *args, **kwargs):
        request = args[-1] if args else kwargs.get('request')
        if not getattr(request, 'api_key', None):
            raise ConfigurationError(f"{self.display_name} API key is required", field="api_key")
        return await func(self, *args, **kwargs)
    return wrapper


def unreachable(provider_name: str, display_name: str, endpoint: str, error: Exception) -> AvailabilityError:
    """Wrap a transport failure as an AvailabilityError."""
    return AvailabilityError(
        provider_name,
        f"Cannot connect to {display_name} at {endpoint}: {str(error) or error.__class__.__name__}",
        endpoint=endpoint
    )
