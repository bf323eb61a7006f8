# grc_ai/providers/ollama_llm.py

"""
Ollama backend implementation.

Every generation runs the local-runtime pipeline: availability probe, model
presence check, then the generate call. The probe and the presence check can
stop the call before anything is sent to /api/generate.
"""

import asyncio
import logging
from typing import List, Optional

import aiohttp

from ..base.exceptions import AIError, AvailabilityError, BackendProtocolError, ModelNotFoundError
from ..base.interfaces import BaseBackend
from ..base.models import BackendAvailability, GenerationRequest, GenerationResult
from .base_provider import AsyncHTTPProviderMixin, ProviderUtils, unreachable

logger = logging.getLogger(__name__)

DEFAULT_OLLAMA_URL = "http://localhost:11434"
INSTALL_HINT = "Please ensure Ollama is installed and running. Visit https://ollama.ai for installation instructions."


class OllamaLLM(AsyncHTTPProviderMixin, BaseBackend):
    """Ollama-specific backend for local models."""

    display_name = "Ollama"

    def __init__(self, base_url: str = DEFAULT_OLLAMA_URL, **kwargs):
        """
        Initialize Ollama provider.

        Args:
            base_url: Base URL for the Ollama server, used when a request
                carries no endpoint override
            **kwargs: session and timeouts, see AsyncHTTPProviderMixin
        """
        super().__init__("ollama", base_url, **kwargs)

    def supports_native_chat(self) -> bool:
        """Conversations are flattened into a single prompt for Ollama."""
        return False

    async def check_availability(self, endpoint: Optional[str] = None) -> BackendAvailability:
        """Probe /api/tags with the short timeout. Never raises."""
        base_url = self._endpoint(endpoint)
        logger.debug(f"[OLLAMA] Checking server accessibility at {base_url}/api/tags")

        try:
            session = await self._get_session()
            async with session.get(f"{base_url}/api/tags", timeout=self.availability_timeout) as response:
                if response.status != 200:
                    logger.warning(f"[OLLAMA] Availability probe failed - Status: {response.status}")
                    return BackendAvailability(
                        is_running=False,
                        error=f"Ollama API returned {response.status}: {response.reason or ''}".rstrip()
                    )
                result = await response.json()
                if not isinstance(result, dict):
                    logger.warning(f"[OLLAMA] Availability probe got a non-object body from {base_url}")
                    return BackendAvailability(is_running=False, error="Malformed response from Ollama /api/tags")
                models = [m["name"] for m in result.get("models", []) if "name" in m]
        except (aiohttp.ClientError, asyncio.TimeoutError, AttributeError, TypeError, ValueError) as e:
            logger.warning(f"[OLLAMA] Availability probe error at {base_url}: {str(e)}")
            return BackendAvailability(is_running=False, error=str(e) or e.__class__.__name__)

        logger.debug(f"[OLLAMA] Server accessible, {len(models)} models available")
        return BackendAvailability(is_running=True, available_models=models)

    async def list_models(self, endpoint: Optional[str] = None) -> List[str]:
        """
        List installed model names.

        Raises:
            AvailabilityError: server unreachable or timed out
            BackendProtocolError: non-success status or malformed body
        """
        base_url = self._endpoint(endpoint)
        try:
            session = await self._get_session()
            async with session.get(f"{base_url}/api/tags", timeout=self.availability_timeout) as response:
                if response.status != 200:
                    raise BackendProtocolError(
                        self.provider_name,
                        f"Failed to list Ollama models: {response.status}",
                        status=response.status
                    )
                result = ProviderUtils.require_object(await response.json(), self.provider_name, self.display_name)
                return [m["name"] for m in result.get("models", [])]
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise unreachable(self.provider_name, self.display_name, base_url, e) from e
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise BackendProtocolError(self.provider_name, f"Malformed model listing from Ollama: {str(e)}") from e

    async def _ensure_model_present(self, model: str, base_url: str):
        """
        Fail when a successful listing lacks ``model``.

        A listing that itself fails is advisory and lets the call proceed.
        """
        try:
            available = await self.list_models(base_url)
        except AIError as e:
            logger.warning(f"[OLLAMA] Could not verify model presence, continuing: {str(e)}")
            return

        if not any(name.startswith(model) for name in available):
            raise ModelNotFoundError(
                self.provider_name,
                model,
                available_models=available,
                remediation=f"ollama pull {model}"
            )

    async def _generate(self, prompt: str, request: GenerationRequest) -> GenerationResult:
        base_url = self._endpoint(request.base_url)

        availability = await self.check_availability(base_url)
        if not availability.is_running:
            raise AvailabilityError(
                self.provider_name,
                f"Ollama is not running or not accessible at {base_url}. {INSTALL_HINT}",
                endpoint=base_url
            )

        await self._ensure_model_present(request.model, base_url)

        temperature, max_tokens = ProviderUtils.sampling(request)
        payload = {
            "model": request.model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": temperature,
                "num_predict": max_tokens
            }
        }
        logger.debug(f"[OLLAMA] Request payload prepared - Model: {request.model}, Options: {payload['options']}")

        session = await self._get_session()
        async with session.post(
            f"{base_url}/api/generate",
            json=payload,
            timeout=self.generation_timeout
        ) as response:
            if response.status == 404:
                raise ModelNotFoundError(
                    self.provider_name,
                    request.model,
                    available_models=availability.available_models,
                    remediation=f"ollama pull {request.model}"
                )
            if response.status != 200:
                error_text = await response.text()
                logger.error(f"[OLLAMA] HTTP error - Status: {response.status}, Response: {error_text[:500]}")
                raise BackendProtocolError(
                    self.provider_name,
                    f"Ollama API error: {response.status} {response.reason or ''}".rstrip(),
                    status=response.status
                )
            result = ProviderUtils.require_object(await response.json(), self.provider_name, self.display_name)

        text = ProviderUtils.require_text(result.get("response"), self.provider_name, self.display_name)
        tokens_used = ProviderUtils.sum_tokens(result.get("prompt_eval_count"), result.get("eval_count"))
        return ProviderUtils.create_result(text, request, self.provider_name, tokens_used)
