"""
Revision Relay — Google Gemini Service Implementation
======================================================

What:  Concrete GenerationProvider backed by Google Gemini.
How:   Configures the google-generativeai SDK with the API key, keeps one
       GenerativeModel instance, and sends each prompt with a single
       generate_content_async() call.
Who:   Built once by the dependency container at startup; called by
       GenerationRelay for each /api/generate-summary request.

Failure policy:
    One attempt per request. No retry, no circuit breaker, no timeout beyond
    the SDK default. Any SDK exception, and any response without text (for
    example a safety-blocked candidate), becomes GenerationProviderError.
"""

import asyncio
import logging
import time
import uuid

import google.generativeai as genai

from revision_relay.exceptions import GenerationProviderError
from revision_relay.services.llm_base import GenerationProvider

logger = logging.getLogger(__name__)


class GeminiService(GenerationProvider):
    """
    Google Gemini implementation of GenerationProvider.

    Example:
        service = GeminiService(api_key="...", model_name="gemini-2.5-flash")
        html = await service.generate(prompt)
    """

    def __init__(self, api_key: str, model_name: str = "gemini-2.5-flash"):
        """
        Args:
            api_key:    Google AI Studio API key.
            model_name: Gemini model used for every request.
        """
        # The SDK keeps the key in module-level state
        genai.configure(api_key=api_key)
        self.model_name = model_name
        self.model = genai.GenerativeModel(model_name)

        logger.info("GeminiService initialized with model=%s", model_name)

    async def generate(self, prompt: str) -> str:
        """
        Send the prompt to Gemini and return the response text.

        Flow:
            1. generate_content_async(prompt)
            2. Read response.text (raises ValueError when no candidate has text)
            3. Log latency and output size

        Raises:
            GenerationProviderError: On any SDK error or empty response.
        """
        call_id = str(uuid.uuid4())[:8]
        start_time = time.perf_counter()

        logger.info(
            "[%s] Sending prompt to Gemini (%s, %d chars)",
            call_id,
            self.model_name,
            len(prompt),
        )

        try:
            response = await self.model.generate_content_async(prompt)
            text = response.text
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                "[%s] Gemini call failed after %.0fms: %s",
                call_id,
                duration_ms,
                str(e),
                exc_info=True,
            )
            raise GenerationProviderError(
                message="Gemini generation failed",
                context={"call_id": call_id, "error_type": type(e).__name__},
            ) from e

        if not text:
            logger.error("[%s] Gemini returned an empty response", call_id)
            raise GenerationProviderError(
                message="Gemini returned an empty response",
                context={"call_id": call_id},
            )

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "[%s] Gemini generation completed in %.0fms, %d chars",
            call_id,
            duration_ms,
            len(text),
        )
        return text

    async def health_check(self) -> bool:
        """
        Check that the API key is accepted and the service reachable.

        How:     Lists available models (no token cost) in a worker thread,
                 since the SDK call is blocking.
        Returns: True if reachable and authenticated, False otherwise.
        """
        try:
            models = await asyncio.to_thread(lambda: list(genai.list_models()))
            target = f"models/{self.model_name}"
            if target not in [m.name for m in models]:
                logger.warning("Configured model %s not found in available models", target)
            return True
        except Exception as e:
            logger.warning("Gemini health check failed: %s", str(e))
            return False
