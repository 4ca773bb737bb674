"""
Revision Relay — Generation Relay
==================================

What:  Handles one revision-sheet request end to end: build the prompt, call
       the generation provider once, return its text.
How:   Provider errors are caught here and turned into a RelayFailure. The
       route maps the outcome to HTTP; this module never raises to it for a
       provider failure.
Who:   Called by POST /api/generate-summary.

Flow:
    SummaryRequest ──▶ build_prompt() ──▶ provider.generate() ──▶ GenerationSuccess
                                                  │
                                                  └── GenerationProviderError ──▶ RelayFailure(500)
"""

import logging

from revision_relay.exceptions import GenerationProviderError
from revision_relay.results import (
    FailureKind,
    GenerationOutcome,
    GenerationSuccess,
    RelayFailure,
)
from revision_relay.schemas.relay import SummaryRequest
from revision_relay.services.llm_base import GenerationProvider
from revision_relay.services.prompt_builder import FidelityMode, build_prompt

logger = logging.getLogger(__name__)

GENERATION_ERROR_MESSAGE = "Erreur lors de la génération de la fiche via l'IA."


class GenerationRelay:
    """
    Stateless relay between the API and a GenerationProvider.

    Args:
        provider: The text-generation backend.
        mode:     Fidelity mode used for every prompt built by this relay.
    """

    def __init__(
        self,
        provider: GenerationProvider,
        mode: FidelityMode = FidelityMode.STRICT,
    ):
        self.provider = provider
        self.mode = FidelityMode(mode)

    def build_prompt(self, request: SummaryRequest) -> str:
        return build_prompt(
            raw_text=request.raw_text,
            course_name=request.course_name,
            course_description=request.course_description,
            course_details=request.course_details,
            mode=self.mode,
        )

    async def generate_summary(self, request: SummaryRequest) -> GenerationOutcome:
        """
        Generate the HTML revision sheet for one request.

        Returns:
            GenerationSuccess with the provider's text, verbatim.
            RelayFailure(PROVIDER_FAILURE) if the provider call failed.
        """
        logger.info(
            "Summary requested: course=%r, notes=%d chars, mode=%s",
            request.course_name or "",
            len(request.raw_text or ""),
            self.mode.value,
        )
        prompt = self.build_prompt(request)

        try:
            summary = await self.provider.generate(prompt)
        except GenerationProviderError as e:
            logger.error("Summary generation failed: %s | Context: %s", e.message, e.context)
            return RelayFailure(
                kind=FailureKind.PROVIDER_FAILURE,
                message=GENERATION_ERROR_MESSAGE,
                context=e.context,
            )
        except Exception as e:
            # Providers are expected to wrap their errors; this covers ones that don't
            logger.error("Unexpected generation provider error: %s", str(e), exc_info=True)
            return RelayFailure(
                kind=FailureKind.PROVIDER_FAILURE,
                message=GENERATION_ERROR_MESSAGE,
                context={"error_type": type(e).__name__},
            )

        return GenerationSuccess(summary=summary)
