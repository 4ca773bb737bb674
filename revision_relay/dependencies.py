"""
Revision Relay — Dependency Container
======================================

What:  Builds the provider and relay objects once at startup and hands them to
       route handlers through FastAPI's dependency injection.
How:   build_container() runs in the application lifespan and the result is
       stored on `app.state.container`. The get_* functions read it back for
       each request. Tests assign their own container with fake providers.

Startup order:
    1. Resolve the credential loader and load storage credentials
    2. Build the storage service (boto3 client)
    3. Build the Gemini service
    4. Wrap both in relays
"""

import logging
from dataclasses import dataclass

from fastapi import Request

from revision_relay.config import Settings
from revision_relay.services.credentials import resolve_credential_loader
from revision_relay.services.gemini_service import GeminiService
from revision_relay.services.generation_relay import GenerationRelay
from revision_relay.services.llm_base import GenerationProvider
from revision_relay.services.storage_service import S3StorageService
from revision_relay.services.upload_relay import UploadRelay

logger = logging.getLogger(__name__)


@dataclass
class RelayContainer:
    """Everything a request handler may need, built once per process."""

    generation_relay: GenerationRelay
    upload_relay: UploadRelay
    generation_provider: GenerationProvider


async def build_container(settings: Settings) -> RelayContainer:
    """
    Construct the production providers and relays.

    Raises:
        ConfigurationError: Storage credentials missing or unusable.
    """
    credentials = await resolve_credential_loader(settings).load()
    storage = S3StorageService.from_credentials(credentials, settings)

    generation_provider = GeminiService(
        api_key=settings.gemini_api_key,
        model_name=settings.gemini_model,
    )

    logger.info(
        "Relays ready: model=%s, fidelity=%s, bucket=%s",
        settings.gemini_model,
        settings.summary_fidelity.value,
        storage.bucket,
    )
    return RelayContainer(
        generation_relay=GenerationRelay(generation_provider, mode=settings.summary_fidelity),
        upload_relay=UploadRelay(storage),
        generation_provider=generation_provider,
    )


def get_container(request: Request) -> RelayContainer:
    return request.app.state.container


def get_generation_relay(request: Request) -> GenerationRelay:
    return get_container(request).generation_relay


def get_upload_relay(request: Request) -> UploadRelay:
    return get_container(request).upload_relay
