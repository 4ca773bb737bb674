"""
Revision Relay — Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the whole test suite.
How:   Test environment variables are set BEFORE the package is imported, so
       the settings singleton never sees production values. Providers are
       replaced by in-memory fakes; no network call is ever made.

Fixtures:
    ├── fake_provider:   GenerationProvider returning canned HTML, recording prompts
    ├── fake_storage:    StorageProvider recording writes in memory
    ├── container:       RelayContainer wired to the fakes
    └── test_client:     HTTPX AsyncClient bound to an app using that container
"""

import os

os.environ["GEMINI_API_KEY"] = "test-key-not-real"
os.environ["STORAGE_BUCKET"] = "test-bucket"
os.environ["STORAGE_CREDENTIALS_JSON"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

from typing import List, Optional, Tuple  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from revision_relay.config import DEFAULT_PUBLIC_URL_TEMPLATE  # noqa: E402
from revision_relay.dependencies import RelayContainer  # noqa: E402
from revision_relay.exceptions import (  # noqa: E402
    GenerationProviderError,
    StorageProviderError,
)
from revision_relay.services.generation_relay import GenerationRelay  # noqa: E402
from revision_relay.services.llm_base import GenerationProvider  # noqa: E402
from revision_relay.services.storage_base import StorageProvider  # noqa: E402
from revision_relay.services.storage_service import build_public_url  # noqa: E402
from revision_relay.services.upload_relay import UploadRelay  # noqa: E402

FIXED_NOW = 1700000000.5
FIXED_NOW_MS = 1700000000500


class FakeGenerationProvider(GenerationProvider):
    """Returns `response` for every prompt, or raises `error` when set."""

    def __init__(self, response: str = "<h1>Sans titre</h1>"):
        self.response = response
        self.error: Optional[Exception] = None
        self.healthy = True
        self.prompts: List[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response

    async def health_check(self) -> bool:
        return self.healthy

    def fail_with(self, error: Optional[Exception] = None) -> None:
        self.error = error or GenerationProviderError(
            message="simulated rejection", context={"simulated": True}
        )


class FakeStorage(StorageProvider):
    """Keeps every put_object() call; raises `error` when set."""

    def __init__(self, bucket: str = "test-bucket"):
        self.bucket = bucket
        self.error: Optional[Exception] = None
        self.objects: List[Tuple[str, bytes, str]] = []

    async def put_object(self, key: str, data: bytes, content_type: str) -> None:
        if self.error is not None:
            raise self.error
        self.objects.append((key, data, content_type))

    def public_url(self, key: str) -> str:
        return build_public_url(DEFAULT_PUBLIC_URL_TEMPLATE, self.bucket, key)

    def fail_with(self, error: Optional[Exception] = None) -> None:
        self.error = error or StorageProviderError(
            message="simulated rejection", context={"simulated": True}
        )


@pytest.fixture
def fixed_now_ms():
    """Millisecond timestamp the container's upload relay stamps on keys."""
    return FIXED_NOW_MS


@pytest.fixture
def fake_provider():
    return FakeGenerationProvider()


@pytest.fixture
def fake_storage():
    return FakeStorage()


@pytest.fixture
def container(fake_provider, fake_storage):
    return RelayContainer(
        generation_relay=GenerationRelay(fake_provider),
        upload_relay=UploadRelay(fake_storage, clock=lambda: FIXED_NOW),
        generation_provider=fake_provider,
    )


@pytest_asyncio.fixture
async def test_client(container):
    """
    HTTPX AsyncClient talking to a fresh app through ASGITransport.

    ASGITransport does not run the lifespan, so the fake container is
    assigned directly.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from revision_relay.main import create_app

    app = create_app()
    app.state.container = container
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
