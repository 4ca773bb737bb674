"""
Revision Relay — Upload Relay Unit Tests
=========================================

What we test:
    ✅ Missing file → MISSING_INPUT, storage never contacted
    ✅ Key format pdfs/<millis>_<original filename>, filename left untouched
    ✅ Returned URL embeds the percent-encoded key
    ✅ Storage errors → PROVIDER_FAILURE with the fixed message
"""

import re
from urllib.parse import quote

import pytest

from revision_relay.results import FailureKind, RelayFailure, UploadSuccess
from revision_relay.services.upload_relay import (
    MISSING_FILE_MESSAGE,
    UPLOAD_ERROR_MESSAGE,
    UploadedFile,
    UploadRelay,
    build_storage_key,
)

FIXED_NOW = 1700000000.5
FIXED_NOW_MS = 1700000000500


def make_upload(filename="fiche.pdf", content=b"%PDF-1.4 test", content_type="application/pdf"):
    return UploadedFile(filename=filename, content_type=content_type, content=content)


class TestBuildStorageKey:

    def test_format(self):
        assert build_storage_key("fiche.pdf", 1234) == "pdfs/1234_fiche.pdf"

    def test_filename_not_sanitized(self):
        assert build_storage_key("../mon cours é.pdf", 5) == "pdfs/5_../mon cours é.pdf"


class TestUploadRelay:

    def setup_method(self):
        self.clock = lambda: FIXED_NOW

    @pytest.mark.asyncio
    async def test_missing_file_is_rejected_without_storage_call(self, fake_storage):
        relay = UploadRelay(fake_storage, clock=self.clock)

        outcome = await relay.upload(None)

        assert outcome == RelayFailure(kind=FailureKind.MISSING_INPUT, message=MISSING_FILE_MESSAGE)
        assert fake_storage.objects == []

    @pytest.mark.asyncio
    async def test_stores_bytes_under_timestamped_key(self, fake_storage):
        relay = UploadRelay(fake_storage, clock=self.clock)

        outcome = await relay.upload(make_upload())

        expected_key = f"pdfs/{FIXED_NOW_MS}_fiche.pdf"
        assert isinstance(outcome, UploadSuccess)
        assert outcome.key == expected_key
        assert fake_storage.objects == [(expected_key, b"%PDF-1.4 test", "application/pdf")]

    @pytest.mark.asyncio
    async def test_url_contains_encoded_key(self, fake_storage):
        relay = UploadRelay(fake_storage, clock=self.clock)

        outcome = await relay.upload(make_upload(filename="mon cours.pdf"))

        assert quote(outcome.key, safe="") in outcome.file_url
        assert outcome.file_url == (
            "https://firebasestorage.googleapis.com/v0/b/test-bucket/o/"
            f"pdfs%2F{FIXED_NOW_MS}_mon%20cours.pdf?alt=media"
        )

    @pytest.mark.asyncio
    async def test_real_clock_gives_integer_millis(self, fake_storage):
        relay = UploadRelay(fake_storage)

        outcome = await relay.upload(make_upload())

        assert re.fullmatch(r"pdfs/\d+_fiche\.pdf", outcome.key)

    @pytest.mark.asyncio
    async def test_content_type_is_not_validated(self, fake_storage):
        relay = UploadRelay(fake_storage, clock=self.clock)

        outcome = await relay.upload(make_upload(filename="photo.png", content_type="image/png"))

        assert isinstance(outcome, UploadSuccess)
        assert fake_storage.objects[0][2] == "image/png"

    @pytest.mark.asyncio
    async def test_blank_metadata_falls_back_to_defaults(self, fake_storage):
        relay = UploadRelay(fake_storage, clock=self.clock)

        outcome = await relay.upload(make_upload(filename="", content_type=""))

        assert outcome.key == f"pdfs/{FIXED_NOW_MS}_document.pdf"
        assert fake_storage.objects[0][2] == "application/octet-stream"

    @pytest.mark.asyncio
    async def test_storage_error_becomes_failure(self, fake_storage):
        fake_storage.fail_with()
        relay = UploadRelay(fake_storage, clock=self.clock)

        outcome = await relay.upload(make_upload())

        assert isinstance(outcome, RelayFailure)
        assert outcome.kind is FailureKind.PROVIDER_FAILURE
        assert outcome.message == UPLOAD_ERROR_MESSAGE

    @pytest.mark.asyncio
    async def test_unwrapped_storage_exception_becomes_failure(self, fake_storage):
        fake_storage.fail_with(ConnectionError("endpoint unreachable"))
        relay = UploadRelay(fake_storage, clock=self.clock)

        outcome = await relay.upload(make_upload())

        assert isinstance(outcome, RelayFailure)
        assert outcome.message == UPLOAD_ERROR_MESSAGE
