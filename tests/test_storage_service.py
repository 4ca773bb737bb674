"""
Revision Relay — Storage Service Unit Tests (Mocked)
=====================================================

What:  Tests for S3StorageService with a mocked boto3 client.
How:   The client is a MagicMock; boto3 errors are built from botocore's
       own exception classes. No network calls.
"""

from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from revision_relay.config import Settings
from revision_relay.exceptions import ConfigurationError, StorageProviderError
from revision_relay.services.credentials import StorageCredentials
from revision_relay.services.storage_service import (
    S3StorageService,
    build_public_url,
    encode_key,
)


class TestPublicUrl:

    def test_encode_key_encodes_slashes_and_spaces(self):
        assert encode_key("pdfs/1_mon cours.pdf") == "pdfs%2F1_mon%20cours.pdf"

    def test_encode_key_encodes_non_ascii(self):
        assert encode_key("pdfs/1_été.pdf") == "pdfs%2F1_%C3%A9t%C3%A9.pdf"

    def test_build_public_url_default_template(self):
        service = S3StorageService(bucket="notes-app.appspot.com", client=MagicMock())
        assert service.public_url("pdfs/42_fiche.pdf") == (
            "https://firebasestorage.googleapis.com/v0/b/notes-app.appspot.com/o/"
            "pdfs%2F42_fiche.pdf?alt=media"
        )

    def test_build_public_url_custom_template(self):
        url = build_public_url("https://cdn.example.com/{bucket}/{key}", "b", "pdfs/1_a.pdf")
        assert url == "https://cdn.example.com/b/pdfs%2F1_a.pdf"


class TestPutObject:

    @pytest.mark.asyncio
    async def test_put_object_sends_bytes_and_content_type(self):
        client = MagicMock()
        service = S3StorageService(bucket="test-bucket", client=client)

        await service.put_object("pdfs/1_fiche.pdf", b"%PDF", "application/pdf")

        client.put_object.assert_called_once_with(
            Bucket="test-bucket",
            Key="pdfs/1_fiche.pdf",
            Body=b"%PDF",
            ContentType="application/pdf",
        )

    @pytest.mark.asyncio
    async def test_client_error_is_wrapped(self):
        client = MagicMock()
        client.put_object.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject"
        )
        service = S3StorageService(bucket="test-bucket", client=client)

        with pytest.raises(StorageProviderError) as exc_info:
            await service.put_object("pdfs/1_fiche.pdf", b"%PDF", "application/pdf")

        assert exc_info.value.context["error_type"] == "ClientError"
        assert exc_info.value.context["key"] == "pdfs/1_fiche.pdf"

    @pytest.mark.asyncio
    async def test_transport_error_is_wrapped(self):
        client = MagicMock()
        client.put_object.side_effect = EndpointConnectionError(endpoint_url="https://storage.test")
        service = S3StorageService(bucket="test-bucket", client=client)

        with pytest.raises(StorageProviderError):
            await service.put_object("pdfs/1_fiche.pdf", b"%PDF", "application/pdf")


class TestFromCredentials:

    def make_settings(self, **overrides):
        values = {"gemini_api_key": "k", "storage_bucket": ""}
        values.update(overrides)
        return Settings(_env_file=None, **values)

    def test_missing_bucket_is_a_configuration_error(self):
        credentials = StorageCredentials(access_key_id="id", secret_access_key="secret")

        with pytest.raises(ConfigurationError, match="No storage bucket"):
            S3StorageService.from_credentials(credentials, self.make_settings())

    def test_bucket_from_credentials_used_when_setting_empty(self):
        credentials = StorageCredentials(
            access_key_id="id", secret_access_key="secret", bucket="from-creds"
        )
        with patch("revision_relay.services.storage_service.boto3"):
            service = S3StorageService.from_credentials(credentials, self.make_settings())

        assert service.bucket == "from-creds"

    def test_client_built_with_credentials_and_setting_defaults(self):
        credentials = StorageCredentials(access_key_id="id", secret_access_key="secret")
        settings = self.make_settings(storage_bucket="configured")

        with patch("revision_relay.services.storage_service.boto3") as mock_boto3:
            service = S3StorageService.from_credentials(credentials, settings)

        session_client = mock_boto3.session.Session.return_value.client
        kwargs = session_client.call_args.kwargs
        assert session_client.call_args.args == ("s3",)
        assert kwargs["endpoint_url"] == "https://storage.googleapis.com"
        assert kwargs["aws_access_key_id"] == "id"
        assert kwargs["aws_secret_access_key"] == "secret"
        assert kwargs["region_name"] == "auto"
        assert service.bucket == "configured"
        assert service.client is session_client.return_value

    def test_endpoint_from_credentials_overrides_setting(self):
        credentials = StorageCredentials(
            access_key_id="id",
            secret_access_key="secret",
            endpoint_url="http://minio:9000",
            region="us-east-1",
        )
        settings = self.make_settings(storage_bucket="b")

        with patch("revision_relay.services.storage_service.boto3") as mock_boto3:
            S3StorageService.from_credentials(credentials, settings)

        kwargs = mock_boto3.session.Session.return_value.client.call_args.kwargs
        assert kwargs["endpoint_url"] == "http://minio:9000"
        assert kwargs["region_name"] == "us-east-1"
