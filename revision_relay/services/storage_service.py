"""
Revision Relay — S3-Compatible Object Storage Service
======================================================

What:  Concrete StorageProvider writing objects through the S3 API with boto3.
How:   One boto3 client built at startup from the loaded credentials. Each
       upload is a single put_object() call run in the threadpool (boto3 is
       blocking). Public URLs are built from a template and the
       percent-encoded key; no request is made to build them.
Who:   Built by the dependency container; called by UploadRelay.

Default target:
    Cloud Storage through its S3 interoperability endpoint
    (https://storage.googleapis.com, HMAC keys), with Firebase-style
    download URLs:
        https://firebasestorage.googleapis.com/v0/b/<bucket>/o/<key>?alt=media
"""

import logging
import time
from typing import Any, Optional
from urllib.parse import quote

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError
from fastapi.concurrency import run_in_threadpool

from revision_relay.config import DEFAULT_PUBLIC_URL_TEMPLATE, Settings
from revision_relay.exceptions import ConfigurationError, StorageProviderError
from revision_relay.services.credentials import StorageCredentials
from revision_relay.services.storage_base import StorageProvider

logger = logging.getLogger(__name__)


def encode_key(key: str) -> str:
    """Percent-encode every reserved character of a storage key, slashes included."""
    return quote(key, safe="")


def build_public_url(template: str, bucket: str, key: str) -> str:
    """
    Fill the public URL template.

    >>> build_public_url("https://h/{bucket}/{key}", "b", "pdfs/1_a b.pdf")
    'https://h/b/pdfs%2F1_a%20b.pdf'
    """
    return template.format(bucket=bucket, key=encode_key(key))


class S3StorageService(StorageProvider):
    """
    boto3-backed object storage.

    Args:
        bucket:              Target bucket name.
        client:              A boto3 S3 client (or compatible double).
        public_url_template: Template with {bucket} and {key} placeholders.
    """

    def __init__(
        self,
        bucket: str,
        client: Any,
        public_url_template: str = DEFAULT_PUBLIC_URL_TEMPLATE,
    ):
        self.bucket = bucket
        self.client = client
        self.public_url_template = public_url_template
        logger.info("S3StorageService initialized for bucket=%s", bucket)

    @classmethod
    def from_credentials(
        cls,
        credentials: StorageCredentials,
        settings: Settings,
    ) -> "S3StorageService":
        """
        Build the service from loaded credentials and settings.

        Precedence: explicit settings first, then values from the credential
        document, then setting defaults.

        Raises:
            ConfigurationError: No bucket in settings or credentials.
        """
        bucket: Optional[str] = settings.storage_bucket or credentials.bucket
        if not bucket:
            raise ConfigurationError(
                message="No storage bucket configured. Set STORAGE_BUCKET or add 'bucket' to the credentials.",
            )

        session = boto3.session.Session()
        client = session.client(
            "s3",
            endpoint_url=credentials.endpoint_url or settings.storage_endpoint_url,
            aws_access_key_id=credentials.access_key_id,
            aws_secret_access_key=credentials.secret_access_key,
            region_name=credentials.region or settings.storage_region,
            config=Config(signature_version="s3v4"),
        )
        return cls(
            bucket=bucket,
            client=client,
            public_url_template=settings.storage_public_url_template,
        )

    async def put_object(self, key: str, data: bytes, content_type: str) -> None:
        """
        Write the object in one request.

        Raises:
            StorageProviderError: boto3 client or transport error.
        """
        start_time = time.perf_counter()
        try:
            await run_in_threadpool(
                self.client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(
                "Storage write failed for key=%s in bucket=%s: %s",
                key,
                self.bucket,
                str(e),
                exc_info=True,
            )
            raise StorageProviderError(
                message="Object storage write failed",
                context={"key": key, "bucket": self.bucket, "error_type": type(e).__name__},
            ) from e

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "Stored %s (%d bytes, %s) in %.0fms",
            key,
            len(data),
            content_type,
            duration_ms,
        )

    def public_url(self, key: str) -> str:
        return build_public_url(self.public_url_template, self.bucket, key)
