"""
Revision Relay — Abstract Storage Provider Interface
=====================================================

What:  Contract for object stores addressed by bucket and key.
Who:   Implemented by S3StorageService; used by UploadRelay.
"""

from abc import ABC, abstractmethod


class StorageProvider(ABC):
    """
    Contract:
        - put_object() writes the whole payload under `key` in one call
        - public_url() is pure string construction, no network
        - Implementation-specific errors are wrapped in StorageProviderError
    """

    bucket: str

    @abstractmethod
    async def put_object(self, key: str, data: bytes, content_type: str) -> None:
        """
        Store `data` under `key` with the given MIME type.

        Raises:
            StorageProviderError: The provider rejected or failed the write.
        """
        ...

    @abstractmethod
    def public_url(self, key: str) -> str:
        """Return the public download URL for `key`."""
        ...
