"""
Revision Relay — Storage Credential Loading
============================================

What:  Loads the object-storage credentials once at startup.
How:   A CredentialLoader interface with two implementations:
         - EnvironmentCredentialLoader: JSON blob embedded in an env variable
         - FileCredentialLoader: JSON file on local disk (read with aiofiles)
       resolve_credential_loader() picks one from the settings; the embedded
       blob wins when it is set.
Who:   Called by the dependency container during application startup.

Credential document:
    {
        "access_key_id": "GOOG1E...",
        "secret_access_key": "...",
        "endpoint_url": "https://storage.googleapis.com",   (optional)
        "region": "auto",                                  (optional)
        "bucket": "my-project.appspot.com"                 (optional)
    }
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import aiofiles
from pydantic import BaseModel, Field, ValidationError

from revision_relay.config import Settings
from revision_relay.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class StorageCredentials(BaseModel):
    """Access keys for the S3-compatible storage endpoint."""

    access_key_id: str = Field(min_length=1)
    secret_access_key: str = Field(min_length=1)
    endpoint_url: Optional[str] = None
    region: Optional[str] = None
    bucket: Optional[str] = None


def parse_credentials(raw: str, source: str) -> StorageCredentials:
    """
    Parse a credential document.

    Raises:
        ConfigurationError: Invalid JSON or missing keys. The secret values are
            never included in the error.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            message=f"Storage credentials from {source} are not valid JSON",
            context={"source": source, "line": e.lineno, "column": e.colno},
        ) from e

    try:
        return StorageCredentials.model_validate(data)
    except ValidationError as e:
        missing = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        raise ConfigurationError(
            message=f"Storage credentials from {source} are incomplete: {', '.join(missing)}",
            context={"source": source, "fields": missing},
        ) from e


class CredentialLoader(ABC):
    """Resolves storage credentials from one source."""

    @property
    @abstractmethod
    def source(self) -> str:
        """Human-readable origin, used in logs and error messages."""
        ...

    @abstractmethod
    async def load(self) -> StorageCredentials:
        """
        Returns: Parsed credentials.
        Raises:  ConfigurationError when the source is missing or malformed.
        """
        ...


class EnvironmentCredentialLoader(CredentialLoader):
    """Credentials embedded as JSON in STORAGE_CREDENTIALS_JSON."""

    def __init__(self, raw_json: str):
        self._raw_json = raw_json

    @property
    def source(self) -> str:
        return "STORAGE_CREDENTIALS_JSON"

    async def load(self) -> StorageCredentials:
        return parse_credentials(self._raw_json, self.source)


class FileCredentialLoader(CredentialLoader):
    """Credentials stored in a local JSON file."""

    def __init__(self, path: str):
        self.path = Path(path)

    @property
    def source(self) -> str:
        return f"file {self.path}"

    async def load(self) -> StorageCredentials:
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                raw = await f.read()
        except OSError as e:
            raise ConfigurationError(
                message=f"Could not read storage credentials from {self.path}",
                context={"path": str(self.path), "os_error": str(e)},
            ) from e
        return parse_credentials(raw, self.source)


def resolve_credential_loader(settings: Settings) -> CredentialLoader:
    """Pick the credential source for this process."""
    if settings.storage_credentials_json.strip():
        loader: CredentialLoader = EnvironmentCredentialLoader(settings.storage_credentials_json)
    else:
        loader = FileCredentialLoader(settings.storage_credentials_file)
    logger.info("Storage credentials source: %s", loader.source)
    return loader
