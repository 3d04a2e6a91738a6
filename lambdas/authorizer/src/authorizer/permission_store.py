"""Permission stores: where the fingerprint -> permissions document lives."""

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from mypy_boto3_s3 import S3Client as S3ClientType

from ._types import PermissionRecord
from .config import AuthorizerConfig
from .errors import InvalidPermissionEntryError, StoreUnavailableError
from .logging_config import LOGGER
from .permissions import PermissionEntry, PermissionSet, parse_permission_set


class PermissionStore(Protocol):
    """Read-only source of the full permission set."""

    def fetch_permission_set(self) -> PermissionSet:
        """Return the whole fingerprint -> entries mapping.

        Raises:
            StoreUnavailableError: On any transport or parse failure
        """
        ...


def load_permission_document(raw: bytes, source: str) -> PermissionSet:
    """Decode and validate a JSON permissions document.

    Raises:
        StoreUnavailableError: If the bytes are not a valid permissions document
    """
    try:
        return parse_permission_set(json.loads(raw.decode("utf-8")))
    except (ValueError, InvalidPermissionEntryError) as e:
        raise _rejected_document(e, source) from e


def _rejected_document(error: Exception, source: str) -> StoreUnavailableError:
    """Log a rejected permissions document and build the error to raise."""
    LOGGER.error(
        "Rejected permissions document from %s: %s",
        source,
        error,
        extra={"invalidFingerprint": getattr(error, "fingerprint", None)},
    )
    return StoreUnavailableError(f"Invalid permissions document from {source}: {error}")


class InMemoryPermissionStore:
    """Permission store backed by a mapping, used as a fixture."""

    def __init__(
        self,
        permissions: Mapping[str, Sequence[PermissionRecord | PermissionEntry]] | None = None,
    ) -> None:
        self._permissions = {
            fingerprint: list(entries) for fingerprint, entries in (permissions or {}).items()
        }

    def fetch_permission_set(self) -> PermissionSet:
        try:
            return parse_permission_set(self._permissions)
        except InvalidPermissionEntryError as e:
            raise _rejected_document(e, "memory") from e


class FilePermissionStore:
    """Permission store reading a JSON document shipped with the deployment."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def fetch_permission_set(self) -> PermissionSet:
        try:
            raw = self.path.read_bytes()
        except OSError as e:
            LOGGER.error(
                "Unable to read permissions file: %s", e, extra={"path": str(self.path)}
            )
            raise StoreUnavailableError(f"Unable to read {self.path}") from e
        return load_permission_document(raw, str(self.path))


class S3PermissionStore:
    """Permission store fetching a JSON document from S3 on every call."""

    def __init__(
        self,
        bucket_name: str,
        key: str = "api-permissions.json",
        region: str = "eu-west-2",
        timeout_seconds: float = 3.0,
        max_attempts: int = 2,
    ) -> None:
        """Initialize S3 client.

        Args:
            bucket_name: S3 bucket holding the permissions document
            key: S3 object key of the permissions document
            region: AWS region for S3 client
            timeout_seconds: Connect and read timeout for GetObject
            max_attempts: Total attempts including retries
        """
        self.bucket_name = bucket_name
        self.key = key
        self.client: S3ClientType = boto3.client(
            "s3",
            region_name=region,
            config=Config(
                connect_timeout=timeout_seconds,
                read_timeout=timeout_seconds,
                retries={"max_attempts": max_attempts, "mode": "standard"},
            ),
        )

    def fetch_permission_set(self) -> PermissionSet:
        source = f"s3://{self.bucket_name}/{self.key}"
        try:
            response = self.client.get_object(Bucket=self.bucket_name, Key=self.key)
            raw = response["Body"].read()
        except (ClientError, BotoCoreError) as e:
            # BotoCoreError covers connect and read timeouts
            LOGGER.error(
                "Unable to retrieve api permissions: %s",
                e,
                extra={"bucket": self.bucket_name, "key": self.key},
            )
            raise StoreUnavailableError(f"Unable to fetch {source}") from e

        if not isinstance(raw, bytes):
            raise StoreUnavailableError(f"Unexpected body type from {source}")
        return load_permission_document(raw, source)


def build_permission_store(config: AuthorizerConfig) -> PermissionStore:
    """Pick the store for the configured location: S3, local file, or empty."""
    if config.permissions_bucket:
        return S3PermissionStore(
            bucket_name=config.permissions_bucket,
            key=config.permissions_key,
            region=config.region,
            timeout_seconds=config.fetch_timeout_seconds,
            max_attempts=config.fetch_max_attempts,
        )
    if config.permissions_file:
        return FilePermissionStore(config.permissions_file)
    LOGGER.warning("No permissions location configured, every request will be denied")
    return InMemoryPermissionStore()
